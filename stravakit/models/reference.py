"""Reference enumerations shared by the models and services."""

from dataclasses import dataclass
from enum import Enum, IntEnum

from stravakit.config import Config


class EntityType(str, Enum):
    """Kinds of object held in the cache, one façade per kind."""

    ATHLETE = "athlete"
    ACTIVITY = "activity"
    SEGMENT = "segment"
    SEGMENT_EFFORT = "segment_effort"
    STREAM = "stream"


class ResourceState(IntEnum):
    """How complete a fetched object is.

    META, SUMMARY and DETAILED carry Strava's own ``resource_state`` values.
    PRIVATE marks an object we know exists but may not read.
    """

    UNKNOWN = -1
    PRIVATE = 0
    META = 1
    SUMMARY = 2
    DETAILED = 3

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


class StreamType(str, Enum):
    """Stream series that can be requested."""

    TIME = "time"
    LATLNG = "latlng"
    DISTANCE = "distance"
    ALTITUDE = "altitude"
    VELOCITY_SMOOTH = "velocity_smooth"
    HEARTRATE = "heartrate"
    CADENCE = "cadence"
    WATTS = "watts"
    TEMP = "temp"
    MOVING = "moving"
    GRADE_SMOOTH = "grade_smooth"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


class StreamResolution(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


class StreamSeriesDownsampling(str, Enum):
    """Axis used by Strava when downsampling a stream."""

    TIME = "time"
    DISTANCE = "distance"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


class Gender(str, Enum):
    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


@dataclass(frozen=True)
class Paging:
    """Page request for list operations."""

    page: int = 1
    per_page: int = Config.DEFAULT_PER_PAGE
