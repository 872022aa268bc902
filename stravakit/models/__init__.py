from stravakit.models.entities import (
    Activity,
    ActivityTotals,
    Athlete,
    Segment,
    SegmentEffort,
    Statistics,
    StravaEntity,
    Stream,
)
from stravakit.models.reference import (
    EntityType,
    Gender,
    Paging,
    ResourceState,
    StreamResolution,
    StreamSeriesDownsampling,
    StreamType,
)

__all__ = [
    'Activity', 'ActivityTotals', 'Athlete', 'Segment', 'SegmentEffort',
    'Statistics', 'StravaEntity', 'Stream',
    'EntityType', 'Gender', 'Paging', 'ResourceState', 'StreamResolution',
    'StreamSeriesDownsampling', 'StreamType',
]
