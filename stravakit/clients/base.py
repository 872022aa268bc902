"""Remote API interface used by the service façades."""

from abc import ABC, abstractmethod
from typing import List, Optional

from stravakit.models import (
    Activity,
    Athlete,
    Gender,
    Segment,
    SegmentEffort,
    Statistics,
    Stream,
    StreamResolution,
    StreamSeriesDownsampling,
)


class BaseClient(ABC):
    """Abstract Strava API client bound to one access token.

    Implementations raise NotFoundError and BadRequestError for the matching
    remote answers. Any other failure propagates unchanged.
    """

    def __init__(self, access_token: str):
        self.access_token = access_token

    # Athletes

    @abstractmethod
    def get_authenticated_athlete(self) -> Athlete:
        pass

    @abstractmethod
    def get_athlete(self, athlete_id: int) -> Athlete:
        pass

    @abstractmethod
    def get_athlete_statistics(self, athlete_id: int) -> Statistics:
        pass

    @abstractmethod
    def list_athlete_koms(self, athlete_id: int, page: int, per_page: int) -> List[SegmentEffort]:
        pass

    @abstractmethod
    def list_authenticated_athlete_friends(self, page: int, per_page: int) -> List[Athlete]:
        pass

    @abstractmethod
    def list_athlete_friends(self, athlete_id: int, page: int, per_page: int) -> List[Athlete]:
        pass

    @abstractmethod
    def list_athletes_both_following(self, athlete_id: int, page: int, per_page: int) -> List[Athlete]:
        pass

    @abstractmethod
    def update_authenticated_athlete(
        self,
        city: Optional[str],
        state: Optional[str],
        country: Optional[str],
        sex: Optional[Gender],
        weight: Optional[float],
    ) -> Athlete:
        pass

    # Activities

    @abstractmethod
    def get_activity(self, activity_id: int, include_all_efforts: bool = False) -> Activity:
        pass

    @abstractmethod
    def list_authenticated_athlete_activities(
        self, before: Optional[int], after: Optional[int], page: int, per_page: int
    ) -> List[Activity]:
        pass

    @abstractmethod
    def delete_activity(self, activity_id: int) -> bool:
        pass

    # Segments and efforts

    @abstractmethod
    def get_segment(self, segment_id: int) -> Segment:
        pass

    @abstractmethod
    def list_starred_segments(self, page: int, per_page: int) -> List[Segment]:
        pass

    @abstractmethod
    def get_segment_effort(self, effort_id: int) -> SegmentEffort:
        pass

    # Streams; ``types`` is a comma-separated list of stream type names

    @abstractmethod
    def get_activity_streams(
        self,
        activity_id: int,
        types: str,
        resolution: Optional[StreamResolution],
        series_type: Optional[StreamSeriesDownsampling],
    ) -> List[Stream]:
        pass

    @abstractmethod
    def get_effort_streams(
        self,
        effort_id: int,
        types: str,
        resolution: Optional[StreamResolution],
        series_type: Optional[StreamSeriesDownsampling],
    ) -> List[Stream]:
        pass

    @abstractmethod
    def get_segment_streams(
        self,
        segment_id: int,
        types: str,
        resolution: Optional[StreamResolution],
        series_type: Optional[StreamSeriesDownsampling],
    ) -> List[Stream]:
        pass

    def close(self) -> None:
        """Release any transport resources."""
