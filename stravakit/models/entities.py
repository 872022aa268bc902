"""Domain objects decoded from Strava API responses.

Only the commonly used fields are declared; anything else in a payload is
ignored. Every cacheable object carries an ``id`` and a ``resource_state``.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stravakit.models.reference import (
    Gender,
    ResourceState,
    StreamResolution,
    StreamSeriesDownsampling,
    StreamType,
)


class StravaEntity(BaseModel):
    """Base for objects that can be stored in a credential-scoped cache."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Optional[int] = None
    resource_state: ResourceState = ResourceState.UNKNOWN

    @field_validator("resource_state", mode="before")
    @classmethod
    def _coerce_resource_state(cls, value: Any) -> ResourceState:
        if value is None:
            return ResourceState.UNKNOWN
        return ResourceState(value)

    @classmethod
    def private_stub(cls, entity_id: int):
        """Placeholder for an object that exists but the token may not read."""
        return cls(id=entity_id, resource_state=ResourceState.PRIVATE)

    @property
    def is_private(self) -> bool:
        return self.resource_state == ResourceState.PRIVATE


class Athlete(StravaEntity):
    username: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    sex: Optional[Gender] = None
    premium: Optional[bool] = None
    profile: Optional[str] = None
    weight: Optional[float] = None
    ftp: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Segment(StravaEntity):
    name: Optional[str] = None
    activity_type: Optional[str] = None
    distance: Optional[float] = None
    average_grade: Optional[float] = None
    maximum_grade: Optional[float] = None
    elevation_high: Optional[float] = None
    elevation_low: Optional[float] = None
    climb_category: Optional[int] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    private: Optional[bool] = None
    starred: Optional[bool] = None
    hazardous: Optional[bool] = None
    effort_count: Optional[int] = None
    athlete_count: Optional[int] = None


class SegmentEffort(StravaEntity):
    name: Optional[str] = None
    activity_id: Optional[int] = None
    elapsed_time: Optional[int] = None
    moving_time: Optional[int] = None
    start_date: Optional[str] = None
    start_date_local: Optional[str] = None
    distance: Optional[float] = None
    start_index: Optional[int] = None
    end_index: Optional[int] = None
    average_heartrate: Optional[float] = None
    max_heartrate: Optional[float] = None
    average_watts: Optional[float] = None
    kom_rank: Optional[int] = None
    pr_rank: Optional[int] = None
    segment: Optional[Segment] = None

    @classmethod
    def model_validate_payload(cls, payload: dict[str, Any]) -> "SegmentEffort":
        """Decode a Strava effort, lifting the nested ``activity.id``."""
        data = dict(payload)
        activity = data.pop("activity", None)
        if isinstance(activity, dict) and data.get("activity_id") is None:
            data["activity_id"] = activity.get("id")
        return cls.model_validate(data)


class Activity(StravaEntity):
    external_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    sport_type: Optional[str] = None
    distance: Optional[float] = None
    moving_time: Optional[int] = None
    elapsed_time: Optional[int] = None
    total_elevation_gain: Optional[float] = None
    start_date: Optional[str] = None
    start_date_local: Optional[str] = None
    timezone: Optional[str] = None
    average_speed: Optional[float] = None
    max_speed: Optional[float] = None
    average_heartrate: Optional[float] = None
    max_heartrate: Optional[float] = None
    average_watts: Optional[float] = None
    kilojoules: Optional[float] = None
    calories: Optional[float] = None
    private: Optional[bool] = None
    visibility: Optional[str] = None
    athlete_id: Optional[int] = None
    segment_efforts: List[SegmentEffort] = Field(default_factory=list)

    @classmethod
    def model_validate_payload(cls, payload: dict[str, Any]) -> "Activity":
        """Decode a Strava activity, lifting the nested ``athlete.id``."""
        data = dict(payload)
        athlete = data.pop("athlete", None)
        if isinstance(athlete, dict) and data.get("athlete_id") is None:
            data["athlete_id"] = athlete.get("id")
        data["segment_efforts"] = [
            SegmentEffort.model_validate_payload(effort)
            for effort in data.get("segment_efforts") or []
        ]
        return cls.model_validate(data)


class Stream(BaseModel):
    """One data series of an activity, effort or segment.

    Streams have no identity of their own and are never cached.
    """

    model_config = ConfigDict(extra="ignore")

    type: StreamType = StreamType.UNKNOWN
    data: List[Any] = Field(default_factory=list)
    series_type: Optional[StreamSeriesDownsampling] = None
    original_size: Optional[int] = None
    resolution: Optional[StreamResolution] = None


class ActivityTotals(BaseModel):
    count: int = 0
    distance: float = 0.0
    moving_time: int = 0
    elapsed_time: int = 0
    elevation_gain: float = 0.0
    achievement_count: Optional[int] = None


class Statistics(BaseModel):
    """Rolled-up totals for an athlete."""

    model_config = ConfigDict(extra="ignore")

    biggest_ride_distance: Optional[float] = None
    biggest_climb_elevation_gain: Optional[float] = None
    recent_ride_totals: Optional[ActivityTotals] = None
    recent_run_totals: Optional[ActivityTotals] = None
    recent_swim_totals: Optional[ActivityTotals] = None
    ytd_ride_totals: Optional[ActivityTotals] = None
    ytd_run_totals: Optional[ActivityTotals] = None
    ytd_swim_totals: Optional[ActivityTotals] = None
    all_ride_totals: Optional[ActivityTotals] = None
    all_run_totals: Optional[ActivityTotals] = None
    all_swim_totals: Optional[ActivityTotals] = None
