"""Stream service - time series for activities, segment efforts and segments."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, Union

from stravakit.cache import CredentialScopedCache
from stravakit.clients.base import BaseClient
from stravakit.exceptions import InvalidArgumentError
from stravakit.models import (
    EntityType,
    StravaEntity,
    Stream,
    StreamResolution,
    StreamSeriesDownsampling,
    StreamType,
)
from stravakit.services.asynchronous import operation, with_async_operations
from stravakit.services.faults import (
    call_remote,
    join_types,
    require_id,
    validate_stream_arguments,
)

logger = logging.getLogger(__name__)

ResolutionArg = Optional[Union[StreamResolution, str]]
SeriesTypeArg = Optional[Union[StreamSeriesDownsampling, str]]
TypesArg = Optional[Iterable[Union[StreamType, str]]]


@with_async_operations
class StreamService:
    """Service for streams visible to one credential.

    Every call first resolves the parent object through its own service:
    a missing parent gives None, a private one gives an empty list without
    asking Strava for the streams. Streams themselves are not cached.
    """

    entity_type = EntityType.STREAM

    def __init__(
        self,
        credential,
        api: BaseClient,
        cache: CredentialScopedCache[Stream, str],
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.credential = credential
        self.api = api
        self.cache = cache
        self.executor = executor

    @operation
    def get_activity_streams(
        self,
        activity_id: int,
        resolution: ResolutionArg = None,
        series_type: SeriesTypeArg = None,
        types: TypesArg = None,
    ) -> Optional[List[Stream]]:
        resolution, series_type, types = validate_stream_arguments(resolution, series_type, types)
        require_id(activity_id, "activity_id")

        activity = self.credential.service(EntityType.ACTIVITY).get_activity(activity_id)
        return self._fetch(
            activity, self.api.get_activity_streams, activity_id, resolution, series_type, types
        )

    @operation
    def get_effort_streams(
        self,
        effort_id: int,
        resolution: ResolutionArg = None,
        series_type: SeriesTypeArg = None,
        types: TypesArg = None,
    ) -> Optional[List[Stream]]:
        resolution, series_type, types = validate_stream_arguments(resolution, series_type, types)
        require_id(effort_id, "effort_id")

        effort = self.credential.service(EntityType.SEGMENT_EFFORT).get_segment_effort(effort_id)
        return self._fetch(
            effort, self.api.get_effort_streams, effort_id, resolution, series_type, types
        )

    @operation
    def get_segment_streams(
        self,
        segment_id: int,
        resolution: ResolutionArg = None,
        series_type: SeriesTypeArg = None,
        types: TypesArg = None,
    ) -> Optional[List[Stream]]:
        """Segment streams; downsampling by time is not supported for segments."""
        resolution, series_type, types = validate_stream_arguments(resolution, series_type, types)
        if series_type == StreamSeriesDownsampling.TIME:
            raise InvalidArgumentError("Segment streams cannot be downsampled by time")
        require_id(segment_id, "segment_id")

        segment = self.credential.service(EntityType.SEGMENT).get_segment(segment_id)
        return self._fetch(
            segment, self.api.get_segment_streams, segment_id, resolution, series_type, types
        )

    def _fetch(
        self,
        parent: Optional[StravaEntity],
        fetch: Callable[..., List[Stream]],
        parent_id: int,
        resolution: Optional[StreamResolution],
        series_type: Optional[StreamSeriesDownsampling],
        types: List[StreamType],
    ) -> Optional[List[Stream]]:
        if parent is None:
            return None
        if parent.is_private:
            logger.debug(f"Parent {parent_id} is private, returning no streams")
            return []

        streams = call_remote(fetch, parent_id, join_types(types), resolution, series_type)
        if streams is None:
            return None

        # Strava echoes its own default resolution when none was asked for
        if resolution is None:
            for stream in streams:
                stream.resolution = None
        return streams

    def clear_cache(self) -> None:
        """Streams are never cached; kept for a uniform service interface."""
        self.cache.remove_all()
