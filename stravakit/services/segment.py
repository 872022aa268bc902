"""Segment service - cached access to segments."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from stravakit.cache import CredentialScopedCache
from stravakit.clients.base import BaseClient
from stravakit.exceptions import UnauthorizedError
from stravakit.models import EntityType, Paging, Segment
from stravakit.services.asynchronous import operation, with_async_operations
from stravakit.services.faults import call_remote, require_id, validate_paging

logger = logging.getLogger(__name__)


@with_async_operations
class SegmentService:
    """Service for segments visible to one credential."""

    entity_type = EntityType.SEGMENT

    def __init__(
        self,
        credential,
        api: BaseClient,
        cache: CredentialScopedCache[Segment, int],
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.credential = credential
        self.api = api
        self.cache = cache
        self.executor = executor

    @operation
    def get_segment(self, segment_id: int) -> Optional[Segment]:
        """Get a segment; a private placeholder if hidden, None if missing."""
        require_id(segment_id, "segment_id")
        cached = self.cache.get(segment_id)
        if cached is not None:
            return cached

        try:
            segment = call_remote(self.api.get_segment, segment_id)
        except UnauthorizedError:
            logger.info(f"Segment {segment_id} is private")
            segment = Segment.private_stub(segment_id)

        self.cache.put(segment)
        return segment

    @operation
    def list_authenticated_athlete_starred_segments(self, paging: Optional[Paging] = None) -> List[Segment]:
        paging = validate_paging(paging)
        segments = call_remote(self.api.list_starred_segments, paging.page, paging.per_page, default=[])
        self.cache.put_all(segments)
        return segments

    def clear_cache(self) -> None:
        self.cache.remove_all()
