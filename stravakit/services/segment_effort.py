"""Segment effort service."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from stravakit.cache import CredentialScopedCache
from stravakit.clients.base import BaseClient
from stravakit.exceptions import UnauthorizedError
from stravakit.models import EntityType, SegmentEffort
from stravakit.services.asynchronous import operation, with_async_operations
from stravakit.services.faults import call_remote, require_id

logger = logging.getLogger(__name__)


@with_async_operations
class SegmentEffortService:
    """Service for segment efforts visible to one credential."""

    entity_type = EntityType.SEGMENT_EFFORT

    def __init__(
        self,
        credential,
        api: BaseClient,
        cache: CredentialScopedCache[SegmentEffort, int],
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.credential = credential
        self.api = api
        self.cache = cache
        self.executor = executor

    @operation
    def get_segment_effort(self, effort_id: int) -> Optional[SegmentEffort]:
        """Get an effort; a private placeholder if hidden, None if missing."""
        require_id(effort_id, "effort_id")
        cached = self.cache.get(effort_id)
        if cached is not None:
            return cached

        try:
            effort = call_remote(self.api.get_segment_effort, effort_id)
        except UnauthorizedError:
            logger.info(f"Segment effort {effort_id} is private")
            effort = SegmentEffort.private_stub(effort_id)

        if effort is None:
            return None

        self.cache.put(effort)
        if effort.segment is not None:
            self.credential.service(EntityType.SEGMENT).cache.put(effort.segment)
        return effort

    def clear_cache(self) -> None:
        self.cache.remove_all()
