"""Activity service - cached access to activities."""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import List, Optional, Union

from stravakit.cache import CredentialScopedCache
from stravakit.clients.base import BaseClient
from stravakit.exceptions import UnauthorizedError
from stravakit.models import Activity, EntityType, Paging
from stravakit.services.asynchronous import operation, with_async_operations
from stravakit.services.faults import call_remote, require_id, to_epoch, validate_paging

logger = logging.getLogger(__name__)


@with_async_operations
class ActivityService:
    """Service for activities visible to one credential."""

    entity_type = EntityType.ACTIVITY

    def __init__(
        self,
        credential,
        api: BaseClient,
        cache: CredentialScopedCache[Activity, int],
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.credential = credential
        self.api = api
        self.cache = cache
        self.executor = executor

    @operation
    def get_activity(self, activity_id: int, include_all_efforts: bool = False) -> Optional[Activity]:
        """
        Get an activity by id.

        Args:
            activity_id: Activity ID
            include_all_efforts: Ask Strava for every segment effort, not just
                the highlighted ones. Always goes to the API.

        Returns:
            The activity; a private placeholder if it belongs to someone else
            and is private; None if it does not exist
        """
        require_id(activity_id, "activity_id")
        if not include_all_efforts:
            cached = self.cache.get(activity_id)
            if cached is not None:
                return cached

        try:
            activity = call_remote(self.api.get_activity, activity_id, include_all_efforts)
        except UnauthorizedError:
            logger.info(f"Activity {activity_id} is private")
            activity = Activity.private_stub(activity_id)

        if activity is None:
            return None

        self.cache.put(activity)
        if activity.segment_efforts:
            self.credential.service(EntityType.SEGMENT_EFFORT).cache.put_all(activity.segment_efforts)
        return activity

    @operation
    def list_authenticated_athlete_activities(
        self,
        before: Optional[Union[datetime, int]] = None,
        after: Optional[Union[datetime, int]] = None,
        paging: Optional[Paging] = None,
    ) -> List[Activity]:
        """List the authenticated athlete's activities, newest first."""
        before_ts = to_epoch(before, "before")
        after_ts = to_epoch(after, "after")
        paging = validate_paging(paging)

        activities = call_remote(
            self.api.list_authenticated_athlete_activities,
            before_ts,
            after_ts,
            paging.page,
            paging.per_page,
            default=[],
        )
        self.cache.put_all(activities)
        logger.debug(f"Listed {len(activities)} activities")
        return activities

    @operation
    def delete_activity(self, activity_id: int) -> bool:
        """Delete an activity. Returns False if it did not exist."""
        require_id(activity_id, "activity_id")
        deleted = call_remote(self.api.delete_activity, activity_id, default=False)
        self.cache.remove(activity_id)
        return bool(deleted)

    def clear_cache(self) -> None:
        self.cache.remove_all()
