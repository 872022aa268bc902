"""Athlete service - cached access to athletes, their friends and statistics."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from stravakit.cache import CredentialScopedCache
from stravakit.clients.base import BaseClient
from stravakit.models import (
    Athlete,
    EntityType,
    Gender,
    Paging,
    SegmentEffort,
    Statistics,
)
from stravakit.services.asynchronous import operation, with_async_operations
from stravakit.services.faults import call_remote, require_id, validate_choice, validate_paging

logger = logging.getLogger(__name__)


@with_async_operations
class AthleteService:
    """Service for athletes visible to one credential."""

    entity_type = EntityType.ATHLETE

    def __init__(
        self,
        credential,
        api: BaseClient,
        cache: CredentialScopedCache[Athlete, int],
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self.credential = credential
        self.api = api
        self.cache = cache
        self.executor = executor
        self._authenticated_athlete_id: Optional[int] = None

    @operation
    def get_authenticated_athlete(self) -> Athlete:
        """Get the athlete who owns the access token."""
        cached = self.cache.get(self._authenticated_athlete_id)
        if cached is not None:
            return cached

        athlete = call_remote(self.api.get_authenticated_athlete)
        if athlete is not None:
            self._authenticated_athlete_id = athlete.id
            self.cache.put(athlete)
        return athlete

    @operation
    def get_athlete(self, athlete_id: int) -> Optional[Athlete]:
        """Get an athlete by id, or None if there is no such athlete."""
        require_id(athlete_id, "athlete_id")
        cached = self.cache.get(athlete_id)
        if cached is not None:
            return cached

        athlete = call_remote(self.api.get_athlete, athlete_id)
        self.cache.put(athlete)
        return athlete

    @operation
    def statistics(self, athlete_id: int) -> Optional[Statistics]:
        """Get rolled-up totals for an athlete (not cached)."""
        require_id(athlete_id, "athlete_id")
        return call_remote(self.api.get_athlete_statistics, athlete_id)

    @operation
    def list_athlete_koms(
        self, athlete_id: int, paging: Optional[Paging] = None
    ) -> Optional[List[SegmentEffort]]:
        """List the efforts that hold a KOM/QOM for the athlete."""
        require_id(athlete_id, "athlete_id")
        paging = validate_paging(paging)
        efforts = call_remote(self.api.list_athlete_koms, athlete_id, paging.page, paging.per_page)
        if efforts is not None:
            self.credential.service(EntityType.SEGMENT_EFFORT).cache.put_all(efforts)
        return efforts

    @operation
    def list_authenticated_athlete_friends(self, paging: Optional[Paging] = None) -> List[Athlete]:
        paging = validate_paging(paging)
        friends = call_remote(
            self.api.list_authenticated_athlete_friends, paging.page, paging.per_page, default=[]
        )
        self.cache.put_all(friends)
        return friends

    @operation
    def list_athlete_friends(
        self, athlete_id: int, paging: Optional[Paging] = None
    ) -> Optional[List[Athlete]]:
        require_id(athlete_id, "athlete_id")
        paging = validate_paging(paging)
        friends = call_remote(self.api.list_athlete_friends, athlete_id, paging.page, paging.per_page)
        self.cache.put_all(friends)
        return friends

    @operation
    def list_athletes_both_following(
        self, athlete_id: int, paging: Optional[Paging] = None
    ) -> Optional[List[Athlete]]:
        """List athletes followed by both the authenticated athlete and athlete_id."""
        require_id(athlete_id, "athlete_id")
        paging = validate_paging(paging)
        athletes = call_remote(
            self.api.list_athletes_both_following, athlete_id, paging.page, paging.per_page
        )
        self.cache.put_all(athletes)
        return athletes

    @operation
    def update_authenticated_athlete(
        self,
        city: Optional[str] = None,
        state: Optional[str] = None,
        country: Optional[str] = None,
        sex: Optional[Gender] = None,
        weight: Optional[float] = None,
    ) -> Athlete:
        """Update the authenticated athlete's profile and return the new version."""
        sex = validate_choice(sex, Gender, "gender")
        athlete = call_remote(self.api.update_authenticated_athlete, city, state, country, sex, weight)
        if athlete is not None:
            self._authenticated_athlete_id = athlete.id
            self.cache.put(athlete)
            logger.info(f"Updated athlete {athlete.id}")
        return athlete

    def clear_cache(self) -> None:
        self.cache.remove_all()
        self._authenticated_athlete_id = None
