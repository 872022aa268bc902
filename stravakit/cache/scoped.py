"""Cache of Strava objects visible only to the credential that fetched them."""

import logging
from typing import Generic, Hashable, Iterable, List, NamedTuple, Optional, TypeVar

from stravakit.cache.store import CacheStore
from stravakit.models.reference import EntityType

logger = logging.getLogger(__name__)

T = TypeVar("T")
Id = TypeVar("Id", bound=Hashable)


class CacheGroup(NamedTuple):
    """All entries of one entity type stored under one credential."""

    entity_type: EntityType
    credential_id: str


class CacheKey(NamedTuple):
    entity_type: EntityType
    entity_id: Hashable
    credential_id: str


def _keeps_cached(cached, incoming) -> bool:
    """True when the cached object is strictly more complete than the incoming one."""
    return cached.resource_state > incoming.resource_state


class CredentialScopedCache(Generic[T, Id]):
    """Cache for one entity type, bound to one credential.

    Objects are keyed by (entity type, object id, credential identity). A put
    never replaces a cached object with a less complete one; equal or more
    complete objects overwrite.
    """

    def __init__(self, entity_type: EntityType, credential_id: str, store: CacheStore):
        self.entity_type = entity_type
        self.credential_id = credential_id
        self._store = store
        self._group = CacheGroup(entity_type, credential_id)
        # Every cache starts with a clean group for its credential
        self.remove_all()

    def _key(self, entity_id: Id) -> CacheKey:
        return CacheKey(self.entity_type, entity_id, self.credential_id)

    def get(self, entity_id: Optional[Id]) -> Optional[T]:
        """Return the cached object, or None when it is absent."""
        if entity_id is None or entity_id == "":
            return None
        value = self._store.get(self._group, self._key(entity_id))
        if value is None:
            logger.debug(f"Cache miss: {self.entity_type.value} {entity_id}")
        else:
            logger.debug(f"Cache hit: {self.entity_type.value} {entity_id}")
        return value

    def put(self, obj: Optional[T]) -> None:
        """Store obj unless the cache already holds a more complete version."""
        if obj is None:
            return
        entity_id = getattr(obj, "id", None)
        if entity_id is None or entity_id == "":
            return

        stored = self._store.merge(self._group, self._key(entity_id), obj, _keeps_cached)
        if not stored:
            logger.debug(
                f"Kept more detailed cached {self.entity_type.value} {entity_id}"
            )

    def put_all(self, objects: Optional[Iterable[T]]) -> None:
        if objects is None:
            return
        for obj in objects:
            self.put(obj)

    def remove(self, entity_id: Optional[Id]) -> None:
        if entity_id is None:
            return
        self._store.remove(self._group, self._key(entity_id))

    def remove_all(self) -> None:
        """Drop every entry stored for this entity type and credential."""
        self._store.invalidate_group(self._group)

    def list(self) -> List[T]:
        """Snapshot of the cached objects, in no particular order."""
        return self._store.values(self._group)

    def size(self) -> int:
        return len(self._store.keys(self._group))

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, entity_id) -> bool:
        return self.get(entity_id) is not None

    def __repr__(self):
        return f"CredentialScopedCache({self.entity_type.value}, size={self.size()})"
