"""Access credentials and the per-credential registry of services."""

import hashlib
import logging
import threading
import weakref
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional

from stravakit.cache import CacheGroup, CacheStore, CredentialScopedCache, MemoryCacheStore
from stravakit.clients.base import BaseClient
from stravakit.exceptions import InvalidArgumentError
from stravakit.models import EntityType

logger = logging.getLogger(__name__)


def _build_service(credential: "Credential", entity_type: EntityType):
    """Create the service for entity_type with a fresh cache group."""
    from stravakit.services import SERVICE_CLASSES

    service_cls = SERVICE_CLASSES[entity_type]
    cache = CredentialScopedCache(entity_type, credential.identity, credential.store)
    return service_cls(credential, credential.api, cache, credential.executor)


def _release_cache_groups(store: CacheStore, identity: str) -> None:
    """Drop every cache group a credential may have built in store."""
    for entity_type in EntityType:
        store.invalidate_group(CacheGroup(entity_type, identity))


class CredentialRegistry:
    """One service per entity type for the owning credential.

    Services are built on first use and reused for the life of the credential,
    so each (credential, entity type) pair has exactly one cache group.
    """

    def __init__(
        self,
        credential: "Credential",
        factory: Callable[["Credential", EntityType], Any] = _build_service,
    ):
        self._credential = credential
        self._factory = factory
        self._services: dict[EntityType, Any] = {}
        self._lock = threading.RLock()

    def service_for(self, entity_type: EntityType):
        entity_type = EntityType(entity_type)
        with self._lock:
            service = self._services.get(entity_type)
            if service is None:
                service = self._factory(self._credential, entity_type)
                self._services[entity_type] = service
                logger.debug(f"Created {entity_type.value} service")
            return service

    def get(self, entity_type: EntityType):
        """Registered service for entity_type, or None if not built yet."""
        with self._lock:
            return self._services.get(EntityType(entity_type))

    def clear(self) -> None:
        """Drop every service and empty its cache group."""
        with self._lock:
            services = list(self._services.values())
            self._services.clear()
        for service in services:
            service.clear_cache()

    def __contains__(self, entity_type) -> bool:
        with self._lock:
            return EntityType(entity_type) in self._services

    def __len__(self) -> int:
        with self._lock:
            return len(self._services)


class Credential:
    """A Strava access token and the services that act on its behalf.

    Args:
        access_token: OAuth access token obtained elsewhere
        api: Remote client to use; a StravaClient for the token by default
        store: Cache store; may be shared between credentials
        executor: Pool for *_async operations; the shared pool by default
    """

    def __init__(
        self,
        access_token: str,
        api: Optional[BaseClient] = None,
        store: Optional[CacheStore] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        if not access_token:
            raise InvalidArgumentError("access_token is required")

        self.access_token = access_token
        self.store = store if store is not None else MemoryCacheStore()
        self.executor = executor
        self._api = api
        self._owns_api = api is None
        self.registry = CredentialRegistry(self)
        # Groups in a shared store are released even if close() is never called
        weakref.finalize(self, _release_cache_groups, self.store, self.identity)

    @property
    def identity(self) -> str:
        """Stable, non-reversible identity used to scope cache entries."""
        return hashlib.sha256(self.access_token.encode()).hexdigest()[:32]

    @property
    def api(self) -> BaseClient:
        """Get the remote client, creating it if needed."""
        if self._api is None:
            from stravakit.clients.strava import StravaClient

            self._api = StravaClient(self.access_token)
        return self._api

    def service(self, entity_type: EntityType):
        return self.registry.service_for(entity_type)

    @property
    def athletes(self):
        return self.service(EntityType.ATHLETE)

    @property
    def activities(self):
        return self.service(EntityType.ACTIVITY)

    @property
    def segments(self):
        return self.service(EntityType.SEGMENT)

    @property
    def segment_efforts(self):
        return self.service(EntityType.SEGMENT_EFFORT)

    @property
    def streams(self):
        return self.service(EntityType.STREAM)

    def close(self) -> None:
        """Discard every service and cached object held for this credential."""
        self.registry.clear()
        if self._owns_api and self._api is not None:
            self._api.close()
            self._api = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self):
        return f"Credential(identity={self.identity[:8]}..., services={len(self.registry)})"


def service_for(credential: Credential, entity_type: EntityType):
    """Get the single service for (credential, entity_type)."""
    return credential.registry.service_for(entity_type)
