"""In-memory key/value store partitioned into named groups."""

import logging
import threading
from typing import Any, Callable, Hashable, Optional, Protocol

logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    """Store primitive used by credential-scoped caches."""

    def get(self, group: Hashable, key: Hashable) -> Any:
        """Return the stored value or None."""
        ...

    def merge(
        self,
        group: Hashable,
        key: Hashable,
        value: Any,
        keep_existing: Callable[[Any, Any], bool],
    ) -> bool:
        """Atomically store value unless keep_existing(current, value) is true."""
        ...

    def remove(self, group: Hashable, key: Hashable) -> bool:
        """Remove key; return True if something was removed."""
        ...

    def keys(self, group: Hashable) -> list:
        ...

    def values(self, group: Hashable) -> list:
        ...

    def invalidate_group(self, group: Hashable) -> int:
        """Drop every entry of the group; return how many were dropped."""
        ...


class MemoryCacheStore:
    """Thread-safe group cache held in process memory.

    A single store may be shared by many credentials; entries of different
    groups never see each other.
    """

    def __init__(self):
        self._groups: dict[Hashable, dict[Hashable, Any]] = {}
        self._lock = threading.RLock()

    def get(self, group: Hashable, key: Hashable) -> Any:
        with self._lock:
            entries = self._groups.get(group)
            if not entries:
                return None
            return entries.get(key)

    def merge(
        self,
        group: Hashable,
        key: Hashable,
        value: Any,
        keep_existing: Callable[[Any, Any], bool],
    ) -> bool:
        with self._lock:
            entries = self._groups.setdefault(group, {})
            current: Optional[Any] = entries.get(key)
            if current is not None and keep_existing(current, value):
                return False
            entries[key] = value
            return True

    def remove(self, group: Hashable, key: Hashable) -> bool:
        with self._lock:
            entries = self._groups.get(group)
            if not entries or key not in entries:
                return False
            del entries[key]
            if not entries:
                del self._groups[group]
            return True

    def keys(self, group: Hashable) -> list:
        with self._lock:
            return list(self._groups.get(group, {}).keys())

    def values(self, group: Hashable) -> list:
        with self._lock:
            return list(self._groups.get(group, {}).values())

    def invalidate_group(self, group: Hashable) -> int:
        with self._lock:
            entries = self._groups.pop(group, None)
            count = len(entries) if entries else 0
        if count:
            logger.debug(f"Invalidated {count} cache entries")
        return count

    def group_count(self) -> int:
        """Number of non-empty groups currently held."""
        with self._lock:
            return len(self._groups)
