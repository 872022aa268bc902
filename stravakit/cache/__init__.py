from stravakit.cache.scoped import CacheGroup, CacheKey, CredentialScopedCache
from stravakit.cache.store import CacheStore, MemoryCacheStore

__all__ = ['CacheGroup', 'CacheKey', 'CacheStore', 'CredentialScopedCache', 'MemoryCacheStore']
