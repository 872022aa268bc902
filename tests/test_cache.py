"""Tests for the credential-scoped cache and its store."""

import threading

import pytest

from stravakit.cache import CacheGroup, CacheKey, CredentialScopedCache, MemoryCacheStore
from stravakit.models import Activity, EntityType, ResourceState


def activity(activity_id, state, name="Ride"):
    return Activity(id=activity_id, resource_state=state, name=name)


@pytest.fixture
def cache(store):
    return CredentialScopedCache(EntityType.ACTIVITY, "cred-a", store)


class TestCredentialScopedCache:
    """Tests for CredentialScopedCache."""

    def test_get_missing_returns_none(self, cache):
        """Test that a missing id is a soft miss."""
        assert cache.get(42) is None

    def test_get_none_or_empty_id(self, cache):
        """Test that None and empty ids never raise."""
        assert cache.get(None) is None
        assert cache.get("") is None

    def test_put_and_get(self, cache):
        """Test storing and reading back an object."""
        ride = activity(1, ResourceState.SUMMARY)
        cache.put(ride)
        assert cache.get(1) is ride

    def test_put_none_is_noop(self, cache):
        cache.put(None)
        assert cache.size() == 0

    def test_put_without_id_is_noop(self, cache):
        """Test that objects without an id are silently dropped."""
        cache.put(Activity(resource_state=ResourceState.DETAILED))
        assert cache.size() == 0

    def test_get_after_remove_all(self, cache):
        """Test that remove_all empties the group."""
        cache.put_all([activity(1, ResourceState.SUMMARY), activity(2, ResourceState.SUMMARY)])
        cache.remove_all()
        assert cache.get(1) is None
        assert cache.get(2) is None
        assert cache.size() == 0

    def test_put_never_downgrades(self, cache):
        """Test that a less detailed object does not replace a more detailed one."""
        detailed = activity(1, ResourceState.DETAILED, name="Detailed")
        summary = activity(1, ResourceState.SUMMARY, name="Summary")

        cache.put(detailed)
        cache.put(summary)

        assert cache.get(1).resource_state == ResourceState.DETAILED
        assert cache.get(1).name == "Detailed"

    def test_put_upgrades(self, cache):
        """Test that a more detailed object replaces a less detailed one."""
        cache.put(activity(1, ResourceState.SUMMARY))
        cache.put(activity(1, ResourceState.DETAILED))
        assert cache.get(1).resource_state == ResourceState.DETAILED

    @pytest.mark.parametrize("first,second", [
        (ResourceState.META, ResourceState.DETAILED),
        (ResourceState.DETAILED, ResourceState.META),
        (ResourceState.PRIVATE, ResourceState.SUMMARY),
        (ResourceState.SUMMARY, ResourceState.PRIVATE),
    ])
    def test_merge_outcome_is_order_independent(self, cache, first, second):
        """Test that the most complete state wins whatever the put order."""
        cache.put(activity(1, first))
        cache.put(activity(1, second))
        assert cache.get(1).resource_state == max(first, second)

    def test_equal_state_overwrites(self, cache):
        """Test that an equally detailed object refreshes the cached one."""
        cache.put(activity(1, ResourceState.SUMMARY, name="Old"))
        cache.put(activity(1, ResourceState.SUMMARY, name="New"))
        assert cache.get(1).name == "New"

    def test_put_all_preserves_order(self, cache):
        """Test that put_all applies puts in list order."""
        cache.put_all([
            activity(1, ResourceState.SUMMARY, name="First"),
            activity(1, ResourceState.SUMMARY, name="Second"),
        ])
        assert cache.get(1).name == "Second"

    def test_put_all_none(self, cache):
        cache.put_all(None)
        assert cache.size() == 0

    def test_size_and_remove(self, cache):
        """Test size after put_all and a subsequent remove."""
        o1, o2, o3 = (activity(i, ResourceState.SUMMARY) for i in (1, 2, 3))
        cache.put_all([o1, o2, o3])
        assert cache.size() == 3

        cache.remove(o2.id)
        assert cache.size() == 2
        assert len(cache) == 2
        assert cache.get(2) is None

    def test_remove_missing_is_noop(self, cache):
        cache.put(activity(1, ResourceState.SUMMARY))
        cache.remove(99)
        cache.remove(None)
        assert cache.size() == 1

    def test_list_snapshot(self, cache):
        """Test that list returns every cached value as an independent list."""
        cache.put_all([activity(1, ResourceState.SUMMARY), activity(2, ResourceState.SUMMARY)])
        snapshot = cache.list()
        assert sorted(a.id for a in snapshot) == [1, 2]

        cache.remove(1)
        assert len(snapshot) == 2

    def test_contains(self, cache):
        cache.put(activity(1, ResourceState.SUMMARY))
        assert 1 in cache
        assert 2 not in cache

    def test_construction_clears_group(self, store):
        """Test that a new cache starts with a clean group."""
        first = CredentialScopedCache(EntityType.ACTIVITY, "cred-a", store)
        first.put(activity(1, ResourceState.SUMMARY))

        second = CredentialScopedCache(EntityType.ACTIVITY, "cred-a", store)
        assert second.get(1) is None


class TestCacheIsolation:
    """Tests that groups never see each other."""

    def test_credentials_are_isolated(self, store):
        """Test that two credentials never observe each other's entries."""
        cache_a = CredentialScopedCache(EntityType.ACTIVITY, "cred-a", store)
        cache_b = CredentialScopedCache(EntityType.ACTIVITY, "cred-b", store)

        cache_a.put(activity(1, ResourceState.DETAILED, name="A"))

        assert cache_b.get(1) is None
        assert cache_b.size() == 0

        cache_b.put(activity(1, ResourceState.META, name="B"))
        assert cache_a.get(1).name == "A"
        assert cache_b.get(1).name == "B"

    def test_remove_all_only_affects_own_group(self, store):
        """Test that remove_all leaves other groups untouched."""
        cache_a = CredentialScopedCache(EntityType.ACTIVITY, "cred-a", store)
        cache_b = CredentialScopedCache(EntityType.ACTIVITY, "cred-b", store)
        segments_a = CredentialScopedCache(EntityType.SEGMENT, "cred-a", store)

        cache_a.put(activity(1, ResourceState.SUMMARY))
        cache_b.put(activity(1, ResourceState.SUMMARY))
        segments_a.put(activity(1, ResourceState.SUMMARY))

        cache_a.remove_all()

        assert cache_a.size() == 0
        assert cache_b.size() == 1
        assert segments_a.size() == 1

    def test_keys_differ_only_by_credential(self):
        key_a = CacheKey(EntityType.ACTIVITY, 1, "cred-a")
        key_b = CacheKey(EntityType.ACTIVITY, 1, "cred-b")
        assert key_a != key_b
        assert key_a == CacheKey(EntityType.ACTIVITY, 1, "cred-a")


class TestMemoryCacheStore:
    """Tests for MemoryCacheStore."""

    def test_merge_rejected_keeps_current(self):
        store = MemoryCacheStore()
        group = CacheGroup(EntityType.ACTIVITY, "cred-a")
        store.merge(group, "k", 5, lambda current, new: False)

        stored = store.merge(group, "k", 3, lambda current, new: current > new)

        assert stored is False
        assert store.get(group, "k") == 5

    def test_invalidate_group_returns_count(self):
        store = MemoryCacheStore()
        group = CacheGroup(EntityType.ACTIVITY, "cred-a")
        store.merge(group, 1, "a", lambda current, new: False)
        store.merge(group, 2, "b", lambda current, new: False)

        assert store.invalidate_group(group) == 2
        assert store.invalidate_group(group) == 0
        assert store.group_count() == 0

    def test_concurrent_puts_keep_most_detailed(self, store):
        """Test that racing puts of different fidelity never lose the detailed one."""
        cache = CredentialScopedCache(EntityType.ACTIVITY, "cred-a", store)
        barrier = threading.Barrier(8)

        def writer(state):
            barrier.wait()
            for _ in range(200):
                cache.put(activity(1, state))

        states = [ResourceState.META, ResourceState.SUMMARY, ResourceState.DETAILED,
                  ResourceState.PRIVATE] * 2
        threads = [threading.Thread(target=writer, args=(s,)) for s in states]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert cache.get(1).resource_state == ResourceState.DETAILED
        assert cache.size() == 1
