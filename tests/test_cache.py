"""Tests for the TTL cache implementation."""

import asyncio
import threading
import time
import pytest
from services.cache import TTLCache, CacheStats, get_cache, cache as global_cache, run_periodic_cleanup


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance_ms(self, ms):
        self.now += ms / 1000.0


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(clock=clock)


def test_cache_miss_then_hit(cache):
    """An unknown key misses; after set it hits."""
    assert cache.get("test_key") is None

    cache.set("test_key", "test_value", ttl_ms=10_000)

    assert cache.get("test_key") == "test_value"


def test_cache_expiration():
    """Test that cache entries expire correctly."""
    cache = TTLCache()

    # Set a value with a short TTL
    cache.set("expiring_key", "expiring_value", ttl_ms=50)
    assert cache.get("expiring_key") == "expiring_value"

    # Wait for expiration
    time.sleep(0.1)

    # Try to get the expired value
    result = cache.get("expiring_key")
    assert result is None


def test_expiry_boundary_is_exclusive(cache, clock):
    cache.set("key", "value", ttl_ms=50)

    clock.advance_ms(49)
    assert cache.get("key") == "value"

    clock.advance_ms(1)
    assert cache.get("key") is None
    assert len(cache) == 0


def test_hit_does_not_extend_ttl(cache, clock):
    cache.set("key", "value", ttl_ms=100)

    clock.advance_ms(60)
    assert cache.get("key") == "value"
    clock.advance_ms(60)

    assert cache.get("key") is None


def test_zero_and_negative_ttl_are_immediately_stale(cache):
    cache.set("zero", "value", ttl_ms=0)
    cache.set("negative", "value", ttl_ms=-5_000)

    assert cache.get("zero") is None
    assert cache.get("negative") is None


def test_overwrite_replaces_value_and_expiry(cache, clock):
    cache.set("key", "v1", ttl_ms=100)
    clock.advance_ms(80)
    cache.set("key", "v2", ttl_ms=100)
    clock.advance_ms(80)

    assert cache.get("key") == "v2"


def test_values_are_stored_by_reference(cache):
    payload = [{"id": "c1", "name": "Sales"}]
    cache.set("categories-summary_user42", payload, ttl_ms=4 * 60 * 60 * 1000)

    assert cache.get("categories-summary_user42") is payload


def test_delete_present_and_absent_keys(cache):
    cache.set("key1", "value1", ttl_ms=10_000)
    cache.set("key2", "value2", ttl_ms=10_000)

    assert cache.delete("missing") is False
    assert len(cache) == 2

    assert cache.delete("key1") is True
    assert cache.get("key1") is None
    assert cache.get("key2") == "value2"


def test_cache_clear():
    """Test clearing all cache entries."""
    cache = TTLCache()

    # Set some values
    cache.set("key1", "value1", ttl_ms=10_000)
    cache.set("key2", "value2", ttl_ms=10_000)
    cache.set("key3", "value3", ttl_ms=10_000)

    # Clear the cache
    result = cache.clear()
    assert result.cleared_count == 3

    # Try to get the cleared values
    assert cache.get("key1") is None
    assert cache.get("key2") is None
    assert cache.get("key3") is None


def test_clear_on_empty_cache(cache):
    assert cache.clear().cleared_count == 0


def test_stats_classifies_without_removing(cache, clock):
    cache.set("stale", "old", ttl_ms=10)
    cache.set("fresh", "new", ttl_ms=10_000)
    clock.advance_ms(20)

    assert cache.stats() == CacheStats(total=2, active=1, expired=1)
    # stats is read-only, the stale entry is still stored
    assert len(cache) == 2

    assert cache.get("stale") is None
    assert cache.stats() == CacheStats(total=1, active=1, expired=0)


def test_stats_to_dict(cache):
    cache.set("key", "value", ttl_ms=1_000)
    assert cache.stats().to_dict() == {"total": 1, "active": 1, "expired": 0}


def test_keys_with_prefix(cache):
    cache.set("cat_userA", 1, ttl_ms=10_000)
    cache.set("cat_userB", 2, ttl_ms=10_000)
    cache.set("perm_userA", 3, ttl_ms=10_000)

    assert set(cache.keys("cat_")) == {"cat_userA", "cat_userB"}
    assert set(cache.keys()) == {"cat_userA", "cat_userB", "perm_userA"}


def test_keys_skips_and_removes_expired(cache, clock):
    cache.set("cat_old", 1, ttl_ms=10)
    cache.set("cat_new", 2, ttl_ms=10_000)
    cache.set("perm_old", 3, ttl_ms=10)
    clock.advance_ms(20)

    assert cache.keys("cat_") == ["cat_new"]
    # every stale entry met during the scan is dropped, matching prefix or not
    assert len(cache) == 1


def test_invalidate_prefix_leaves_other_namespaces(cache):
    cache.set("categories-summary_userA", 1, ttl_ms=10_000)
    cache.set("categories-summary_userB", 2, ttl_ms=10_000)
    cache.set("user-permissions_userA", 3, ttl_ms=10_000)

    assert cache.invalidate_prefix("categories-summary_") == 2
    assert cache.get("categories-summary_userA") is None
    assert cache.get("user-permissions_userA") == 3


def test_cache_cleanup_expired(cache, clock):
    """Test cleaning up expired entries."""
    # Set some values with different TTLs
    cache.set("permanent_key", "permanent_value", ttl_ms=10_000)
    cache.set("expiring_key", "expiring_value", ttl_ms=1_000)

    clock.advance_ms(1_100)

    # Clean up expired entries
    assert cache.cleanup_expired() == 1

    # Check that permanent entry still exists and expiring entry is gone
    assert len(cache) == 1
    assert cache.get("permanent_key") == "permanent_value"
    assert cache.get("expiring_key") is None


def test_operations_on_one_key_leave_others_alone(cache, clock):
    cache.set("A", "a", ttl_ms=100)
    cache.set("B", "b", ttl_ms=1_000)

    cache.set("A", "a2", ttl_ms=10)
    cache.delete("A")
    clock.advance_ms(500)

    assert cache.get("B") == "b"
    clock.advance_ms(499)
    assert cache.get("B") == "b"


def test_get_or_set_computes_once(cache):
    calls = []

    def compute():
        calls.append(1)
        return {"count": 7}

    first = cache.get_or_set("subcategory-count_sub1_user42", compute, ttl_ms=10_000)
    second = cache.get_or_set("subcategory-count_sub1_user42", compute, ttl_ms=10_000)

    assert first == ({"count": 7}, False)
    assert second == ({"count": 7}, True)
    assert len(calls) == 1


def test_get_or_set_recomputes_after_expiry(cache, clock):
    values = iter(["first", "second"])

    assert cache.get_or_set("key", lambda: next(values), ttl_ms=100) == ("first", False)
    clock.advance_ms(100)
    assert cache.get_or_set("key", lambda: next(values), ttl_ms=100) == ("second", False)


def test_get_or_set_does_not_store_on_failure(cache):
    def broken():
        raise RuntimeError("database unavailable")

    with pytest.raises(RuntimeError):
        cache.get_or_set("key", broken, ttl_ms=10_000)

    assert len(cache) == 0


def test_get_or_set_refresh_recomputes_hit(cache):
    cache.set("key", "old", ttl_ms=10_000)

    assert cache.get_or_set("key", lambda: "new", ttl_ms=10_000, refresh=True) == ("new", False)
    assert cache.get("key") == "new"


def test_get_or_set_skips_store_when_guard_prefix_invalidated(cache):
    def compute_while_reordering():
        cache.invalidate_prefix("categories-summary_")
        return ["old order"]

    value, hit = cache.get_or_set("categories-summary_user42", compute_while_reordering,
                                  ttl_ms=10_000, guard_prefix="categories-summary_")

    assert (value, hit) == (["old order"], False)
    assert cache.get("categories-summary_user42") is None


def test_get_or_set_skips_store_when_cleared(cache):
    def compute_while_clearing():
        cache.clear()
        return 1

    cache.get_or_set("categories-summary_user42", compute_while_clearing,
                     ttl_ms=10_000, guard_prefix="categories-summary_")

    assert len(cache) == 0


def test_get_or_set_guard_ignores_other_prefixes(cache):
    def compute():
        cache.invalidate_prefix("subcategory-count_")
        return 1

    cache.get_or_set("categories-summary_user42", compute,
                     ttl_ms=10_000, guard_prefix="categories-summary_")

    assert cache.get("categories-summary_user42") == 1


def test_concurrent_writers_last_one_wins():
    cache = TTLCache()

    def writer(n):
        for i in range(200):
            cache.set(f"shared_{i % 10}", n, ttl_ms=10_000)
            cache.set(f"own_{n}_{i}", i, ttl_ms=10_000)

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert cache.stats().total == 10 + 8 * 200
    assert all(cache.get(f"shared_{i}") in range(8) for i in range(10))


def test_get_cache_returns_singleton():
    assert get_cache() is global_cache
    assert get_cache() is get_cache()


def test_periodic_cleanup_sweeps_expired_entries(cache, clock):
    cache.set("stale", 1, ttl_ms=10)
    cache.set("fresh", 2, ttl_ms=10_000)
    clock.advance_ms(20)

    async def run_briefly():
        task = asyncio.create_task(run_periodic_cleanup(cache, 0.01))
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(run_briefly())

    assert len(cache) == 1
    assert cache.get("fresh") == 2
