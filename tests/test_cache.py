"""Tests for the key/value store and expiring cache."""

import json
import typing
from datetime import datetime, timedelta

import pytest

from chefsito.cache.expiring import CACHE_PREFIX, TIMESTAMP_SUFFIX, CacheEntry, ExpiringCache
from chefsito.cache.store import JsonFileStore, KeyValueStore, MemoryStore
from chefsito.errors import StorageError

TTL = timedelta(minutes=55)
STORED_AT = datetime(2024, 3, 1, 12, 0, 0)


class FakeClock:
    """Settable clock for TTL tests."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class BrokenStore(KeyValueStore):
    """Store whose every operation fails."""

    def get(self, key):
        raise StorageError("disk on fire")

    def set(self, key, value):
        raise StorageError("disk on fire")

    def remove(self, key):
        raise StorageError("disk on fire")

    def keys(self):
        raise StorageError("disk on fire")


def _fail_replace(src, dst):
    raise OSError("read-only file system")


@pytest.fixture
def clock():
    return FakeClock(STORED_AT)


@pytest.fixture
def cache(clock):
    return ExpiringCache(MemoryStore(), ttl=TTL, clock=clock)


class TestCacheEntry:
    """Tests for entry validity."""

    def test_valid_up_to_and_including_ttl(self):
        """An entry is valid while now - created_at <= ttl."""
        entry = CacheEntry(payload="x", created_at=STORED_AT, ttl=TTL)
        assert entry.is_valid(STORED_AT)
        assert entry.is_valid(STORED_AT + TTL)
        assert not entry.is_valid(STORED_AT + TTL + timedelta(seconds=1))


class TestExpiringCache:
    """Tests for get/put/invalidate over a memory store."""

    def test_put_then_get_round_trips(self, cache):
        """A fresh put is returned unchanged."""
        cache.put("cache_popular_recipes", '[{"id": "1"}]')
        assert cache.get("cache_popular_recipes") == '[{"id": "1"}]'

    def test_fresh_just_before_ttl(self, cache, clock):
        """One second before the TTL the value is still served."""
        cache.put("cache_key", "value")
        clock.now = STORED_AT + TTL - timedelta(seconds=1)
        assert cache.get("cache_key") == "value"

    def test_stale_just_after_ttl(self, cache, clock):
        """One second after the TTL the value is a miss."""
        cache.put("cache_key", "value")
        clock.now = STORED_AT + TTL + timedelta(seconds=1)
        assert cache.get("cache_key") is None

    def test_stale_entries_are_not_evicted(self, cache, clock):
        """Stale values stay in the store until overwritten."""
        cache.put("cache_key", "value")
        clock.now = STORED_AT + TTL * 2
        assert cache.get("cache_key") is None
        assert cache.store.get("cache_key") == "value"

    def test_put_resets_freshness(self, cache, clock):
        """Writing again restarts the TTL window."""
        cache.put("cache_key", "old")
        clock.now = STORED_AT + TTL * 2
        cache.put("cache_key", "new")
        assert cache.get("cache_key") == "new"

    def test_timestamp_stored_beside_value(self, cache):
        """Write time is kept under key + _timestamp in epoch milliseconds."""
        cache.put("cache_key", "value")
        assert cache.store.get("cache_key" + TIMESTAMP_SUFFIX) == int(STORED_AT.timestamp() * 1000)

    def test_missing_key(self, cache):
        """Unknown keys are a miss."""
        assert cache.get("cache_nothing") is None

    def test_value_without_timestamp_is_a_miss(self, clock):
        """A value with no write time is never served."""
        cache = ExpiringCache(MemoryStore({"cache_key": "value"}), ttl=TTL, clock=clock)
        assert cache.get("cache_key") is None

    def test_invalidate(self, cache):
        """Invalidate removes both the value and its timestamp."""
        cache.put("cache_key", "value")
        cache.invalidate("cache_key")
        assert cache.get("cache_key") is None
        assert cache.store.keys() == set()

    def test_invalidate_all_only_touches_prefix(self, cache):
        """Bulk invalidation leaves keys outside the prefix alone."""
        cache.put("cache_a", "1")
        cache.put("cache_b", "2")
        cache.store.set("useMetricUnits", False)

        removed = cache.invalidate_all(CACHE_PREFIX)

        assert removed == 4  # two values, two timestamps
        assert cache.store.keys() == {"useMetricUnits"}

    def test_stats(self, cache, clock):
        """Stats report age in minutes and freshness per key."""
        cache.put("cache_a", "1")
        clock.now = STORED_AT + timedelta(minutes=10)
        cache.put("cache_b", "2")
        clock.now = STORED_AT + timedelta(minutes=60)

        stats = cache.stats()

        assert set(stats) == {"cache_a", "cache_b"}
        assert stats["cache_a"]["age_minutes"] == 60
        assert stats["cache_a"]["fresh"] is False
        assert stats["cache_b"]["age_minutes"] == 50
        assert stats["cache_b"]["fresh"] is True


class TestStoreFailures:
    """Storage errors never escape the cache."""

    def test_read_failure_is_a_miss(self, clock):
        """A failing read behaves like an empty cache."""
        cache = ExpiringCache(BrokenStore(), ttl=TTL, clock=clock)
        assert cache.get("cache_key") is None

    def test_write_failure_is_dropped(self, clock):
        """Failing writes and removals return normally."""
        cache = ExpiringCache(BrokenStore(), ttl=TTL, clock=clock)
        cache.put("cache_key", "value")
        cache.invalidate("cache_key")
        assert cache.invalidate_all() == 0

    def test_stats_failure_is_empty(self, clock):
        """Stats over an unreadable store are empty, not an error."""
        cache = ExpiringCache(BrokenStore(), ttl=TTL, clock=clock)
        assert cache.stats() == {}

    def test_stats_on_corrupt_file(self, tmp_path, clock):
        """Stats over a corrupt store file are empty."""
        path = tmp_path / "store.json"
        path.write_text("{not json")
        assert ExpiringCache(JsonFileStore(path), ttl=TTL, clock=clock).stats() == {}

    def test_failure_is_logged(self, clock, caplog):
        """Swallowed failures are logged at warning level."""
        cache = ExpiringCache(BrokenStore(), ttl=TTL, clock=clock)
        with caplog.at_level("WARNING", logger="chefsito.cache.expiring"):
            cache.put("cache_key", "value")
        assert "Cache write failed for cache_key" in caplog.text

    def test_dropped_write_keeps_previous_value(self, tmp_path, clock, monkeypatch):
        """A failed overwrite leaves the old value and timestamp paired."""
        cache = ExpiringCache(JsonFileStore(tmp_path / "store.json"), ttl=TTL, clock=clock)
        cache.put("cache_key", "old")

        clock.now = STORED_AT + timedelta(minutes=50)
        monkeypatch.setattr("chefsito.cache.store.os.replace", _fail_replace)
        cache.put("cache_key", "new")
        monkeypatch.undo()

        assert cache.get("cache_key") == "old"
        assert json.loads((tmp_path / "store.json").read_text())["cache_key"] == "old"


class TestMemoryStore:
    """Tests for the in-process store."""

    def test_basic_operations(self):
        """Set, get, remove and keys behave like a dict."""
        store = MemoryStore({"a": 1})
        store.set("b", "two")
        assert store.get("a") == 1
        assert store.get("b") == "two"
        store.remove("a")
        store.remove("missing")
        assert store.keys() == {"b"}

    def test_keys_annotation_is_builtin_set(self):
        """The keys() return type resolves to the builtin set, not the set() method."""
        assert typing.get_type_hints(KeyValueStore.keys)["return"] == set[str]
        assert typing.get_type_hints(MemoryStore.keys)["return"] == set[str]
        assert typing.get_type_hints(JsonFileStore.keys)["return"] == set[str]


class TestJsonFileStore:
    """Tests for the file-backed store."""

    def test_persists_across_instances(self, tmp_path):
        """Values written by one instance are read by the next."""
        path = tmp_path / "nested" / "store.json"
        JsonFileStore(path).set("cache_key", "value")

        assert JsonFileStore(path).get("cache_key") == "value"
        assert json.loads(path.read_text()) == {"cache_key": "value"}

    def test_missing_file_is_empty(self, tmp_path):
        """A store with no file yet has no keys."""
        store = JsonFileStore(tmp_path / "store.json")
        assert store.get("anything") is None
        assert store.keys() == set()

    def test_remove(self, tmp_path):
        """Removed keys are gone from disk."""
        store = JsonFileStore(tmp_path / "store.json")
        store.set("a", 1)
        store.set("b", 2)
        store.remove("a")
        assert JsonFileStore(tmp_path / "store.json").keys() == {"b"}

    def test_corrupt_file_raises_storage_error(self, tmp_path):
        """Unparseable files surface as StorageError."""
        path = tmp_path / "store.json"
        path.write_text("{not json")
        with pytest.raises(StorageError):
            JsonFileStore(path).get("a")

    def test_non_object_file_raises_storage_error(self, tmp_path):
        """A JSON file that is not an object surfaces as StorageError."""
        path = tmp_path / "store.json"
        path.write_text("[1, 2]")
        with pytest.raises(StorageError):
            JsonFileStore(path).keys()

    def test_corrupt_file_is_a_cache_miss(self, tmp_path):
        """The cache turns a corrupt store into a miss."""
        path = tmp_path / "store.json"
        path.write_text("{not json")
        cache = ExpiringCache(JsonFileStore(path), ttl=TTL)
        assert cache.get("cache_key") is None

    def test_failed_set_leaves_map_unchanged(self, tmp_path, monkeypatch):
        """A write that cannot reach disk changes nothing in memory."""
        store = JsonFileStore(tmp_path / "store.json")
        store.set("a", 1)

        monkeypatch.setattr("chefsito.cache.store.os.replace", _fail_replace)
        with pytest.raises(StorageError):
            store.set("a", 2)
        with pytest.raises(StorageError):
            store.remove("a")

        assert store.get("a") == 1
        assert sorted(p.name for p in tmp_path.iterdir()) == ["store.json"]
