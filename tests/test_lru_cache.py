import pytest

from toyos.lru_cache import LRUCache


@pytest.fixture
def filled_cache():
    cache = LRUCache(3)
    for i in range(1, 7):
        cache.put(f"k{i}", f"v{i}")
    return cache


def test_puts_beyond_capacity_evict_oldest(filled_cache):
    assert len(filled_cache) == 3
    assert filled_cache.keys() == ["k6", "k5", "k4"]


@pytest.mark.parametrize("key", ["k1", "k2", "k3"])
def test_evicted_keys_miss(filled_cache, key):
    assert filled_cache.get(key) is None


@pytest.mark.parametrize("key,value", [("k4", "v4"), ("k5", "v5"), ("k6", "v6")])
def test_resident_keys_hit(filled_cache, key, value):
    assert filled_cache.get(key) == value


def test_final_state_after_gets(filled_cache):
    for i in range(1, 7):
        filled_cache.get(f"k{i}")
    assert filled_cache.keys() == ["k6", "k5", "k4"]
    assert len(filled_cache) == 3


def test_get_refreshes_recency():
    cache = LRUCache(2)
    cache.put("a", "1")
    cache.put("b", "2")
    assert cache.get("a") == "1"
    cache.put("c", "3")
    assert cache.exists("a")
    assert not cache.exists("b")
    assert cache.keys() == ["c", "a"]


def test_put_existing_updates_without_eviction():
    cache = LRUCache(2)
    cache.put("a", "1")
    cache.put("b", "2")
    cache.put("a", "10")
    assert len(cache) == 2
    assert cache.get("a") == "10"
    assert cache.keys() == ["a", "b"]


def test_exists_does_not_change_order():
    cache = LRUCache(2)
    cache.put("a", "1")
    cache.put("b", "2")
    assert cache.exists("a")
    cache.put("c", "3")
    assert not cache.exists("a")
    assert "b" in cache


def test_missing_key_returns_none():
    assert LRUCache(1).get("nope") is None