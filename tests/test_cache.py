from typing import List

from secure_jwt.cache import Cache


def _clock(start: float = 1_000_000.0) -> List[float]:
    return [start]


def test_capacity_and_ttl_floors() -> None:
    assert Cache(10).max_size == 1000
    assert Cache(5000).max_size == 5000
    assert Cache(10, 0).default_ttl_ms == 1
    assert Cache(10, -5).default_ttl_ms == 1
    assert Cache(10, 250).default_ttl_ms == 250


def test_entries_expire_lazily() -> None:
    now = _clock()
    cache: Cache[int] = Cache(10, 50, clock=lambda: now[0])
    cache.set("a", 1)

    now[0] += 50
    assert cache.get("a") == 1

    now[0] += 1
    assert len(cache) == 1
    assert cache.get("a") is None
    assert len(cache) == 0


def test_zero_or_negative_ttl_still_lives_one_millisecond() -> None:
    now = _clock()
    cache: Cache[str] = Cache(10, 10_000, clock=lambda: now[0])
    cache.set("zero", "v", 0)
    cache.set("negative", "v", -100)

    assert cache.get("zero") == "v"
    assert cache.has("negative") is True

    now[0] += 2
    assert cache.get("zero") is None
    assert cache.has("negative") is False


def test_has_and_get_count_accesses() -> None:
    cache: Cache[bool] = Cache()
    cache.set("k", False, 1_000)
    assert cache.entry("k").access_count == 1

    assert cache.has("k") is True
    assert cache.get("k") is False
    assert cache.entry("k").access_count == 3
    assert cache.has("missing") is False


def test_size_never_exceeds_capacity() -> None:
    cache: Cache[int] = Cache(1000, 60_000)
    for i in range(1500):
        cache.set(f"k{i}", i)
        assert len(cache) <= cache.max_size
    assert len(cache) == 1000
    assert cache.get("k1499") == 1499


def test_overwrite_at_capacity_does_not_evict() -> None:
    now = _clock()
    cache: Cache[int] = Cache(1000, 60_000, clock=lambda: now[0])
    for i in range(1000):
        cache.set(f"k{i}", i)

    cache.set("k500", -1)

    assert len(cache) == 1000
    assert cache.get("k500") == -1
    assert all(cache.entry(f"k{i}") is not None for i in range(1000))


def test_evicts_lowest_access_plus_age_score() -> None:
    now = _clock()
    cache: Cache[int] = Cache(1000, 60_000, clock=lambda: now[0])
    for i in range(1000):
        cache.set(f"k{i}", i)
    for i in range(1000):
        if i != 7:
            cache.get(f"k{i}")

    cache.set("fresh", 1)

    assert cache.entry("k7") is None
    assert cache.get("fresh") == 1
    assert len(cache) == 1000


def test_older_entries_score_higher_than_fresh_ones() -> None:
    now = _clock()
    cache: Cache[int] = Cache(1000, 600_000, clock=lambda: now[0])
    cache.set("old", 0)
    now[0] += 5_000
    for i in range(999):
        cache.set(f"k{i}", i)

    cache.set("overflow", 1)

    # "old" scores 1 + 5s of age; the first fresh key scores 1 and loses the tie-break
    assert cache.entry("old") is not None
    assert cache.entry("k0") is None


def test_delete_and_clear() -> None:
    cache: Cache[int] = Cache()
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.delete("a") is True
    assert cache.delete("a") is False
    cache.clear()
    assert len(cache) == 0
