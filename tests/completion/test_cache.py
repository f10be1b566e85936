"""Tests for CompletionCache."""

from inkline.completion.cache import CompletionCache
from inkline.domain.types import CompletionItem, CompletionResult, PatternType


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_result(start=0, end=3, query="to"):
    return CompletionResult(
        start=start,
        end=end,
        pattern_type=PatternType.DATE,
        query=query,
        items=(CompletionItem(label="Today", value="today"),),
    )


KEY = (PatternType.DATE, "to")


def test_hit_and_miss_counts():
    cache = CompletionCache(clock=FakeClock())
    assert cache.get(KEY, 0, 3) is None

    cache.set(KEY, make_result(), 0, 3)
    hit = cache.get(KEY, 0, 3)

    assert hit is not None
    assert hit.items[0].value == "today"
    stats = cache.stats()
    assert (stats["hits"], stats["misses"]) == (1, 1)


def test_entries_expire():
    clock = FakeClock()
    cache = CompletionCache(ttl=5.0, clock=clock)
    cache.set(KEY, make_result(), 0, 3)

    clock.now = 4.9
    assert KEY in cache
    clock.now = 5.0
    assert KEY not in cache
    assert cache.stats()["expired"] == 1
    assert cache.get(KEY, 0, 3) is None
    assert len(cache) == 0


def test_span_must_bracket_current_match():
    cache = CompletionCache(clock=FakeClock())
    cache.set(KEY, make_result(5, 8), 5, 8)

    assert cache.get(KEY, 11, 14) is None
    assert cache.get(KEY, 2, 5) is None


def test_hit_is_reanchored():
    cache = CompletionCache(clock=FakeClock())
    cache.set(KEY, make_result(0, 5), 0, 5)

    hit = cache.get(KEY, 2, 4)
    assert (hit.start, hit.end) == (2, 4)


def test_oldest_entry_is_evicted_at_capacity():
    clock = FakeClock()
    cache = CompletionCache(size_limit=2, clock=clock)
    first, second, third = ((PatternType.DATE, q) for q in ("a", "b", "c"))

    cache.set(first, make_result(), 0, 3)
    clock.now = 1
    cache.set(second, make_result(), 0, 3)
    clock.now = 2
    cache.set(third, make_result(), 0, 3)

    assert first not in cache
    assert second in cache
    assert third in cache


def test_expired_entries_are_evicted_first():
    clock = FakeClock()
    cache = CompletionCache(ttl=5.0, size_limit=2, clock=clock)
    first, second, third = ((PatternType.TAG, q) for q in ("a", "b", "c"))

    cache.set(first, make_result(), 0, 3)
    clock.now = 4
    cache.set(second, make_result(), 0, 3)
    clock.now = 6
    cache.set(third, make_result(), 0, 3)

    assert cache.stats()["size"] == 2
    assert second in cache
    assert third in cache


def test_overwriting_does_not_evict():
    cache = CompletionCache(size_limit=1, clock=FakeClock())
    cache.set(KEY, make_result(), 0, 3)
    cache.set(KEY, make_result(query="other"), 0, 3)

    assert len(cache) == 1
    assert cache.get(KEY, 0, 3).query == "other"


def test_clear():
    cache = CompletionCache(clock=FakeClock())
    other = (PatternType.TAG, "me")
    cache.set(KEY, make_result(), 0, 3)
    cache.set(other, make_result(), 0, 3)

    assert cache.stats()["by_type"] == {"date": 1, "tag": 1}

    cache.clear(KEY)
    assert KEY not in cache
    assert other in cache

    cache.get(other, 0, 3)
    cache.clear()
    assert cache.stats() == {
        "size": 0,
        "size_limit": 100,
        "hits": 0,
        "misses": 0,
        "by_type": {},
        "expired": 0,
    }
