"""TTL cache for completion results.

Entries are keyed by ``(pattern_type, query)`` and remember the span they were
computed for. A lookup only hits when the entry is unexpired and its span
still brackets the current match, so a result computed for one ``@to`` is not
reused for another ``@to`` elsewhere in the buffer.
"""

import threading
import time
from collections import Counter
from dataclasses import dataclass
from typing import Any, Optional

from inkline.domain.protocols import Clock
from inkline.domain.types import CompletionResult, PatternType
from inkline.logger import get_logger

logger = get_logger("completion.cache")

CacheKey = tuple[PatternType, str]


@dataclass(slots=True)
class CacheEntry:
    result: CompletionResult
    created_at: float
    expires_at: float
    span_start: int
    span_end: int


class CompletionCache:
    """TTL-based, size-bounded cache of completion results.

    At capacity, expired entries are evicted first, otherwise the oldest one.

    Example:
        >>> cache = CompletionCache(ttl=5.0, size_limit=100)
        >>> cache.set((PatternType.DATE, "to"), result, 10, 13)
        >>> cache.get((PatternType.DATE, "to"), 10, 13) is not None
        True
    """

    def __init__(self, ttl: float = 5.0, size_limit: int = 100, clock: Clock = time.time) -> None:
        """Initialize the cache.

        Args:
            ttl: Time-to-live in seconds
            size_limit: Maximum number of entries
            clock: Wall-clock source, injectable for tests
        """
        self._data: dict[CacheKey, CacheEntry] = {}
        self._lock = threading.RLock()
        self.ttl = ttl
        self.size_limit = size_limit
        self._clock = clock
        self._hits = 0
        self._misses = 0

    def _is_expired(self, entry: CacheEntry, now: Optional[float] = None) -> bool:
        return (self._clock() if now is None else now) >= entry.expires_at

    def _cleanup_expired(self) -> int:
        """Remove expired entries; returns how many were removed."""
        now = self._clock()
        expired_keys = [key for key, entry in self._data.items() if self._is_expired(entry, now)]
        for key in expired_keys:
            del self._data[key]
        return len(expired_keys)

    def get(self, key: CacheKey, match_start: int, cursor: int) -> Optional[CompletionResult]:
        """
        Get a cached result valid for ``[match_start, cursor)``.

        Returns:
            The cached result re-anchored to the current span, or None
        """
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                self._misses += 1
                return None
            if self._is_expired(entry):
                del self._data[key]
                self._misses += 1
                return None
            if not (entry.span_start <= match_start and cursor <= entry.span_end):
                self._misses += 1
                return None
            self._hits += 1
            return entry.result.anchored(match_start, cursor)

    def set(self, key: CacheKey, result: CompletionResult, span_start: int, span_end: int) -> None:
        """Store a result for the span it was computed on."""
        with self._lock:
            if key not in self._data and len(self._data) >= self.size_limit:
                self._evict()
            now = self._clock()
            self._data[key] = CacheEntry(
                result=result,
                created_at=now,
                expires_at=now + self.ttl,
                span_start=span_start,
                span_end=span_end,
            )

    def _evict(self) -> None:
        removed = self._cleanup_expired()
        if removed:
            logger.debug(f"Evicted {removed} expired completion(s)")
            return
        oldest = min(self._data, key=lambda k: self._data[k].created_at)
        del self._data[oldest]
        logger.debug(f"Evicted oldest completion {oldest}")

    def clear(self, key: Optional[CacheKey] = None) -> None:
        """Clear one key, or everything (including hit/miss counters)."""
        with self._lock:
            if key is None:
                self._data.clear()
                self._hits = 0
                self._misses = 0
            else:
                self._data.pop(key, None)

    def stats(self) -> dict[str, Any]:
        """Size, hit/miss counts, per-type breakdown and expired count."""
        with self._lock:
            now = self._clock()
            return {
                "size": len(self._data),
                "size_limit": self.size_limit,
                "hits": self._hits,
                "misses": self._misses,
                "by_type": dict(Counter(key[0].value for key in self._data)),
                "expired": sum(1 for entry in self._data.values() if self._is_expired(entry, now)),
            }

    def __len__(self) -> int:
        with self._lock:
            self._cleanup_expired()
            return len(self._data)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            entry = self._data.get(key)
            return entry is not None and not self._is_expired(entry)
