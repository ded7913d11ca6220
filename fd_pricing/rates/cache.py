"""Read-through cache for fetched rate matrices."""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Optional

import structlog

from ..config.defaults import CacheParams, DefaultConfig
from ..errors import InputError, RateSourceError
from .models import RateSlab
from .parsers import parse_rate_matrix

logger = structlog.get_logger(__name__)

RateMatrix = tuple[RateSlab, ...]


@dataclass
class _CacheEntry:
    matrix: RateMatrix
    stored_at: float


class RateMatrixCache:
    """
    Thread-safe get-or-fetch cache of immutable rate matrices.

    Entries expire `ttl_seconds` after they are stored. When full, the
    oldest stored entry is evicted. Resolution never depends on whether a
    matrix came from the cache or from a fresh fetch.
    """

    def __init__(self, ttl_seconds: float = 3600.0, max_entries: int = 1000,
                 clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[Hashable, _CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()
        self.logger = logger

        self.hits = 0
        self.misses = 0
        self.evictions = 0

    @classmethod
    def from_config(cls, config: DefaultConfig) -> "RateMatrixCache":
        params: CacheParams = config.cache
        return cls(ttl_seconds=params.ttl_seconds, max_entries=params.max_entries)

    def get(self, key: Hashable) -> Optional[RateMatrix]:
        """Cached matrix for key, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.stored_at >= self.ttl_seconds:
                del self._entries[key]
                return None
            return entry.matrix

    def get_or_fetch(self, key: Hashable, fetcher: Callable[[], Any]) -> RateMatrix:
        """
        Return the cached matrix for key, fetching and storing it on a miss.

        The fetcher may return RateSlab values or raw catalog rows/payloads;
        raw data is parsed before it is stored.

        Raises:
            RateSourceError: If the fetcher fails; nothing is cached
            MalformedRateRowError: If fetched rows cannot be parsed
        """
        matrix = self.get(key)
        if matrix is not None:
            with self._lock:
                self.hits += 1
            self.logger.debug("Rate matrix cache hit", key=key)
            return matrix

        with self._lock:
            self.misses += 1
        self.logger.info("Rate matrix cache miss, fetching", key=key)

        try:
            fetched = fetcher()
        except Exception as e:
            self.logger.error("Rate matrix fetch failed", key=key, error=str(e))
            raise RateSourceError(f"Failed to fetch rate matrix for {key!r}: {e}", source_key=key)

        if fetched is None:
            raise RateSourceError(f"Rate source returned no matrix for {key!r}", source_key=key)

        try:
            matrix = parse_rate_matrix(fetched)
        except InputError:
            self.logger.error("Fetched rate matrix is malformed", key=key)
            raise

        self.put(key, matrix)
        return matrix

    def put(self, key: Hashable, matrix: RateMatrix) -> None:
        """Store a matrix, evicting the oldest entries beyond max_entries."""
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = _CacheEntry(matrix=tuple(matrix), stored_at=self._clock())
            while len(self._entries) > self.max_entries:
                evicted_key, _ = self._entries.popitem(last=False)
                self.evictions += 1
                self.logger.debug("Evicted rate matrix", key=evicted_key)

    def invalidate(self, key: Hashable) -> bool:
        """Drop one entry; returns whether it was present."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> dict[str, Any]:
        """Current cache counters."""
        with self._lock:
            return {
                "size": len(self._entries),
                "hits": self.hits,
                "misses": self.misses,
                "evictions": self.evictions,
                "ttl_seconds": self.ttl_seconds,
                "max_entries": self.max_entries,
            }
