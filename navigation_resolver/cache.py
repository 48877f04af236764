"""
Time-bound resolution cache.

Keyed by ``scope:path`` using the raw, unsplit request path. ``None``
results are cached like any other so persistently invalid paths do not
hit the store again within the TTL. Writes are last-write-wins.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

from .models import ResolutionResult

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300.0


class _NotCached:
    """Sentinel type for a cache miss, distinct from a cached ``None``."""

    _instance: Optional["_NotCached"] = None

    def __new__(cls) -> "_NotCached":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_CACHED"

    def __bool__(self) -> bool:
        return False


NOT_CACHED = _NotCached()

CacheLookup = Union[ResolutionResult, None, _NotCached]


@dataclass(frozen=True)
class CacheEntry:
    result: Optional[ResolutionResult]
    timestamp: float


class ResolutionCache:
    """
    In-process cache of resolution results with a fixed TTL.

    An entry written at time T is valid while ``now - T < ttl_seconds``.
    A TTL of zero makes every read a miss.

    Attributes:
        ttl_seconds: Entry lifetime.
        hits: Number of valid reads.
        misses: Number of reads that found nothing or a stale entry.

    Example:
        >>> cache = ResolutionCache(ttl_seconds=60)
        >>> cache.get("org-a", "/wm/customers") is NOT_CACHED
        True
        >>> cache.put("org-a", "/wm/customers", None)
        >>> cache.get("org-a", "/wm/customers") is None
        True
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must be >= 0, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock or time.monotonic
        self._entries: Dict[str, CacheEntry] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(scope: str, path: str) -> str:
        return f"{scope}:{path}"

    def get(self, scope: str, path: str) -> CacheLookup:
        """Return the cached result, ``None`` for a cached miss, or ``NOT_CACHED``."""
        entry = self._entries.get(self.make_key(scope, path))
        if entry is None or self._clock() - entry.timestamp >= self.ttl_seconds:
            self.misses += 1
            return NOT_CACHED
        self.hits += 1
        return entry.result

    def put(self, scope: str, path: str, result: Optional[ResolutionResult]) -> None:
        self._entries[self.make_key(scope, path)] = CacheEntry(
            result=result, timestamp=self._clock()
        )

    def clear(self) -> None:
        """Drop every entry."""
        dropped = len(self._entries)
        self._entries.clear()
        logger.info(f"Cleared resolution cache ({dropped} entries)")

    def __len__(self) -> int:
        return len(self._entries)
