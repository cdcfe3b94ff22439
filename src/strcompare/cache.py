"""MetricCache: memoization of algorithm output keyed by metric and exact input pair.

Keys are deterministic tuples ``(metric, a, b, options_token)``.  The engine
uses the ``MetricAlgorithm`` record itself as ``metric``, so a replaced
registration, or a second record reusing a built-in name, never reads
another algorithm's entries.  Tuples hash with Python's built-in (fast,
non-cryptographic) string hash and compare by value on lookup, so a hash
collision can cost a probe but never returns the wrong entry.  For
algorithms declared symmetric the two strings are put in canonical order
first (shorter first, ties broken lexicographically), so both argument
orders share one entry.

Values are unclamped ``MetricCompute`` payloads.  Presentation flags (raw
toggle, timing, clamping) are applied by the engine after lookup and never
require invalidation.

There is no TTL and, by default, no eviction: the store grows until
``clear()`` is called.  Passing ``max_size`` switches to an LRU store that
drops the least-recently-used entry silently once full.

Example::

    from strcompare.cache import MetricCache

    cache = MetricCache()
    key = cache.key("jaccard", "abc", "ab", (), symmetric=True)
    assert key == cache.key("jaccard", "ab", "abc", (), symmetric=True)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Hashable

from cachetools import Cache, LRUCache

from strcompare.result import MetricCompute

__all__ = ["CacheKey", "MetricCache", "canonical_pair", "default_cache"]

logger = logging.getLogger(__name__)

CacheKey = tuple[Hashable, str, str, tuple[Hashable, ...]]


def canonical_pair(a: str, b: str) -> tuple[str, str]:
    """Order two strings shorter-first, ties broken lexicographically."""
    if (len(a), a) <= (len(b), b):
        return a, b
    return b, a


class MetricCache:
    """Mapping from composite metric keys to computed payloads.

    Each instance owns its own store; ``default_cache()`` returns the
    process-wide instance the engine uses unless another one is injected.

    Args:
        max_size: ``None`` (default) for an unbounded store with no eviction.
            A positive integer selects LRU eviction at that many entries.
    """

    def __init__(self, max_size: int | None = None) -> None:
        if max_size is not None and max_size < 1:
            msg = f"max_size must be >= 1 or None, got {max_size}"
            raise ValueError(msg)
        self._store: Cache[CacheKey, MetricCompute] = (
            Cache(maxsize=math.inf) if max_size is None else LRUCache(maxsize=max_size)
        )
        self.hits = 0
        self.misses = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> float:
        """Maximum number of entries (``math.inf`` when unbounded)."""
        return self._store.maxsize

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    # ------------------------------------------------------------------
    # Key derivation and access
    # ------------------------------------------------------------------

    @staticmethod
    def key(
        metric: Hashable,
        a: str,
        b: str,
        options_token: tuple[Hashable, ...],
        symmetric: bool = False,
    ) -> CacheKey:
        """Build the composite key for one computation.

        Args:
            metric: Algorithm identity.  The engine passes the
                ``MetricAlgorithm`` record; any hashable works.
            a: Left string, exactly as passed to the algorithm.
            b: Right string, exactly as passed to the algorithm.
            options_token: Algorithm tunables (``MetricOptions.cache_token()``).
            symmetric: When True, ``(a, b)`` and ``(b, a)`` map to one key.
        """
        if symmetric:
            a, b = canonical_pair(a, b)
        return (metric, a, b, options_token)

    def get(self, key: CacheKey) -> MetricCompute | None:
        """Return the cached payload for ``key`` or None, counting hits and misses."""
        value = self._store.get(key)
        if value is None:
            self.misses += 1
        else:
            self.hits += 1
        return value

    def set(self, key: CacheKey, value: MetricCompute) -> None:
        """Store ``value`` under ``key``, replacing any previous entry."""
        self._store[key] = value

    def discard_metric(self, metric: Hashable) -> int:
        """Drop every entry computed by ``metric`` and return how many went."""
        stale = [key for key in self._store if key[0] == metric]
        for key in stale:
            del self._store[key]
        if stale:
            logger.debug(
                "dropped %d cached entries for %r",
                len(stale),
                getattr(metric, "name", metric),
            )
        return len(stale)

    def clear(self) -> None:
        """Remove every entry and reset the hit/miss counters."""
        size = len(self._store)
        self._store.clear()
        self.hits = 0
        self.misses = 0
        logger.debug("metric cache cleared (%d entries dropped)", size)


_DEFAULT_CACHE = MetricCache()


def default_cache() -> MetricCache:
    """Return the process-wide metric cache."""
    return _DEFAULT_CACHE
