"""ScratchPool: typed, reusable scratch buffers for dynamic-programming rows.

Algorithms check buffers out with ``acquire`` (or the ``borrow`` context
manager) and hand them back with ``release``.  Released buffers go onto a
free list keyed by ``(kind, bucket)`` and serve any later request of equal or
smaller capacity, so tight DP loops stop allocating after warm-up.

Buffer kinds:

- Numeric rows (``int32``, ``int64``, ``uint16``, ``float64``): 1-D numpy
  arrays whose length is the request rounded up to a power-of-two bucket
  (minimum 16).  Contents are *undefined* on acquire; the caller must write
  every slot it reads.
- Hash containers (``set``, ``map``): an empty ``set`` / ``dict``.

The pool grows without bound and has no internal locking.  ``release``
validates the buffer's shape, not its provenance.

Example::

    from strcompare.pool import ScratchPool

    pool = ScratchPool()
    with pool.borrow("int64", 8, 8) as (prev, curr):
        prev[:8] = range(8)
    # both rows are back on the free list here
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import numpy as np

from strcompare.errors import PoolError

__all__ = ["PoolStats", "ScratchPool", "default_pool"]

logger = logging.getLogger(__name__)

NUMERIC_KINDS: dict[str, type[np.generic]] = {
    "int32": np.int32,
    "int64": np.int64,
    "uint16": np.uint16,
    "float64": np.float64,
}
HASH_KINDS: dict[str, type] = {"set": set, "map": dict}

MIN_BUCKET = 16


def _bucket_for(capacity: int) -> int:
    """Smallest power-of-two bucket (>= MIN_BUCKET) holding ``capacity`` slots."""
    if capacity <= MIN_BUCKET:
        return MIN_BUCKET
    return 1 << (capacity - 1).bit_length()


def _bucket_of(length: int) -> int:
    """Largest power-of-two bucket a buffer of ``length`` slots can serve."""
    return 1 << (length.bit_length() - 1)


@dataclass(frozen=True, slots=True)
class PoolStats:
    """Counters describing pool activity since construction or ``clear()``.

    Attributes:
        allocated: Buffers created because no free buffer fitted.
        reused: Acquisitions served from a free list.
        released: Buffers returned via ``release``.
        free: Buffers currently sitting on free lists.
    """

    allocated: int
    reused: int
    released: int
    free: int


class ScratchPool:
    """Free-list allocator for numeric rows and hash containers.

    Each instance owns its free lists; ``default_pool()`` returns the
    process-wide instance the engine uses unless another one is injected.
    """

    def __init__(self) -> None:
        self._free: dict[tuple[str, int], list[Any]] = {}
        self._allocated = 0
        self._reused = 0
        self._released = 0

    # ------------------------------------------------------------------
    # Acquire / release
    # ------------------------------------------------------------------

    def acquire(self, kind: str, capacity: int) -> Any:
        """Return a buffer of ``kind`` with at least ``capacity`` usable slots.

        Args:
            kind: One of ``int32``, ``int64``, ``uint16``, ``float64``,
                ``set`` or ``map``.
            capacity: Minimum number of slots the caller will use (>= 0).
                Ignored for hash kinds other than as a sizing hint.

        Returns:
            A numpy array with ``len >= capacity`` (uninitialized contents)
            or an empty ``set`` / ``dict``.

        Raises:
            PoolError: If ``kind`` is unknown or ``capacity`` is negative.
        """
        if capacity < 0:
            msg = f"capacity must be >= 0, got {capacity}"
            raise PoolError(msg)

        if kind in HASH_KINDS:
            free = self._free.get((kind, 0))
            if free:
                self._reused += 1
                container = free.pop()
                container.clear()
                return container
            self._allocated += 1
            return HASH_KINDS[kind]()

        if kind not in NUMERIC_KINDS:
            msg = f"unknown buffer kind {kind!r}"
            raise PoolError(msg)

        wanted = _bucket_for(capacity)
        # Smallest free bucket that is large enough.
        candidates = sorted(
            bucket
            for (k, bucket), free in self._free.items()
            if k == kind and bucket >= wanted and free
        )
        if candidates:
            self._reused += 1
            return self._free[(kind, candidates[0])].pop()

        self._allocated += 1
        logger.debug("allocating %s row of %d slots", kind, wanted)
        return np.empty(wanted, dtype=NUMERIC_KINDS[kind])

    def acquire_many(self, kind: str, capacities: Sequence[int]) -> list[Any]:
        """Acquire one buffer per entry in ``capacities``, in order."""
        return [self.acquire(kind, capacity) for capacity in capacities]

    def release(self, kind: str, buffer: Any, used_size: int) -> None:
        """Return ``buffer`` to the free list for ``kind``.

        Args:
            kind: The kind the buffer was acquired as.
            buffer: The buffer itself.
            used_size: Number of slots the caller used; must not exceed the
                buffer length for numeric kinds.

        Raises:
            PoolError: If the buffer does not match ``kind`` (container type,
                dtype, dimensionality, length) or is already on a free list.
        """
        if used_size < 0:
            msg = f"used_size must be >= 0, got {used_size}"
            raise PoolError(msg)

        if kind in HASH_KINDS:
            if type(buffer) is not HASH_KINDS[kind]:
                msg = f"expected a {HASH_KINDS[kind].__name__} for kind {kind!r}, got {type(buffer).__name__}"
                raise PoolError(msg)
            buffer.clear()
            self._push((kind, 0), buffer)
            return

        if kind not in NUMERIC_KINDS:
            msg = f"unknown buffer kind {kind!r}"
            raise PoolError(msg)
        if not isinstance(buffer, np.ndarray) or buffer.ndim != 1:
            msg = f"expected a 1-D numpy array for kind {kind!r}"
            raise PoolError(msg)
        if buffer.dtype != NUMERIC_KINDS[kind]:
            msg = f"expected dtype {kind}, got {buffer.dtype}"
            raise PoolError(msg)
        if used_size > len(buffer):
            msg = f"used_size {used_size} exceeds buffer length {len(buffer)}"
            raise PoolError(msg)
        if len(buffer) < MIN_BUCKET:
            msg = f"buffer length {len(buffer)} is below the minimum bucket {MIN_BUCKET}"
            raise PoolError(msg)

        self._push((kind, _bucket_of(len(buffer))), buffer)

    @contextmanager
    def borrow(self, kind: str, *capacities: int) -> Iterator[tuple[Any, ...]]:
        """Scoped acquisition: yield buffers and release them on every exit path.

        Args:
            kind: Buffer kind for all requested buffers.
            *capacities: One capacity per buffer.

        Yields:
            Tuple of buffers, one per capacity, in order.
        """
        buffers = self.acquire_many(kind, capacities)
        try:
            yield tuple(buffers)
        finally:
            for buffer, capacity in zip(buffers, capacities, strict=True):
                self.release(kind, buffer, capacity)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Drop every free buffer and reset the counters."""
        self._free.clear()
        self._allocated = 0
        self._reused = 0
        self._released = 0
        logger.debug("scratch pool cleared")

    def stats(self) -> PoolStats:
        """Return a snapshot of the pool counters."""
        return PoolStats(
            allocated=self._allocated,
            reused=self._reused,
            released=self._released,
            free=sum(len(free) for free in self._free.values()),
        )

    def _push(self, key: tuple[str, int], buffer: Any) -> None:
        free = self._free.setdefault(key, [])
        if any(item is buffer for item in free):
            msg = f"buffer of kind {key[0]!r} released twice"
            raise PoolError(msg)
        free.append(buffer)
        self._released += 1


_DEFAULT_POOL = ScratchPool()


def default_pool() -> ScratchPool:
    """Return the process-wide scratch pool."""
    return _DEFAULT_POOL
