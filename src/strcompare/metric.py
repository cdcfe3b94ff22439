"""Metric: the shared execution contract wrapped around every algorithm.

A ``Metric`` binds one registered algorithm to two inputs and runs it in one
of the execution modes described by ``MetricMode``:

- SINGLE:   one result for ``a[0]`` vs ``b[0]``.
- BATCH:    ``len(a) * len(b)`` results, row-major (outer loop over ``a``).
- PAIRWISE: ``len(a)`` results, ``a[i]`` vs ``b[i]``; unequal lengths raise
            ``LengthMismatchError``.
- DEFAULT:  SINGLE when both sides hold one string, else BATCH.

For every pair the contract (not the algorithm) handles canonical ordering
of symmetric algorithms, the memoization lookup/store, optional timing,
clamping into [0, 1] and envelope construction.  Algorithms only ever see
one pair at a time.

``run_async`` is a cooperative mirror of ``run``: it yields to the event loop
between pair computations, never inside one, and produces results in the
same order.

Example::

    from strcompare.metric import Metric

    metric = Metric("levenshtein", "kitten", ["sitting", "mitten"])
    metric.run()
    for result in metric.get_results():
        print(result.b, round(result.similarity, 4))
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import time
import tracemalloc
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import TypeAlias

from strcompare.cache import CacheKey, MetricCache, canonical_pair, default_cache
from strcompare.errors import InvalidModeError, LengthMismatchError, NotRunError
from strcompare.options import MetricMode, MetricOptions
from strcompare.pool import ScratchPool, default_pool
from strcompare.registry import MetricAlgorithm, MetricRegistry, default_registry
from strcompare.result import MetricCompute, MetricResult, PerfSample

__all__ = ["Metric", "MetricInput", "clamp", "coerce_input", "mirror_sides"]

logger = logging.getLogger(__name__)

MetricInput: TypeAlias = str | Sequence[str]


def clamp(value: float) -> float:
    """Clamp ``value`` into [0.0, 1.0]."""
    return max(0.0, min(1.0, float(value)))


def coerce_input(value: MetricInput | object) -> tuple[str, ...]:
    """Coerce a scalar or sequence input into an ordered tuple of strings.

    Raises:
        TypeError: If the input, or any item of it, is ``bytes``.  Binary
            data must be decoded by the caller.
    """
    if isinstance(value, bytes | bytearray | memoryview):
        msg = f"expected str or a sequence of str, got {type(value).__name__}; decode it first"
        raise TypeError(msg)
    if isinstance(value, str) or not isinstance(value, Iterable):
        return (str(value),)
    items = tuple(value)
    for item in items:
        if isinstance(item, bytes | bytearray):
            msg = f"expected str items, got {type(item).__name__}; decode it first"
            raise TypeError(msg)
    return tuple(str(item) for item in items)


def mirror_sides(raw: Mapping[str, int | float]) -> Mapping[str, int | float]:
    """Swap the ``*_a`` and ``*_b`` entries of a payload.

    Symmetric algorithms run in canonical order, so their side-specific
    entries describe the canonical pair.  The engine mirrors them back when
    it swapped the caller's arguments.
    """
    mirrored: dict[str, int | float] = {}
    for name, value in raw.items():
        if name.endswith("_a"):
            mirrored[name[:-2] + "_b"] = value
        elif name.endswith("_b"):
            mirrored[name[:-2] + "_a"] = value
        else:
            mirrored[name] = value
    return MappingProxyType(mirrored)


class Metric:
    """One algorithm applied to two input sequences.

    Args:
        metric: Registry name (e.g. ``"levenshtein"``) or a ``MetricAlgorithm``.
        a: Left input, a string or a sequence of strings.
        b: Right input, a string or a sequence of strings.
        options: Tunables and flags.  Defaults to ``MetricOptions()``.
        registry: Registry used to resolve ``metric`` by name.  Defaults to
            the process-wide registry.
        cache: Memoization cache.  Defaults to the process-wide cache.
        pool: Scratch pool handed to the algorithm.  Defaults to the
            process-wide pool.

    Both inputs are assumed non-empty; guarding against empty sequences is
    the caller's job (see ``strcompare.api``).
    """

    def __init__(
        self,
        metric: str | MetricAlgorithm,
        a: MetricInput,
        b: MetricInput,
        options: MetricOptions | None = None,
        *,
        registry: MetricRegistry | None = None,
        cache: MetricCache | None = None,
        pool: ScratchPool | None = None,
    ) -> None:
        if isinstance(metric, MetricAlgorithm):
            self._algorithm = metric
        else:
            reg = registry if registry is not None else default_registry()
            self._algorithm = reg.get(metric)
        self._a = coerce_input(a)
        self._b = coerce_input(b)
        self._orig_a: tuple[str, ...] | None = None
        self._orig_b: tuple[str, ...] | None = None
        self._options = options if options is not None else MetricOptions()
        self._cache = cache if cache is not None else default_cache()
        self._pool = pool if pool is not None else default_pool()
        self._results: MetricResult | list[MetricResult] | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def metric_name(self) -> str:
        return self._algorithm.name

    @property
    def a(self) -> tuple[str, ...]:
        return self._a

    @property
    def b(self) -> tuple[str, ...]:
        return self._b

    @property
    def options(self) -> MetricOptions:
        return self._options

    # ------------------------------------------------------------------
    # Capability queries
    # ------------------------------------------------------------------

    def is_batch(self) -> bool:
        """True when either side holds more than one string."""
        return len(self._a) > 1 or len(self._b) > 1

    def is_single(self) -> bool:
        """True when both sides hold exactly one string."""
        return not self.is_batch()

    def is_pairwise(self, safe: bool = True) -> bool:
        """True when both sides have the same number of strings.

        Args:
            safe: When False, a mismatch raises ``LengthMismatchError``
                instead of returning False.
        """
        if len(self._a) == len(self._b):
            return True
        if safe:
            return False
        msg = (
            f"pairwise mode requires inputs of equal length, "
            f"got {len(self._a)} and {len(self._b)}"
        )
        raise LengthMismatchError(msg)

    def is_symmetric(self) -> bool:
        return self._algorithm.symmetric

    # ------------------------------------------------------------------
    # Original inputs
    # ------------------------------------------------------------------

    def set_original(
        self, a: MetricInput | None = None, b: MetricInput | None = None
    ) -> Metric:
        """Report ``a`` / ``b`` in result envelopes instead of the computed inputs.

        Used when the computed inputs are normalized copies of what the
        caller supplied.  Each original must have the same cardinality as
        the input it stands in for.
        """
        if a is not None:
            self._orig_a = self._check_original(coerce_input(a), self._a, "a")
        if b is not None:
            self._orig_b = self._check_original(coerce_input(b), self._b, "b")
        return self

    @staticmethod
    def _check_original(
        original: tuple[str, ...], computed: tuple[str, ...], side: str
    ) -> tuple[str, ...]:
        if len(original) != len(computed):
            msg = (
                f"original {side} has {len(original)} entries, "
                f"computed {side} has {len(computed)}"
            )
            raise LengthMismatchError(msg)
        return original

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(self, mode: MetricMode | str | None = None) -> None:
        """Compute results in ``mode``, discarding any previous results first.

        Args:
            mode: Execution mode; ``None`` uses ``options.mode``.

        Raises:
            InvalidModeError: If ``mode`` is not a ``MetricMode`` value.
            LengthMismatchError: In PAIRWISE mode with unequal input lengths.
        """
        self.clear()
        resolved = self._resolve_mode(mode)
        if resolved is MetricMode.SINGLE:
            self._results = self._run_pair(0, 0)
            return
        self._results = [self._run_pair(i, j) for i, j in self._pair_indices(resolved)]

    async def run_async(self, mode: MetricMode | str | None = None) -> None:
        """Cooperative mirror of ``run``; yields to the loop between pairs."""
        self.clear()
        resolved = self._resolve_mode(mode)
        if resolved is MetricMode.SINGLE:
            await asyncio.sleep(0)
            self._results = self._run_pair(0, 0)
            return
        results: list[MetricResult] = []
        for i, j in self._pair_indices(resolved):
            await asyncio.sleep(0)
            results.append(self._run_pair(i, j))
        self._results = results

    def get_results(self) -> MetricResult | list[MetricResult]:
        """Return the result (SINGLE) or ordered results (BATCH, PAIRWISE).

        Raises:
            NotRunError: If ``run()`` has not completed since the last ``clear()``.
        """
        if self._results is None:
            msg = "run() must be called before get_results()"
            raise NotRunError(msg)
        return self._results

    def clear(self) -> None:
        """Discard stored results."""
        self._results = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve_mode(self, mode: MetricMode | str | None) -> MetricMode:
        requested = mode if mode is not None else self._options.mode
        try:
            resolved = MetricMode(requested)
        except ValueError:
            msg = f"unsupported mode {requested!r}; expected one of {[m.value for m in MetricMode]}"
            raise InvalidModeError(msg) from None
        if resolved is MetricMode.DEFAULT:
            resolved = MetricMode.SINGLE if self.is_single() else MetricMode.BATCH
        logger.debug(
            "running %s in %s mode (%d x %d)",
            self._algorithm.name,
            resolved,
            len(self._a),
            len(self._b),
        )
        return resolved

    def _pair_indices(self, mode: MetricMode) -> Iterable[tuple[int, int]]:
        if mode is MetricMode.PAIRWISE:
            self.is_pairwise(safe=False)
            return [(i, i) for i in range(len(self._a))]
        return itertools.product(range(len(self._a)), range(len(self._b)))

    def _run_pair(self, i: int, j: int) -> MetricResult:
        a = self._a[i]
        b = self._b[j]
        payload, perf, swapped = self._compute(a, b)
        raw = None
        if self._options.raw:
            raw = mirror_sides(payload.raw) if swapped else payload.raw
        return MetricResult(
            metric=self._algorithm.name,
            a=self._orig_a[i] if self._orig_a is not None else a,
            b=self._orig_b[j] if self._orig_b is not None else b,
            similarity=clamp(payload.similarity),
            raw=raw,
            perf=perf,
        )

    def _compute(
        self, a: str, b: str
    ) -> tuple[MetricCompute, PerfSample | None, bool]:
        algorithm = self._algorithm
        swapped = False
        if algorithm.symmetric:
            ordered = canonical_pair(a, b)
            swapped = ordered != (a, b)
            a, b = ordered
        # The record, not its name, identifies the algorithm in the cache.
        key = MetricCache.key(algorithm, a, b, self._options.cache_token())

        if not self._options.perf:
            return self._lookup_or_compute(key, a, b), None, swapped

        tracing = tracemalloc.is_tracing()
        mem_before = tracemalloc.get_traced_memory()[0] if tracing else 0
        t0 = time.perf_counter()
        payload = self._lookup_or_compute(key, a, b)
        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        mem_delta = tracemalloc.get_traced_memory()[0] - mem_before if tracing else None
        return payload, PerfSample(time_ms=elapsed_ms, mem_bytes=mem_delta), swapped

    def _lookup_or_compute(
        self, key: CacheKey, a: str, b: str
    ) -> MetricCompute:
        payload = self._cache.get(key)
        if payload is None:
            payload = self._algorithm.compute(a, b, self._options, self._pool)
            self._cache.set(key, payload)
        return payload
