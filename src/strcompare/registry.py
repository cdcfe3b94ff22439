"""Metric registry: name -> algorithm lookup.

An algorithm is a plain record (``MetricAlgorithm``) holding a compute
function and a couple of capability flags, with no subclassing.  Algorithm
modules register themselves at import time with the ``register`` decorator::

    from strcompare.registry import register

    @register("exact", symmetric=True)
    def exact(a, b, options, pool):
        same = a == b
        return MetricCompute(1.0 if same else 0.0, {"equal": int(same)})

Symmetry is a declaration, and the engine trusts it: for symmetric
algorithms both argument orders are computed in one canonical order and
share one cache entry.  ``check_symmetry`` lets tests (or a cautious caller)
verify a declaration against sample pairs.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from strcompare.cache import default_cache
from strcompare.errors import DuplicateMetricError, UnknownMetricError
from strcompare.options import MetricOptions
from strcompare.pool import ScratchPool, default_pool
from strcompare.result import MetricCompute

__all__ = [
    "ComputeFn",
    "MetricAlgorithm",
    "MetricRegistry",
    "default_registry",
    "register",
]

logger = logging.getLogger(__name__)

ComputeFn = Callable[[str, str, MetricOptions, ScratchPool], MetricCompute]


@dataclass(frozen=True, slots=True)
class MetricAlgorithm:
    """One similarity algorithm behind the shared metric contract.

    Attributes:
        name: Registry identifier reported in result envelopes.  Cache keys
            use the whole record, so two records sharing a name never share
            cached payloads.
        compute: ``(a, b, options, pool) -> MetricCompute`` for exactly one
            pair.  Must be a pure function of its inputs; scratch state comes
            from ``pool`` and goes back before returning.
        symmetric: True when ``compute(a, b)`` and ``compute(b, a)`` always
            score the same.
        description: One-line human readable summary.
    """

    name: str
    compute: ComputeFn
    symmetric: bool = False
    description: str = ""


class MetricRegistry:
    """String-keyed store of ``MetricAlgorithm`` records."""

    def __init__(self) -> None:
        self._entries: dict[str, MetricAlgorithm] = {}

    def add(self, name: str, algorithm: MetricAlgorithm, update: bool = False) -> None:
        """Register ``algorithm`` under ``name``.

        Replacing an entry with ``update=True`` drops the replaced
        algorithm's payloads from the process-wide cache.

        Raises:
            TypeError: If ``algorithm`` is not a ``MetricAlgorithm``.
            DuplicateMetricError: If ``name`` is taken and ``update`` is False.
        """
        if not isinstance(algorithm, MetricAlgorithm):
            msg = f"expected a MetricAlgorithm, got {type(algorithm).__name__}"
            raise TypeError(msg)
        if not update and name in self._entries:
            msg = f"metric {name!r} already exists; pass update=True to overwrite"
            raise DuplicateMetricError(msg)
        previous = self._entries.get(name)
        self._entries[name] = algorithm
        if previous is not None and previous != algorithm:
            default_cache().discard_metric(previous)
        logger.debug("registered metric %r (symmetric=%s)", name, algorithm.symmetric)

    def remove(self, name: str) -> None:
        """Remove ``name`` if present."""
        self._entries.pop(name, None)

    def has(self, name: str) -> bool:
        return name in self._entries

    def list(self) -> list[str]:
        """Registered names in registration order."""
        return list(self._entries)

    def get(self, name: str) -> MetricAlgorithm:
        """Return the algorithm registered under ``name``.

        Raises:
            UnknownMetricError: If nothing is registered under ``name``.
        """
        try:
            return self._entries[name]
        except KeyError:
            msg = f"metric {name!r} is not registered; available: {sorted(self._entries)}"
            raise UnknownMetricError(msg) from None

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def check_symmetry(
        self,
        name: str,
        pairs: Iterable[tuple[str, str]],
        options: MetricOptions | None = None,
        pool: ScratchPool | None = None,
    ) -> list[tuple[str, str]]:
        """Return the pairs whose score changes when the arguments are swapped.

        Calls the compute function directly, bypassing the cache and the
        engine's canonical ordering, so the raw algorithm is what gets tested.
        An empty list means no counterexample was found among ``pairs``.
        """
        algorithm = self.get(name)
        opts = options if options is not None else MetricOptions()
        scratch = pool if pool is not None else default_pool()
        failures: list[tuple[str, str]] = []
        for a, b in pairs:
            forward = algorithm.compute(a, b, opts, scratch).similarity
            backward = algorithm.compute(b, a, opts, scratch).similarity
            if not math.isclose(forward, backward, rel_tol=0.0, abs_tol=1e-12):
                failures.append((a, b))
        return failures


_DEFAULT_REGISTRY = MetricRegistry()


def default_registry() -> MetricRegistry:
    """Return the process-wide registry populated by ``strcompare.algorithms``."""
    return _DEFAULT_REGISTRY


def register(
    name: str,
    *,
    symmetric: bool,
    description: str = "",
    registry: MetricRegistry | None = None,
) -> Callable[[ComputeFn], ComputeFn]:
    """Decorator registering a compute function as a ``MetricAlgorithm``.

    The decorated function is returned unchanged so it stays directly
    callable (and testable) as a plain function.
    """

    def decorator(fn: ComputeFn) -> ComputeFn:
        target = registry if registry is not None else _DEFAULT_REGISTRY
        if not description:
            # First docstring line doubles as the description.
            lines = (fn.__doc__ or "").strip().splitlines()
            summary = lines[0] if lines else ""
        else:
            summary = description
        target.add(
            name,
            MetricAlgorithm(
                name=name, compute=fn, symmetric=symmetric, description=summary
            ),
        )
        return fn

    return decorator
