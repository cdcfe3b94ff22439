"""Result dataclasses produced by the metric engine.

``MetricCompute`` is the unclamped output of a single algorithm call and is
what the memoization cache stores.  ``MetricResult`` is the immutable
envelope handed to callers; ``SummaryResult`` is its payload-free view.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

__all__ = ["MetricCompute", "MetricResult", "PerfSample", "SummaryResult"]


@dataclass(frozen=True, slots=True)
class MetricCompute:
    """Raw output of one algorithm invocation on one pair.

    Attributes:
        similarity: Algorithm score before clamping.  Callers never see this
            value directly; the engine clamps it into [0.0, 1.0].
        raw: Algorithm-specific explanation (distances, counts, magnitudes).
            Entries describing one input end in ``_a`` or ``_b``.
    """

    similarity: float
    raw: Mapping[str, int | float]

    def __post_init__(self) -> None:
        # Read-only view so a cached payload can be shared between results.
        object.__setattr__(self, "raw", MappingProxyType(dict(self.raw)))


@dataclass(frozen=True, slots=True)
class PerfSample:
    """Timing (and optionally memory) measured around one computation.

    Attributes:
        time_ms: Wall-clock duration in milliseconds.
        mem_bytes: Change in traced memory, or None when ``tracemalloc`` is
            not tracing.
    """

    time_ms: float
    mem_bytes: int | None = None


@dataclass(frozen=True, slots=True)
class SummaryResult:
    """Payload-free view of a result: source, target and score only."""

    source: str
    target: str
    score: float


@dataclass(frozen=True, slots=True)
class MetricResult:
    """Result of comparing one pair of strings.

    Attributes:
        metric: Registry name of the algorithm that produced the score.
        a: Left input as supplied by the caller.
        b: Right input as supplied by the caller.
        similarity: Score clamped to [0.0, 1.0].  1.0 is identical.
        raw: Algorithm-specific payload, or None in summary mode.  ``*_a`` and
            ``*_b`` entries always refer to ``a`` and ``b`` as supplied, even
            when a symmetric algorithm ran on the swapped pair.
        perf: Timing sample when the run requested one.
    """

    metric: str
    a: str
    b: str
    similarity: float
    raw: Mapping[str, int | float] | None = None
    perf: PerfSample | None = None

    def to_summary(self) -> SummaryResult:
        """Return the ``{source, target, score}`` view of this result."""
        return SummaryResult(source=self.a, target=self.b, score=self.similarity)
