"""MetricOptions and MetricMode for metric execution configuration.

MetricOptions is a frozen (immutable) dataclass holding both algorithm
tunables (alignment weights, term delimiter, padding policy, q-gram size) and
cross-cutting flags (execution mode, timing capture, raw payload toggle).
Only the tunables take part in memoization keys; see ``cache_token``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

from strcompare.errors import InvalidModeError

__all__ = ["MetricMode", "MetricOptions"]


class MetricMode(StrEnum):
    """How a ``Metric`` iterates over its two input sequences.

    - DEFAULT:  SINGLE when both sides hold exactly one string, else BATCH.
    - SINGLE:   Only the first element of each side is compared.
    - BATCH:    Full cross product, row-major (outer loop over ``a``).
    - PAIRWISE: Index-aligned, ``a[i]`` against ``b[i]``; lengths must match.
    """

    DEFAULT = auto()
    SINGLE = auto()
    BATCH = auto()
    PAIRWISE = auto()


@dataclass(frozen=True, slots=True)
class MetricOptions:
    """Immutable options for a metric run.

    Attributes:
        match: Alignment score for equal characters.  ``None`` selects the
            algorithm default (1 for Needleman-Wunsch, 2 for Smith-Waterman).
        mismatch: Alignment score for unequal characters (default -1).
        gap: Alignment gap penalty.  ``None`` selects the algorithm default
            (-1 for Needleman-Wunsch, -2 for Smith-Waterman).
        delimiter: Term delimiter for cosine similarity.  Default ``" "``.
        pad: Single padding character for Hamming distance.  ``None`` means
            strict mode: unequal lengths raise ``LengthMismatchError``.
        q: Gram size for q-gram similarity (>= 1).  Default 2.
        mode: Execution mode used when ``run()`` is called without one.
        perf: When True, each result carries a ``PerfSample``.
        raw: When False, results drop the algorithm-specific payload.
    """

    match: int | None = None
    mismatch: int = -1
    gap: int | None = None
    delimiter: str = " "
    pad: str | None = None
    q: int = 2
    mode: MetricMode = MetricMode.DEFAULT
    perf: bool = False
    raw: bool = True

    def __post_init__(self) -> None:
        if self.match is not None and self.match <= 0:
            msg = f"match must be > 0, got {self.match}"
            raise ValueError(msg)
        if not self.delimiter:
            msg = "delimiter must be a non-empty string"
            raise ValueError(msg)
        if self.pad is not None and len(self.pad) != 1:
            msg = f"pad must be a single character, got {self.pad!r}"
            raise ValueError(msg)
        if self.q < 1:
            msg = f"q must be >= 1, got {self.q}"
            raise ValueError(msg)
        # Accept plain strings ("batch") as well as enum members.
        try:
            mode = MetricMode(self.mode)
        except ValueError:
            msg = f"mode must be one of {[m.value for m in MetricMode]}, got {self.mode!r}"
            raise InvalidModeError(msg) from None
        object.__setattr__(self, "mode", mode)

    def cache_token(self) -> tuple[object, ...]:
        """Return the tunables that can change a computed payload.

        Presentation flags (``mode``, ``perf``, ``raw``) are excluded so that
        toggling them never invalidates memoized results.
        """
        return (self.match, self.mismatch, self.gap, self.delimiter, self.pad, self.q)
