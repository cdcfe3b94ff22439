"""Exception hierarchy for strcompare.

Every error raised by the engine derives from ``StrCompareError`` and from
the builtin it refines (``ValueError``, ``KeyError`` or ``RuntimeError``), so
callers can catch either the library base class or the builtin they already
expect.

All failures are synchronous and local.  Algorithms are deterministic pure
functions, so nothing here is ever retried.
"""

from __future__ import annotations

__all__ = [
    "DuplicateMetricError",
    "InvalidModeError",
    "LengthMismatchError",
    "NotRunError",
    "PoolError",
    "StrCompareError",
    "UnknownMetricError",
]


class StrCompareError(Exception):
    """Base class for all strcompare errors."""


class InvalidModeError(StrCompareError, ValueError):
    """Raised when ``MetricOptions`` or ``Metric.run()`` gets an unrecognized mode."""


class LengthMismatchError(StrCompareError, ValueError):
    """Raised on pairwise cardinality mismatch or strict Hamming length mismatch."""


class NotRunError(StrCompareError, RuntimeError):
    """Raised when results are requested before ``run()`` was called."""


class UnknownMetricError(StrCompareError, KeyError):
    """Raised when a metric name is not present in the registry."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class DuplicateMetricError(StrCompareError, ValueError):
    """Raised when registering a name that is already taken without ``update=True``."""


class PoolError(StrCompareError, ValueError):
    """Raised when a buffer released to the scratch pool has the wrong shape."""
