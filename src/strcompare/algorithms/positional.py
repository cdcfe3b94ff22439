"""Hamming similarity: position-wise inequality count."""

from __future__ import annotations

from strcompare.errors import LengthMismatchError
from strcompare.options import MetricOptions
from strcompare.pool import ScratchPool
from strcompare.registry import register
from strcompare.result import MetricCompute

__all__ = ["hamming"]


@register("hamming", symmetric=True)
def hamming(a: str, b: str, options: MetricOptions, pool: ScratchPool) -> MetricCompute:
    """Hamming similarity: 1 - mismatched positions / length.

    Strings of unequal length are right-padded with ``options.pad`` up to the
    longer length.  Without a pad character the lengths must match.

    Raises:
        LengthMismatchError: If lengths differ and ``options.pad`` is None.
    """
    if len(a) != len(b):
        if options.pad is None:
            msg = (
                f"hamming requires strings of equal length without a pad "
                f"character, got {len(a)} and {len(b)}"
            )
            raise LengthMismatchError(msg)
        length = max(len(a), len(b))
        a = a.ljust(length, options.pad)
        b = b.ljust(length, options.pad)

    length = len(a)
    dist = sum(1 for x, y in zip(a, b, strict=True) if x != y)
    similarity = 1.0 if length == 0 else 1.0 - dist / length
    return MetricCompute(similarity, {"dist": dist, "length": length})
