"""Alignment family: Needleman-Wunsch (global) and Smith-Waterman (local).

Both score a match/mismatch/gap scheme taken from ``MetricOptions`` and keep
only two DP rows from the scratch pool.

- Needleman-Wunsch boundary cells hold the cumulative gap cost; the raw
  score is the bottom-right cell and similarity is
  ``raw / (max(m, n) * match)``.  Negative raw scores clamp to 0 later.
- Smith-Waterman floors every cell at 0 and tracks the best cell seen
  anywhere in the matrix.  Normalization divides by ``min(m, n) * match``
  because a local alignment can at most cover the shorter string.
"""

from __future__ import annotations

import numpy as np

from strcompare.options import MetricOptions
from strcompare.pool import ScratchPool
from strcompare.registry import register
from strcompare.result import MetricCompute

__all__ = ["needleman_wunsch", "smith_waterman"]

NW_DEFAULT_MATCH = 1
NW_DEFAULT_GAP = -1
SW_DEFAULT_MATCH = 2
SW_DEFAULT_GAP = -2


@register("needleman_wunsch", symmetric=True)
def needleman_wunsch(
    a: str, b: str, options: MetricOptions, pool: ScratchPool
) -> MetricCompute:
    """Needleman-Wunsch global alignment score normalized by the longer length."""
    match = options.match if options.match is not None else NW_DEFAULT_MATCH
    gap = options.gap if options.gap is not None else NW_DEFAULT_GAP
    mismatch = options.mismatch

    if len(a) > len(b):
        a, b = b, a
    m, n = len(a), len(b)
    if n == 0:
        return MetricCompute(1.0, {"score": 0, "denom": 0})

    with pool.borrow("int64", m + 1, m + 1) as (prev, curr):
        prev[: m + 1] = np.arange(m + 1) * gap
        for j in range(1, n + 1):
            curr[0] = j * gap
            cb = b[j - 1]
            for i in range(1, m + 1):
                step = match if a[i - 1] == cb else mismatch
                curr[i] = max(
                    prev[i - 1] + step,  # diagonal
                    prev[i] + gap,  # up
                    curr[i - 1] + gap,  # left
                )
            prev, curr = curr, prev
        score = int(prev[m])

    denom = n * match
    return MetricCompute(score / denom, {"score": score, "denom": denom})


@register("smith_waterman", symmetric=True)
def smith_waterman(
    a: str, b: str, options: MetricOptions, pool: ScratchPool
) -> MetricCompute:
    """Smith-Waterman best local alignment normalized by the shorter length."""
    match = options.match if options.match is not None else SW_DEFAULT_MATCH
    gap = options.gap if options.gap is not None else SW_DEFAULT_GAP
    mismatch = options.mismatch

    if len(a) > len(b):
        a, b = b, a
    m, n = len(a), len(b)
    if m == 0:
        # Nothing to align locally: identical only when both are empty.
        return MetricCompute(1.0 if n == 0 else 0.0, {"score": 0, "denom": 0})

    best = 0
    with pool.borrow("int64", m + 1, m + 1) as (prev, curr):
        prev[: m + 1] = 0
        for j in range(1, n + 1):
            curr[0] = 0
            cb = b[j - 1]
            for i in range(1, m + 1):
                step = match if a[i - 1] == cb else mismatch
                value = max(
                    0,
                    prev[i - 1] + step,
                    prev[i] + gap,
                    curr[i - 1] + gap,
                )
                curr[i] = value
                if value > best:
                    best = int(value)
            prev, curr = curr, prev

    denom = m * match
    return MetricCompute(best / denom, {"score": best, "denom": denom})
