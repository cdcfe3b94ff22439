"""Edit-distance family: Levenshtein and Damerau-Levenshtein (optimal string alignment).

Both use rolling DP rows drawn from the scratch pool.  The shorter string
drives the row dimension, so space is O(min(m, n)) and time O(m * n).

Similarity is ``1 - dist / max(m, n)``; two empty strings score 1.0.
"""

from __future__ import annotations

import numpy as np

from strcompare.options import MetricOptions
from strcompare.pool import ScratchPool
from strcompare.registry import register
from strcompare.result import MetricCompute

__all__ = ["damerau", "damerau_distance", "levenshtein", "levenshtein_distance"]


def levenshtein_distance(a: str, b: str, pool: ScratchPool) -> int:
    """Compute the Levenshtein distance with two rolling rows.

    Args:
        a: First string.
        b: Second string.
        pool: Scratch pool supplying the DP rows.

    Returns:
        The minimum number of single-character insertions, deletions or
        substitutions turning ``a`` into ``b``.
    """
    if a == b:
        return 0
    # Shorter string on the row axis
    if len(a) > len(b):
        a, b = b, a
    m, n = len(a), len(b)
    if m == 0:
        return n

    with pool.borrow("int64", m + 1, m + 1) as (prev, curr):
        prev[: m + 1] = np.arange(m + 1)
        for j in range(1, n + 1):
            curr[0] = j
            cb = b[j - 1]
            for i in range(1, m + 1):
                cost = 0 if a[i - 1] == cb else 1
                curr[i] = min(
                    curr[i - 1] + 1,  # insertion
                    prev[i] + 1,  # deletion
                    prev[i - 1] + cost,  # substitution
                )
            prev, curr = curr, prev
        return int(prev[m])


def damerau_distance(a: str, b: str, pool: ScratchPool) -> int:
    """Compute the optimal-string-alignment distance with three rolling rows.

    Like Levenshtein, plus a transposition of two adjacent characters counts
    as one edit: recognized when ``a[i-1] == b[j-2]`` and ``a[i-2] == b[j-1]``.
    """
    if a == b:
        return 0
    if len(a) > len(b):
        a, b = b, a
    m, n = len(a), len(b)
    if m == 0:
        return n

    with pool.borrow("int64", m + 1, m + 1, m + 1) as (older, prev, curr):
        prev[: m + 1] = np.arange(m + 1)
        for j in range(1, n + 1):
            curr[0] = j
            cb = b[j - 1]
            for i in range(1, m + 1):
                ca = a[i - 1]
                cost = 0 if ca == cb else 1
                value = min(curr[i - 1] + 1, prev[i] + 1, prev[i - 1] + cost)
                if i > 1 and j > 1 and ca == b[j - 2] and cb == a[i - 2]:
                    value = min(value, older[i - 2] + cost)
                curr[i] = value
            older, prev, curr = prev, curr, older
        return int(prev[m])


def _edit_similarity(dist: int, a: str, b: str) -> MetricCompute:
    max_len = max(len(a), len(b))
    similarity = 1.0 if max_len == 0 else 1.0 - dist / max_len
    return MetricCompute(similarity, {"dist": dist, "max_len": max_len})


@register("levenshtein", symmetric=True)
def levenshtein(a: str, b: str, options: MetricOptions, pool: ScratchPool) -> MetricCompute:
    """Levenshtein similarity: 1 - edit distance / longer length."""
    return _edit_similarity(levenshtein_distance(a, b, pool), a, b)


@register("damerau", symmetric=True)
def damerau(a: str, b: str, options: MetricOptions, pool: ScratchPool) -> MetricCompute:
    """Damerau-Levenshtein similarity with adjacent transpositions as single edits."""
    return _edit_similarity(damerau_distance(a, b, pool), a, b)
