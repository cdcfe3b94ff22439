"""Longest Common Subsequence similarity.

Two rolling rows from the scratch pool; characters are compared as integer
code points so the inner loop never slices the strings.
"""

from __future__ import annotations

from strcompare.options import MetricOptions
from strcompare.pool import ScratchPool
from strcompare.registry import register
from strcompare.result import MetricCompute

__all__ = ["lcs", "lcs_length"]


def lcs_length(a: str, b: str, pool: ScratchPool) -> int:
    """Length of the longest common subsequence of ``a`` and ``b``."""
    if len(a) > len(b):
        a, b = b, a
    m = len(a)
    if m == 0:
        return 0
    codes_a = [ord(ch) for ch in a]

    with pool.borrow("int32", m + 1, m + 1) as (prev, curr):
        prev[: m + 1] = 0
        for ch in b:
            cb = ord(ch)
            curr[0] = 0
            for i in range(1, m + 1):
                if codes_a[i - 1] == cb:
                    curr[i] = prev[i - 1] + 1
                else:
                    curr[i] = max(prev[i], curr[i - 1])
            prev, curr = curr, prev
        return int(prev[m])


@register("lcs", symmetric=True)
def lcs(a: str, b: str, options: MetricOptions, pool: ScratchPool) -> MetricCompute:
    """LCS similarity: subsequence length / longer length."""
    max_len = max(len(a), len(b))
    length = lcs_length(a, b, pool)
    similarity = 1.0 if max_len == 0 else length / max_len
    return MetricCompute(similarity, {"lcs": length, "max_len": max_len})
