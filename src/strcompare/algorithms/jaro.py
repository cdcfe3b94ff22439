"""Jaro-Winkler similarity.

Characters match when equal and no further apart than the match window
``max(0, max(m, n) // 2 - 1)``; each character of ``b`` matches at most once,
greedily from the left.  Transpositions are half the number of matched
characters that appear in a different order.  The Winkler boost rewards a
shared prefix of up to four characters with a scaling factor of 0.1.

The greedy matching makes the score order-dependent in rare cases, so the
metric is registered as non-symmetric.
"""

from __future__ import annotations

from strcompare.options import MetricOptions
from strcompare.pool import ScratchPool
from strcompare.registry import register
from strcompare.result import MetricCompute

__all__ = ["jaro_winkler"]

PREFIX_LIMIT = 4
PREFIX_SCALE = 0.1


def _common_prefix(a: str, b: str) -> int:
    prefix = 0
    for x, y in zip(a[:PREFIX_LIMIT], b[:PREFIX_LIMIT]):
        if x != y:
            break
        prefix += 1
    return prefix


@register("jaro_winkler", symmetric=False)
def jaro_winkler(
    a: str, b: str, options: MetricOptions, pool: ScratchPool
) -> MetricCompute:
    """Jaro-Winkler similarity with a prefix boost capped at four characters."""
    m, n = len(a), len(b)
    window = max(0, max(m, n) // 2 - 1)

    if a == b:
        return MetricCompute(
            1.0,
            {
                "match_window": window,
                "matches": m,
                "transpositions": 0,
                "jaro": 1.0,
                "prefix": min(PREFIX_LIMIT, m),
            },
        )

    matches = 0
    half_transpositions = 0
    with pool.borrow("uint16", m, n) as (flags_a, flags_b):
        flags_a[:m] = 0
        flags_b[:n] = 0
        for i in range(m):
            lo = max(0, i - window)
            hi = min(i + window + 1, n)
            for j in range(lo, hi):
                if not flags_b[j] and a[i] == b[j]:
                    flags_a[i] = 1
                    flags_b[j] = 1
                    matches += 1
                    break

        if matches:
            k = 0
            for i in range(m):
                if flags_a[i]:
                    while not flags_b[k]:
                        k += 1
                    if a[i] != b[k]:
                        half_transpositions += 1
                    k += 1

    if not matches:
        return MetricCompute(
            0.0,
            {
                "match_window": window,
                "matches": 0,
                "transpositions": 0,
                "jaro": 0.0,
                "prefix": 0,
            },
        )

    transpositions = half_transpositions / 2
    jaro = (matches / m + matches / n + (matches - transpositions) / matches) / 3
    prefix = _common_prefix(a, b)
    similarity = jaro + prefix * PREFIX_SCALE * (1.0 - jaro)
    return MetricCompute(
        similarity,
        {
            "match_window": window,
            "matches": matches,
            "transpositions": transpositions,
            "jaro": jaro,
            "prefix": prefix,
        },
    )
