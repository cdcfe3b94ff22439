"""Set-overlap family: Dice-Sørensen, Jaccard, Cosine and q-gram similarity.

All four build hash containers (sets of grams/characters or term-frequency
maps) borrowed from the scratch pool and are O(m + n).  Intersections
iterate the smaller container and probe the larger one.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from strcompare.options import MetricOptions
from strcompare.pool import ScratchPool
from strcompare.registry import register
from strcompare.result import MetricCompute

__all__ = ["cosine", "dice", "jaccard", "qgram"]


def _grams(text: str, q: int) -> Iterable[str]:
    return (text[i : i + q] for i in range(len(text) - q + 1))


def _intersection_size(set_a: set[str], set_b: set[str]) -> int:
    small, large = (set_a, set_b) if len(set_a) <= len(set_b) else (set_b, set_a)
    return sum(1 for item in small if item in large)


@register("dice", symmetric=True)
def dice(a: str, b: str, options: MetricOptions, pool: ScratchPool) -> MetricCompute:
    """Dice-Sørensen coefficient over character bigram sets.

    Strings shorter than two characters have no bigrams: they score 1.0
    against an identical string and 0.0 otherwise.
    """
    m, n = len(a), len(b)
    if m < 2 or n < 2:
        return MetricCompute(1.0 if a == b else 0.0, {"intersection": 0, "size": 0})

    with pool.borrow("set", m - 1, n - 1) as (set_a, set_b):
        set_a.update(_grams(a, 2))
        set_b.update(_grams(b, 2))
        intersection = _intersection_size(set_a, set_b)
        size = len(set_a) + len(set_b)

    return MetricCompute(2 * intersection / size, {"intersection": intersection, "size": size})


@register("jaccard", symmetric=True)
def jaccard(a: str, b: str, options: MetricOptions, pool: ScratchPool) -> MetricCompute:
    """Jaccard index over character sets; an empty union scores 1.0."""
    with pool.borrow("set", len(a), len(b)) as (set_a, set_b):
        set_a.update(a)
        set_b.update(b)
        intersection = _intersection_size(set_a, set_b)
        union = len(set_a) + len(set_b) - intersection

    similarity = 1.0 if union == 0 else intersection / union
    return MetricCompute(similarity, {"intersection": intersection, "union": union})


@register("cosine", symmetric=True)
def cosine(a: str, b: str, options: MetricOptions, pool: ScratchPool) -> MetricCompute:
    """Cosine similarity of term-frequency vectors split on ``options.delimiter``.

    The dot product only visits terms of ``a``; each magnitude is summed over
    its own map, so no union-of-terms set is ever built.  A zero magnitude
    scores 0.0.
    """
    delimiter = options.delimiter
    terms_a = a.split(delimiter)
    terms_b = b.split(delimiter)

    with pool.borrow("map", len(terms_a), len(terms_b)) as (freq_a, freq_b):
        for term in terms_a:
            freq_a[term] = freq_a.get(term, 0) + 1
        for term in terms_b:
            freq_b[term] = freq_b.get(term, 0) + 1

        dot = 0
        sq_a = 0
        for term, count in freq_a.items():
            dot += count * freq_b.get(term, 0)
            sq_a += count * count
        sq_b = sum(count * count for count in freq_b.values())

    if sq_a == 0 or sq_b == 0:
        similarity = 0.0
    else:
        # sqrt of the product keeps identical vectors at exactly 1.0
        similarity = dot / math.sqrt(sq_a * sq_b)
    return MetricCompute(
        similarity,
        {
            "dot_product": dot,
            "magnitude_a": math.sqrt(sq_a),
            "magnitude_b": math.sqrt(sq_b),
        },
    )


@register("qgram", symmetric=True)
def qgram(a: str, b: str, options: MetricOptions, pool: ScratchPool) -> MetricCompute:
    """q-gram overlap: shared gram count / size of the larger gram set."""
    q = options.q
    with pool.borrow("set", len(a), len(b)) as (set_a, set_b):
        set_a.update(_grams(a, q))
        set_b.update(_grams(b, q))
        intersection = _intersection_size(set_a, set_b)
        size = max(len(set_a), len(set_b))

    if size == 0:
        # Both strings are shorter than q.
        similarity = 1.0 if a == b else 0.0
    else:
        similarity = intersection / size
    return MetricCompute(similarity, {"intersection": intersection, "size": size})
