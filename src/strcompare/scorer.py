"""Similarity matrices and consistency scoring over a set of strings.

The consistency score quantifies how stable a text generator is when called
several times.  It penalizes both low average similarity (the generator
produces different outputs) and high variance (the generator is erratic).

Formula:
    pairwise = [similarity(strings[i], strings[j]) for all i < j]
    score = clip(mean(pairwise) - std(pairwise), 0.0, 1.0)

This means:
- Identical strings: mean=1.0, std=0.0 -> score=1.0
- Consistently mediocre: mean=0.6, std=0.0 -> score=0.6
- Erratic (high variance): mean=0.6, std=0.4 -> score=0.2
"""

from __future__ import annotations

import itertools
from collections.abc import Sequence

import numpy as np

from strcompare.metric import Metric
from strcompare.options import MetricMode, MetricOptions
from strcompare.registry import MetricAlgorithm

__all__ = ["consistency_score", "similarity_matrix"]


def similarity_matrix(
    strings: Sequence[str],
    metric: str | MetricAlgorithm = "levenshtein",
    options: MetricOptions | None = None,
) -> np.ndarray:
    """Return the ``(N, N)`` matrix of pairwise similarities.

    Only the upper triangle is computed; the lower triangle mirrors it and
    the diagonal is 1.0.  For non-symmetric algorithms entry ``[i, j]`` with
    ``i < j`` is ``similarity(strings[i], strings[j])``.

    Args:
        strings: Strings to compare.  May be empty.
        metric:  Registry name or ``MetricAlgorithm``.
        options: Algorithm tunables.

    Returns:
        A float64 array of shape ``(len(strings), len(strings))``.
    """
    n = len(strings)
    matrix = np.eye(n, dtype=np.float64)
    index_pairs = list(itertools.combinations(range(n), 2))
    if not index_pairs:
        return matrix

    left = [strings[i] for i, _ in index_pairs]
    right = [strings[j] for _, j in index_pairs]
    runner = Metric(metric, left, right, options)
    runner.run(MetricMode.PAIRWISE)
    results = runner.get_results()
    assert isinstance(results, list)

    for (i, j), result in zip(index_pairs, results, strict=True):
        matrix[i, j] = matrix[j, i] = result.similarity
    return matrix


def consistency_score(
    strings: Sequence[str],
    metric: str | MetricAlgorithm = "levenshtein",
    options: MetricOptions | None = None,
) -> float:
    """Return how consistent a set of strings is, as a float in [0.0, 1.0].

    Returns 1.0 for empty and single-string inputs (no pairs to compare).
    """
    n = len(strings)
    if n <= 1:
        return 1.0

    matrix = similarity_matrix(strings, metric, options)
    scores = matrix[np.triu_indices(n, k=1)]
    mean = float(np.mean(scores))
    std = float(np.std(scores))  # population std (ddof=0)
    return float(np.clip(mean - std, 0.0, 1.0))
