"""Public API functions for strcompare.

Each call creates a fresh ``Metric`` so no result state is shared between
calls; only the process-wide cache and scratch pool persist, and
``clear_caches`` resets both.

Functions fall into three groups:

- one pair: ``compare`` (score only) and ``test`` (full envelope);
- one source against many targets: ``batch_test``, ``batch_sorted``,
  ``match``, ``closest``, ``furthest``;
- index-aligned lists: ``pairs``.

``compare_async``, ``batch_test_async`` and ``pairs_async`` are cooperative
mirrors that yield to the event loop between pair computations.

Every function accepts an optional ``normalizer`` (see
``strcompare.protocols.Normalizer``) applied to all inputs before the engine
sees them; result envelopes still report the caller's original strings.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from typing import Literal

from strcompare.cache import default_cache
from strcompare.metric import Metric, coerce_input
from strcompare.options import MetricMode, MetricOptions
from strcompare.pool import default_pool
from strcompare.protocols import Normalizer
from strcompare.registry import MetricAlgorithm
from strcompare.result import MetricResult, SummaryResult

__all__ = [
    "batch_sorted",
    "batch_test",
    "batch_test_async",
    "clear_caches",
    "closest",
    "compare",
    "compare_async",
    "furthest",
    "match",
    "pairs",
    "pairs_async",
    "test",
]

DEFAULT_METRIC = "levenshtein"


def _require_items(values: tuple[str, ...], name: str) -> tuple[str, ...]:
    if not values:
        msg = f"{name} must contain at least one string"
        raise ValueError(msg)
    return values


def _build_metric(
    metric: str | MetricAlgorithm,
    a: str | Sequence[str],
    b: str | Sequence[str],
    options: MetricOptions | None,
    normalizer: Normalizer | None,
    flags: str,
) -> Metric:
    """Coerce and guard both inputs, normalize them and wrap them in a ``Metric``."""
    orig_a = _require_items(coerce_input(a), "a")
    orig_b = _require_items(coerce_input(b), "b")
    if normalizer is None:
        return Metric(metric, orig_a, orig_b, options)
    norm_a = tuple(normalizer.normalize(text, flags) for text in orig_a)
    norm_b = tuple(normalizer.normalize(text, flags) for text in orig_b)
    return Metric(metric, norm_a, norm_b, options).set_original(orig_a, orig_b)


def _with_raw(options: MetricOptions | None, raw: bool) -> MetricOptions:
    base = options if options is not None else MetricOptions()
    if base.raw == raw:
        return base
    return dataclasses.replace(base, raw=raw)


def _present(
    results: list[MetricResult], raw: bool
) -> list[MetricResult] | list[SummaryResult]:
    if raw:
        return results
    return [result.to_summary() for result in results]


def _as_list(results: MetricResult | list[MetricResult]) -> list[MetricResult]:
    return results if isinstance(results, list) else [results]


# ----------------------------------------------------------------------
# One pair
# ----------------------------------------------------------------------


def compare(
    a: str,
    b: str,
    metric: str | MetricAlgorithm = DEFAULT_METRIC,
    options: MetricOptions | None = None,
    normalizer: Normalizer | None = None,
    flags: str = "",
) -> float:
    """Return the similarity of two strings as a float in [0.0, 1.0].

    Args:
        a:          First string.
        b:          Second string.
        metric:     Registry name or ``MetricAlgorithm``.  Defaults to
                    ``"levenshtein"``.
        options:    Algorithm tunables.  Defaults to ``MetricOptions()``.
        normalizer: Optional normalizer applied to both strings first.
        flags:      Flag string forwarded to ``normalizer.normalize``.

    Returns:
        1.0 for identical strings, 0.0 for completely dissimilar ones.
    """
    return test(a, b, metric, options, normalizer, flags).similarity


async def compare_async(
    a: str,
    b: str,
    metric: str | MetricAlgorithm = DEFAULT_METRIC,
    options: MetricOptions | None = None,
    normalizer: Normalizer | None = None,
    flags: str = "",
) -> float:
    """Async mirror of ``compare``."""
    runner = _build_metric(metric, a, b, options, normalizer, flags)
    await runner.run_async(MetricMode.SINGLE)
    result = runner.get_results()
    assert isinstance(result, MetricResult)
    return result.similarity


def test(
    a: str,
    b: str,
    metric: str | MetricAlgorithm = DEFAULT_METRIC,
    options: MetricOptions | None = None,
    normalizer: Normalizer | None = None,
    flags: str = "",
    raw: bool = True,
) -> MetricResult | SummaryResult:
    """Compare two strings and return the full result envelope.

    Args:
        a, b, metric, options, normalizer, flags: As for ``compare``.
        raw: When False, return a ``SummaryResult`` (source, target, score)
            instead of a ``MetricResult`` with the algorithm payload.

    Returns:
        A ``MetricResult`` or, with ``raw=False``, a ``SummaryResult``.
    """
    runner = _build_metric(metric, a, b, _with_raw(options, raw), normalizer, flags)
    runner.run(MetricMode.SINGLE)
    result = runner.get_results()
    assert isinstance(result, MetricResult)
    return result if raw else result.to_summary()


# ----------------------------------------------------------------------
# One source against many targets
# ----------------------------------------------------------------------


def batch_test(
    source: str,
    targets: Sequence[str],
    metric: str | MetricAlgorithm = DEFAULT_METRIC,
    options: MetricOptions | None = None,
    normalizer: Normalizer | None = None,
    flags: str = "",
    raw: bool = True,
) -> list[MetricResult] | list[SummaryResult]:
    """Compare ``source`` against every target, in target order.

    Raises:
        ValueError: If ``targets`` is empty.
    """
    runner = _build_metric(
        metric, source, targets, _with_raw(options, raw), normalizer, flags
    )
    runner.run(MetricMode.BATCH)
    return _present(_as_list(runner.get_results()), raw)


async def batch_test_async(
    source: str,
    targets: Sequence[str],
    metric: str | MetricAlgorithm = DEFAULT_METRIC,
    options: MetricOptions | None = None,
    normalizer: Normalizer | None = None,
    flags: str = "",
    raw: bool = True,
) -> list[MetricResult] | list[SummaryResult]:
    """Async mirror of ``batch_test``; results keep target order."""
    runner = _build_metric(
        metric, source, targets, _with_raw(options, raw), normalizer, flags
    )
    await runner.run_async(MetricMode.BATCH)
    return _present(_as_list(runner.get_results()), raw)


def batch_sorted(
    source: str,
    targets: Sequence[str],
    metric: str | MetricAlgorithm = DEFAULT_METRIC,
    options: MetricOptions | None = None,
    normalizer: Normalizer | None = None,
    flags: str = "",
    order: Literal["asc", "desc"] = "desc",
) -> list[SummaryResult]:
    """Compare ``source`` against every target and sort by score.

    The sort is stable: targets with equal scores keep their input order.

    Args:
        order: ``"desc"`` (most similar first, default) or ``"asc"``.

    Raises:
        ValueError: If ``order`` is not ``"asc"`` or ``"desc"``, or
            ``targets`` is empty.
    """
    if order not in ("asc", "desc"):
        msg = f"order must be 'asc' or 'desc', got {order!r}"
        raise ValueError(msg)
    results = batch_test(source, targets, metric, options, normalizer, flags, raw=False)
    return sorted(results, key=lambda r: r.score, reverse=order == "desc")


def match(
    source: str,
    targets: Sequence[str],
    threshold: float,
    metric: str | MetricAlgorithm = DEFAULT_METRIC,
    options: MetricOptions | None = None,
    normalizer: Normalizer | None = None,
    flags: str = "",
) -> list[SummaryResult]:
    """Return targets scoring at or above ``threshold``, most similar first."""
    ranked = batch_sorted(source, targets, metric, options, normalizer, flags)
    return [result for result in ranked if result.score >= threshold]


def closest(
    source: str,
    targets: Sequence[str],
    metric: str | MetricAlgorithm = DEFAULT_METRIC,
    options: MetricOptions | None = None,
    normalizer: Normalizer | None = None,
    flags: str = "",
    n: int = 1,
) -> list[SummaryResult]:
    """Return the ``n`` most similar targets, best first."""
    return batch_sorted(source, targets, metric, options, normalizer, flags)[:n]


def furthest(
    source: str,
    targets: Sequence[str],
    metric: str | MetricAlgorithm = DEFAULT_METRIC,
    options: MetricOptions | None = None,
    normalizer: Normalizer | None = None,
    flags: str = "",
    n: int = 1,
) -> list[SummaryResult]:
    """Return the ``n`` least similar targets, worst first."""
    return batch_sorted(
        source, targets, metric, options, normalizer, flags, order="asc"
    )[:n]


# ----------------------------------------------------------------------
# Index-aligned lists
# ----------------------------------------------------------------------


def pairs(
    a: Sequence[str],
    b: Sequence[str],
    metric: str | MetricAlgorithm = DEFAULT_METRIC,
    options: MetricOptions | None = None,
    normalizer: Normalizer | None = None,
    flags: str = "",
    raw: bool = True,
) -> list[MetricResult] | list[SummaryResult]:
    """Compare ``a[i]`` with ``b[i]`` for every index.

    Raises:
        ValueError: If either list is empty.
        LengthMismatchError: If the lists differ in length.
    """
    runner = _build_metric(metric, a, b, _with_raw(options, raw), normalizer, flags)
    runner.run(MetricMode.PAIRWISE)
    return _present(_as_list(runner.get_results()), raw)


async def pairs_async(
    a: Sequence[str],
    b: Sequence[str],
    metric: str | MetricAlgorithm = DEFAULT_METRIC,
    options: MetricOptions | None = None,
    normalizer: Normalizer | None = None,
    flags: str = "",
    raw: bool = True,
) -> list[MetricResult] | list[SummaryResult]:
    """Async mirror of ``pairs``."""
    runner = _build_metric(metric, a, b, _with_raw(options, raw), normalizer, flags)
    await runner.run_async(MetricMode.PAIRWISE)
    return _present(_as_list(runner.get_results()), raw)


def clear_caches() -> None:
    """Empty the process-wide metric cache and scratch pool."""
    default_cache().clear()
    default_pool().clear()
