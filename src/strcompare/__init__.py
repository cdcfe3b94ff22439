"""strcompare - similarity scoring for strings through one uniform metric contract."""

from __future__ import annotations

import logging

from strcompare import algorithms  # noqa: F401  (registers the built-in metrics)
from strcompare.api import (
    batch_sorted,
    batch_test,
    batch_test_async,
    clear_caches,
    closest,
    compare,
    compare_async,
    furthest,
    match,
    pairs,
    pairs_async,
    test,
)
from strcompare.cache import MetricCache
from strcompare.errors import (
    DuplicateMetricError,
    InvalidModeError,
    LengthMismatchError,
    NotRunError,
    PoolError,
    StrCompareError,
    UnknownMetricError,
)
from strcompare.metric import Metric
from strcompare.options import MetricMode, MetricOptions
from strcompare.pool import ScratchPool
from strcompare.registry import MetricAlgorithm, MetricRegistry, default_registry, register
from strcompare.result import MetricResult, PerfSample, SummaryResult
from strcompare.scorer import consistency_score, similarity_matrix

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "DuplicateMetricError",
    "InvalidModeError",
    "LengthMismatchError",
    "Metric",
    "MetricAlgorithm",
    "MetricCache",
    "MetricMode",
    "MetricOptions",
    "MetricRegistry",
    "MetricResult",
    "NotRunError",
    "PerfSample",
    "PoolError",
    "ScratchPool",
    "StrCompareError",
    "SummaryResult",
    "UnknownMetricError",
    "batch_sorted",
    "batch_test",
    "batch_test_async",
    "clear_caches",
    "closest",
    "compare",
    "compare_async",
    "consistency_score",
    "default_registry",
    "furthest",
    "match",
    "pairs",
    "pairs_async",
    "register",
    "similarity_matrix",
    "test",
]
