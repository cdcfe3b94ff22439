"""Shared fixtures: isolated cache, pool and registry per test."""

from __future__ import annotations

import pytest

from strcompare.cache import MetricCache
from strcompare.options import MetricOptions
from strcompare.pool import ScratchPool


@pytest.fixture
def pool() -> ScratchPool:
    """A fresh scratch pool with empty free lists."""
    return ScratchPool()


@pytest.fixture
def cache() -> MetricCache:
    """A fresh, unbounded metric cache."""
    return MetricCache()


@pytest.fixture
def options() -> MetricOptions:
    return MetricOptions()
