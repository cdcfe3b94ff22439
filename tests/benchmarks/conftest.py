"""Deterministic string generators for performance benchmarks.

All generators produce fixed, reproducible strings. No random values.
Three tiers: short (10 chars), medium (100 chars) and long (1000 chars).
"""

from __future__ import annotations

import pytest

ALPHABET = "abcdefghijklmnopqrstuvwxyz"


def generate_text(length: int, offset: int = 0) -> str:
    """Cycle through the alphabet starting at ``offset``."""
    return "".join(ALPHABET[(i + offset) % len(ALPHABET)] for i in range(length))


def _make_similar(length: int) -> tuple[str, str]:
    """Same text with every tenth character changed."""
    left = generate_text(length)
    right = "".join("#" if i % 10 == 0 else ch for i, ch in enumerate(left))
    return left, right


@pytest.fixture
def pair_short() -> tuple[str, str]:
    return _make_similar(10)


@pytest.fixture
def pair_medium() -> tuple[str, str]:
    return _make_similar(100)


@pytest.fixture
def pair_long() -> tuple[str, str]:
    return _make_similar(1000)


@pytest.fixture
def batch_targets() -> list[str]:
    """Fifty medium-length targets for one-to-many benchmarks."""
    return [generate_text(100, offset) for offset in range(50)]
