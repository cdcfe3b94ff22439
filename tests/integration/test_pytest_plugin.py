"""Integration tests for the strcompare pytest plugin.

These tests verify that the assert_similar fixture is auto-discovered via the
pytest11 entry point and behaves correctly.

NOTE: These tests require strcompare to be installed (even in editable mode
via ``pip install -e .``). The pytest11 entry point is only registered at
install time -- running from a raw source checkout without installing will not
discover the fixture.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Any

import pytest

from strcompare import MetricOptions


def test_fixture_passes_similar_strings(assert_similar: Any) -> None:
    """A single substitution in a long string stays above the default threshold."""
    assert_similar("The quick brown fox", "The quick brown fax")


def test_fixture_fails_dissimilar_strings(assert_similar: Any) -> None:
    with pytest.raises(AssertionError, match=r"similarity="):
        assert_similar("kitten", "puppy")


def test_fixture_custom_threshold(assert_similar: Any) -> None:
    # threshold=0.0 means any score passes
    assert_similar("abc", "xyz", threshold=0.0)

    # threshold=1.0 requires identity
    with pytest.raises(AssertionError, match=r"similarity="):
        assert_similar("abc", "abd", threshold=1.0)


def test_fixture_custom_metric_and_options(assert_similar: Any) -> None:
    assert_similar("karolin", "karolinx", metric="hamming", options=MetricOptions(pad="x"))


def test_fixture_error_message_contents(assert_similar: Any) -> None:
    with pytest.raises(AssertionError) as exc_info:
        assert_similar("night", "nacht", metric="dice")

    error_message = str(exc_info.value)
    assert "similarity=0.2500" in error_message
    assert "threshold=" in error_message
    assert "'night'" in error_message
    assert "intersection" in error_message


def test_fixture_returns_callable(assert_similar: Any) -> None:
    assert callable(assert_similar), "assert_similar fixture must return a callable"


def test_plugin_discovery() -> None:
    """Verify assert_similar appears in pytest --fixtures output."""
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "--fixtures", "-q"],
        capture_output=True,
        text=True,
        cwd=str(Path(__file__).resolve().parents[2]),
    )
    assert "assert_similar" in result.stdout, (
        f"assert_similar not found in pytest --fixtures output.\n"
        f"stdout:\n{result.stdout}\n"
        f"stderr:\n{result.stderr}"
    )
