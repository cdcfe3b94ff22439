"""pytest plugin for strcompare.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from strcompare.api import test as run_test
from strcompare.options import MetricOptions
from strcompare.result import MetricResult


@pytest.fixture(scope="session")
def assert_similar() -> Any:
    """Fixture that returns a callable string similarity asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to ``strcompare.api.test`` which creates a fresh ``Metric``
    per call).

    Usage in tests::

        def test_greeting(assert_similar):
            assert_similar("Hello, world!", "Hello world", metric="levenshtein")

        def test_rewrite(assert_similar):
            with pytest.raises(AssertionError, match=r"similarity="):
                assert_similar("kitten", "puppy", threshold=0.9)

    Returns:
        A callable ``_assert(actual, expected, threshold=0.85, metric="levenshtein",
        options=None) -> None`` that raises ``AssertionError`` when the
        similarity is below threshold.
    """

    def _assert(
        actual: str,
        expected: str,
        threshold: float = 0.85,
        metric: str = "levenshtein",
        options: MetricOptions | None = None,
    ) -> None:
        """Assert that two strings are at least ``threshold`` similar.

        Raises:
            AssertionError: When the similarity is below ``threshold``, with a
                message including the score, threshold, both strings and the
                algorithm payload.
        """
        result = run_test(actual, expected, metric=metric, options=options)
        assert isinstance(result, MetricResult)
        if result.similarity < threshold:
            raw = dict(result.raw) if result.raw is not None else {}
            raise AssertionError(
                f"strings not similar enough ({metric}): "
                f"similarity={result.similarity:.4f} < threshold={threshold}\n"
                f"  actual:   {actual!r}\n"
                f"  expected: {expected!r}\n"
                f"  raw: {raw}"
            )

    return _assert
