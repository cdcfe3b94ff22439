"""Tests for Needleman-Wunsch and Smith-Waterman."""

from __future__ import annotations

import pytest

from strcompare.algorithms.alignment import needleman_wunsch, smith_waterman
from strcompare.metric import Metric
from strcompare.options import MetricOptions
from strcompare.pool import ScratchPool


class TestNeedlemanWunsch:
    def test_gattaca_raw_score(self, pool: ScratchPool) -> None:
        opts = MetricOptions(match=1, mismatch=-1, gap=-2)
        payload = needleman_wunsch("GATTACA", "GTCGACGCA", opts, pool)
        assert payload.raw == {"score": -3, "denom": 9}
        assert payload.similarity < 0

    def test_gattaca_clamped_by_engine(self, cache, pool: ScratchPool) -> None:  # type: ignore[no-untyped-def]
        opts = MetricOptions(match=1, mismatch=-1, gap=-2)
        metric = Metric("needleman_wunsch", "GATTACA", "GTCGACGCA", opts, cache=cache, pool=pool)
        metric.run()
        assert metric.get_results().similarity == 0.0

    def test_identical(self, pool: ScratchPool, options: MetricOptions) -> None:
        payload = needleman_wunsch("ACGT", "ACGT", options, pool)
        assert payload.similarity == 1.0
        assert payload.raw == {"score": 4, "denom": 4}

    def test_both_empty(self, pool: ScratchPool, options: MetricOptions) -> None:
        assert needleman_wunsch("", "", options, pool).similarity == 1.0

    def test_one_empty_is_all_gaps(self, pool: ScratchPool, options: MetricOptions) -> None:
        payload = needleman_wunsch("", "abc", options, pool)
        assert payload.raw == {"score": -3, "denom": 3}

    def test_single_gap(self, pool: ScratchPool, options: MetricOptions) -> None:
        # abc vs abxc: three matches and one gap with default weights.
        payload = needleman_wunsch("abc", "abxc", options, pool)
        assert payload.raw["score"] == 2
        assert payload.similarity == pytest.approx(0.5)

    def test_match_weight_scales_denominator(self, pool: ScratchPool) -> None:
        payload = needleman_wunsch("ab", "ab", MetricOptions(match=3), pool)
        assert payload.raw == {"score": 6, "denom": 6}


class TestSmithWaterman:
    def test_embedded_substring(self, pool: ScratchPool, options: MetricOptions) -> None:
        payload = smith_waterman("abc", "xxabcxx", options, pool)
        assert payload.raw == {"score": 6, "denom": 6}
        assert payload.similarity == 1.0

    def test_partial_local_match(self, pool: ScratchPool, options: MetricOptions) -> None:
        payload = smith_waterman("abcd", "zzabzz", options, pool)
        assert payload.raw == {"score": 4, "denom": 8}
        assert payload.similarity == pytest.approx(0.5)

    def test_no_common_characters(self, pool: ScratchPool, options: MetricOptions) -> None:
        payload = smith_waterman("abc", "xyz", options, pool)
        assert payload.similarity == 0.0
        assert payload.raw["score"] == 0

    def test_both_empty(self, pool: ScratchPool, options: MetricOptions) -> None:
        assert smith_waterman("", "", options, pool).similarity == 1.0

    def test_one_empty(self, pool: ScratchPool, options: MetricOptions) -> None:
        assert smith_waterman("", "abc", options, pool).similarity == 0.0
        assert smith_waterman("abc", "", options, pool).similarity == 0.0

    def test_custom_weights(self, pool: ScratchPool) -> None:
        opts = MetricOptions(match=1, mismatch=-1, gap=-1)
        payload = smith_waterman("abc", "abc", opts, pool)
        assert payload.raw == {"score": 3, "denom": 3}
