"""Tests for the set-overlap family (dice, jaccard, cosine, qgram)."""

from __future__ import annotations

import math

import pytest

from strcompare.algorithms.overlap import cosine, dice, jaccard, qgram
from strcompare.options import MetricOptions
from strcompare.pool import ScratchPool


class TestDice:
    def test_night_nacht(self, pool: ScratchPool, options: MetricOptions) -> None:
        payload = dice("night", "nacht", options, pool)
        assert payload.similarity == pytest.approx(0.25)
        assert payload.raw == {"intersection": 1, "size": 8}

    def test_hello_hallo(self, pool: ScratchPool, options: MetricOptions) -> None:
        assert dice("hello", "hallo", options, pool).similarity == pytest.approx(0.5)

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [("a", "a", 1.0), ("", "", 1.0), ("a", "b", 0.0), ("a", "ab", 0.0), ("", "ab", 0.0)],
    )
    def test_short_strings(
        self, pool: ScratchPool, options: MetricOptions, a: str, b: str, expected: float
    ) -> None:
        payload = dice(a, b, options, pool)
        assert payload.similarity == expected
        assert payload.raw == {"intersection": 0, "size": 0}

    def test_repeated_bigrams_counted_once(self, pool: ScratchPool, options: MetricOptions) -> None:
        payload = dice("aaaa", "aa", options, pool)
        assert payload.similarity == 1.0
        assert payload.raw == {"intersection": 1, "size": 2}


class TestJaccard:
    def test_partial_overlap(self, pool: ScratchPool, options: MetricOptions) -> None:
        payload = jaccard("abc", "bcd", options, pool)
        assert payload.similarity == pytest.approx(0.5)
        assert payload.raw == {"intersection": 2, "union": 4}

    def test_empty_union(self, pool: ScratchPool, options: MetricOptions) -> None:
        payload = jaccard("", "", options, pool)
        assert payload.similarity == 1.0
        assert payload.raw == {"intersection": 0, "union": 0}

    def test_disjoint(self, pool: ScratchPool, options: MetricOptions) -> None:
        assert jaccard("abc", "xyz", options, pool).similarity == 0.0

    def test_character_order_ignored(self, pool: ScratchPool, options: MetricOptions) -> None:
        assert jaccard("abc", "cba", options, pool).similarity == 1.0


class TestCosine:
    def test_shared_terms(self, pool: ScratchPool, options: MetricOptions) -> None:
        payload = cosine("a b c", "a b d", options, pool)
        assert payload.similarity == pytest.approx(2 / 3)
        assert payload.raw["dot_product"] == 2
        assert payload.raw["magnitude_a"] == pytest.approx(math.sqrt(3))
        assert payload.raw["magnitude_b"] == pytest.approx(math.sqrt(3))

    def test_term_frequencies(self, pool: ScratchPool, options: MetricOptions) -> None:
        payload = cosine("a a b", "a b", options, pool)
        assert payload.similarity == pytest.approx(3 / math.sqrt(10))

    def test_custom_delimiter(self, pool: ScratchPool) -> None:
        payload = cosine("x,y", "x,z", MetricOptions(delimiter=","), pool)
        assert payload.similarity == pytest.approx(0.5)

    def test_identical_is_exactly_one(self, pool: ScratchPool, options: MetricOptions) -> None:
        assert cosine("the cat the hat", "the cat the hat", options, pool).similarity == 1.0

    def test_no_shared_terms(self, pool: ScratchPool, options: MetricOptions) -> None:
        payload = cosine("red green", "blue", options, pool)
        assert payload.similarity == 0.0
        assert payload.raw["dot_product"] == 0


class TestQGram:
    def test_bigrams(self, pool: ScratchPool, options: MetricOptions) -> None:
        payload = qgram("abcd", "abce", options, pool)
        assert payload.similarity == pytest.approx(2 / 3)
        assert payload.raw == {"intersection": 2, "size": 3}

    def test_trigrams(self, pool: ScratchPool) -> None:
        payload = qgram("abcd", "abce", MetricOptions(q=3), pool)
        assert payload.raw == {"intersection": 1, "size": 2}
        assert payload.similarity == pytest.approx(0.5)

    def test_unigrams_match_character_sets(self, pool: ScratchPool) -> None:
        payload = qgram("aab", "ab", MetricOptions(q=1), pool)
        assert payload.similarity == 1.0

    def test_shorter_than_q(self, pool: ScratchPool) -> None:
        opts = MetricOptions(q=4)
        assert qgram("ab", "ab", opts, pool).similarity == 1.0
        assert qgram("ab", "cd", opts, pool).similarity == 0.0
