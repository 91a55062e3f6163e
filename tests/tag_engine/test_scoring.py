"""Tests for similarity and price impact scoring."""

from __future__ import annotations

import pytest

from src.tag_engine.models import Tag
from src.tag_engine.price_impact import (
    parse_price_label,
    percent_change,
    price_impact,
    price_impact_percentage,
)
from src.tag_engine.similarity import (
    levenshtein_distance,
    max_similarity,
    similarity,
    similarity_penalty,
)


# ===================================================================
# Similarity
# ===================================================================


class TestLevenshteinDistance:
    def test_identical(self):
        assert levenshtein_distance("alphafly", "alphafly") == 0

    def test_empty(self):
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("abc", "") == 3

    def test_classic(self):
        assert levenshtein_distance("kitten", "sitting") == 3

    def test_single_insertion(self):
        assert levenshtein_distance("goretex", "gore-tex") == 1


class TestSimilarity:
    def test_same_name_is_100(self):
        assert similarity("air max", "air max") == 100.0

    def test_both_empty_is_100(self):
        assert similarity("", "") == 100.0

    def test_one_empty_is_0(self):
        assert similarity("", "dunk") == 0.0

    def test_case_insensitive(self):
        assert similarity("Air Max", "air max") == 100.0

    @pytest.mark.parametrize("a, b", [
        ("goretex", "gore-tex"),
        ("dunk low", "dunk high"),
        ("vaporfly", "alphafly"),
        ("", "x"),
    ])
    def test_symmetric(self, a, b):
        assert similarity(a, b) == similarity(b, a)

    def test_value(self):
        # 1 edit over 8 chars
        assert similarity("goretex", "gore-tex") == pytest.approx(87.5)

    def test_bounded(self):
        assert 0.0 <= similarity("abc", "xyz123") <= 100.0


class TestSimilarityPenalty:
    def test_no_selected_tags(self):
        assert similarity_penalty("gore-tex", []) == 0

    def test_goretex_variant_heavily_penalized(self):
        penalty = similarity_penalty("gore-tex", [Tag(name="goretex")])
        assert penalty <= -4
        assert penalty == -6

    def test_uses_best_match(self):
        selected = [Tag(name="zzzzzzzz"), Tag(name="dunk low")]
        assert max_similarity("dunk low", selected) == 100.0
        assert similarity_penalty("dunk low", selected) == -6

    def test_unrelated_no_penalty(self):
        assert similarity_penalty("travis scott", [Tag(name="air max")]) == 0

    def test_custom_thresholds(self):
        penalties = ((50.0, -3),)
        assert similarity_penalty("dunk low", [Tag(name="dunk")], penalties) == -3
        assert similarity_penalty("xyz", [Tag(name="dunk")], penalties) == 0


# ===================================================================
# Price impact
# ===================================================================


class TestPriceImpact:
    def test_zero_baseline_is_neutral(self):
        for price in (0, 1, 500, 1_000_000):
            assert price_impact(price, 0) == 0

    def test_same_as_baseline_is_neutral(self):
        assert price_impact(1000, 1000) == 0

    def test_five_x_is_ten(self):
        # +400%
        assert price_impact(5000, 1000) == 10

    def test_deep_discount_is_minus_ten(self):
        # -85%
        assert price_impact(150, 1000) == -10

    @pytest.mark.parametrize("price, expected", [
        (5000, 10),
        (4999, 8),
        (3000, 8),
        (2000, 6),
        (1500, 4),
        (1200, 2),
        (1199, 0),
        (800, 0),
        (799, -2),
        (500, -2),
        (499, -4),
        (400, -4),
        (399, -6),
        (300, -6),
        (299, -8),
        (200, -8),
        (199, -10),
        (0, -10),
    ])
    def test_thresholds(self, price, expected):
        assert price_impact(price, 1000) == expected

    def test_monotonic_in_price(self):
        scores = [price_impact(p, 1000) for p in range(0, 7000, 25)]
        assert scores == sorted(scores)

    def test_bounded(self):
        assert price_impact(10**12, 1) == 10
        assert price_impact(0, 10**12) == -10


class TestPriceImpactPercentage:
    def test_absolute_value(self):
        assert price_impact_percentage(500, 1000) == pytest.approx(50.0)
        assert price_impact_percentage(1500, 1000) == pytest.approx(50.0)

    def test_zero_baseline(self):
        assert price_impact_percentage(1500, 0) == 0.0
        assert percent_change(1500, 0) == 0.0


class TestParsePriceLabel:
    @pytest.mark.parametrize("label, expected", [
        ("1200 kr", 1200.0),
        ("1 200 kr", 1200.0),
        ("kr 999.5", 999.5),
        ("0 kr", 0.0),
        ("", 0.0),
        ("n/a", 0.0),
        (None, 0.0),
        (850, 850.0),
        (float("nan"), 0.0),
    ])
    def test_parse(self, label, expected):
        assert parse_price_label(label) == expected

    def test_leading_number_wins(self):
        assert parse_price_label("1.200.5") == pytest.approx(1.2)
