"""Tests for balance / deviation scoring and directional roll-ups."""
import math

import pytest

from vastu_zone.analytics import (
    Band,
    DominanceLevel,
    WeightedScore,
    axis_balances,
    balance_score,
    classify_deviation,
    classify_dominance,
    dominance_score,
    mean,
    opposite_balance,
    radial_uniformity,
    sector_averages,
    standard_deviation,
    weighted_composite,
)
from vastu_zone.errors import InvalidWeightError
from vastu_zone.geometry import generate_32_zones


# --- statistics ---

def test_mean():
    assert mean([1, 2, 3, 4]) == 2.5
    assert mean([]) == 0.0


def test_population_standard_deviation():
    assert abs(standard_deviation([2, 4, 4, 4, 5, 5, 7, 9]) - 2.0) < 1e-12


def test_standard_deviation_short_input():
    assert standard_deviation([]) == 0.0
    assert standard_deviation([42.0]) == 0.0


# --- classify_deviation ---

@pytest.mark.parametrize("deviation, band", [
    (0.0, Band.EXCELLENT),
    (5.0, Band.EXCELLENT),
    (-5.0, Band.EXCELLENT),
    (5.01, Band.GOOD),
    (-15.0, Band.GOOD),
    (15.01, Band.MODERATE),
    (30.0, Band.MODERATE),
    (-30.01, Band.POOR),
    (50.0, Band.POOR),
    (50.01, Band.CRITICAL),
    (-1000.0, Band.CRITICAL),
])
def test_classify_deviation(deviation, band):
    assert classify_deviation(deviation) is band


def test_classify_deviation_nan():
    with pytest.raises(ValueError):
        classify_deviation(math.nan)


def test_band_order():
    assert [b.rank for b in Band] == [0, 1, 2, 3, 4]
    assert Band.EXCELLENT.value == "excellent"


# --- balance_score ---

def test_balance_score():
    score = balance_score(82.0, 90.0)
    assert score.deviation == -8.0
    assert score.normalized_value == 92.0
    assert score.band is Band.GOOD


def test_balance_score_floors_at_zero():
    score = balance_score(0.0, 150.0)
    assert score.normalized_value == 0.0
    assert score.band is Band.CRITICAL


def test_balance_score_to_dict():
    assert balance_score(100.0, 100.0).to_dict() == {
        'normalized_value': 100.0,
        'deviation': 0.0,
        'band': 'excellent',
    }


# --- weighted_composite ---

class TestWeightedComposite:
    def test_weighted_sum(self):
        assert abs(weighted_composite([(80, 0.5), (60, 0.3), (100, 0.2)]) - 78.0) < 1e-12

    def test_order_independent(self):
        scores = [(80.3, 0.1), (61.7, 0.2), (99.9, 0.3), (12.25, 0.4)]
        assert weighted_composite(scores) == weighted_composite(list(reversed(scores)))

    def test_accepts_named_and_mapping_forms(self):
        scores = [WeightedScore(50, 0.5), {'value': 100, 'weight': 0.5}]
        assert weighted_composite(scores) == 75.0

    def test_weights_within_tolerance(self):
        assert abs(weighted_composite([(100, 0.5), (100, 0.5 + 5e-7)]) - 100.0) < 1e-3

    def test_weights_not_summing_to_one(self):
        with pytest.raises(InvalidWeightError):
            weighted_composite([(100, 0.5), (100, 0.4)])

    def test_negative_weight(self):
        with pytest.raises(InvalidWeightError):
            weighted_composite([(100, 1.5), (100, -0.5)])

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_value(self, value):
        with pytest.raises(InvalidWeightError, match="finite"):
            weighted_composite([(value, 0.5), (80, 0.5)])

    def test_empty(self):
        with pytest.raises(InvalidWeightError):
            weighted_composite([])

    def test_missing_mapping_field(self):
        with pytest.raises(InvalidWeightError):
            weighted_composite([{'value': 1}])

    def test_weight_error_is_value_error(self):
        with pytest.raises(ValueError):
            weighted_composite([(1, 2)])


# --- dominance ---

def test_dominance_score():
    assert abs(dominance_score(80, 75) - 20.0) < 1e-9
    assert dominance_score(100, 50) == 100.0
    assert dominance_score(0, 50) == -100.0


def test_dominance_span_must_be_positive():
    with pytest.raises(ValueError):
        dominance_score(1, 1, span=0)


@pytest.mark.parametrize("score, level", [
    (40.0, DominanceLevel.HIGHLY_EXCESSIVE),
    (15.0, DominanceLevel.EXCESSIVE),
    (14.9, DominanceLevel.BALANCED),
    (-15.0, DominanceLevel.BALANCED),
    (-15.1, DominanceLevel.DEFICIENT),
    (-40.0, DominanceLevel.DEFICIENT),
    (-40.1, DominanceLevel.HIGHLY_DEFICIENT),
])
def test_classify_dominance(score, level):
    assert classify_dominance(score) is level


# --- uniformity / opposite balance ---

def test_radial_uniformity():
    assert radial_uniformity([50.0] * 32) == 100.0
    assert radial_uniformity([0.0, 100.0]) == 0.0
    assert radial_uniformity([40.0, 60.0]) == 80.0


def test_opposite_balance():
    assert opposite_balance(80, 60) == 80.0
    assert opposite_balance(0, 100) == 0.0


# --- directional roll-ups ---

def test_sector_averages():
    partition = generate_32_zones(0, 0, 10)
    averages = sector_averages({n: float(n) for n in range(1, 33)}, partition)
    assert list(averages) == [
        "North", "Northeast", "East", "Southeast",
        "South", "Southwest", "West", "Northwest",
    ]
    assert averages["North"] == 2.5
    assert averages["Northwest"] == 30.5


def test_sector_averages_missing_zones():
    partition = generate_32_zones(0, 0, 10)
    averages = sector_averages({1: 100.0, 2: 50.0}, partition)
    assert averages["North"] == 75.0
    assert averages["South"] == 0.0


def test_axis_balances():
    balances = axis_balances({"North": 100.0, "South": 40.0, "East": 70.0, "West": 70.0})
    by_sector = {b.sector: b for b in balances}
    assert by_sector["North"].opposite == "South"
    assert by_sector["North"].balance == 40.0
    assert by_sector["South"].balance == 40.0
    assert by_sector["East"].balance == 100.0
