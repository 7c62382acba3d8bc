"""
Balance / Deviation Scoring
===========================

Generic statistics and classifiers that turn coverage numbers into verdicts.

Design:
- Pure functions over explicit inputs, no state
- One deviation classifier with fixed thresholds; callers pass only the
  deviation, never thresholds
- Rules that need other thresholds get their own named classifier
  (see classify_dominance) instead of a copy with different numbers
- All failures are input-validation failures, raised synchronously
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping, NamedTuple, Sequence, Tuple, Union

from vastu_zone.errors import InvalidWeightError

WEIGHT_TOLERANCE = 1e-6


class Band(str, Enum):
    """Qualitative deviation band, ordered from best to worst."""

    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"
    POOR = "poor"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """0 (excellent) to 4 (critical)."""
        return list(Band).index(self)


# Upper bounds on |deviation| (inclusive), checked in order
DEVIATION_BANDS: Tuple[Tuple[float, Band], ...] = (
    (5.0, Band.EXCELLENT),
    (15.0, Band.GOOD),
    (30.0, Band.MODERATE),
    (50.0, Band.POOR),
)


class DominanceLevel(str, Enum):
    """Signed over/under-representation level, ordered from deficient to excessive."""

    HIGHLY_DEFICIENT = "highly-deficient"
    DEFICIENT = "deficient"
    BALANCED = "balanced"
    EXCESSIVE = "excessive"
    HIGHLY_EXCESSIVE = "highly-excessive"


# Lower bounds on the dominance score (inclusive), checked in order
DOMINANCE_LEVELS: Tuple[Tuple[float, DominanceLevel], ...] = (
    (40.0, DominanceLevel.HIGHLY_EXCESSIVE),
    (15.0, DominanceLevel.EXCESSIVE),
    (-15.0, DominanceLevel.BALANCED),
    (-40.0, DominanceLevel.DEFICIENT),
)


@dataclass(frozen=True)
class BalanceScore:
    """
    Measured value compared with its ideal.

    Attributes:
        normalized_value: 0-100, max(0, 100 - |deviation|)
        deviation: actual - ideal (signed)
        band: classify_deviation(deviation)
    """

    normalized_value: float
    deviation: float
    band: Band

    def to_dict(self) -> dict:
        return {
            'normalized_value': self.normalized_value,
            'deviation': self.deviation,
            'band': self.band.value,
        }


class WeightedScore(NamedTuple):
    """One term of a weighted composite."""

    value: float
    weight: float


ScoreLike = Union[WeightedScore, Tuple[float, float], Mapping[str, float]]


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0 for an empty input."""
    values = list(values)
    if not values:
        return 0.0
    return math.fsum(values) / len(values)


def standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation; 0 for empty or single-element input."""
    values = list(values)
    if len(values) < 2:
        return 0.0
    avg = mean(values)
    variance = math.fsum((v - avg) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


def classify_deviation(deviation: float) -> Band:
    """
    Classify a deviation by its magnitude.

    |d| <= 5 excellent, <= 15 good, <= 30 moderate, <= 50 poor, else critical.

    Raises:
        ValueError: If deviation is NaN
    """
    if math.isnan(deviation):
        raise ValueError("deviation must not be NaN")

    magnitude = abs(deviation)
    for upper, band in DEVIATION_BANDS:
        if magnitude <= upper:
            return band
    return Band.CRITICAL


def balance_score(actual: float, ideal: float) -> BalanceScore:
    """Compare a measured value (e.g. coverage %) with its ideal."""
    deviation = actual - ideal
    return BalanceScore(
        normalized_value=max(0.0, 100.0 - abs(deviation)),
        deviation=deviation,
        band=classify_deviation(deviation),
    )


def _as_weighted(score: ScoreLike) -> WeightedScore:
    if isinstance(score, Mapping):
        try:
            return WeightedScore(float(score['value']), float(score['weight']))
        except KeyError as e:
            raise InvalidWeightError(f"Weighted score missing field: {e}") from e
    value, weight = score
    return WeightedScore(float(value), float(weight))


def weighted_composite(scores: Iterable[ScoreLike]) -> float:
    """
    Weighted sum of scores whose weights sum to 1.

    Args:
        scores: (value, weight) pairs, WeightedScore, or {'value', 'weight'} mappings

    Returns:
        sum(value * weight), independent of input order

    Raises:
        InvalidWeightError: If empty, any weight is negative or non-finite,
            any value is non-finite, or weights do not sum to 1 within
            WEIGHT_TOLERANCE
    """
    terms = [_as_weighted(s) for s in scores]
    if not terms:
        raise InvalidWeightError("weighted_composite requires at least one score")

    for term in terms:
        if not math.isfinite(term.weight) or term.weight < 0:
            raise InvalidWeightError(f"Weights must be finite and >= 0, got {term.weight}")
        if not math.isfinite(term.value):
            raise InvalidWeightError(f"Weighted values must be finite, got {term.value}")

    total = math.fsum(t.weight for t in terms)
    if abs(total - 1.0) > WEIGHT_TOLERANCE:
        raise InvalidWeightError(f"Weights must sum to 1.0, got {total:.6f}")

    return math.fsum(t.value * t.weight for t in terms)


def dominance_score(actual: float, ideal: float, span: float = 25.0) -> float:
    """
    Signed over/under-representation, scaled so that |actual - ideal| == span
    maps to 100. Clamped to [-100, 100].
    """
    if span <= 0:
        raise ValueError(f"span must be > 0, got {span}")
    normalized = (actual - ideal) / span * 100
    return max(-100.0, min(100.0, normalized))


def classify_dominance(score: float) -> DominanceLevel:
    """
    Classify a dominance score.

    >= 40 highly-excessive, >= 15 excessive, >= -15 balanced,
    >= -40 deficient, else highly-deficient.
    """
    if math.isnan(score):
        raise ValueError("dominance score must not be NaN")
    for lower, level in DOMINANCE_LEVELS:
        if score >= lower:
            return level
    return DominanceLevel.HIGHLY_DEFICIENT


def radial_uniformity(values: Sequence[float]) -> float:
    """Evenness of coverages around the circle: max(0, 100 - 2 * stddev)."""
    return max(0.0, 100.0 - 2 * standard_deviation(values))


def opposite_balance(coverage: float, opposite_coverage: float) -> float:
    """Balance between opposite directions: max(0, 100 - |a - b|)."""
    return max(0.0, 100.0 - abs(coverage - opposite_coverage))
