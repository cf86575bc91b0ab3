"""
Rubric Definition
randa_scoring/scoring/rubric.py

Static rubric data for the 70:30 educator effectiveness evaluation:

    Professional Practices (PP)           70%  -> 0-700
    Measures of Student Learning (MSL)    30%  -> 0-300
    Final effectiveness                         -> 0-1000

Four standards with 3, 4, 6 and 4 rated elements. Each element is rated on
a 1-5 level scale worth 0-4 points. A standard's rating comes from its raw
earned points against a standard-specific breakpoint table; aggregate scores
are mapped to labels through closed rating bands.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Tuple

from randa_scoring.models.enumerations import (
    EffectivenessRating,
    MSLRating,
    PerformanceRating,
    RATING_NOT_AVAILABLE,
)

# ---------------------------------------------------------------------------
# Scale constants
# ---------------------------------------------------------------------------

POINTS_PER_ELEMENT = 4
PP_BASE_MAX = Decimal("20")
PP_MAX_SCORE = Decimal("700")
MSL_MULTIPLIER = Decimal("100")
MSL_MAX_SCORE = Decimal("300")
TOTAL_MAX_SCORE = Decimal("1000")

EPSILON = Decimal("0.01")
PP_WEIGHT_TARGET = Decimal("100")
MSL_WEIGHT_TARGET = Decimal("30")

MIN_MEASURES = 2
MAX_MEASURES = 5
DEFAULT_MEASURES = 2


# ---------------------------------------------------------------------------
# Standards
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Standard:
    """One rubric standard and its rated elements."""
    id: str
    name: str
    elements: Tuple[str, ...]
    breakpoints: Tuple[int, int, int, int, int]  # earned-point ceilings, Basic..Exemplary

    @property
    def element_keys(self) -> List[str]:
        return [f"{self.id}{e}" for e in self.elements]

    @property
    def max_points(self) -> int:
        return len(self.elements) * POINTS_PER_ELEMENT


STANDARDS: Tuple[Standard, ...] = (
    Standard("s1", "Standard 1", ("a", "b", "c"), (1, 4, 7, 10, 12)),
    Standard("s2", "Standard 2", ("a", "b", "c", "d"), (2, 6, 10, 14, 16)),
    Standard("s3", "Standard 3", ("a", "b", "c", "d", "e", "f"), (3, 9, 15, 21, 24)),
    Standard("s4", "Standard 4", ("a", "b", "c", "d"), (2, 6, 10, 14, 16)),
)

ELEMENT_KEYS: List[str] = [key for std in STANDARDS for key in std.element_keys]

# Breakpoint index -> label, lowest first
BREAKPOINT_LABELS: Tuple[PerformanceRating, ...] = (
    PerformanceRating.BASIC,
    PerformanceRating.PARTIALLY_PROFICIENT,
    PerformanceRating.PROFICIENT,
    PerformanceRating.ACCOMPLISHED,
    PerformanceRating.EXEMPLARY,
)


# ---------------------------------------------------------------------------
# Rating bands
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RatingBand:
    """Closed score interval [min_score, max_score] mapped to a label."""
    min_score: Decimal
    max_score: Decimal
    label: str

    def contains(self, score: Decimal) -> bool:
        return self.min_score <= score <= self.max_score


def _band(lo: str, hi: str, label: str) -> RatingBand:
    return RatingBand(Decimal(lo), Decimal(hi), label)


# Highest band first
STANDARD_RATING_RANGES: Tuple[RatingBand, ...] = (
    _band("18.75", "20", PerformanceRating.EXEMPLARY),
    _band("13.75", "18.74", PerformanceRating.ACCOMPLISHED),
    _band("8.75", "13.74", PerformanceRating.PROFICIENT),
    _band("3.75", "8.74", PerformanceRating.PARTIALLY_PROFICIENT),
    _band("0", "3.74", PerformanceRating.BASIC),
)

PP_RATING_RANGES: Tuple[RatingBand, ...] = (
    _band("657", "700", PerformanceRating.EXEMPLARY),
    _band("482", "656", PerformanceRating.ACCOMPLISHED),
    _band("307", "481", PerformanceRating.PROFICIENT),
    _band("132", "306", PerformanceRating.PARTIALLY_PROFICIENT),
    _band("0", "131", PerformanceRating.BASIC),
)

MSL_RATING_RANGES: Tuple[RatingBand, ...] = (
    _band("201", "300", MSLRating.MORE_THAN_EXPECTED),
    _band("100", "200", MSLRating.EXPECTED),
    _band("0", "99", MSLRating.LESS_THAN_EXPECTED),
)

FINAL_RATING_RANGES: Tuple[RatingBand, ...] = (
    _band("801", "1000", EffectivenessRating.HIGHLY_EFFECTIVE),
    _band("407", "800", EffectivenessRating.EFFECTIVE),
    _band("188", "406", EffectivenessRating.PARTIALLY_EFFECTIVE),
    _band("0", "187", EffectivenessRating.INEFFECTIVE),
)

RATING_TABLES: Dict[str, Tuple[RatingBand, ...]] = {
    "standard": STANDARD_RATING_RANGES,
    "professional_practices": PP_RATING_RANGES,
    "student_learning": MSL_RATING_RANGES,
    "final": FINAL_RATING_RANGES,
}

MSL_VALUES: Dict[MSLRating, Decimal] = {
    MSLRating.LESS_THAN_EXPECTED: Decimal("0"),
    MSLRating.EXPECTED: Decimal("1.5"),
    MSLRating.MORE_THAN_EXPECTED: Decimal("3"),
}


def lookup_rating(score: Decimal, bands: Tuple[RatingBand, ...]) -> str:
    """
    Map a score to its band label.

    Bands are scanned from the highest minimum down and the first band whose
    minimum is <= score wins, so an exact band edge resolves to the upper band
    and a fractional score between two integer bands (e.g. 656.5 on the PP
    scale) resolves to the lower one. Scores under every minimum are "N/A".
    """
    for band in sorted(bands, key=lambda b: b.min_score, reverse=True):
        if score >= band.min_score:
            return band.label
    return RATING_NOT_AVAILABLE
