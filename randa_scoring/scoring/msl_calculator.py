"""
scoring/msl_calculator.py

Computes the Measures of Student Learning score on the 300-point scale.

Formula (per rated measure):
    weighted_score_300 = round2((weight / 30) × value × 100)

where value is 0 / 1.5 / 3 for Less Than Expected / Expected / More Than
Expected. Measures without a rating are left out of both the sum and the
measure list. The aggregate adds the unrounded contributions and rounds once,
so weights summing to exactly 30 never score above 300.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence

from randa_scoring.models.enumerations import MSLRating, label_text
from randa_scoring.scoring.form import MeasureEntry
from randa_scoring.scoring.rubric import (
    MSL_MAX_SCORE,
    MSL_MULTIPLIER,
    MSL_RATING_RANGES,
    MSL_VALUES,
    MSL_WEIGHT_TARGET,
    lookup_rating,
)
from randa_scoring.scoring.utils import dsum, pct, round2, to_decimal

logger = logging.getLogger(__name__)


@dataclass
class MeasureScore:
    """Score for one rated measure."""
    weight: Decimal
    rating: MSLRating
    value: Decimal
    weighted_score_300: Decimal
    measure_id: Optional[int] = None


@dataclass
class MSLResult:
    """Output of MSLCalculator.calculate()."""
    base: Decimal         # score / 100, 0-3 scale
    score: Decimal        # 0-300, 2 dp
    percentage: Decimal   # 0-100, 1 dp
    rating: str
    measures: List[MeasureScore]


class MSLCalculator:
    """Calculate the Measures of Student Learning score."""

    def weighted_measure(self, weight: float, rating: MSLRating) -> Decimal:
        """Unrounded weighted 300-scale contribution of one measure."""
        return to_decimal(weight) / MSL_WEIGHT_TARGET * MSL_VALUES[rating] * MSL_MULTIPLIER

    def score_measure(self, weight: float, rating: MSLRating) -> Decimal:
        """
        Weighted 300-scale contribution of one measure, rounded for display.

        Examples:
            >>> MSLCalculator().score_measure(15, MSLRating.EXPECTED)
            Decimal('75.00')
        """
        return round2(self.weighted_measure(weight, rating))

    def calculate(self, measures: Sequence[MeasureEntry]) -> MSLResult:
        scored: List[MeasureScore] = []
        contributions: List[Decimal] = []
        for entry in measures:
            if entry.rating is None:
                continue
            weight = entry.weight or 0
            contribution = self.weighted_measure(weight, entry.rating)
            contributions.append(contribution)
            scored.append(
                MeasureScore(
                    weight=to_decimal(weight),
                    rating=entry.rating,
                    value=MSL_VALUES[entry.rating],
                    weighted_score_300=round2(contribution),
                    measure_id=entry.measure_id,
                )
            )

        raw_score = dsum(contributions)
        score = round2(raw_score)
        rating = lookup_rating(raw_score, MSL_RATING_RANGES)

        logger.info(
            "msl_calculated",
            extra={
                "measures_rated": len(scored),
                "measures_total": len(measures),
                "msl_score": float(score),
                "msl_rating": label_text(rating),
            },
        )

        return MSLResult(
            base=round2(score / MSL_MULTIPLIER),
            score=score,
            percentage=pct(score / MSL_MAX_SCORE),
            rating=rating,
            measures=scored,
        )
