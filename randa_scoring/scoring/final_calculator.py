"""
scoring/final_calculator.py

Combines the Professional Practices (0-700) and Measures of Student Learning
(0-300) scores into the final effectiveness rating.

Formula:
    total  = round2(pp_score + msl_score)            0-1000
    rating = FINAL_RATING_RANGES lookup on total

Constraint (applied after the lookup):
    MSL "Less Than Expected" caps "Highly Effective" at "Effective".
"""

import structlog
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from randa_scoring.models.enumerations import EffectivenessRating, MSLRating, label_text
from randa_scoring.scoring.rubric import (
    FINAL_RATING_RANGES,
    TOTAL_MAX_SCORE,
    lookup_rating,
)
from randa_scoring.scoring.utils import pct, round2, round_whole, to_decimal

logger = structlog.get_logger(__name__)

HIGHLY_EFFECTIVE_MIN = Decimal("801")
EFFECTIVE_MIN = Decimal("407")
PARTIALLY_EFFECTIVE_MIN = Decimal("188")


@dataclass
class FinalResult:
    """Output of FinalRatingCalculator.calculate()."""
    total: Decimal
    rating: str
    percentage: Decimal
    msl_constraint_applied: bool


class FinalRatingCalculator:
    """Calculate the final effectiveness rating."""

    def calculate(self, pp_score: Any, msl_score: Any, msl_rating: Any) -> FinalResult:
        """
        Args:
            pp_score: Professional Practices score (0-700).
            msl_score: Measures of Student Learning score (0-300).
            msl_rating: MSL rating label; drives the Highly Effective cap.

        Examples:
            >>> FinalRatingCalculator().calculate(525, 225, "More Than Expected").rating
            <EffectivenessRating.EFFECTIVE: 'Effective'>
        """
        total = round2(to_decimal(pp_score) + to_decimal(msl_score))
        rating = lookup_rating(total, FINAL_RATING_RANGES)

        constrained = (
            msl_rating == MSLRating.LESS_THAN_EXPECTED
            and rating == EffectivenessRating.HIGHLY_EFFECTIVE
        )
        if constrained:
            rating = EffectivenessRating.EFFECTIVE

        logger.info(
            "final_calculated",
            pp_score=float(to_decimal(pp_score)),
            msl_score=float(to_decimal(msl_score)),
            total=float(total),
            rating=label_text(rating),
            msl_constraint_applied=constrained,
        )

        return FinalResult(
            total=total,
            rating=rating,
            percentage=pct(total / TOTAL_MAX_SCORE),
            msl_constraint_applied=constrained,
        )


def range_insight(total: Any) -> str:
    """Distance from the current band's minimum and to the next band, in whole points."""
    score = to_decimal(total)
    if score >= HIGHLY_EFFECTIVE_MIN:
        above = round_whole(score - HIGHLY_EFFECTIVE_MIN)
        return f"You are {above} points above the minimum for Highly Effective (801)."
    if score >= EFFECTIVE_MIN:
        above = round_whole(score - EFFECTIVE_MIN)
        to_next = round_whole(HIGHLY_EFFECTIVE_MIN - score)
        return (
            f"You are {above} points above the minimum for Effective (407). "
            f"You need {to_next} more points to reach Highly Effective."
        )
    if score >= PARTIALLY_EFFECTIVE_MIN:
        above = round_whole(score - PARTIALLY_EFFECTIVE_MIN)
        to_next = round_whole(EFFECTIVE_MIN - score)
        return (
            f"You are {above} points above the minimum for Partially Effective (188). "
            f"You need {to_next} more points to reach Effective."
        )
    to_next = round_whole(PARTIALLY_EFFECTIVE_MIN - score)
    return f"You need {to_next} more points to reach Partially Effective (188)."
