# randa_scoring/scoring/pp_calculator.py
"""
Professional Practices Calculator
-----------------------------------
Scores the four standards and aggregates them on the 700-point PP scale.

Per standard:
    earned   = Σ element points          (level − 1, unset = 0)
    possible = elements × 4
    ratio    = clamp(earned / possible, 0, 1)
    weighted_score_700 = round2(ratio × weight/100 × 700)
    base_contribution  = round2(ratio × weight/100 × 20)   (= weighted_score_700 / 35)
    rating   = earned against the standard's breakpoint table

Aggregate:
    score      = round2(Σ weighted_score_700)
    base       = round2(Σ base_contribution)
    percentage = pct(score / 700)
    rating     = PP_RATING_RANGES lookup on score
"""
import structlog
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Sequence

from randa_scoring.core.exceptions import ThresholdOverflowException
from randa_scoring.models.enumerations import PerformanceRating, RATING_ERROR, label_text
from randa_scoring.scoring.form import EvaluationInput
from randa_scoring.scoring.rubric import (
    BREAKPOINT_LABELS,
    POINTS_PER_ELEMENT,
    PP_BASE_MAX,
    PP_MAX_SCORE,
    PP_RATING_RANGES,
    STANDARDS,
    Standard,
    lookup_rating,
)
from randa_scoring.scoring.utils import clamp, dsum, pct, round2, to_decimal

logger = structlog.get_logger(__name__)

HUNDRED = Decimal("100")


@dataclass
class StandardScore:
    """Score breakdown for one standard."""
    standard_id: str
    name: str
    earned: int
    possible: int
    ratio: Decimal               # clamped to [0, 1], unrounded
    weight: Decimal
    weighted_score_700: Decimal  # 2 dp
    base_contribution: Decimal   # 2 dp, 0-20 scale
    rating: str                  # PerformanceRating or RATING_ERROR


@dataclass
class PPResult:
    """Output of PPCalculator.calculate()."""
    base: Decimal
    score: Decimal
    percentage: Decimal
    rating: str
    standards: List[StandardScore]


def rating_for_earned(earned: int, standard: Standard) -> PerformanceRating:
    """
    Rate a standard from its raw earned points.

    Raises:
        ThresholdOverflowException: earned is above the top breakpoint, which
            only happens if element points exceed 4 each.
    """
    for ceiling, label in zip(standard.breakpoints, BREAKPOINT_LABELS):
        if earned <= ceiling:
            return label
    raise ThresholdOverflowException(standard.id, earned, standard.breakpoints[-1])


class PPCalculator:
    """Calculate Professional Practices scores."""

    def calculate_standard(
        self,
        element_points: Sequence[int],
        weight: float,
        standard_index: int,
    ) -> StandardScore:
        """
        Score a single standard.

        Args:
            element_points: Points per element (0-4 each).
            weight: Standard weight as a percentage (0-100).
            standard_index: 0-based index into STANDARDS.

        Returns:
            StandardScore. Points above the top breakpoint are reported with
            the RATING_ERROR sentinel rather than a valid label.

        Examples:
            >>> PPCalculator().calculate_standard([3, 3, 3], 25, 0).weighted_score_700
            Decimal('131.25')
        """
        standard = STANDARDS[standard_index]
        earned = sum(element_points)
        possible = len(element_points) * POINTS_PER_ELEMENT

        ratio = to_decimal(earned) / possible if possible > 0 else Decimal("0")
        ratio = clamp(ratio, Decimal("0"), Decimal("1"))
        share = to_decimal(weight) / HUNDRED

        try:
            rating: str = rating_for_earned(earned, standard)
        except ThresholdOverflowException as exc:
            logger.error(
                "standard_threshold_overflow",
                standard=exc.standard_id,
                earned=exc.earned,
                ceiling=exc.ceiling,
            )
            rating = RATING_ERROR

        return StandardScore(
            standard_id=standard.id,
            name=standard.name,
            earned=earned,
            possible=possible,
            ratio=ratio,
            weight=to_decimal(weight),
            weighted_score_700=round2(ratio * share * PP_MAX_SCORE),
            base_contribution=round2(ratio * share * PP_BASE_MAX),
            rating=rating,
        )

    def calculate(self, evaluation: EvaluationInput) -> PPResult:
        """Score all four standards and aggregate to the 700-point scale."""
        standards = [
            self.calculate_standard(
                evaluation.element_points(std),
                evaluation.pp_weights[i],
                i,
            )
            for i, std in enumerate(STANDARDS)
        ]

        # Sum the rounded per-standard scores so the total matches what is displayed
        score = round2(dsum(s.weighted_score_700 for s in standards))
        base = round2(dsum(s.base_contribution for s in standards))
        rating = lookup_rating(score, PP_RATING_RANGES)

        logger.info(
            "pp_calculated",
            earned=[s.earned for s in standards],
            weighted=[float(s.weighted_score_700) for s in standards],
            pp_score=float(score),
            pp_rating=label_text(rating),
        )

        return PPResult(
            base=base,
            score=score,
            percentage=pct(score / PP_MAX_SCORE),
            rating=rating,
            standards=standards,
        )
