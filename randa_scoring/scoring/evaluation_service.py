"""
scoring/evaluation_service.py

Runs one complete scoring pass over an input snapshot:

    1. Validation gates        (validation.validate)
    2. Professional Practices  (PPCalculator)
    3. Student Learning        (MSLCalculator)
    4. Final rating            (FinalRatingCalculator), only when all gates pass

PP and MSL results are always computed; ValidationStatus says whether each
section is authoritative. The service keeps no state between calls.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from randa_scoring.models.enumerations import label_text
from randa_scoring.scoring.final_calculator import FinalRatingCalculator, FinalResult, range_insight
from randa_scoring.scoring.form import EvaluationInput
from randa_scoring.scoring.msl_calculator import MSLCalculator, MSLResult
from randa_scoring.scoring.pp_calculator import PPCalculator, PPResult
from randa_scoring.scoring.validation import ValidationStatus, validate

logger = logging.getLogger(__name__)


@dataclass
class EvaluationReport:
    """All outputs of one scoring pass."""
    validation: ValidationStatus
    pp: PPResult
    msl: MSLResult
    final: Optional[FinalResult] = None
    insight: Optional[str] = None


class EvaluationService:
    """Validate and score an evaluation in a single pass."""

    def __init__(self) -> None:
        self.pp_calc = PPCalculator()
        self.msl_calc = MSLCalculator()
        self.final_calc = FinalRatingCalculator()

    def evaluate(self, evaluation: EvaluationInput) -> EvaluationReport:
        validation = validate(evaluation)
        pp = self.pp_calc.calculate(evaluation)
        msl = self.msl_calc.calculate(evaluation.measures)

        final = None
        insight = None
        if validation.ready:
            final = self.final_calc.calculate(pp.score, msl.score, msl.rating)
            insight = range_insight(final.total)
            logger.info(
                "Evaluation scored: total=%s rating=%s", final.total, label_text(final.rating)
            )
        else:
            logger.info(
                "Final rating withheld: weights_valid=%s elements_complete=%s measures_valid=%s",
                validation.pp_weights_valid,
                validation.elements_complete,
                validation.measures_valid,
            )

        return EvaluationReport(
            validation=validation,
            pp=pp,
            msl=msl,
            final=final,
            insight=insight,
        )
