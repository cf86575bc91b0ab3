"""
Input Validation
randa_scoring/scoring/validation.py

Three independent gates decide when computed results are authoritative:

    1. Professional Practices weights sum to 100 (within 0.01)
    2. All 17 elements have a level selected
    3. 2-5 measures, every one rated, weights summing to 30 (within 0.01)

Gates 1+2 unlock the PP results, gate 3 the MSL results, and all three
together the final effectiveness rating. Failing a gate is a normal input
state, never an error.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from randa_scoring.scoring.form import EvaluationInput, MeasureEntry
from randa_scoring.scoring.rubric import (
    ELEMENT_KEYS,
    EPSILON,
    MAX_MEASURES,
    MIN_MEASURES,
    MSL_WEIGHT_TARGET,
    PP_WEIGHT_TARGET,
)
from randa_scoring.scoring.utils import ONE_PLACE, dsum, quantize, to_decimal


@dataclass(frozen=True)
class WeightCheck:
    """Result of a weight-sum check."""
    valid: bool
    total: Decimal
    delta: Decimal
    target: Decimal

    @property
    def message(self) -> str:
        target = format(self.target.normalize(), "f")
        if self.valid:
            return f"✓ Total equals {target}%"
        current = quantize(self.total, ONE_PLACE)
        return f"⚠ Total must equal {target}% (currently {current}%)"


@dataclass(frozen=True)
class ProgressStep:
    number: int
    label: str
    complete: bool
    current: bool


@dataclass(frozen=True)
class ValidationStatus:
    """Gate outcomes for one input snapshot."""
    pp_weights_valid: bool
    elements_complete: bool
    measures_valid: bool
    pp_weight_sum: Decimal
    msl_weight_sum: Decimal
    pp_weight_check: Optional[WeightCheck] = None
    msl_weight_check: Optional[WeightCheck] = None

    @property
    def pp_ready(self) -> bool:
        return self.pp_weights_valid and self.elements_complete

    @property
    def msl_ready(self) -> bool:
        return self.measures_valid

    @property
    def ready(self) -> bool:
        return self.pp_weights_valid and self.elements_complete and self.measures_valid

    @property
    def steps(self) -> List[ProgressStep]:
        """Four-step progress view; the first incomplete step is current."""
        s1, s2, s3 = self.pp_weights_valid, self.elements_complete, self.measures_valid
        return [
            ProgressStep(1, "Professional Practice weights", s1, not s1),
            ProgressStep(2, "Element ratings", s2, s1 and not s2),
            ProgressStep(3, "Measures of Student Learning", s3, s1 and s2 and not s3),
            ProgressStep(4, "Final effectiveness rating", self.ready, False),
        ]


def validate_weights(weights: Iterable[Any], target: Any) -> WeightCheck:
    """Valid iff |sum(weights) - target| < 0.01."""
    total = dsum(weights)
    target_d = to_decimal(target)
    delta = abs(total - target_d)
    return WeightCheck(valid=delta < EPSILON, total=total, delta=delta, target=target_d)


def elements_complete(element_levels: Mapping[str, Optional[int]]) -> bool:
    """True iff every rubric element has a level selected (level 1 counts)."""
    return all(element_levels.get(key) is not None for key in ELEMENT_KEYS)


def measures_valid(measures: Sequence[MeasureEntry]) -> bool:
    """2-5 measures, all rated, weights summing to 30."""
    if not MIN_MEASURES <= len(measures) <= MAX_MEASURES:
        return False
    if any(m.rating is None for m in measures):
        return False
    return validate_weights([m.weight or 0 for m in measures], MSL_WEIGHT_TARGET).valid


def validate(evaluation: EvaluationInput) -> ValidationStatus:
    """Run all three gates against a snapshot."""
    pp_check = validate_weights(evaluation.pp_weights, PP_WEIGHT_TARGET)
    msl_check = validate_weights([m.weight or 0 for m in evaluation.measures], MSL_WEIGHT_TARGET)
    return ValidationStatus(
        pp_weights_valid=pp_check.valid,
        elements_complete=elements_complete(evaluation.element_levels),
        measures_valid=measures_valid(evaluation.measures),
        pp_weight_sum=pp_check.total,
        msl_weight_sum=msl_check.total,
        pp_weight_check=pp_check,
        msl_weight_check=msl_check,
    )
