from pydantic import BaseModel, Field
from datetime import datetime
from typing import Dict, List, Optional, Union

from randa_scoring.scoring.form import EvaluationInput

# Raw numeric form input: numbers or text, parsed leniently by the engine
NumberLike = Optional[Union[int, float, str]]


class MeasureInput(BaseModel):
    """
    One Measure of Student Learning as entered on the form.
    """

    weight: NumberLike = Field(
        default=None,
        description="Percentage weight of this measure (measure weights total 30)"
    )

    rating: Optional[str] = Field(
        default=None,
        description="Less Than Expected, Expected or More Than Expected; empty means unrated"
    )

    measure_id: Optional[int] = Field(
        default=None,
        description="Opaque identifier assigned by the caller"
    )


class EvaluationRequest(BaseModel):
    """
    Complete input record for one scoring pass.
    """

    pp_weights: List[NumberLike] = Field(
        default_factory=list,
        description="Weights for Standards 1-4 in percent (total 100)"
    )

    element_levels: Dict[str, NumberLike] = Field(
        default_factory=dict,
        description="Element key (s1a..s4d) to level 1-5; missing or empty means unset"
    )

    measures: List[MeasureInput] = Field(
        default_factory=list,
        description="2-5 Measures of Student Learning"
    )

    def to_input(self) -> EvaluationInput:
        return EvaluationInput.from_raw(
            pp_weights=self.pp_weights,
            element_levels=self.element_levels,
            measures=[m.model_dump() for m in self.measures],
        )


class WeightCheckRequest(BaseModel):
    weights: List[NumberLike] = Field(..., description="Weights to total")
    target: float = Field(default=100.0, ge=0, description="Required total")


# =============================================================================
# Responses
# =============================================================================

class WeightCheckResponse(BaseModel):
    valid: bool
    total: float
    delta: float
    target: float
    message: str


class ProgressStepResponse(BaseModel):
    number: int
    label: str
    complete: bool
    current: bool


class ValidationStatusResponse(BaseModel):
    """Gate outcomes driving which result sections are authoritative."""
    pp_weights_valid: bool
    elements_complete: bool
    measures_valid: bool
    pp_weight_sum: float
    msl_weight_sum: float
    pp_ready: bool
    msl_ready: bool
    ready: bool
    pp_weight_message: str
    msl_weight_message: str
    steps: List[ProgressStepResponse]


class StandardScoreResponse(BaseModel):
    standard_id: str
    name: str
    earned: float
    possible: int
    ratio: float
    weight: float
    weighted_score_700: float
    base_contribution: float
    rating: str


class PPResultResponse(BaseModel):
    base: float = Field(..., description="Sum of base contributions (0-20)")
    score: float = Field(..., ge=0, description="Professional Practices score (0-700)")
    percentage: float
    rating: str
    standards: List[StandardScoreResponse]


class MeasureScoreResponse(BaseModel):
    measure_id: Optional[int] = None
    weight: float
    rating: str
    value: float
    weighted_score_300: float


class MSLResultResponse(BaseModel):
    base: float = Field(..., description="Score / 100 (0-3)")
    score: float = Field(..., ge=0, description="Measures of Student Learning score (0-300)")
    percentage: float
    rating: str
    measures: List[MeasureScoreResponse]


class FinalResultResponse(BaseModel):
    total: float = Field(..., ge=0, description="Final score (0-1000)")
    rating: str
    percentage: float
    msl_constraint_applied: bool


class EvaluationResponse(BaseModel):
    """
    Full scoring pass. `final` and `insight` are null until every gate passes.
    """
    validation: ValidationStatusResponse
    professional_practices: PPResultResponse
    student_learning: MSLResultResponse
    final: Optional[FinalResultResponse] = None
    insight: Optional[str] = None
    scored_at: datetime


class RatingBandResponse(BaseModel):
    min_score: float
    max_score: float
    label: str


class StandardDefinitionResponse(BaseModel):
    id: str
    name: str
    element_keys: List[str]
    max_points: int
    breakpoints: List[int]


class RubricResponse(BaseModel):
    standards: List[StandardDefinitionResponse]
    rating_tables: Dict[str, List[RatingBandResponse]]
    msl_values: Dict[str, float]
    pp_weight_target: float
    msl_weight_target: float
    min_measures: int
    max_measures: int


class ErrorResponse(BaseModel):
    """
    Standard error response model.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(..., description="Error occurrence timestamp")
