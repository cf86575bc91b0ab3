"""
Evaluations Router - RANDA Scoring
randa_scoring/routers/evaluations.py

Stateless scoring endpoints. Every request carries the complete input
record; nothing is stored between calls.

Endpoints:
  GET  /rubric                    - standards, breakpoints, band tables
  GET  /evaluations/sample        - the sample input record
  POST /evaluations/score         - validation gates + PP / MSL / final results
  POST /evaluations/breakdown     - markdown calculation breakdown (.md download)
  POST /weights/check             - weight-sum check for any list and target
"""

import io
import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from randa_scoring.core.dependencies import get_evaluation_service
from randa_scoring.models.enumerations import label_text
from randa_scoring.models.evaluation import (
    EvaluationRequest,
    EvaluationResponse,
    FinalResultResponse,
    MeasureInput,
    MeasureScoreResponse,
    MSLResultResponse,
    PPResultResponse,
    ProgressStepResponse,
    RatingBandResponse,
    RubricResponse,
    StandardDefinitionResponse,
    StandardScoreResponse,
    ValidationStatusResponse,
    WeightCheckRequest,
    WeightCheckResponse,
)
from randa_scoring.scoring.evaluation_service import EvaluationReport, EvaluationService
from randa_scoring.scoring.form import EvaluationForm
from randa_scoring.scoring.rubric import (
    MAX_MEASURES,
    MIN_MEASURES,
    MSL_VALUES,
    MSL_WEIGHT_TARGET,
    PP_WEIGHT_TARGET,
    RATING_TABLES,
    STANDARDS,
)
from randa_scoring.scoring.utils import parse_weight
from randa_scoring.scoring.validation import WeightCheck, validate_weights
from randa_scoring.services.report_generator import generate_breakdown_report

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Evaluations"])


# =============================================================================
# Response builders
# =============================================================================

def _weight_check_response(check: WeightCheck) -> WeightCheckResponse:
    return WeightCheckResponse(
        valid=check.valid,
        total=float(check.total),
        delta=float(check.delta),
        target=float(check.target),
        message=check.message,
    )


def _to_response(report: EvaluationReport) -> EvaluationResponse:
    v, pp, msl, final = report.validation, report.pp, report.msl, report.final

    validation = ValidationStatusResponse(
        pp_weights_valid=v.pp_weights_valid,
        elements_complete=v.elements_complete,
        measures_valid=v.measures_valid,
        pp_weight_sum=float(v.pp_weight_sum),
        msl_weight_sum=float(v.msl_weight_sum),
        pp_ready=v.pp_ready,
        msl_ready=v.msl_ready,
        ready=v.ready,
        pp_weight_message=v.pp_weight_check.message if v.pp_weight_check else "",
        msl_weight_message=v.msl_weight_check.message if v.msl_weight_check else "",
        steps=[
            ProgressStepResponse(
                number=s.number, label=s.label, complete=s.complete, current=s.current
            )
            for s in v.steps
        ],
    )

    pp_response = PPResultResponse(
        base=float(pp.base),
        score=float(pp.score),
        percentage=float(pp.percentage),
        rating=label_text(pp.rating),
        standards=[
            StandardScoreResponse(
                standard_id=s.standard_id,
                name=s.name,
                earned=s.earned,
                possible=s.possible,
                ratio=float(s.ratio),
                weight=float(s.weight),
                weighted_score_700=float(s.weighted_score_700),
                base_contribution=float(s.base_contribution),
                rating=label_text(s.rating),
            )
            for s in pp.standards
        ],
    )

    msl_response = MSLResultResponse(
        base=float(msl.base),
        score=float(msl.score),
        percentage=float(msl.percentage),
        rating=label_text(msl.rating),
        measures=[
            MeasureScoreResponse(
                measure_id=m.measure_id,
                weight=float(m.weight),
                rating=label_text(m.rating),
                value=float(m.value),
                weighted_score_300=float(m.weighted_score_300),
            )
            for m in msl.measures
        ],
    )

    final_response = None
    if final is not None:
        final_response = FinalResultResponse(
            total=float(final.total),
            rating=label_text(final.rating),
            percentage=float(final.percentage),
            msl_constraint_applied=final.msl_constraint_applied,
        )

    return EvaluationResponse(
        validation=validation,
        professional_practices=pp_response,
        student_learning=msl_response,
        final=final_response,
        insight=report.insight,
        scored_at=datetime.now(timezone.utc),
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.get(
    "/rubric",
    response_model=RubricResponse,
    summary="Rubric definition",
    description="Standards with their element keys and breakpoints, every rating band table and the MSL rating values.",
)
def get_rubric() -> RubricResponse:
    return RubricResponse(
        standards=[
            StandardDefinitionResponse(
                id=std.id,
                name=std.name,
                element_keys=std.element_keys,
                max_points=std.max_points,
                breakpoints=list(std.breakpoints),
            )
            for std in STANDARDS
        ],
        rating_tables={
            name: [
                RatingBandResponse(
                    min_score=float(band.min_score),
                    max_score=float(band.max_score),
                    label=label_text(band.label),
                )
                for band in bands
            ]
            for name, bands in RATING_TABLES.items()
        },
        msl_values={label_text(rating): float(value) for rating, value in MSL_VALUES.items()},
        pp_weight_target=float(PP_WEIGHT_TARGET),
        msl_weight_target=float(MSL_WEIGHT_TARGET),
        min_measures=MIN_MEASURES,
        max_measures=MAX_MEASURES,
    )


@router.get(
    "/evaluations/sample",
    response_model=EvaluationRequest,
    summary="Sample evaluation input",
    description="Equal standard weights, every element at level 4 and two rated measures (15% Expected, 15% More Than Expected).",
)
def get_sample_evaluation() -> EvaluationRequest:
    form = EvaluationForm()
    form.load_sample()
    return EvaluationRequest(
        pp_weights=list(form.pp_weights),
        element_levels=dict(form.element_levels),
        measures=[
            MeasureInput(
                weight=m.weight,
                rating=label_text(m.rating) if m.rating else None,
                measure_id=m.measure_id,
            )
            for m in form.measures
        ],
    )


@router.post(
    "/evaluations/score",
    response_model=EvaluationResponse,
    summary="Score an evaluation",
    description="""
    Runs the three validation gates and computes the Professional Practices
    and Measures of Student Learning results. The final effectiveness rating
    is only returned when every gate passes.

    Malformed numbers degrade instead of failing: bad weights count as 0,
    levels outside 1-5 are unset, unknown measure ratings are unrated.
    """,
)
def score_evaluation(
    request: EvaluationRequest,
    service: EvaluationService = Depends(get_evaluation_service),
) -> EvaluationResponse:
    report = service.evaluate(request.to_input())
    logger.info(
        "Scored evaluation: ready=%s pp=%s msl=%s",
        report.validation.ready,
        report.pp.score,
        report.msl.score,
    )
    return _to_response(report)


@router.post(
    "/evaluations/breakdown",
    summary="Download calculation breakdown as .md file",
    description="""
    Scores the evaluation and returns a downloadable Markdown file with the
    per-standard and per-measure formulas and the final rating. Until every
    gate passes the file holds only a completion prompt.
    """,
    responses={
        200: {
            "content": {"text/markdown": {}},
            "description": "Downloadable Markdown breakdown file",
        }
    },
)
def download_breakdown(
    request: EvaluationRequest,
    service: EvaluationService = Depends(get_evaluation_service),
):
    report = service.evaluate(request.to_input())
    md_content = generate_breakdown_report(report)

    ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    filename = f"randa_breakdown_{ts}.md"

    encoded = md_content.encode("utf-8")
    buffer = io.BytesIO(encoded)
    buffer.seek(0)

    logger.info(f"Breakdown ready: {len(md_content)} chars, file={filename}")

    return StreamingResponse(
        content=buffer,
        media_type="text/markdown",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Content-Length": str(len(encoded)),
        },
    )


@router.post(
    "/weights/check",
    response_model=WeightCheckResponse,
    summary="Check a weight total",
    description="Valid when the weights sum to the target within 0.01. Unparseable or negative weights count as 0.",
)
def check_weights(request: WeightCheckRequest) -> WeightCheckResponse:
    weights: List[float] = [parse_weight(w) for w in request.weights]
    return _weight_check_response(validate_weights(weights, request.target))
