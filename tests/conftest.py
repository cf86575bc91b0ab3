# tests/conftest.py

"""
Pytest Fixtures - Shared test configurations and input records for the engine and API

SAMPLE RECORD REFERENCE (the "Load sample data" record):
- Weights:   25 / 25 / 25 / 25
- Elements:  all 17 at level 4 (3 points each)
- Measures:  15% Expected, 15% More Than Expected
- Expected:  PP 525.00 Accomplished, MSL 225.00 More Than Expected, Final 750.00 Effective
"""

import pytest
from fastapi.testclient import TestClient

from randa_scoring.main import app
from randa_scoring.models.enumerations import MSLRating
from randa_scoring.scoring.evaluation_service import EvaluationService
from randa_scoring.scoring.form import EvaluationInput, MeasureEntry
from randa_scoring.scoring.rubric import ELEMENT_KEYS


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture(scope="module")
def client():
    """Create a TestClient for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def service():
    return EvaluationService()


@pytest.fixture
def all_levels():
    """Factory: every element at the same level."""
    def _make(level):
        return {key: level for key in ELEMENT_KEYS}
    return _make


@pytest.fixture
def sample_measures():
    return (
        MeasureEntry(weight=15.0, rating=MSLRating.EXPECTED, measure_id=1),
        MeasureEntry(weight=15.0, rating=MSLRating.MORE_THAN_EXPECTED, measure_id=2),
    )


@pytest.fixture
def sample_input(all_levels, sample_measures):
    """Complete record that passes every gate."""
    return EvaluationInput(
        pp_weights=(25.0, 25.0, 25.0, 25.0),
        element_levels=all_levels(4),
        measures=sample_measures,
    )


@pytest.fixture
def blank_input():
    """Freshly reset form: no weights, no levels, two blank measures."""
    return EvaluationInput.from_raw(
        pp_weights=[],
        element_levels={},
        measures=[{"weight": None, "rating": None}, {"weight": None, "rating": None}],
    )


# =============================================================================
# API PAYLOAD FIXTURES
# =============================================================================

@pytest.fixture
def sample_payload():
    """Sample record as an API request body."""
    return {
        "pp_weights": [25, 25, 25, 25],
        "element_levels": {key: 4 for key in ELEMENT_KEYS},
        "measures": [
            {"weight": 15, "rating": "Expected"},
            {"weight": 15, "rating": "More Than Expected"},
        ],
    }


@pytest.fixture
def incomplete_payload(sample_payload):
    """Sample record with one element left unset."""
    levels = dict(sample_payload["element_levels"])
    levels["s3f"] = None
    return {**sample_payload, "element_levels": levels}
