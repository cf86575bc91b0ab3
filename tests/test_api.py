# tests/test_api.py

"""
API Endpoint Tests - Tests for all FastAPI endpoints
"""

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from randa_scoring.core.exceptions import MeasureLimitException, ScoringException
from randa_scoring.main import scoring_exception_handler
from randa_scoring.scoring.rubric import ELEMENT_KEYS
from randa_scoring.services.report_generator import INCOMPLETE_MESSAGE



# ROOT & HEALTH ENDPOINT TESTS


class TestHealthEndpoint:
    """Tests for GET /health and GET /."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert "timestamp" in data

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "running"



# RUBRIC ENDPOINT TESTS


class TestRubricEndpoint:
    """Tests for GET /api/v1/rubric."""

    def test_standards(self, client):
        response = client.get("/api/v1/rubric")
        assert response.status_code == status.HTTP_200_OK

        standards = response.json()["standards"]
        assert [s["id"] for s in standards] == ["s1", "s2", "s3", "s4"]
        assert [len(s["element_keys"]) for s in standards] == [3, 4, 6, 4]
        assert standards[0]["breakpoints"] == [1, 4, 7, 10, 12]
        assert standards[2]["max_points"] == 24

    def test_rating_tables(self, client):
        data = client.get("/api/v1/rubric").json()
        tables = data["rating_tables"]
        assert set(tables) == {"standard", "professional_practices", "student_learning", "final"}
        assert tables["final"][0] == {
            "min_score": 801.0, "max_score": 1000.0, "label": "Highly Effective",
        }

    def test_msl_values_and_limits(self, client):
        data = client.get("/api/v1/rubric").json()
        assert data["msl_values"] == {
            "Less Than Expected": 0.0,
            "Expected": 1.5,
            "More Than Expected": 3.0,
        }
        assert data["pp_weight_target"] == 100.0
        assert data["msl_weight_target"] == 30.0
        assert (data["min_measures"], data["max_measures"]) == (2, 5)



# SAMPLE ENDPOINT TESTS


class TestSampleEndpoint:
    """Tests for GET /api/v1/evaluations/sample."""

    def test_sample_record(self, client):
        response = client.get("/api/v1/evaluations/sample")
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["pp_weights"] == [25.0, 25.0, 25.0, 25.0]
        assert set(data["element_levels"]) == set(ELEMENT_KEYS)
        assert set(data["element_levels"].values()) == {4}
        assert [(m["weight"], m["rating"]) for m in data["measures"]] == [
            (15.0, "Expected"),
            (15.0, "More Than Expected"),
        ]

    def test_sample_round_trips_through_score(self, client):
        sample = client.get("/api/v1/evaluations/sample").json()
        response = client.post("/api/v1/evaluations/score", json=sample)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["final"]["total"] == 750.0



# SCORE ENDPOINT TESTS


class TestScoreEndpoint:
    """Tests for POST /api/v1/evaluations/score."""

    def test_complete_record(self, client, sample_payload):
        response = client.post("/api/v1/evaluations/score", json=sample_payload)
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["validation"]["ready"] is True

        pp = data["professional_practices"]
        assert pp["score"] == 525.0
        assert pp["percentage"] == 75.0
        assert pp["rating"] == "Accomplished"
        assert [s["weighted_score_700"] for s in pp["standards"]] == [131.25] * 4

        msl = data["student_learning"]
        assert msl["score"] == 225.0
        assert msl["rating"] == "More Than Expected"

        final = data["final"]
        assert final["total"] == 750.0
        assert final["rating"] == "Effective"
        assert final["msl_constraint_applied"] is False
        assert data["insight"].startswith("You are 343 points")

    def test_incomplete_record_withholds_final(self, client, incomplete_payload):
        response = client.post("/api/v1/evaluations/score", json=incomplete_payload)
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["validation"]["elements_complete"] is False
        assert data["validation"]["ready"] is False
        assert data["final"] is None
        assert data["insight"] is None

    def test_empty_body_scores_blank_record(self, client):
        response = client.post("/api/v1/evaluations/score", json={})
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["professional_practices"]["score"] == 0.0
        assert data["validation"]["steps"][0]["current"] is True
        assert data["validation"]["pp_weight_message"] == "⚠ Total must equal 100% (currently 0.0%)"

    def test_malformed_numbers_degrade(self, client, sample_payload):
        payload = {
            **sample_payload,
            "pp_weights": ["25", "25", "25", "abc"],
            "measures": [
                {"weight": "15", "rating": "expected"},
                {"weight": -4, "rating": "nonsense"},
            ],
        }
        response = client.post("/api/v1/evaluations/score", json=payload)
        assert response.status_code == status.HTTP_200_OK

        validation = response.json()["validation"]
        assert validation["pp_weight_sum"] == 75.0
        assert validation["pp_weights_valid"] is False
        assert validation["msl_weight_sum"] == 15.0
        assert validation["measures_valid"] is False

    def test_huge_weight_is_scored(self, client, sample_payload):
        payload = {**sample_payload, "pp_weights": ["1e30", 0, 0, 0]}
        response = client.post("/api/v1/evaluations/score", json=payload)
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["validation"]["pp_weights_valid"] is False
        assert data["final"] is None
        assert data["professional_practices"]["standards"][0]["weighted_score_700"] == 5.25e30

    def test_wrong_container_type_is_422(self, client):
        response = client.post("/api/v1/evaluations/score", json={"pp_weights": "abc"})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["details"]["field"].startswith("pp_weights")
        assert "timestamp" in data

    def test_malformed_json_is_400(self, client):
        response = client.post(
            "/api/v1/evaluations/score",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "INVALID_REQUEST"



# BREAKDOWN ENDPOINT TESTS


class TestBreakdownEndpoint:
    """Tests for POST /api/v1/evaluations/breakdown."""

    def test_download(self, client, sample_payload):
        response = client.post("/api/v1/evaluations/breakdown", json=sample_payload)
        assert response.status_code == status.HTTP_200_OK
        assert response.headers["content-type"].startswith("text/markdown")

        disposition = response.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="randa_breakdown_')
        assert disposition.endswith('.md"')

        assert "**Final Effectiveness Rating: Effective**" in response.text

    def test_incomplete_record(self, client, incomplete_payload):
        response = client.post("/api/v1/evaluations/breakdown", json=incomplete_payload)
        assert response.status_code == status.HTTP_200_OK
        assert response.text == INCOMPLETE_MESSAGE



# WEIGHT CHECK ENDPOINT TESTS


class TestWeightCheckEndpoint:
    """Tests for POST /api/v1/weights/check."""

    def test_valid_default_target(self, client):
        response = client.post("/api/v1/weights/check", json={"weights": [25, 25, 25, 25]})
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["valid"] is True
        assert data["total"] == 100.0
        assert data["message"] == "✓ Total equals 100%"

    def test_custom_target(self, client):
        response = client.post("/api/v1/weights/check", json={"weights": [10, 10], "target": 30})
        data = response.json()
        assert data["valid"] is False
        assert data["delta"] == 10.0
        assert data["message"] == "⚠ Total must equal 30% (currently 20.0%)"

    def test_strings_and_negatives(self, client):
        response = client.post(
            "/api/v1/weights/check", json={"weights": ["50", "x", -10, 50]}
        )
        assert response.json()["total"] == 100.0

    def test_huge_weight(self, client):
        response = client.post("/api/v1/weights/check", json={"weights": [1e30]})
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["valid"] is False
        assert data["total"] == 1e30
        assert data["message"].startswith("⚠ Total must equal 100% (currently 1000")

    def test_negative_target_is_422(self, client):
        response = client.post("/api/v1/weights/check", json={"weights": [1], "target": -1})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_missing_weights_is_422(self, client):
        response = client.post("/api/v1/weights/check", json={})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["details"]["field"] == "weights"



# EXCEPTION HANDLER TESTS


class TestScoringExceptionHandler:
    """ScoringException surfaces as 400 with the standard error body."""

    @pytest.fixture
    def failing_client(self):
        failing_app = FastAPI()
        failing_app.add_exception_handler(ScoringException, scoring_exception_handler)

        @failing_app.get("/fail")
        def fail():
            raise MeasureLimitException(5, 5, "add")

        with TestClient(failing_app) as test_client:
            yield test_client

    def test_maps_to_400(self, failing_client):
        response = failing_client.get("/fail")
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        data = response.json()
        assert data["error_code"] == "SCORING_ERROR"
        assert data["message"] == "Cannot add measure: 5 present, limit is 5"
        assert data["details"] == {"type": "MeasureLimitException"}
