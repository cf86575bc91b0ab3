"""
Dependencies - RANDA Scoring
randa_scoring/core/dependencies.py

FastAPI dependency injection for the scoring service.
"""

from functools import lru_cache

from randa_scoring.scoring.evaluation_service import EvaluationService


@lru_cache()
def get_evaluation_service() -> EvaluationService:
    """Get cached EvaluationService instance."""
    return EvaluationService()
