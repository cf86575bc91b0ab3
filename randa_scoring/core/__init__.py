"""
Core Package - RANDA Scoring
randa_scoring/core/__init__.py

Core infrastructure: exceptions, logging. Dependencies live in
randa_scoring.core.dependencies (they import the scoring service, which
itself imports the exceptions below).
"""

from randa_scoring.core.exceptions import (
    MeasureLimitException,
    ScoringException,
    ThresholdOverflowException,
    UnknownElementException,
    UnknownMeasureException,
    UnknownStandardException,
)
from randa_scoring.core.logging import configure_logging

__all__ = [
    # Exceptions
    "MeasureLimitException",
    "ScoringException",
    "ThresholdOverflowException",
    "UnknownElementException",
    "UnknownMeasureException",
    "UnknownStandardException",
    # Logging
    "configure_logging",
]
