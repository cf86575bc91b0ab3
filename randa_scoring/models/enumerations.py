from enum import Enum
from typing import Any

class PerformanceRating(str, Enum):
    """Standard-level and Professional Practices rating labels."""
    EXEMPLARY = "Exemplary"
    ACCOMPLISHED = "Accomplished"
    PROFICIENT = "Proficient"
    PARTIALLY_PROFICIENT = "Partially Proficient"
    BASIC = "Basic"

class MSLRating(str, Enum):
    LESS_THAN_EXPECTED = "Less Than Expected"
    EXPECTED = "Expected"
    MORE_THAN_EXPECTED = "More Than Expected"

class EffectivenessRating(str, Enum):
    HIGHLY_EFFECTIVE = "Highly Effective"
    EFFECTIVE = "Effective"
    PARTIALLY_EFFECTIVE = "Partially Effective"
    INEFFECTIVE = "Ineffective"

# Sentinels reported in place of a label
RATING_ERROR = "ERROR"          # earned points above the top breakpoint
RATING_NOT_AVAILABLE = "N/A"    # score below every band minimum


def label_text(label: Any) -> str:
    """Plain string for a rating label (enum member or sentinel)."""
    return getattr(label, "value", label)
