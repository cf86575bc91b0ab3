"""
Custom Exceptions - RANDA Scoring
randa_scoring/core/exceptions.py

Exception classes for the scoring engine and its input record.
"""


class ScoringException(Exception):
    """Base exception for scoring operations."""

    pass


class ThresholdOverflowException(ScoringException):
    """Earned points exceed the highest breakpoint of a standard."""

    def __init__(self, standard_id: str, earned: int, ceiling: int):
        self.standard_id = standard_id
        self.earned = earned
        self.ceiling = ceiling
        super().__init__(
            f"{standard_id}: earned points {earned} exceed top breakpoint {ceiling}"
        )


class MeasureLimitException(ScoringException):
    """Adding or removing a measure would leave the allowed range."""

    def __init__(self, count: int, limit: int, action: str):
        self.count = count
        self.limit = limit
        self.action = action
        super().__init__(f"Cannot {action} measure: {count} present, limit is {limit}")


class UnknownElementException(ScoringException):
    """Element key is not part of the rubric."""

    def __init__(self, element_key: str):
        self.element_key = element_key
        super().__init__(f"Unknown element '{element_key}'")


class UnknownStandardException(ScoringException):
    """Standard index is outside the rubric."""

    def __init__(self, standard_index: int):
        self.standard_index = standard_index
        super().__init__(f"Unknown standard index {standard_index}")


class UnknownMeasureException(ScoringException):
    """Measure id is not present on the input record."""

    def __init__(self, measure_id: int):
        self.measure_id = measure_id
        super().__init__(f"Measure with ID {measure_id} not found")
