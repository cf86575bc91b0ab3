# tests/test_validation.py
"""
The three validation gates and the progress steps derived from them.
"""

from decimal import Decimal

from randa_scoring.models.enumerations import MSLRating
from randa_scoring.scoring.form import EvaluationInput, MeasureEntry
from randa_scoring.scoring.rubric import ELEMENT_KEYS
from randa_scoring.scoring.validation import (
    elements_complete,
    measures_valid,
    validate,
    validate_weights,
)


def _measure(weight, rating=MSLRating.EXPECTED):
    return MeasureEntry(weight=weight, rating=rating)


class TestValidateWeights:

    def test_exact_total_is_valid(self):
        check = validate_weights([25, 25, 25, 25], 100)
        assert check.valid is True
        assert check.total == Decimal("100")
        assert check.delta == Decimal("0")

    def test_within_tolerance(self):
        assert validate_weights([25, 25, 25, 24.995], 100).valid is True

    def test_tolerance_is_strict(self):
        """A delta of exactly 0.01 fails."""
        assert validate_weights([25, 25, 25, 24.99], 100).valid is False

    def test_float_noise_does_not_matter(self):
        assert validate_weights([33.33, 33.33, 33.34], 100).valid is True
        assert validate_weights([0.1] * 10 + [99], 100).valid is True

    def test_messages(self):
        assert validate_weights([25, 25, 25, 25], 100).message == "✓ Total equals 100%"
        assert (
            validate_weights([25, 25, 25, 20], 100).message
            == "⚠ Total must equal 100% (currently 95.0%)"
        )
        assert validate_weights([10, 10], 30).message == "⚠ Total must equal 30% (currently 20.0%)"

    def test_huge_total_message(self):
        check = validate_weights([1e30], 100)
        assert check.valid is False
        assert check.message == f"⚠ Total must equal 100% (currently {10 ** 30}.0%)"


class TestElementsComplete:

    def test_all_set(self):
        assert elements_complete({k: 1 for k in ELEMENT_KEYS}) is True

    def test_one_missing(self):
        levels = {k: 3 for k in ELEMENT_KEYS}
        levels["s2d"] = None
        assert elements_complete(levels) is False

    def test_empty(self):
        assert elements_complete({}) is False


class TestMeasuresValid:

    def test_two_rated_measures_totalling_30(self):
        assert measures_valid([_measure(15), _measure(15)]) is True

    def test_five_measures(self):
        assert measures_valid([_measure(6)] * 5) is True

    def test_too_few(self):
        assert measures_valid([_measure(30)]) is False

    def test_too_many(self):
        assert measures_valid([_measure(5)] * 6) is False

    def test_unrated_measure(self):
        assert measures_valid([_measure(15), _measure(15, rating=None)]) is False

    def test_weights_off_target(self):
        assert measures_valid([_measure(15), _measure(14)]) is False

    def test_blank_weight_counts_as_zero(self):
        assert measures_valid([_measure(30), _measure(None)]) is True


class TestValidate:

    def test_complete_record_is_ready(self, sample_input):
        status = validate(sample_input)
        assert status.pp_weights_valid and status.elements_complete and status.measures_valid
        assert status.pp_ready and status.msl_ready and status.ready
        assert status.pp_weight_sum == Decimal("100.0")
        assert status.msl_weight_sum == Decimal("30.0")

    def test_blank_record(self, blank_input):
        status = validate(blank_input)
        assert status.ready is False
        assert status.pp_ready is False
        assert status.msl_ready is False
        assert status.pp_weight_sum == Decimal("0")

    def test_gates_are_independent(self, sample_input):
        record = EvaluationInput(
            pp_weights=(50.0, 50.0, 50.0, 50.0),
            element_levels=sample_input.element_levels,
            measures=sample_input.measures,
        )
        status = validate(record)
        assert status.pp_weights_valid is False
        assert status.elements_complete is True
        assert status.measures_valid is True
        assert status.pp_ready is False
        assert status.msl_ready is True
        assert status.ready is False


class TestProgressSteps:

    def test_first_step_current_on_blank_record(self, blank_input):
        steps = validate(blank_input).steps
        assert [s.number for s in steps] == [1, 2, 3, 4]
        assert steps[0].current is True
        assert not any(s.current for s in steps[1:])

    def test_second_step_current_after_weights(self, blank_input):
        record = EvaluationInput(
            pp_weights=(25.0, 25.0, 25.0, 25.0),
            element_levels=blank_input.element_levels,
            measures=blank_input.measures,
        )
        steps = validate(record).steps
        assert steps[0].complete is True
        assert steps[1].current is True

    def test_all_complete(self, sample_input):
        steps = validate(sample_input).steps
        assert all(s.complete for s in steps)
        assert not any(s.current for s in steps)
