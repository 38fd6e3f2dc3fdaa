"""
Unit tests for the type-driven value validator.
"""

import pytest

from modules.validation import (
    BooleanSpecification,
    MalformedSpecificationError,
    NumberSpecification,
    TextSpecification,
    ViolationKind,
    validate_value,
)


class TestNumberValues:
    """Test number specifications."""

    def test_value_inside_range(self):
        spec = NumberSpecification(minimum=1, maximum=10)
        assert validate_value(spec, 10) == []
        assert validate_value(spec, "1") == []

    def test_value_outside_range(self):
        spec = NumberSpecification(minimum=1, maximum=10)

        violations = validate_value(spec, 11)

        assert [v.kind for v in violations] == [ViolationKind.OUT_OF_RANGE]
        assert violations[0].field == "value"
        assert violations[0].message == "Field 'value' must be between 1 and 10"

    def test_in_range_but_not_allowed(self):
        spec = NumberSpecification(minimum=0, maximum=100, allowed_values=[10, 20, 30])

        violations = validate_value(spec, 15)

        assert [v.kind for v in violations] == [ViolationKind.SET_MEMBERSHIP]

    def test_allowed_but_out_of_range(self):
        # membership never exempts a value from the range check
        spec = NumberSpecification(minimum=0, maximum=10, allowed_values=[50])

        violations = validate_value(spec, 50)

        assert [v.kind for v in violations] == [ViolationKind.OUT_OF_RANGE]

    def test_range_and_membership_both_reported(self):
        spec = NumberSpecification(minimum=0, maximum=10, allowed_values=[5])

        violations = validate_value(spec, 99)

        assert [v.kind for v in violations] == [ViolationKind.OUT_OF_RANGE, ViolationKind.SET_MEMBERSHIP]

    def test_numeric_string_matches_allowed_value(self):
        spec = NumberSpecification(allowed_values=[2.5])
        assert validate_value(spec, "2.5") == []

    def test_open_ended_range(self):
        spec = NumberSpecification(minimum=0)

        assert validate_value(spec, 1e9) == []
        violations = validate_value(spec, -1)
        assert violations[0].message == "Field 'value' must be greater than or equal to 0"

    @pytest.mark.parametrize("candidate", ["abc", True, "nan", [1]])
    def test_not_a_number(self, candidate):
        violations = validate_value(NumberSpecification(), candidate)
        assert [v.kind for v in violations] == [ViolationKind.TYPE_MISMATCH]


class TestBooleanValues:
    """Test boolean specifications."""

    @pytest.mark.parametrize("candidate", [True, False, "true", "false"])
    def test_boolean_literals(self, candidate):
        assert validate_value(BooleanSpecification(), candidate) == []

    @pytest.mark.parametrize("candidate", ["yes", 1, "True"])
    def test_not_a_boolean(self, candidate):
        violations = validate_value(BooleanSpecification(), candidate)
        assert [v.kind for v in violations] == [ViolationKind.TYPE_MISMATCH]

    def test_not_allowed(self):
        spec = BooleanSpecification(allowed_values=[True])

        violations = validate_value(spec, "false")

        assert [v.kind for v in violations] == [ViolationKind.SET_MEMBERSHIP]
        assert violations[0].message == "Field 'value' must be one of: true"


class TestTextValues:
    """Test text specifications."""

    def test_full_pattern_match_required(self):
        spec = TextSpecification(pattern="[0-9]+")

        assert validate_value(spec, "123") == []
        violations = validate_value(spec, "123abc")
        assert [v.kind for v in violations] == [ViolationKind.PATTERN_MISMATCH]

    def test_membership(self):
        spec = TextSpecification(pattern="^[a-z]+$", allowed_values=["red", "green"])

        assert validate_value(spec, "red") == []
        violations = validate_value(spec, "blue")
        assert [v.kind for v in violations] == [ViolationKind.SET_MEMBERSHIP]

    def test_pattern_and_membership_both_reported(self):
        spec = TextSpecification(pattern="^[a-z]+$", allowed_values=["red"])

        violations = validate_value(spec, "RED")

        assert [v.kind for v in violations] == [ViolationKind.PATTERN_MISMATCH, ViolationKind.SET_MEMBERSHIP]

    def test_unrestricted_text(self):
        assert validate_value(TextSpecification(), "anything at all") == []

    def test_non_text_candidate(self):
        violations = validate_value(TextSpecification(), 42)
        assert [v.kind for v in violations] == [ViolationKind.TYPE_MISMATCH]


class TestCommonBehaviour:
    """Test behaviour shared by every data type."""

    @pytest.mark.parametrize("spec", [TextSpecification(), NumberSpecification(), BooleanSpecification()])
    @pytest.mark.parametrize("candidate", [None, "", "  "])
    def test_missing_value(self, spec, candidate):
        violations = validate_value(spec, candidate)
        assert [v.kind for v in violations] == [ViolationKind.MISSING_REQUIRED]

    def test_idempotent(self):
        spec = NumberSpecification(minimum=0, maximum=10, allowed_values=[1, 2])

        first = validate_value(spec, 42)
        second = validate_value(spec, 42)

        assert first == second
        assert [v.to_dict() for v in first] == [v.to_dict() for v in second]

    def test_custom_field_name(self):
        violations = validate_value(NumberSpecification(maximum=1), 2, field="max_items")
        assert violations[0].field == "max_items"

    def test_malformed_specification_raises(self):
        spec = NumberSpecification.model_construct(minimum=5, maximum=1, allowed_values=[])

        with pytest.raises(MalformedSpecificationError):
            validate_value(spec, 3)
