"""
Type-driven value validators.

Validate a configuration value against the data type its specification
declares and the constraints that type allows:
- number: parseable, inside [minimum, maximum], member of allowed values
- boolean: one of the two boolean literals, member of allowed values
- text: full pattern match, member of allowed values

Range and membership are independent checks; a value can fail both.
"""

from typing import Any, Dict, List, Optional

from modules.validation import checkers
from modules.validation.core.base import BaseValidator, Violation, ViolationKind
from modules.validation.core.registry import register_validator
from modules.validation.core.specification import (
    BooleanSpecification,
    ConstraintSpecification,
    NumberSpecification,
    TextSpecification,
    ensure_well_formed,
)


def _format_number(value: float) -> str:
    return f"{value:g}"


def _describe_range(minimum: Optional[float], maximum: Optional[float]) -> str:
    if minimum is not None and maximum is not None:
        return f"between {_format_number(minimum)} and {_format_number(maximum)}"
    if minimum is not None:
        return f"greater than or equal to {_format_number(minimum)}"
    return f"less than or equal to {_format_number(maximum)}"


def _validate_number(spec: NumberSpecification, candidate: Any, field: str) -> List[Violation]:
    number = checkers.parse_number(candidate)
    if number is None:
        return [Violation(
            field=field,
            kind=ViolationKind.TYPE_MISMATCH,
            message=f"Field '{field}' must be a number",
            actual_value=candidate,
            expected_value="number",
        )]

    violations = []
    if not checkers.in_range(number, spec.minimum, spec.maximum):
        violations.append(Violation(
            field=field,
            kind=ViolationKind.OUT_OF_RANGE,
            message=f"Field '{field}' must be {_describe_range(spec.minimum, spec.maximum)}",
            actual_value=number,
            expected_value={"min": spec.minimum, "max": spec.maximum},
        ))

    if spec.allowed_values and not checkers.is_member(number, spec.allowed_values):
        allowed = ", ".join(_format_number(v) for v in spec.allowed_values)
        violations.append(Violation(
            field=field,
            kind=ViolationKind.SET_MEMBERSHIP,
            message=f"Field '{field}' must be one of: {allowed}",
            actual_value=number,
            expected_value=list(spec.allowed_values),
        ))

    return violations


def _validate_boolean(spec: BooleanSpecification, candidate: Any, field: str) -> List[Violation]:
    flag = checkers.parse_boolean(candidate)
    if flag is None:
        return [Violation(
            field=field,
            kind=ViolationKind.TYPE_MISMATCH,
            message=f"Field '{field}' must be true or false",
            actual_value=candidate,
            expected_value="boolean",
        )]

    if spec.allowed_values and not checkers.is_member(flag, spec.allowed_values):
        allowed = ", ".join(str(v).lower() for v in spec.allowed_values)
        return [Violation(
            field=field,
            kind=ViolationKind.SET_MEMBERSHIP,
            message=f"Field '{field}' must be one of: {allowed}",
            actual_value=flag,
            expected_value=list(spec.allowed_values),
        )]

    return []


def _validate_text(spec: TextSpecification, candidate: Any, field: str) -> List[Violation]:
    if not isinstance(candidate, str):
        return [Violation(
            field=field,
            kind=ViolationKind.TYPE_MISMATCH,
            message=f"Field '{field}' must be text",
            actual_value=type(candidate).__name__,
            expected_value="text",
        )]

    violations = []
    if spec.pattern and not checkers.full_match(spec.pattern, candidate):
        violations.append(Violation(
            field=field,
            kind=ViolationKind.PATTERN_MISMATCH,
            message=f"Field '{field}' does not match pattern '{spec.pattern}'",
            actual_value=candidate,
            expected_value=spec.pattern,
        ))

    if spec.allowed_values and not checkers.is_member(candidate, spec.allowed_values):
        allowed = ", ".join(spec.allowed_values)
        violations.append(Violation(
            field=field,
            kind=ViolationKind.SET_MEMBERSHIP,
            message=f"Field '{field}' must be one of: {allowed}",
            actual_value=candidate,
            expected_value=list(spec.allowed_values),
        ))

    return violations


_TYPE_VALIDATORS = {
    "number": _validate_number,
    "boolean": _validate_boolean,
    "text": _validate_text,
}


def validate_value(
    spec: ConstraintSpecification,
    candidate: Any,
    field: str = "value",
) -> List[Violation]:
    """
    Validate a candidate value against its constraint specification.

    Pure: the same arguments always produce the same violations.

    Callers that switch an entry's data type must clear both the allowed
    values and the stored value first (see ConfigurationEntry.with_data_type);
    this function never reaches into mutable state.

    Args:
        spec: Well-formed constraint specification
        candidate: Raw value as submitted (string from a form or typed)
        field: Field name used in violations

    Returns:
        Violations in check order (empty when the value is acceptable)

    Raises:
        MalformedSpecificationError: If the specification is structurally invalid
    """
    ensure_well_formed(spec)

    if checkers.is_blank(candidate):
        return [Violation(
            field=field,
            kind=ViolationKind.MISSING_REQUIRED,
            message=f"Field '{field}' is required",
            actual_value=candidate,
        )]

    return _TYPE_VALIDATORS[spec.data_type](spec, candidate, field)


@register_validator("configuration_value")
class ConfigurationValueValidator(BaseValidator):
    """
    Validate a configuration entry's value against its specification.

    Example:
        - validator: configuration_value
    """

    stage = 0

    def validate(
        self,
        record: Any,
        context: Optional[Dict[str, Any]] = None
    ) -> List[Violation]:
        spec = self._get_field_value(record, 'specification')
        value = self._get_field_value(record, 'value')
        return validate_value(spec, value, field=self.params.get('field', 'value'))
