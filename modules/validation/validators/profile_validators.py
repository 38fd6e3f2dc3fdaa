"""
Profile validators.

Field-level checks on the descriptive fields of each record type. They run
after the value, document and hierarchy validators, so their violations
come last in a report:
- ConfigurationProfileValidator: category, key, description
- SupplierProfileValidator: names, address, contact details, qualification
- CategoryProfileValidator: name, description
- PositionProfileValidator: code, name, description, level, salary
"""

import re
from typing import Any, Dict, List, Optional

from modules.validation import checkers
from modules.validation.core.base import BaseValidator, Violation, ViolationKind
from modules.validation.core.registry import register_validator


_LEGAL_NAME_CHARS = re.compile(r"[a-zA-ZáéíóúÁÉÍÓÚñÑ0-9&.,()\- ]+")
_ADDRESS_CHARS = re.compile(r"[a-zA-Z0-9\s\-.,#/]+")
_CONTACT_CHARS = re.compile(r"[a-zA-Z\s]+")
_CATEGORY_TEXT_CHARS = re.compile(r"[A-Za-zÁÉÍÓÚáéíóúÑñ\s.,-]+")


class ProfileValidator(BaseValidator):
    """Shared helpers for field-by-field profile checks"""

    stage = 3

    def _required(self, record: Any, field: str, label: str) -> Optional[Violation]:
        if checkers.is_blank(self._get_field_value(record, field)):
            return Violation(
                field=field,
                kind=ViolationKind.MISSING_REQUIRED,
                message=f"{label} is required",
            )
        return None

    def _pattern(self, field: str, value: str, pattern: re.Pattern, message: str) -> Optional[Violation]:
        if pattern.fullmatch(value) is None:
            return Violation(
                field=field,
                kind=ViolationKind.PATTERN_MISMATCH,
                message=message,
                actual_value=value,
                expected_value=pattern.pattern,
            )
        return None

    def _length(
        self,
        field: str,
        value: str,
        label: str,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
    ) -> Optional[Violation]:
        if checkers.length_between(value, min_length, max_length):
            return None
        if max_length is None:
            expected = f"at least {min_length}"
        else:
            expected = f"between {min_length} and {max_length}"
        return Violation(
            field=field,
            kind=ViolationKind.FORMAT_LENGTH,
            message=f"{label} must have {expected} characters",
            actual_value=len(value),
            expected_value={"min": min_length, "max": max_length},
        )

    def _minimum(self, record: Any, field: str, label: str, minimum: float) -> Optional[Violation]:
        raw = self._get_field_value(record, field)
        if checkers.is_blank(raw):
            return Violation(
                field=field,
                kind=ViolationKind.MISSING_REQUIRED,
                message=f"{label} is required",
            )
        number = checkers.parse_number(raw)
        if number is None:
            return Violation(
                field=field,
                kind=ViolationKind.TYPE_MISMATCH,
                message=f"{label} must be a number",
                actual_value=raw,
                expected_value="number",
            )
        if not checkers.in_range(number, minimum=minimum):
            return Violation(
                field=field,
                kind=ViolationKind.OUT_OF_RANGE,
                message=f"{label} must be {minimum:g} or greater",
                actual_value=number,
                expected_value={"min": minimum, "max": None},
            )
        return None

    @staticmethod
    def _collect(*checks: Optional[Violation]) -> List[Violation]:
        return [v for v in checks if v is not None]


@register_validator("configuration_profile")
class ConfigurationProfileValidator(ProfileValidator):
    """
    Required descriptive fields of a configuration entry.

    The category is a free-text grouping label and may not contain digits.
    """

    def validate(
        self,
        record: Any,
        context: Optional[Dict[str, Any]] = None
    ) -> List[Violation]:
        violations = []

        category = self._get_field_value(record, 'category')
        missing = self._required(record, 'category', "Category")
        if missing:
            violations.append(missing)
        elif checkers.contains_digit(category):
            violations.append(Violation(
                field='category',
                kind=ViolationKind.PATTERN_MISMATCH,
                message="Category cannot contain digits",
                actual_value=category,
            ))

        violations.extend(self._collect(
            self._required(record, 'key', "Key"),
            self._required(record, 'description', "Description"),
        ))
        return violations


@register_validator("supplier_profile")
class SupplierProfileValidator(ProfileValidator):
    """
    Descriptive and contact fields of a supplier.

    Example:
        - validator: supplier_profile
    """

    def validate(
        self,
        record: Any,
        context: Optional[Dict[str, Any]] = None
    ) -> List[Violation]:
        return self._collect(
            self._check_legal_name(record),
            self._check_trade_name(record),
            self._check_address(record),
            self._check_phone(record),
            self._check_email(record),
            self._check_main_contact(record),
            self._check_website(record),
            self._check_qualification(record),
        )

    def _check_legal_name(self, record: Any) -> Optional[Violation]:
        missing = self._required(record, 'legal_name', "Legal name")
        if missing:
            return missing
        value = self._get_field_value(record, 'legal_name').strip()
        return (
            self._length('legal_name', value, "Legal name", 3, 100)
            or self._pattern(
                'legal_name', value, _LEGAL_NAME_CHARS,
                "Legal name may only contain letters, digits, spaces and & . , ( ) -",
            )
            or self._must_contain_letter('legal_name', value, "Legal name")
        )

    def _check_trade_name(self, record: Any) -> Optional[Violation]:
        missing = self._required(record, 'trade_name', "Trade name")
        if missing:
            return missing
        value = self._get_field_value(record, 'trade_name').strip()
        return (
            self._length('trade_name', value, "Trade name", 2)
            or self._must_contain_letter('trade_name', value, "Trade name")
        )

    def _check_address(self, record: Any) -> Optional[Violation]:
        missing = self._required(record, 'address', "Address")
        if missing:
            return missing
        value = self._get_field_value(record, 'address').strip()
        violation = (
            self._length('address', value, "Address", 5, 200)
            or self._pattern(
                'address', value, _ADDRESS_CHARS,
                "Address may only contain letters, digits, spaces and - . , # /",
            )
        )
        if violation:
            return violation
        if not (checkers.contains_letter(value) and checkers.contains_digit(value)):
            return Violation(
                field='address',
                kind=ViolationKind.PATTERN_MISMATCH,
                message="Address must contain both letters and numbers",
                actual_value=value,
            )
        return None

    def _check_phone(self, record: Any) -> Optional[Violation]:
        missing = self._required(record, 'phone', "Phone")
        if missing:
            return missing
        value = self._get_field_value(record, 'phone')
        if not checkers.is_peruvian_mobile(value):
            return Violation(
                field='phone',
                kind=ViolationKind.PATTERN_MISMATCH,
                message="Phone must be a Peruvian mobile number (9 digits starting with 9)",
                actual_value=value,
            )
        return None

    def _check_email(self, record: Any) -> Optional[Violation]:
        missing = self._required(record, 'email', "Email")
        if missing:
            return missing
        value = self._get_field_value(record, 'email')
        if not checkers.is_email(value):
            return Violation(
                field='email',
                kind=ViolationKind.PATTERN_MISMATCH,
                message="Email must have a valid format (e.g. user@domain.com)",
                actual_value=value,
            )
        return None

    def _check_main_contact(self, record: Any) -> Optional[Violation]:
        missing = self._required(record, 'main_contact', "Main contact")
        if missing:
            return missing
        value = self._get_field_value(record, 'main_contact').strip()
        return (
            self._length('main_contact', value, "Main contact", 3)
            or self._pattern(
                'main_contact', value, _CONTACT_CHARS,
                "Main contact may only contain letters and spaces",
            )
        )

    def _check_website(self, record: Any) -> Optional[Violation]:
        value = self._get_field_value(record, 'website')
        if checkers.is_blank(value):
            return None
        if not checkers.is_url(value):
            return Violation(
                field='website',
                kind=ViolationKind.PATTERN_MISMATCH,
                message="Website must be a valid URL",
                actual_value=value,
            )
        return None

    def _check_qualification(self, record: Any) -> Optional[Violation]:
        value = self._get_field_value(record, 'qualification')
        if checkers.is_blank(value):
            return None
        number = checkers.parse_number(value)
        if number is None:
            return Violation(
                field='qualification',
                kind=ViolationKind.TYPE_MISMATCH,
                message="Qualification must be a number",
                actual_value=value,
                expected_value="number",
            )
        if not checkers.in_range(number, 1, 5):
            return Violation(
                field='qualification',
                kind=ViolationKind.OUT_OF_RANGE,
                message="Qualification must be between 1 and 5",
                actual_value=value,
                expected_value={"min": 1, "max": 5},
            )
        return None

    def _must_contain_letter(self, field: str, value: str, label: str) -> Optional[Violation]:
        if checkers.contains_letter(value):
            return None
        return Violation(
            field=field,
            kind=ViolationKind.PATTERN_MISMATCH,
            message=f"{label} must contain at least one letter",
            actual_value=value,
        )


@register_validator("category_profile")
class CategoryProfileValidator(ProfileValidator):
    """Name and description of a category: letters, spaces and . , - only"""

    def validate(
        self,
        record: Any,
        context: Optional[Dict[str, Any]] = None
    ) -> List[Violation]:
        return self._collect(
            self._check_text(record, 'name', "Name", 3, 50),
            self._check_text(record, 'description', "Description", 5, 200),
        )

    def _check_text(self, record: Any, field: str, label: str, min_length: int, max_length: int) -> Optional[Violation]:
        missing = self._required(record, field, label)
        if missing:
            return missing
        value = self._get_field_value(record, field)
        return (
            self._pattern(
                field, value, _CATEGORY_TEXT_CHARS,
                f"{label} may only contain letters, spaces and . , -",
            )
            or self._length(field, value, label, min_length, max_length)
        )


@register_validator("position_profile")
class PositionProfileValidator(ProfileValidator):
    """Position code, name, description, hierarchical level and base salary"""

    def validate(
        self,
        record: Any,
        context: Optional[Dict[str, Any]] = None
    ) -> List[Violation]:
        return self._collect(
            self._check_code(record),
            self._check_min_length(record, 'name', "Name", 5),
            self._check_min_length(record, 'description', "Description", 5),
            self._minimum(record, 'hierarchical_level', "Hierarchical level", 1),
            self._minimum(record, 'base_salary', "Base salary", 1),
        )

    def _check_code(self, record: Any) -> Optional[Violation]:
        missing = self._required(record, 'position_code', "Position code")
        if missing:
            return missing
        value = self._get_field_value(record, 'position_code')
        if any(ch.isspace() for ch in value):
            return Violation(
                field='position_code',
                kind=ViolationKind.PATTERN_MISMATCH,
                message="Position code cannot contain spaces",
                actual_value=value,
            )
        return self._length('position_code', value, "Position code", 4)

    def _check_min_length(self, record: Any, field: str, label: str, min_length: int) -> Optional[Violation]:
        missing = self._required(record, field, label)
        if missing:
            return missing
        return self._length(field, self._get_field_value(record, field), label, min_length)
