"""
Document identity validators.

Validate national identity and tax document numbers:

| Kind                  | Length | Characters     | Extra rule    |
|-----------------------|--------|----------------|---------------|
| TAX_ID (RUC)          | 11     | digits         | check digit   |
| NATIONAL_ID (DNI)     | 8      | digits         | not all zeros |
| FOREIGN_RESIDENT_CARD | 9      | letters+digits |               |
| PASSPORT              | 6-12   | letters+digits |               |

Format rules run first and at most one format violation is reported; the
semantic rule only runs on a well-formatted number.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from modules.validation import checkers
from modules.validation.core.base import BaseValidator, Violation, ViolationKind
from modules.validation.core.records import DocumentKind
from modules.validation.core.registry import register_validator


@dataclass(frozen=True)
class DocumentRule:
    """Format rule for one document kind"""
    min_length: int
    max_length: int
    alphanumeric: bool
    charset_label: str

    def describe_length(self) -> str:
        if self.min_length == self.max_length:
            return f"exactly {self.min_length}"
        return f"between {self.min_length} and {self.max_length}"


DOCUMENT_RULES: Dict[DocumentKind, DocumentRule] = {
    DocumentKind.TAX_ID: DocumentRule(11, 11, alphanumeric=False, charset_label="digits"),
    DocumentKind.NATIONAL_ID: DocumentRule(8, 8, alphanumeric=False, charset_label="digits"),
    DocumentKind.FOREIGN_RESIDENT_CARD: DocumentRule(9, 9, alphanumeric=True, charset_label="letters and digits"),
    DocumentKind.PASSPORT: DocumentRule(6, 12, alphanumeric=True, charset_label="letters and digits"),
}


def normalize_document(kind: DocumentKind, raw_value: str) -> str:
    """Drop all whitespace; letter-bearing kinds are compared upper-cased."""
    value = checkers.strip_whitespace(raw_value)
    if DOCUMENT_RULES[kind].alphanumeric:
        value = value.upper()
    return value


def _check_format(kind: DocumentKind, value: str, field: str) -> Optional[Violation]:
    rule = DOCUMENT_RULES[kind]
    label = kind.label

    charset_ok = checkers.is_alphanumeric(value) if rule.alphanumeric else checkers.is_digits(value)
    if not charset_ok:
        return Violation(
            field=field,
            kind=ViolationKind.PATTERN_MISMATCH,
            message=f"{label} must contain only {rule.charset_label}",
            actual_value=value,
            expected_value=rule.charset_label,
        )

    if not checkers.length_between(value, rule.min_length, rule.max_length):
        return Violation(
            field=field,
            kind=ViolationKind.FORMAT_LENGTH,
            message=f"{label} must have {rule.describe_length()} characters, got {len(value)}",
            actual_value=len(value),
            expected_value={"min": rule.min_length, "max": rule.max_length},
        )

    return None


def _check_tax_id(value: str, field: str) -> Optional[Violation]:
    if checkers.has_valid_tax_id_check_digit(value):
        return None
    return Violation(
        field=field,
        kind=ViolationKind.CHECKSUM_FAILURE,
        message="RUC is invalid (incorrect check digit)",
        actual_value=value[10],
        expected_value=str(checkers.tax_id_check_digit(value)),
    )


def _check_national_id(value: str, field: str) -> Optional[Violation]:
    if not checkers.is_all_same_char(value, "0"):
        return None
    return Violation(
        field=field,
        kind=ViolationKind.OUT_OF_RANGE,
        message=f"DNI is invalid (cannot be {value})",
        actual_value=value,
    )


_SEMANTIC_CHECKS: Dict[DocumentKind, Callable[[str, str], Optional[Violation]]] = {
    DocumentKind.TAX_ID: _check_tax_id,
    DocumentKind.NATIONAL_ID: _check_national_id,
}


def validate_document(
    kind: Any,
    raw_value: Optional[str],
    exclude_self: Optional[str] = None,
    field: str = "document_number",
) -> List[Violation]:
    """
    Validate a document number for its kind.

    Args:
        kind: DocumentKind, its value, console type id (1-4) or abbreviation
        raw_value: Document number as typed
        exclude_self: Previously stored number of the same record. When it
            normalizes to the same value, the check digit is not verified so
            an unchanged legacy RUC can be resubmitted. Format rules always run.
        field: Field name used in violations

    Returns:
        Violations (at most one)
    """
    try:
        kind = DocumentKind(kind)
    except ValueError:
        return [Violation(
            field="document_kind",
            kind=ViolationKind.TYPE_MISMATCH,
            message=f"Unknown document type: {kind}",
            actual_value=kind,
            expected_value=[k.value for k in DocumentKind],
        )]

    if checkers.is_blank(raw_value):
        return [Violation(
            field=field,
            kind=ViolationKind.MISSING_REQUIRED,
            message=f"{kind.label} is required",
            actual_value=raw_value,
        )]

    value = normalize_document(kind, str(raw_value))

    format_violation = _check_format(kind, value, field)
    if format_violation is not None:
        return [format_violation]

    unchanged = exclude_self is not None and normalize_document(kind, str(exclude_self)) == value
    if kind is DocumentKind.TAX_ID and unchanged:
        return []

    semantic_check = _SEMANTIC_CHECKS.get(kind)
    if semantic_check is None:
        return []

    violation = semantic_check(value, field)
    return [violation] if violation is not None else []


@register_validator("document_identity")
class DocumentIdentityValidator(BaseValidator):
    """
    Validate a supplier's identity document.

    Example:
        - validator: document_identity
    """

    stage = 1

    def validate(
        self,
        record: Any,
        context: Optional[Dict[str, Any]] = None
    ) -> List[Violation]:
        kind = self._get_field_value(record, 'document_kind')
        if kind is None:
            return [Violation(
                field='document_kind',
                kind=ViolationKind.MISSING_REQUIRED,
                message="Document type is required",
            )]

        return validate_document(
            kind,
            self._get_field_value(record, 'document_number'),
            exclude_self=self._get_field_value(record, 'original_document_number'),
        )
