"""
Hierarchical relationship validators.

Validate a category's position in the category tree and its accounting
attributes. Only the immediate parent is inspected: a cycle running through
grandparents (A -> B -> A with compatible levels) is not detected.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from modules.validation import checkers
from modules.validation.core.base import BaseValidator, ValidationSeverity, Violation, ViolationKind
from modules.validation.core.registry import register_validator


# Inclusive bounds, in category field order
CATEGORY_BOUNDS: Dict[str, Tuple[float, float]] = {
    "annual_depreciation_pct": (10, 50),
    "useful_life_years": (2, 50),
    "residual_value_pct": (5, 30),
}

FIELD_LABELS = {
    "level": "Level",
    "parent_id": "Parent category",
    "accounting_account": "Accounting account",
    "annual_depreciation_pct": "Annual depreciation (%)",
    "useful_life_years": "Useful life (years)",
    "residual_value_pct": "Residual value (%)",
}


def _get(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _same_id(a: Any, b: Any) -> bool:
    return a is not None and b is not None and str(a) == str(b)


def find_parent(parent_id: Any, all_existing: Sequence[Any]) -> Optional[Any]:
    for existing in all_existing:
        if _same_id(_get(existing, "id"), parent_id):
            return existing
    return None


def _check_level(candidate: Any, parent: Optional[Any]) -> List[Violation]:
    raw = _get(candidate, "level")
    if checkers.is_blank(raw):
        return [Violation(
            field="level",
            kind=ViolationKind.MISSING_REQUIRED,
            message="Level is required",
        )]

    level = checkers.parse_number(raw)
    if level is None:
        return [Violation(
            field="level",
            kind=ViolationKind.TYPE_MISMATCH,
            message="Level must be a number",
            actual_value=raw,
            expected_value="number",
        )]

    if level < 1:
        return [Violation(
            field="level",
            kind=ViolationKind.OUT_OF_RANGE,
            message="Level must be greater than or equal to 1",
            actual_value=level,
            expected_value={"min": 1, "max": None},
        )]

    parent_level = checkers.parse_number(_get(parent, "level")) if parent is not None else None
    if parent_level is not None and level <= parent_level:
        return [Violation(
            field="level",
            kind=ViolationKind.HIERARCHY_VIOLATION,
            message=f"Level must be greater than the parent category's level ({parent_level:g})",
            actual_value=level,
            expected_value={"greater_than": parent_level},
        )]

    return []


def _check_parent(candidate: Any, parent: Optional[Any], all_existing: Optional[Sequence[Any]]) -> List[Violation]:
    parent_id = _get(candidate, "parent_id")
    if parent_id is None:
        return []

    if _same_id(parent_id, _get(candidate, "id")):
        return [Violation(
            field="parent_id",
            kind=ViolationKind.HIERARCHY_VIOLATION,
            message="A category cannot be its own parent",
            actual_value=parent_id,
        )]

    if all_existing is None:
        return [Violation(
            field="parent_id",
            kind=ViolationKind.HIERARCHY_VIOLATION,
            message="Parent category could not be verified",
            severity=ValidationSeverity.WARNING,
            actual_value=parent_id,
        )]

    if parent is None:
        return [Violation(
            field="parent_id",
            kind=ViolationKind.HIERARCHY_VIOLATION,
            message=f"Parent category '{parent_id}' does not exist",
            actual_value=parent_id,
        )]

    return []


def _check_accounting_account(candidate: Any) -> List[Violation]:
    account = _get(candidate, "accounting_account")
    if checkers.is_blank(account):
        return [Violation(
            field="accounting_account",
            kind=ViolationKind.MISSING_REQUIRED,
            message="Accounting account is required",
        )]

    account = str(account)
    if not (checkers.is_digits(account) and checkers.has_exact_length(account, 4)):
        return [Violation(
            field="accounting_account",
            kind=ViolationKind.PATTERN_MISMATCH,
            message="Accounting account must be exactly 4 digits",
            actual_value=account,
            expected_value=r"^\d{4}$",
        )]

    if checkers.is_all_same_char(account, "0"):
        return [Violation(
            field="accounting_account",
            kind=ViolationKind.OUT_OF_RANGE,
            message="Accounting account cannot be 0000",
            actual_value=account,
        )]

    return []


def _check_bounds(candidate: Any, bounds: Mapping[str, Tuple[float, float]]) -> List[Violation]:
    violations = []
    for field_name, (minimum, maximum) in bounds.items():
        label = FIELD_LABELS.get(field_name, field_name)
        raw = _get(candidate, field_name)

        if checkers.is_blank(raw):
            violations.append(Violation(
                field=field_name,
                kind=ViolationKind.MISSING_REQUIRED,
                message=f"{label} is required",
            ))
            continue

        number = checkers.parse_number(raw)
        if number is None:
            violations.append(Violation(
                field=field_name,
                kind=ViolationKind.TYPE_MISMATCH,
                message=f"{label} must be a number",
                actual_value=raw,
                expected_value="number",
            ))
        elif not checkers.in_range(number, minimum, maximum):
            violations.append(Violation(
                field=field_name,
                kind=ViolationKind.OUT_OF_RANGE,
                message=f"{label} must be between {minimum:g} and {maximum:g}",
                actual_value=number,
                expected_value={"min": minimum, "max": maximum},
            ))
    return violations


def validate_hierarchy(
    candidate: Any,
    all_existing: Optional[Sequence[Any]],
    bounds: Optional[Mapping[str, Tuple[float, float]]] = None,
) -> List[Violation]:
    """
    Validate a category against its parent and the accounting bounds.

    Args:
        candidate: Category record (model or mapping) being created or updated
        all_existing: Every stored category, active or not. None means the
            lookup could not be performed: a declared parent is then only
            reported as an unverified warning.
        bounds: Override for CATEGORY_BOUNDS

    Returns:
        Violations in category field order: level, parent_id,
        accounting_account, then the bounded numeric fields
    """
    parent_id = _get(candidate, "parent_id")
    parent = None
    if parent_id is not None and all_existing is not None and not _same_id(parent_id, _get(candidate, "id")):
        parent = find_parent(parent_id, all_existing)

    violations: List[Violation] = []
    violations.extend(_check_level(candidate, parent))
    violations.extend(_check_parent(candidate, parent, all_existing))
    violations.extend(_check_accounting_account(candidate))
    violations.extend(_check_bounds(candidate, CATEGORY_BOUNDS if bounds is None else bounds))
    return violations


@register_validator("category_hierarchy")
class CategoryHierarchyValidator(BaseValidator):
    """
    Validate a category's parent relationship and accounting attributes.

    Configuration:
        params:
          bounds:
            annual_depreciation_pct: {min: 10, max: 50}
            useful_life_years: {min: 2, max: 50}
            residual_value_pct: {min: 5, max: 30}

    Context:
        existing_categories: every stored category; None when the lookup
            failed, which leaves a declared parent unverified
    """

    stage = 2

    def validate(
        self,
        record: Any,
        context: Optional[Dict[str, Any]] = None
    ) -> List[Violation]:
        context = context or {}
        return validate_hierarchy(
            record,
            context.get('existing_categories', []),
            bounds=self._configured_bounds(),
        )

    def _configured_bounds(self) -> Dict[str, Tuple[float, float]]:
        configured = self.params.get('bounds') or {}
        bounds = dict(CATEGORY_BOUNDS)
        for field_name, limits in configured.items():
            bounds[field_name] = (limits['min'], limits['max'])
        return bounds
