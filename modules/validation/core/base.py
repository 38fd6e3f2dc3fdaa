"""
Base classes and data models for validation system.

This module provides the foundation for all validators:
- ViolationKind: Taxonomy of everything a record can get wrong
- ValidationSeverity: Blocking vs. non-blocking violations
- Violation: One field-level finding
- ValidationReport: Ordered list of violations for one candidate record
- BaseValidator: Abstract base class for all validators
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, List
from dataclasses import dataclass, field as dataclass_field
from enum import Enum


class ViolationKind(str, Enum):
    """Kinds of violation a validator can report"""
    MISSING_REQUIRED = "missing_required"
    TYPE_MISMATCH = "type_mismatch"
    OUT_OF_RANGE = "out_of_range"
    PATTERN_MISMATCH = "pattern_mismatch"
    SET_MEMBERSHIP = "set_membership"
    CHECKSUM_FAILURE = "checksum_failure"
    FORMAT_LENGTH = "format_length"
    HIERARCHY_VIOLATION = "hierarchy_violation"
    DUPLICATE_VALUE = "duplicate_value"
    MALFORMED_SPECIFICATION = "malformed_specification"


class ValidationSeverity(str, Enum):
    """Severity levels for violations"""
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Violation:
    """
    A single field-level violation.

    Violations carry no timestamps or ids, so two validations of the same
    input produce reports that compare and serialize identically.
    """
    field: str
    kind: ViolationKind
    message: str
    severity: ValidationSeverity = ValidationSeverity.ERROR

    # Value information
    actual_value: Any = None
    expected_value: Any = None

    @property
    def blocking(self) -> bool:
        """Only ERROR violations prevent the record from being persisted"""
        return self.severity == ValidationSeverity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'field': self.field,
            'kind': self.kind.value,
            'message': self.message,
            'severity': self.severity.value,
            'actual_value': self.actual_value,
            'expected_value': self.expected_value,
        }


@dataclass
class ValidationReport:
    """
    Ordered violations produced for one candidate record.

    An empty report means accept. Warnings (e.g. a duplicate check that
    could not reach the lookup collaborator) do not block acceptance.
    """
    record_type: str
    violations: List[Violation] = dataclass_field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not any(v.blocking for v in self.violations)

    @property
    def errors(self) -> List[Violation]:
        return [v for v in self.violations if v.blocking]

    @property
    def warnings(self) -> List[Violation]:
        return [v for v in self.violations if not v.blocking]

    @property
    def is_empty(self) -> bool:
        return len(self.violations) == 0

    def extend(self, violations: List[Violation]) -> None:
        self.violations.extend(violations)

    def kinds(self) -> List[ViolationKind]:
        return [v.kind for v in self.violations]

    def for_field(self, field_name: str) -> List[Violation]:
        return [v for v in self.violations if v.field == field_name]

    def messages(self) -> List[str]:
        """User-presentable messages in report order"""
        return [v.message for v in self.violations]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'record_type': self.record_type,
            'passed': self.passed,
            'violations': [v.to_dict() for v in self.violations],
        }

    def __len__(self) -> int:
        return len(self.violations)

    def __iter__(self):
        return iter(self.violations)


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    All custom validators must inherit from this class and implement
    the validate() method. Validators are pure: they read the record and
    the context and never modify either.

    Example:
        @register_validator("my_custom_validator")
        class MyValidator(BaseValidator):
            stage = 3

            def validate(self, record, context=None) -> List[Violation]:
                return []
    """

    # Execution order within a report: value (0) -> document (1) -> hierarchy (2) -> profile (3)
    stage: int = 3

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize validator with configuration.

        Args:
            config: Rule configuration from the rules YAML
                    Contains validator-specific settings under 'params'
        """
        self.config = config or {}
        self.params: Dict[str, Any] = self.config.get('params') or {}

    @abstractmethod
    def validate(
        self,
        record: Any,
        context: Optional[Dict[str, Any]] = None
    ) -> List[Violation]:
        """
        Execute validation logic.

        Args:
            record: Candidate record (pydantic model or plain dict)
            context: Optional read-only context, e.g.
                     {"existing_categories": [...]}

        Returns:
            Violations in field declaration order (empty when valid)
        """
        pass

    @property
    def name(self) -> str:
        return self.__class__.__name__.replace('Validator', '').lower()

    def _get_field_value(self, record: Any, field_path: str) -> Any:
        """
        Get field value from a record using dot notation.

        Works for pydantic models, plain objects and dictionaries.

        Args:
            record: Record to read
            field_path: Field path in dot notation

        Returns:
            Field value or None if not found
        """
        value = record
        for key in field_path.split('.'):
            if isinstance(value, dict):
                value = value.get(key)
            else:
                value = getattr(value, key, None)

            if value is None:
                return None

        return value
