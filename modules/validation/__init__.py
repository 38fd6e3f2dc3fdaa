"""
Record validation module.

Decides whether a submitted record (configuration entry, supplier,
category or position) satisfies its field-level and cross-field
constraints before it is persisted. Validation never performs I/O except
for the optional duplicate check in ValidationEngine.validate_submission().

Main components:
- ValidationEngine: Builds an ordered ValidationReport for a record
- validate_value / validate_document / validate_hierarchy: Pure validators
- Constraint specifications: Text / Number / Boolean variants

Usage:
    from modules.validation import ValidationEngine, CategoryRecord

    engine = ValidationEngine()
    report = engine.build(CategoryRecord(...), existing_categories=[...])

    if not report.passed:
        for violation in report:
            print(f"{violation.field}: {violation.message}")
"""

__version__ = "1.0.0"

from modules.validation.core.base import ValidationReport, ValidationSeverity, Violation, ViolationKind
from modules.validation.core.exceptions import MalformedSpecificationError, RecordValidationError
from modules.validation.core.records import (
    CategoryRecord,
    ConfigurationEntry,
    DocumentKind,
    PositionRecord,
    SupplierRecord,
)
from modules.validation.core.specification import (
    BooleanSpecification,
    ConstraintSpecification,
    DataType,
    NumberSpecification,
    TextSpecification,
    parse_specification,
    switch_data_type,
)
from modules.validation.engine import ValidationEngine, build_report
from modules.validation.uniqueness import RecordLookup, UniquenessChecker
from modules.validation.validators.document_validators import validate_document
from modules.validation.validators.hierarchy_validators import validate_hierarchy
from modules.validation.validators.value_validators import validate_value

__all__ = [
    'ValidationEngine',
    'build_report',
    'ValidationReport',
    'ValidationSeverity',
    'Violation',
    'ViolationKind',
    'MalformedSpecificationError',
    'RecordValidationError',
    'CategoryRecord',
    'ConfigurationEntry',
    'DocumentKind',
    'PositionRecord',
    'SupplierRecord',
    'BooleanSpecification',
    'ConstraintSpecification',
    'DataType',
    'NumberSpecification',
    'TextSpecification',
    'parse_specification',
    'switch_data_type',
    'RecordLookup',
    'UniquenessChecker',
    'validate_document',
    'validate_hierarchy',
    'validate_value',
]
