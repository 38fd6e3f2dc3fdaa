"""
Validation core module.

Contains base classes, record and specification models, and utilities
for the validation system.
"""

from modules.validation.core.base import BaseValidator, ValidationReport, ValidationSeverity, Violation, ViolationKind
from modules.validation.core.exceptions import MalformedSpecificationError, RecordValidationError, UnknownValidatorError
from modules.validation.core.registry import VALIDATOR_REGISTRY, register_validator, get_validator

__all__ = [
    'BaseValidator',
    'ValidationReport',
    'ValidationSeverity',
    'Violation',
    'ViolationKind',
    'MalformedSpecificationError',
    'RecordValidationError',
    'UnknownValidatorError',
    'VALIDATOR_REGISTRY',
    'register_validator',
    'get_validator',
]
