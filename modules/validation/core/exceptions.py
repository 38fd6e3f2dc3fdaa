"""
Custom exceptions for the validation module.

Only authoring bugs raise. Invalid user data never does: it is returned
as violations inside a ValidationReport.
"""

from typing import List, Optional


class RecordValidationError(Exception):
    """Base exception for validation module."""
    pass


class MalformedSpecificationError(RecordValidationError):
    """
    Exception raised when a constraint specification is structurally invalid.

    Attributes:
        problems: Every problem found, in check order
    """

    def __init__(self, message: str, problems: Optional[List[str]] = None):
        self.problems = problems or [message]
        super().__init__(message)


class UnknownValidatorError(RecordValidationError):
    """Exception raised when a record type is configured with an unregistered validator."""
    pass
