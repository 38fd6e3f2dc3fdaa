"""
Validators module.

Contains all built-in validators organized by concern:
- value_validators: Type-driven configuration value checks
- document_validators: National identity and tax document numbers
- hierarchy_validators: Category parent/child relationship and bounds
- profile_validators: Descriptive fields of every record type

All validators are automatically registered via decorators.
"""

# Import all validators to trigger registration
from modules.validation.validators import value_validators
from modules.validation.validators import document_validators
from modules.validation.validators import hierarchy_validators
from modules.validation.validators import profile_validators

__all__ = ['value_validators', 'document_validators', 'hierarchy_validators', 'profile_validators']
