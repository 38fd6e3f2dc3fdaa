"""
Validator registry system.

Provides decorator-based registration for validators and retrieval functions.
This allows for pluggable validators without modifying core code.
"""

from typing import Dict, Type, Optional
from modules.validation.core.base import BaseValidator
from modules.validation.core.exceptions import UnknownValidatorError
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

# Global registry of all validators
VALIDATOR_REGISTRY: Dict[str, Type[BaseValidator]] = {}


def register_validator(name: str):
    """
    Decorator to register a validator in the global registry.

    Usage:
        @register_validator("category_hierarchy")
        class CategoryHierarchyValidator(BaseValidator):
            def validate(self, record, context=None):
                ...

    Args:
        name: Unique name for the validator (used in the rules file)

    Returns:
        Decorator function
    """
    def decorator(cls: Type[BaseValidator]):
        if name in VALIDATOR_REGISTRY:
            logger.warning(
                f"Validator '{name}' is already registered. "
                f"Overwriting with {cls.__name__}"
            )

        VALIDATOR_REGISTRY[name] = cls
        logger.debug(f"Registered validator: {name} -> {cls.__name__}")
        return cls

    return decorator


def get_validator(name: str) -> Optional[Type[BaseValidator]]:
    """
    Get validator class by name from registry.

    Args:
        name: Validator name

    Returns:
        Validator class or None if not found
    """
    return VALIDATOR_REGISTRY.get(name)


def require_validator(name: str) -> Type[BaseValidator]:
    """
    Get validator class by name, failing loudly when it is missing.

    Raises:
        UnknownValidatorError: If no validator is registered under name
    """
    validator_class = get_validator(name)
    if validator_class is None:
        raise UnknownValidatorError(f"Validator '{name}' not found in registry")
    return validator_class

