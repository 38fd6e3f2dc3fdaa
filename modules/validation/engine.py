"""
ValidationEngine - Main orchestrator for record validation.

This is the primary entry point for validating records.
It loads configuration, executes validators, and aggregates their
violations into a single ordered ValidationReport.
"""

from typing import Any, Dict, List, Optional, Sequence

from modules.validation.core.base import BaseValidator, ValidationReport
from modules.validation.core.config_loader import ValidationConfigLoader
from modules.validation.core.exceptions import MalformedSpecificationError
from modules.validation.core.registry import VALIDATOR_REGISTRY, require_validator
from modules.validation.uniqueness import RecordLookup, UniquenessChecker
from shared.utils.logger import log_function_call, setup_logger

# Import validators to trigger registration
from modules.validation import validators  # noqa: F401

logger = setup_logger(__name__)


class ValidationEngine:
    """
    Record validation engine.

    Orchestrates validation by:
    1. Loading the validator list for the record type from configuration
    2. Instantiating validators
    3. Executing them in stage order (value -> document -> hierarchy -> profile)
    4. Concatenating their violations

    build() is pure and synchronous. validate_submission() additionally runs
    the asynchronous duplicate check against a lookup collaborator first.

    Usage:
        engine = ValidationEngine()
        report = engine.build(category, existing_categories=categories)

        if report.passed:
            repository.save(category)
        else:
            for violation in report:
                print(f"{violation.field}: {violation.message}")
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize validation engine.

        Args:
            config_path: Path to validation rules YAML file
                        If None, uses default location
        """
        self.config_loader = ValidationConfigLoader(config_path)
        self.config = self.config_loader.load()
        self.global_settings = self.config_loader.get_global_settings()

        logger.info(
            f"ValidationEngine initialized with {len(VALIDATOR_REGISTRY)} validators"
        )

    def build(
        self,
        record: Any,
        existing_categories: Optional[Sequence[Any]] = None
    ) -> ValidationReport:
        """
        Validate a record against the validators configured for its type.

        Args:
            record: ConfigurationEntry, SupplierRecord, CategoryRecord or
                    PositionRecord
            existing_categories: Every stored category, for the hierarchy check.
                    None is the same as an empty list: a declared parent
                    is then reported as missing

        Returns:
            ValidationReport; empty when the record is acceptable

        Raises:
            MalformedSpecificationError: If a configuration entry's
                specification is structurally invalid
            TypeError: If the record type is not configured
        """
        return self._run(record, list(existing_categories or []))

    def _run(self, record: Any, existing_categories: Optional[List[Any]]) -> ValidationReport:
        # existing_categories is None only when the lookup collaborator failed
        record_type = self._record_type(record)
        log_function_call(logger, "build", record_type=record_type, id=getattr(record, 'id', None))

        context: Dict[str, Any] = {'existing_categories': existing_categories}

        report = ValidationReport(record_type=record_type)
        stop_on_error = self.global_settings.get('stop_on_first_error', False)

        for validator in self._validators_for(record_type):
            try:
                violations = validator.validate(record, context)
            except MalformedSpecificationError as e:
                logger.error(f"Malformed specification for {record_type}: {e}")
                raise

            logger.debug(f"Validator '{validator.name}' reported {len(violations)} violation(s)")
            report.extend(violations)

            # Stop on first error if configured
            if stop_on_error and not report.passed:
                logger.info(f"Stopping validation on first error: {report.errors[0].message}")
                break

        return report

    async def validate_submission(
        self,
        record: Any,
        lookup: Optional[RecordLookup] = None,
        existing_categories: Optional[Sequence[Any]] = None
    ) -> ValidationReport:
        """
        Validate a record the way a form submission does.

        The duplicate check runs first against the lookup collaborator; for
        categories the fetched records double as the hierarchy candidates
        unless existing_categories is given. Duplicate violations (or the
        warning raised when the lookup is unreachable) are appended after
        the pure validators' violations.

        Args:
            record: Record to validate
            lookup: Collaborator returning every stored record of the same type
            existing_categories: Explicit hierarchy candidates

        Returns:
            ValidationReport
        """
        duplicate_violations = []
        existing: Optional[List[Any]] = []
        if lookup is not None:
            existing, duplicate_violations = await UniquenessChecker(lookup).check(record)

        if existing_categories is not None:
            candidates = list(existing_categories)
        elif self._record_type(record) == 'category':
            candidates = existing
        else:
            candidates = []

        report = self._run(record, candidates)
        report.extend(duplicate_violations)
        return report

    def _record_type(self, record: Any) -> str:
        record_type = getattr(record, 'record_type', None)
        if record_type not in self.config_loader.get_record_types():
            raise TypeError(f"Unsupported record type: {type(record).__name__}")
        return record_type

    def _validators_for(self, record_type: str) -> List[BaseValidator]:
        validators_list = []
        for rule_config in self.config_loader.get_record_rules(record_type):
            validator_name = rule_config.get('validator')

            if not validator_name:
                logger.warning(f"Rule missing 'validator' field: {rule_config}")
                continue

            validator_class = require_validator(validator_name)
            validators_list.append(validator_class(rule_config))

        # sorted() is stable, so validators sharing a stage keep config order
        return sorted(validators_list, key=lambda v: v.stage)

    def reload_config(self) -> None:
        """Reload validation configuration from file"""
        logger.info("Reloading validation configuration")
        self.config = self.config_loader.reload()
        self.global_settings = self.config_loader.get_global_settings()

    def get_available_validators(self) -> List[str]:
        """
        Get list of all registered validators.

        Returns:
            List of validator names
        """
        return list(VALIDATOR_REGISTRY.keys())

    def get_record_rules(self, record_type: str) -> List[Dict[str, Any]]:
        return self.config_loader.get_record_rules(record_type)


_default_engine: Optional[ValidationEngine] = None


def get_engine() -> ValidationEngine:
    """Lazily create the process-wide engine from the default rules file."""
    global _default_engine
    if _default_engine is None:
        _default_engine = ValidationEngine()
    return _default_engine


def build_report(record: Any, existing_categories: Optional[Sequence[Any]] = None) -> ValidationReport:
    """
    Convenience wrapper around the default engine's build().

    Example:
        report = build_report(supplier)
        if not report.passed:
            ...
    """
    return get_engine().build(record, existing_categories=existing_categories)
