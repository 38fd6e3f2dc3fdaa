"""
Uniqueness checks against the record-lookup collaborator.

This is the only asynchronous part of validation: the full collection of
existing records is fetched before the pure validators run. A lookup
failure never rejects a record; it degrades to a non-blocking warning.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from modules.validation import checkers
from modules.validation.core.base import ValidationSeverity, Violation, ViolationKind
from shared.utils.logger import log_error, setup_logger

logger = setup_logger(__name__)


class RecordLookup(Protocol):
    """Read-only access to every stored record of one type"""

    async def fetch_all(self) -> Sequence[Any]:
        ...


def _casefold(value: Any) -> str:
    return str(value).strip().casefold()


def _document(value: Any) -> str:
    return checkers.strip_whitespace(str(value)).upper()


# record_type -> (unique field, label, normalizer)
UNIQUE_FIELDS: Dict[str, Tuple[str, str, Callable[[Any], str]]] = {
    "configuration": ("key", "key", _casefold),
    "supplier": ("document_number", "document number", _document),
    "category": ("name", "category name", checkers.normalize_text),
    "position": ("position_code", "position code", _casefold),
}


def _get(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def find_duplicates(record: Any, existing: Sequence[Any]) -> List[Violation]:
    """
    Report a DUPLICATE_VALUE violation when another stored record already
    uses the record's unique value. The record's own stored copy (same id)
    is ignored so an update does not collide with itself.
    """
    rule = UNIQUE_FIELDS.get(getattr(record, "record_type", None))
    if rule is None:
        return []

    field, label, normalize = rule
    value = _get(record, field)
    if checkers.is_blank(value):
        return []

    own_id = _get(record, "id")
    target = normalize(value)
    for other in existing:
        other_id = _get(other, "id")
        if own_id is not None and other_id is not None and str(own_id) == str(other_id):
            continue
        other_value = _get(other, field)
        if other_value is not None and normalize(other_value) == target:
            return [Violation(
                field=field,
                kind=ViolationKind.DUPLICATE_VALUE,
                message=f"A record with {label} '{value}' already exists",
                actual_value=value,
            )]
    return []


class UniquenessChecker:
    """
    Runs duplicate checks for one submission.

    Usage:
        checker = UniquenessChecker(lookup)
        existing, violations = await checker.check(record)
    """

    def __init__(self, lookup: RecordLookup):
        self.lookup = lookup

    async def fetch_existing(self) -> Optional[List[Any]]:
        """
        Fetch every stored record.

        Returns:
            The records, or None when the collaborator failed
        """
        try:
            return list(await self.lookup.fetch_all())
        except Exception as e:
            log_error(logger, e, "Record lookup failed")
            return None

    async def check(self, record: Any) -> Tuple[Optional[List[Any]], List[Violation]]:
        """
        Returns:
            (existing records or None, duplicate violations or an
            unverified warning)
        """
        existing = await self.fetch_existing()
        if existing is None:
            field = UNIQUE_FIELDS.get(getattr(record, "record_type", None), ("record",))[0]
            logger.warning(f"Duplicate check skipped for '{field}': lookup unavailable")
            return None, [Violation(
                field=field,
                kind=ViolationKind.DUPLICATE_VALUE,
                message="Could not verify whether the value already exists",
                severity=ValidationSeverity.WARNING,
            )]

        return existing, find_duplicates(record, existing)
