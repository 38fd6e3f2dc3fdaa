"""
Unit tests for duplicate detection.
"""

import pytest

from modules.validation import PositionRecord, UniquenessChecker, ValidationSeverity, ViolationKind
from modules.validation.uniqueness import find_duplicates


class TestFindDuplicates:
    """Test normalized comparison of unique fields."""

    def test_position_code_is_case_insensitive(self):
        existing = [PositionRecord(id=1, position_code="adm-01")]

        violations = find_duplicates(PositionRecord(position_code="ADM-01 "), existing)

        assert [v.kind for v in violations] == [ViolationKind.DUPLICATE_VALUE]
        assert violations[0].field == "position_code"

    def test_same_id_is_ignored(self):
        existing = [PositionRecord(id=1, position_code="ADM-01")]
        assert find_duplicates(PositionRecord(id="1", position_code="ADM-01"), existing) == []

    def test_blank_value_is_not_compared(self):
        existing = [PositionRecord(id=1, position_code=None)]
        assert find_duplicates(PositionRecord(position_code=None), existing) == []

    def test_unknown_record_type(self):
        assert find_duplicates({"position_code": "ADM-01"}, [{"position_code": "ADM-01"}]) == []


class TestUniquenessChecker:
    """Test the asynchronous wrapper around the lookup collaborator."""

    @pytest.mark.asyncio
    async def test_returns_fetched_records(self, fake_lookup):
        stored = [PositionRecord(id=1, position_code="ADM-01")]

        existing, violations = await UniquenessChecker(fake_lookup(records=stored)).check(
            PositionRecord(id=2, position_code="OPE-02")
        )

        assert existing == stored
        assert violations == []

    @pytest.mark.asyncio
    async def test_lookup_failure_degrades_to_warning(self, fake_lookup):
        existing, violations = await UniquenessChecker(fake_lookup(error=OSError("down"))).check(
            PositionRecord(position_code="ADM-01")
        )

        assert existing is None
        assert len(violations) == 1
        assert violations[0].severity == ValidationSeverity.WARNING
        assert violations[0].field == "position_code"
