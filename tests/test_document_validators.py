"""
Unit tests for the document identity validator.
"""

import pytest

from modules.validation import DocumentKind, ViolationKind, validate_document


def kinds(violations):
    return [v.kind for v in violations]


class TestTaxId:
    """Test RUC validation."""

    def test_valid_ruc(self):
        assert validate_document(DocumentKind.TAX_ID, "20100070970") == []

    def test_wrong_check_digit(self):
        violations = validate_document(DocumentKind.TAX_ID, "20100070971")

        assert kinds(violations) == [ViolationKind.CHECKSUM_FAILURE]
        assert violations[0].message == "RUC is invalid (incorrect check digit)"
        assert violations[0].expected_value == "0"

    def test_whitespace_is_ignored(self):
        assert validate_document(DocumentKind.TAX_ID, " 20100 070970 ") == []

    def test_too_short_reports_length_only(self):
        violations = validate_document(DocumentKind.TAX_ID, "2010007097")
        assert kinds(violations) == [ViolationKind.FORMAT_LENGTH]

    def test_letters_report_charset_only(self):
        violations = validate_document(DocumentKind.TAX_ID, "2010007097A")
        assert kinds(violations) == [ViolationKind.PATTERN_MISMATCH]

    def test_unchanged_value_skips_check_digit(self):
        assert validate_document(DocumentKind.TAX_ID, "20100070971", exclude_self="20100070971") == []

    def test_unchanged_after_normalization(self):
        assert validate_document(DocumentKind.TAX_ID, "20100070971", exclude_self="201 0007 0971") == []

    def test_changed_value_is_checked(self):
        violations = validate_document(DocumentKind.TAX_ID, "20100070971", exclude_self="20100070970")
        assert kinds(violations) == [ViolationKind.CHECKSUM_FAILURE]

    def test_unchanged_value_still_checks_format(self):
        violations = validate_document(DocumentKind.TAX_ID, "2010007097", exclude_self="2010007097")
        assert kinds(violations) == [ViolationKind.FORMAT_LENGTH]


class TestNationalId:
    """Test DNI validation."""

    def test_valid_dni(self):
        assert validate_document(DocumentKind.NATIONAL_ID, "12345678") == []

    def test_all_zero(self):
        violations = validate_document(DocumentKind.NATIONAL_ID, "00000000")
        assert kinds(violations) == [ViolationKind.OUT_OF_RANGE]

    def test_all_zero_even_when_unchanged(self):
        violations = validate_document(DocumentKind.NATIONAL_ID, "00000000", exclude_self="00000000")
        assert kinds(violations) == [ViolationKind.OUT_OF_RANGE]

    def test_seven_digits(self):
        violations = validate_document(DocumentKind.NATIONAL_ID, "1234567")

        assert kinds(violations) == [ViolationKind.FORMAT_LENGTH]
        assert violations[0].message == "DNI must have exactly 8 characters, got 7"

    def test_letters(self):
        violations = validate_document(DocumentKind.NATIONAL_ID, "1234567A")
        assert kinds(violations) == [ViolationKind.PATTERN_MISMATCH]


class TestAlphanumericDocuments:
    """Test foreign-resident card and passport validation."""

    def test_valid_foreign_resident_card(self):
        assert validate_document(DocumentKind.FOREIGN_RESIDENT_CARD, "ab1234567") == []

    def test_foreign_resident_card_length(self):
        violations = validate_document(DocumentKind.FOREIGN_RESIDENT_CARD, "AB123456")
        assert kinds(violations) == [ViolationKind.FORMAT_LENGTH]

    @pytest.mark.parametrize("number", ["AB1234", "X" * 12, "pa 123 456"])
    def test_valid_passport(self, number):
        assert validate_document(DocumentKind.PASSPORT, number) == []

    @pytest.mark.parametrize("number", ["AB123", "X" * 13])
    def test_passport_length(self, number):
        violations = validate_document(DocumentKind.PASSPORT, number)

        assert kinds(violations) == [ViolationKind.FORMAT_LENGTH]
        assert "between 6 and 12" in violations[0].message

    def test_passport_symbols(self):
        violations = validate_document(DocumentKind.PASSPORT, "AB-12345")
        assert kinds(violations) == [ViolationKind.PATTERN_MISMATCH]


class TestDocumentKinds:
    """Test how document kinds and empty values are handled."""

    @pytest.mark.parametrize("kind", [1, "RUC", "TaxId", "tax_id", "TAX_ID"])
    def test_kind_aliases(self, kind):
        assert validate_document(kind, "20100070971")[0].kind == ViolationKind.CHECKSUM_FAILURE

    def test_console_type_ids(self):
        assert DocumentKind(2) is DocumentKind.NATIONAL_ID
        assert DocumentKind(3) is DocumentKind.FOREIGN_RESIDENT_CARD
        assert DocumentKind(4) is DocumentKind.PASSPORT

    def test_unknown_kind(self):
        violations = validate_document("driver_license", "12345678")

        assert kinds(violations) == [ViolationKind.TYPE_MISMATCH]
        assert violations[0].field == "document_kind"

    @pytest.mark.parametrize("number", [None, "", "   "])
    def test_missing_number(self, number):
        violations = validate_document(DocumentKind.PASSPORT, number)

        assert kinds(violations) == [ViolationKind.MISSING_REQUIRED]
        assert violations[0].message == "Passport is required"
