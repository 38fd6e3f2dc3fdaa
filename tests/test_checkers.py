"""
Unit tests for the primitive checkers.
"""

import pytest

from modules.validation import checkers


class TestPresence:
    """Test blank detection and length checks."""

    @pytest.mark.parametrize("value", [None, "", "   ", [], {}])
    def test_blank_values(self, value):
        assert checkers.is_blank(value)

    @pytest.mark.parametrize("value", [0, False, "x", [0]])
    def test_non_blank_values(self, value):
        assert not checkers.is_blank(value)

    def test_length_between_is_inclusive(self):
        assert checkers.length_between("abcdef", 6, 12)
        assert checkers.length_between("a" * 12, 6, 12)
        assert not checkers.length_between("abcde", 6, 12)
        assert not checkers.length_between("a" * 13, 6, 12)

    def test_length_between_open_bound(self):
        assert checkers.length_between("a" * 500, 3)


class TestCharacterClasses:
    """Test character class checkers."""

    def test_digits_only_ascii(self):
        assert checkers.is_digits("0123")
        assert not checkers.is_digits("12a")
        assert not checkers.is_digits("²")
        assert not checkers.is_digits("")

    def test_alphanumeric(self):
        assert checkers.is_alphanumeric("AB12cd")
        assert not checkers.is_alphanumeric("AB-12")

    def test_strip_whitespace_removes_inner_spaces(self):
        assert checkers.strip_whitespace(" 20 1000 \t70970 ") == "20100070970"

    def test_normalize_text_strips_accents_and_case(self):
        assert checkers.normalize_text("  Vehículos ") == "vehiculos"
        assert checkers.normalize_text(None) == ""


class TestNumbersAndBooleans:
    """Test number and boolean parsing."""

    @pytest.mark.parametrize("value,expected", [(5, 5.0), (2.5, 2.5), ("10", 10.0), (" -3.5 ", -3.5)])
    def test_parse_number(self, value, expected):
        assert checkers.parse_number(value) == expected

    @pytest.mark.parametrize("value", [True, "abc", None, "nan", "inf", [1]])
    def test_parse_number_rejects(self, value):
        assert checkers.parse_number(value) is None

    def test_parse_boolean_literals(self):
        assert checkers.parse_boolean(True) is True
        assert checkers.parse_boolean("false") is False
        assert checkers.parse_boolean("True") is None
        assert checkers.parse_boolean(1) is None

    def test_in_range_inclusive(self):
        assert checkers.in_range(10, 10, 50)
        assert checkers.in_range(50, 10, 50)
        assert not checkers.in_range(9.99, 10, 50)
        assert checkers.in_range(-100, None, 0)


class TestPatterns:
    """Test full-match pattern checks."""

    def test_full_match_rejects_substring(self):
        assert checkers.full_match("[0-9]+", "123")
        assert not checkers.full_match("[0-9]+", "123a")

    def test_invalid_pattern(self):
        assert checkers.compile_pattern("([a-z") is None
        assert not checkers.full_match("([a-z", "abc")


class TestTaxIdCheckDigit:
    """Test the RUC check digit."""

    def test_known_valid_ruc(self):
        assert checkers.tax_id_check_digit("20100070970") == 0
        assert checkers.has_valid_tax_id_check_digit("20100070970")

    def test_wrong_check_digit(self):
        assert not checkers.has_valid_tax_id_check_digit("20100070971")

    def test_regular_remainder(self):
        # weighted sum 22 -> remainder 0 -> 11 folds to 1
        assert checkers.tax_id_check_digit("23000000001") == 1

    @pytest.mark.parametrize("ruc,remainder,digit", [
        ("10000000031", 0, 1),
        ("20100070970", 1, 0),
        ("10000000014", 7, 4),
    ])
    def test_check_digit_folding(self, ruc, remainder, digit):
        total = sum(int(d) * w for d, w in zip(ruc[:10], checkers.TAX_ID_WEIGHTS))

        assert total % 11 == remainder
        assert checkers.tax_id_check_digit(ruc) == digit

    def test_remainder_zero_rejects_zero_digit(self):
        assert checkers.has_valid_tax_id_check_digit("10000000031")
        assert not checkers.has_valid_tax_id_check_digit("10000000030")

    def test_wrong_length(self):
        assert not checkers.has_valid_tax_id_check_digit("2010007097")


class TestContactCheckers:
    """Test phone, email and URL checkers."""

    @pytest.mark.parametrize("phone", ["987654321", "+51 987 654 321", "(987)-654-321"])
    def test_valid_mobile(self, phone):
        assert checkers.is_peruvian_mobile(phone)

    @pytest.mark.parametrize("phone", ["887654321", "98765432", "01 4567890", "+1 987654321", "9876S4321", "phone", ""])
    def test_invalid_mobile(self, phone):
        assert not checkers.is_peruvian_mobile(phone)

    @pytest.mark.parametrize("email", ["user@domain.com", "a.b+c@sub.domain.pe"])
    def test_valid_email(self, email):
        assert checkers.is_email(email)

    @pytest.mark.parametrize("email", ["user@domain", "user..x@domain.com", "@domain.com", "a@b@c.com", "user@domain.c1"])
    def test_invalid_email(self, email):
        assert not checkers.is_email(email)

    def test_url_without_scheme(self):
        assert checkers.is_url("www.municipalidad.gob.pe")
        assert checkers.is_url("http://example.com/path")

    def test_url_rejects_digits_and_spaces(self):
        assert not checkers.is_url("12345")
        assert not checkers.is_url("not a url")
