"""
Primitive checkers.

Stateless functions that test a single raw value against a single rule.
Every validator in this package is composed out of these; none of them
raise for bad input, they only answer yes/no (or return a parsed value /
None).
"""

import math
import re
import unicodedata
from typing import Any, Optional, Pattern, Sequence
from urllib.parse import urlparse

import phonenumbers
from phonenumbers import NumberParseException


TAX_ID_WEIGHTS = (5, 4, 3, 2, 7, 6, 5, 4, 3, 2)

_DIGITS = re.compile(r"[0-9]+")
_ALPHANUMERIC = re.compile(r"[A-Za-z0-9]+")
_WHITESPACE = re.compile(r"\s+")


# ----------------------------------------------------------------------
# Presence and length
# ----------------------------------------------------------------------

def is_blank(value: Any) -> bool:
    """True for None, empty/whitespace-only strings and empty containers."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def has_exact_length(value: str, length: int) -> bool:
    return len(value) == length


def length_between(value: str, min_length: Optional[int] = None, max_length: Optional[int] = None) -> bool:
    """Inclusive length check; a missing bound is unbounded."""
    if min_length is not None and len(value) < min_length:
        return False
    if max_length is not None and len(value) > max_length:
        return False
    return True


# ----------------------------------------------------------------------
# Character classes
# ----------------------------------------------------------------------

def is_digits(value: str) -> bool:
    """ASCII digits only."""
    return bool(_DIGITS.fullmatch(value))


def is_alphanumeric(value: str) -> bool:
    """ASCII letters and digits only."""
    return bool(_ALPHANUMERIC.fullmatch(value))


def contains_letter(value: str) -> bool:
    return any(ch.isalpha() for ch in value)


def contains_digit(value: str) -> bool:
    return any(ch.isdigit() for ch in value)


def is_all_same_char(value: str, char: str) -> bool:
    return len(value) > 0 and all(ch == char for ch in value)


def strip_whitespace(value: str) -> str:
    """Remove every whitespace character, not only the surrounding ones."""
    return _WHITESPACE.sub("", value)


def normalize_text(value: Optional[str]) -> str:
    """
    Normalize text for duplicate comparison.

    Strips accents (NFD decomposition, combining marks dropped),
    lower-cases and trims. ``"Vehículos "`` and ``"vehiculos"`` compare equal.
    """
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.lower().strip()


# ----------------------------------------------------------------------
# Numbers and booleans
# ----------------------------------------------------------------------

def parse_number(value: Any) -> Optional[float]:
    """
    Parse a candidate into a finite float.

    Accepts ints, floats and numeric strings. Booleans are rejected even
    though they are ints in Python.

    Returns:
        The parsed number or None when the value is not numeric
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_boolean(value: Any) -> Optional[bool]:
    """Accept ``True``/``False`` or the literals ``"true"``/``"false"``."""
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def in_range(value: float, minimum: Optional[float] = None, maximum: Optional[float] = None) -> bool:
    """Inclusive on both ends; a missing bound is unbounded."""
    if minimum is not None and value < minimum:
        return False
    if maximum is not None and value > maximum:
        return False
    return True


# ----------------------------------------------------------------------
# Patterns
# ----------------------------------------------------------------------

def compile_pattern(pattern: str) -> Optional[Pattern[str]]:
    """Compile a pattern, returning None when it is not a valid regex."""
    try:
        return re.compile(pattern)
    except re.error:
        return None


def full_match(pattern: str, value: str) -> bool:
    """Whole-string match; a substring match is not enough."""
    compiled = compile_pattern(pattern)
    if compiled is None:
        return False
    return compiled.fullmatch(value) is not None


def is_member(value: Any, allowed: Sequence[Any]) -> bool:
    return value in allowed


# ----------------------------------------------------------------------
# Checksums
# ----------------------------------------------------------------------

def tax_id_check_digit(digits: str) -> int:
    """
    Compute the RUC check digit from the first ten digits.

    Weighted sum mod 11, then ``11 - remainder`` folded into a single
    digit (10 -> 0, 11 -> 1).
    """
    total = sum(int(d) * w for d, w in zip(digits[:10], TAX_ID_WEIGHTS))
    remainder = total % 11
    return (11 - remainder) % 10


def has_valid_tax_id_check_digit(digits: str) -> bool:
    if len(digits) != 11 or not is_digits(digits):
        return False
    return tax_id_check_digit(digits) == int(digits[10])


# ----------------------------------------------------------------------
# Contact fields
# ----------------------------------------------------------------------

_PE_MOBILE = re.compile(r"9[0-9]{8}")
_EMAIL_LOCAL = re.compile(r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+")
_EMAIL_DOMAIN = re.compile(
    r"[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?(\.[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)


def is_peruvian_mobile(value: str) -> bool:
    """9 digits starting with 9, optionally prefixed by +51."""
    if contains_letter(value):
        return False
    try:
        number = phonenumbers.parse(value, "PE")
    except NumberParseException:
        return False
    if number.country_code != 51:
        return False
    return bool(_PE_MOBILE.fullmatch(str(number.national_number)))


def is_email(value: str) -> bool:
    email = value.strip()
    if len(email) > 254 or email.count("@") != 1:
        return False
    if email.startswith(".") or email.endswith(".") or ".." in email:
        return False

    local, domain = email.split("@")
    if not local or len(local) > 64:
        return False
    if not domain or len(domain) > 253 or "." not in domain:
        return False
    if not _EMAIL_LOCAL.fullmatch(local) or not _EMAIL_DOMAIN.fullmatch(domain):
        return False

    tld = domain.rsplit(".", 1)[-1]
    return len(tld) >= 2 and tld.isalpha()


def is_url(value: str) -> bool:
    """http(s) URL with a host; the scheme is assumed when missing."""
    candidate = value.strip()
    if not candidate or is_digits(candidate) or any(ch.isspace() for ch in candidate):
        return False
    if not candidate.startswith("http"):
        candidate = f"https://{candidate}"
    try:
        parsed = urlparse(candidate)
        hostname = parsed.hostname
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(hostname)
