"""
Identity Normalization

Canonical forms for the strings used as identity keys. All functions are
pure and total: bad input yields an empty string or False, never an
exception.
"""

import re

_PHONE_PATTERN = re.compile(r"[0-9]{11}")
_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_WHITESPACE = re.compile(r"\s+")


def normalize_email(email: str | None) -> str:
    """Trim and lowercase an email address."""
    if email is None:
        return ""
    return str(email).strip().lower()


def normalize_phone(phone: str | None) -> str:
    """Trim a phone number."""
    if phone is None:
        return ""
    return str(phone).strip()


def is_valid_phone(phone: str | None) -> bool:
    """True iff ``phone`` is exactly 11 decimal digits."""
    if not isinstance(phone, str):
        return False
    return _PHONE_PATTERN.fullmatch(phone) is not None


def is_valid_email(email: str | None) -> bool:
    """True iff ``email`` looks like local@domain.tld with no whitespace."""
    if not isinstance(email, str):
        return False
    return _EMAIL_PATTERN.fullmatch(email) is not None


def normalize_course_code(code: str | None) -> str:
    """Uppercase a course code and drop all whitespace (" cos 101" -> "COS101")."""
    if code is None:
        return ""
    return _WHITESPACE.sub("", str(code)).upper()


def full_name(surname: str | None, firstname: str | None, middlename: str | None = None) -> str:
    """Join the non-empty name parts with single spaces."""
    joined = " ".join(part for part in (surname, firstname, middlename) if part)
    return _WHITESPACE.sub(" ", joined).strip()
