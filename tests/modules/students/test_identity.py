"""
Unit tests for identity normalization.
"""

from ictreg.modules.students.identity import (
    full_name,
    is_valid_email,
    is_valid_phone,
    normalize_course_code,
    normalize_email,
    normalize_phone,
)


class TestNormalizeEmail:
    """Tests for normalize_email."""

    def test_trims_and_lowercases(self):
        """Surrounding whitespace is dropped and case folded."""
        assert normalize_email("  Ada.Okafor@Example.COM ") == "ada.okafor@example.com"

    def test_is_idempotent(self):
        """Normalizing twice gives the same result."""
        once = normalize_email(" X@Y.Z ")
        assert normalize_email(once) == once

    def test_none_becomes_empty_string(self):
        """Missing input never raises."""
        assert normalize_email(None) == ""


class TestNormalizePhone:
    def test_trims(self):
        assert normalize_phone(" 08012345678 ") == "08012345678"

    def test_none_becomes_empty_string(self):
        assert normalize_phone(None) == ""


class TestIsValidPhone:
    """Tests for is_valid_phone."""

    def test_eleven_digits_is_valid(self):
        """Exactly eleven digits passes."""
        assert is_valid_phone("08012345678") is True

    def test_ten_digits_is_invalid(self):
        """Too short fails."""
        assert is_valid_phone("0801234567") is False

    def test_letters_are_invalid(self):
        """Any non-digit fails."""
        assert is_valid_phone("0801234567a") is False

    def test_twelve_digits_is_invalid(self):
        assert is_valid_phone("080123456789") is False

    def test_none_is_invalid(self):
        assert is_valid_phone(None) is False


class TestIsValidEmail:
    """Tests for is_valid_email."""

    def test_simple_address_is_valid(self):
        assert is_valid_email("ada@example.com") is True

    def test_missing_tld_is_invalid(self):
        """The domain needs a dot."""
        assert is_valid_email("ada@example") is False

    def test_whitespace_is_invalid(self):
        assert is_valid_email("ada okafor@example.com") is False

    def test_missing_at_is_invalid(self):
        assert is_valid_email("ada.example.com") is False


class TestNormalizeCourseCode:
    def test_strips_whitespace_and_uppercases(self):
        """Inner spaces go too."""
        assert normalize_course_code(" cos 101 ") == "COS101"

    def test_none_becomes_empty_string(self):
        assert normalize_course_code(None) == ""


class TestFullName:
    def test_skips_empty_parts(self):
        """An empty middle name leaves no double space."""
        assert full_name("Okafor", "Ada", "") == "Okafor Ada"

    def test_joins_all_parts(self):
        assert full_name("Okafor", "Ada", "Ngozi") == "Okafor Ada Ngozi"
