"""
Unit tests for the record merger and the in-memory listing helpers.
"""

import pytest

from ictreg.modules.students.merge import matches_filters, matches_query, merge, paginate
from ictreg.modules.students.schemas import StudentComposite


def _composite(**overrides) -> StudentComposite:
    values = {
        "email": "ada.okafor@example.com",
        "surname": "Okafor",
        "firstname": "Ada",
        "phone": "08012345678",
        "matric_no": "CS/2024/001",
        "department": "Computer Science",
        "level": "ND1",
    }
    values.update(overrides)
    return StudentComposite(**values)


class TestMerge:
    """Tests for merge()."""

    def test_identity_wins_for_non_empty_fields(self, sample_student, sample_profile):
        """Identity values override the profile's."""
        sample_profile.surname = "Stale"
        sample_profile.passport_url = "https://cdn.example.com/old.jpg"

        result = merge(sample_student, sample_profile)

        assert result.surname == "Okafor"
        assert result.passport_url == sample_student.passport_url
        assert result.id == sample_student.id
        assert result.has_identity is True

    def test_empty_identity_value_falls_back_to_profile(self, sample_student, sample_profile):
        """An empty identity middle name does not hide the profile's."""
        sample_student.middlename = ""
        sample_profile.middlename = "Ngozi"

        result = merge(sample_student, sample_profile)

        assert result.middlename == "Ngozi"

    def test_profile_only_fields_come_from_profile(self, sample_student, sample_profile):
        result = merge(sample_student, sample_profile)

        assert result.reg_no == "Reg/CS/12345"
        assert result.matric_no == "CS/2024/001"
        assert result.nok_relation == "Father"

    def test_identity_without_profile(self, sample_student):
        """Profile fields are None when no profile exists."""
        result = merge(sample_student, None)

        assert result.email == sample_student.email
        assert result.department is None
        assert result.reg_no is None
        assert result.documents is None

    def test_profile_without_identity(self, sample_profile):
        """Profile-only records have no id or registration date."""
        result = merge(None, sample_profile)

        assert result.id is None
        assert result.date_registered is None
        assert result.has_identity is False
        assert result.surname == "Okafor"
        assert result.passport_url == sample_profile.passport_url

    def test_both_missing_raises(self):
        with pytest.raises(ValueError):
            merge(None, None)


class TestMatchesQuery:
    """Tests for matches_query()."""

    def test_empty_query_matches_everything(self):
        assert matches_query(_composite(), None) is True
        assert matches_query(_composite(), "  ") is True

    def test_matches_full_name_case_insensitive(self):
        assert matches_query(_composite(), "okafor ada") is True

    def test_matches_matric_number(self):
        assert matches_query(_composite(), "cs/2024") is True

    def test_matches_email_and_phone(self):
        assert matches_query(_composite(), "EXAMPLE.COM") is True
        assert matches_query(_composite(), "0801234") is True

    def test_no_match(self):
        assert matches_query(_composite(), "bello") is False

    def test_missing_fields_do_not_break_matching(self):
        """Profile-only composites may lack a phone or matric number."""
        student = _composite(phone=None, matric_no=None)
        assert matches_query(student, "ada") is True
        assert matches_query(student, "cs/") is False


class TestMatchesFilters:
    """Tests for matches_filters()."""

    def test_department_compares_trimmed_and_lowercased(self):
        assert matches_filters(_composite(), department="  computer science ") is True

    def test_department_mismatch(self):
        assert matches_filters(_composite(), department="Accountancy") is False

    def test_level_filter(self):
        assert matches_filters(_composite(), level="nd1") is True
        assert matches_filters(_composite(), level="ND2") is False

    def test_filters_combine_with_query(self):
        """All given filters must hold."""
        student = _composite()
        assert matches_filters(student, q="ada", department="computer science", level="nd1")
        assert not matches_filters(student, q="bello", department="computer science")


class TestPaginate:
    """Tests for paginate()."""

    def test_first_page(self):
        items = [_composite(email=f"s{i}@example.com") for i in range(5)]

        page, total, total_pages = paginate(items, page=1, limit=2)

        assert [s.email for s in page] == ["s0@example.com", "s1@example.com"]
        assert total == 5
        assert total_pages == 3

    def test_last_partial_page(self):
        items = [_composite(email=f"s{i}@example.com") for i in range(5)]

        page, _, _ = paginate(items, page=3, limit=2)

        assert [s.email for s in page] == ["s4@example.com"]

    def test_page_past_the_end_is_empty(self):
        """Total is still reported."""
        items = [_composite()]

        page, total, total_pages = paginate(items, page=4, limit=10)

        assert page == []
        assert total == 1
        assert total_pages == 1

    def test_empty_list(self):
        assert paginate([], page=1, limit=50) == ([], 0, 0)
