"""
Unit tests for result row extraction and normalization.
"""

import pytest

from ictreg.modules.results.ingestion import coerce_score, extract_row, normalize_result
from ictreg.modules.shared import ValidationFailedError


def _values(**overrides):
    values = {
        "fullname": " Ada Okafor ",
        "matric_no": "cs/2024/001",
        "department": " Computer Science ",
        "level": "nd1",
        "course_code": "cos 101",
        "course_title": None,
        "score": 72,
        "grade": None,
    }
    values.update(overrides)
    return values


class TestExtractRow:
    """Tests for extract_row."""

    def test_capitalized_headers(self):
        row = {"Fullname": "Ada", "MatricNo": "CS/1", "CourseCode": "COS101", "Score": 55}

        values = extract_row(row)

        assert values["fullname"] == "Ada"
        assert values["matric_no"] == "CS/1"
        assert values["course_code"] == "COS101"
        assert values["score"] == 55
        assert values["grade"] is None

    def test_camel_case_headers(self):
        row = {"fullname": "Ada", "matricNo": "CS/1", "courseCode": "COS101", "courseTitle": "Intro"}

        values = extract_row(row)

        assert values["matric_no"] == "CS/1"
        assert values["course_title"] == "Intro"

    def test_blank_first_alias_falls_through(self):
        """A None cell under one spelling does not hide the other."""
        row = {"Score": None, "score": 40}

        assert extract_row(row)["score"] == 40


class TestCoerceScore:
    """Tests for coerce_score."""

    def test_numeric_string(self):
        assert coerce_score(" 64.5 ") == 64.5

    def test_integer(self):
        assert coerce_score(80) == 80.0

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_missing(self, raw):
        with pytest.raises(ValidationFailedError) as exc_info:
            coerce_score(raw)
        assert exc_info.value.field == "score"
        assert "required" in exc_info.value.message

    def test_not_a_number(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            coerce_score("seventy")
        assert "not a number" in exc_info.value.message

    @pytest.mark.parametrize("raw", [-1, 100.5, float("nan")])
    def test_out_of_range(self, raw):
        with pytest.raises(ValidationFailedError):
            coerce_score(raw)

    def test_bounds_are_inclusive(self):
        assert coerce_score(0) == 0.0
        assert coerce_score(100) == 100.0


class TestNormalizeResult:
    """Tests for normalize_result."""

    def test_cleans_every_field(self):
        result = normalize_result(_values())

        assert result == {
            "fullname": "Ada Okafor",
            "matric_no": "CS/2024/001",
            "department": "Computer Science",
            "level": "ND1",
            "course_code": "COS101",
            "course_title": None,
            "score": 72.0,
            "grade": "A",
        }

    def test_supplied_grade_is_uppercased_and_kept(self):
        """A given grade is not re-derived from the score."""
        result = normalize_result(_values(grade="b"))

        assert result["grade"] == "B"

    def test_unknown_grade_rejected(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            normalize_result(_values(grade="Z"))
        assert exc_info.value.field == "grade"

    def test_whole_number_floats_lose_their_decimal(self):
        """Excel returns numeric matric numbers as floats."""
        result = normalize_result(_values(matric_no=20240001.0))

        assert result["matric_no"] == "20240001"

    @pytest.mark.parametrize("field", ["fullname", "matric_no", "course_code"])
    def test_required_fields(self, field):
        with pytest.raises(ValidationFailedError) as exc_info:
            normalize_result(_values(**{field: "  "}))
        assert exc_info.value.field == field

    def test_missing_optional_fields_become_none(self):
        result = normalize_result(_values(department=None, level=""))

        assert result["department"] is None
        assert result["level"] is None

    def test_overlong_text_rejected(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            normalize_result(_values(matric_no="x" * 51))
        assert exc_info.value.field == "matric_no"
        assert exc_info.value.error_code == "FIELD_TOO_LONG"
