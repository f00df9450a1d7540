"""
Result Ingestion Rules

Pure functions that turn one raw result (a spreadsheet row or a JSON body)
into clean column values. Catalog lookups happen in the service.
"""

import math
from typing import Any

from ictreg.modules.results.grading import FAIL_GRADE, GRADE_BOUNDARIES, derive_grade
from ictreg.modules.results.models import Result
from ictreg.modules.shared import ValidationFailedError, check_column_lengths
from ictreg.modules.students.identity import normalize_course_code

# Spreadsheet header spellings accepted for each field
HEADER_ALIASES: dict[str, tuple[str, ...]] = {
    "fullname": ("Fullname", "fullname"),
    "matric_no": ("MatricNo", "matricNo"),
    "department": ("Department", "department"),
    "level": ("Level", "level"),
    "course_code": ("CourseCode", "courseCode"),
    "course_title": ("CourseTitle", "courseTitle"),
    "score": ("Score", "score"),
    "grade": ("Grade", "grade"),
}

REQUIRED_FIELDS = ("fullname", "matric_no", "course_code")

VALID_GRADES = frozenset(grade for _, grade in GRADE_BOUNDARIES) | {FAIL_GRADE}

MIN_SCORE = 0.0
MAX_SCORE = 100.0


def extract_row(row: dict[str, Any]) -> dict[str, Any]:
    """Map a spreadsheet row onto field names using the first header alias present."""
    values: dict[str, Any] = {}
    for field, aliases in HEADER_ALIASES.items():
        values[field] = next((row[alias] for alias in aliases if row.get(alias) is not None), None)
    return values


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        # Excel hands whole numbers back as floats (e.g. matric numbers)
        value = int(value)
    return str(value).strip()


def coerce_score(value: Any) -> float:
    """
    Convert a raw score to a float in 0..100.

    Raises:
        ValidationFailedError: If the score is missing, not numeric, or out of range
    """
    if value is None or isinstance(value, bool) or (isinstance(value, str) and not value.strip()):
        raise ValidationFailedError("score is required.", field="score")

    try:
        score = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationFailedError(f"score '{value}' is not a number.", field="score") from e

    if math.isnan(score) or not MIN_SCORE <= score <= MAX_SCORE:
        raise ValidationFailedError("score must be between 0 and 100.", field="score")

    return score


def normalize_result(values: dict[str, Any]) -> dict[str, Any]:
    """
    Validate and clean one result.

    Department is trimmed, level trimmed and uppercased, the course code
    normalized and the grade uppercased or derived from the score. Text
    longer than its column is rejected.

    Raises:
        ValidationFailedError: Naming the first offending field
    """
    for field in REQUIRED_FIELDS:
        if not _text(values.get(field)):
            raise ValidationFailedError(f"{field} is required.", field=field)

    score = coerce_score(values.get("score"))

    grade = _text(values.get("grade")).upper()
    if grade and grade not in VALID_GRADES:
        raise ValidationFailedError(
            f"grade '{grade}' must be one of {', '.join(sorted(VALID_GRADES))}.",
            field="grade",
        )

    result = {
        "fullname": _text(values.get("fullname")),
        "matric_no": _text(values.get("matric_no")).upper(),
        "department": _text(values.get("department")) or None,
        "level": _text(values.get("level")).upper() or None,
        "course_code": normalize_course_code(_text(values.get("course_code"))),
        "course_title": _text(values.get("course_title")) or None,
        "score": score,
        "grade": grade or derive_grade(score),
    }
    check_column_lengths(Result, result)
    return result
