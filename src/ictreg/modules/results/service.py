"""
Result Ingestion Service

Batch policy: every row is validated before anything is written. If any
row fails, nothing is inserted and the error lists every failing row by
its spreadsheet row number (header = row 1).
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.core.spreadsheet import ROW_NUMBER_KEY, parse_spreadsheet
from ictreg.modules.courses import service as courses_service
from ictreg.modules.results import repository
from ictreg.modules.results.ingestion import extract_row, normalize_result
from ictreg.modules.results.models import Result
from ictreg.modules.results.schemas import ResultCreate
from ictreg.modules.shared import ValidationFailedError
from ictreg.modules.students.identity import normalize_course_code

logger = logging.getLogger(__name__)


class UnknownCourseError(ValidationFailedError):
    def __init__(self, course_code: str):
        super().__init__(
            message=f"Course {course_code} is not in any catalog.",
            error_code="UNKNOWN_COURSE",
            field="course_code",
        )


class ResultBatchError(ValidationFailedError):
    """Raised when one or more spreadsheet rows are invalid."""

    def __init__(self, row_errors: list[tuple[int, str]]):
        self.row_errors = row_errors
        rows = ", ".join(str(row) for row, _ in row_errors)
        details = "; ".join(f"Row {row}: {message}" for row, message in row_errors)
        super().__init__(
            message=f"No results were saved. Invalid rows: {rows}. {details}",
            field="file",
        )


async def _resolve_course(
    db: AsyncSession,
    values: dict[str, Any],
    cache: dict[str, Any],
) -> dict[str, Any]:
    """
    Attach the catalog's code and (unless supplied) title.

    Raises:
        UnknownCourseError: If the code is not in any catalog
    """
    code = values["course_code"]
    if code not in cache:
        cache[code] = await courses_service.find_course_by_code(db, code)

    course = cache[code]
    if course is None:
        raise UnknownCourseError(code)

    return {
        **values,
        "course_code": course.code,
        "course_title": values["course_title"] or course.title,
    }


async def create_result(db: AsyncSession, data: ResultCreate) -> Result:
    """
    Record one result.

    Raises:
        ValidationFailedError: Missing field or bad score/grade
        UnknownCourseError: Course code not in any catalog
    """
    values = normalize_result(data.model_dump())
    values = await _resolve_course(db, values, {})

    (result,) = await repository.insert_many(db, [values])
    await db.commit()

    logger.info(f"Recorded result for {result.matric_no} in {result.course_code}")
    return result


async def ingest_spreadsheet(db: AsyncSession, content: bytes, filename: str | None) -> int:
    """
    Import every row of a results spreadsheet, or none of them.

    Returns:
        Number of results inserted

    Raises:
        SpreadsheetError: File could not be read
        ValidationFailedError: File has no data rows
        ResultBatchError: At least one row is invalid
    """
    rows = await parse_spreadsheet(content, filename)
    if not rows:
        raise ValidationFailedError("The spreadsheet has no result rows.", field="file")

    valid: list[dict[str, Any]] = []
    errors: list[tuple[int, str]] = []
    courses: dict[str, Any] = {}

    for row in rows:
        row_number = row.get(ROW_NUMBER_KEY)
        try:
            values = normalize_result(extract_row(row))
            valid.append(await _resolve_course(db, values, courses))
        except ValidationFailedError as e:
            errors.append((row_number, e.message))

    if errors:
        logger.warning(f"Rejected results upload {filename}: {len(errors)} invalid row(s)")
        raise ResultBatchError(errors)

    await repository.insert_many(db, valid)
    await db.commit()

    logger.info(f"Imported {len(valid)} result(s) from {filename}")
    return len(valid)


async def list_results(
    db: AsyncSession,
    matric_no: str | None = None,
    course_code: str | None = None,
) -> list[Result]:
    return await repository.list_results(
        db,
        (matric_no or "").strip().upper() or None,
        normalize_course_code(course_code) or None,
    )
