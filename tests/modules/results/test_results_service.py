"""
Unit tests for the results service: single inserts and all-or-nothing
spreadsheet ingestion.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ictreg.core.spreadsheet import ROW_NUMBER_KEY
from ictreg.modules.courses.models import CatalogCourse
from ictreg.modules.results.schemas import ResultCreate
from ictreg.modules.results.service import (
    ResultBatchError,
    UnknownCourseError,
    create_result,
    ingest_spreadsheet,
)
from ictreg.modules.shared import ValidationFailedError

SERVICE = "ictreg.modules.results.service"


def _course(code: str, title: str) -> MagicMock:
    course = MagicMock(spec=CatalogCourse)
    course.code = code
    course.title = title
    return course


def _row(number: int, **overrides) -> dict:
    row = {
        "Fullname": "Ada Okafor",
        "MatricNo": "CS/2024/001",
        "CourseCode": "COS101",
        "Score": 65,
        ROW_NUMBER_KEY: number,
    }
    row.update(overrides)
    return row


async def _find_course(_db, code):
    return {"COS101": _course("COS101", "Introduction to Computing")}.get(code)


class TestIngestSpreadsheet:
    """Tests for ingest_spreadsheet."""

    @pytest.mark.asyncio
    async def test_all_valid_rows_are_inserted(self, mock_db):
        rows = [_row(2), _row(3, MatricNo="cs/2024/002", Score=38)]

        with (
            patch(f"{SERVICE}.parse_spreadsheet", new_callable=AsyncMock) as mock_parse,
            patch(f"{SERVICE}.courses_service") as mock_courses,
            patch(f"{SERVICE}.repository") as mock_repo,
        ):
            mock_parse.return_value = rows
            mock_courses.find_course_by_code = AsyncMock(side_effect=_find_course)
            mock_repo.insert_many = AsyncMock()

            inserted = await ingest_spreadsheet(mock_db, b"xlsx", "results.xlsx")

            assert inserted == 2
            saved = mock_repo.insert_many.call_args.args[1]
            assert saved[0]["course_title"] == "Introduction to Computing"
            assert saved[0]["grade"] == "B"
            assert saved[1]["matric_no"] == "CS/2024/002"
            assert saved[1]["grade"] == "F"
            # One catalog lookup per distinct course code
            mock_courses.find_course_by_code.assert_awaited_once()
            mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_any_invalid_row_aborts_the_batch(self, mock_db):
        """Nothing is written and every failing row number is reported."""
        rows = [
            _row(2),
            _row(3, Score="abc"),
            _row(5, CourseCode="XYZ999"),
            _row(6, Fullname=None),
        ]

        with (
            patch(f"{SERVICE}.parse_spreadsheet", new_callable=AsyncMock) as mock_parse,
            patch(f"{SERVICE}.courses_service") as mock_courses,
            patch(f"{SERVICE}.repository") as mock_repo,
        ):
            mock_parse.return_value = rows
            mock_courses.find_course_by_code = AsyncMock(side_effect=_find_course)
            mock_repo.insert_many = AsyncMock()

            with pytest.raises(ResultBatchError) as exc_info:
                await ingest_spreadsheet(mock_db, b"xlsx", "results.xlsx")

            assert [row for row, _ in exc_info.value.row_errors] == [3, 5, 6]
            assert "Invalid rows: 3, 5, 6" in exc_info.value.message
            assert "XYZ999" in exc_info.value.message
            mock_repo.insert_many.assert_not_called()
            mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_sheet(self, mock_db):
        with patch(f"{SERVICE}.parse_spreadsheet", new_callable=AsyncMock) as mock_parse:
            mock_parse.return_value = []

            with pytest.raises(ValidationFailedError) as exc_info:
                await ingest_spreadsheet(mock_db, b"xlsx", "results.xlsx")

            assert exc_info.value.field == "file"


class TestCreateResult:
    """Tests for create_result."""

    @pytest.mark.asyncio
    async def test_supplied_title_is_kept(self, mock_db):
        stored = MagicMock()
        data = ResultCreate(
            fullname="Ada Okafor",
            matric_no="CS/2024/001",
            course_code="cos101",
            course_title="Computing I",
            score="71",
        )

        with (
            patch(f"{SERVICE}.courses_service") as mock_courses,
            patch(f"{SERVICE}.repository") as mock_repo,
        ):
            mock_courses.find_course_by_code = AsyncMock(side_effect=_find_course)
            mock_repo.insert_many = AsyncMock(return_value=[stored])

            result = await create_result(mock_db, data)

            assert result is stored
            (values,) = mock_repo.insert_many.call_args.args[1]
            assert values["course_code"] == "COS101"
            assert values["course_title"] == "Computing I"
            assert values["grade"] == "A"
            mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_course(self, mock_db):
        data = ResultCreate(fullname="Ada", matric_no="CS/1", course_code="NOP100", score=50)

        with patch(f"{SERVICE}.courses_service") as mock_courses:
            mock_courses.find_course_by_code = AsyncMock(return_value=None)

            with pytest.raises(UnknownCourseError):
                await create_result(mock_db, data)

            mock_db.commit.assert_not_called()
