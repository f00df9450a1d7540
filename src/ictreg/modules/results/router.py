"""
Results Router

Endpoints:
- POST /results/upload - Import a results spreadsheet (admin, all or nothing)
- POST /results - Record a single result (admin)
- GET /results?matric_no=&course_code= - List results
"""

import logging

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.core.auth import AdminUser, get_current_admin_user
from ictreg.core.database import get_db
from ictreg.modules.results import service
from ictreg.modules.results.schemas import (
    ResultCreate,
    ResultListResponse,
    ResultResponse,
    ResultUploadResponse,
)
from ictreg.modules.shared import ServiceError, internal_error, to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/upload",
    response_model=ResultUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload Results Spreadsheet",
    description="""
Excel (.xlsx) or CSV file with a header row. Accepted headers:
Fullname, MatricNo, Department, Level, CourseCode, CourseTitle, Score, Grade
(camelCase spellings also accepted).

If any row is invalid nothing is saved and the error lists every failing row.
""",
)
async def upload_results(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> ResultUploadResponse:
    content = await file.read()

    try:
        inserted = await service.ingest_spreadsheet(db, content, file.filename)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error importing results: {e}")
        raise internal_error() from e

    logger.info(f"Admin {admin.id} imported {inserted} result(s)")
    return ResultUploadResponse(message="Results uploaded successfully.", inserted=inserted)


@router.post(
    "",
    response_model=ResultResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record Result",
)
async def create_result(
    data: ResultCreate,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> ResultResponse:
    try:
        result = await service.create_result(db, data)
        return ResultResponse.model_validate(result)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error recording result: {e}")
        raise internal_error() from e


@router.get("", response_model=ResultListResponse, summary="List Results")
async def list_results(
    matric_no: str | None = Query(None),
    course_code: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> ResultListResponse:
    results = await service.list_results(db, matric_no, course_code)
    return ResultListResponse(
        data=[ResultResponse.model_validate(r) for r in results],
        total=len(results),
    )
