"""
Course Registrations Router

Endpoints:
- POST /course-registrations - Register for a course with a pin
- GET /course-registrations?matric_no= - List a student's registrations

Security:
- Registration attempts are rate limited per matric number (pin guessing)
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.core.database import get_db
from ictreg.core.rate_limit import enforce_rate_limit
from ictreg.modules.course_registrations import service
from ictreg.modules.course_registrations.schemas import (
    CourseRegistrationCreated,
    CourseRegistrationListResponse,
    CourseRegistrationRequest,
    CourseRegistrationResponse,
)
from ictreg.modules.shared import ServiceError, internal_error, to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter()

# Attempts per matric number
RATE_LIMIT_REGISTER = (10, 300)  # 10 attempts per 5 minutes


@router.post(
    "",
    response_model=CourseRegistrationCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Register for a Course",
    responses={
        400: {"description": "Missing field, or pin is for another course (INVALID_PIN)"},
        404: {"description": "Pin not found (PIN_NOT_FOUND)"},
        409: {"description": "ALREADY_REGISTERED or PIN_ALREADY_USED"},
        429: {"description": "Too many attempts for this matric number"},
    },
)
async def register_course(
    data: CourseRegistrationRequest,
    db: AsyncSession = Depends(get_db),
) -> CourseRegistrationCreated:
    matric_key = service.normalize_matric_no(data.matric_no)
    if matric_key:
        limit, window = RATE_LIMIT_REGISTER
        await enforce_rate_limit(f"course_registration:{matric_key}", limit, window)

    try:
        registration = await service.register_course(db, data)
        return CourseRegistrationCreated(
            registration=CourseRegistrationResponse.model_validate(registration)
        )

    except ServiceError as e:
        logger.warning(f"Course registration rejected for {matric_key}: {e.error_code}")
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error registering course for {matric_key}: {e}")
        raise internal_error() from e


@router.get(
    "",
    response_model=CourseRegistrationListResponse,
    summary="List Course Registrations",
)
async def list_registrations(
    matric_no: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> CourseRegistrationListResponse:
    try:
        registrations = await service.list_registrations(db, matric_no)
    except ServiceError as e:
        raise to_http_exception(e) from e

    return CourseRegistrationListResponse(
        data=[CourseRegistrationResponse.model_validate(r) for r in registrations],
        total=len(registrations),
    )
