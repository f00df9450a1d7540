"""
Courses Router

Endpoints:
- POST /courses - Create a course catalog (admin)
- GET /courses - List catalogs, newest first
- DELETE /courses/{catalog_id}/{course_id} - Remove one course (admin)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.core.auth import AdminUser, get_current_admin_user
from ictreg.core.database import get_db
from ictreg.modules.courses import service
from ictreg.modules.courses.schemas import (
    CourseCatalogCreate,
    CourseCatalogListResponse,
    CourseCatalogResponse,
    CourseDeleteResponse,
)
from ictreg.modules.shared import ServiceError, internal_error, to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=CourseCatalogResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Course Catalog",
)
async def create_catalog(
    data: CourseCatalogCreate,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> CourseCatalogResponse:
    try:
        catalog = await service.create_catalog(db, data)
    except Exception as e:
        logger.exception(f"Unexpected error creating course catalog: {e}")
        raise internal_error() from e

    logger.info(f"Admin {admin.id} created catalog {catalog.id}")
    return CourseCatalogResponse.model_validate(catalog)


@router.get(
    "",
    response_model=CourseCatalogListResponse,
    summary="List Course Catalogs",
)
async def list_catalogs(db: AsyncSession = Depends(get_db)) -> CourseCatalogListResponse:
    catalogs = await service.list_catalogs(db)
    return CourseCatalogListResponse(
        data=[CourseCatalogResponse.model_validate(c) for c in catalogs],
        total=len(catalogs),
    )


@router.delete(
    "/{catalog_id}/{course_id}",
    response_model=CourseDeleteResponse,
    summary="Delete Course",
)
async def delete_course(
    catalog_id: UUID,
    course_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> CourseDeleteResponse:
    try:
        catalog = await service.delete_course(db, catalog_id, course_id)
        return CourseDeleteResponse(catalog=CourseCatalogResponse.model_validate(catalog))
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error deleting course {course_id}: {e}")
        raise internal_error() from e
