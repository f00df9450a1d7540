"""
Course Catalog Service Layer
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.modules.courses.models import CatalogCourse, CourseCatalog
from ictreg.modules.courses.repository import CourseRepository
from ictreg.modules.courses.schemas import CourseCatalogCreate
from ictreg.modules.shared import NotFoundError
from ictreg.modules.students.identity import normalize_course_code

logger = logging.getLogger(__name__)


class CourseNotFoundError(NotFoundError):
    """Raised when a catalog or a course inside it does not exist."""

    def __init__(self, message: str = "Course not found"):
        super().__init__(message=message, error_code="COURSE_NOT_FOUND")


async def create_catalog(db: AsyncSession, data: CourseCatalogCreate) -> CourseCatalog:
    """Save a catalog of courses for a department, level and semester."""
    catalog = await CourseRepository.create_catalog(
        db,
        level=data.level,
        department=data.department,
        semester=data.semester,
        courses=data.courses,
    )
    await db.commit()
    return catalog


async def list_catalogs(db: AsyncSession) -> list[CourseCatalog]:
    return await CourseRepository.list_catalogs(db)


async def delete_course(db: AsyncSession, catalog_id: UUID, course_id: UUID) -> CourseCatalog:
    """
    Remove one course from a catalog.

    Raises:
        CourseNotFoundError: If the catalog or the course is unknown
    """
    catalog = await CourseRepository.get_catalog(db, catalog_id)
    if catalog is None:
        raise CourseNotFoundError(f"Course catalog {catalog_id} not found")

    removed = await CourseRepository.delete_course(db, catalog, course_id)
    if not removed:
        raise CourseNotFoundError(f"Course {course_id} not found in catalog {catalog_id}")

    await db.commit()
    logger.info(f"Removed course {course_id} from catalog {catalog_id}")
    return catalog


async def find_course_by_code(db: AsyncSession, code: str | None) -> CatalogCourse | None:
    """Look a course up by code, ignoring case and whitespace."""
    return await CourseRepository.find_course_by_code(db, normalize_course_code(code))
