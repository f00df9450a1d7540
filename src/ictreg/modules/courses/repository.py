"""
Course Catalog Repository

Database operations for course catalogs.
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.modules.courses.models import CatalogCourse, CourseCatalog
from ictreg.modules.courses.schemas import CourseItem

logger = logging.getLogger(__name__)


class CourseRepository:
    """Repository for course catalog database operations."""

    @staticmethod
    async def create_catalog(
        db: AsyncSession,
        *,
        level: str,
        department: str,
        semester: int,
        courses: list[CourseItem],
    ) -> CourseCatalog:
        """
        Create a catalog with its courses.

        Args:
            db: Database session
            level: Level the catalog applies to (e.g. ND1)
            department: Department name
            semester: 1 or 2
            courses: Courses with codes already normalized

        Returns:
            Created CourseCatalog with courses loaded
        """
        catalog = CourseCatalog(
            level=level,
            department=department,
            semester=semester,
            courses=[
                CatalogCourse(
                    code=course.code,
                    title=course.title,
                    unit=course.unit,
                    lecturer=course.lecturer,
                )
                for course in courses
            ],
        )

        db.add(catalog)
        await db.flush()
        await db.refresh(catalog, attribute_names=["courses", "created_at"])

        logger.info(f"Created catalog {catalog.id} with {len(courses)} course(s)")
        return catalog

    @staticmethod
    async def list_catalogs(db: AsyncSession) -> list[CourseCatalog]:
        """All catalogs, newest first."""
        result = await db.execute(select(CourseCatalog).order_by(CourseCatalog.created_at.desc()))
        return list(result.scalars().all())

    @staticmethod
    async def get_catalog(db: AsyncSession, catalog_id: UUID) -> CourseCatalog | None:
        return await db.get(CourseCatalog, catalog_id)

    @staticmethod
    async def delete_course(db: AsyncSession, catalog: CourseCatalog, course_id: UUID) -> bool:
        """
        Remove one course from a catalog.

        Returns:
            True if the course belonged to the catalog and was removed
        """
        course = next((c for c in catalog.courses if c.id == course_id), None)
        if course is None:
            return False

        catalog.courses.remove(course)
        await db.flush()
        return True

    @staticmethod
    async def find_course_by_code(db: AsyncSession, code: str) -> CatalogCourse | None:
        """
        Case-insensitive exact match on course code across all catalogs.

        When several catalogs list the same code the newest entry wins.
        """
        if not code:
            return None

        result = await db.execute(
            select(CatalogCourse)
            .where(func.upper(CatalogCourse.code) == code.upper())
            .order_by(CatalogCourse.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()
