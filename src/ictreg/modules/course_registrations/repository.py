"""
Course Registrations Repository
"""

from sqlalchemy import and_, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.modules.course_registrations.models import CourseRegistration
from ictreg.modules.pins.models import CoursePin, PinStatus


async def exists_for(db: AsyncSession, matric_no: str, course_code: str) -> bool:
    """Whether the student is already registered for the course."""
    result = await db.execute(
        select(
            exists().where(
                CourseRegistration.matric_no == matric_no,
                CourseRegistration.course_code == course_code,
            )
        )
    )
    return bool(result.scalar())


async def create(
    db: AsyncSession,
    *,
    matric_no: str,
    course_code: str,
    course_title: str,
    pin_code: str,
) -> CourseRegistration:
    """
    Insert a registration.

    Raises:
        IntegrityError: If (matric_no, course_code) is already registered
    """
    registration = CourseRegistration(
        matric_no=matric_no,
        course_code=course_code,
        course_title=course_title,
        pin_code=pin_code,
    )

    db.add(registration)
    await db.flush()
    await db.refresh(registration)

    return registration


async def list_by_matric_no(db: AsyncSession, matric_no: str) -> list[CourseRegistration]:
    result = await db.execute(
        select(CourseRegistration)
        .where(CourseRegistration.matric_no == matric_no)
        .order_by(CourseRegistration.registered_at.desc())
    )
    return list(result.scalars().all())


async def list_with_unused_pin(db: AsyncSession) -> list[tuple[CourseRegistration, CoursePin]]:
    """Registrations whose pin still reads unused."""
    result = await db.execute(
        select(CourseRegistration, CoursePin)
        .join(CoursePin, CoursePin.code == CourseRegistration.pin_code)
        .where(CoursePin.status == PinStatus.UNUSED)
    )
    return [(registration, pin) for registration, pin in result.all()]


async def list_used_pins_without_registration(db: AsyncSession) -> list[CoursePin]:
    """Used pins with no registration for their redeemer and course."""
    has_registration = exists().where(
        and_(
            CourseRegistration.pin_code == CoursePin.code,
            CourseRegistration.course_code == CoursePin.course_code,
        )
    )
    result = await db.execute(
        select(CoursePin).where(CoursePin.status == PinStatus.USED, ~has_registration)
    )
    return list(result.scalars().all())
