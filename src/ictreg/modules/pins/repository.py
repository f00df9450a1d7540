"""
Pins Repository

Data access for course pins. The redemption flip is a single conditional
UPDATE so two concurrent redemptions of the same pin cannot both succeed.
"""

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.modules.pins.models import CoursePin, PinStatus

logger = logging.getLogger(__name__)


async def insert_batch(
    db: AsyncSession,
    codes: list[str],
    course_code: str,
    course_title: str,
) -> list[CoursePin]:
    """
    Insert a batch of unused pins inside a savepoint.

    A unique violation rolls back only the savepoint, leaving the outer
    transaction usable for a retry.

    Raises:
        IntegrityError: If any code already exists
    """
    pins = [
        CoursePin(
            code=code,
            course_code=course_code,
            course_title=course_title,
            status=PinStatus.UNUSED,
        )
        for code in codes
    ]

    async with db.begin_nested():
        db.add_all(pins)
        await db.flush()

    return pins


async def get_by_code(db: AsyncSession, code: str) -> CoursePin | None:
    result = await db.execute(select(CoursePin).where(CoursePin.code == code))
    return result.scalar_one_or_none()


async def get_by_id(db: AsyncSession, pin_id: UUID) -> CoursePin | None:
    return await db.get(CoursePin, pin_id)


async def flip_unused(
    db: AsyncSession,
    code: str,
    course_code: str,
    used_by: str,
) -> UUID | None:
    """
    Mark a pin used if, and only if, it exists for this course and is unused.

    Returns:
        The pin's ID when this call performed the flip, else None
    """
    result = await db.execute(
        update(CoursePin)
        .where(
            CoursePin.code == code,
            CoursePin.course_code == course_code,
            CoursePin.status == PinStatus.UNUSED,
        )
        .values(status=PinStatus.USED, used_at=datetime.now(UTC), used_by=used_by)
        .returning(CoursePin.id)
        .execution_options(synchronize_session=False)
    )
    return result.scalar_one_or_none()


async def list_pins(
    db: AsyncSession,
    course_code: str | None = None,
    status: PinStatus | None = None,
) -> list[CoursePin]:
    """Pins, newest first, optionally filtered by course and status."""
    query = select(CoursePin)
    if course_code:
        query = query.where(CoursePin.course_code == course_code)
    if status:
        query = query.where(CoursePin.status == status)

    result = await db.execute(query.order_by(CoursePin.created_at.desc()))
    return list(result.scalars().all())


async def delete_all(db: AsyncSession) -> int:
    """Delete every pin. Returns the number removed."""
    result = await db.execute(delete(CoursePin))
    await db.flush()
    return result.rowcount or 0


async def delete_by_id(db: AsyncSession, pin_id: UUID) -> bool:
    """Delete one pin. Returns True if it existed."""
    result = await db.execute(delete(CoursePin).where(CoursePin.id == pin_id))
    await db.flush()
    return bool(result.rowcount)
