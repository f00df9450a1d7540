"""
Students Repository

Data access for student identities and profiles. Functions flush but never
commit; the calling service owns the transaction.
"""

import logging
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import exists, func, or_, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Student, StudentProfile

logger = logging.getLogger(__name__)


# ============================================
# Student identity
# ============================================


async def create_student(
    db: AsyncSession,
    *,
    surname: str,
    firstname: str,
    middlename: str,
    email: str,
    phone: str,
    password_hash: str,
    passport_url: str,
) -> Student:
    """Insert a student identity. Email and phone must already be normalized."""
    student = Student(
        surname=surname,
        firstname=firstname,
        middlename=middlename,
        email=email,
        phone=phone,
        password_hash=password_hash,
        passport_url=passport_url,
        date_registered=datetime.now(UTC),
    )

    db.add(student)
    await db.flush()
    await db.refresh(student)

    return student


async def get_by_id(db: AsyncSession, student_id: UUID) -> Student | None:
    """Get a student identity by ID."""
    return await db.get(Student, student_id)


async def get_by_email(db: AsyncSession, email: str) -> Student | None:
    """Get a student identity by normalized email."""
    result = await db.execute(select(Student).where(Student.email == email))
    return result.scalar_one_or_none()


async def exists_by_email_or_phone(
    db: AsyncSession,
    email: str | None,
    phone: str | None,
) -> bool:
    """
    Whether any identity has exactly this normalized email OR phone.

    Absent values are ignored; with neither value the answer is False.
    """
    conditions = []
    if email:
        conditions.append(Student.email == email)
    if phone:
        conditions.append(Student.phone == phone)

    if not conditions:
        return False

    result = await db.execute(select(exists().where(or_(*conditions))))
    return bool(result.scalar())


async def list_students(db: AsyncSession) -> list[Student]:
    """All identities, newest registration first."""
    result = await db.execute(select(Student).order_by(Student.date_registered.desc()))
    return list(result.scalars().all())


async def delete_student(db: AsyncSession, student: Student) -> None:
    """Delete an identity. Its document bundle goes with it; its profile stays."""
    await db.delete(student)
    await db.flush()


# ============================================
# Student profile
# ============================================


async def get_profile_by_email(db: AsyncSession, email: str) -> StudentProfile | None:
    """Get a profile by normalized email."""
    result = await db.execute(select(StudentProfile).where(StudentProfile.email == email))
    return result.scalar_one_or_none()


async def get_profile_by_reg_no(db: AsyncSession, reg_no: str) -> StudentProfile | None:
    """Get a profile by registration number."""
    result = await db.execute(select(StudentProfile).where(StudentProfile.reg_no == reg_no))
    return result.scalar_one_or_none()


async def get_profile_by_matric_no(db: AsyncSession, matric_no: str) -> StudentProfile | None:
    """Get a profile by matriculation number (case-insensitive)."""
    result = await db.execute(
        select(StudentProfile).where(func.upper(StudentProfile.matric_no) == matric_no.upper())
    )
    return result.scalar_one_or_none()


async def get_profiles_by_emails(
    db: AsyncSession,
    emails: list[str],
) -> dict[str, StudentProfile]:
    """
    Load the profiles for a set of emails in one query.

    Returns:
        Mapping of normalized email to profile
    """
    if not emails:
        return {}

    result = await db.execute(select(StudentProfile).where(StudentProfile.email.in_(emails)))
    return {profile.email: profile for profile in result.scalars().all()}


async def list_orphan_profiles(db: AsyncSession) -> list[StudentProfile]:
    """Profiles with no matching identity (e.g. upserted before registration)."""
    has_identity = exists().where(Student.email == StudentProfile.email)
    result = await db.execute(
        select(StudentProfile).where(~has_identity).order_by(StudentProfile.created_at.desc())
    )
    return list(result.scalars().all())


async def reg_no_exists(db: AsyncSession, reg_no: str) -> bool:
    """Whether a registration number is already taken."""
    result = await db.execute(select(exists().where(StudentProfile.reg_no == reg_no)))
    return bool(result.scalar())


async def upsert_profile(db: AsyncSession, email: str, values: dict[str, Any]) -> StudentProfile:
    """
    Insert or update the profile keyed by ``email`` in one statement.

    Raises:
        IntegrityError: If reg_no or matric_no belongs to another profile
    """
    insert_values = {**values, "email": email}
    update_values = {**values, "updated_at": func.now()}

    stmt = (
        pg_insert(StudentProfile)
        .values(**insert_values)
        .on_conflict_do_update(index_elements=[StudentProfile.email], set_=update_values)
        .returning(StudentProfile)
    )

    result = await db.scalars(stmt, execution_options={"populate_existing": True})
    profile = result.one()
    await db.flush()

    logger.info(f"Upserted profile {profile.id}")
    return profile
