"""
Admin Repository

Database operations for admin accounts.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.modules.admins.models import Admin, AdminRole

logger = logging.getLogger(__name__)


class AdminRepository:
    """Repository for admin database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        fullname: str,
        email: str,
        phone: str,
        department: str,
        password_hash: str,
        passport_url: str,
        role: AdminRole,
    ) -> Admin:
        """
        Create a new admin record.

        Args:
            db: Database session
            fullname: Display name
            email: Normalized email address (unique)
            phone: Phone number
            department: Department, or "N/A" for super admins
            password_hash: Hashed password
            passport_url: Stored passport photo URL
            role: Admin role

        Returns:
            Created Admin instance

        Raises:
            IntegrityError: If the email is already registered
        """
        admin = Admin(
            fullname=fullname,
            email=email,
            phone=phone,
            department=department,
            password_hash=password_hash,
            passport_url=passport_url,
            role=role,
        )

        db.add(admin)
        await db.flush()
        await db.refresh(admin)

        logger.info(f"Created admin: {admin.id} ({admin.role.value})")
        return admin

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Admin | None:
        """
        Get an admin by normalized email address.

        Returns:
            Admin instance or None if not found
        """
        result = await db.execute(select(Admin).where(Admin.email == email))
        return result.scalar_one_or_none()

    @staticmethod
    async def email_exists(db: AsyncSession, email: str) -> bool:
        admin = await AdminRepository.get_by_email(db, email)
        return admin is not None
