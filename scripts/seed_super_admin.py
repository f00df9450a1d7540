"""
Seed Super Admin

Creates the first super admin so that further admins can be registered
through POST /api/v1/admins/register. Run this script once per deployment.

Usage:
    SEED_ADMIN_EMAIL=ict@school.edu SEED_ADMIN_PASSWORD=... \
    SEED_ADMIN_NAME="ICT Unit" SEED_ADMIN_PHONE=08012345678 \
    python scripts/seed_super_admin.py
"""

import asyncio
import os
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from ictreg.core.config import settings
from ictreg.core.security import hash_password
from ictreg.modules.admins.models import NO_DEPARTMENT, AdminRole
from ictreg.modules.admins.repository import AdminRepository
from ictreg.modules.students.identity import normalize_email, normalize_phone


def _require_env(name: str) -> str:
    value = os.environ.get(name, "").strip()
    if not value:
        print(f"Missing environment variable: {name}")
        sys.exit(1)
    return value


async def seed_super_admin() -> None:
    """Create the super admin if the email is not taken."""
    email = normalize_email(_require_env("SEED_ADMIN_EMAIL"))
    password = _require_env("SEED_ADMIN_PASSWORD")
    fullname = _require_env("SEED_ADMIN_NAME")
    phone = normalize_phone(os.environ.get("SEED_ADMIN_PHONE", ""))

    engine = create_async_engine(settings.database_url, echo=False)
    async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as db:
        existing = await AdminRepository.get_by_email(db, email)
        if existing:
            print(f"Admin already exists: {email}")
            print(f"  ID: {existing.id}")
            print(f"  Role: {existing.role.value}")
            await engine.dispose()
            return

        admin = await AdminRepository.create(
            db,
            fullname=fullname,
            email=email,
            phone=phone,
            department=NO_DEPARTMENT,
            password_hash=hash_password(password),
            passport_url="",  # uploaded later from the admin dashboard
            role=AdminRole.SUPER_ADMIN,
        )
        await db.commit()

        print("Super admin created successfully!")
        print(f"  Email: {email}")
        print(f"  Name: {fullname}")
        print(f"  ID: {admin.id}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed_super_admin())
