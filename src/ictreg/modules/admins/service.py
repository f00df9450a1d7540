"""
Admins Service Layer
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.core.security import hash_password
from ictreg.core.storage import ObjectStorage
from ictreg.modules.admins.models import NO_DEPARTMENT, Admin, AdminRole
from ictreg.modules.admins.repository import AdminRepository
from ictreg.modules.admins.schemas import AdminRegistration
from ictreg.modules.shared import ConflictError, ValidationFailedError, check_column_lengths
from ictreg.modules.students.identity import is_valid_email, normalize_email, normalize_phone

logger = logging.getLogger(__name__)

PASSPORT_FOLDER = "admin_passports"

REQUIRED_FIELDS = ("fullname", "email", "phone", "password", "role")


class DuplicateAdminError(ConflictError):
    def __init__(self):
        super().__init__(
            message="An admin with this email already exists.",
            error_code="DUPLICATE_ADMIN",
        )


async def register_admin(
    db: AsyncSession,
    storage: ObjectStorage,
    data: AdminRegistration,
    passport: bytes | None,
) -> Admin:
    """
    Create an admin account.

    Super admins are stored with department "N/A"; other admins keep the
    department they were given, or "N/A" when none.

    Raises:
        ValidationFailedError: Missing or overlong field, bad email or missing passport
        DuplicateAdminError: Email already registered
        FileUnavailableError: Passport could not be stored
    """
    for field in REQUIRED_FIELDS:
        value = getattr(data, field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationFailedError(f"{field} is required.", field=field)

    email = normalize_email(data.email)
    if not is_valid_email(email):
        raise ValidationFailedError(
            "Email address is not valid.", error_code="INVALID_EMAIL", field="email"
        )

    if data.role is AdminRole.SUPER_ADMIN:
        department = NO_DEPARTMENT
    else:
        department = (data.department or "").strip() or NO_DEPARTMENT

    fullname = data.fullname.strip()
    phone = normalize_phone(data.phone)
    check_column_lengths(
        Admin, {"fullname": fullname, "email": email, "phone": phone, "department": department}
    )

    if await AdminRepository.email_exists(db, email):
        raise DuplicateAdminError()

    if not passport:
        raise ValidationFailedError("Passport photo is required.", field="passport")

    passport_url = await storage.store(passport, PASSPORT_FOLDER)

    try:
        admin = await AdminRepository.create(
            db,
            fullname=fullname,
            email=email,
            phone=phone,
            department=department,
            password_hash=hash_password(data.password),
            passport_url=passport_url,
            role=data.role,
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise DuplicateAdminError() from e

    return admin
