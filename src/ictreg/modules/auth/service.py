"""
Authentication Service

Universal login: the email is looked up among students first, then
admins. Passwords are checked against their bcrypt hash.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.core.security import create_access_token, create_refresh_token, verify_password
from ictreg.modules.admins.repository import AdminRepository
from ictreg.modules.auth.schemas import AccountResponse, LoginResponse
from ictreg.modules.shared import NotFoundError, ServiceError
from ictreg.modules.students import repository as students_repository
from ictreg.modules.students.identity import full_name, normalize_email

logger = logging.getLogger(__name__)

STUDENT_ROLE = "student"


class InvalidCredentialsError(ServiceError):
    def __init__(self):
        super().__init__(
            message="Incorrect password.",
            error_code="INVALID_CREDENTIALS",
            status_code=401,
        )


class AccountNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__(
            message="No account found with this email.",
            error_code="ACCOUNT_NOT_FOUND",
        )


def _issue_tokens(account: AccountResponse) -> LoginResponse:
    access_token = create_access_token(
        subject=account.id,
        additional_claims={"email": account.email, "role": account.role, "name": account.name},
    )
    return LoginResponse(
        access_token=access_token,
        refresh_token=create_refresh_token(subject=account.id),
        role=account.role,
        user=account,
    )


async def login(db: AsyncSession, email: str, password: str) -> LoginResponse:
    """
    Authenticate a student or an admin.

    Raises:
        InvalidCredentialsError: Account exists but the password is wrong (401)
        AccountNotFoundError: No student or admin has this email (404)
    """
    normalized = normalize_email(email)

    student = await students_repository.get_by_email(db, normalized)
    if student is not None:
        if not verify_password(password, student.password_hash):
            logger.warning(f"Invalid password for student {student.id}")
            raise InvalidCredentialsError()

        logger.info(f"Student logged in: {student.id}")
        return _issue_tokens(
            AccountResponse(
                id=str(student.id),
                email=student.email,
                name=full_name(student.surname, student.firstname, student.middlename),
                role=STUDENT_ROLE,
                passport_url=student.passport_url,
            )
        )

    admin = await AdminRepository.get_by_email(db, normalized)
    if admin is not None:
        if not verify_password(password, admin.password_hash):
            logger.warning(f"Invalid password for admin {admin.id}")
            raise InvalidCredentialsError()

        logger.info(f"Admin logged in: {admin.id} (role: {admin.role.value})")
        return _issue_tokens(
            AccountResponse(
                id=str(admin.id),
                email=admin.email,
                name=admin.fullname,
                role=admin.role.value,
                passport_url=admin.passport_url,
            )
        )

    logger.warning(f"Login attempt for unknown email: {normalized}")
    raise AccountNotFoundError()
