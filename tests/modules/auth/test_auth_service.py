"""
Unit tests for universal login.
"""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from ictreg.core.security import decode_token
from ictreg.modules.admins.models import Admin, AdminRole
from ictreg.modules.auth.service import AccountNotFoundError, InvalidCredentialsError, login

SERVICE = "ictreg.modules.auth.service"


@pytest.fixture
def sample_admin():
    admin = MagicMock(spec=Admin)
    admin.id = uuid4()
    admin.fullname = "ICT Unit"
    admin.email = "ict@school.edu"
    admin.password_hash = "hashed"
    admin.passport_url = "https://cdn.example.com/admin.jpg"
    admin.role = AdminRole.SUPER_ADMIN
    return admin


class TestLogin:
    """Tests for login."""

    @pytest.mark.asyncio
    async def test_student_login(self, mock_db, sample_student):
        """Students are looked up by normalized email and get a student token."""
        with (
            patch(f"{SERVICE}.students_repository") as mock_students,
            patch(f"{SERVICE}.verify_password", return_value=True),
        ):
            mock_students.get_by_email = AsyncMock(return_value=sample_student)

            result = await login(mock_db, " Ada.Okafor@Example.com ", "s3cret-pass")

            mock_students.get_by_email.assert_awaited_once_with(mock_db, "ada.okafor@example.com")
            assert result.role == "student"
            assert result.user.name == "Okafor Ada"
            claims = decode_token(result.access_token)
            assert claims["sub"] == str(sample_student.id)
            assert claims["role"] == "student"

    @pytest.mark.asyncio
    async def test_admin_login(self, mock_db, sample_admin):
        """Admins are checked when no student has the email."""
        with (
            patch(f"{SERVICE}.students_repository") as mock_students,
            patch(f"{SERVICE}.AdminRepository") as mock_admins,
            patch(f"{SERVICE}.verify_password", return_value=True),
        ):
            mock_students.get_by_email = AsyncMock(return_value=None)
            mock_admins.get_by_email = AsyncMock(return_value=sample_admin)

            result = await login(mock_db, "ict@school.edu", "pw")

            assert result.role == "super_admin"
            assert decode_token(result.access_token)["role"] == "super_admin"

    @pytest.mark.asyncio
    async def test_wrong_password(self, mock_db, sample_student):
        with (
            patch(f"{SERVICE}.students_repository") as mock_students,
            patch(f"{SERVICE}.verify_password", return_value=False),
        ):
            mock_students.get_by_email = AsyncMock(return_value=sample_student)

            with pytest.raises(InvalidCredentialsError) as exc_info:
                await login(mock_db, sample_student.email, "wrong")

            assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_email(self, mock_db):
        with (
            patch(f"{SERVICE}.students_repository") as mock_students,
            patch(f"{SERVICE}.AdminRepository") as mock_admins,
        ):
            mock_students.get_by_email = AsyncMock(return_value=None)
            mock_admins.get_by_email = AsyncMock(return_value=None)

            with pytest.raises(AccountNotFoundError) as exc_info:
                await login(mock_db, "nobody@example.com", "pw")

            assert exc_info.value.status_code == 404
