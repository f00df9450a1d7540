"""
Unit tests for admin registration.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import IntegrityError

from ictreg.modules.admins.models import NO_DEPARTMENT, AdminRole
from ictreg.modules.admins.schemas import AdminRegistration
from ictreg.modules.admins.service import DuplicateAdminError, register_admin
from ictreg.modules.shared import ValidationFailedError

SERVICE = "ictreg.modules.admins.service"


def _registration(**overrides) -> AdminRegistration:
    values = {
        "fullname": " Grace Hopper ",
        "email": " Grace@Example.com ",
        "phone": "0801 234 5678",
        "department": "Computer Science",
        "password": "s3cret-pass",
        "role": AdminRole.ADMIN,
    }
    values.update(overrides)
    return AdminRegistration(**values)


class TestRegisterAdmin:
    """Tests for register_admin."""

    @pytest.mark.asyncio
    async def test_missing_field_names_it(self, mock_db, mock_storage):
        with pytest.raises(ValidationFailedError) as exc_info:
            await register_admin(mock_db, mock_storage, _registration(phone="  "), b"img")

        assert exc_info.value.field == "phone"
        mock_storage.store.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_overlong_fullname(self, mock_db, mock_storage):
        with pytest.raises(ValidationFailedError) as exc_info:
            await register_admin(mock_db, mock_storage, _registration(fullname="G" * 201), b"img")

        assert exc_info.value.field == "fullname"
        assert exc_info.value.error_code == "FIELD_TOO_LONG"

    @pytest.mark.asyncio
    async def test_duplicate_email(self, mock_db, mock_storage):
        with patch(f"{SERVICE}.AdminRepository") as mock_repo:
            mock_repo.email_exists = AsyncMock(return_value=True)

            with pytest.raises(DuplicateAdminError) as exc_info:
                await register_admin(mock_db, mock_storage, _registration(), b"img")

            assert exc_info.value.status_code == 409
            mock_storage.store.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_passport_required(self, mock_db, mock_storage):
        with patch(f"{SERVICE}.AdminRepository") as mock_repo:
            mock_repo.email_exists = AsyncMock(return_value=False)

            with pytest.raises(ValidationFailedError) as exc_info:
                await register_admin(mock_db, mock_storage, _registration(), None)

            assert exc_info.value.field == "passport"

    @pytest.mark.asyncio
    async def test_super_admin_department_is_not_applicable(self, mock_db, mock_storage):
        """Super admins never carry a department."""
        created = MagicMock()

        with patch(f"{SERVICE}.AdminRepository") as mock_repo:
            mock_repo.email_exists = AsyncMock(return_value=False)
            mock_repo.create = AsyncMock(return_value=created)

            result = await register_admin(
                mock_db, mock_storage, _registration(role=AdminRole.SUPER_ADMIN), b"img"
            )

            assert result is created
            kwargs = mock_repo.create.call_args.kwargs
            assert kwargs["department"] == NO_DEPARTMENT
            assert kwargs["email"] == "grace@example.com"
            assert kwargs["fullname"] == "Grace Hopper"
            assert kwargs["password_hash"] != "s3cret-pass"
            assert kwargs["passport_url"] == mock_storage.store.return_value
            mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_admin_keeps_department(self, mock_db, mock_storage):
        with patch(f"{SERVICE}.AdminRepository") as mock_repo:
            mock_repo.email_exists = AsyncMock(return_value=False)
            mock_repo.create = AsyncMock(return_value=MagicMock())

            await register_admin(mock_db, mock_storage, _registration(), b"img")

            assert mock_repo.create.call_args.kwargs["department"] == "Computer Science"

    @pytest.mark.asyncio
    async def test_insert_race_is_a_duplicate(self, mock_db, mock_storage):
        with patch(f"{SERVICE}.AdminRepository") as mock_repo:
            mock_repo.email_exists = AsyncMock(return_value=False)
            mock_repo.create = AsyncMock(
                side_effect=IntegrityError("INSERT INTO admins", {}, Exception("duplicate"))
            )

            with pytest.raises(DuplicateAdminError):
                await register_admin(mock_db, mock_storage, _registration(), b"img")

            mock_db.rollback.assert_awaited_once()
