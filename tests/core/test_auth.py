"""
Unit tests for the bearer-token dependencies.
"""

from unittest.mock import patch

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from ictreg.core import auth
from ictreg.core.security import create_access_token


class TestDevelopmentBypass:
    """The dev/test token shortcut must be opted into explicitly."""

    def test_disabled_when_python_env_unset(self, monkeypatch):
        monkeypatch.delenv("PYTHON_ENV", raising=False)

        assert auth._is_dev_mode_safe() is False

    def test_disabled_in_production(self, monkeypatch):
        monkeypatch.setenv("PYTHON_ENV", "production")

        assert auth._is_dev_mode_safe() is False

    def test_enabled_only_for_explicit_development(self, monkeypatch):
        monkeypatch.setenv("PYTHON_ENV", "development")

        with patch.object(auth.settings, "python_env", "development"):
            assert auth._is_dev_mode_safe() is True

    @pytest.mark.asyncio
    async def test_dev_token_rejected_when_bypass_off(self, monkeypatch):
        monkeypatch.delenv("PYTHON_ENV", raising=False)

        with patch.object(auth, "_DEVELOPMENT_MODE", auth._is_dev_mode_safe()):
            with pytest.raises(HTTPException) as exc_info:
                await auth._validate_jwt_token("dev-token")

        assert exc_info.value.status_code == 401


class TestValidateToken:
    @pytest.mark.asyncio
    async def test_access_token_claims(self):
        token = create_access_token(
            subject="00000000-0000-0000-0000-0000000000aa",
            additional_claims={"email": "ict@example.com", "role": "admin"},
        )

        admin = await auth._validate_jwt_token(token)

        assert admin.email == "ict@example.com"
        assert admin.role == "admin"
        assert not admin.is_super_admin

    @pytest.mark.asyncio
    async def test_student_role_is_forbidden(self):
        student = auth.AdminUser(
            id="00000000-0000-0000-0000-0000000000bb", email="s@example.com", role="student"
        )

        with patch.object(auth, "_validate_jwt_token", return_value=student):
            with pytest.raises(HTTPException) as exc_info:
                await auth.get_current_admin_user(
                    HTTPAuthorizationCredentials(scheme="Bearer", credentials="t")
                )

        assert exc_info.value.status_code == 403
