"""
Authentication and Authorization Module

FastAPI dependencies that validate bearer JWTs and enforce admin roles.
Tokens are issued by the universal login endpoint (modules/auth).

SECURITY NOTE:
- Development mode auth bypass is ONLY enabled when PYTHON_ENV=development
- Production environments MUST set PYTHON_ENV=production to disable test tokens
"""

import logging
import os
from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ictreg.core.config import settings
from ictreg.core.security import decode_token

logger = logging.getLogger(__name__)

ROLE_SUPER_ADMIN = "super_admin"
ROLE_ADMIN = "admin"
ADMIN_ROLES = frozenset({ROLE_SUPER_ADMIN, ROLE_ADMIN})

# Security scheme for OpenAPI documentation
security = HTTPBearer(
    auto_error=True,
    description="JWT Bearer token for authentication",
)


@dataclass
class AdminUser:
    """
    An authenticated admin, populated from JWT claims.

    Attributes:
        id: Admin's unique identifier (UUID)
        email: Admin's email address
        role: 'super_admin' or 'admin'
        name: Display name (optional)
    """

    id: UUID
    email: str
    role: str
    name: str | None = None

    @property
    def is_super_admin(self) -> bool:
        return self.role == ROLE_SUPER_ADMIN

    def __str__(self) -> str:
        return f"AdminUser(id={self.id}, email={self.email}, role={self.role})"


def _is_dev_mode_safe() -> bool:
    """
    Development auth bypass is enabled only when PYTHON_ENV is explicitly set
    to development and the settings agree. An unset variable disables it.
    """
    env_var = os.getenv("PYTHON_ENV", "").strip().lower()

    is_safe = (
        env_var == "development"
        and settings.is_development
        and not settings.is_production
    )

    if is_safe:
        logger.warning(
            "SECURITY: Development auth mode is ENABLED. This MUST NOT be used in production!"
        )

    return is_safe


_DEVELOPMENT_MODE = _is_dev_mode_safe()

_DEV_ADMIN = AdminUser(
    id=UUID("00000000-0000-0000-0000-000000000001"),
    email="admin@ictreg.dev",
    role=ROLE_SUPER_ADMIN,
    name="Development Admin",
)


def _unauthorized(error: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _validate_jwt_token(token: str) -> AdminUser:
    """
    Validate a JWT and extract the caller's claims.

    Raises:
        HTTPException 401: If the token is invalid, expired, of the wrong
            type, or missing claims
    """
    if _DEVELOPMENT_MODE and token in ("dev-token", "test-token"):
        logger.debug("Development mode: Using test token")
        return _DEV_ADMIN

    payload = decode_token(token)

    if payload is None:
        logger.warning("Invalid or expired JWT token")
        raise _unauthorized("INVALID_TOKEN", "Invalid or expired authentication token.")

    token_type = payload.get("type", "access")
    if token_type != "access":
        logger.warning(f"Invalid token type: {token_type}")
        raise _unauthorized("INVALID_TOKEN_TYPE", "This endpoint requires an access token.")

    try:
        user_id_str = payload.get("sub")
        if not user_id_str:
            raise ValueError("Missing 'sub' claim in token")

        return AdminUser(
            id=UUID(user_id_str),
            email=payload.get("email", ""),
            role=payload.get("role", ""),
            name=payload.get("name"),
        )

    except ValueError as e:
        logger.warning(f"Invalid token claims: {e}")
        raise _unauthorized(
            "INVALID_TOKEN_CLAIMS", "Token contains invalid or missing claims."
        ) from e


async def get_current_admin_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> AdminUser:
    """
    FastAPI dependency for admin endpoints (super_admin or admin).

    Raises:
        HTTPException 401: If the token is missing, invalid, or expired
        HTTPException 403: If the caller is not an admin
    """
    user = await _validate_jwt_token(credentials.credentials)

    if user.role not in ADMIN_ROLES:
        logger.warning(f"Access denied: {user.id} has role '{user.role}', admin required")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": "ADMIN_ACCESS_REQUIRED",
                "message": "Admin access is required for this endpoint.",
            },
        )

    logger.debug(f"Authenticated admin: {user.id} ({user.email})")
    return user


async def get_current_super_admin(
    admin: AdminUser = Depends(get_current_admin_user),
) -> AdminUser:
    """
    FastAPI dependency for endpoints restricted to super admins.

    Raises:
        HTTPException 403: If the caller is an admin but not a super admin
    """
    if not admin.is_super_admin:
        logger.warning(f"Access denied: {admin.id} is not a super admin")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": "SUPER_ADMIN_ACCESS_REQUIRED",
                "message": "Super admin access is required for this endpoint.",
            },
        )

    return admin


__all__ = [
    "ADMIN_ROLES",
    "ROLE_ADMIN",
    "ROLE_SUPER_ADMIN",
    "AdminUser",
    "get_current_admin_user",
    "get_current_super_admin",
]
