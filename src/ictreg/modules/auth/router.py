"""Authentication router."""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.core.database import get_db
from ictreg.core.rate_limit import client_ip, enforce_rate_limit
from ictreg.modules.auth import service
from ictreg.modules.auth.schemas import LoginRequest, LoginResponse
from ictreg.modules.shared import ServiceError, internal_error, to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_LOGIN = (10, 60)  # 10 attempts per minute per client IP


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """
    Authenticate a student, admin or super admin and return JWT tokens.

    Raises:
        HTTPException 401: Wrong password
        HTTPException 404: No account with this email
        HTTPException 429: Too many attempts from this address
    """
    limit, window = RATE_LIMIT_LOGIN
    await enforce_rate_limit(f"login:{client_ip(request)}", limit, window)

    try:
        return await service.login(db, credentials.email, credentials.password)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error during login: {e}")
        raise internal_error() from e
