"""
Admins Router

Endpoints:
- POST /admins/register - Create an admin account (super admin only)
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.core.auth import AdminUser, get_current_super_admin
from ictreg.core.database import get_db
from ictreg.core.storage import ObjectStorage, get_storage
from ictreg.modules.admins import service
from ictreg.modules.admins.models import AdminRole
from ictreg.modules.admins.schemas import AdminRegisterResponse, AdminRegistration, AdminResponse
from ictreg.modules.shared import ServiceError, internal_error, to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=AdminRegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register Admin",
)
async def register_admin(
    fullname: str | None = Form(None),
    email: str | None = Form(None),
    phone: str | None = Form(None),
    department: str | None = Form(None),
    password: str | None = Form(None),
    role: str | None = Form(None),
    passport: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    current_admin: AdminUser = Depends(get_current_super_admin),
) -> AdminRegisterResponse:
    """
    Raises:
        HTTPException 400: Missing field, unknown role, bad email, no passport
        HTTPException 403: Caller is not a super admin
        HTTPException 409: Email already registered
        HTTPException 502: Passport could not be stored
    """
    admin_role = None
    if role:
        try:
            admin_role = AdminRole(role.strip().lower().replace(" ", "_"))
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "error": "VALIDATION_ERROR",
                    "message": "role must be 'super_admin' or 'admin'.",
                    "field": "role",
                },
            ) from e

    data = AdminRegistration(
        fullname=fullname,
        email=email,
        phone=phone,
        department=department,
        password=password,
        role=admin_role,
    )
    passport_bytes = await passport.read() if passport is not None and passport.filename else None

    try:
        admin = await service.register_admin(db, storage, data, passport_bytes)
    except ServiceError as e:
        logger.warning(f"Admin registration rejected: {e.error_code}")
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error registering admin: {e}")
        raise internal_error() from e

    logger.info(f"Super admin {current_admin.id} registered admin {admin.id} ({admin.role.value})")
    return AdminRegisterResponse(
        message=f"{admin.role.value} registered successfully.",
        admin=AdminResponse.model_validate(admin),
    )
