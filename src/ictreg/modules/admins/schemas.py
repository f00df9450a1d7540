"""
Admin Schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from ictreg.modules.admins.models import AdminRole


class AdminRegistration(BaseModel):
    """Admin registration form values; presence is checked by the service."""

    fullname: str | None = None
    email: str | None = None
    phone: str | None = None
    department: str | None = None
    password: str | None = None
    role: AdminRole | None = None


class AdminResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    fullname: str
    email: str
    phone: str
    department: str
    role: AdminRole
    passport_url: str
    created_at: datetime


class AdminRegisterResponse(BaseModel):
    message: str
    admin: AdminResponse
