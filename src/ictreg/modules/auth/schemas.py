"""Authentication schemas."""

from typing import Literal

from pydantic import BaseModel, Field

LoginRole = Literal["student", "admin", "super_admin"]


class LoginRequest(BaseModel):
    """Login request schema."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class AccountResponse(BaseModel):
    """The authenticated account, without credentials."""

    id: str
    email: str
    name: str
    role: LoginRole
    passport_url: str | None = None


class LoginResponse(BaseModel):
    """Login response schema."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    role: LoginRole
    user: AccountResponse
