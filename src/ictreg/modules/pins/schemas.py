"""
Pin Schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ictreg.modules.pins.models import PinStatus

MAX_PINS_PER_BATCH = 500


class PinGenerateRequest(BaseModel):
    """Request body for POST /pins/generate."""

    course_code: str = Field(..., min_length=1, max_length=20)
    course_title: str | None = Field(None, max_length=200)
    count: int = Field(..., ge=1, le=MAX_PINS_PER_BATCH)


class PinResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    course_code: str
    course_title: str
    status: PinStatus
    used_at: datetime | None = None
    used_by: str | None = None
    created_at: datetime


class PinGenerateResponse(BaseModel):
    course_code: str
    course_title: str
    count: int
    pins: list[str]


class PinListResponse(BaseModel):
    data: list[PinResponse]
    total: int


class PinDeleteResponse(BaseModel):
    message: str
    deleted: int
