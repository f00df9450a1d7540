"""
Result Schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ResultCreate(BaseModel):
    """
    Request body for POST /results.

    Values are checked by the ingestion rules rather than here, so a single
    entry and a spreadsheet row fail with the same messages.
    """

    fullname: str | None = None
    matric_no: str | None = None
    department: str | None = None
    level: str | None = None
    course_code: str | None = None
    course_title: str | None = None
    score: float | str | None = None
    grade: str | None = None


class ResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    fullname: str
    matric_no: str
    department: str | None = None
    level: str | None = None
    course_code: str
    course_title: str
    score: float
    grade: str
    uploaded_at: datetime


class ResultUploadResponse(BaseModel):
    message: str
    inserted: int


class ResultListResponse(BaseModel):
    data: list[ResultResponse]
    total: int
