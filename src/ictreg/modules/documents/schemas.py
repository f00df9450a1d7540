"""
Document Bundle Schemas
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class OLevelInput(BaseModel):
    """One O'Level subject line."""

    model_config = ConfigDict(extra="ignore")

    exam_year: str | None = None
    exam_type: str | None = None
    exam_number: str | None = None
    subject: str | None = None
    grade: str | None = None


class JambInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    reg_no: str | None = None
    score: str | int | float | None = None


class DocumentBundleResponse(BaseModel):
    """Stored bundle as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    student_id: UUID
    o_level_inputs: list[dict[str, Any]] = Field(default_factory=list)
    jamb_input: dict[str, Any] = Field(default_factory=dict)
    files: dict[str, Any] = Field(default_factory=dict)
    uploaded_at: datetime


class DocumentUploadResponse(BaseModel):
    message: str = "Documents uploaded successfully."
    documents: DocumentBundleResponse
