"""
Course Registration Schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class CourseRegistrationRequest(BaseModel):
    """
    Request body for POST /course-registrations.

    Fields are optional so that a missing one is reported by the workflow
    as a 400 naming the field.
    """

    matric_no: str | None = None
    course_code: str | None = None
    pin: str | None = None


class CourseRegistrationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    matric_no: str
    course_code: str
    course_title: str
    registered_at: datetime


class CourseRegistrationCreated(BaseModel):
    message: str = "Course registered successfully."
    registration: CourseRegistrationResponse


class CourseRegistrationListResponse(BaseModel):
    data: list[CourseRegistrationResponse]
    total: int
