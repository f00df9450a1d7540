"""
Course Catalog Schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ictreg.modules.students.identity import normalize_course_code


class CourseItem(BaseModel):
    """One course in a catalog create request."""

    code: str = Field(..., min_length=1, max_length=20)
    title: str = Field(..., min_length=1, max_length=200)
    unit: int = Field(..., ge=0, le=30)
    lecturer: str = Field(..., min_length=1, max_length=150)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        code = normalize_course_code(value)
        if not code:
            raise ValueError("code must not be blank")
        return code

    @field_validator("title", "lecturer")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()


class CourseCatalogCreate(BaseModel):
    """Request body for POST /courses."""

    level: str = Field(..., min_length=1, max_length=20)
    department: str = Field(..., min_length=1, max_length=150)
    semester: int = Field(..., ge=1, le=2)
    courses: list[CourseItem] = Field(..., min_length=1)

    @field_validator("level", "department")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class CatalogCourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    title: str
    unit: int
    lecturer: str


class CourseCatalogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    level: str
    department: str
    semester: int
    courses: list[CatalogCourseResponse]
    created_at: datetime


class CourseCatalogListResponse(BaseModel):
    data: list[CourseCatalogResponse]
    total: int


class CourseDeleteResponse(BaseModel):
    message: str = "Course deleted successfully."
    catalog: CourseCatalogResponse
