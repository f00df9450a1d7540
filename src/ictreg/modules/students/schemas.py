"""
Students Schemas

Pydantic schemas for registration, profile upsert and the composite
student view returned by every read endpoint.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ictreg.modules.documents.schemas import DocumentBundleResponse


class StudentRegistration(BaseModel):
    """
    Registration form values.

    Everything is optional here; the service checks presence in a fixed
    order so the first missing field is the one reported.
    """

    surname: str | None = None
    firstname: str | None = None
    middlename: str | None = None
    phone: str | None = None
    email: str | None = None
    password: str | None = None
    confirm_password: str | None = None


class StudentRegisterResponse(BaseModel):
    """Response after a successful registration."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    surname: str
    firstname: str
    middlename: str
    email: str
    phone: str
    passport_url: str
    date_registered: datetime
    message: str = "Student registered successfully."


class DuplicateCheckResponse(BaseModel):
    exists: bool


class UploadResponse(BaseModel):
    url: str


class ProfileUpdate(BaseModel):
    """Profile form values. Omitted fields keep their stored value."""

    student_id: UUID
    surname: str | None = None
    firstname: str | None = None
    middlename: str | None = None
    phone: str | None = None
    dob: str | None = None
    department: str | None = None
    level: str | None = None
    reg_no: str | None = None
    matric_no: str | None = None
    state_origin: str | None = None
    lga_origin: str | None = None
    address: str | None = None
    nok_surname: str | None = None
    nok_firstname: str | None = None
    nok_phone: str | None = None
    nok_relation: str | None = None


class StudentComposite(BaseModel):
    """
    Merged read view of one student.

    ``id`` and ``date_registered`` are None for a profile-only record.
    """

    id: UUID | None = None
    has_identity: bool = True
    email: str

    surname: str | None = None
    firstname: str | None = None
    middlename: str | None = None
    phone: str | None = None
    passport_url: str | None = None
    date_registered: datetime | None = None

    dob: str | None = None
    department: str | None = None
    level: str | None = None
    reg_no: str | None = None
    matric_no: str | None = None
    state_origin: str | None = None
    lga_origin: str | None = None
    address: str | None = None
    nok_surname: str | None = None
    nok_firstname: str | None = None
    nok_phone: str | None = None
    nok_relation: str | None = None

    documents: DocumentBundleResponse | None = None


class ProfileUpdateResponse(BaseModel):
    message: str = "Profile saved successfully."
    profile: StudentComposite


class StudentListResponse(BaseModel):
    """Paginated student listing."""

    data: list[StudentComposite]
    total: int
    current_page: int
    total_pages: int


class StudentDeleteResponse(BaseModel):
    message: str = "Student deleted successfully."
    id: UUID


class StudentListParams(BaseModel):
    """Query parameters for the admin listing."""

    q: str | None = None
    department: str | None = None
    level: str | None = None
    page: int = Field(1, ge=1)
    limit: int = Field(50, ge=1, le=200)
