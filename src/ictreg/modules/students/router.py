"""
Students Router

Endpoints:
- POST /students/register - Register a student (multipart, passport photo)
- GET /students/check-duplicate - Is an email or phone already registered
- POST /students/upload-single - Store one file and return its URL
- GET /students - Admin listing with search, filters and pagination
- GET /students/export/pdf - Admin PDF of all students
- GET /students/{id} - Composite student view
- GET /students/{id}/export/pdf - Admin PDF info sheet for one student
- DELETE /students/{id} - Admin delete (documents cascade, profile kept)
- POST /profile/update - Create or update a student's profile
- GET /profile/{reg_no} - Composite view by registration number
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, Request, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile as FormFile

from ictreg.core.auth import AdminUser, get_current_admin_user
from ictreg.core.database import get_db
from ictreg.core.storage import ObjectStorage, get_storage
from ictreg.modules.shared import ServiceError, internal_error, to_http_exception
from ictreg.modules.students import exports, service
from ictreg.modules.students.schemas import (
    DuplicateCheckResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
    StudentComposite,
    StudentDeleteResponse,
    StudentListParams,
    StudentListResponse,
    StudentRegisterResponse,
    StudentRegistration,
    UploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()
profile_router = APIRouter()

PDF_MEDIA_TYPE = "application/pdf"


async def _read_upload(upload: UploadFile | None) -> bytes | None:
    if upload is None or not upload.filename:
        return None
    return await upload.read()


@router.post(
    "/register",
    response_model=StudentRegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register Student",
)
async def register_student(
    surname: str | None = Form(None),
    firstname: str | None = Form(None),
    middlename: str | None = Form(None),
    phone: str | None = Form(None),
    email: str | None = Form(None),
    password: str | None = Form(None),
    confirm_password: str | None = Form(None),
    passport: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
) -> StudentRegisterResponse:
    """
    Register a new student with a passport photo.

    Raises:
        HTTPException 400: Missing field, password mismatch, invalid phone or email
        HTTPException 409: Email or phone already registered
        HTTPException 502: Passport could not be stored
    """
    data = StudentRegistration(
        surname=surname,
        firstname=firstname,
        middlename=middlename,
        phone=phone,
        email=email,
        password=password,
        confirm_password=confirm_password,
    )

    try:
        student = await service.register_student(db, storage, data, await _read_upload(passport))
        return StudentRegisterResponse.model_validate(student)

    except ServiceError as e:
        logger.warning(f"Registration rejected: {e.error_code}")
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error registering student: {e}")
        raise internal_error() from e


@router.get(
    "/check-duplicate",
    response_model=DuplicateCheckResponse,
    summary="Check Duplicate Student",
)
async def check_duplicate(
    email: str | None = Query(None),
    phone: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> DuplicateCheckResponse:
    """Report whether a student with this email OR phone already exists."""
    return DuplicateCheckResponse(exists=await service.check_duplicate(db, email, phone))


@router.post("/upload-single", response_model=UploadResponse, summary="Upload Single File")
async def upload_single(
    request: Request,
    storage: ObjectStorage = Depends(get_storage),
) -> UploadResponse:
    """
    Store the first file in the form, whatever its field name.

    Raises:
        HTTPException 400: No file uploaded
        HTTPException 502: The file could not be stored
    """
    form = await request.form()
    upload = next(
        (value for _, value in form.multi_items() if isinstance(value, FormFile) and value.filename),
        None,
    )
    content = await upload.read() if upload is not None else None

    try:
        return UploadResponse(url=await service.upload_single(storage, content))
    except ServiceError as e:
        logger.warning(f"Single upload rejected: {e.error_code}")
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error storing upload: {e}")
        raise internal_error() from e


@router.get(
    "",
    response_model=StudentListResponse,
    summary="List Students",
)
async def list_students(
    q: str | None = Query(None, description="Search name, matric number, email or phone"),
    department: str | None = Query(None),
    level: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> StudentListResponse:
    """Admin listing of identities merged with their profiles."""
    params = StudentListParams(q=q, department=department, level=level, page=page, limit=limit)
    try:
        return await service.list_students(db, params)
    except Exception as e:
        logger.exception(f"Unexpected error listing students for admin {admin.id}: {e}")
        raise internal_error() from e


@router.get("/export/pdf", summary="Export All Students (PDF)")
async def export_students(
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> Response:
    try:
        content = await exports.export_students_pdf(db)
    except Exception as e:
        logger.exception(f"Unexpected error exporting students: {e}")
        raise internal_error() from e

    logger.info(f"Admin {admin.id} exported the student list")
    return Response(
        content=content,
        media_type=PDF_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="students.pdf"'},
    )


@router.get(
    "/{student_id}",
    response_model=StudentComposite,
    summary="Get Student",
)
async def get_student(
    student_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> StudentComposite:
    try:
        return await service.get_student(db, student_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error fetching student {student_id}: {e}")
        raise internal_error() from e


@router.get("/{student_id}/export/pdf", summary="Export Student (PDF)")
async def export_student(
    student_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> Response:
    try:
        content = await exports.export_student_pdf(db, student_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error exporting student {student_id}: {e}")
        raise internal_error() from e

    return Response(
        content=content,
        media_type=PDF_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="student-{student_id}.pdf"'},
    )


@router.delete(
    "/{student_id}",
    response_model=StudentDeleteResponse,
    summary="Delete Student",
)
async def delete_student(
    student_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> StudentDeleteResponse:
    try:
        await service.delete_student(db, student_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error deleting student {student_id}: {e}")
        raise internal_error() from e

    logger.info(f"Admin {admin.id} deleted student {student_id}")
    return StudentDeleteResponse(id=student_id)


# ============================================
# Profile
# ============================================


@profile_router.post(
    "/update",
    response_model=ProfileUpdateResponse,
    summary="Create or Update Profile",
)
async def update_profile(
    student_id: UUID = Form(...),
    surname: str | None = Form(None),
    firstname: str | None = Form(None),
    middlename: str | None = Form(None),
    phone: str | None = Form(None),
    dob: str | None = Form(None),
    department: str | None = Form(None),
    level: str | None = Form(None),
    reg_no: str | None = Form(None),
    matric_no: str | None = Form(None),
    state_origin: str | None = Form(None),
    lga_origin: str | None = Form(None),
    address: str | None = Form(None),
    nok_surname: str | None = Form(None),
    nok_firstname: str | None = Form(None),
    nok_phone: str | None = Form(None),
    nok_relation: str | None = Form(None),
    passport: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
) -> ProfileUpdateResponse:
    """
    Upsert the profile of an existing student.

    Raises:
        HTTPException 404: Student not found
        HTTPException 409: reg_no or matric_no belongs to another student
        HTTPException 502: Passport could not be stored
    """
    data = ProfileUpdate(
        student_id=student_id,
        surname=surname,
        firstname=firstname,
        middlename=middlename,
        phone=phone,
        dob=dob,
        department=department,
        level=level,
        reg_no=reg_no,
        matric_no=matric_no,
        state_origin=state_origin,
        lga_origin=lga_origin,
        address=address,
        nok_surname=nok_surname,
        nok_firstname=nok_firstname,
        nok_phone=nok_phone,
        nok_relation=nok_relation,
    )

    try:
        profile = await service.upsert_profile(db, storage, data, await _read_upload(passport))
        return ProfileUpdateResponse(profile=profile)

    except ServiceError as e:
        logger.warning(f"Profile update rejected for {student_id}: {e.error_code}")
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error updating profile for {student_id}: {e}")
        raise internal_error() from e


@profile_router.get(
    "/{reg_no:path}",
    response_model=StudentComposite,
    summary="Get Profile by Registration Number",
)
async def get_profile(
    reg_no: str,
    db: AsyncSession = Depends(get_db),
) -> StudentComposite:
    """Registration numbers contain slashes (Reg/CS/12345), hence the path converter."""
    try:
        return await service.get_profile_by_reg_no(db, reg_no)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error fetching profile {reg_no}: {e}")
        raise internal_error() from e
