"""
Students Service Layer

Business logic for student identities and profiles:

1. Registration:
   - Required fields, password confirmation, phone and email validation
   - Duplicate guard on normalized email OR phone
   - Passport stored before the identity is inserted
   - Unique constraints on email and phone close the check-then-insert race

2. Profile upsert:
   - Keyed by the identity's normalized email
   - Partial updates keep stored values
   - Registration number generated when none exists

3. Reads:
   - Composite view (identity + profile + documents) by ID or reg number
   - Admin listing merged in memory with one profile query per page load
"""

import logging
import secrets
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.core.email import send_registration_welcome
from ictreg.core.security import hash_password
from ictreg.core.storage import ObjectStorage
from ictreg.modules.documents import repository as documents_repository
from ictreg.modules.shared import (
    ConflictError,
    NotFoundError,
    ValidationFailedError,
    check_column_lengths,
)
from ictreg.modules.students import repository
from ictreg.modules.students.identity import (
    full_name,
    is_valid_email,
    is_valid_phone,
    normalize_email,
    normalize_phone,
)
from ictreg.modules.students.merge import matches_filters, merge, paginate
from ictreg.modules.students.models import Student, StudentProfile
from ictreg.modules.students.schemas import (
    ProfileUpdate,
    StudentComposite,
    StudentListParams,
    StudentListResponse,
    StudentRegistration,
)

logger = logging.getLogger(__name__)

PASSPORT_FOLDER = "student_passports"
UPLOADS_FOLDER = "student_uploads"
REG_NO_DEFAULT_PREFIX = "STD"
REG_NO_MAX_ATTEMPTS = 10

# Checked in this order; the first missing one is reported
REQUIRED_REGISTRATION_FIELDS = (
    "surname",
    "firstname",
    "phone",
    "email",
    "password",
    "confirm_password",
)

# Profile fields that fall back to the identity rather than the stored profile
IDENTITY_BACKED_FIELDS = ("surname", "firstname", "middlename", "phone")

PROFILE_FIELDS = (
    "dob",
    "department",
    "level",
    "state_origin",
    "lga_origin",
    "address",
    "nok_surname",
    "nok_firstname",
    "nok_phone",
    "nok_relation",
)


class StudentNotFoundError(NotFoundError):
    """Raised when no identity exists for a student ID."""

    def __init__(self, student_id: UUID | None = None):
        message = f"Student {student_id} not found" if student_id else "Student not found"
        super().__init__(message=message, error_code="STUDENT_NOT_FOUND")


class ProfileNotFoundError(NotFoundError):
    """Raised when no profile carries the requested registration number."""

    def __init__(self, reg_no: str):
        super().__init__(
            message=f"No profile found for registration number {reg_no}",
            error_code="PROFILE_NOT_FOUND",
        )


class DuplicateStudentError(ConflictError):
    """Raised when the email or phone is already registered."""

    def __init__(self):
        super().__init__(
            message="A student with this email or phone number already exists.",
            error_code="DUPLICATE_STUDENT",
        )


class DuplicateProfileKeyError(ConflictError):
    """Raised when a reg_no or matric_no belongs to another profile."""

    def __init__(self, field: str, value: str):
        super().__init__(
            message=f"{field} '{value}' is already assigned to another student.",
            error_code="DUPLICATE_PROFILE_KEY",
        )


def _clean(value: str | None) -> str | None:
    """Strip a form value, mapping blanks to None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


async def upload_single(storage: ObjectStorage, content: bytes | None) -> str:
    """
    Store one file and return its URL.

    Raises:
        ValidationFailedError: No file was uploaded
        FileUnavailableError: The file could not be stored
    """
    if not content:
        raise ValidationFailedError("No file uploaded.", field="file")

    url = await storage.store(content, UPLOADS_FOLDER)
    logger.info(f"Stored single upload: {url}")
    return url


# ============================================
# Duplicate guard
# ============================================


async def check_duplicate(
    db: AsyncSession,
    email: str | None = None,
    phone: str | None = None,
) -> bool:
    """
    Whether a student already exists with this email OR phone.

    Both values are normalized first; with neither present the answer is False.
    """
    return await repository.exists_by_email_or_phone(
        db,
        normalize_email(email) or None,
        normalize_phone(phone) or None,
    )


# ============================================
# Registration
# ============================================


async def register_student(
    db: AsyncSession,
    storage: ObjectStorage,
    data: StudentRegistration,
    passport: bytes | None,
) -> Student:
    """
    Register a new student.

    Args:
        db: Database session
        storage: Object storage for the passport photo
        data: Form values
        passport: Passport photo bytes, if uploaded

    Returns:
        The created Student

    Raises:
        ValidationFailedError: Missing field, password mismatch, bad phone or email
        DuplicateStudentError: Email or phone already registered
        FileUnavailableError: Passport could not be stored
    """
    for field in REQUIRED_REGISTRATION_FIELDS:
        if not _clean(getattr(data, field)):
            raise ValidationFailedError(f"{field} is required.", field=field)

    if data.password != data.confirm_password:
        raise ValidationFailedError(
            "Passwords do not match.",
            error_code="PASSWORD_MISMATCH",
            field="confirm_password",
        )

    phone = normalize_phone(data.phone)
    if not is_valid_phone(phone):
        raise ValidationFailedError(
            "Phone number must be exactly 11 digits.",
            error_code="INVALID_PHONE",
            field="phone",
        )

    email = normalize_email(data.email)
    if not is_valid_email(email):
        raise ValidationFailedError(
            "Email address is not valid.",
            error_code="INVALID_EMAIL",
            field="email",
        )

    check_column_lengths(
        Student,
        {
            "surname": _clean(data.surname),
            "firstname": _clean(data.firstname),
            "middlename": _clean(data.middlename),
            "email": email,
        },
    )

    if await repository.exists_by_email_or_phone(db, email, phone):
        logger.warning(f"Duplicate registration attempt: email={email}")
        raise DuplicateStudentError()

    if not passport:
        raise ValidationFailedError("Passport photo is required.", field="passport")

    passport_url = await storage.store(passport, PASSPORT_FOLDER)

    try:
        student = await repository.create_student(
            db,
            surname=_clean(data.surname),
            firstname=_clean(data.firstname),
            middlename=_clean(data.middlename) or "",
            email=email,
            phone=phone,
            password_hash=hash_password(data.password),
            passport_url=passport_url,
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Registration lost a uniqueness race for {email}: {e.orig}")
        raise DuplicateStudentError() from e

    logger.info(f"Registered student {student.id}")

    try:
        sent = await send_registration_welcome(
            to_email=student.email,
            student_name=full_name(student.surname, student.firstname, student.middlename),
        )
        if not sent:
            logger.error(f"Failed to send welcome email for student {student.id}")
    except Exception as e:
        logger.error(f"Exception sending welcome email for student {student.id}: {e}")

    return student


# ============================================
# Profile upsert
# ============================================


def _reg_no_prefix(department: str | None) -> str:
    """Initials of the first three department words, e.g. 'Computer Science' -> 'CS'."""
    words = (department or "").split()
    if not words:
        return REG_NO_DEFAULT_PREFIX
    return "".join(word[0] for word in words)[:3].upper()


def _random_reg_no(department: str | None) -> str:
    return f"Reg/{_reg_no_prefix(department)}/{10000 + secrets.randbelow(90000)}"


async def generate_reg_no(db: AsyncSession, department: str | None) -> str:
    """
    Generate an unused registration number for a department.

    Raises:
        ConflictError: If every attempt collided with an existing number
    """
    for _ in range(REG_NO_MAX_ATTEMPTS):
        reg_no = _random_reg_no(department)
        if not await repository.reg_no_exists(db, reg_no):
            return reg_no

    logger.error(f"Could not generate a free reg_no after {REG_NO_MAX_ATTEMPTS} attempts")
    raise ConflictError(
        "Could not generate a registration number. Please try again.",
        error_code="DUPLICATE_PROFILE_KEY",
    )


async def _ensure_key_unowned(db: AsyncSession, field: str, value: str | None, email: str) -> None:
    if not value:
        return

    if field == "reg_no":
        owner = await repository.get_profile_by_reg_no(db, value)
    else:
        owner = await repository.get_profile_by_matric_no(db, value)

    if owner is not None and owner.email != email:
        raise DuplicateProfileKeyError(field, value)


async def upsert_profile(
    db: AsyncSession,
    storage: ObjectStorage,
    data: ProfileUpdate,
    passport: bytes | None = None,
) -> StudentComposite:
    """
    Create or update the profile of an existing student.

    Name and phone fall back to the identity; every other omitted field keeps
    the stored profile value.

    Raises:
        StudentNotFoundError: No identity for data.student_id
        ValidationFailedError: A value is longer than its column
        DuplicateProfileKeyError: reg_no or matric_no owned by another profile
        FileUnavailableError: New passport could not be stored
    """
    student = await repository.get_by_id(db, data.student_id)
    if student is None:
        raise StudentNotFoundError(data.student_id)

    email = normalize_email(student.email)
    existing = await repository.get_profile_by_email(db, email)

    values: dict = {}
    for name in IDENTITY_BACKED_FIELDS:
        values[name] = _clean(getattr(data, name)) or getattr(student, name) or None
    for name in PROFILE_FIELDS:
        stored = getattr(existing, name) if existing is not None else None
        values[name] = _clean(getattr(data, name)) or stored

    if values["phone"]:
        values["phone"] = normalize_phone(values["phone"])

    reg_no = _clean(data.reg_no) or (existing.reg_no if existing is not None else None)
    if reg_no is None:
        reg_no = await generate_reg_no(db, values["department"])
    matric_no = _clean(data.matric_no) or (existing.matric_no if existing is not None else None)

    values["reg_no"] = reg_no
    values["matric_no"] = matric_no
    check_column_lengths(StudentProfile, values)

    await _ensure_key_unowned(db, "reg_no", reg_no, email)
    await _ensure_key_unowned(db, "matric_no", matric_no, email)

    if passport:
        values["passport_url"] = await storage.store(passport, PASSPORT_FOLDER)
    else:
        stored_passport = existing.passport_url if existing is not None else None
        values["passport_url"] = stored_passport or student.passport_url

    try:
        profile = await repository.upsert_profile(db, email, values)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Profile upsert for student {student.id} hit a unique key: {e.orig}")
        raise ConflictError(
            "Registration or matriculation number is already assigned to another student.",
            error_code="DUPLICATE_PROFILE_KEY",
        ) from e

    logger.info(f"Saved profile for student {student.id}")

    documents = await documents_repository.get_by_student_id(db, student.id)
    return merge(student, profile, documents)


# ============================================
# Reads
# ============================================


async def get_student(db: AsyncSession, student_id: UUID) -> StudentComposite:
    """
    Composite view of one student.

    Raises:
        StudentNotFoundError: If no identity exists for the ID
    """
    student = await repository.get_by_id(db, student_id)
    if student is None:
        raise StudentNotFoundError(student_id)

    profile = await repository.get_profile_by_email(db, normalize_email(student.email))
    documents = await documents_repository.get_by_student_id(db, student.id)

    return merge(student, profile, documents)


async def get_profile_by_reg_no(db: AsyncSession, reg_no: str) -> StudentComposite:
    """
    Composite view for a registration number. The identity may be absent.

    Raises:
        ProfileNotFoundError: If no profile carries the reg_no
    """
    profile = await repository.get_profile_by_reg_no(db, reg_no)
    if profile is None:
        raise ProfileNotFoundError(reg_no)

    student = await repository.get_by_email(db, profile.email)
    documents = None
    if student is not None:
        documents = await documents_repository.get_by_student_id(db, student.id)

    return merge(student, profile, documents)


async def load_composites(db: AsyncSession) -> list[StudentComposite]:
    """
    Every student as a composite, identities first (newest first), then
    profile-only records.

    Profiles are loaded in a single query and indexed by email.
    """
    students = await repository.list_students(db)
    profiles = await repository.get_profiles_by_emails(
        db, [normalize_email(s.email) for s in students]
    )

    composites = [merge(s, profiles.get(normalize_email(s.email))) for s in students]

    orphans = await repository.list_orphan_profiles(db)
    composites.extend(merge(None, profile) for profile in orphans)

    return composites


async def list_students(db: AsyncSession, params: StudentListParams) -> StudentListResponse:
    """Filtered, paginated admin listing."""
    composites = await load_composites(db)

    filtered = [
        c for c in composites if matches_filters(c, params.q, params.department, params.level)
    ]
    page_items, total, total_pages = paginate(filtered, params.page, params.limit)

    return StudentListResponse(
        data=page_items,
        total=total,
        current_page=params.page,
        total_pages=total_pages,
    )


async def delete_student(db: AsyncSession, student_id: UUID) -> None:
    """
    Delete an identity and its document bundle. The profile is kept.

    Raises:
        StudentNotFoundError: If no identity exists for the ID
    """
    student = await repository.get_by_id(db, student_id)
    if student is None:
        raise StudentNotFoundError(student_id)

    await repository.delete_student(db, student)
    await db.commit()

    logger.info(f"Deleted student {student_id}")
