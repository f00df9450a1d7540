"""
Course Registration Workflow

Checks, in order, short-circuiting on the first failure:
1. matric_no, course_code and pin are present
2. the student is not already registered for the course (regardless of pin)
3. the pin redeems for this course

The pin flip and the registration insert share one transaction. Any
failure after the flip rolls both back, so a pin is never consumed
without a registration.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.core.email import send_course_registration_confirmation
from ictreg.modules.course_registrations import repository
from ictreg.modules.course_registrations.models import CourseRegistration
from ictreg.modules.course_registrations.schemas import CourseRegistrationRequest
from ictreg.modules.courses import service as courses_service
from ictreg.modules.pins import repository as pins_repository
from ictreg.modules.pins import service as pins_service
from ictreg.modules.pins.service import PinNotFoundError, RedemptionOutcome, mask_pin
from ictreg.modules.shared import (
    ConflictError,
    ServiceError,
    ValidationFailedError,
    check_column_lengths,
)
from ictreg.modules.students import repository as students_repository
from ictreg.modules.students.identity import full_name, normalize_course_code

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("matric_no", "course_code", "pin")


class AlreadyRegisteredError(ConflictError):
    def __init__(self, matric_no: str, course_code: str):
        super().__init__(
            message=f"{matric_no} is already registered for {course_code}.",
            error_code="ALREADY_REGISTERED",
        )


class InvalidPinError(ValidationFailedError):
    """Raised when the pin belongs to a different course."""

    def __init__(self):
        super().__init__(
            message="This pin is not valid for the selected course.",
            error_code="INVALID_PIN",
            field="pin",
        )


class PinAlreadyUsedError(ConflictError):
    def __init__(self):
        super().__init__(message="This pin has already been used.", error_code="PIN_ALREADY_USED")


def normalize_matric_no(matric_no: str | None) -> str:
    return (matric_no or "").strip().upper()


def _outcome_error(outcome: RedemptionOutcome) -> ServiceError:
    if outcome is RedemptionOutcome.NOT_FOUND:
        return PinNotFoundError("Pin not found.")
    if outcome is RedemptionOutcome.COURSE_MISMATCH:
        return InvalidPinError()
    return PinAlreadyUsedError()


async def register_course(
    db: AsyncSession,
    data: CourseRegistrationRequest,
) -> CourseRegistration:
    """
    Register a student for a course with a pin.

    Raises:
        ValidationFailedError: A required field is missing or too long
        AlreadyRegisteredError: Already registered for this course (409)
        PinNotFoundError: Unknown pin (404)
        InvalidPinError: Pin is for another course (400)
        PinAlreadyUsedError: Pin was already redeemed (409)
    """
    for field in REQUIRED_FIELDS:
        value = getattr(data, field)
        if not value or not value.strip():
            raise ValidationFailedError(f"{field} is required.", field=field)

    matric_no = normalize_matric_no(data.matric_no)
    course_code = normalize_course_code(data.course_code)
    pin_code = pins_service.normalize_pin(data.pin)
    check_column_lengths(
        CourseRegistration,
        {"matric_no": matric_no, "course_code": course_code, "pin_code": pin_code},
    )

    if await repository.exists_for(db, matric_no, course_code):
        raise AlreadyRegisteredError(matric_no, course_code)

    try:
        outcome = await pins_service.redeem(db, pin_code, course_code, matric_no)
        if outcome is not RedemptionOutcome.REDEEMED:
            raise _outcome_error(outcome)

        course = await courses_service.find_course_by_code(db, course_code)
        if course is not None:
            course_title = course.title
        else:
            pin = await pins_repository.get_by_code(db, pin_code)
            course_title = pin.course_title if pin is not None else course_code

        registration = await repository.create(
            db,
            matric_no=matric_no,
            course_code=course_code,
            course_title=course_title,
            pin_code=pin_code,
        )
        await db.commit()

    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Concurrent registration of {matric_no} for {course_code}: {e.orig}")
        raise AlreadyRegisteredError(matric_no, course_code) from e
    except Exception:
        await db.rollback()
        raise

    logger.info(f"Registered {matric_no} for {course_code} with pin {mask_pin(pin_code)}")

    await _send_confirmation(db, registration)
    return registration


async def _send_confirmation(db: AsyncSession, registration: CourseRegistration) -> None:
    """Email the student when a profile links the matric number to an address."""
    try:
        profile = await students_repository.get_profile_by_matric_no(db, registration.matric_no)
        if profile is None:
            return

        sent = await send_course_registration_confirmation(
            to_email=profile.email,
            student_name=full_name(profile.surname, profile.firstname, profile.middlename),
            matric_no=registration.matric_no,
            course_code=registration.course_code,
            course_title=registration.course_title,
        )
        if not sent:
            logger.error(f"Failed to send confirmation for registration {registration.id}")
    except Exception as e:
        logger.error(f"Exception sending confirmation for registration {registration.id}: {e}")


async def list_registrations(db: AsyncSession, matric_no: str | None) -> list[CourseRegistration]:
    """
    Raises:
        ValidationFailedError: If matric_no is missing
    """
    normalized = normalize_matric_no(matric_no)
    if not normalized:
        raise ValidationFailedError("matric_no is required.", field="matric_no")
    return await repository.list_by_matric_no(db, normalized)
