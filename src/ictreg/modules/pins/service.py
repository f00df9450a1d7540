"""
Pin Ledger Service

1. Generation:
   - Codes are <COURSE_CODE>-<8 chars> drawn with `secrets` from an
     alphabet without look-alike characters (no 0/O, 1/I)
   - Each batch is inserted in a savepoint; on a code collision the whole
     batch is regenerated, up to PIN_GENERATION_MAX_ATTEMPTS times

2. Redemption:
   - One conditional UPDATE flips unused -> used
   - A failed flip is classified by a follow-up read and returned as an
     outcome, never raised

Full pin codes are never logged; see mask_pin().
"""

import logging
import secrets
from enum import Enum
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.core.config import settings
from ictreg.modules.courses import service as courses_service
from ictreg.modules.pins import repository
from ictreg.modules.pins.models import CoursePin, PinStatus
from ictreg.modules.shared import CollaboratorError, NotFoundError, ValidationFailedError
from ictreg.modules.students.identity import normalize_course_code

logger = logging.getLogger(__name__)

PIN_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
PIN_SUFFIX_LENGTH = 8


class RedemptionOutcome(str, Enum):
    """Result of a redemption attempt."""

    REDEEMED = "redeemed"
    NOT_FOUND = "not_found"
    COURSE_MISMATCH = "course_mismatch"
    ALREADY_USED = "already_used"


class PinNotFoundError(NotFoundError):
    def __init__(self, message: str = "Pin not found"):
        super().__init__(message=message, error_code="PIN_NOT_FOUND")


class PinGenerationFailedError(CollaboratorError):
    """Raised when every generation attempt collided with existing codes."""

    def __init__(self, attempts: int):
        super().__init__(
            message=f"Could not generate unique pins after {attempts} attempts. Please try again.",
            error_code="PIN_GENERATION_FAILED",
        )


def mask_pin(code: str | None) -> str:
    """Loggable form of a pin: the first four characters, then asterisks."""
    if not code:
        return "<empty>"
    return f"{code[:4]}****"


def normalize_pin(code: str | None) -> str:
    return (code or "").strip().upper()


def _random_suffix() -> str:
    return "".join(secrets.choice(PIN_ALPHABET) for _ in range(PIN_SUFFIX_LENGTH))


def generate_codes(course_code: str, count: int) -> list[str]:
    """Draw ``count`` distinct pin codes for a course."""
    codes: set[str] = set()
    while len(codes) < count:
        codes.add(f"{course_code}-{_random_suffix()}")
    return sorted(codes)


async def generate_pins(
    db: AsyncSession,
    course_code: str,
    count: int,
    course_title: str | None = None,
) -> list[CoursePin]:
    """
    Generate and store a batch of unused pins.

    Args:
        db: Database session
        course_code: Course the pins are valid for (normalized here)
        count: Number of pins, 1..500 (validated by the request schema)
        course_title: Title stored on the pins; resolved from the catalog if omitted

    Raises:
        ValidationFailedError: Blank course code, or no title and the code is not in any catalog
        PinGenerationFailedError: Every attempt collided with existing codes
    """
    code = normalize_course_code(course_code)
    if not code:
        raise ValidationFailedError("course_code is required.", field="course_code")

    title = (course_title or "").strip()
    if not title:
        course = await courses_service.find_course_by_code(db, code)
        if course is None:
            raise ValidationFailedError(
                f"Course {code} is not in any catalog; supply course_title.",
                error_code="UNKNOWN_COURSE",
                field="course_code",
            )
        title = course.title

    max_attempts = settings.pin_generation_max_attempts
    for attempt in range(1, max_attempts + 1):
        try:
            pins = await repository.insert_batch(db, generate_codes(code, count), code, title)
        except IntegrityError:
            logger.warning(
                f"Pin batch for {code} collided with existing codes "
                f"(attempt {attempt}/{max_attempts})"
            )
            continue

        await db.commit()
        logger.info(f"Generated {len(pins)} pin(s) for {code}")
        return pins

    await db.rollback()
    logger.error(f"Pin generation for {code} failed after {max_attempts} attempts")
    raise PinGenerationFailedError(max_attempts)


async def redeem(
    db: AsyncSession,
    pin_code: str,
    expected_course_code: str,
    redeemed_by: str,
) -> RedemptionOutcome:
    """
    Try to flip a pin from unused to used.

    Does not commit; the caller decides the transaction boundary so the flip
    can share it with other writes.
    """
    code = normalize_pin(pin_code)
    course_code = normalize_course_code(expected_course_code)

    flipped = await repository.flip_unused(db, code, course_code, redeemed_by)
    if flipped is not None:
        logger.info(f"Pin {mask_pin(code)} redeemed by {redeemed_by}")
        return RedemptionOutcome.REDEEMED

    pin = await repository.get_by_code(db, code)
    if pin is None:
        outcome = RedemptionOutcome.NOT_FOUND
    elif pin.course_code != course_code:
        outcome = RedemptionOutcome.COURSE_MISMATCH
    else:
        outcome = RedemptionOutcome.ALREADY_USED

    logger.info(f"Pin {mask_pin(code)} not redeemed: {outcome.value}")
    return outcome


async def list_pins(
    db: AsyncSession,
    course_code: str | None = None,
    status: PinStatus | None = None,
) -> list[CoursePin]:
    return await repository.list_pins(db, normalize_course_code(course_code) or None, status)


async def delete_all_pins(db: AsyncSession) -> int:
    """Delete every pin. Registrations keep their historical pin string."""
    deleted = await repository.delete_all(db)
    await db.commit()
    logger.warning(f"Deleted all pins ({deleted})")
    return deleted


async def delete_pin(db: AsyncSession, pin_id: UUID) -> None:
    """
    Raises:
        PinNotFoundError: If no pin has this ID
    """
    if not await repository.delete_by_id(db, pin_id):
        raise PinNotFoundError(f"Pin {pin_id} not found")
    await db.commit()
    logger.info(f"Deleted pin {pin_id}")
