"""
Course Registrations Background Jobs

Repair pass reconciling pins with registrations:
1. A registration whose pin still reads unused gets the pin flipped to used
2. A used pin with no registration for its course is reported for manual
   review; pins are never flipped back

The job is idempotent: a second run finds nothing left to flip. Each flip
commits on its own so one failure does not block the rest.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from apscheduler.triggers.interval import IntervalTrigger

from ictreg.core.database import async_session_maker
from ictreg.core.scheduler import register_job
from ictreg.modules.course_registrations import repository
from ictreg.modules.pins import repository as pins_repository
from ictreg.modules.pins.service import mask_pin

logger = logging.getLogger(__name__)

JOB_ID_REPAIR_PINS = "course_registrations_repair_pins"
REPAIR_INTERVAL_HOURS = 1


async def repair_pins() -> dict[str, Any]:
    """
    Reconcile pin status with existing registrations.

    Returns:
        Dict with job execution summary including:
        - executed_at: When the job ran
        - flipped: Pins marked used because a registration references them
        - orphaned_used_pins: Used pins without a registration (for review)
        - errors: Per-pin failures
    """
    executed_at = datetime.now(UTC)
    flipped: list[dict[str, Any]] = []
    errors: list[dict[str, Any]] = []

    logger.info("Starting pin repair job")

    async with async_session_maker() as db:
        # Plain values: a rollback expires every loaded row
        stale = [
            (str(registration.id), registration.matric_no, pin.code, pin.course_code)
            for registration, pin in await repository.list_with_unused_pin(db)
        ]

        for registration_id, matric_no, pin_code, course_code in stale:
            masked = mask_pin(pin_code)
            try:
                pin_id = await pins_repository.flip_unused(db, pin_code, course_code, matric_no)
                await db.commit()
                if pin_id is not None:
                    flipped.append(
                        {
                            "pin": masked,
                            "registration_id": registration_id,
                            "matric_no": matric_no,
                        }
                    )
            except Exception as e:
                await db.rollback()
                logger.error(f"Failed to repair pin {masked}: {e}")
                errors.append({"pin": masked, "error": str(e)})

        orphaned = await repository.list_used_pins_without_registration(db)

    for pin in orphaned:
        logger.warning(
            f"Pin {mask_pin(pin.code)} for {pin.course_code} is used by {pin.used_by} "
            "but has no registration"
        )

    logger.info(
        f"Pin repair job complete: {len(flipped)} flipped, "
        f"{len(orphaned)} orphaned, {len(errors)} error(s)"
    )

    return {
        "executed_at": executed_at.isoformat(),
        "flipped": flipped,
        "orphaned_used_pins": [
            {
                "id": str(pin.id),
                "pin": mask_pin(pin.code),
                "course_code": pin.course_code,
                "used_by": pin.used_by,
                "used_at": pin.used_at.isoformat() if pin.used_at else None,
            }
            for pin in orphaned
        ],
        "total_flipped": len(flipped),
        "total_errors": len(errors),
        "errors": errors,
    }


def register_course_registration_jobs() -> None:
    """Register this module's jobs with the scheduler."""
    register_job(
        JOB_ID_REPAIR_PINS,
        repair_pins,
        IntervalTrigger(hours=REPAIR_INTERVAL_HOURS),
    )
