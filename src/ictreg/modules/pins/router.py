"""
Pins Router (admin)

Endpoints:
- POST /pins/generate - Generate pins for a course
- GET /pins - List pins
- DELETE /pins - Delete all pins
- DELETE /pins/{pin_id} - Delete one pin
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.core.auth import AdminUser, get_current_admin_user
from ictreg.core.database import get_db
from ictreg.modules.pins import service
from ictreg.modules.pins.models import PinStatus
from ictreg.modules.pins.schemas import (
    PinDeleteResponse,
    PinGenerateRequest,
    PinGenerateResponse,
    PinListResponse,
    PinResponse,
)
from ictreg.modules.shared import ServiceError, internal_error, to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/generate",
    response_model=PinGenerateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generate Pins",
)
async def generate_pins(
    data: PinGenerateRequest,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> PinGenerateResponse:
    """
    Generate a batch of single-use pins.

    Raises:
        HTTPException 400: Unknown course and no title supplied
        HTTPException 502: Could not produce unique codes
    """
    try:
        pins = await service.generate_pins(db, data.course_code, data.count, data.course_title)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error generating pins: {e}")
        raise internal_error() from e

    logger.info(f"Admin {admin.id} generated {len(pins)} pin(s) for {pins[0].course_code}")
    return PinGenerateResponse(
        course_code=pins[0].course_code,
        course_title=pins[0].course_title,
        count=len(pins),
        pins=[pin.code for pin in pins],
    )


@router.get("", response_model=PinListResponse, summary="List Pins")
async def list_pins(
    course_code: str | None = Query(None),
    pin_status: PinStatus | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> PinListResponse:
    pins = await service.list_pins(db, course_code, pin_status)
    return PinListResponse(
        data=[PinResponse.model_validate(pin) for pin in pins],
        total=len(pins),
    )


@router.delete("", response_model=PinDeleteResponse, summary="Delete All Pins")
async def delete_all_pins(
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> PinDeleteResponse:
    try:
        deleted = await service.delete_all_pins(db)
    except Exception as e:
        logger.exception(f"Unexpected error deleting pins: {e}")
        raise internal_error() from e

    logger.warning(f"Admin {admin.id} deleted all pins")
    return PinDeleteResponse(message="All pins deleted.", deleted=deleted)


@router.delete("/{pin_id}", response_model=PinDeleteResponse, summary="Delete Pin")
async def delete_pin(
    pin_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> PinDeleteResponse:
    try:
        await service.delete_pin(db, pin_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error deleting pin {pin_id}: {e}")
        raise internal_error() from e

    return PinDeleteResponse(message="Pin deleted.", deleted=1)
