"""
Payments Router

Endpoints:
- POST /payments - Record a payment
- GET /payments/{payment_id} - Get one payment
- GET /payments?matric_no=&email= - List payments
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.core.database import get_db
from ictreg.modules.payments import service
from ictreg.modules.payments.schemas import PaymentCreate, PaymentListResponse, PaymentResponse
from ictreg.modules.shared import ServiceError, internal_error, to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record Payment",
)
async def record_payment(
    data: PaymentCreate,
    db: AsyncSession = Depends(get_db),
) -> PaymentResponse:
    try:
        payment = await service.record_payment(db, data)
        return PaymentResponse.model_validate(payment)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error recording payment: {e}")
        raise internal_error() from e


@router.get("/{payment_id}", response_model=PaymentResponse, summary="Get Payment")
async def get_payment(
    payment_id: str,
    db: AsyncSession = Depends(get_db),
) -> PaymentResponse:
    try:
        return PaymentResponse.model_validate(await service.get_payment(db, payment_id))
    except ServiceError as e:
        raise to_http_exception(e) from e


@router.get("", response_model=PaymentListResponse, summary="List Payments")
async def list_payments(
    matric_no: str | None = Query(None),
    email: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> PaymentListResponse:
    payments = await service.list_payments(db, matric_no, email)
    return PaymentListResponse(
        data=[PaymentResponse.model_validate(p) for p in payments],
        total=len(payments),
    )
