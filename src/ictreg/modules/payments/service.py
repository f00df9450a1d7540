"""
Payments Service Layer

Payments are append-only: a payment_id can be recorded once, and no
update or delete operation exists.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.modules.payments import repository
from ictreg.modules.payments.models import Payment
from ictreg.modules.payments.schemas import PaymentCreate
from ictreg.modules.shared import ConflictError, NotFoundError
from ictreg.modules.students.identity import normalize_email

logger = logging.getLogger(__name__)


class DuplicatePaymentError(ConflictError):
    def __init__(self, payment_id: str):
        super().__init__(
            message=f"Payment {payment_id} has already been recorded.",
            error_code="DUPLICATE_PAYMENT",
        )


class PaymentNotFoundError(NotFoundError):
    def __init__(self, payment_id: str):
        super().__init__(message=f"Payment {payment_id} not found", error_code="PAYMENT_NOT_FOUND")


def _normalize_matric_no(matric_no: str | None) -> str | None:
    return (matric_no or "").strip().upper() or None


async def record_payment(db: AsyncSession, data: PaymentCreate) -> Payment:
    """
    Record a payment.

    Raises:
        DuplicatePaymentError: If payment_id was already recorded
    """
    payment_id = data.payment_id.strip()

    try:
        payment = await repository.create(
            db,
            payment_id=payment_id,
            matric_no=_normalize_matric_no(data.matric_no),
            email=normalize_email(data.email) or None,
            amount=data.amount,
            purpose=data.purpose.strip(),
            paid_at=data.paid_at,
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Duplicate payment {payment_id}")
        raise DuplicatePaymentError(payment_id) from e

    logger.info(f"Recorded payment {payment_id}")
    return payment


async def get_payment(db: AsyncSession, payment_id: str) -> Payment:
    """
    Raises:
        PaymentNotFoundError: If no payment has this ID
    """
    payment = await repository.get_by_payment_id(db, payment_id.strip())
    if payment is None:
        raise PaymentNotFoundError(payment_id)
    return payment


async def list_payments(
    db: AsyncSession,
    matric_no: str | None = None,
    email: str | None = None,
) -> list[Payment]:
    return await repository.list_payments(
        db,
        _normalize_matric_no(matric_no),
        normalize_email(email) or None,
    )
