"""
Payments Repository
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.modules.payments.models import Payment


async def create(
    db: AsyncSession,
    *,
    payment_id: str,
    matric_no: str | None,
    email: str | None,
    amount: Decimal,
    purpose: str,
    paid_at: datetime | None,
) -> Payment:
    """
    Insert a payment.

    Raises:
        IntegrityError: If payment_id was already recorded
    """
    payment = Payment(
        payment_id=payment_id,
        matric_no=matric_no,
        email=email,
        amount=amount,
        purpose=purpose,
    )
    if paid_at is not None:
        payment.paid_at = paid_at

    db.add(payment)
    await db.flush()
    await db.refresh(payment)

    return payment


async def get_by_payment_id(db: AsyncSession, payment_id: str) -> Payment | None:
    result = await db.execute(select(Payment).where(Payment.payment_id == payment_id))
    return result.scalar_one_or_none()


async def list_payments(
    db: AsyncSession,
    matric_no: str | None = None,
    email: str | None = None,
) -> list[Payment]:
    """Payments matching the matric number OR the email, newest first."""
    conditions = []
    if matric_no:
        conditions.append(Payment.matric_no == matric_no)
    if email:
        conditions.append(Payment.email == email)

    query = select(Payment)
    if conditions:
        query = query.where(or_(*conditions))

    result = await db.execute(query.order_by(Payment.paid_at.desc()))
    return list(result.scalars().all())
