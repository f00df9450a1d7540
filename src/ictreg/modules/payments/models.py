"""
Payment Model
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from ictreg.modules.shared import BaseModel


class Payment(BaseModel):
    """A recorded payment. Rows are never updated or deleted."""

    __tablename__ = "payments"

    payment_id: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    matric_no: Mapped[str | None] = mapped_column(String(50), index=True, nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), index=True, nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    purpose: Mapped[str] = mapped_column(String(200), nullable=False)
    paid_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Payment(payment_id={self.payment_id}, amount={self.amount})>"
