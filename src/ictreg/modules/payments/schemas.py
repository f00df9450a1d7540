"""
Payment Schemas
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PaymentCreate(BaseModel):
    """Request body for POST /payments."""

    payment_id: str = Field(..., min_length=1, max_length=100)
    matric_no: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=255)
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    purpose: str = Field(..., min_length=1, max_length=200)
    paid_at: datetime | None = None

    @model_validator(mode="after")
    def require_payer(self) -> "PaymentCreate":
        """A payment must identify its payer by matric number or email."""
        if not (self.matric_no or "").strip() and not (self.email or "").strip():
            raise ValueError("At least one of matric_no or email is required")
        return self


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    payment_id: str
    matric_no: str | None = None
    email: str | None = None
    amount: Decimal
    purpose: str
    paid_at: datetime


class PaymentListResponse(BaseModel):
    data: list[PaymentResponse]
    total: int
