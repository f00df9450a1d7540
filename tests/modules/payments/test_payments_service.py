"""
Unit tests for the payments service.
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from ictreg.modules.payments.schemas import PaymentCreate
from ictreg.modules.payments.service import (
    DuplicatePaymentError,
    PaymentNotFoundError,
    get_payment,
    list_payments,
    record_payment,
)

SERVICE = "ictreg.modules.payments.service"


class TestPaymentCreate:
    """Schema rules for a payment request."""

    def test_requires_matric_no_or_email(self):
        with pytest.raises(ValidationError):
            PaymentCreate(payment_id="PAY-1", amount=Decimal("5000"), purpose="Acceptance fee")

    def test_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            PaymentCreate(payment_id="PAY-1", matric_no="CS/1", amount=0, purpose="Fee")

    def test_email_alone_is_enough(self):
        payment = PaymentCreate(
            payment_id="PAY-1", email="ada@example.com", amount="2500.50", purpose="ICT fee"
        )
        assert payment.amount == Decimal("2500.50")


class TestRecordPayment:
    """Tests for record_payment."""

    @pytest.mark.asyncio
    async def test_normalizes_and_commits(self, mock_db):
        data = PaymentCreate(
            payment_id=" PAY-001 ",
            matric_no=" cs/2024/001 ",
            email=" Ada@Example.com ",
            amount=Decimal("15000.00"),
            purpose=" School fees ",
        )
        stored = MagicMock()

        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.create = AsyncMock(return_value=stored)

            result = await record_payment(mock_db, data)

            assert result is stored
            kwargs = mock_repo.create.call_args.kwargs
            assert kwargs["payment_id"] == "PAY-001"
            assert kwargs["matric_no"] == "CS/2024/001"
            assert kwargs["email"] == "ada@example.com"
            assert kwargs["purpose"] == "School fees"
            mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_duplicate_payment_id(self, mock_db):
        """A payment_id can only be recorded once."""
        data = PaymentCreate(payment_id="PAY-001", matric_no="CS/1", amount=100, purpose="Fee")

        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.create = AsyncMock(
                side_effect=IntegrityError("INSERT INTO payments", {}, Exception("duplicate"))
            )

            with pytest.raises(DuplicatePaymentError) as exc_info:
                await record_payment(mock_db, data)

            assert exc_info.value.status_code == 409
            mock_db.rollback.assert_awaited_once()


class TestReads:
    @pytest.mark.asyncio
    async def test_get_missing_payment(self, mock_db):
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.get_by_payment_id = AsyncMock(return_value=None)

            with pytest.raises(PaymentNotFoundError):
                await get_payment(mock_db, "PAY-404")

    @pytest.mark.asyncio
    async def test_list_filters_are_normalized(self, mock_db):
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.list_payments = AsyncMock(return_value=[])

            await list_payments(mock_db, matric_no="cs/1", email=None)

            mock_repo.list_payments.assert_awaited_once_with(mock_db, "CS/1", None)
