"""
Unit tests for the pin ledger service.

These tests cover:
- Code format and masking
- Batch generation with collision retries
- Redemption outcomes
"""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from ictreg.modules.courses.models import CatalogCourse
from ictreg.modules.pins.models import CoursePin, PinStatus
from ictreg.modules.pins.service import (
    PIN_ALPHABET,
    PIN_SUFFIX_LENGTH,
    PinGenerationFailedError,
    PinNotFoundError,
    RedemptionOutcome,
    delete_pin,
    generate_codes,
    generate_pins,
    mask_pin,
    normalize_pin,
    redeem,
)
from ictreg.modules.shared import ValidationFailedError

SERVICE = "ictreg.modules.pins.service"


def _pin(code: str, course_code: str, status: PinStatus = PinStatus.USED) -> MagicMock:
    pin = MagicMock(spec=CoursePin)
    pin.id = uuid4()
    pin.code = code
    pin.course_code = course_code
    pin.course_title = "Introduction to Computing"
    pin.status = status
    return pin


def _collision() -> IntegrityError:
    return IntegrityError("INSERT INTO course_pins", {}, Exception("duplicate key"))


class TestPinCodes:
    """Tests for code generation helpers."""

    def test_code_format(self):
        """Codes are <COURSE>-<8 chars from the alphabet>."""
        codes = generate_codes("COS101", 20)

        assert len(codes) == 20
        for code in codes:
            prefix, suffix = code.split("-")
            assert prefix == "COS101"
            assert len(suffix) == PIN_SUFFIX_LENGTH
            assert set(suffix) <= set(PIN_ALPHABET)

    def test_codes_are_distinct(self):
        assert len(set(generate_codes("COS101", 200))) == 200

    def test_alphabet_has_no_look_alikes(self):
        for char in "01IO":
            assert char not in PIN_ALPHABET

    def test_mask_pin_hides_suffix(self):
        """Only the first four characters survive."""
        assert mask_pin("COS101-7KQ2M9XD") == "COS1****"

    def test_mask_pin_empty(self):
        assert mask_pin(None) == "<empty>"

    def test_normalize_pin(self):
        assert normalize_pin("  cos101-7kq2m9xd ") == "COS101-7KQ2M9XD"


class TestGeneratePins:
    """Tests for generate_pins."""

    @pytest.mark.asyncio
    async def test_generates_requested_count(self, mock_db):
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.insert_batch = AsyncMock(
                side_effect=lambda db, codes, code, title: [_pin(c, code) for c in codes]
            )

            pins = await generate_pins(mock_db, " cos 101 ", 3, course_title="Intro")

            assert len(pins) == 3
            _, codes, code, title = mock_repo.insert_batch.call_args.args
            assert code == "COS101"
            assert title == "Intro"
            assert all(c.startswith("COS101-") for c in codes)
            mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_title_resolved_from_catalog(self, mock_db):
        course = MagicMock(spec=CatalogCourse)
        course.title = "Introduction to Computing"

        with (
            patch(f"{SERVICE}.repository") as mock_repo,
            patch(f"{SERVICE}.courses_service") as mock_courses,
        ):
            mock_courses.find_course_by_code = AsyncMock(return_value=course)
            mock_repo.insert_batch = AsyncMock(return_value=[])

            await generate_pins(mock_db, "COS101", 1)

            assert mock_repo.insert_batch.call_args.args[3] == "Introduction to Computing"

    @pytest.mark.asyncio
    async def test_unknown_course_without_title(self, mock_db):
        with (
            patch(f"{SERVICE}.repository") as mock_repo,
            patch(f"{SERVICE}.courses_service") as mock_courses,
        ):
            mock_courses.find_course_by_code = AsyncMock(return_value=None)
            mock_repo.insert_batch = AsyncMock()

            with pytest.raises(ValidationFailedError) as exc_info:
                await generate_pins(mock_db, "NOP100", 5)

            assert exc_info.value.error_code == "UNKNOWN_COURSE"
            mock_repo.insert_batch.assert_not_called()

    @pytest.mark.asyncio
    async def test_retries_after_collision(self, mock_db):
        """A colliding batch is regenerated."""
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.insert_batch = AsyncMock(side_effect=[_collision(), ["pin"]])

            pins = await generate_pins(mock_db, "COS101", 1, course_title="Intro")

            assert pins == ["pin"]
            assert mock_repo.insert_batch.await_count == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, mock_db):
        with (
            patch(f"{SERVICE}.repository") as mock_repo,
            patch(f"{SERVICE}.settings") as mock_settings,
        ):
            mock_settings.pin_generation_max_attempts = 3
            mock_repo.insert_batch = AsyncMock(side_effect=_collision())

            with pytest.raises(PinGenerationFailedError) as exc_info:
                await generate_pins(mock_db, "COS101", 1, course_title="Intro")

            assert exc_info.value.status_code == 502
            assert mock_repo.insert_batch.await_count == 3
            mock_db.commit.assert_not_called()
            mock_db.rollback.assert_awaited_once()


class TestRedeem:
    """Tests for redeem: each failure is classified, never raised."""

    @pytest.mark.asyncio
    async def test_redeemed(self, mock_db):
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.flip_unused = AsyncMock(return_value=uuid4())
            mock_repo.get_by_code = AsyncMock()

            outcome = await redeem(mock_db, " cos101-abcdefgh ", "cos 101", "CS/2024/001")

            assert outcome is RedemptionOutcome.REDEEMED
            mock_repo.flip_unused.assert_awaited_once_with(
                mock_db, "COS101-ABCDEFGH", "COS101", "CS/2024/001"
            )
            mock_repo.get_by_code.assert_not_called()
            mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_not_found(self, mock_db):
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.flip_unused = AsyncMock(return_value=None)
            mock_repo.get_by_code = AsyncMock(return_value=None)

            outcome = await redeem(mock_db, "COS101-ABCDEFGH", "COS101", "CS/2024/001")

            assert outcome is RedemptionOutcome.NOT_FOUND

    @pytest.mark.asyncio
    async def test_course_mismatch(self, mock_db):
        """Checked before the used state: a used pin for another course is a mismatch."""
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.flip_unused = AsyncMock(return_value=None)
            mock_repo.get_by_code = AsyncMock(return_value=_pin("MTH101-ABCDEFGH", "MTH101"))

            outcome = await redeem(mock_db, "MTH101-ABCDEFGH", "COS101", "CS/2024/001")

            assert outcome is RedemptionOutcome.COURSE_MISMATCH

    @pytest.mark.asyncio
    async def test_already_used(self, mock_db):
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.flip_unused = AsyncMock(return_value=None)
            mock_repo.get_by_code = AsyncMock(return_value=_pin("COS101-ABCDEFGH", "COS101"))

            outcome = await redeem(mock_db, "COS101-ABCDEFGH", "COS101", "CS/2024/002")

            assert outcome is RedemptionOutcome.ALREADY_USED


class TestDeletePin:
    @pytest.mark.asyncio
    async def test_unknown_pin(self, mock_db):
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.delete_by_id = AsyncMock(return_value=False)

            with pytest.raises(PinNotFoundError):
                await delete_pin(mock_db, uuid4())

            mock_db.commit.assert_not_called()
