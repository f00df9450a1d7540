"""
Course Pin Model
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, String
from sqlalchemy.dialects.postgresql import ENUM
from sqlalchemy.orm import Mapped, mapped_column

from ictreg.modules.shared import BaseModel


class PinStatus(str, Enum):
    """Pin lifecycle. The only transition is UNUSED -> USED."""

    UNUSED = "unused"
    USED = "used"


class CoursePin(BaseModel):
    """A single-use pin that authorizes one course registration."""

    __tablename__ = "course_pins"

    # <COURSE_CODE>-<8 chars>, e.g. COS101-7KQ2M9XD
    code: Mapped[str] = mapped_column(String(40), unique=True, index=True, nullable=False)
    course_code: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    course_title: Mapped[str] = mapped_column(String(200), nullable=False)

    status: Mapped[PinStatus] = mapped_column(
        ENUM(
            PinStatus,
            name="pin_status",
            create_type=True,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=PinStatus.UNUSED,
        index=True,
    )
    used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    # Matric number of the redeeming student
    used_by: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<CoursePin(id={self.id}, course_code={self.course_code}, status={self.status.value})>"
