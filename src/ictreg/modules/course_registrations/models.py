"""
Course Registration Model
"""

from datetime import datetime

from sqlalchemy import DateTime, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from ictreg.modules.shared import BaseModel


class CourseRegistration(BaseModel):
    """A student's registration for one course."""

    __tablename__ = "course_registrations"
    __table_args__ = (
        UniqueConstraint("matric_no", "course_code", name="uq_course_registrations_matric_course"),
    )

    # Stored trimmed and uppercased
    matric_no: Mapped[str] = mapped_column(String(50), index=True, nullable=False)
    course_code: Mapped[str] = mapped_column(String(20), nullable=False)
    course_title: Mapped[str] = mapped_column(String(200), nullable=False)

    # Historical string; the pin row may have been deleted since
    pin_code: Mapped[str] = mapped_column(String(40), index=True, nullable=False)

    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<CourseRegistration(matric_no={self.matric_no}, course_code={self.course_code})>"
