"""
Result Model
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, String, func
from sqlalchemy.orm import Mapped, mapped_column

from ictreg.modules.shared import BaseModel


class Result(BaseModel):
    """One student's result for one course."""

    __tablename__ = "results"

    fullname: Mapped[str] = mapped_column(String(300), nullable=False)
    matric_no: Mapped[str] = mapped_column(String(50), index=True, nullable=False)
    department: Mapped[str | None] = mapped_column(String(150), nullable=True)
    level: Mapped[str | None] = mapped_column(String(20), nullable=True)
    course_code: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    course_title: Mapped[str] = mapped_column(String(200), nullable=False)
    score: Mapped[float] = mapped_column(Float, nullable=False)
    grade: Mapped[str] = mapped_column(String(2), nullable=False)

    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Result(matric_no={self.matric_no}, course_code={self.course_code}, grade={self.grade})>"
