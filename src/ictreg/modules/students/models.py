"""
Student Models

Student is the identity record created at registration. StudentProfile holds
the extended academic and biographical data and is keyed by the same
normalized email. There is no foreign key between the two: a
profile may exist before its identity and survives the identity's deletion.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ictreg.modules.shared import BaseModel

if TYPE_CHECKING:
    from ictreg.modules.documents.models import DocumentBundle


class Student(BaseModel):
    """Student identity: contact details, credential and passport photo."""

    __tablename__ = "students"

    surname: Mapped[str] = mapped_column(String(100), nullable=False)
    firstname: Mapped[str] = mapped_column(String(100), nullable=False)
    middlename: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    # Stored normalized; the unique constraints close the check-then-insert race
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    phone: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)

    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    passport_url: Mapped[str] = mapped_column(Text, nullable=False)

    date_registered: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    documents: Mapped["DocumentBundle | None"] = relationship(
        "DocumentBundle",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False,
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, email={self.email})>"


class StudentProfile(BaseModel):
    """Extended student record, upserted by normalized email."""

    __tablename__ = "student_profiles"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)

    surname: Mapped[str | None] = mapped_column(String(100), nullable=True)
    firstname: Mapped[str | None] = mapped_column(String(100), nullable=True)
    middlename: Mapped[str | None] = mapped_column(String(100), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    dob: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # Academic
    department: Mapped[str | None] = mapped_column(String(150), nullable=True)
    level: Mapped[str | None] = mapped_column(String(20), nullable=True)
    reg_no: Mapped[str | None] = mapped_column(String(50), unique=True, nullable=True)
    matric_no: Mapped[str | None] = mapped_column(String(50), unique=True, nullable=True)

    # Origin and address
    state_origin: Mapped[str | None] = mapped_column(String(100), nullable=True)
    lga_origin: Mapped[str | None] = mapped_column(String(100), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Next of kin
    nok_surname: Mapped[str | None] = mapped_column(String(100), nullable=True)
    nok_firstname: Mapped[str | None] = mapped_column(String(100), nullable=True)
    nok_phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    nok_relation: Mapped[str | None] = mapped_column(String(50), nullable=True)

    passport_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<StudentProfile(id={self.id}, email={self.email}, reg_no={self.reg_no})>"
