"""
Document Bundle Model

One bundle per student holding O'Level / JAMB metadata and the URLs of
every uploaded admission document.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ictreg.modules.shared import BaseModel

if TYPE_CHECKING:
    from ictreg.modules.students.models import Student

# Single-file document slots accepted on upload
DOCUMENT_FIELDS: tuple[str, ...] = (
    "jambUpload",
    "jambAdmission",
    "applicationForm",
    "acceptanceForm",
    "guarantorForm",
    "codeOfConduct",
    "nd1First",
    "nd1Second",
    "nd2First",
    "nd2Second",
    "ict1",
    "ict2",
    "ict3",
    "ict4",
    "fee1",
    "fee2",
    "fee3",
    "fee4",
    "acceptanceFee",
    "stateOfOrigin",
    "nin",
    "deptFee",
)

# Multi-file slot; form fields named oLevelUpload, oLevelUpload1, ...
O_LEVEL_UPLOAD_PREFIX = "oLevelUpload"
O_LEVEL_UPLOADS_KEY = "oLevelUploads"


class DocumentBundle(BaseModel):
    """Uploaded admission documents for one student."""

    __tablename__ = "document_bundles"

    student_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("students.id", ondelete="CASCADE"),
        unique=True,
        index=True,
        nullable=False,
    )

    # [{exam_year, exam_type, exam_number, subject, grade}, ...]
    o_level_inputs: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    # {reg_no, score}
    jamb_input: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)
    # {<document field>: url, "oLevelUploads": [url, ...]}
    files: Mapped[dict] = mapped_column(JSONB, nullable=False, default=dict)

    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    student: Mapped["Student"] = relationship("Student", back_populates="documents")

    def __repr__(self) -> str:
        return f"<DocumentBundle(id={self.id}, student_id={self.student_id})>"
