"""
Course Catalog Models

A catalog groups the courses offered to one department and level in one
semester.
"""

import uuid

from sqlalchemy import ForeignKey, Integer, SmallInteger, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ictreg.modules.shared import BaseModel


class CourseCatalog(BaseModel):
    """Courses for one level, department and semester."""

    __tablename__ = "course_catalogs"

    level: Mapped[str] = mapped_column(String(20), nullable=False)  # ND1, ND2, ...
    department: Mapped[str] = mapped_column(String(150), nullable=False)
    semester: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    courses: Mapped[list["CatalogCourse"]] = relationship(
        "CatalogCourse",
        back_populates="catalog",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="CatalogCourse.created_at",
    )

    def __repr__(self) -> str:
        return f"<CourseCatalog(id={self.id}, {self.department} {self.level} S{self.semester})>"


class CatalogCourse(BaseModel):
    """One course inside a catalog. ``code`` is stored normalized (e.g. COS101)."""

    __tablename__ = "catalog_courses"

    catalog_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("course_catalogs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    code: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    unit: Mapped[int] = mapped_column(Integer, nullable=False)
    lecturer: Mapped[str] = mapped_column(String(150), nullable=False)

    catalog: Mapped["CourseCatalog"] = relationship("CourseCatalog", back_populates="courses")

    def __repr__(self) -> str:
        return f"<CatalogCourse(code={self.code}, title={self.title})>"
