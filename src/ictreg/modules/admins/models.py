"""
Admin Models
"""

from enum import Enum

from sqlalchemy import String, Text
from sqlalchemy.dialects.postgresql import ENUM
from sqlalchemy.orm import Mapped, mapped_column

from ictreg.modules.shared import BaseModel


class AdminRole(str, Enum):
    """Admin roles. Super admins manage other admins."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"


# Department stored for super admins, who are not tied to one
NO_DEPARTMENT = "N/A"


class Admin(BaseModel):
    """Staff account with access to the admin endpoints."""

    __tablename__ = "admins"

    fullname: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    department: Mapped[str] = mapped_column(String(150), nullable=False, default=NO_DEPARTMENT)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    passport_url: Mapped[str] = mapped_column(Text, nullable=False)

    role: Mapped[AdminRole] = mapped_column(
        ENUM(
            AdminRole,
            name="admin_role",
            create_type=True,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=AdminRole.ADMIN,
    )

    def __repr__(self) -> str:
        return f"<Admin(id={self.id}, email={self.email}, role={self.role.value})>"
