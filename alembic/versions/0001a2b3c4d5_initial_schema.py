"""initial schema

Revision ID: 0001a2b3c4d5
Revises:
Create Date: 2026-10-17 09:00:00.000000

Creates every table of the registration service:
students and profiles, document bundles, course catalogs, course pins,
course registrations, payments, results and admins.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001a2b3c4d5"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _base_columns() -> list[sa.Column]:
    """Primary key and timestamps shared by every table (from BaseModel)."""
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create all tables and enum types."""
    pin_status_enum = postgresql.ENUM("unused", "used", name="pin_status", create_type=False)
    pin_status_enum.create(op.get_bind(), checkfirst=True)

    admin_role_enum = postgresql.ENUM("super_admin", "admin", name="admin_role", create_type=False)
    admin_role_enum.create(op.get_bind(), checkfirst=True)

    # Students
    op.create_table(
        "students",
        *_base_columns(),
        sa.Column("surname", sa.String(length=100), nullable=False),
        sa.Column("firstname", sa.String(length=100), nullable=False),
        sa.Column("middlename", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("passport_url", sa.Text(), nullable=False),
        sa.Column(
            "date_registered",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_students_email", "students", ["email"], unique=True)
    op.create_index("ix_students_phone", "students", ["phone"], unique=True)

    op.create_table(
        "student_profiles",
        *_base_columns(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("surname", sa.String(length=100), nullable=True),
        sa.Column("firstname", sa.String(length=100), nullable=True),
        sa.Column("middlename", sa.String(length=100), nullable=True),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("dob", sa.String(length=20), nullable=True),
        sa.Column("department", sa.String(length=150), nullable=True),
        sa.Column("level", sa.String(length=20), nullable=True),
        sa.Column("reg_no", sa.String(length=50), nullable=True),
        sa.Column("matric_no", sa.String(length=50), nullable=True),
        sa.Column("state_origin", sa.String(length=100), nullable=True),
        sa.Column("lga_origin", sa.String(length=100), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("nok_surname", sa.String(length=100), nullable=True),
        sa.Column("nok_firstname", sa.String(length=100), nullable=True),
        sa.Column("nok_phone", sa.String(length=20), nullable=True),
        sa.Column("nok_relation", sa.String(length=50), nullable=True),
        sa.Column("passport_url", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("reg_no"),
        sa.UniqueConstraint("matric_no"),
    )
    op.create_index("ix_student_profiles_email", "student_profiles", ["email"], unique=True)

    # Documents
    op.create_table(
        "document_bundles",
        *_base_columns(),
        sa.Column("student_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("o_level_inputs", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("jamb_input", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("files", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column(
            "uploaded_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_document_bundles_student_id", "document_bundles", ["student_id"], unique=True
    )

    # Course catalogs
    op.create_table(
        "course_catalogs",
        *_base_columns(),
        sa.Column("level", sa.String(length=20), nullable=False),
        sa.Column("department", sa.String(length=150), nullable=False),
        sa.Column("semester", sa.SmallInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "catalog_courses",
        *_base_columns(),
        sa.Column("catalog_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("code", sa.String(length=20), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("unit", sa.Integer(), nullable=False),
        sa.Column("lecturer", sa.String(length=150), nullable=False),
        sa.ForeignKeyConstraint(["catalog_id"], ["course_catalogs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_catalog_courses_catalog_id", "catalog_courses", ["catalog_id"])
    op.create_index("ix_catalog_courses_code", "catalog_courses", ["code"])

    # Pins
    op.create_table(
        "course_pins",
        *_base_columns(),
        sa.Column("code", sa.String(length=40), nullable=False),
        sa.Column("course_code", sa.String(length=20), nullable=False),
        sa.Column("course_title", sa.String(length=200), nullable=False),
        sa.Column("status", pin_status_enum, nullable=False, server_default="unused"),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("used_by", sa.String(length=50), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_course_pins_code", "course_pins", ["code"], unique=True)
    op.create_index("ix_course_pins_course_code", "course_pins", ["course_code"])
    op.create_index("ix_course_pins_status", "course_pins", ["status"])

    # Course registrations
    op.create_table(
        "course_registrations",
        *_base_columns(),
        sa.Column("matric_no", sa.String(length=50), nullable=False),
        sa.Column("course_code", sa.String(length=20), nullable=False),
        sa.Column("course_title", sa.String(length=200), nullable=False),
        sa.Column("pin_code", sa.String(length=40), nullable=False),
        sa.Column(
            "registered_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "matric_no", "course_code", name="uq_course_registrations_matric_course"
        ),
    )
    op.create_index(
        "ix_course_registrations_matric_no", "course_registrations", ["matric_no"]
    )
    op.create_index("ix_course_registrations_pin_code", "course_registrations", ["pin_code"])

    # Payments
    op.create_table(
        "payments",
        *_base_columns(),
        sa.Column("payment_id", sa.String(length=100), nullable=False),
        sa.Column("matric_no", sa.String(length=50), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("purpose", sa.String(length=200), nullable=False),
        sa.Column(
            "paid_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_payments_payment_id", "payments", ["payment_id"], unique=True)
    op.create_index("ix_payments_matric_no", "payments", ["matric_no"])
    op.create_index("ix_payments_email", "payments", ["email"])

    # Results
    op.create_table(
        "results",
        *_base_columns(),
        sa.Column("fullname", sa.String(length=300), nullable=False),
        sa.Column("matric_no", sa.String(length=50), nullable=False),
        sa.Column("department", sa.String(length=150), nullable=True),
        sa.Column("level", sa.String(length=20), nullable=True),
        sa.Column("course_code", sa.String(length=20), nullable=False),
        sa.Column("course_title", sa.String(length=200), nullable=False),
        sa.Column("score", sa.Float(), nullable=False),
        sa.Column("grade", sa.String(length=2), nullable=False),
        sa.Column(
            "uploaded_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_results_matric_no", "results", ["matric_no"])
    op.create_index("ix_results_course_code", "results", ["course_code"])

    # Admins
    op.create_table(
        "admins",
        *_base_columns(),
        sa.Column("fullname", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("department", sa.String(length=150), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("passport_url", sa.Text(), nullable=False),
        sa.Column("role", admin_role_enum, nullable=False, server_default="admin"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_admins_email", "admins", ["email"], unique=True)


def downgrade() -> None:
    """Drop all tables and enum types."""
    op.drop_index("ix_admins_email", table_name="admins")
    op.drop_table("admins")

    op.drop_index("ix_results_course_code", table_name="results")
    op.drop_index("ix_results_matric_no", table_name="results")
    op.drop_table("results")

    op.drop_index("ix_payments_email", table_name="payments")
    op.drop_index("ix_payments_matric_no", table_name="payments")
    op.drop_index("ix_payments_payment_id", table_name="payments")
    op.drop_table("payments")

    op.drop_index("ix_course_registrations_pin_code", table_name="course_registrations")
    op.drop_index("ix_course_registrations_matric_no", table_name="course_registrations")
    op.drop_table("course_registrations")

    op.drop_index("ix_course_pins_status", table_name="course_pins")
    op.drop_index("ix_course_pins_course_code", table_name="course_pins")
    op.drop_index("ix_course_pins_code", table_name="course_pins")
    op.drop_table("course_pins")

    op.drop_index("ix_catalog_courses_code", table_name="catalog_courses")
    op.drop_index("ix_catalog_courses_catalog_id", table_name="catalog_courses")
    op.drop_table("catalog_courses")
    op.drop_table("course_catalogs")

    op.drop_index("ix_document_bundles_student_id", table_name="document_bundles")
    op.drop_table("document_bundles")

    op.drop_index("ix_student_profiles_email", table_name="student_profiles")
    op.drop_table("student_profiles")

    op.drop_index("ix_students_phone", table_name="students")
    op.drop_index("ix_students_email", table_name="students")
    op.drop_table("students")

    sa.Enum(name="admin_role").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="pin_status").drop(op.get_bind(), checkfirst=True)
