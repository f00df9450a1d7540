"""
Student PDF Exports

Builds the all-students table and the single-student info sheet. Passport
photos are fetched concurrently; a photo that fails to load is drawn as a
"No Image" box and the export continues.
"""

import asyncio
import logging
from datetime import UTC, datetime
from uuid import UUID

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.core.config import settings
from ictreg.core.pdf import DocumentContent, DocumentRow, fetch_image, render_document
from ictreg.modules.students import repository, service
from ictreg.modules.students.identity import full_name
from ictreg.modules.students.schemas import StudentComposite

logger = logging.getLogger(__name__)


def _format_date(value: datetime | None) -> str:
    return value.strftime("%d %b %Y") if value else "-"


async def _fetch_all(urls: list[str | None]) -> list[bytes | None]:
    timeout = settings.image_fetch_timeout_seconds
    async with httpx.AsyncClient(follow_redirects=True) as client:
        return await asyncio.gather(*(fetch_image(client, url, timeout) for url in urls))


async def export_students_pdf(db: AsyncSession) -> bytes:
    """All registered students, newest first, one row each."""
    students = await repository.list_students(db)
    images = await _fetch_all([s.passport_url for s in students])

    rows = [
        DocumentRow(
            image=image,
            columns=[
                full_name(s.surname, s.firstname, s.middlename),
                f"{s.email}\n{s.phone}\nRegistered: {_format_date(s.date_registered)}",
            ],
        )
        for s, image in zip(students, images)
    ]

    content = DocumentContent(
        title="Registered Students",
        subtitle=f"Generated {datetime.now(UTC).strftime('%d %b %Y %H:%M')} UTC",
        headers=["Name", "Contact"],
        rows=rows,
    )

    logger.info(f"Exporting {len(rows)} student(s) to PDF")
    return await asyncio.to_thread(render_document, content)


def _detail_lines(student: StudentComposite) -> list[tuple[str, str]]:
    return [
        ("Email", student.email),
        ("Phone", student.phone or "-"),
        ("Date of birth", student.dob or "-"),
        ("Department", student.department or "-"),
        ("Level", student.level or "-"),
        ("Registration No", student.reg_no or "-"),
        ("Matric No", student.matric_no or "-"),
        ("State of origin", student.state_origin or "-"),
        ("LGA of origin", student.lga_origin or "-"),
        ("Address", student.address or "-"),
        ("Next of kin", full_name(student.nok_surname, student.nok_firstname) or "-"),
        ("Next of kin phone", student.nok_phone or "-"),
        ("Relationship", student.nok_relation or "-"),
        ("Registered", _format_date(student.date_registered)),
    ]


async def export_student_pdf(db: AsyncSession, student_id: UUID) -> bytes:
    """
    One student's info sheet.

    Raises:
        StudentNotFoundError: If no identity exists for the ID
    """
    student = await service.get_student(db, student_id)
    (image,) = await _fetch_all([student.passport_url])

    name = full_name(student.surname, student.firstname, student.middlename)
    content = DocumentContent(
        title="Student Information",
        subtitle=name,
        rows=[DocumentRow(image=image, columns=[name, student.matric_no or student.reg_no or ""])],
        details=_detail_lines(student),
    )

    return await asyncio.to_thread(render_document, content)
