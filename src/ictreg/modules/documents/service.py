"""
Documents Service Layer

Stores uploaded admission documents and merges them into the student's
bundle.
"""

import logging
from typing import Any
from uuid import UUID

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.core.storage import ObjectStorage
from ictreg.modules.documents import repository
from ictreg.modules.documents.models import DOCUMENT_FIELDS, DocumentBundle
from ictreg.modules.documents.schemas import JambInput, OLevelInput
from ictreg.modules.shared import NotFoundError, ValidationFailedError
from ictreg.modules.students import repository as students_repository
from ictreg.modules.students.service import StudentNotFoundError

logger = logging.getLogger(__name__)

DOCUMENTS_FOLDER = "student_documents"
O_LEVEL_FOLDER = "student_documents/olevel"

_o_level_adapter = TypeAdapter(list[OLevelInput])


class DocumentsNotFoundError(NotFoundError):
    """Raised when a student has never uploaded documents."""

    def __init__(self, student_id: UUID):
        super().__init__(
            message=f"No documents found for student {student_id}",
            error_code="DOCUMENTS_NOT_FOUND",
        )


def parse_o_level_inputs(raw: str | None) -> list[dict[str, Any]]:
    """
    Parse the O'Level JSON array sent as a form string.

    Raises:
        ValidationFailedError: If the value is not a JSON array of objects
    """
    if not raw or not raw.strip():
        return []
    try:
        rows = _o_level_adapter.validate_json(raw)
    except ValidationError as e:
        raise ValidationFailedError(
            "o_level_inputs must be a JSON array of subject objects.",
            field="o_level_inputs",
        ) from e
    return [row.model_dump() for row in rows]


def parse_jamb_input(raw: str | None) -> dict[str, Any]:
    """
    Parse the JAMB JSON object sent as a form string. Empty objects parse to {}.

    Raises:
        ValidationFailedError: If the value is not a JSON object
    """
    if not raw or not raw.strip():
        return {}
    try:
        jamb = JambInput.model_validate_json(raw)
    except ValidationError as e:
        raise ValidationFailedError(
            "jamb_input must be a JSON object.",
            field="jamb_input",
        ) from e
    return jamb.model_dump(exclude_none=True)


async def upload_documents(
    db: AsyncSession,
    storage: ObjectStorage,
    student_id: UUID,
    *,
    o_level_inputs: str | None = None,
    jamb_input: str | None = None,
    files: dict[str, bytes] | None = None,
    o_level_files: list[bytes] | None = None,
) -> DocumentBundle:
    """
    Store uploaded documents and merge them into the student's bundle.

    Args:
        db: Database session
        storage: Object storage for the files
        student_id: Owner of the bundle
        o_level_inputs: JSON array string of O'Level subject rows
        jamb_input: JSON object string with reg_no and score
        files: Named document slot -> file bytes
        o_level_files: O'Level result scans, appended in order

    Raises:
        StudentNotFoundError: If the student does not exist
        ValidationFailedError: If a JSON field is malformed
        FileUnavailableError: If any file could not be stored
    """
    o_level_rows = parse_o_level_inputs(o_level_inputs)
    jamb = parse_jamb_input(jamb_input)

    student = await students_repository.get_by_id(db, student_id)
    if student is None:
        raise StudentNotFoundError(student_id)

    stored_files: dict[str, str] = {}
    for field, content in (files or {}).items():
        if field not in DOCUMENT_FIELDS:
            logger.warning(f"Ignoring unknown document field '{field}' for student {student_id}")
            continue
        stored_files[field] = await storage.store(content, DOCUMENTS_FOLDER)

    o_level_urls = [await storage.store(content, O_LEVEL_FOLDER) for content in o_level_files or []]

    bundle = await repository.upsert_bundle(
        db,
        student_id,
        o_level_inputs=o_level_rows,
        jamb_input=jamb,
        files=stored_files,
        o_level_uploads=o_level_urls,
    )
    await db.commit()

    logger.info(
        f"Stored {len(stored_files)} document(s) and {len(o_level_urls)} O'Level scan(s) "
        f"for student {student_id}"
    )
    return bundle


async def get_documents(db: AsyncSession, student_id: UUID) -> DocumentBundle:
    """
    Raises:
        DocumentsNotFoundError: If the student has no bundle
    """
    bundle = await repository.get_by_student_id(db, student_id)
    if bundle is None:
        raise DocumentsNotFoundError(student_id)
    return bundle
