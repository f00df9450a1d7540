"""
Documents Router

Endpoints:
- POST /documents/upload - Upload admission documents (multipart)
- GET /documents/{student_id} - Get a student's document bundle
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from ictreg.core.database import get_db
from ictreg.core.storage import ObjectStorage, get_storage
from ictreg.modules.documents import service
from ictreg.modules.documents.models import DOCUMENT_FIELDS, O_LEVEL_UPLOAD_PREFIX
from ictreg.modules.documents.schemas import DocumentBundleResponse, DocumentUploadResponse
from ictreg.modules.shared import ServiceError, internal_error, to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/upload",
    response_model=DocumentUploadResponse,
    summary="Upload Documents",
    description="""
Multipart form with:
- `student_id` (required)
- `o_level_inputs`: JSON array of `{exam_year, exam_type, exam_number, subject, grade}`
- `jamb_input`: JSON object `{reg_no, score}`
- any of the named document fields (jambUpload, applicationForm, fee1, ...)
- any number of `oLevelUpload*` files
""",
)
async def upload_documents(
    request: Request,
    db: AsyncSession = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
) -> DocumentUploadResponse:
    """
    The form is read directly because the O'Level file fields are dynamic.

    Raises:
        HTTPException 400: Missing student_id or malformed JSON field
        HTTPException 404: Student not found
        HTTPException 502: A file could not be stored
    """
    form = await request.form()

    raw_student_id = form.get("student_id")
    try:
        student_id = UUID(str(raw_student_id))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "VALIDATION_ERROR",
                "message": "student_id is required and must be a valid ID.",
                "field": "student_id",
            },
        ) from e

    files: dict[str, bytes] = {}
    o_level_files: list[bytes] = []
    for key, value in form.multi_items():
        if not isinstance(value, UploadFile) or not value.filename:
            continue
        if key.startswith(O_LEVEL_UPLOAD_PREFIX):
            o_level_files.append(await value.read())
        elif key in DOCUMENT_FIELDS:
            files[key] = await value.read()

    o_level_inputs = form.get("o_level_inputs")
    jamb_input = form.get("jamb_input")

    try:
        bundle = await service.upload_documents(
            db,
            storage,
            student_id,
            o_level_inputs=o_level_inputs if isinstance(o_level_inputs, str) else None,
            jamb_input=jamb_input if isinstance(jamb_input, str) else None,
            files=files,
            o_level_files=o_level_files,
        )
        return DocumentUploadResponse(documents=DocumentBundleResponse.model_validate(bundle))

    except ServiceError as e:
        logger.warning(f"Document upload rejected for {student_id}: {e.error_code}")
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error uploading documents for {student_id}: {e}")
        raise internal_error() from e


@router.get(
    "/{student_id}",
    response_model=DocumentBundleResponse,
    summary="Get Documents",
)
async def get_documents(
    student_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> DocumentBundleResponse:
    try:
        bundle = await service.get_documents(db, student_id)
        return DocumentBundleResponse.model_validate(bundle)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error fetching documents for {student_id}: {e}")
        raise internal_error() from e
