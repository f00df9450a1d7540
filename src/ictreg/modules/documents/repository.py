"""
Documents Repository

One bundle row per student. The upsert inserts an empty bundle if none
exists, then locks the row and merges into it, so concurrent uploads for
the same student serialize instead of racing on the unique key.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from .models import O_LEVEL_UPLOADS_KEY, DocumentBundle


async def get_by_student_id(db: AsyncSession, student_id: UUID) -> DocumentBundle | None:
    """Get the bundle for a student, if one was ever uploaded."""
    result = await db.execute(select(DocumentBundle).where(DocumentBundle.student_id == student_id))
    return result.scalar_one_or_none()


async def upsert_bundle(
    db: AsyncSession,
    student_id: UUID,
    *,
    o_level_inputs: list[dict[str, Any]],
    jamb_input: dict[str, Any],
    files: dict[str, str],
    o_level_uploads: list[str],
) -> DocumentBundle:
    """
    Merge an upload into the student's bundle.

    Non-empty O'Level inputs and JAMB input replace the stored values, each
    named file overwrites its slot and O'Level upload URLs are appended.
    """
    await db.execute(
        pg_insert(DocumentBundle)
        .values(student_id=student_id, o_level_inputs=[], jamb_input={}, files={})
        .on_conflict_do_nothing(index_elements=[DocumentBundle.student_id])
    )

    result = await db.execute(
        select(DocumentBundle)
        .where(DocumentBundle.student_id == student_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    bundle = result.scalar_one()

    if o_level_inputs:
        bundle.o_level_inputs = o_level_inputs
    if jamb_input:
        bundle.jamb_input = jamb_input

    # JSONB columns only register a change on reassignment
    merged_files = dict(bundle.files or {})
    merged_files.update(files)
    if o_level_uploads:
        merged_files[O_LEVEL_UPLOADS_KEY] = [
            *merged_files.get(O_LEVEL_UPLOADS_KEY, []),
            *o_level_uploads,
        ]
    bundle.files = merged_files

    await db.flush()
    await db.refresh(bundle)

    return bundle
