"""
Results Repository
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ictreg.modules.results.models import Result


async def insert_many(db: AsyncSession, rows: list[dict[str, Any]]) -> list[Result]:
    """Insert already validated results."""
    results = [Result(**row) for row in rows]
    db.add_all(results)
    await db.flush()
    return results


async def list_results(
    db: AsyncSession,
    matric_no: str | None = None,
    course_code: str | None = None,
) -> list[Result]:
    query = select(Result)
    if matric_no:
        query = query.where(Result.matric_no == matric_no)
    if course_code:
        query = query.where(Result.course_code == course_code)

    result = await db.execute(query.order_by(Result.uploaded_at.desc(), Result.course_code))
    return list(result.scalars().all())
