"""
Tabular Import

``parse_spreadsheet(content)`` turns an uploaded Excel (or CSV) file into a
list of row mappings keyed by the header row. Blank cells come back as
None; reading a row never raises.

Every row also carries its spreadsheet row number under ROW_NUMBER_KEY
(the header is row 1), so callers can report errors against the sheet the
user sees even after blank rows are skipped.
"""

import asyncio
import io
import logging
from typing import Any

import pandas as pd

from ictreg.modules.shared.errors import ValidationFailedError

logger = logging.getLogger(__name__)

ROW_NUMBER_KEY = "__row__"

# Header occupies row 1; pandas numbers data rows from 0
_FIRST_DATA_ROW = 2


class SpreadsheetError(ValidationFailedError):
    """Raised when an uploaded file cannot be read as a spreadsheet."""

    def __init__(self, message: str = "Could not read the uploaded spreadsheet."):
        super().__init__(message=message, error_code="SPREADSHEET_UNREADABLE", field="file")


def _read_frame(content: bytes, filename: str | None) -> pd.DataFrame:
    buffer = io.BytesIO(content)
    if filename and filename.lower().endswith(".csv"):
        return pd.read_csv(buffer, dtype=object, skip_blank_lines=False)
    # First sheet only
    return pd.read_excel(buffer, engine="openpyxl", dtype=object)


def read_rows(content: bytes, filename: str | None = None) -> list[dict[str, Any]]:
    """
    Synchronously parse spreadsheet bytes into row dicts.

    Raises:
        SpreadsheetError: If the content is not a readable spreadsheet
    """
    if not content:
        raise SpreadsheetError("Uploaded spreadsheet is empty.")

    try:
        df = _read_frame(content, filename)
    except Exception as e:
        logger.warning(f"Spreadsheet parse failed for {filename or '<upload>'}: {e}")
        raise SpreadsheetError() from e

    df.columns = [str(col).strip() for col in df.columns]
    df = df.dropna(how="all")
    df = df.astype(object).where(pd.notna(df), None)
    df[ROW_NUMBER_KEY] = [int(index) + _FIRST_DATA_ROW for index in df.index]

    return df.to_dict(orient="records")


async def parse_spreadsheet(content: bytes, filename: str | None = None) -> list[dict[str, Any]]:
    """Parse spreadsheet bytes off the event loop."""
    return await asyncio.to_thread(read_rows, content, filename)
