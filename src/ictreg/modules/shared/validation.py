"""
Column length checks for values about to be written.
"""

from collections.abc import Mapping
from typing import Any

from ictreg.modules.shared.errors import ValidationFailedError


def check_column_lengths(model: type, values: Mapping[str, Any]) -> None:
    """
    Reject any string longer than the ``String(n)`` column it is bound for.

    Keys that are not sized columns of ``model`` are skipped.

    Raises:
        ValidationFailedError: FIELD_TOO_LONG, naming the first offending field
    """
    columns = model.__table__.columns
    for field, value in values.items():
        column = columns.get(field)
        if column is None or not isinstance(value, str):
            continue
        length = getattr(column.type, "length", None)
        if length is not None and len(value) > length:
            raise ValidationFailedError(
                f"{field} must be at most {length} characters.",
                error_code="FIELD_TOO_LONG",
                field=field,
            )
