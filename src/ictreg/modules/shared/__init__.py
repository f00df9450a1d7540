"""
Shared module - base model and the service error taxonomy.
"""

from ictreg.modules.shared.errors import (
    CollaboratorError,
    ConflictError,
    NotFoundError,
    ServiceError,
    ValidationFailedError,
    internal_error,
    to_http_exception,
)
from ictreg.modules.shared.models import BaseModel
from ictreg.modules.shared.validation import check_column_lengths

__all__ = [
    "BaseModel",
    "ServiceError",
    "ValidationFailedError",
    "ConflictError",
    "NotFoundError",
    "CollaboratorError",
    "to_http_exception",
    "internal_error",
    "check_column_lengths",
]
