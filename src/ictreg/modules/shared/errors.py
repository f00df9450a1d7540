"""
Service Error Taxonomy

Every service raises a subclass of ServiceError. The four categories map
to HTTP status codes so routers can translate them without knowing the
specific error:

- ValidationFailedError  -> 400  missing or malformed input
- ConflictError          -> 409  uniqueness violations, already-used state
- NotFoundError          -> 404  referenced record does not exist
- CollaboratorError      -> 502  storage / import / rendering failures
"""

from fastapi import HTTPException


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class ValidationFailedError(ServiceError):
    """Raised when required input is missing or malformed."""

    def __init__(self, message: str, error_code: str = "VALIDATION_ERROR", field: str | None = None):
        self.field = field
        super().__init__(message=message, error_code=error_code, status_code=400)


class ConflictError(ServiceError):
    """Raised when an operation would violate a uniqueness or state rule."""

    def __init__(self, message: str, error_code: str = "CONFLICT"):
        super().__init__(message=message, error_code=error_code, status_code=409)


class NotFoundError(ServiceError):
    """Raised when a referenced record does not exist."""

    def __init__(self, message: str, error_code: str = "NOT_FOUND"):
        super().__init__(message=message, error_code=error_code, status_code=404)


class CollaboratorError(ServiceError):
    """Raised when an external collaborator (storage, import, rendering) fails."""

    def __init__(self, message: str, error_code: str = "COLLABORATOR_FAILURE"):
        super().__init__(message=message, error_code=error_code, status_code=502)


def to_http_exception(e: ServiceError) -> HTTPException:
    """Convert a service error into the structured HTTPException routers raise."""
    detail = {"error": e.error_code, "message": e.message}
    field = getattr(e, "field", None)
    if field:
        detail["field"] = field
    return HTTPException(status_code=e.status_code, detail=detail)


def internal_error() -> HTTPException:
    """Generic 500 for unexpected failures; details stay in the logs."""
    return HTTPException(
        status_code=500,
        detail={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred. Please try again later.",
        },
    )
