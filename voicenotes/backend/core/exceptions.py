"""
Custom Exceptions.

Each class carries the error code and HTTP status it is reported with, so
the API exception handlers and the API client agree on one mapping.

Missing resources and resources owned by someone else both surface as
NotFoundError so that callers cannot probe for other users' data.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    status_code = 500
    code = "SYS_INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, code: str | None = None) -> None:
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        super().__init__(self.message)


class ValidationError(ApplicationError):
    """Input failed a domain check. details carries field-level errors when known."""

    status_code = 400
    code = "VAL_VALIDATION_ERROR"
    default_message = "Validation failed"

    def __init__(self, message: str | None = None, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class AuthenticationError(ApplicationError):
    status_code = 401
    code = "AUTH_UNAUTHORIZED"
    default_message = "Authentication required"


class NotFoundError(ApplicationError):
    """The resource does not exist or is not owned by the caller."""

    status_code = 404
    code = "RES_NOT_FOUND"
    default_message = "Resource not found"


class ConflictError(ApplicationError):
    """The write would break a uniqueness rule, e.g. a registered email."""

    status_code = 409
    code = "RES_CONFLICT"
    default_message = "Resource conflict"


class ExternalServiceError(ApplicationError):
    """The notes API could not be reached or answered unexpectedly."""

    status_code = 502
    code = "SYS_EXTERNAL_SERVICE_ERROR"
    default_message = "External service error"


class DatabaseError(ApplicationError):
    status_code = 503
    code = "SYS_DATABASE_ERROR"
    default_message = "Database error"
