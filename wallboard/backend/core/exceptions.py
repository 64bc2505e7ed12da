"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Each class maps to one error category the API reports; the mapping to
HTTP status codes lives in exception_handlers.py.
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        code: str = "SYS_INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found", details: dict | None = None) -> None:
        super().__init__(message, code="RES_NOT_FOUND", details=details)


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        super().__init__(message, code="VAL_VALIDATION_ERROR", details=details)


class AuthenticationError(ApplicationError):
    """Raised when the shared wall password is missing or wrong."""

    def __init__(self, message: str = "Invalid password") -> None:
        super().__init__(message, code="AUTH_UNAUTHORIZED")


class AuthorizationError(ApplicationError):
    """Raised when a resource may not be exposed to the caller (drafts, private walls)."""

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message, code="AUTHZ_FORBIDDEN")


class ConflictError(ApplicationError):
    """Raised when there is a state conflict."""

    def __init__(self, message: str = "Resource conflict") -> None:
        super().__init__(message, code="RES_CONFLICT")


class CodeAllocationError(ApplicationError):
    """Raised when every short-code candidate collided with an existing code."""

    def __init__(self, message: str = "Could not allocate a short code", details: dict | None = None) -> None:
        super().__init__(message, code="LINK_ALLOCATION_FAILED", details=details)


class ExternalServiceError(ApplicationError):
    """Raised when an external service call fails."""

    def __init__(self, message: str = "External service error") -> None:
        super().__init__(message, code="SYS_EXTERNAL_SERVICE_ERROR")


class DatabaseError(ApplicationError):
    """Raised when a database operation fails."""

    def __init__(self, message: str = "Database error", details: dict | None = None) -> None:
        super().__init__(message, code="SYS_DATABASE_ERROR", details=details)


class SchemaVersionError(ApplicationError):
    """Raised at startup when the database schema does not match the migration head."""

    def __init__(self, message: str = "Database schema version mismatch") -> None:
        super().__init__(message, code="SYS_SCHEMA_MISMATCH")
