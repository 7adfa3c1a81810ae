"""Domain exceptions raised by services and mapped to HTTP responses.

Every error carries a machine readable ``code``, a human readable
``message`` and the HTTP status the API answers with.
"""

from __future__ import annotations

from fastapi import status
from pydantic import BaseModel


class ErrorCode:
    """Error codes exposed in response bodies."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_ENTITY = "DUPLICATE_ENTITY"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"


class FieldError(BaseModel):
    """A single violated constraint on a request field."""

    field: str
    message: str


class BileMoError(Exception):
    """Base exception for API errors."""

    code: str = ErrorCode.VALIDATION_ERROR
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class EntityValidationError(BileMoError):
    """Raised when an entity violates one or more field constraints."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self, errors: list[FieldError], message: str = "Validation failed"
    ) -> None:
        super().__init__(message)
        self.errors = errors


class DomainConflictError(BileMoError):
    """Raised when a write conflicts with existing state (duplicate email)."""

    code = ErrorCode.DUPLICATE_ENTITY
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(BileMoError):
    """Raised when the caller could not be authenticated."""

    code = ErrorCode.UNAUTHORIZED
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class AccessDeniedError(BileMoError):
    """Raised before any side effect when the caller may not touch a resource."""

    code = ErrorCode.FORBIDDEN
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(
        self, message: str = "You are not allowed to access this resource"
    ) -> None:
        super().__init__(message)


class EntityNotFoundError(BileMoError):
    """Raised when a path entity does not resolve."""

    code = ErrorCode.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, identifier: object) -> None:
        super().__init__(f"{resource} not found: {identifier}")
        self.resource = resource
        self.identifier = identifier
