"""Application exception hierarchy.

Every failure that reaches the HTTP boundary is a ``BaseAPIException`` carrying
a stable error code and status, so the handlers in
``civic_reports.middleware.error_handler`` can map it without inspecting types.
"""

from typing import Any, Optional


class BaseAPIException(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    error_code: str = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class ValidationError(BaseAPIException):
    """Missing or malformed input field."""

    status_code = 400
    error_code = "VALIDATION_ERROR"

    def __init__(self, field: str, message: str):
        super().__init__(message, details={"field": field})
        self.field = field


class NotFoundError(BaseAPIException):
    """A referenced resource does not exist."""

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            details={"resource_type": resource_type, "resource_id": resource_id},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class StatusTransitionError(BaseAPIException):
    """Requested status change is not allowed from the current status."""

    status_code = 409
    error_code = "INVALID_STATUS_TRANSITION"

    def __init__(self, current: str, requested: str, allowed: list[str]):
        super().__init__(
            f"Cannot move report from {current} to {requested}",
            details={"current": current, "requested": requested, "allowed": allowed},
        )
        self.current = current
        self.requested = requested


class StorageError(BaseAPIException):
    """Persistence failure. Message stays generic; the cause is chained."""

    status_code = 500
    error_code = "STORAGE_ERROR"

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message)
