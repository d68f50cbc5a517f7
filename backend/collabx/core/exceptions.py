"""
Custom exception classes and error handling utilities for CollabX.
"""

from typing import Any, Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse


class CollabXException(Exception):
    """Base exception for CollabX application."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ResourceNotFound(CollabXException):
    """Raised when a requested project, request or profile does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class PermissionDenied(CollabXException):
    """Raised when user doesn't have permission to perform action."""

    status_code = status.HTTP_403_FORBIDDEN


class InvalidInput(CollabXException):
    """Raised when input validation fails. Nothing has been written."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class InvalidState(CollabXException):
    """Raised when an operation is not allowed in the entity's current state."""

    status_code = status.HTTP_409_CONFLICT


class CapacityExceeded(CollabXException):
    """Raised when team capacity is enforced and the roster is full."""

    status_code = status.HTTP_409_CONFLICT


class PartialFailure(CollabXException):
    """
    Raised when a multi-step workflow applied only some of its writes.

    The accept flow raises this when the request was marked accepted but the
    roster could not be updated; ``details`` identifies the record to re-sync.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def collabx_exception_handler(request: Request, exc: CollabXException) -> JSONResponse:
    """Render domain exceptions as ``{"detail": ..., **details}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, **exc.details},
    )


def raise_not_found(resource_type: str, identifier: Any = None, message: str = None) -> None:
    """
    Raise a 404 HTTPException with descriptive message.

    Args:
        resource_type: Type of resource (e.g., "Project", "Faculty", "Hackathon")
        identifier: The ID/identifier that was not found
        message: Custom message (overrides default)

    Raises:
        HTTPException: 404 Not Found
    """
    if message:
        detail = message
    elif identifier:
        detail = f"{resource_type} with id '{identifier}' not found"
    else:
        detail = f"{resource_type} not found"

    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

