"""
Campus Portal Backend: Exception Hierarchy
===========================================

What:  Application exceptions the route groups raise for expected failures.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers (registered in main.py) translate them into
       JSON error responses.

Exception Hierarchy:
    PortalError (base)          → 500 Internal Server Error
    ├── ValidationError         → 400 Bad Request
    ├── NotFoundError           → 404 Not Found
    └── DatabaseError           → 500 Internal Server Error (generic message)
"""

from typing import Any, Dict, Optional


class PortalError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only returned for 400s)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PortalError):
    """Client sent data that can be corrected (HTTP 400)."""

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(PortalError):
    """
    Requested resource does not exist (HTTP 404).

    Example:
        raise NotFoundError("batch", batch_id)
        → "batch with ID 'B-2024' was not found"
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(PortalError):
    """
    A database operation failed (HTTP 500).

    The client always gets the generic message; the driver error travels
    in `context` and is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
