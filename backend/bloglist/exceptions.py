"""
Bloglist Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for every failure the API reports.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers (registered in main.py) turn them into
       `{"error": <message>, ...}` JSON responses with the right status code.
Who:   Raised by services, validation helpers and the auth dependency.

Exception Hierarchy:
    BloglistError (base)
    ├── ValidationError          → 400 Bad Request (field-specific message)
    ├── BadRequestError          → 400 Bad Request (missing/malformed path id)
    ├── UnauthorizedError        → 401 Unauthorized (token / credentials)
    │   └── ForbiddenError       → 401 Unauthorized ("not authorized")
    ├── NotFoundError            → 404 Not Found
    ├── DatabaseError            → 500 Internal Server Error
    └── RateLimitExceededError   → 429 Too Many Requests

ForbiddenError answers 401 rather than 403: API clients treat a non-owner
delete exactly like a missing credential.
"""

from typing import Any, Dict, Optional


class BloglistError(Exception):
    """
    Base exception for all Bloglist application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only returned for validation errors)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BloglistError):
    """
    Raised when a request body fails a business validation rule.

    Example response:
        {"error": "username or password missing", "details": {"field": "password"}}
    """

    status_code = 400

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


class BadRequestError(BloglistError):
    """Raised when the request shape is wrong (e.g. no id in the path)."""

    status_code = 400

    def __init__(
        self,
        message: str = "Bad request",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthorizedError(BloglistError):
    """
    Raised when the caller cannot be authenticated.

    When: missing/malformed Authorization header, bad signature, expired
    token, token for a deleted user, wrong login credentials.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(UnauthorizedError):
    """Raised when an authenticated user acts on a resource they do not own."""

    def __init__(
        self,
        message: str = "not authorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(BloglistError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None (or a zero rowcount) for missing records; the
    service layer converts that into this exception.
    """

    status_code = 404

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


class DatabaseError(BloglistError):
    """
    Raised when a database operation fails unexpectedly.

    The message returned to the client is always generic; the original error
    type goes into `context` and is logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(BloglistError):
    """Raised when a client exceeds the per-IP request rate limit."""

    status_code = 429

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
