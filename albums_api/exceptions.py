"""
Albums API — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions and the single error-to-status mapping.
How:   Each exception class carries a message, an optional context dict, an
       HTTP status code, and whether it belongs to the fatal class.
       Handlers registered in main.py render client errors as plain text and
       fatal errors as JSON 500s (terminating the process when FAIL_FAST is on).
Who:   Raised by routes and AlbumService; caught by the global handlers.

Exception Hierarchy:
    AlbumServiceError (base)
    ├── ValidationError        → 400 Bad Request (plain text)
    ├── NotFoundError          → 404 Not Found (plain text)
    ├── MalformedRequestError  → 500 Internal Server Error (fatal)
    └── DatabaseError          → 500 Internal Server Error (fatal)
"""

from typing import Any, Dict, Optional


class AlbumServiceError(Exception):
    """
    Base exception for all Albums API errors.

    Attributes:
        message:      Caller-facing description
        context:      Additional debug info (logged, never returned for fatal errors)
        status_code:  HTTP status the error maps to
        fatal:        Whether the error belongs to the fatal class
    """

    status_code: int = 500
    fatal: bool = True

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AlbumServiceError):
    """
    Raised when a client-correctable input fails to parse.

    When:    Non-numeric id on GET /albums/{id}; non-numeric or missing year on
             the query-parameter routes. The store is never touched.
    HTTP:    400 Bad Request, plain-text body
    """

    status_code = 400
    fatal = False

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


class NotFoundError(AlbumServiceError):
    """
    Raised when GET /albums/{id} matches no row.

    HTTP:    404 Not Found, plain-text body
    """

    status_code = 404
    fatal = False

    def __init__(
        self,
        message: str = "Album not found",
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class MalformedRequestError(AlbumServiceError):
    """
    Raised when a request cannot be decoded outside the 400 cases.

    When:    Undecodable JSON body; non-numeric path id on the update and
             delete routes.
    HTTP:    500 Internal Server Error (fatal class)
    """

    def __init__(
        self,
        message: str = "Malformed request",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(AlbumServiceError):
    """
    Raised when a store statement fails.

    HTTP:    500 Internal Server Error (fatal class)

    The caller only ever sees a generic message; the driver error is logged.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


def status_for(exc: BaseException) -> int:
    """Map any exception to the HTTP status it is reported with."""
    if isinstance(exc, AlbumServiceError):
        return exc.status_code
    return 500


def is_fatal(exc: BaseException) -> bool:
    """Whether an exception belongs to the fatal class."""
    if isinstance(exc, AlbumServiceError):
        return exc.fatal
    return True
