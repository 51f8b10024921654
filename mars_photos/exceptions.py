"""
Mars Photo API: Custom Exception Hierarchy
============================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"errors": message}` bodies with the matching HTTP status.
Who:   Raised by services and adapters; caught by global handlers.

Exception Hierarchy:
    MarsPhotosError (base)     → 500 Internal Server Error
    ├── ValidationError        → 400 Bad Request (client can fix)
    ├── NotSupportedError      → 501 Not Implemented (rover has no adapter)
    └── UpstreamError          → 500 Internal Server Error (generic body)

The estimation layer is the only place that absorbs these: a failed sample
becomes a result value instead of an exception. Everywhere else they
propagate to the handlers.
"""

from typing import Any, Dict, Optional


class MarsPhotosError(Exception):
    """
    Base exception for all Mars Photo API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MarsPhotosError):
    """
    Raised when client input fails validation.

    When:    Unknown rover, malformed sol/earth_date, missing required filter.
    HTTP:    400 Bad Request

    Example response:
        {"errors": "Invalid earth_date. Date must be after landing date."}
    """

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


class NotSupportedError(MarsPhotosError):
    """
    Raised when a rover has no structured upstream adapter.

    What:    Opportunity and Spirit images are only published as HTML pages,
             so there is no feed to normalize.
    HTTP:    501 Not Implemented

    This is an explicit gap. Returning an empty photo list instead would
    look like "no photos that sol", which is wrong.
    """

    def __init__(
        self,
        rover_name: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"{rover_name} photos are not yet supported via direct API. "
            "The original app uses HTML scraping."
        )
        ctx = context or {}
        ctx["rover"] = rover_name
        super().__init__(message=message, context=ctx)
        self.rover_name = rover_name


class UpstreamError(MarsPhotosError):
    """
    Raised when an upstream feed cannot be fetched or understood.

    When:    Connection refused, timeout, non-2xx status, body is not JSON,
             or the JSON does not match the feed's documented shape.
    HTTP:    500 Internal Server Error

    Security Note:
        The client only ever sees a generic message. Upstream URLs, status
        codes and payload excerpts go to `context` and the server log.
    """

    def __init__(
        self,
        message: str = "Failed to fetch data from the upstream photo feed.",
        source: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if source:
            ctx["source"] = source
        super().__init__(message=message, context=ctx)
        self.source = source
