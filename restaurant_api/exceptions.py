"""
Restaurant API - Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the three failure categories.
Why:   Routes raise (or let services raise) typed errors; global handlers in
       main.py turn them into JSON responses with the right status code.
How:   Each exception carries a message and an optional context dict.

Exception Hierarchy:
    RestaurantAPIError (base)
    ├── ValidationError   → 400 Bad Request (full list of violated rules)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error (cause logged, not returned)
"""

from typing import Any, Dict, List, Optional


class RestaurantAPIError(Exception):
    """
    Base exception for all application errors.

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


class ValidationError(RestaurantAPIError):
    """
    Raised when client input violates one or more field rules.

    Unlike a single-field error, this carries every violation found so the
    client can fix all of them in one round trip.

    Each entry in `errors` has the shape:
        {"type": "field", "value": ..., "msg": "...", "path": "rating", "location": "body"}
    `value` is omitted when the field was not supplied.
    """

    def __init__(
        self,
        errors: List[Dict[str, Any]],
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["fields"] = [e.get("path") for e in errors]
        super().__init__(message=message, context=ctx)
        self.errors = errors


class NotFoundError(RestaurantAPIError):
    """
    Raised when no document matches the requested id.

    A normal outcome rather than a fault: the driver returns None or a zero
    count, and the service layer converts that into this exception.
    """

    def __init__(
        self,
        resource: str = "Restaurant",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(RestaurantAPIError):
    """
    Raised when the document store is unreachable or an operation fails.

    Security Note:
        The message returned to the client is always generic. The driver
        error is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
