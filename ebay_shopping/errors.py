"""
Errors — Failure taxonomy for Shopping API calls.

Only transport and (de)serialization problems are raised. Business-level errors
(invalid category, malformed query, ...) come back inside an HTTP 200 response
and are exposed on the response envelope's ``errors`` list instead.

    ShoppingAPIError
    ├── SerializationFailed   request could not be built / response could not be parsed
    ├── TransportFailed       HTTP call did not complete (DNS, refused, timeout, ...)
    └── RemoteCallFailed      HTTP call completed with a non-200 status

Nothing here is retried; every failure propagates straight to the caller.
"""

from typing import Optional


class ShoppingAPIError(Exception):
    """Base exception for all Shopping API client failures."""

    def __init__(self, message: str, operation: str = ""):
        self.message = message
        self.operation = operation
        super().__init__(self.message)


class SerializationFailed(ShoppingAPIError):
    """Request body could not be marshalled or response body could not be parsed."""

    def __init__(self, message: str, operation: str = "", cause: Optional[Exception] = None):
        super().__init__(message, operation)
        self.cause = cause


class TransportFailed(ShoppingAPIError):
    """The underlying HTTP call could not be completed."""

    def __init__(self, message: str, operation: str = "", cause: Optional[Exception] = None):
        super().__init__(message, operation)
        self.cause = cause


class RemoteCallFailed(ShoppingAPIError):
    """The HTTP call completed but the server answered with a non-200 status.

    Attributes:
        status_code: The HTTP status code returned by the server.
        body: The raw response body text, kept for caller inspection.
    """

    def __init__(self, status_code: int, body: str, operation: str = ""):
        super().__init__(f"HTTP {status_code} from Shopping API", operation)
        self.status_code = status_code
        self.body = body
