"""
Custom exceptions for igmobile.

The public client never raises these for remote conditions: they are
converted into a failed Result at the operation boundary. PreconditionError
is the exception: it signals caller misuse and escapes the public call.
"""
from typing import Optional


class IgException(Exception):
    """Base exception for all igmobile errors."""

    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            error_code: Numeric error code (HTTP status, if available)
        """
        self.error_code = error_code
        super().__init__(message)


class PreconditionError(IgException):
    """Raised before any network call when the client is misused.

    Examples: credentials missing, operation requires an authenticated
    session but login has not succeeded.
    """
    pass


class InvalidArgumentError(IgException, ValueError):
    """Raised when an argument cannot be used (empty payload to sign, etc)."""
    pass


class TransportError(IgException):
    """Connection level failure (DNS, reset, timeout)."""
    pass


class UnexpectedStatusError(IgException):
    """Server answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str, message: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            status_code: HTTP status code
            body: Raw response body
            message: Optional message (defaults to status + body excerpt)
        """
        self.status_code = status_code
        self.body = body
        super().__init__(
            message or f"Unexpected response status: {status_code}",
            error_code=status_code
        )


class ProtocolError(IgException):
    """Well-formed response that lacks fields the protocol requires."""
    pass


class DecodeError(ProtocolError):
    """Response body could not be decoded into the expected shape."""

    def __init__(self, message: str, body: str = '') -> None:
        self.body = body
        super().__init__(message)


class SessionLockedError(IgException):
    """Attempt to rewrite session tokens outside login/logout."""
    pass
