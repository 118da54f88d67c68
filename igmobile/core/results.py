"""
Tagged result type returned by every public operation.

A Result is one of:
- success with a value,
- degraded success (PARTIAL) with a value and an explanatory message,
- failure carrying the kind of failure plus diagnostics (status, raw body).
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from .exceptions import (
    IgException,
    PreconditionError,
    InvalidArgumentError,
    TransportError,
    UnexpectedStatusError,
    ProtocolError,
)

T = TypeVar('T')
U = TypeVar('U')


class ResultKind(str, Enum):
    """Outcome categories."""
    OK = 'ok'
    PARTIAL = 'partial'
    PRECONDITION = 'precondition'
    INVALID_ARGUMENT = 'invalid_argument'
    TRANSPORT = 'transport'
    UNEXPECTED_STATUS = 'unexpected_status'
    PROTOCOL = 'protocol'


@dataclass(frozen=True)
class ResultInfo:
    """
    Diagnostics attached to a result.

    Attributes:
        message: Human readable message (empty on plain success)
        kind: Outcome category
        status_code: HTTP status when the failure came from a response
        body: Raw response body when available
        exception: Exception that produced the failure, if any
    """
    message: str = ''
    kind: ResultKind = ResultKind.OK
    status_code: Optional[int] = None
    body: Optional[str] = None
    exception: Optional[BaseException] = None


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Value-or-failure container.

    Example:
        >>> result = await client.fetch_followers("someone", max_pages=3)
        >>> if result.succeeded:
        ...     for user in result.value.items:
        ...         print(user.username)
        ...     if result.is_partial:
        ...         print(result.message)
    """
    succeeded: bool
    value: Optional[T] = None
    info: ResultInfo = field(default_factory=ResultInfo)

    @property
    def kind(self) -> ResultKind:
        return self.info.kind

    @property
    def message(self) -> str:
        return self.info.message

    @property
    def is_partial(self) -> bool:
        """True for a degraded success."""
        return self.succeeded and self.info.kind == ResultKind.PARTIAL

    @classmethod
    def success(cls, value: T) -> 'Result[T]':
        return cls(True, value, ResultInfo())

    @classmethod
    def partial(cls, value: T, message: str) -> 'Result[T]':
        """Degraded success: less data than requested, plus a note."""
        return cls(True, value, ResultInfo(message=message, kind=ResultKind.PARTIAL))

    @classmethod
    def fail(
        cls,
        message: str,
        kind: ResultKind = ResultKind.PROTOCOL,
        value: Optional[T] = None,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        exception: Optional[BaseException] = None
    ) -> 'Result[T]':
        return cls(False, value, ResultInfo(
            message=message,
            kind=kind,
            status_code=status_code,
            body=body,
            exception=exception
        ))

    @classmethod
    def unexpected_response(cls, status_code: int, body: str) -> 'Result[T]':
        """Failure for a non-success HTTP status; keeps the raw body."""
        return cls.from_exception(UnexpectedStatusError(status_code, body))

    @classmethod
    def from_exception(cls, exc: BaseException) -> 'Result[T]':
        """Convert an exception raised inside a helper into a failure."""
        if isinstance(exc, UnexpectedStatusError):
            return cls.fail(
                str(exc),
                kind=ResultKind.UNEXPECTED_STATUS,
                status_code=exc.status_code,
                body=exc.body,
                exception=exc
            )
        if isinstance(exc, PreconditionError):
            kind = ResultKind.PRECONDITION
        elif isinstance(exc, InvalidArgumentError):
            kind = ResultKind.INVALID_ARGUMENT
        elif isinstance(exc, TransportError):
            kind = ResultKind.TRANSPORT
        elif isinstance(exc, ProtocolError):
            kind = ResultKind.PROTOCOL
        elif isinstance(exc, ValueError):
            kind = ResultKind.INVALID_ARGUMENT
        else:
            kind = ResultKind.PROTOCOL
        body = getattr(exc, 'body', None)
        return cls.fail(str(exc) or type(exc).__name__, kind=kind, body=body, exception=exc)

    def forward(self) -> 'Result[Any]':
        """Re-type a failure so it can be returned from a caller with another T."""
        return Result(self.succeeded, None, self.info)

    def map(self, func: Callable[[T], U]) -> 'Result[U]':
        """Apply func to the value of a successful result."""
        if not self.succeeded:
            return Result(False, None, self.info)
        return Result(True, func(self.value), self.info)

    def unwrap(self) -> T:
        """
        Return the value or raise.

        Raises:
            IgException: (or the original exception) when the result failed
        """
        if self.succeeded:
            return self.value
        if isinstance(self.info.exception, IgException):
            raise self.info.exception
        raise IgException(self.info.message, error_code=self.info.status_code)

    def __bool__(self) -> bool:
        return self.succeeded
