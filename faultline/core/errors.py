"""Categorized error values raised inside a single process.

Every failure carries a symbolic code and a retry category. The category is
fixed when the value is built; only the transport mapper and the response
translator decide what it means for the outside world.
"""

from __future__ import annotations

import traceback
from enum import StrEnum
from typing import Final, Iterator

from faultline.transport.status import TransportStatus

_MAX_STACK_FRAMES: Final[int] = 64


class Category(StrEnum):
    """Retry classification of a failure."""

    BUSINESS_FAIL = "BusinessFail"
    BUSINESS_TEMPORARY = "BusinessTemporary"
    SYSTEM_TEMPORARY = "SystemTemporary"
    # Only produced when a peer sends a category this build does not know.
    UNCLASSIFIED = "Unclassified"

    @property
    def is_business(self) -> bool:
        return self in (Category.BUSINESS_FAIL, Category.BUSINESS_TEMPORARY)

    @property
    def retryable(self) -> bool:
        """Whether a retry policy may re-issue the failed call."""
        return self is not Category.BUSINESS_FAIL

    def resolve(self) -> "Category":
        """Return the category used for retry and rendering decisions."""
        if self is Category.UNCLASSIFIED:
            return Category.SYSTEM_TEMPORARY
        return self


class ErrorCode(StrEnum):
    """Well-known symbolic codes shared by every module."""

    INTERNAL = "ErrInternal"
    BUSINESS = "ErrBusiness"
    BAD_REQUEST = "ErrBadRequest"
    NOT_FOUND = "ErrNotFound"

    # Transport signals
    CANCELLED = "ErrCancelled"
    DEADLINE_EXCEEDED = "ErrDeadlineExceeded"
    UNAVAILABLE = "ErrUnavailable"


BAD_REQUEST_CODES: Final[frozenset[str]] = frozenset({ErrorCode.BAD_REQUEST})


def is_bad_request_code(code: str) -> bool:
    return code in BAD_REQUEST_CODES


class StackAnchor:
    """Flattened stack trace marking where a causal chain started."""

    __slots__ = ("_stack_trace",)

    def __init__(self, stack_trace: str) -> None:
        self._stack_trace = stack_trace

    @property
    def stack_trace(self) -> str:
        return self._stack_trace

    @classmethod
    def capture(cls) -> "StackAnchor":
        """Capture the current stack, excluding frames from this module."""
        frames = [frame for frame in traceback.extract_stack() if frame.filename != __file__]
        return cls("".join(traceback.format_list(frames[-_MAX_STACK_FRAMES:])))

    @classmethod
    def from_exception(cls, exc: BaseException) -> "StackAnchor | None":
        if exc.__traceback__ is None:
            return None
        frames = traceback.extract_tb(exc.__traceback__)
        return cls("".join(traceback.format_list(frames[-_MAX_STACK_FRAMES:])))


class LocalError(Exception):
    """Immutable, categorized error value.

    Wrapping never mutates the wrapped error: a new LocalError references the
    old one as its cause. The stack anchor is captured at most once per chain,
    at the innermost wrapping site, and shared by every outer wrapper.
    """

    def __init__(
        self,
        code: str,
        message: str,
        category: Category,
        cause: BaseException | None = None,
    ) -> None:
        if not code or not code.strip():
            raise ValueError("error code must be a non-empty string")
        resolved = Category(category)
        if resolved is Category.UNCLASSIFIED:
            raise ValueError("Unclassified is reserved for decoding unknown categories")
        super().__init__(code, message)
        self._code = code
        self._message = message
        self._category = resolved
        self._cause = cause
        self._origin = _resolve_origin(cause)
        if cause is not None:
            self.__cause__ = cause

    @property
    def code(self) -> str:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    @property
    def category(self) -> Category:
        return self._category

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    @property
    def origin(self) -> StackAnchor:
        return self._origin

    @property
    def stack_trace(self) -> str:
        return self._origin.stack_trace

    def cause_chain(self) -> tuple[BaseException, ...]:
        """Return every cause, nearest first and root cause last."""
        return tuple(_iter_causes(self))

    def __str__(self) -> str:
        rendered = f"code: {self._code}, cat: {self._category}, msg: {self._message}"
        if self._cause is not None:
            rendered = f"{rendered}, causedBy: {self._cause}"
        return rendered

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self._code!r}, "
            f"category={self._category.value!r}, message={self._message!r})"
        )


def _resolve_origin(cause: BaseException | None) -> StackAnchor:
    if isinstance(cause, LocalError):
        return cause.origin
    if cause is not None:
        anchor = StackAnchor.from_exception(cause)
        if anchor is not None:
            return anchor
    return StackAnchor.capture()


def _iter_causes(err: BaseException) -> Iterator[BaseException]:
    # deferred: wire_error imports this module
    from faultline.schemas.wire_error import RemoteError

    seen = {id(err)}
    current = err.cause if isinstance(err, LocalError) else err.__cause__
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if isinstance(current, (TransportStatus, RemoteError)):
            # the rest of the chain already travels inside the carried WireError
            return
        current = current.cause if isinstance(current, LocalError) else current.__cause__


def new_business_fail(cause: BaseException | None, code: str, message: str) -> LocalError:
    """Permanent failure caused by invalid domain state or input; never retried."""
    return LocalError(code, message, Category.BUSINESS_FAIL, cause)


def new_business_temporary(cause: BaseException | None, code: str, message: str) -> LocalError:
    """Transient business failure; safe to retry after backoff."""
    return LocalError(code, message, Category.BUSINESS_TEMPORARY, cause)


def new_system_temporary(cause: BaseException | None, code: str, message: str) -> LocalError:
    """Transient infrastructure failure; safe to retry."""
    return LocalError(code, message, Category.SYSTEM_TEMPORARY, cause)


__all__ = [
    "BAD_REQUEST_CODES",
    "Category",
    "ErrorCode",
    "LocalError",
    "StackAnchor",
    "is_bad_request_code",
    "new_business_fail",
    "new_business_temporary",
    "new_system_temporary",
]
