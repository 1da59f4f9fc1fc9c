"""
Typed failures raised by the catalog kernel.

Every failure names the operation that produced it and the subject
(course id or address) it concerns, so the message can be shown to an
end user verbatim. The HTTP layer maps ``kind`` to a status code.
"""

from enum import Enum
from typing import Optional, Union


class ErrorKind(str, Enum):
    """Failure categories."""
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    BANNED = "banned"
    INVALID_ARGUMENT = "invalid_argument"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    DUPLICATE = "duplicate"


Subject = Union[int, str, None]


class CatalogError(Exception):
    """Base class for all typed catalog failures."""

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT

    def __init__(
        self,
        message: str,
        *,
        operation: Optional[str] = None,
        subject: Subject = None,
    ):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.subject = subject

    def to_dict(self) -> dict:
        return {
            "detail": self.message,
            "kind": self.kind.value,
            "operation": self.operation,
            "subject": self.subject,
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} op={self.operation} subject={self.subject!r}: {self.message}>"


class NotFoundError(CatalogError):
    """Course id or address absent, or a query/bulk operation matched nothing."""
    kind = ErrorKind.NOT_FOUND


class UnauthorizedError(CatalogError):
    """Caller lacks the required role or ownership."""
    kind = ErrorKind.UNAUTHORIZED


class BannedError(UnauthorizedError):
    """Caller is on the banned list and may not create courses."""
    kind = ErrorKind.BANNED


class InvalidArgumentError(CatalogError):
    """Empty required field or empty filter predicate."""
    kind = ErrorKind.INVALID_ARGUMENT


class CapacityExceededError(CatalogError):
    """Moderator set is full."""
    kind = ErrorKind.CAPACITY_EXCEEDED


class DuplicateError(CatalogError):
    """Moderator already present."""
    kind = ErrorKind.DUPLICATE


class IdentifierSpaceExhausted(RuntimeError):
    """The course id counter reached the end of the 64-bit range. Fatal."""
