"""Domain error codes for the events workflow."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, List, Optional


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    FORBIDDEN = "FORBIDDEN"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    status_code: ClassVar[int] = 400

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when an input field is missing or malformed."""

    status_code = 400

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(code=ErrorCode.VALIDATION_FAILED, message=message)
        self.errors = errors or [message]

    @classmethod
    def from_errors(cls, errors: List[str]) -> "ValidationError":
        return cls(" • ".join(errors), errors)


class NotFoundError(DomainError):
    """Raised when an event is not found."""

    status_code = 404

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class CapacityExceededError(DomainError):
    """Raised when a registration arrives after the event filled up."""

    status_code = 409

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.CAPACITY_EXCEEDED,
            message="Event is full",
        )
        self.event_id = event_id


class ForbiddenError(DomainError):
    """Raised when the caller may not perform the requested mutation."""

    status_code = 403

    def __init__(self, message: str = "Not allowed") -> None:
        super().__init__(code=ErrorCode.FORBIDDEN, message=message)
