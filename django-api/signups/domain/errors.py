"""Domain error codes for the signups module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SHEET_CLOSED = "SHEET_CLOSED"
    SHEET_FULL = "SHEET_FULL"
    SHEET_ALREADY_EXISTS = "SHEET_ALREADY_EXISTS"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """The referenced resource does not exist."""


class ConflictError(DomainError):
    """The operation is not allowed in the sheet's current state."""


class SessionNotFoundError(NotFoundError):
    """Raised when no sheet exists for a session."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_NOT_FOUND,
            message="Session not found",
        )
        object.__setattr__(self, "session_id", session_id)


class SheetClosedError(ConflictError):
    """Raised when signing up to or cancelling on a closed sheet."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            code=ErrorCode.SHEET_CLOSED,
            message="Sign-up sheet is closed",
        )
        object.__setattr__(self, "session_id", session_id)


class SheetFullError(ConflictError):
    """Raised when a new attendee signs up to a full sheet."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            code=ErrorCode.SHEET_FULL,
            message="Sign-up sheet is full",
        )
        object.__setattr__(self, "session_id", session_id)


class SheetAlreadyExistsError(ConflictError):
    """Raised when seeding a sheet for a session that already has one."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            code=ErrorCode.SHEET_ALREADY_EXISTS,
            message="Sign-up sheet already exists",
        )
        object.__setattr__(self, "session_id", session_id)


class InvalidIdentifierError(DomainError):
    """Raised when a session or attendee identifier is blank."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_IDENTIFIER,
            message="Invalid identifier format",
        )


class SheetInvariantError(AssertionError):
    """A sheet was constructed in a shape its state does not allow.

    This is a programming error, not a client error, and is never mapped
    to a response.
    """
