"""Signup service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or raise domain errors

Writes go through the transactor with a decision function that only looks at
the sheet it is given. Reads take a snapshot straight from the book.
"""

import logging

from signups.domain import (
    AttendeeId,
    AvailableSheet,
    Capacity,
    ClosedSheet,
    FullSheet,
    SessionId,
    SheetState,
    open_sheet,
)
from signups.domain.errors import (
    DomainError,
    InvalidIdentifierError,
    SessionNotFoundError,
    SheetClosedError,
    SheetFullError,
)
from signups.stores.interfaces import Decision, SignupBook, Transactor

logger = logging.getLogger(__name__)


def _parse_session_id(value: str) -> SessionId:
    try:
        return SessionId.from_string(value)
    except ValueError as exc:
        raise InvalidIdentifierError() from exc


def _parse_attendee_id(value: str) -> AttendeeId:
    try:
        return AttendeeId.from_string(value)
    except ValueError as exc:
        raise InvalidIdentifierError() from exc


class SignupService:
    """Service for sign-up sheet operations."""

    def __init__(self, book: SignupBook, transactor: Transactor) -> None:
        self._book = book
        self._transactor = transactor

    def open_sheet(self, session_id: str, capacity: int) -> SheetState:
        """Seed an empty sheet for a session.

        Raises:
            InvalidIdentifierError: If the session_id is blank.
            ValueError: If the capacity is negative.
            SheetAlreadyExistsError: If the session already has a sheet.
        """
        sheet = open_sheet(_parse_session_id(session_id), Capacity(capacity))
        self._book.seed(sheet)
        logger.info("Opened sheet for session %s with capacity %d", sheet.session_id, capacity)
        return sheet

    def sign_up(self, session_id: str, attendee_id: str) -> SheetState:
        """Add an attendee to a session's sheet.

        Signing up an attendee who is already on the sheet changes nothing.

        Raises:
            SessionNotFoundError: If the session has no sheet.
            SheetClosedError: If the sheet is closed.
            SheetFullError: If the sheet is full and the attendee is not on it.
        """
        sid = _parse_session_id(session_id)
        attendee = _parse_attendee_id(attendee_id)

        def decide(sheet: SheetState | None) -> SheetState:
            match sheet:
                case None:
                    raise SessionNotFoundError(sid.value)
                case ClosedSheet():
                    raise SheetClosedError(sid.value)
                case FullSheet() if attendee in sheet.signups:
                    return sheet
                case FullSheet():
                    raise SheetFullError(sid.value)
                case AvailableSheet():
                    return sheet.sign_up(attendee)

        return self._apply("sign_up", sid, decide)

    def cancel_sign_up(self, session_id: str, attendee_id: str) -> SheetState:
        """Remove an attendee from a session's sheet, if present.

        Raises:
            SessionNotFoundError: If the session has no sheet.
            SheetClosedError: If the sheet is closed.
        """
        sid = _parse_session_id(session_id)
        attendee = _parse_attendee_id(attendee_id)

        def decide(sheet: SheetState | None) -> SheetState:
            match sheet:
                case None:
                    raise SessionNotFoundError(sid.value)
                case ClosedSheet():
                    raise SheetClosedError(sid.value)
                case AvailableSheet() | FullSheet():
                    return sheet.cancel_sign_up(attendee)

        return self._apply("cancel_sign_up", sid, decide)

    def close(self, session_id: str) -> SheetState:
        """Close a session's sheet. Closing a closed sheet changes nothing.

        Raises:
            SessionNotFoundError: If the session has no sheet.
        """
        sid = _parse_session_id(session_id)

        def decide(sheet: SheetState | None) -> SheetState:
            match sheet:
                case None:
                    raise SessionNotFoundError(sid.value)
                case ClosedSheet():
                    return sheet
                case AvailableSheet() | FullSheet():
                    return sheet.close()

        return self._apply("close", sid, decide)

    def get_sheet(self, session_id: str) -> SheetState:
        """Return a snapshot of a session's sheet.

        Raises:
            SessionNotFoundError: If the session has no sheet.
        """
        sid = _parse_session_id(session_id)
        sheet = self._book.get(sid)
        if sheet is None:
            raise SessionNotFoundError(sid.value)
        return sheet

    def list_signups(self, session_id: str) -> frozenset[AttendeeId]:
        """Return the attendees signed up to a session."""
        return self.get_sheet(session_id).signups

    def is_full(self, session_id: str) -> bool:
        return self.get_sheet(session_id).is_full

    def is_closed(self, session_id: str) -> bool:
        return self.get_sheet(session_id).is_closed

    def _apply(self, operation: str, session_id: SessionId, decide: Decision) -> SheetState:
        try:
            sheet = self._transactor.perform(session_id, decide)
        except DomainError as exc:
            logger.info("%s rejected for session %s: %s", operation, session_id, exc.code.value)
            raise
        logger.info(
            "%s applied to session %s: %s with %d/%d signups",
            operation,
            session_id,
            type(sheet).__name__,
            len(sheet.signups),
            sheet.capacity.value,
        )
        return sheet
