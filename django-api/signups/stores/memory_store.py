"""In-memory implementation of the SignupBook and Transactor."""

import logging
import threading

from signups.domain import SessionId, SheetState
from signups.domain.errors import SheetAlreadyExistsError
from signups.stores.interfaces import Decision, SignupBook, Transactor

logger = logging.getLogger(__name__)


class InMemorySignupBook(SignupBook):
    """Process-local book holding the latest immutable sheet per session."""

    def __init__(self) -> None:
        self._sheets: dict[SessionId, SheetState] = {}

    def get(self, session_id: SessionId) -> SheetState | None:
        return self._sheets.get(session_id)

    def save(self, sheet: SheetState) -> None:
        self._sheets[sheet.session_id] = sheet

    def seed(self, sheet: SheetState) -> None:
        if self._sheets.setdefault(sheet.session_id, sheet) is not sheet:
            raise SheetAlreadyExistsError(sheet.session_id.value)


class InMemoryTransactor(Transactor):
    """Serializes transactions with one lock per session.

    Locks are created on first use and kept for the life of the transactor.
    """

    def __init__(self, book: SignupBook) -> None:
        super().__init__(book)
        self._locks: dict[SessionId, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, session_id: SessionId) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(session_id)
            if lock is None:
                logger.debug("Creating transaction lock for session %s", session_id)
                lock = self._locks[session_id] = threading.Lock()
            return lock

    def perform(self, session_id: SessionId, decide: Decision) -> SheetState:
        with self._lock_for(session_id):
            current = self._book.get(session_id)
            updated = decide(current)
            if updated is not current:
                self._book.save(updated)
            return updated
