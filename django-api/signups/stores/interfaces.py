"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from signups.domain import SessionId, SheetState

Decision = Callable[[SheetState | None], SheetState]


class SignupBook(ABC):
    """Interface for sign-up sheet persistence, keyed by session."""

    @abstractmethod
    def get(self, session_id: SessionId) -> SheetState | None:
        """Return the latest sheet for a session, or None if there is none."""
        ...

    @abstractmethod
    def save(self, sheet: SheetState) -> None:
        """Replace the stored sheet for ``sheet.session_id``."""
        ...

    @abstractmethod
    def seed(self, sheet: SheetState) -> None:
        """Store a sheet for a session that has none yet.

        The existence check and the write happen as one atomic step.

        Raises:
            SheetAlreadyExistsError: If the session already has a sheet.
        """
        ...


class Transactor(ABC):
    """Runs read-decide-write sequences against a book, one at a time per session."""

    def __init__(self, book: SignupBook) -> None:
        self._book = book

    @property
    def book(self) -> SignupBook:
        return self._book

    @abstractmethod
    def perform(self, session_id: SessionId, decide: Decision) -> SheetState:
        """Apply ``decide`` to the current sheet and persist its result.

        ``decide`` receives None when the session has no sheet. If it raises,
        the transaction is aborted and nothing is written. The exception
        propagates unchanged; no retry is attempted.
        """
        ...
