"""Domain models representing the state of a sign-up sheet.

A sheet is always exactly one of AvailableSheet, FullSheet or ClosedSheet.
Each transition returns a new immutable value; an operation is only defined
on the states whose class declares it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from signups.domain.errors import SheetInvariantError
from signups.domain.value_objects import AttendeeId, Capacity, SessionId


@dataclass(frozen=True)
class _Sheet(ABC):
    session_id: SessionId
    capacity: Capacity
    signups: frozenset[AttendeeId] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.signups, frozenset):
            object.__setattr__(self, "signups", frozenset(self.signups))
        self._check_invariant()

    @abstractmethod
    def _check_invariant(self) -> None:
        """Raise SheetInvariantError if the signups do not fit this state."""

    def _invariant_error(self, expected: str) -> SheetInvariantError:
        return SheetInvariantError(
            f"{type(self).__name__} for session {self.session_id} expects {expected}, "
            f"got {len(self.signups)} signups with capacity {self.capacity.value}"
        )

    @property
    def is_full(self) -> bool:
        return False

    @property
    def is_closed(self) -> bool:
        return False


@dataclass(frozen=True)
class AvailableSheet(_Sheet):
    """Sheet with room for at least one more attendee."""

    def _check_invariant(self) -> None:
        if not len(self.signups) < self.capacity.value:
            raise self._invariant_error("fewer signups than capacity")

    def sign_up(self, attendee_id: AttendeeId) -> "AvailableSheet | FullSheet":
        if attendee_id in self.signups:
            return self
        signups = self.signups | {attendee_id}
        if len(signups) == self.capacity.value:
            return FullSheet(self.session_id, self.capacity, signups)
        return AvailableSheet(self.session_id, self.capacity, signups)

    def cancel_sign_up(self, attendee_id: AttendeeId) -> "AvailableSheet":
        if attendee_id not in self.signups:
            return self
        return AvailableSheet(self.session_id, self.capacity, self.signups - {attendee_id})

    def close(self) -> "ClosedSheet":
        return ClosedSheet(self.session_id, self.capacity, self.signups)


@dataclass(frozen=True)
class FullSheet(_Sheet):
    """Sheet whose signups have reached capacity."""

    def _check_invariant(self) -> None:
        if len(self.signups) != self.capacity.value:
            raise self._invariant_error("signups equal to capacity")

    @property
    def is_full(self) -> bool:
        return True

    def cancel_sign_up(self, attendee_id: AttendeeId) -> "AvailableSheet | FullSheet":
        if attendee_id not in self.signups:
            return self
        return AvailableSheet(self.session_id, self.capacity, self.signups - {attendee_id})

    def close(self) -> "ClosedSheet":
        return ClosedSheet(self.session_id, self.capacity, self.signups)


@dataclass(frozen=True)
class ClosedSheet(_Sheet):
    """Terminal sheet; its signups are frozen."""

    def _check_invariant(self) -> None:
        if len(self.signups) > self.capacity.value:
            raise self._invariant_error("no more signups than capacity")

    @property
    def is_closed(self) -> bool:
        return True


SheetState = AvailableSheet | FullSheet | ClosedSheet


def open_sheet(session_id: SessionId, capacity: Capacity) -> AvailableSheet | FullSheet:
    """Return a new, empty sheet for a session."""
    if capacity.value == 0:
        return FullSheet(session_id, capacity)
    return AvailableSheet(session_id, capacity)
