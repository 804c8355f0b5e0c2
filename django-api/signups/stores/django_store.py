"""Django ORM implementation of the SignupBook and Transactor."""

from django.db import IntegrityError, transaction

from signups import models
from signups.domain import (
    AttendeeId,
    AvailableSheet,
    Capacity,
    ClosedSheet,
    FullSheet,
    SessionId,
    SheetState,
)
from signups.domain.errors import SheetAlreadyExistsError
from signups.stores.interfaces import Decision, SignupBook, Transactor


def to_domain(record: models.SignupSheet) -> SheetState:
    """Rebuild the sheet variant stored in a row."""
    session_id = SessionId(record.session_id)
    capacity = Capacity(record.capacity)
    signups = frozenset(AttendeeId(value) for value in record.signups)
    if record.closed:
        return ClosedSheet(session_id, capacity, signups)
    if len(signups) == capacity.value:
        return FullSheet(session_id, capacity, signups)
    return AvailableSheet(session_id, capacity, signups)


class DjangoSignupBook(SignupBook):
    """Database-backed book using the SignupSheet model."""

    def get(self, session_id: SessionId) -> SheetState | None:
        record = models.SignupSheet.objects.filter(session_id=session_id.value).first()
        return to_domain(record) if record is not None else None

    def get_for_update(self, session_id: SessionId) -> SheetState | None:
        """Like get, but locks the row until the surrounding transaction ends."""
        record = (
            models.SignupSheet.objects.select_for_update()
            .filter(session_id=session_id.value)
            .first()
        )
        return to_domain(record) if record is not None else None

    def save(self, sheet: SheetState) -> None:
        models.SignupSheet.objects.update_or_create(
            session_id=sheet.session_id.value,
            defaults={
                "capacity": sheet.capacity.value,
                "closed": sheet.is_closed,
                "signups": sorted(attendee.value for attendee in sheet.signups),
            },
        )

    def seed(self, sheet: SheetState) -> None:
        try:
            with transaction.atomic():
                models.SignupSheet.objects.create(
                    session_id=sheet.session_id.value,
                    capacity=sheet.capacity.value,
                    closed=sheet.is_closed,
                    signups=sorted(attendee.value for attendee in sheet.signups),
                )
        except IntegrityError as exc:
            raise SheetAlreadyExistsError(sheet.session_id.value) from exc


class DjangoTransactor(Transactor):
    """Runs each decision inside a database transaction holding the sheet's row lock.

    SQLite has no row locks; there the IMMEDIATE transaction mode in settings
    serializes transactions on the whole database instead.
    """

    def __init__(self, book: DjangoSignupBook) -> None:
        super().__init__(book)

    def perform(self, session_id: SessionId, decide: Decision) -> SheetState:
        with transaction.atomic():
            current = self._book.get_for_update(session_id)
            updated = decide(current)
            if updated != current:
                self._book.save(updated)
            return updated
