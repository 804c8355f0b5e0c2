"""Tests for the SignupBook and Transactor implementations.

Run with: pytest tests/test_stores.py -v
"""

import threading
import time

import pytest
from django.db import connection

from signups import models
from signups.domain import (
    AttendeeId,
    AvailableSheet,
    Capacity,
    ClosedSheet,
    FullSheet,
    SessionId,
    open_sheet,
)
from signups.domain.errors import (
    SessionNotFoundError,
    SheetAlreadyExistsError,
    SheetFullError,
)
from signups.services import SignupService
from signups.stores import InMemorySignupBook, InMemoryTransactor
from signups.stores.django_store import DjangoSignupBook, DjangoTransactor

SESSION = SessionId("craft-2025")
OTHER_SESSION = SessionId("craft-2026")
alice = AttendeeId("alice")
bob = AttendeeId("bob")


class Boom(Exception):
    pass


class TestInMemorySignupBook:
    """Tests for InMemorySignupBook."""

    def test_get_unknown_session_returns_none(self, book):
        assert book.get(SESSION) is None

    def test_save_replaces_sheet(self, book):
        first = open_sheet(SESSION, Capacity(3))
        second = first.sign_up(alice)

        book.save(first)
        book.save(second)

        assert book.get(SESSION) is second

    def test_seed_refuses_existing_session(self, book):
        book.seed(open_sheet(SESSION, Capacity(3)))

        with pytest.raises(SheetAlreadyExistsError):
            book.seed(open_sheet(SESSION, Capacity(5)))

        assert book.get(SESSION).capacity == Capacity(3)

    def test_concurrent_seeds_keep_the_first_sheet(self, book):
        """Exactly one of many simultaneous seeds wins; none overwrites it."""
        start = threading.Barrier(20)
        seeded = []
        refused = []

        def attempt(n: int) -> None:
            sheet = open_sheet(SESSION, Capacity(n + 1))
            start.wait()
            try:
                book.seed(sheet)
                seeded.append(sheet)
            except SheetAlreadyExistsError:
                refused.append(n)

        threads = [threading.Thread(target=attempt, args=(n,)) for n in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(seeded) == 1
        assert len(refused) == 19
        assert book.get(SESSION) is seeded[0]


class TestInMemoryTransactor:
    """Tests for InMemoryTransactor."""

    def test_perform_persists_decision(self, book):
        book.seed(open_sheet(SESSION, Capacity(3)))
        transactor = InMemoryTransactor(book)

        result = transactor.perform(SESSION, lambda sheet: sheet.sign_up(alice))

        assert book.get(SESSION) is result
        assert result.signups == {alice}

    def test_perform_passes_none_for_unknown_session(self, book):
        seen = []

        def decide(sheet):
            seen.append(sheet)
            raise SessionNotFoundError(SESSION.value)

        with pytest.raises(SessionNotFoundError):
            InMemoryTransactor(book).perform(SESSION, decide)

        assert seen == [None]
        assert book.get(SESSION) is None

    def test_failed_decision_writes_nothing_and_releases_lock(self, book):
        original = open_sheet(SESSION, Capacity(3))
        book.seed(original)
        transactor = InMemoryTransactor(book)

        def decide(sheet):
            raise Boom()

        with pytest.raises(Boom):
            transactor.perform(SESSION, decide)

        assert book.get(SESSION) is original
        result = transactor.perform(SESSION, lambda sheet: sheet.sign_up(bob))
        assert result.signups == {bob}

    def test_unchanged_sheet_is_not_saved(self):
        saves = []

        class RecordingBook(InMemorySignupBook):
            def save(self, sheet):
                saves.append(sheet)
                super().save(sheet)

        book = RecordingBook()
        book.seed(open_sheet(SESSION, Capacity(3)))
        saves.clear()

        InMemoryTransactor(book).perform(SESSION, lambda sheet: sheet)

        assert saves == []

    def test_other_sessions_are_not_blocked(self, book):
        """A transaction in flight on one session does not block another."""
        book.seed(open_sheet(SESSION, Capacity(3)))
        book.seed(open_sheet(OTHER_SESSION, Capacity(3)))
        transactor = InMemoryTransactor(book)
        entered = threading.Event()
        release = threading.Event()

        def slow(sheet):
            entered.set()
            release.wait(timeout=5)
            return sheet.sign_up(alice)

        worker = threading.Thread(target=transactor.perform, args=(SESSION, slow))
        worker.start()
        try:
            assert entered.wait(timeout=5)
            other = transactor.perform(OTHER_SESSION, lambda sheet: sheet.sign_up(bob))
            assert other.signups == {bob}
            assert book.get(SESSION).signups == frozenset()
        finally:
            release.set()
            worker.join()

        assert book.get(SESSION).signups == {alice}

    def test_same_session_waits_for_lock(self, book):
        book.seed(open_sheet(SESSION, Capacity(3)))
        transactor = InMemoryTransactor(book)
        entered = threading.Event()
        release = threading.Event()
        seen = []

        def slow(sheet):
            entered.set()
            release.wait(timeout=5)
            return sheet.sign_up(alice)

        def second(sheet):
            seen.append(sheet)
            return sheet.sign_up(bob)

        first_worker = threading.Thread(target=transactor.perform, args=(SESSION, slow))
        first_worker.start()
        assert entered.wait(timeout=5)
        second_worker = threading.Thread(target=transactor.perform, args=(SESSION, second))
        second_worker.start()
        release.set()
        first_worker.join()
        second_worker.join()

        assert seen[0].signups == {alice}
        assert book.get(SESSION).signups == {alice, bob}


@pytest.mark.django_db
class TestDjangoSignupBook:
    """Tests for DjangoSignupBook."""

    def test_get_unknown_session_returns_none(self):
        assert DjangoSignupBook().get(SESSION) is None

    def test_round_trips_each_state(self):
        book = DjangoSignupBook()
        available = open_sheet(SESSION, Capacity(2)).sign_up(alice)
        book.save(available)
        assert book.get(SESSION) == available

        full = available.sign_up(bob)
        book.save(full)
        assert isinstance(book.get(SESSION), FullSheet)
        assert book.get(SESSION) == full

        closed = available.close()
        book.save(closed)
        assert isinstance(book.get(SESSION), ClosedSheet)
        assert book.get(SESSION) == closed

    def test_save_replaces_row(self):
        book = DjangoSignupBook()
        book.save(open_sheet(SESSION, Capacity(3)).sign_up(alice))
        book.save(open_sheet(SESSION, Capacity(3)).sign_up(bob))

        record = models.SignupSheet.objects.get(session_id=SESSION.value)
        assert record.signups == ["bob"]
        assert models.SignupSheet.objects.count() == 1

    def test_seed_refuses_existing_session(self):
        book = DjangoSignupBook()
        book.seed(open_sheet(SESSION, Capacity(3)))

        with pytest.raises(SheetAlreadyExistsError):
            book.seed(open_sheet(SESSION, Capacity(5)))

        assert book.get(SESSION).capacity == Capacity(3)

    def test_seed_does_not_overwrite_a_concurrently_written_row(self):
        """A row written by another writer after any check is never replaced."""
        book = DjangoSignupBook()
        book.save(open_sheet(SESSION, Capacity(3)).sign_up(alice))

        with pytest.raises(SheetAlreadyExistsError):
            book.seed(open_sheet(SESSION, Capacity(7)))

        assert book.get(SESSION) == open_sheet(SESSION, Capacity(3)).sign_up(alice)


@pytest.mark.django_db
class TestDjangoTransactor:
    """Tests for DjangoTransactor."""

    def test_perform_persists_decision(self):
        book = DjangoSignupBook()
        book.seed(open_sheet(SESSION, Capacity(3)))

        result = DjangoTransactor(book).perform(SESSION, lambda sheet: sheet.sign_up(alice))

        assert isinstance(result, AvailableSheet)
        assert book.get(SESSION) == result

    def test_failed_decision_rolls_back(self):
        book = DjangoSignupBook()
        book.seed(open_sheet(SESSION, Capacity(3)))

        def decide(sheet):
            book.save(sheet.sign_up(alice))
            raise Boom()

        with pytest.raises(Boom):
            DjangoTransactor(book).perform(SESSION, decide)

        assert book.get(SESSION).signups == frozenset()


@pytest.mark.django_db(transaction=True)
class TestDjangoConcurrency:
    """Concurrent writers against the database backend queue up instead of failing."""

    def run_threads(self, count: int, target) -> None:
        start = threading.Barrier(count)

        def run(n: int) -> None:
            try:
                start.wait()
                target(n)
            finally:
                connection.close()

        threads = [threading.Thread(target=run, args=(n,)) for n in range(count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    def test_concurrent_sign_ups_all_complete(self):
        """Every valid request gets a domain answer; none crashes on a locked database."""
        book = DjangoSignupBook()
        service = SignupService(book, DjangoTransactor(book))
        service.open_sheet(SESSION.value, 5)
        outcomes = []

        def attempt(n: int) -> None:
            try:
                service.sign_up(SESSION.value, f"attendee-{n}")
                outcomes.append("ok")
            except SheetFullError:
                outcomes.append("full")

        self.run_threads(20, attempt)

        assert sorted(outcomes) == ["full"] * 15 + ["ok"] * 5
        assert len(service.list_signups(SESSION.value)) == 5
        assert service.is_full(SESSION.value)

    def test_decisions_on_one_session_never_overlap(self):
        book = DjangoSignupBook()
        book.seed(open_sheet(SESSION, Capacity(20)))
        transactor = DjangoTransactor(book)
        guard = threading.Lock()
        active = []
        overlaps = []

        def attempt(n: int) -> None:
            def decide(sheet):
                with guard:
                    active.append(n)
                    overlaps.append(len(active))
                time.sleep(0.01)
                with guard:
                    active.remove(n)
                return sheet.sign_up(AttendeeId(f"attendee-{n}"))

            transactor.perform(SESSION, decide)

        self.run_threads(10, attempt)

        assert max(overlaps) == 1
        assert len(book.get(SESSION).signups) == 10

    def test_concurrent_seeds_keep_the_first_sheet(self):
        book = DjangoSignupBook()
        seeded = []
        refused = []

        def attempt(n: int) -> None:
            try:
                book.seed(open_sheet(SESSION, Capacity(n + 1)))
                seeded.append(n)
            except SheetAlreadyExistsError:
                refused.append(n)

        self.run_threads(10, attempt)

        assert len(seeded) == 1
        assert len(refused) == 9
        assert book.get(SESSION).capacity == Capacity(seeded[0] + 1)
