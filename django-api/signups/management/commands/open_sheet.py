from django.core.management.base import BaseCommand, CommandError

from signups.dependencies import get_signup_service
from signups.domain.errors import DomainError


class Command(BaseCommand):
    help = "Open an empty sign-up sheet for a session."

    def add_arguments(self, parser) -> None:
        parser.add_argument("session_id")
        parser.add_argument("capacity", type=int)

    def handle(self, *args, session_id: str, capacity: int, **options) -> None:
        try:
            sheet = get_signup_service().open_sheet(session_id, capacity)
        except DomainError as exc:
            raise CommandError(exc.message) from exc
        except ValueError as exc:
            raise CommandError(str(exc)) from exc
        self.stdout.write(
            self.style.SUCCESS(f"Opened sheet for {sheet.session_id} with capacity {capacity}")
        )
