"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

from django.db import models


class SignupSheet(models.Model):
    """Persistence model for a session's sign-up sheet."""

    session_id = models.CharField(primary_key=True, max_length=255)
    capacity = models.PositiveIntegerField()
    closed = models.BooleanField(default=False)
    signups = models.JSONField(default=list)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["session_id"]

    def __str__(self) -> str:
        return f"{self.session_id} ({len(self.signups)}/{self.capacity})"
