"""Renderers for transforming handler output to plain-text API responses."""

from collections.abc import Iterable

from rest_framework.renderers import BaseRenderer

from signups.domain import AttendeeId


class PlainTextRenderer(BaseRenderer):
    """Renders strings as-is and DRF error payloads as their detail text."""

    media_type = "text/plain"
    format = "txt"
    charset = "utf-8"

    def render(self, data, accepted_media_type=None, renderer_context=None) -> bytes:
        if data is None:
            return b""
        if isinstance(data, dict):
            data = data.get("detail", "")
        return str(data).encode(self.charset)


def render_signups(signups: Iterable[AttendeeId]) -> str:
    """One attendee id per line, sorted so responses are stable."""
    return "\n".join(sorted(attendee.value for attendee in signups))


def render_flag(value: bool) -> str:
    return "true" if value else "false"
