"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from signups.dependencies import get_signup_service
from signups.domain.errors import (
    ConflictError,
    DomainError,
    InvalidIdentifierError,
    NotFoundError,
)
from signups.handlers.renderers import PlainTextRenderer, render_flag, render_signups
from signups.services import SignupService

ERROR_STATUS = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InvalidIdentifierError, status.HTTP_400_BAD_REQUEST),
)


def status_for(error: DomainError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


class SignupAPIView(APIView):
    """Base handler: plain-text bodies and domain error mapping."""

    renderer_classes = [PlainTextRenderer]

    @property
    def service(self) -> SignupService:
        return get_signup_service()

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DomainError):
            return Response(exc.message, status=status_for(exc))
        return super().handle_exception(exc)


class SignupView(SignupAPIView):
    """Handler for POST/DELETE /sessions/{session_id}/signups/{attendee_id}"""

    def post(self, request: Request, session_id: str, attendee_id: str) -> Response:
        self.service.sign_up(session_id, attendee_id)
        return Response(status=status.HTTP_200_OK)

    def delete(self, request: Request, session_id: str, attendee_id: str) -> Response:
        self.service.cancel_sign_up(session_id, attendee_id)
        return Response(status=status.HTTP_200_OK)


class SignupListView(SignupAPIView):
    """Handler for GET /sessions/{session_id}/signups"""

    def get(self, request: Request, session_id: str) -> Response:
        return Response(render_signups(self.service.list_signups(session_id)))


class FullView(SignupAPIView):
    """Handler for GET /sessions/{session_id}/full"""

    def get(self, request: Request, session_id: str) -> Response:
        return Response(render_flag(self.service.is_full(session_id)))


class ClosedView(SignupAPIView):
    """Handler for GET/POST /sessions/{session_id}/closed"""

    def get(self, request: Request, session_id: str) -> Response:
        return Response(render_flag(self.service.is_closed(session_id)))

    def post(self, request: Request, session_id: str) -> Response:
        self.service.close(session_id)
        return Response(status=status.HTTP_200_OK)
