from django.urls import path

from signups.handlers import ClosedView, FullView, SignupListView, SignupView

urlpatterns = [
    path(
        "sessions/<str:session_id>/signups",
        SignupListView.as_view(),
        name="signup-list",
    ),
    path(
        "sessions/<str:session_id>/signups/<str:attendee_id>",
        SignupView.as_view(),
        name="signup",
    ),
    path("sessions/<str:session_id>/full", FullView.as_view(), name="session-full"),
    path("sessions/<str:session_id>/closed", ClosedView.as_view(), name="session-closed"),
]
