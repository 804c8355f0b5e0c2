from signups.handlers.views import ClosedView, FullView, SignupListView, SignupView

__all__ = ["SignupView", "SignupListView", "FullView", "ClosedView"]
