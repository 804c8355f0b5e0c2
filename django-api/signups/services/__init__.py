from signups.services.signup_service import SignupService

__all__ = ["SignupService"]
