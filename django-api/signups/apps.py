from django.apps import AppConfig


class SignupsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "signups"
    verbose_name = "Session sign-up sheets"
