"""Django settings for the sign-up sheet API.

Every value can be overridden through the environment.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name: str, default: bool = False) -> bool:
    return os.environ.get(name, str(default)).lower() in {"1", "true", "yes", "on"}


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "insecure-development-key")
DEBUG = env_bool("DJANGO_DEBUG")
ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "signups",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "config.urls"
APPEND_SLASH = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("SIGNUPS_DATABASE_PATH", str(BASE_DIR / "db.sqlite3")),
        # Take the write lock at BEGIN so concurrent transactions queue
        # instead of failing with "database is locked".
        "OPTIONS": {
            "transaction_mode": "IMMEDIATE",
            "timeout": 20,
        },
        "TEST": {
            "NAME": os.environ.get(
                "SIGNUPS_TEST_DATABASE_PATH", str(BASE_DIR / "test_db.sqlite3")
            ),
        },
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
USE_TZ = True
TIME_ZONE = "UTC"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
}

# Storage backend. Use signups.stores.django_store.DjangoSignupBook and
# signups.stores.django_store.DjangoTransactor to persist sheets in the database.
SIGNUPS_BOOK = os.environ.get("SIGNUPS_BOOK", "signups.stores.InMemorySignupBook")
SIGNUPS_TRANSACTOR = os.environ.get("SIGNUPS_TRANSACTOR", "signups.stores.InMemoryTransactor")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "signups": {
            "handlers": ["console"],
            "level": os.environ.get("SIGNUPS_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}
