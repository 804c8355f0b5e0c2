"""Builds the configured store and service instances.

The book and transactor classes come from the SIGNUPS_BOOK and
SIGNUPS_TRANSACTOR settings and are created once per process.
"""

from functools import cache

from django.conf import settings
from django.utils.module_loading import import_string

from signups.services import SignupService
from signups.stores import SignupBook, Transactor


@cache
def get_signup_book() -> SignupBook:
    return import_string(settings.SIGNUPS_BOOK)()


@cache
def get_transactor() -> Transactor:
    return import_string(settings.SIGNUPS_TRANSACTOR)(get_signup_book())


def get_signup_service() -> SignupService:
    return SignupService(get_signup_book(), get_transactor())


def reset() -> None:
    """Drop the cached instances so the next call rebuilds them from settings."""
    get_transactor.cache_clear()
    get_signup_book.cache_clear()
