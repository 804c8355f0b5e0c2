"""Pytest configuration and shared fixtures."""

import uuid

import pytest
from rest_framework.test import APIClient

from signups import dependencies
from signups.services import SignupService
from signups.stores import InMemorySignupBook, InMemoryTransactor


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def reset_dependencies():
    dependencies.reset()
    yield
    dependencies.reset()


@pytest.fixture
def session_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def book() -> InMemorySignupBook:
    return InMemorySignupBook()


@pytest.fixture
def service(book: InMemorySignupBook) -> SignupService:
    return SignupService(book, InMemoryTransactor(book))
