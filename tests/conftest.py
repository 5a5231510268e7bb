"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory registrant stores
- Test client setup against the real application
"""

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from src.adapters.repository.memory import InMemoryRegistrantStore
from src.api.main import app as application
from src.config.settings import Settings, get_settings


@pytest.fixture
def store() -> InMemoryRegistrantStore:
    """Fresh email-unique in-memory store."""
    return InMemoryRegistrantStore()


@pytest.fixture
def client(store: InMemoryRegistrantStore) -> Generator[TestClient, None, None]:
    """
    Test client for the application, backed by the in-memory store.

    The lifespan is not run, so no database connection is opened.
    """
    application.state.store = store
    yield TestClient(application)
    application.dependency_overrides.clear()


@pytest.fixture
def phone_unique_client() -> Generator[tuple[TestClient, InMemoryRegistrantStore], None, None]:
    """Test client with phone uniqueness enabled at both service and store level."""
    store = InMemoryRegistrantStore(unique_phone=True)
    application.state.store = store
    application.dependency_overrides[get_settings] = lambda: Settings(unique_phone=True)
    yield TestClient(application), store
    application.dependency_overrides.clear()


@pytest.fixture
def make_body() -> Callable[..., dict[str, str]]:
    """Factory for a valid registration body, optionally with some fields replaced."""

    def _make(**overrides: str) -> dict[str, str]:
        body = {
            "firstName": "Ann",
            "lastName": "Lee",
            "email": "Ann.Lee@gmail.com",
            "phone": "5551234567",
        }
        body.update(overrides)
        return body

    return _make
