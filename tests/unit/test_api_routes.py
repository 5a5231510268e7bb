"""
Unit tests for API routes.

Tests endpoint responses with mocked dependencies.
"""

import logging
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_registration_service
from src.api.errors import install_error_handlers
from src.api.routes import router
from src.domain.exceptions import (
    DuplicateRegistrant,
    InvalidEmailDomain,
    InvalidPhone,
    MissingField,
)
from src.domain.ports import Registrant
from src.domain.registration import RegistrationService

BODY = {
    "firstName": "Ann",
    "lastName": "Lee",
    "email": "Ann.Lee@gmail.com",
    "phone": "5551234567",
}


@pytest.fixture
def mock_service() -> MagicMock:
    return MagicMock(spec=RegistrationService)


@pytest.fixture
def client(mock_service: MagicMock) -> TestClient:
    """Create test client with the router and a mocked service."""
    test_app = FastAPI()
    install_error_handlers(test_app)
    test_app.include_router(router, prefix="/api")
    test_app.dependency_overrides[get_registration_service] = lambda: mock_service
    return TestClient(test_app)


class TestRegisterSuccess:
    """Tests for the 201 path."""

    def test_register_success_returns_201(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        """Successful registration returns 201 with the created user."""
        mock_service.register.return_value = Registrant(
            id="abc123",
            first_name="Ann",
            last_name="Lee",
            email="ann.lee@gmail.com",
            phone="5551234567",
            created_at=datetime.now(timezone.utc),
        )

        response = client.post("/api/register", json=BODY)

        assert response.status_code == 201
        assert response.json() == {
            "message": "User registered successfully",
            "user": {
                "id": "abc123",
                "firstName": "Ann",
                "lastName": "Lee",
                "email": "ann.lee@gmail.com",
                "phone": "5551234567",
            },
        }
        mock_service.register.assert_called_once_with(
            "Ann", "Lee", "Ann.Lee@gmail.com", "5551234567"
        )

    def test_missing_keys_passed_as_none(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        """Absent keys reach the service as None."""
        mock_service.register.side_effect = MissingField("phone")

        client.post("/api/register", json={"firstName": "Ann"})

        mock_service.register.assert_called_once_with("Ann", None, None, None)


class TestRegisterErrors:
    """Tests for domain error mapping."""

    def test_missing_field_returns_400(self, client: TestClient, mock_service: MagicMock) -> None:
        """MissingField maps to 400 'All fields are required'."""
        mock_service.register.side_effect = MissingField("email")

        response = client.post("/api/register", json=BODY)

        assert response.status_code == 400
        assert response.json() == {"error": "All fields are required", "code": "MISSING_FIELD"}

    def test_invalid_domain_returns_400(self, client: TestClient, mock_service: MagicMock) -> None:
        """InvalidEmailDomain maps to 400 with the domain message."""
        mock_service.register.side_effect = InvalidEmailDomain()

        response = client.post("/api/register", json=BODY)

        assert response.status_code == 400
        assert response.json() == {
            "error": "Only Gmail addresses are allowed",
            "code": "INVALID_EMAIL_DOMAIN",
        }

    def test_invalid_phone_returns_400(self, client: TestClient, mock_service: MagicMock) -> None:
        """InvalidPhone maps to 400 INVALID_PHONE."""
        mock_service.register.side_effect = InvalidPhone()

        response = client.post("/api/register", json=BODY)

        assert response.status_code == 400
        assert response.json() == {"error": "INVALID_PHONE", "code": "INVALID_PHONE"}

    def test_email_exists_returns_409(self, client: TestClient, mock_service: MagicMock) -> None:
        """Duplicate email maps to 409 EMAIL_EXISTS."""
        mock_service.register.side_effect = DuplicateRegistrant(("email",))

        response = client.post("/api/register", json=BODY)

        assert response.status_code == 409
        assert response.json() == {
            "error": "EMAIL_EXISTS",
            "code": "EMAIL_EXISTS",
            "fields": ["email"],
        }

    def test_phone_exists_returns_409(self, client: TestClient, mock_service: MagicMock) -> None:
        """Duplicate phone maps to 409 PHONE_EXISTS."""
        mock_service.register.side_effect = DuplicateRegistrant(("phone",))

        response = client.post("/api/register", json=BODY)

        assert response.status_code == 409
        assert response.json()["error"] == "PHONE_EXISTS"

    def test_store_failure_returns_500(
        self, client: TestClient, mock_service: MagicMock, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Unexpected errors map to 500 SERVER_ERROR; the cause is only logged."""
        mock_service.register.side_effect = ConnectionError("db at 10.0.0.5 refused connection")

        with caplog.at_level(logging.ERROR):
            response = client.post("/api/register", json=BODY)

        assert response.status_code == 500
        assert response.json() == {"error": "SERVER_ERROR", "code": "SERVER_ERROR"}
        assert "10.0.0.5" not in response.text
        assert "10.0.0.5" in caplog.text


class TestMalformedBodies:
    """Bodies FastAPI cannot parse are answered with the missing-field error."""

    @pytest.mark.parametrize(
        "content",
        ["not json", "[1, 2, 3]", '{"firstName": "Ann", "phone": 5551234567}'],
    )
    def test_malformed_body_returns_400(
        self, client: TestClient, mock_service: MagicMock, content: str
    ) -> None:
        """Malformed JSON, a non-object and non-string fields give 400."""
        response = client.post(
            "/api/register", content=content, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_FIELD"
        mock_service.register.assert_not_called()

    def test_get_not_allowed(self, client: TestClient) -> None:
        """Only POST is accepted."""
        response = client.get("/api/register")
        assert response.status_code == 405
