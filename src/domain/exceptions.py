"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Each error carries a stable machine-readable ``code`` and a short
user-facing ``message``; the HTTP layer maps them to responses.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    code = "REGISTRATION_ERROR"
    message = "Registration failed"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingField(RegistrationError):
    """One of first name, last name, email or phone is absent."""

    code = "MISSING_FIELD"
    message = "All fields are required"

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__()


class InvalidEmailDomain(RegistrationError):
    """Email is not a Gmail address."""

    code = "INVALID_EMAIL_DOMAIN"
    message = "Only Gmail addresses are allowed"


class InvalidPhone(RegistrationError):
    """Phone is not exactly 10 digits."""

    code = "INVALID_PHONE"
    message = "INVALID_PHONE"


class DuplicateRegistrant(RegistrationError):
    """
    A registrant with the same email and/or phone already exists.

    ``fields`` lists every collided field, email first. The code is
    EMAIL_EXISTS whenever the email collided, PHONE_EXISTS otherwise.
    """

    def __init__(self, fields: tuple[str, ...]) -> None:
        self.fields = tuple(f for f in ("email", "phone") if f in fields)
        if not self.fields:
            raise ValueError("DuplicateRegistrant requires at least one field")
        self.code = "EMAIL_EXISTS" if "email" in self.fields else "PHONE_EXISTS"
        super().__init__(self.code)
