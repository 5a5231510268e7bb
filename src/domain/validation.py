"""
Registration field validation.

Shared by the registration service and the client form controller so
that both sides reject exactly the same input, in the same order.
"""

import re
from dataclasses import dataclass

from .exceptions import InvalidEmailDomain, InvalidPhone, MissingField

GMAIL_DOMAIN = "@gmail.com"

# ASCII only; str.isdigit() and a plain \d would accept other scripts' digits
_PHONE_PATTERN = re.compile(r"\d{10}", re.ASCII)


@dataclass(frozen=True)
class RegistrantInput:
    """Validated, normalized registration fields."""

    first_name: str
    last_name: str
    email: str
    phone: str


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


def validate_registration(
    first_name: str | None,
    last_name: str | None,
    email: str | None,
    phone: str | None,
    email_domain: str = GMAIL_DOMAIN,
) -> RegistrantInput:
    """
    Validate raw registration fields and return their normalized form.

    Checks run in order and stop at the first failure:
    missing field, email domain, phone format.

    Raises:
        MissingField: If any field is None, empty or whitespace-only
        InvalidEmailDomain: If the lowercased email lacks ``email_domain``
        InvalidPhone: If phone is not exactly 10 digits
    """
    fields = {
        "first_name": first_name,
        "last_name": last_name,
        "email": email,
        "phone": phone,
    }
    for name, value in fields.items():
        if value is None or not value.strip():
            raise MissingField(name)

    if email_domain.lower() not in email.lower():
        raise InvalidEmailDomain()

    if not _PHONE_PATTERN.fullmatch(phone):
        raise InvalidPhone()

    return RegistrantInput(
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        email=normalize_email(email),
        phone=phone.strip(),
    )
