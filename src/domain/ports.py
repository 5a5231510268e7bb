"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol


class StoreBackend(str, Enum):
    """Available RegistrantStore implementations."""

    POSTGRES = "postgres"
    MEMORY = "memory"


@dataclass(frozen=True)
class Registrant:
    """A persisted registration record."""

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    created_at: datetime


class RegistrantStore(Protocol):
    """Port interface for registrant persistence."""

    def find_by_email(self, email: str) -> Registrant | None:
        """
        Look up a registrant by email.

        Matching is case-insensitive.

        Args:
            email: Email address (normalized by the domain layer)

        Returns:
            The stored Registrant, or None if no record matches
        """
        ...

    def find_by_phone(self, phone: str) -> Registrant | None:
        """Look up a registrant by phone number."""
        ...

    def insert(self, first_name: str, last_name: str, email: str, phone: str) -> Registrant:
        """
        Persist a new registrant.

        Uniqueness is enforced by the store itself (unique index or
        equivalent), so two concurrent inserts for the same email
        cannot both succeed.

        Args:
            first_name: Trimmed first name
            last_name: Trimmed last name
            email: Normalized email address
            phone: 10-digit phone number

        Returns:
            The created Registrant with store-assigned id and created_at

        Raises:
            DuplicateRegistrant: If a uniqueness constraint rejects the row
        """
        ...

    def ping(self) -> None:
        """Raise if the backing store cannot be reached."""
        ...
