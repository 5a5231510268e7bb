"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for registrant creation.
It defines its own port interfaces for infrastructure abstraction,
ensuring true hexagonal architecture decoupling.
"""

from .exceptions import (
    DuplicateRegistrant,
    InvalidEmailDomain,
    InvalidPhone,
    MissingField,
    RegistrationError,
)
from .ports import Registrant, RegistrantStore, StoreBackend
from .registration import RegistrationService
from .validation import RegistrantInput, normalize_email, validate_registration

__all__ = [
    "DuplicateRegistrant",
    "InvalidEmailDomain",
    "InvalidPhone",
    "MissingField",
    "Registrant",
    "RegistrantInput",
    "RegistrantStore",
    "RegistrationError",
    "RegistrationService",
    "StoreBackend",
    "normalize_email",
    "validate_registration",
]
