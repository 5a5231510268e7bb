"""Repository adapters - Registrant store implementations."""

from .memory import InMemoryRegistrantStore
from .postgres import PostgresRegistrantStore, apply_phone_policy, run_migrations

__all__ = [
    "InMemoryRegistrantStore",
    "PostgresRegistrantStore",
    "apply_phone_policy",
    "run_migrations",
]
