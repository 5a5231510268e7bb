"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for race condition tests.
"""

import threading

import pytest

from src.adapters.repository.memory import InMemoryRegistrantStore
from src.domain.ports import Registrant
from src.domain.registration import RegistrationService

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


class SlowReadStore(InMemoryRegistrantStore):
    """
    In-memory store whose lookups wait at a barrier.

    Every concurrent caller finishes its duplicate-check read before any
    of them inserts, which is the worst case for check-then-insert.
    """

    def __init__(self, parties: int, unique_phone: bool = False) -> None:
        super().__init__(unique_phone=unique_phone)
        self.barrier = threading.Barrier(parties, timeout=5)

    def find_by_email(self, email: str) -> Registrant | None:
        found = super().find_by_email(email)
        self.barrier.wait()
        return found


@pytest.fixture
def racing_service() -> RegistrationService:
    """Service whose duplicate checks all pass before any insert happens."""
    return RegistrationService(store=SlowReadStore(parties=5))
