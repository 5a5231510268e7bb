"""
In-memory repository adapter - Implements RegistrantStore protocol.

Process-local store for development and tests. A single lock makes the
uniqueness check and the write one atomic step, mirroring the unique
indexes of the PostgreSQL adapter.
"""

import threading
import uuid
from datetime import datetime, timezone

from src.domain.exceptions import DuplicateRegistrant
from src.domain.ports import Registrant


class InMemoryRegistrantStore:
    """
    Implements RegistrantStore protocol with a dict keyed by id.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, unique_phone: bool = False) -> None:
        self._unique_phone = unique_phone
        self._records: dict[str, Registrant] = {}
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> Registrant | None:
        with self._lock:
            return self._find_email(email.lower())

    def find_by_phone(self, phone: str) -> Registrant | None:
        with self._lock:
            return self._find_phone(phone)

    def insert(self, first_name: str, last_name: str, email: str, phone: str) -> Registrant:
        """
        Store a registrant, enforcing uniqueness under the lock.

        Raises:
            DuplicateRegistrant: If the email (or phone, when unique) is taken
        """
        with self._lock:
            if self._find_email(email.lower()) is not None:
                raise DuplicateRegistrant(("email",))
            if self._unique_phone and self._find_phone(phone) is not None:
                raise DuplicateRegistrant(("phone",))

            registrant = Registrant(
                id=str(uuid.uuid4()),
                first_name=first_name,
                last_name=last_name,
                email=email,
                phone=phone,
                created_at=datetime.now(timezone.utc),
            )
            self._records[registrant.id] = registrant
            return registrant

    def ping(self) -> None:
        return None

    def count(self) -> int:
        """Number of stored registrants."""
        with self._lock:
            return len(self._records)

    def _find_email(self, email: str) -> Registrant | None:
        for record in self._records.values():
            if record.email.lower() == email:
                return record
        return None

    def _find_phone(self, phone: str) -> Registrant | None:
        for record in self._records.values():
            if record.phone == phone:
                return record
        return None
