"""
Registration domain service - validated, deduplicated registrant creation.

Workflow (each step runs only if the previous one passed):

1. Missing field            -> MissingField
2. Email not on Gmail       -> InvalidEmailDomain
3. Phone not 10 digits      -> InvalidPhone
4. Duplicate check (read)   -> DuplicateRegistrant
5. Insert                   -> DuplicateRegistrant on constraint violation

Steps 1-3 never touch the store. The read in step 4 only produces a
friendlier report (which of email/phone collided); the store's own
uniqueness constraint in step 5 is what actually prevents duplicates
when two submissions race past the read.
"""

import logging
from dataclasses import dataclass

from .exceptions import DuplicateRegistrant
from .ports import Registrant, RegistrantStore
from .validation import GMAIL_DOMAIN, validate_registration

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for registrant creation.

    Orchestrates validation, the duplicate check and persistence.
    Phone uniqueness is optional; email uniqueness is always enforced.
    """

    store: RegistrantStore
    enforce_unique_phone: bool = False
    email_domain: str = GMAIL_DOMAIN

    def register(
        self,
        first_name: str | None,
        last_name: str | None,
        email: str | None,
        phone: str | None,
    ) -> Registrant:
        """
        Register a new person.

        Args:
            first_name: First name (will be trimmed)
            last_name: Last name (will be trimmed)
            email: Gmail address (will be normalized)
            phone: 10-digit phone number

        Returns:
            The created Registrant

        Raises:
            MissingField, InvalidEmailDomain, InvalidPhone: On invalid input
            DuplicateRegistrant: If email (or phone, when enforced) is taken
        """
        data = validate_registration(
            first_name, last_name, email, phone, email_domain=self.email_domain
        )

        collided = self._find_collisions(data.email, data.phone)
        if collided:
            logger.info("Rejected duplicate registration: %s", ", ".join(collided))
            raise DuplicateRegistrant(collided)

        registrant = self.store.insert(data.first_name, data.last_name, data.email, data.phone)
        logger.info("Registered registrant id=%s", registrant.id)
        return registrant

    def _find_collisions(self, email: str, phone: str) -> tuple[str, ...]:
        collided = []
        if self.store.find_by_email(email) is not None:
            collided.append("email")
        if self.enforce_unique_phone and self.store.find_by_phone(phone) is not None:
            collided.append("phone")
        return tuple(collided)
