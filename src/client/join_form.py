"""
Join form controller - client side of the registration workflow.

Holds the form's four fields, validates them with the same rules as the
server, posts them to ``/api/register`` and turns the response into a
message for the visitor.

Form lifecycle:

    IDLE -> VALIDATING -> SUBMITTING -> SUCCESS | ERROR -> IDLE (reset)

A failed validation goes straight from VALIDATING to ERROR without a
request. Only one submission can be in flight; while SUBMITTING, field
edits and further submits are ignored.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import httpx

from src.domain.exceptions import InvalidEmailDomain, InvalidPhone, MissingField
from src.domain.validation import GMAIL_DOMAIN, validate_registration

logger = logging.getLogger(__name__)

REGISTER_PATH = "/api/register"

SUCCESS_MESSAGE = "✅ Congratulations! Registration complete."
SERVER_ERROR_MESSAGE = "❌ Server error. Try again later."

VALIDATION_MESSAGES = {
    MissingField: "Please fill in all fields.",
    InvalidEmailDomain: "Please use a Gmail address.",
    InvalidPhone: "Phone number must be exactly 10 digits.",
}

WARNING_MESSAGES = {
    "EMAIL_EXISTS": "⚠️ Email already in use.",
    "PHONE_EXISTS": "⚠️ Phone number already in use.",
    "INVALID_PHONE": "⚠️ Invalid phone number.",
}
BOTH_EXIST_MESSAGE = "⚠️ Email and phone number already in use."

# Accept both the wire spelling and the attribute name
_FIELD_NAMES = {
    "firstName": "first_name",
    "lastName": "last_name",
    "first_name": "first_name",
    "last_name": "last_name",
    "email": "email",
    "phone": "phone",
}


class FormPhase(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class MessageType(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class JoinFormState:
    """Everything the form renders."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    phase: FormPhase = FormPhase.IDLE
    message: str | None = None
    message_type: MessageType | None = None
    is_open: bool = False

    @property
    def is_submitting(self) -> bool:
        return self.phase == FormPhase.SUBMITTING

    def payload(self) -> dict[str, str]:
        """Request body in wire field names."""
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phone": self.phone,
        }


def _start_timer(delay: float, callback: Callable[[], None]) -> None:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()


class JoinFormController:
    """
    Drives a JoinFormState through validation and submission.

    Args:
        http_client: httpx.Client whose base_url points at the service
        on_close: Called when the form closes (manually or after success)
        auto_close_seconds: Delay before closing after a success
        schedule: ``schedule(delay, callback)`` defers the auto-close;
            defaults to a daemon threading.Timer. UIs with their own event
            loop should pass a scheduler that runs the callback on that
            loop, since the callback mutates the form state
        email_domain: Accepted email domain, same as the server's
    """

    def __init__(
        self,
        http_client: httpx.Client,
        on_close: Callable[[], None] | None = None,
        auto_close_seconds: float = 3.0,
        schedule: Callable[[float, Callable[[], None]], None] | None = None,
        email_domain: str = GMAIL_DOMAIN,
    ) -> None:
        self.http_client = http_client
        self.on_close = on_close
        self.auto_close_seconds = auto_close_seconds
        self.schedule = schedule or _start_timer
        self.email_domain = email_domain
        self.state = JoinFormState()

    @property
    def inputs_disabled(self) -> bool:
        """Inputs and the submit control are disabled while a request is in flight."""
        return self.state.is_submitting

    def open(self) -> None:
        self.state.is_open = True

    def close(self) -> None:
        self.reset()
        self.state.is_open = False
        if self.on_close is not None:
            self.on_close()

    def reset(self) -> None:
        is_open = self.state.is_open
        self.state = JoinFormState(is_open=is_open)

    def set_field(self, name: str, value: str) -> None:
        """Update one field; ignored while submitting."""
        if self.inputs_disabled:
            return
        try:
            attr = _FIELD_NAMES[name]
        except KeyError:
            raise ValueError(f"Unknown form field: {name}") from None
        setattr(self.state, attr, value)

    def submit(self) -> FormPhase:
        """
        Validate and, if valid, send the registration once.

        Returns the phase the form ends in (SUCCESS or ERROR), or
        SUBMITTING unchanged if a submission was already in flight.
        """
        if self.state.is_submitting:
            return self.state.phase

        self.state.phase = FormPhase.VALIDATING
        try:
            validate_registration(
                self.state.first_name,
                self.state.last_name,
                self.state.email,
                self.state.phone,
                email_domain=self.email_domain,
            )
        except (MissingField, InvalidEmailDomain, InvalidPhone) as e:
            self._show(FormPhase.ERROR, VALIDATION_MESSAGES[type(e)], MessageType.ERROR)
            return self.state.phase

        self.state.phase = FormPhase.SUBMITTING
        self.state.message = None
        self.state.message_type = None
        try:
            response = self.http_client.post(REGISTER_PATH, json=self.state.payload())
            data = response.json()
        except (httpx.HTTPError, ValueError):
            logger.warning("Registration request failed", exc_info=True)
            self._show(FormPhase.ERROR, SERVER_ERROR_MESSAGE, MessageType.ERROR)
            return self.state.phase

        if response.is_success:
            self._show(FormPhase.SUCCESS, SUCCESS_MESSAGE, MessageType.SUCCESS)
            self.schedule(self.auto_close_seconds, self._auto_close)
        else:
            self._show_failure(data)
        return self.state.phase

    def _auto_close(self) -> None:
        # Skipped if the form was closed, reset or resubmitted since the success
        if self.state.phase != FormPhase.SUCCESS:
            return
        self.close()

    def _show_failure(self, data: object) -> None:
        error = data.get("error") if isinstance(data, dict) else None
        fields = data.get("fields") if isinstance(data, dict) else None

        if error == "EMAIL_EXISTS" and fields and "phone" in fields:
            self._show(FormPhase.ERROR, BOTH_EXIST_MESSAGE, MessageType.WARNING)
        elif error in WARNING_MESSAGES:
            self._show(FormPhase.ERROR, WARNING_MESSAGES[error], MessageType.WARNING)
        else:
            self._show(FormPhase.ERROR, SERVER_ERROR_MESSAGE, MessageType.ERROR)

    def _show(self, phase: FormPhase, message: str, message_type: MessageType) -> None:
        self.state.phase = phase
        self.state.message = message
        self.state.message_type = message_type
