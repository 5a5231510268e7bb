"""Client side of the registration form."""

from .join_form import FormPhase, JoinFormController, JoinFormState, MessageType

__all__ = ["FormPhase", "JoinFormController", "JoinFormState", "MessageType"]
