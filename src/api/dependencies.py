"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, Request

from src.config.settings import Settings, get_settings
from src.domain.ports import RegistrantStore
from src.domain.registration import RegistrationService


def get_store(request: Request) -> RegistrantStore:
    """
    Get the registrant store from app state.

    The store is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.store


def get_registration_service(
    store: RegistrantStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Uniqueness scope and email domain come from settings.
    """
    return RegistrationService(
        store=store,
        enforce_unique_phone=settings.unique_phone,
        email_domain=settings.email_domain,
    )
