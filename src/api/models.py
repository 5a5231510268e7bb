"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Wire names are camelCase; Python attributes are snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.domain.ports import Registrant


class RegisterRequest(BaseModel):
    """
    Request model for registration.

    Every field is optional at this layer; a missing field is reported
    by the domain as MISSING_FIELD (400), not by FastAPI as a 422.
    """

    model_config = ConfigDict(populate_by_name=True)

    first_name: str | None = Field(None, alias="firstName", description="First name")
    last_name: str | None = Field(None, alias="lastName", description="Last name")
    email: str | None = Field(None, description="Gmail address")
    phone: str | None = Field(None, description="Phone number, exactly 10 digits")


class RegistrantOut(BaseModel):
    """Public view of a stored registrant."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    phone: str

    @classmethod
    def from_registrant(cls, registrant: Registrant) -> "RegistrantOut":
        return cls(
            id=registrant.id,
            first_name=registrant.first_name,
            last_name=registrant.last_name,
            email=registrant.email,
            phone=registrant.phone,
        )


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    message: str
    user: RegistrantOut


class ErrorResponse(BaseModel):
    """
    Standard error response model.

    ``error`` is the human-facing text kept for existing clients,
    ``code`` the stable error kind, ``fields`` the collided fields on 409.
    """

    error: str
    code: str
    fields: list[str] | None = None
