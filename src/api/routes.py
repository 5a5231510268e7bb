"""
API routes - Registration endpoint.

Defines REST endpoints for the workshop registration API:
- POST /api/register - Validate and store a registrant
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_registration_service
from src.api.errors import registration_error_response, server_error_response
from src.api.models import ErrorResponse, RegisterRequest, RegisterResponse, RegistrantOut
from src.domain.exceptions import RegistrationError
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["registration"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing field, non-Gmail email or invalid phone"},
        409: {"model": ErrorResponse, "description": "Email (or phone) already registered"},
        500: {"model": ErrorResponse, "description": "Store unavailable"},
    },
    summary="Register for the workshop",
    description="Submit first name, last name, a Gmail address and a 10-digit phone number.",
)
async def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse | JSONResponse:
    """
    Register a new person.

    - **firstName** / **lastName**: Required
    - **email**: Gmail address, stored lowercased
    - **phone**: Exactly 10 digits

    Returns the created record on success.
    """
    try:
        registrant = service.register(
            request_data.first_name,
            request_data.last_name,
            request_data.email,
            request_data.phone,
        )
    except RegistrationError as e:
        return registration_error_response(e)
    except Exception:
        logger.exception("Registration error")
        return server_error_response()

    return RegisterResponse(
        message="User registered successfully",
        user=RegistrantOut.from_registrant(registrant),
    )
