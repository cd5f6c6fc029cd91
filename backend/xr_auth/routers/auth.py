"""
Authentication router for sign-up and sign-in.
"""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from xr_auth.core.exceptions import AuthError
from xr_auth.dependencies.auth import get_auth_service
from xr_auth.schemas.auth import (
    AuthResponse,
    ErrorResponse,
    SignInRequest,
    SignUpRequest,
)
from xr_auth.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def error_response(error: AuthError) -> JSONResponse:
    """Render an AuthError as the ``{success, error}`` envelope."""
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(error=error.message).model_dump(),
    )


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Register a new user",
)
async def signup(
    body: SignUpRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user account.

    - **name**: Display name
    - **email**: Valid email address (must be unique)
    - **password**: Password (minimum 6 characters)
    - **xrId**: Optional external id, generated when omitted
    """
    try:
        result = await auth_service.sign_up(
            name=body.name,
            email=body.email,
            password=body.password,
            xr_id=body.xr_id,
        )
    except AuthError as e:
        logger.warning("Signup error: %s", e.message)
        return error_response(e)

    return AuthResponse(
        message="User created successfully",
        user=result.user,
        token=result.token,
    )


@router.post(
    "/signin",
    response_model=AuthResponse,
    responses=ERROR_RESPONSES,
    summary="Sign in and get access token",
)
async def signin(
    body: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate with email and password to receive a JWT token.

    The token is valid for 7 days and should be sent as a bearer credential.
    """
    try:
        result = await auth_service.sign_in(email=body.email, password=body.password)
    except AuthError as e:
        logger.warning("Signin error: %s", e.message)
        return error_response(e)

    return AuthResponse(
        message="Login successful",
        user=result.user,
        token=result.token,
    )
