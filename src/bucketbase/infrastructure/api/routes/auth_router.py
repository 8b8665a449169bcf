"""Authentication API routes."""

import secrets

from fastapi import APIRouter, HTTPException, status

from bucketbase.core.logging import get_logger
from bucketbase.infrastructure.api.dependencies import AppSettings
from bucketbase.infrastructure.api.schemas import LoginRequest, LoginResponse
from bucketbase.infrastructure.auth import ADMIN_ROLE, jwt_service

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"description": "Invalid credentials"}},
)
async def login(request: LoginRequest, settings: AppSettings) -> LoginResponse:
    """Exchange the configured admin credentials for an access token."""
    username_ok = secrets.compare_digest(
        request.username.encode("utf-8"), settings.admin_username.encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        request.password.encode("utf-8"), settings.admin_password.encode("utf-8")
    )
    if not (username_ok and password_ok):
        logger.info("Login failed: invalid credentials", username=request.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: Invalid username or password",
        )

    token = jwt_service.create_access_token(subject=request.username, role=ADMIN_ROLE)
    logger.info("Login successful", username=request.username)
    return LoginResponse(access_token=token, expires_in=jwt_service.get_expires_in())
