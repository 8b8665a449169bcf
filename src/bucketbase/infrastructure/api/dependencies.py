"""FastAPI dependencies: authentication, site scoping and services."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Query, Request, status

from bucketbase.application.services.content_admin_service import ContentAdminService
from bucketbase.application.services.site_admin_service import SiteAdminService
from bucketbase.core.config import Settings
from bucketbase.core.exceptions import InvalidInputError
from bucketbase.core.logging import bind_site_id, get_logger
from bucketbase.domain.entities import DEFAULT_SITE_ID, is_valid_site_id
from bucketbase.infrastructure.auth import (
    ADMIN_ROLE,
    InvalidTokenError,
    TokenExpiredError,
    jwt_service,
)
from bucketbase.infrastructure.storage.layout import get_layout
from bucketbase.infrastructure.storage.object_store import ObjectStore

logger = get_logger(__name__)


@dataclass
class CurrentAdmin:
    """The authenticated caller, extracted from a valid access token."""

    username: str
    role: str


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=f"Unauthorized: {detail}",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_admin(
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentAdmin:
    """Validate the bearer token and require the admin role.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired;
            403 if it does not carry the admin role.
    """
    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise _unauthorized("Missing Authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise _unauthorized("Invalid Authorization header format")

    try:
        payload = jwt_service.validate_access_token(parts[1])
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        raise _unauthorized("Token has expired")
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise _unauthorized(f"Invalid token: {str(e)}")

    role = payload.get("role")
    if role != ADMIN_ROLE:
        logger.info("Admin access denied", subject=payload.get("sub"), role=role)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Admin access required",
        )
    return CurrentAdmin(username=payload.get("sub", ""), role=role)


AuthenticatedAdmin = Annotated[CurrentAdmin, Depends(get_current_admin)]


def get_site_id(
    site_id: Annotated[str, Query(description="Site the request applies to")] = DEFAULT_SITE_ID,
) -> str:
    """Validate the ``site_id`` query parameter and tag logs with it."""
    if not is_valid_site_id(site_id):
        raise InvalidInputError(
            "Site ID must contain only lowercase letters, numbers, and hyphens."
        )
    bind_site_id(site_id)
    return site_id


SiteId = Annotated[str, Depends(get_site_id)]


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


AppSettings = Annotated[Settings, Depends(get_app_settings)]


def get_object_store(request: Request) -> ObjectStore:
    return request.app.state.object_store


def get_content_service(
    store: Annotated[ObjectStore, Depends(get_object_store)],
    settings: AppSettings,
) -> ContentAdminService:
    return ContentAdminService(
        store,
        get_layout(settings.storage_layout),
        presigned_url_expire_seconds=settings.presigned_url_expire_seconds,
    )


def get_site_service(
    store: Annotated[ObjectStore, Depends(get_object_store)],
) -> SiteAdminService:
    return SiteAdminService(store)


ContentService = Annotated[ContentAdminService, Depends(get_content_service)]
SiteService = Annotated[SiteAdminService, Depends(get_site_service)]
