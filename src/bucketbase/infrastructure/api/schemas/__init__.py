"""Pydantic request/response schemas for the admin API."""

from bucketbase.infrastructure.api.schemas.auth_schemas import LoginRequest, LoginResponse
from bucketbase.infrastructure.api.schemas.schema_schemas import (
    MessageResponse,
    PresignedUrlResponse,
    SchemaMetadataResponse,
)
from bucketbase.infrastructure.api.schemas.site_schemas import (
    SiteCreateRequest,
    SiteResponse,
    SiteUpdateRequest,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PresignedUrlResponse",
    "SchemaMetadataResponse",
    "SiteCreateRequest",
    "SiteResponse",
    "SiteUpdateRequest",
]
