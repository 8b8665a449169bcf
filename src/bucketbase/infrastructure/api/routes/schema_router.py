"""Schema file API routes.

All routes are scoped to a site through the ``site_id`` query parameter.
"""

from typing import Any

from fastapi import APIRouter, Body

from bucketbase.infrastructure.api.dependencies import (
    AuthenticatedAdmin,
    ContentService,
    SiteId,
)
from bucketbase.infrastructure.api.schemas import (
    MessageResponse,
    PresignedUrlResponse,
    SchemaMetadataResponse,
)

router = APIRouter()


@router.get(
    "",
    responses={404: {"description": "Schema file not found"}},
)
async def get_schema(
    site_id: SiteId,
    _admin: AuthenticatedAdmin,
    service: ContentService,
) -> list[Any]:
    """Return the site's collection schemas as stored."""
    return await service.get_schema(site_id)


@router.put(
    "",
    response_model=MessageResponse,
    responses={400: {"description": "Body is not an array"}},
)
async def put_schema(
    site_id: SiteId,
    _admin: AuthenticatedAdmin,
    service: ContentService,
    schema: Any = Body(...),
) -> MessageResponse:
    """Replace the site's schema file (stored private)."""
    return MessageResponse(**await service.put_schema(site_id, schema))


@router.get("/metadata", response_model=SchemaMetadataResponse)
async def get_schema_metadata(
    site_id: SiteId,
    _admin: AuthenticatedAdmin,
    service: ContentService,
) -> SchemaMetadataResponse:
    return SchemaMetadataResponse.model_validate(await service.get_schema_metadata(site_id))


@router.get("/presigned-url", response_model=PresignedUrlResponse)
async def get_schema_presigned_url(
    site_id: SiteId,
    _admin: AuthenticatedAdmin,
    service: ContentService,
) -> PresignedUrlResponse:
    return PresignedUrlResponse.model_validate(await service.get_schema_presigned_url(site_id))


@router.put("/make-private", response_model=MessageResponse)
async def make_schema_private(
    site_id: SiteId,
    _admin: AuthenticatedAdmin,
    service: ContentService,
) -> MessageResponse:
    return MessageResponse(**await service.make_schema_private(site_id))
