"""Collection data file API routes."""

from typing import Any

from fastapi import APIRouter, Body

from bucketbase.infrastructure.api.dependencies import (
    AuthenticatedAdmin,
    ContentService,
    SiteId,
)
from bucketbase.infrastructure.api.schemas import MessageResponse

router = APIRouter()


# Registered before "/{slug}" so "make-public" is never taken for a slug
@router.put(
    "/make-public/{slug}",
    response_model=MessageResponse,
    responses={404: {"description": "Collection data file not found"}},
)
async def make_collection_public(
    slug: str,
    site_id: SiteId,
    _admin: AuthenticatedAdmin,
    service: ContentService,
) -> MessageResponse:
    return MessageResponse(**await service.make_collection_public(site_id, slug))


@router.put(
    "/{slug}",
    response_model=MessageResponse,
    responses={400: {"description": "Invalid slug or body is not an array"}},
)
async def put_collection(
    slug: str,
    site_id: SiteId,
    _admin: AuthenticatedAdmin,
    service: ContentService,
    records: Any = Body(...),
) -> MessageResponse:
    """Replace a collection's data file (stored public-read)."""
    return MessageResponse(**await service.put_collection(site_id, slug, records))
