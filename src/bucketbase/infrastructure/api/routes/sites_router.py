"""Site metadata API routes."""

from fastapi import APIRouter, status

from bucketbase.infrastructure.api.dependencies import AuthenticatedAdmin, SiteService
from bucketbase.infrastructure.api.schemas import (
    MessageResponse,
    SiteCreateRequest,
    SiteResponse,
    SiteUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=list[SiteResponse])
async def list_sites(_admin: AuthenticatedAdmin, service: SiteService) -> list[SiteResponse]:
    return [SiteResponse.from_site(site) for site in await service.list_sites()]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SiteResponse,
    responses={
        400: {"description": "Missing or invalid id/name"},
        409: {"description": "Site already exists"},
    },
)
async def create_site(
    request: SiteCreateRequest,
    admin: AuthenticatedAdmin,
    service: SiteService,
) -> SiteResponse:
    data = request.model_dump(by_alias=True, exclude_none=True)
    data.setdefault("createdBy", admin.username)
    return SiteResponse.from_site(await service.create_site(data))


@router.get("/{site_id}", response_model=SiteResponse)
async def get_site(site_id: str, _admin: AuthenticatedAdmin, service: SiteService) -> SiteResponse:
    return SiteResponse.from_site(await service.get_site(site_id))


@router.put("/{site_id}", response_model=SiteResponse)
async def update_site(
    site_id: str,
    request: SiteUpdateRequest,
    _admin: AuthenticatedAdmin,
    service: SiteService,
) -> SiteResponse:
    updates = request.model_dump(exclude_unset=True)
    return SiteResponse.from_site(await service.update_site(site_id, updates))


@router.delete("/{site_id}", response_model=MessageResponse)
async def delete_site(
    site_id: str,
    _admin: AuthenticatedAdmin,
    service: SiteService,
) -> MessageResponse:
    return MessageResponse(**await service.delete_site(site_id))
