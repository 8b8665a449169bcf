"""Pydantic schemas for site endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from bucketbase.domain.entities import Site


class SiteCreateRequest(BaseModel):
    """Request body for creating a site.

    Presence and format of ``id`` and ``name`` are checked by the service so
    the API answers 400 rather than 422 for them.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    name: str | None = None
    description: str | None = None
    created_by: str | None = Field(None, alias="createdBy")


class SiteUpdateRequest(BaseModel):
    """Partial site update; unset fields are left unchanged."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    name: str | None = Field(None, min_length=1)
    description: str | None = None


class SiteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str | None = None
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")
    created_by: str | None = Field(None, alias="createdBy")

    @classmethod
    def from_site(cls, site: Site) -> "SiteResponse":
        return cls(
            id=site.id,
            name=site.name,
            description=site.description,
            created_at=site.created_at,
            updated_at=site.updated_at,
            created_by=site.created_by,
        )
