"""Pydantic schemas for schema and collection file endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class MessageResponse(BaseModel):
    message: str


class SchemaMetadataResponse(BaseModel):
    """Stored object information for a site's schema file."""

    model_config = ConfigDict(populate_by_name=True)

    last_modified: str | None = Field(None, alias="lastModified")
    size: int | None = None
    is_public: bool = Field(False, alias="isPublic")


class PresignedUrlResponse(BaseModel):
    """Time-limited read URL for the schema file."""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    expires_in: int = Field(..., alias="expiresIn", description="Validity in seconds")
