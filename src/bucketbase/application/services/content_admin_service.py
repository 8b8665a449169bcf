"""Schema and collection object administration for the admin API.

Schema files are stored private; collection data files are stored
``public-read`` so published sites can fetch them without credentials.
"""

from typing import Any

from bucketbase.core.exceptions import InvalidInputError, MalformedError, NotFoundError
from bucketbase.core.logging import get_logger
from bucketbase.domain.services.slug_generator import SlugGenerator
from bucketbase.infrastructure.storage.layout import StorageLayout
from bucketbase.infrastructure.storage.object_store import ObjectStore

logger = get_logger(__name__)


class ContentAdminService:
    """Reads and writes a site's schema and collection objects."""

    def __init__(
        self,
        store: ObjectStore,
        layout: StorageLayout,
        presigned_url_expire_seconds: int = 3600,
    ) -> None:
        self.store = store
        self.layout = layout
        self.presigned_url_expire_seconds = presigned_url_expire_seconds

    def _schema_not_found(self, key: str) -> NotFoundError:
        return NotFoundError(
            f"Schema file ({key}) not found in storage.", code="SCHEMA_FILE_NOT_FOUND"
        )

    async def get_schema(self, site_id: str) -> list[Any]:
        key = self.layout.schema_key(site_id)
        try:
            data = await self.store.get_json(key)
        except MalformedError as e:
            raise MalformedError(e.message, code="SCHEMA_MALFORMED") from e
        if data is None:
            logger.warning("Schema file not found", site_id=site_id, key=key)
            raise self._schema_not_found(key)
        if not isinstance(data, list):
            raise MalformedError(
                f"Schema file ({key}) is not an array", code="SCHEMA_MALFORMED"
            )
        return data

    async def put_schema(self, site_id: str, data: Any) -> dict[str, str]:
        if not isinstance(data, list):
            raise InvalidInputError(
                "Invalid schema format. Expected an array of collection schemas."
            )
        key = self.layout.schema_key(site_id)
        await self.store.put_json(key, data, acl="private")
        logger.info("Schema updated", site_id=site_id, key=key, count=len(data))
        return {"message": f"Schema updated successfully at {key}"}

    async def get_schema_metadata(self, site_id: str) -> dict[str, Any]:
        key = self.layout.schema_key(site_id)
        metadata = await self.store.head(key)
        if metadata is None:
            raise self._schema_not_found(key)
        is_public = await self.store.is_public(key)
        last_modified = metadata.last_modified
        return {
            "lastModified": last_modified.isoformat() if last_modified else None,
            "size": metadata.size,
            "isPublic": is_public,
        }

    async def get_schema_presigned_url(self, site_id: str) -> dict[str, Any]:
        key = self.layout.schema_key(site_id)
        if await self.store.head(key) is None:
            raise self._schema_not_found(key)
        url = await self.store.presigned_get_url(key, self.presigned_url_expire_seconds)
        return {"url": url, "expiresIn": self.presigned_url_expire_seconds}

    async def make_schema_private(self, site_id: str) -> dict[str, str]:
        key = self.layout.schema_key(site_id)
        if await self.store.head(key) is None:
            raise self._schema_not_found(key)
        await self.store.set_acl(key, "private")
        logger.info("Schema made private", site_id=site_id, key=key)
        return {"message": "Schema file is now private"}

    async def put_collection(self, site_id: str, slug: str, data: Any) -> dict[str, str]:
        if not SlugGenerator.is_valid(slug):
            raise InvalidInputError(f"Invalid collection slug: {slug}")
        if not isinstance(data, list):
            raise InvalidInputError("Invalid data format. Expected an array of records.")
        key = self.layout.records_key(site_id, slug)
        await self.store.put_json(key, data, acl="public-read")
        logger.info("Collection data updated", site_id=site_id, slug=slug, count=len(data))
        return {"message": f"Collection '{slug}' updated successfully"}

    async def make_collection_public(self, site_id: str, slug: str) -> dict[str, str]:
        key = self.layout.records_key(site_id, slug)
        if await self.store.head(key) is None:
            raise NotFoundError(
                f"Data file for collection '{slug}' not found", code="COLLECTION_FILE_NOT_FOUND"
            )
        await self.store.set_acl(key, "public-read")
        logger.info("Collection data made public", site_id=site_id, slug=slug)
        return {"message": f"Collection '{slug}' is now public"}
