"""Site metadata administration for the admin API.

Sites always live under ``sites/{id}/``. A site exists when its schema file
does; the metadata file is optional and a default entry named after the id is
reported when it is missing or unreadable.
"""

from typing import Any

from bucketbase.core.exceptions import (
    ConflictError,
    InvalidInputError,
    MalformedError,
    NotFoundError,
)
from bucketbase.core.logging import get_logger
from bucketbase.domain.entities import DEFAULT_SITE_ID, Site, is_valid_site_id, utc_now_iso
from bucketbase.infrastructure.storage.layout import SITE_LAYOUT, SITES_PREFIX, site_id_from_key
from bucketbase.infrastructure.storage.object_store import ObjectStore

logger = get_logger(__name__)


def _site_not_found(site_id: str) -> NotFoundError:
    return NotFoundError(f"Site with ID '{site_id}' not found.", code="SITE_NOT_FOUND")


class SiteAdminService:
    """CRUD over site metadata objects."""

    def __init__(self, store: ObjectStore) -> None:
        self.store = store
        self.layout = SITE_LAYOUT

    async def _read_metadata(self, site_id: str) -> Site | None:
        data = await self.store.get_json(self.layout.metadata_key(site_id))
        if data is None:
            return None
        if not isinstance(data, dict):
            raise MalformedError(f"Metadata of site '{site_id}' is not an object")
        # The directory name wins over whatever id the file carries
        return Site.from_dict({**data, "id": site_id})

    async def list_sites(self) -> list[Site]:
        prefixes = await self.store.list_prefixes(SITES_PREFIX, "/")
        sites: list[Site] = []
        for prefix in prefixes:
            site_id = site_id_from_key(prefix)
            if site_id is None:
                continue
            try:
                site = await self._read_metadata(site_id)
            except MalformedError as e:
                logger.warning("Unreadable site metadata", site_id=site_id, error=e.message)
                site = None
            sites.append(site or Site.placeholder(site_id))
        logger.info("Sites listed", count=len(sites))
        return sites

    async def get_site(self, site_id: str) -> Site:
        site = await self._read_metadata(site_id)
        if site is not None:
            return site
        if await self.store.head(self.layout.schema_key(site_id)) is not None:
            logger.info("No metadata file for site, using default", site_id=site_id)
            return Site.placeholder(site_id)
        raise _site_not_found(site_id)

    async def create_site(self, data: dict[str, Any]) -> Site:
        site_id = data.get("id")
        name = data.get("name")
        if not site_id or not name:
            raise InvalidInputError("Site ID and name are required.")
        if not is_valid_site_id(site_id):
            raise InvalidInputError(
                "Site ID must contain only lowercase letters, numbers, and hyphens."
            )

        metadata_key = self.layout.metadata_key(site_id)
        schema_key = self.layout.schema_key(site_id)
        if (
            await self.store.head(metadata_key) is not None
            or await self.store.head(schema_key) is not None
        ):
            raise ConflictError(
                f"Site with ID '{site_id}' already exists.", code="SITE_ALREADY_EXISTS"
            )

        now = utc_now_iso()
        site = Site(
            id=site_id,
            name=name,
            description=data.get("description"),
            created_at=now,
            updated_at=now,
            created_by=data.get("createdBy"),
        )
        await self.store.put_json(metadata_key, site.to_dict())
        await self.store.put_json(schema_key, [])
        logger.info("Site created", site_id=site_id)
        return site

    async def update_site(self, site_id: str, updates: dict[str, Any]) -> Site:
        current = await self._read_metadata(site_id)
        if current is None:
            if await self.store.head(self.layout.schema_key(site_id)) is None:
                raise _site_not_found(site_id)
            current = Site.placeholder(site_id)

        if updates.get("id") and updates["id"] != site_id:
            raise InvalidInputError("Site ID cannot be changed.")

        merged = {
            **current.to_dict(),
            **updates,
            "id": site_id,
            "updatedAt": utc_now_iso(),
        }
        site = Site.from_dict(merged)
        await self.store.put_json(self.layout.metadata_key(site_id), site.to_dict())
        logger.info("Site updated", site_id=site_id)
        return site

    async def delete_site(self, site_id: str) -> dict[str, str]:
        if site_id == DEFAULT_SITE_ID:
            raise InvalidInputError("The default site cannot be deleted.")
        if await self.store.head(self.layout.schema_key(site_id)) is None:
            raise _site_not_found(site_id)

        # Collection data objects are left in place
        await self.store.delete(self.layout.metadata_key(site_id))
        await self.store.delete(self.layout.schema_key(site_id))
        logger.info("Site deleted", site_id=site_id)
        return {"message": f"Site '{site_id}' has been deleted."}
