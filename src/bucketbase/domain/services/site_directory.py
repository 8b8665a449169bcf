"""Site directory.

Lists, creates, updates and deletes sites, and seeds new sites from a
template. Template seeding creates collections one at a time through the
schema registry without rollback: when one fails, the collections created
before it stay and :class:`SiteProvisioningError` reports which ones they are.
"""

from collections.abc import Mapping
from typing import Any

from bucketbase.core.exceptions import (
    BucketBaseError,
    InvalidInputError,
    NotFoundError,
    SiteProvisioningError,
)
from bucketbase.core.logging import get_logger
from bucketbase.domain.entities import DEFAULT_SITE_ID, Site, is_valid_site_id
from bucketbase.domain.services.schema_registry import SchemaRegistry
from bucketbase.domain.services.site_scope import SiteScope
from bucketbase.domain.services.site_templates import SiteTemplate, get_site_template
from bucketbase.infrastructure.storage.base import StorageBackend

logger = get_logger(__name__)


class SiteDirectory:
    """Site metadata management on top of a storage backend."""

    def __init__(
        self,
        backend: StorageBackend,
        scope: SiteScope,
        schemas: SchemaRegistry,
    ) -> None:
        self.backend = backend
        self.scope = scope
        self.schemas = schemas

    async def list_sites(self) -> list[Site]:
        """All sites, default first when the backend does not report it."""
        sites = await self.backend.list_sites()
        if not any(site.id == DEFAULT_SITE_ID for site in sites):
            sites.insert(0, Site(id=DEFAULT_SITE_ID, name="Default Site"))
        return sites

    async def get_site(self, site_id: str) -> Site:
        return await self.backend.get_site(site_id)

    async def create_site(
        self,
        site_id: str,
        name: str,
        description: str | None = None,
        template_id: str | None = None,
        created_by: str | None = None,
    ) -> Site:
        """Create a site, optionally seeding collections from a template.

        When the template has collections the new site becomes the active
        site and stays active afterwards.

        Raises:
            InvalidInputError: Bad id or missing name.
            NotFoundError: Unknown template (checked before anything is written).
            ConflictError: The site already exists.
            SiteProvisioningError: A template collection failed.
        """
        if not is_valid_site_id(site_id):
            raise InvalidInputError(
                "Site ID must contain only lowercase letters, numbers, and hyphens"
            )
        if not name:
            raise InvalidInputError("Site name is required")

        template: SiteTemplate | None = None
        if template_id:
            template = get_site_template(template_id)
            if template is None:
                raise NotFoundError(f"Site template '{template_id}' not found")

        site = await self.backend.create_site(
            Site(
                id=site_id,
                name=name,
                description=description or f"{name} site",
                created_by=created_by,
            )
        )
        logger.info("Site created", site_id=site_id, template_id=template_id)

        if template is not None and template.collections:
            await self._seed(site_id, template)
        return site

    async def _seed(self, site_id: str, template: SiteTemplate) -> None:
        self.scope.switch_site(site_id)
        created: list[str] = []
        for collection in template.collections:
            try:
                await self.schemas.create_collection(
                    name=collection.name,
                    slug=collection.slug,
                    description=collection.description,
                    fields=collection.build_fields(),
                )
            except BucketBaseError as e:
                logger.error(
                    "Site template provisioning stopped",
                    site_id=site_id,
                    template_id=template.id,
                    created=created,
                    failed=collection.slug,
                    error=e.message,
                )
                raise SiteProvisioningError(
                    f"Failed to create collection '{collection.slug}' for site "
                    f"'{site_id}': {e.message}",
                    site_id=site_id,
                    created_slugs=list(created),
                    failed_slug=collection.slug,
                ) from e
            created.append(collection.slug)
        logger.info("Site seeded from template", site_id=site_id, template_id=template.id)

    async def update_site(self, site_id: str, updates: Mapping[str, Any]) -> Site:
        """Merge ``updates`` into a site's metadata.

        Raises:
            InvalidInputError: The update tries to change the id.
            NotFoundError: The site does not exist.
        """
        if "id" in updates and updates["id"] != site_id:
            raise InvalidInputError("Site ID cannot be changed")
        changes = {k: v for k, v in updates.items() if k != "id"}
        site = await self.backend.update_site(site_id, changes)
        logger.info("Site updated", site_id=site_id)
        return site

    async def delete_site(self, site_id: str) -> None:
        """Delete a site's metadata and schema; its record objects are kept.

        Anything cached for the site is dropped. The default site becomes
        active when the deleted site was active.

        Raises:
            InvalidInputError: ``site_id`` is the default site.
            NotFoundError: The site does not exist.
        """
        if site_id == DEFAULT_SITE_ID:
            raise InvalidInputError("Cannot delete the default site")
        await self.backend.delete_site(site_id)
        self.scope.cache.clear_site(site_id)
        if self.scope.site_id == site_id:
            self.scope.switch_site(DEFAULT_SITE_ID)
        logger.info("Site deleted", site_id=site_id)
