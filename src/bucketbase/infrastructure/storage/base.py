"""Storage backend contract.

A backend reads and writes one site's schema and collection records, resolves
asset URLs, and manages site metadata. The active site is held by the backend
itself and changed through :meth:`StorageBackend.set_site_id`, so every path
and URL it computes follows the site selected in the console.

Content reads and writes also accept an explicit ``site_id``. Callers that
span an ``await`` pin the site they started on, so a site switch in between
cannot redirect the write to another site's objects.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from bucketbase.domain.entities import (
    DEFAULT_SITE_ID,
    CollectionRecord,
    CollectionSchema,
    Site,
)


@dataclass(slots=True)
class SchemaFileMetadata:
    """Stored object information for a site's schema file."""

    last_modified: str | None
    size: int | None
    is_public: bool


class StorageBackend(ABC):
    """Abstract base class for storage backends."""

    def __init__(self, site_id: str = DEFAULT_SITE_ID) -> None:
        self._site_id = site_id

    @property
    def site_id(self) -> str:
        return self._site_id

    def set_site_id(self, site_id: str) -> None:
        """Re-target subsequent reads, writes and URLs to another site."""
        self._site_id = site_id

    def _target(self, site_id: str | None) -> str:
        return site_id if site_id is not None else self._site_id

    # Content

    @abstractmethod
    async def get_schema(self, site_id: str | None = None) -> list[CollectionSchema]:
        """Read a site's collection schemas (the active site by default)."""
        ...

    @abstractmethod
    async def get_collection_data(
        self, slug: str, site_id: str | None = None
    ) -> list[CollectionRecord]:
        """Read all records of a collection; empty when nothing is stored yet."""
        ...

    @abstractmethod
    async def update_schema(
        self, schemas: list[CollectionSchema], site_id: str | None = None
    ) -> None:
        """Replace a site's schema list (the active site by default)."""
        ...

    @abstractmethod
    async def save_collection_data(
        self, slug: str, records: list[CollectionRecord], site_id: str | None = None
    ) -> None:
        """Replace a collection's full record list."""
        ...

    # URLs and visibility

    @abstractmethod
    def get_raw_data_url(self, slug: str, cache_bust: bool = False) -> str:
        """Direct URL of a collection's backing object, or '' if there is none."""
        ...

    @abstractmethod
    async def get_image_url(self, image_path: str) -> str:
        """Resolve a relative asset reference to a usable URL ('' if unresolvable)."""
        ...

    @abstractmethod
    def is_remote_storage(self) -> bool:
        ...

    @abstractmethod
    async def make_collection_public(self, slug: str) -> None:
        ...

    @abstractmethod
    async def get_schema_metadata(self) -> SchemaFileMetadata:
        ...

    @abstractmethod
    async def get_schema_presigned_url(self) -> str:
        ...

    @abstractmethod
    async def make_schema_private(self) -> None:
        ...

    # Sites

    @abstractmethod
    async def list_sites(self) -> list[Site]:
        ...

    @abstractmethod
    async def get_site(self, site_id: str) -> Site:
        ...

    @abstractmethod
    async def create_site(self, site: Site) -> Site:
        """Write metadata and an empty schema for a new site."""
        ...

    @abstractmethod
    async def update_site(self, site_id: str, updates: dict[str, Any]) -> Site:
        ...

    @abstractmethod
    async def delete_site(self, site_id: str) -> None:
        """Delete the site's metadata and schema objects (records are kept)."""
        ...

    async def aclose(self) -> None:
        """Release network resources held by the backend."""
        return None
