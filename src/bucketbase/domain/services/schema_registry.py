"""Schema registry.

CRUD over the active site's collection schemas. Reads go through the shared
:class:`StorageCache`; writes mutate the cache first and then persist the
entire schema list through the storage backend. A failed persist leaves the
cache ahead of durable storage; the error propagates to the caller.

Each operation resolves the active site once and reads and writes that site
only, even if the console switches site while the operation is suspended.
"""

import copy
import dataclasses
from collections.abc import Iterable, Mapping
from typing import Any

from bucketbase.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from bucketbase.core.logging import get_logger
from bucketbase.domain.entities import CollectionSchema, FieldDefinition, utc_now_iso
from bucketbase.domain.services.slug_generator import SlugGenerator
from bucketbase.domain.services.storage_cache import StorageCache
from bucketbase.infrastructure.storage.base import StorageBackend

logger = get_logger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "description", "fields"})


def _coerce_fields(
    fields: Iterable[FieldDefinition | Mapping[str, Any]] | None,
) -> list[FieldDefinition]:
    if not isinstance(fields, Iterable) or isinstance(fields, (str, bytes, Mapping)):
        raise InvalidInputError("Collection fields must be a list of field definitions")
    coerced = []
    for f in fields:
        if isinstance(f, FieldDefinition):
            coerced.append(copy.deepcopy(f))
        else:
            try:
                coerced.append(FieldDefinition.from_dict(dict(f)))
            except (KeyError, TypeError, ValueError) as e:
                raise InvalidInputError(f"Invalid field definition: {e}") from e
    return coerced


class SchemaRegistry:
    """Collection schema CRUD scoped to the backend's active site."""

    def __init__(self, backend: StorageBackend, cache: StorageCache) -> None:
        self.backend = backend
        self.cache = cache

    @property
    def site_id(self) -> str:
        return self.backend.site_id

    async def _load(self, site_id: str) -> list[CollectionSchema]:
        """Return the cached list for ``site_id``, fetching it on first use."""
        collections = self.cache.get_collections(site_id)
        if collections is None:
            collections = await self.backend.get_schema(site_id=site_id)
            self.cache.set_collections(site_id, collections)
            logger.debug("Schema loaded", site_id=site_id, count=len(collections))
        return collections

    async def get_collections(self) -> list[CollectionSchema]:
        """All collections of the active site (a copy; safe to mutate)."""
        return copy.deepcopy(await self._load(self.site_id))

    async def get_collection(
        self, slug: str, site_id: str | None = None
    ) -> CollectionSchema | None:
        """Look up a collection of the active site, or of ``site_id`` when given."""
        for collection in await self._load(site_id or self.site_id):
            if collection.slug == slug:
                return copy.deepcopy(collection)
        return None

    async def create_collection(
        self,
        name: str,
        slug: str | None = None,
        description: str = "",
        fields: Iterable[FieldDefinition | Mapping[str, Any]] = (),
    ) -> CollectionSchema:
        """Create a collection and persist the full schema list.

        The slug is generated from ``name`` when omitted.

        Raises:
            InvalidInputError: The slug or a field definition is invalid.
            ConflictError: A collection with the slug already exists.
        """
        if not name:
            raise InvalidInputError("Collection name is required")
        slug = slug if slug is not None else SlugGenerator.generate(name)
        errors = SlugGenerator.validate(slug)
        if errors:
            raise InvalidInputError("; ".join(e.message for e in errors))

        site_id = self.site_id
        collections = await self._load(site_id)
        if any(c.slug == slug for c in collections):
            raise ConflictError(f"Collection with slug '{slug}' already exists")

        now = utc_now_iso()
        collection = CollectionSchema(
            name=name,
            slug=slug,
            description=description or "",
            fields=_coerce_fields(fields),
            created_at=now,
            updated_at=now,
        )
        collections.append(collection)
        await self.backend.update_schema(collections, site_id=site_id)

        logger.info("Collection created", site_id=site_id, slug=slug)
        return copy.deepcopy(collection)

    async def update_collection(self, slug: str, updates: Mapping[str, Any]) -> CollectionSchema:
        """Merge ``updates`` (name, description, fields) into a collection.

        Raises:
            NotFoundError: No collection has the slug.
            InvalidInputError: The update tries to change the slug or an
                unknown attribute.
        """
        site_id = self.site_id
        collections = await self._load(site_id)
        index = next((i for i, c in enumerate(collections) if c.slug == slug), None)
        if index is None:
            raise NotFoundError(f"Collection with slug '{slug}' not found")

        changes: dict[str, Any] = {}
        for key, value in updates.items():
            if key == "slug":
                if value != slug:
                    raise InvalidInputError("Collection slug cannot be changed")
                continue
            if key in ("createdAt", "created_at", "updatedAt", "updated_at"):
                continue
            if key not in UPDATABLE_FIELDS:
                raise InvalidInputError(f"Unknown collection attribute: {key}")
            changes[key] = _coerce_fields(value) if key == "fields" else value

        try:
            updated = dataclasses.replace(collections[index], **changes, updated_at=utc_now_iso())
        except ValueError as e:
            raise InvalidInputError(str(e)) from e
        collections[index] = updated
        await self.backend.update_schema(collections, site_id=site_id)

        logger.info("Collection updated", site_id=site_id, slug=slug)
        return copy.deepcopy(updated)

    async def delete_collection(self, slug: str) -> None:
        """Remove a collection and persist the remaining list.

        Record objects stay in storage; only the cached records are dropped.

        Raises:
            NotFoundError: Nothing was removed.
        """
        site_id = self.site_id
        collections = await self._load(site_id)
        remaining = [c for c in collections if c.slug != slug]
        if len(remaining) == len(collections):
            raise NotFoundError(f"Collection with slug '{slug}' not found")

        collections[:] = remaining
        self.cache.drop_records(site_id, slug)
        await self.backend.update_schema(collections, site_id=site_id)

        logger.info("Collection deleted", site_id=site_id, slug=slug)
