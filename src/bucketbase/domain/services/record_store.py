"""Record store.

CRUD over the records of one collection in the active site. Every mutation
rewrites the collection's full record list through the storage backend; the
cache is updated first and is not rolled back when the write fails. The site
is resolved once per operation, so the write lands on the site it was read
from.
"""

import copy
import uuid
from collections.abc import Mapping
from typing import Any

from bucketbase.core.exceptions import NotFoundError
from bucketbase.core.logging import get_logger
from bucketbase.domain.entities import CollectionRecord, utc_now_iso
from bucketbase.domain.services.schema_registry import SchemaRegistry
from bucketbase.domain.services.storage_cache import StorageCache
from bucketbase.infrastructure.storage.base import StorageBackend

logger = get_logger(__name__)


class RecordStore:
    """Record CRUD for the collections of the backend's active site."""

    def __init__(
        self,
        backend: StorageBackend,
        cache: StorageCache,
        schemas: SchemaRegistry,
    ) -> None:
        self.backend = backend
        self.cache = cache
        self.schemas = schemas

    @property
    def site_id(self) -> str:
        return self.backend.site_id

    async def _require_collection(self, site_id: str, slug: str) -> None:
        if await self.schemas.get_collection(slug, site_id=site_id) is None:
            raise NotFoundError(f"Collection with slug '{slug}' not found")

    async def _load(self, site_id: str, slug: str) -> list[CollectionRecord]:
        records = self.cache.get_records(site_id, slug)
        if records is None:
            records = await self.backend.get_collection_data(slug, site_id=site_id)
            self.cache.set_records(site_id, slug, records)
            logger.debug("Records loaded", site_id=site_id, slug=slug, count=len(records))
        return records

    async def get_records(self, slug: str) -> list[CollectionRecord]:
        """All records of a collection.

        An unknown collection yields an empty list and a warning so that stale
        links stay browsable.
        """
        site_id = self.site_id
        if await self.schemas.get_collection(slug, site_id=site_id) is None:
            logger.warning(
                "Collection not found, returning no records", site_id=site_id, slug=slug
            )
            return []
        return copy.deepcopy(await self._load(site_id, slug))

    async def get_record(self, slug: str, record_id: str) -> CollectionRecord | None:
        for record in await self.get_records(slug):
            if record.id == record_id:
                return record
        return None

    async def create_record(self, slug: str, data: Mapping[str, Any]) -> CollectionRecord:
        """Append a record with a fresh id and persist the collection.

        Raises:
            NotFoundError: The collection does not exist.
        """
        site_id = self.site_id
        await self._require_collection(site_id, slug)
        records = await self._load(site_id, slug)

        now = utc_now_iso()
        record = CollectionRecord(
            id=str(uuid.uuid4()),
            data=copy.deepcopy(dict(data)),
            created_at=now,
            updated_at=now,
        )
        records.append(record)
        await self.backend.save_collection_data(slug, records, site_id=site_id)

        logger.info("Record created", site_id=site_id, slug=slug, record_id=record.id)
        return copy.deepcopy(record)

    async def update_record(
        self, slug: str, record_id: str, data: Mapping[str, Any]
    ) -> CollectionRecord:
        """Replace a record's data and persist the collection.

        Raises:
            NotFoundError: The collection or the record does not exist.
        """
        site_id = self.site_id
        await self._require_collection(site_id, slug)
        records = await self._load(site_id, slug)

        for index, record in enumerate(records):
            if record.id == record_id:
                break
        else:
            raise NotFoundError(f"Record '{record_id}' not found in collection '{slug}'")

        updated = CollectionRecord(
            id=record.id,
            data=copy.deepcopy(dict(data)),
            created_at=record.created_at,
            updated_at=utc_now_iso(),
        )
        records[index] = updated
        await self.backend.save_collection_data(slug, records, site_id=site_id)

        logger.info("Record updated", site_id=site_id, slug=slug, record_id=record_id)
        return copy.deepcopy(updated)

    async def delete_record(self, slug: str, record_id: str) -> None:
        """Remove a record and persist the collection.

        A missing id is logged, not raised; the list is persisted either way.

        Raises:
            NotFoundError: The collection does not exist.
        """
        site_id = self.site_id
        await self._require_collection(site_id, slug)
        records = await self._load(site_id, slug)

        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            logger.warning(
                "Record not found for deletion",
                site_id=site_id,
                slug=slug,
                record_id=record_id,
            )
        records[:] = remaining
        await self.backend.save_collection_data(slug, records, site_id=site_id)

        logger.info("Record deleted", site_id=site_id, slug=slug, record_id=record_id)

    def get_raw_data_url(self, slug: str, cache_bust: bool = True) -> str:
        return self.backend.get_raw_data_url(slug, cache_bust=cache_bust)

    async def get_image_url(self, image_path: str) -> str:
        return await self.backend.get_image_url(image_path)

    async def make_collection_public(self, slug: str) -> None:
        await self._require_collection(self.site_id, slug)
        await self.backend.make_collection_public(slug)
        logger.info("Collection made public", site_id=self.site_id, slug=slug)
