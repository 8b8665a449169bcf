"""Pytest configuration for all tests."""

import asyncio
import copy
import json
from pathlib import Path
from typing import Any

import pytest

from bucketbase.core.exceptions import ConflictError, NotFoundError, WriteError
from bucketbase.domain.entities import (
    DEFAULT_SITE_ID,
    CollectionRecord,
    CollectionSchema,
    Site,
)
from bucketbase.domain.services import (
    RecordStore,
    SchemaRegistry,
    SiteDirectory,
    SiteScope,
    StorageCache,
)
from bucketbase.infrastructure.storage.base import SchemaFileMetadata, StorageBackend


class InMemoryBackend(StorageBackend):
    """Storage backend double that keeps durable state in dicts.

    Counts reads so cache behaviour can be asserted, and can be told to fail
    writes (``fail_schema_writes_after`` allows that many schema writes first).
    Setting ``read_gate`` suspends content reads until the event is set;
    ``read_suspended`` fires once a read is waiting on it.
    """

    def __init__(self, site_id: str = DEFAULT_SITE_ID) -> None:
        super().__init__(site_id)
        self.schemas: dict[str, list[dict[str, Any]]] = {DEFAULT_SITE_ID: []}
        self.records: dict[tuple[str, str], list[dict[str, Any]]] = {}
        self.sites: dict[str, Site] = {DEFAULT_SITE_ID: Site(id=DEFAULT_SITE_ID, name="Default Site")}
        self.schema_reads = 0
        self.record_reads = 0
        self.schema_writes = 0
        self.record_writes = 0
        self.public_collections: list[tuple[str, str]] = []
        self.fail_schema_writes_after: int | None = None
        self.fail_record_writes = False
        self.read_gate: asyncio.Event | None = None
        self.read_suspended = asyncio.Event()

    async def _wait_for_gate(self) -> None:
        if self.read_gate is not None:
            self.read_suspended.set()
            await self.read_gate.wait()

    async def get_schema(self, site_id: str | None = None) -> list[CollectionSchema]:
        site_id = self._target(site_id)
        self.schema_reads += 1
        await self._wait_for_gate()
        if site_id not in self.schemas:
            raise NotFoundError(f"Schema for site '{site_id}' not found")
        return [CollectionSchema.from_dict(c) for c in self.schemas[site_id]]

    async def get_collection_data(
        self, slug: str, site_id: str | None = None
    ) -> list[CollectionRecord]:
        site_id = self._target(site_id)
        self.record_reads += 1
        await self._wait_for_gate()
        return [CollectionRecord.from_dict(r) for r in self.records.get((site_id, slug), [])]

    async def update_schema(
        self, schemas: list[CollectionSchema], site_id: str | None = None
    ) -> None:
        if (
            self.fail_schema_writes_after is not None
            and self.schema_writes >= self.fail_schema_writes_after
        ):
            raise WriteError("schema write rejected", 500)
        self.schema_writes += 1
        self.schemas[self._target(site_id)] = [s.to_dict() for s in schemas]

    async def save_collection_data(
        self, slug: str, records: list[CollectionRecord], site_id: str | None = None
    ) -> None:
        if self.fail_record_writes:
            raise WriteError("record write rejected", 500)
        self.record_writes += 1
        self.records[(self._target(site_id), slug)] = [r.to_dict() for r in records]

    def get_raw_data_url(self, slug: str, cache_bust: bool = False) -> str:
        url = f"memory://{self.site_id}/{slug}.json"
        return f"{url}?t=1" if cache_bust else url

    async def get_image_url(self, image_path: str) -> str:
        return f"memory://images/{image_path}"

    def is_remote_storage(self) -> bool:
        return False

    async def make_collection_public(self, slug: str) -> None:
        self.public_collections.append((self.site_id, slug))

    async def get_schema_metadata(self) -> SchemaFileMetadata:
        return SchemaFileMetadata(last_modified=None, size=None, is_public=False)

    async def get_schema_presigned_url(self) -> str:
        return ""

    async def make_schema_private(self) -> None:
        return None

    async def list_sites(self) -> list[Site]:
        return [copy.deepcopy(s) for s in self.sites.values()]

    async def get_site(self, site_id: str) -> Site:
        if site_id not in self.sites:
            raise NotFoundError(f"Site '{site_id}' not found")
        return copy.deepcopy(self.sites[site_id])

    async def create_site(self, site: Site) -> Site:
        if site.id in self.sites:
            raise ConflictError(f"Site with ID '{site.id}' already exists")
        self.sites[site.id] = copy.deepcopy(site)
        self.schemas[site.id] = []
        return copy.deepcopy(site)

    async def update_site(self, site_id: str, updates: dict[str, Any]) -> Site:
        if site_id not in self.sites:
            raise NotFoundError(f"Site '{site_id}' not found")
        merged = {**self.sites[site_id].to_dict(), **updates, "id": site_id}
        self.sites[site_id] = Site.from_dict(merged)
        return copy.deepcopy(self.sites[site_id])

    async def delete_site(self, site_id: str) -> None:
        if site_id not in self.sites:
            raise NotFoundError(f"Site '{site_id}' not found")
        del self.sites[site_id]
        self.schemas.pop(site_id, None)


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def cache() -> StorageCache:
    return StorageCache()


@pytest.fixture
def scope(backend: InMemoryBackend, cache: StorageCache) -> SiteScope:
    return SiteScope(backend, cache)


@pytest.fixture
def schemas(backend: InMemoryBackend, cache: StorageCache, scope: SiteScope) -> SchemaRegistry:
    return SchemaRegistry(backend, cache)


@pytest.fixture
def records(
    backend: InMemoryBackend, cache: StorageCache, schemas: SchemaRegistry
) -> RecordStore:
    return RecordStore(backend, cache, schemas)


@pytest.fixture
def directory(
    backend: InMemoryBackend, scope: SiteScope, schemas: SchemaRegistry
) -> SiteDirectory:
    return SiteDirectory(backend, scope, schemas)


def write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def bundle(tmp_path: Path) -> Path:
    """A small bundle directory with one site, one collection and one image."""
    root = tmp_path / "bundle"
    write_json(
        root / "sites" / "default" / "schema.json",
        [
            {
                "name": "Products",
                "slug": "products",
                "description": "Shop items",
                "fields": [{"id": "f1", "name": "title", "type": "text", "required": True}],
                "createdAt": "2024-01-01T00:00:00.000Z",
                "updatedAt": "2024-01-01T00:00:00.000Z",
            }
        ],
    )
    write_json(
        root / "sites" / "default" / "site-metadata.json",
        {
            "id": "default",
            "name": "Main",
            "createdAt": "2024-01-01T00:00:00.000Z",
            "updatedAt": "2024-01-01T00:00:00.000Z",
        },
    )
    write_json(
        root / "sites" / "default" / "collections" / "products.json",
        [
            {
                "id": "r1",
                "data": {"title": "Widget"},
                "createdAt": "2024-01-01T00:00:00.000Z",
                "updatedAt": "2024-01-01T00:00:00.000Z",
            }
        ],
    )
    (root / "images").mkdir()
    (root / "images" / "logo.png").write_bytes(b"\x89PNG")
    return root
