"""Embedded (bundled) storage backend.

Schemas and records are read once from a bundle directory of JSON payloads
laid out as::

    sites/{site_id}/schema.json
    sites/{site_id}/site-metadata.json
    sites/{site_id}/collections/{slug}.json
    images/...

Writes update process memory only. They are lost on restart, which is
logged as a warning on every write.
"""

import copy
import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from bucketbase.core.exceptions import (
    ConflictError,
    MalformedError,
    NotConfiguredError,
    NotFoundError,
)
from bucketbase.core.logging import get_logger
from bucketbase.domain.entities import (
    DEFAULT_SITE_ID,
    CollectionRecord,
    CollectionSchema,
    Site,
    utc_now_iso,
)
from bucketbase.infrastructure.storage.base import SchemaFileMetadata, StorageBackend
from bucketbase.infrastructure.storage.layout import EMBEDDED_LAYOUT, SITES_PREFIX

logger = get_logger(__name__)

DEFAULT_BUNDLE_PATH = Path(__file__).resolve().parents[2] / "data" / "sample"


def _parse_record(item: Any, slug: str) -> CollectionRecord:
    if not isinstance(item, dict):
        raise MalformedError(f"Invalid record in {slug}.json - expected an object")
    # Older bundles store bare field mappings instead of {id, data, ...}
    if not isinstance(item.get("data"), dict):
        now = utc_now_iso()
        fields = {k: v for k, v in item.items() if k not in ("id", "createdAt", "updatedAt")}
        item = {
            "id": item.get("id") or str(uuid.uuid4()),
            "data": fields,
            "createdAt": item.get("createdAt") or now,
            "updatedAt": item.get("updatedAt") or now,
        }
    try:
        return CollectionRecord.from_dict(item)
    except (KeyError, ValueError) as e:
        raise MalformedError(f"Invalid record in {slug}.json: {e}") from e


class EmbeddedBackend(StorageBackend):
    """Read-only bundle with in-memory, non-durable writes."""

    def __init__(self, bundle_path: str | Path | None = None, site_id: str = DEFAULT_SITE_ID):
        super().__init__(site_id)
        self.bundle_path = Path(bundle_path) if bundle_path else DEFAULT_BUNDLE_PATH
        self.layout = EMBEDDED_LAYOUT
        self._schemas: dict[str, list[CollectionSchema]] = {}
        self._records: dict[tuple[str, str], list[CollectionRecord]] = {}
        self._sites: dict[str, Site] | None = None
        self._deleted_sites: set[str] = set()

    def _read_json(self, key: str) -> Any | None:
        if not self.bundle_path.is_dir():
            raise NotConfiguredError(f"Bundle directory not found: {self.bundle_path}")
        path = self.bundle_path / key
        if not path.is_file():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise MalformedError(f"Failed to parse {key}: {e}") from e

    @staticmethod
    def _not_persisted(what: str, **kw: Any) -> None:
        logger.warning(
            f"Embedded storage: {what} not persisted, changes are lost on restart", **kw
        )

    # Content

    async def get_schema(self, site_id: str | None = None) -> list[CollectionSchema]:
        site_id = self._target(site_id)
        if site_id in self._deleted_sites:
            raise NotFoundError(f"Site '{site_id}' has been deleted")
        if site_id not in self._schemas:
            payload = self._read_json(self.layout.schema_key(site_id))
            if payload is None:
                raise NotFoundError(f"Schema for site '{site_id}' not found in bundle")
            if not isinstance(payload, list):
                raise MalformedError("Invalid schema format - expected array")
            try:
                self._schemas[site_id] = [CollectionSchema.from_dict(c) for c in payload]
            except (KeyError, TypeError, ValueError) as e:
                raise MalformedError(f"Invalid collection in schema.json: {e}") from e
            logger.debug("Bundled schema loaded", site_id=site_id, count=len(payload))
        return copy.deepcopy(self._schemas[site_id])

    async def get_collection_data(
        self, slug: str, site_id: str | None = None
    ) -> list[CollectionRecord]:
        key = (self._target(site_id), slug)
        if key not in self._records:
            payload = self._read_json(self.layout.records_key(key[0], slug))
            if payload is None:
                payload = []
            if not isinstance(payload, list):
                raise MalformedError(f"Invalid data format for {slug}.json - expected array")
            self._records[key] = [_parse_record(item, slug) for item in payload]
        return copy.deepcopy(self._records[key])

    async def update_schema(
        self, schemas: list[CollectionSchema], site_id: str | None = None
    ) -> None:
        site_id = self._target(site_id)
        self._schemas[site_id] = copy.deepcopy(schemas)
        self._not_persisted("schema update", site_id=site_id, count=len(schemas))

    async def save_collection_data(
        self, slug: str, records: list[CollectionRecord], site_id: str | None = None
    ) -> None:
        site_id = self._target(site_id)
        self._records[(site_id, slug)] = copy.deepcopy(records)
        self._not_persisted("collection data", site_id=site_id, slug=slug, count=len(records))

    # URLs and visibility

    def get_raw_data_url(self, slug: str, cache_bust: bool = False) -> str:
        return ""

    async def get_image_url(self, image_path: str) -> str:
        if not image_path:
            return ""
        if image_path.startswith(("http://", "https://", "data:")):
            return image_path
        path = self.bundle_path / "images" / image_path.lstrip("/")
        if not path.is_file():
            logger.warning("Image not found in bundle", image_path=image_path)
            return ""
        return path.resolve().as_uri()

    def is_remote_storage(self) -> bool:
        return False

    async def make_collection_public(self, slug: str) -> None:
        logger.debug("Embedded storage has no access control", slug=slug)

    async def get_schema_metadata(self) -> SchemaFileMetadata:
        path = self.bundle_path / self.layout.schema_key(self.site_id)
        if not path.is_file():
            return SchemaFileMetadata(last_modified=None, size=None, is_public=False)
        stat = path.stat()
        modified = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)
        return SchemaFileMetadata(
            last_modified=modified.isoformat().replace("+00:00", "Z"),
            size=stat.st_size,
            is_public=False,
        )

    async def get_schema_presigned_url(self) -> str:
        path = self.bundle_path / self.layout.schema_key(self.site_id)
        return path.resolve().as_uri() if path.is_file() else ""

    async def make_schema_private(self) -> None:
        return None

    # Sites

    def _load_sites(self) -> dict[str, Site]:
        if self._sites is None:
            if not self.bundle_path.is_dir():
                raise NotConfiguredError(f"Bundle directory not found: {self.bundle_path}")
            sites: dict[str, Site] = {}
            sites_dir = self.bundle_path / SITES_PREFIX
            if sites_dir.is_dir():
                for entry in sorted(sites_dir.iterdir()):
                    if not entry.is_dir():
                        continue
                    metadata = self._read_json(self.layout.metadata_key(entry.name))
                    if isinstance(metadata, dict) and metadata.get("id"):
                        sites[entry.name] = Site.from_dict(metadata)
                    else:
                        sites[entry.name] = Site.placeholder(entry.name)
            sites.setdefault(DEFAULT_SITE_ID, Site(id=DEFAULT_SITE_ID, name="Default Site"))
            self._sites = sites
        return self._sites

    async def list_sites(self) -> list[Site]:
        return copy.deepcopy(list(self._load_sites().values()))

    async def get_site(self, site_id: str) -> Site:
        site = self._load_sites().get(site_id)
        if site is None:
            raise NotFoundError(f"Site '{site_id}' not found")
        return copy.deepcopy(site)

    async def create_site(self, site: Site) -> Site:
        sites = self._load_sites()
        if site.id in sites:
            raise ConflictError(f"Site with ID '{site.id}' already exists")
        sites[site.id] = copy.deepcopy(site)
        self._schemas[site.id] = []
        self._deleted_sites.discard(site.id)
        self._not_persisted("new site", site_id=site.id)
        return copy.deepcopy(site)

    async def update_site(self, site_id: str, updates: dict[str, Any]) -> Site:
        sites = self._load_sites()
        if site_id not in sites:
            raise NotFoundError(f"Site '{site_id}' not found")
        current = sites[site_id].to_dict()
        merged = {
            **current,
            **updates,
            "id": site_id,
            "createdAt": current["createdAt"],
            "updatedAt": utc_now_iso(),
        }
        sites[site_id] = Site.from_dict(merged)
        self._not_persisted("site update", site_id=site_id)
        return copy.deepcopy(sites[site_id])

    async def delete_site(self, site_id: str) -> None:
        sites = self._load_sites()
        if site_id not in sites:
            raise NotFoundError(f"Site '{site_id}' not found")
        del sites[site_id]
        self._schemas.pop(site_id, None)
        self._deleted_sites.add(site_id)
        self._not_persisted("site deletion", site_id=site_id)
