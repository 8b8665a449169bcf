"""Key/value JSON object store used by the admin API server.

The server treats durable storage as a blob store with get/put/delete/list
and per-object access control. :class:`MemoryObjectStore` backs development
and tests; :class:`~bucketbase.infrastructure.storage.s3_object_store.S3ObjectStore`
backs production.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal

from bucketbase.core.exceptions import MalformedError, NotFoundError

ObjectAcl = Literal["private", "public-read"]


@dataclass(slots=True)
class ObjectMetadata:
    last_modified: datetime | None
    size: int | None
    content_type: str | None = None


def dump_json(data: Any) -> bytes:
    """Serialize a payload the way every stored object is written (indented)."""
    return json.dumps(data, indent=2).encode("utf-8")


def load_json(key: str, body: bytes) -> Any:
    try:
        return json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedError(f"Failed to parse {key}: {e}") from e


class ObjectStore(ABC):
    """Abstract base class for object stores."""

    @abstractmethod
    async def get_json(self, key: str) -> Any | None:
        """Read and parse a JSON object.

        Returns:
            The parsed payload, or None when the key does not exist.

        Raises:
            MalformedError: The object is not valid JSON.
        """
        ...

    @abstractmethod
    async def put_json(self, key: str, data: Any, acl: ObjectAcl = "private") -> None:
        ...

    @abstractmethod
    async def head(self, key: str) -> ObjectMetadata | None:
        """Object metadata, or None when the key does not exist."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        ...

    @abstractmethod
    async def list_prefixes(self, prefix: str, delimiter: str = "/") -> list[str]:
        """Common prefixes ("directories") directly below ``prefix``."""
        ...

    @abstractmethod
    async def is_public(self, key: str) -> bool:
        """Whether anonymous users can read the object; False when unknown."""
        ...

    @abstractmethod
    async def set_acl(self, key: str, acl: ObjectAcl) -> None:
        """Change an existing object's ACL.

        Raises:
            NotFoundError: The key does not exist.
        """
        ...

    @abstractmethod
    async def presigned_get_url(self, key: str, expires_in: int = 3600) -> str:
        ...


@dataclass
class _StoredObject:
    body: bytes
    acl: ObjectAcl
    last_modified: datetime


class MemoryObjectStore(ObjectStore):
    """Process-local object store."""

    def __init__(self, base_url: str = "memory://bucketbase") -> None:
        self.base_url = base_url.rstrip("/")
        self._objects: dict[str, _StoredObject] = {}

    async def get_json(self, key: str) -> Any | None:
        stored = self._objects.get(key)
        if stored is None:
            return None
        return load_json(key, stored.body)

    async def put_json(self, key: str, data: Any, acl: ObjectAcl = "private") -> None:
        self._objects[key] = _StoredObject(
            body=dump_json(data), acl=acl, last_modified=datetime.now(timezone.utc)
        )

    def put_raw(self, key: str, body: bytes, acl: ObjectAcl = "private") -> None:
        """Store bytes as-is (used to seed broken payloads in tests)."""
        self._objects[key] = _StoredObject(
            body=body, acl=acl, last_modified=datetime.now(timezone.utc)
        )

    async def head(self, key: str) -> ObjectMetadata | None:
        stored = self._objects.get(key)
        if stored is None:
            return None
        return ObjectMetadata(
            last_modified=stored.last_modified,
            size=len(stored.body),
            content_type="application/json",
        )

    async def delete(self, key: str) -> None:
        self._objects.pop(key, None)

    async def list_prefixes(self, prefix: str, delimiter: str = "/") -> list[str]:
        prefixes: set[str] = set()
        for key in self._objects:
            if not key.startswith(prefix):
                continue
            rest = key[len(prefix) :]
            if delimiter in rest:
                prefixes.add(prefix + rest.split(delimiter, 1)[0] + delimiter)
        return sorted(prefixes)

    async def is_public(self, key: str) -> bool:
        stored = self._objects.get(key)
        return stored is not None and stored.acl == "public-read"

    async def set_acl(self, key: str, acl: ObjectAcl) -> None:
        stored = self._objects.get(key)
        if stored is None:
            raise NotFoundError(f"Object not found: {key}")
        stored.acl = acl

    async def presigned_get_url(self, key: str, expires_in: int = 3600) -> str:
        return f"{self.base_url}/{key}?expires_in={expires_in}"

    def keys(self) -> list[str]:
        return sorted(self._objects)
