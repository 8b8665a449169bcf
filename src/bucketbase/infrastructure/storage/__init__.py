"""Storage backends, key layouts and object stores."""

from bucketbase.infrastructure.storage.base import SchemaFileMetadata, StorageBackend
from bucketbase.infrastructure.storage.embedded_backend import EmbeddedBackend
from bucketbase.infrastructure.storage.factory import create_backend, create_object_store
from bucketbase.infrastructure.storage.layout import (
    EMBEDDED_LAYOUT,
    LEGACY_LAYOUT,
    SITE_LAYOUT,
    StorageLayout,
    get_layout,
)
from bucketbase.infrastructure.storage.object_store import (
    MemoryObjectStore,
    ObjectMetadata,
    ObjectStore,
)
from bucketbase.infrastructure.storage.remote_backend import RemoteBackend
from bucketbase.infrastructure.storage.s3_object_store import S3ObjectStore, S3StorageSettings

__all__ = [
    "EMBEDDED_LAYOUT",
    "EmbeddedBackend",
    "LEGACY_LAYOUT",
    "MemoryObjectStore",
    "ObjectMetadata",
    "ObjectStore",
    "RemoteBackend",
    "S3ObjectStore",
    "S3StorageSettings",
    "SITE_LAYOUT",
    "SchemaFileMetadata",
    "StorageBackend",
    "StorageLayout",
    "create_backend",
    "create_object_store",
    "get_layout",
]
