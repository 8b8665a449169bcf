"""Backend and object store construction from settings.

The host application calls these once at startup and injects the results.
There is no fallback: a misconfigured choice surfaces as an error on first
use instead of silently switching to another backend.
"""

from bucketbase.core.config import Settings
from bucketbase.core.logging import get_logger
from bucketbase.infrastructure.auth.token_provider import TokenProvider
from bucketbase.infrastructure.storage.base import StorageBackend
from bucketbase.infrastructure.storage.embedded_backend import EmbeddedBackend
from bucketbase.infrastructure.storage.layout import get_layout
from bucketbase.infrastructure.storage.object_store import MemoryObjectStore, ObjectStore
from bucketbase.infrastructure.storage.remote_backend import RemoteBackend
from bucketbase.infrastructure.storage.s3_object_store import S3ObjectStore, S3StorageSettings

logger = get_logger(__name__)


def create_backend(settings: Settings, token_provider: TokenProvider) -> StorageBackend:
    """Build the console's storage backend selected by ``storage_backend``."""
    if settings.storage_backend == "remote":
        logger.info(
            "Using remote storage backend",
            content_base_url=settings.content_base_url,
            api_base_url=settings.api_base_url,
            layout=settings.storage_layout,
        )
        return RemoteBackend(
            content_base_url=settings.content_base_url,
            api_base_url=settings.api_base_url,
            token_provider=token_provider,
            layout=get_layout(settings.storage_layout),
            timeout=settings.http_timeout_seconds,
        )

    logger.info("Using embedded storage backend", bundle_path=settings.bundle_path)
    return EmbeddedBackend(bundle_path=settings.bundle_path)


def create_object_store(settings: Settings) -> ObjectStore:
    """Build the API server's object store selected by ``object_store``."""
    if settings.object_store == "s3":
        logger.info("Using S3 object store", bucket=settings.s3_bucket, region=settings.s3_region)
        return S3ObjectStore(S3StorageSettings.from_settings(settings))

    logger.info("Using in-memory object store")
    return MemoryObjectStore()
