"""Unit tests for backend and object store selection."""

from bucketbase.core.config import Settings
from bucketbase.infrastructure.auth import TokenStore
from bucketbase.infrastructure.storage import (
    EmbeddedBackend,
    MemoryObjectStore,
    RemoteBackend,
    S3ObjectStore,
    create_backend,
    create_object_store,
)
from bucketbase.infrastructure.storage.layout import LEGACY_LAYOUT


def test_embedded_backend_by_default(tmp_path):
    settings = Settings(_env_file=None, bundle_path=str(tmp_path))

    backend = create_backend(settings, TokenStore())

    assert isinstance(backend, EmbeddedBackend)
    assert backend.bundle_path == tmp_path


def test_remote_backend_uses_settings():
    tokens = TokenStore()
    settings = Settings(
        _env_file=None,
        storage_backend="remote",
        content_base_url="https://cdn.test/bucket/",
        api_base_url="https://api.test/api",
        storage_layout="legacy",
    )

    backend = create_backend(settings, tokens)

    assert isinstance(backend, RemoteBackend)
    assert backend.content_base_url == "https://cdn.test/bucket"
    assert backend.layout is LEGACY_LAYOUT
    assert backend.token_provider is tokens


def test_memory_object_store_by_default():
    assert isinstance(create_object_store(Settings(_env_file=None)), MemoryObjectStore)


def test_s3_object_store():
    settings = Settings(_env_file=None, object_store="s3", s3_bucket="content")

    store = create_object_store(settings)

    assert isinstance(store, S3ObjectStore)
    assert store.settings.bucket == "content"
