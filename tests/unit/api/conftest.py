"""Fixtures for admin API tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from bucketbase.core.config import Settings
from bucketbase.infrastructure.api.app import create_app
from bucketbase.infrastructure.auth import jwt_service
from bucketbase.infrastructure.storage.object_store import MemoryObjectStore


@pytest.fixture
def object_store() -> MemoryObjectStore:
    return MemoryObjectStore()


@pytest.fixture
def api_settings() -> Settings:
    return Settings(
        _env_file=None,
        environment="testing",
        admin_username="admin",
        admin_password="correct-horse",
        presigned_url_expire_seconds=600,
    )


@pytest.fixture
def app(api_settings: Settings, object_store: MemoryObjectStore) -> FastAPI:
    return create_app(api_settings, object_store)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_headers() -> dict[str, str]:
    token = jwt_service.create_access_token(subject="admin")
    return {"Authorization": f"Bearer {token}"}
