"""Unit tests for SiteAdminService."""

import pytest

from bucketbase.application.services.site_admin_service import SiteAdminService
from bucketbase.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from bucketbase.infrastructure.storage.object_store import MemoryObjectStore


@pytest.fixture
def store() -> MemoryObjectStore:
    return MemoryObjectStore()


@pytest.fixture
def service(store) -> SiteAdminService:
    return SiteAdminService(store)


@pytest.mark.asyncio
async def test_create_site_writes_metadata_and_empty_schema(service, store):
    site = await service.create_site({"id": "shop", "name": "Shop", "createdBy": "admin"})

    assert site.created_by == "admin"
    assert await store.get_json("sites/shop/schema.json") == []
    metadata = await store.get_json("sites/shop/site-metadata.json")
    assert metadata["name"] == "Shop"
    assert metadata["createdAt"] == metadata["updatedAt"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "data",
    [{"name": "Shop"}, {"id": "shop"}, {"id": "Shop!", "name": "Shop"}],
)
async def test_create_site_validation(service, data):
    with pytest.raises(InvalidInputError):
        await service.create_site(data)


@pytest.mark.asyncio
async def test_create_existing_site(service):
    await service.create_site({"id": "shop", "name": "Shop"})

    with pytest.raises(ConflictError) as exc_info:
        await service.create_site({"id": "shop", "name": "Shop"})

    assert exc_info.value.code == "SITE_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_create_over_site_without_metadata_conflicts(service, store):
    await store.put_json("sites/default/schema.json", [])

    with pytest.raises(ConflictError):
        await service.create_site({"id": "default", "name": "Default"})


@pytest.mark.asyncio
async def test_list_sites_with_placeholders(service, store):
    await service.create_site({"id": "shop", "name": "Shop"})
    await store.put_json("sites/default/schema.json", [])
    store.put_raw("sites/broken/site-metadata.json", b"{")

    sites = await service.list_sites()

    assert [(s.id, s.name) for s in sites] == [
        ("broken", "broken"),
        ("default", "default"),
        ("shop", "Shop"),
    ]


@pytest.mark.asyncio
async def test_get_site(service, store):
    await service.create_site({"id": "shop", "name": "Shop"})
    await store.put_json("sites/legacy/schema.json", [])

    assert (await service.get_site("shop")).name == "Shop"
    assert (await service.get_site("legacy")).name == "legacy"


@pytest.mark.asyncio
async def test_get_missing_site(service):
    with pytest.raises(NotFoundError) as exc_info:
        await service.get_site("ghost")

    assert exc_info.value.code == "SITE_NOT_FOUND"


@pytest.mark.asyncio
async def test_update_site_merges(service):
    created = await service.create_site({"id": "shop", "name": "Shop", "description": "old"})

    updated = await service.update_site("shop", {"description": "new"})

    assert updated.name == "Shop"
    assert updated.description == "new"
    assert updated.created_at == created.created_at


@pytest.mark.asyncio
async def test_update_site_cannot_change_id(service):
    await service.create_site({"id": "shop", "name": "Shop"})

    with pytest.raises(InvalidInputError):
        await service.update_site("shop", {"id": "store"})


@pytest.mark.asyncio
async def test_update_missing_site(service):
    with pytest.raises(NotFoundError):
        await service.update_site("ghost", {"name": "Ghost"})


@pytest.mark.asyncio
async def test_delete_site_keeps_collection_data(service, store):
    await service.create_site({"id": "shop", "name": "Shop"})
    await store.put_json("sites/shop/items.json", [])

    await service.delete_site("shop")

    assert store.keys() == ["sites/shop/items.json"]


@pytest.mark.asyncio
async def test_default_site_cannot_be_deleted(service, store):
    await store.put_json("sites/default/schema.json", [])

    with pytest.raises(InvalidInputError):
        await service.delete_site("default")

    assert await store.get_json("sites/default/schema.json") == []


@pytest.mark.asyncio
async def test_delete_missing_site(service):
    with pytest.raises(NotFoundError):
        await service.delete_site("ghost")
