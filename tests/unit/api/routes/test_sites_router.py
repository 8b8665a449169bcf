"""Tests for the site metadata endpoints."""

import pytest


@pytest.mark.asyncio
async def test_create_site(client, admin_headers, object_store):
    response = await client.post(
        "/api/sites",
        json={"id": "shop", "name": "Shop", "description": "Online store"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["id"] == "shop"
    assert body["createdBy"] == "admin"
    assert body["createdAt"] == body["updatedAt"]
    assert await object_store.get_json("sites/shop/schema.json") == []


@pytest.mark.asyncio
async def test_create_site_missing_name_is_400(client, admin_headers):
    response = await client.post("/api/sites", json={"id": "shop"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Site ID and name are required."


@pytest.mark.asyncio
async def test_create_site_invalid_id(client, admin_headers):
    response = await client.post(
        "/api/sites", json={"id": "My Shop", "name": "Shop"}, headers=admin_headers
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_duplicate_site(client, admin_headers):
    await client.post("/api/sites", json={"id": "shop", "name": "Shop"}, headers=admin_headers)

    response = await client.post(
        "/api/sites", json={"id": "shop", "name": "Shop"}, headers=admin_headers
    )

    assert response.status_code == 409
    assert response.json()["errorType"] == "SITE_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_list_sites(client, admin_headers, object_store):
    await object_store.put_json("sites/default/schema.json", [])
    await client.post("/api/sites", json={"id": "shop", "name": "Shop"}, headers=admin_headers)

    response = await client.get("/api/sites", headers=admin_headers)

    assert [(s["id"], s["name"]) for s in response.json()] == [
        ("default", "default"),
        ("shop", "Shop"),
    ]


@pytest.mark.asyncio
async def test_get_site(client, admin_headers):
    await client.post("/api/sites", json={"id": "shop", "name": "Shop"}, headers=admin_headers)

    response = await client.get("/api/sites/shop", headers=admin_headers)

    assert response.json()["name"] == "Shop"


@pytest.mark.asyncio
async def test_get_missing_site(client, admin_headers):
    response = await client.get("/api/sites/ghost", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["errorType"] == "SITE_NOT_FOUND"


@pytest.mark.asyncio
async def test_update_site(client, admin_headers):
    await client.post("/api/sites", json={"id": "shop", "name": "Shop"}, headers=admin_headers)

    response = await client.put(
        "/api/sites/shop", json={"name": "Store"}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Store"


@pytest.mark.asyncio
async def test_update_site_id_change_rejected(client, admin_headers):
    await client.post("/api/sites", json={"id": "shop", "name": "Shop"}, headers=admin_headers)

    response = await client.put("/api/sites/shop", json={"id": "store"}, headers=admin_headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_site(client, admin_headers, object_store):
    await client.post("/api/sites", json={"id": "shop", "name": "Shop"}, headers=admin_headers)
    await object_store.put_json("sites/shop/items.json", [])

    response = await client.delete("/api/sites/shop", headers=admin_headers)

    assert response.status_code == 200
    assert object_store.keys() == ["sites/shop/items.json"]


@pytest.mark.asyncio
async def test_default_site_cannot_be_deleted(client, admin_headers, object_store):
    await object_store.put_json("sites/default/schema.json", [])

    response = await client.delete("/api/sites/default", headers=admin_headers)

    assert response.status_code == 400
    assert object_store.keys() == ["sites/default/schema.json"]
