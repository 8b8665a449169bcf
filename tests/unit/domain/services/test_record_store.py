"""Unit tests for RecordStore."""

import asyncio

import pytest
import pytest_asyncio
from structlog.testing import capture_logs

from bucketbase.core.exceptions import NotFoundError, WriteError


@pytest_asyncio.fixture
async def posts(schemas):
    return await schemas.create_collection(name="Posts", slug="posts")


@pytest.mark.asyncio
async def test_create_then_read_round_trip(records, posts):
    data = {"title": "Hello", "tags": ["a", "b"]}

    created = await records.create_record("posts", data)
    listed = await records.get_records("posts")

    assert listed[0].data == data
    assert listed[0].id == created.id


@pytest.mark.asyncio
async def test_create_assigns_fresh_ids(records, posts):
    first = await records.create_record("posts", {"title": "One"})
    second = await records.create_record("posts", {"title": "Two"})

    assert first.id != second.id


@pytest.mark.asyncio
async def test_create_copies_input(records, posts):
    data = {"tags": ["a"]}
    await records.create_record("posts", data)

    data["tags"].append("b")

    assert (await records.get_records("posts"))[0].data == {"tags": ["a"]}


@pytest.mark.asyncio
async def test_create_in_missing_collection(records):
    with pytest.raises(NotFoundError):
        await records.create_record("posts", {"title": "Hello"})


@pytest.mark.asyncio
async def test_every_mutation_persists_the_full_list(records, posts, backend):
    first = await records.create_record("posts", {"title": "One"})
    await records.create_record("posts", {"title": "Two"})

    assert len(backend.records[("default", "posts")]) == 2

    await records.delete_record("posts", first.id)

    assert [r["data"]["title"] for r in backend.records[("default", "posts")]] == ["Two"]
    assert backend.record_writes == 3


@pytest.mark.asyncio
async def test_records_read_through_once(records, posts, backend):
    backend.records[("default", "posts")] = [{"id": "r1", "data": {"title": "Stored"}}]

    await records.get_records("posts")
    await records.get_records("posts")

    assert backend.record_reads == 1


@pytest.mark.asyncio
async def test_get_record(records, posts):
    created = await records.create_record("posts", {"title": "Hello"})

    assert (await records.get_record("posts", created.id)).data == {"title": "Hello"}
    assert await records.get_record("posts", "missing") is None


@pytest.mark.asyncio
async def test_update_replaces_data_and_keeps_created_at(records, posts):
    created = await records.create_record("posts", {"title": "Old", "draft": True})

    updated = await records.update_record("posts", created.id, {"title": "New"})

    assert updated.data == {"title": "New"}
    assert updated.created_at == created.created_at
    assert (await records.get_records("posts"))[0].data == {"title": "New"}


@pytest.mark.asyncio
async def test_update_missing_record(records, posts):
    with pytest.raises(NotFoundError):
        await records.update_record("posts", "nonexistent-id", {"title": "x"})


@pytest.mark.asyncio
async def test_delete_missing_record_logs_and_persists(records, posts, backend):
    await records.create_record("posts", {"title": "Keep"})
    writes_before = backend.record_writes

    with capture_logs() as logs:
        await records.delete_record("posts", "nonexistent-id")

    assert any(log["event"] == "Record not found for deletion" for log in logs)
    assert len(await records.get_records("posts")) == 1
    assert backend.record_writes == writes_before + 1


@pytest.mark.asyncio
async def test_delete_in_missing_collection(records):
    with pytest.raises(NotFoundError):
        await records.delete_record("posts", "r1")


@pytest.mark.asyncio
async def test_failed_write_propagates_without_rollback(records, posts, backend):
    backend.fail_record_writes = True

    with pytest.raises(WriteError):
        await records.create_record("posts", {"title": "Unsaved"})

    assert len(await records.get_records("posts")) == 1
    assert ("default", "posts") not in backend.records


@pytest.mark.asyncio
async def test_urls_delegate_to_backend(records, posts):
    assert records.get_raw_data_url("posts") == "memory://default/posts.json?t=1"
    assert records.get_raw_data_url("posts", cache_bust=False) == "memory://default/posts.json"
    assert await records.get_image_url("a.png") == "memory://images/a.png"


@pytest.mark.asyncio
async def test_make_collection_public(records, posts, backend):
    await records.make_collection_public("posts")

    assert backend.public_collections == [("default", "posts")]


@pytest.mark.asyncio
async def test_make_missing_collection_public(records):
    with pytest.raises(NotFoundError):
        await records.make_collection_public("posts")


@pytest.mark.asyncio
async def test_site_switch_during_create_keeps_record_on_starting_site(
    records, schemas, scope, backend
):
    backend.schemas["a"] = [{"name": "Posts", "slug": "posts"}]
    backend.schemas["b"] = [{"name": "Posts", "slug": "posts"}]
    backend.records[("b", "posts")] = [{"id": "b1", "data": {"title": "B"}}]
    scope.switch_site("a")
    await schemas.get_collections()
    backend.read_gate = asyncio.Event()

    task = asyncio.create_task(records.create_record("posts", {"title": "A"}))
    await backend.read_suspended.wait()
    scope.switch_site("b")
    backend.read_gate.set()
    created = await task

    assert [r["id"] for r in backend.records[("a", "posts")]] == [created.id]
    assert [r["id"] for r in backend.records[("b", "posts")]] == ["b1"]
