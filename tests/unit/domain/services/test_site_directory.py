"""Unit tests for SiteScope and SiteDirectory."""

import pytest

from bucketbase.core.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    SiteProvisioningError,
)
from bucketbase.domain.entities import CollectionSchema


class TestSiteScope:
    def test_starts_on_default_site(self, scope, backend):
        assert scope.site_id == "default"
        assert backend.site_id == "default"

    def test_switch_retargets_backend_and_clears_cache(self, scope, backend, cache):
        cache.set_collections("default", [CollectionSchema(name="Posts", slug="posts")])

        scope.switch_site("shop")

        assert backend.site_id == "shop"
        assert cache.get_collections("default") is None

    def test_switch_to_same_site_keeps_cache(self, scope, cache):
        cache.set_collections("default", [])

        scope.switch_site("default")

        assert cache.get_collections("default") == []

    def test_invalid_site_id_rejected(self, scope, backend):
        with pytest.raises(InvalidInputError):
            scope.switch_site("Not Valid")

        assert backend.site_id == "default"

    def test_reset_returns_to_default(self, scope, backend):
        scope.switch_site("shop")

        scope.reset()

        assert backend.site_id == "default"

    @pytest.mark.asyncio
    async def test_next_read_after_switch_goes_to_backend(self, scope, schemas, backend):
        backend.schemas["shop"] = [{"name": "Items", "slug": "items"}]
        await schemas.get_collections()

        scope.switch_site("shop")
        collections = await schemas.get_collections()

        assert [c.slug for c in collections] == ["items"]
        assert backend.schema_reads == 2


class TestSiteDirectory:
    @pytest.mark.asyncio
    async def test_list_sites_adds_default_when_missing(self, directory, backend):
        del backend.sites["default"]

        sites = await directory.list_sites()

        assert sites[0].id == "default"
        assert sites[0].name == "Default Site"

    @pytest.mark.asyncio
    async def test_create_site_defaults_description(self, directory, backend):
        site = await directory.create_site("shop", "Shop", created_by="admin")

        assert site.description == "Shop site"
        assert site.created_by == "admin"
        assert backend.schemas["shop"] == []

    @pytest.mark.asyncio
    async def test_create_site_without_template_keeps_active_site(self, directory, scope):
        await directory.create_site("shop", "Shop", template_id="blank")

        assert scope.site_id == "default"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("site_id", ["Shop", "my_site", ""])
    async def test_create_site_rejects_bad_id(self, directory, site_id):
        with pytest.raises(InvalidInputError):
            await directory.create_site(site_id, "Shop")

    @pytest.mark.asyncio
    async def test_create_site_requires_name(self, directory):
        with pytest.raises(InvalidInputError, match="name is required"):
            await directory.create_site("shop", "")

    @pytest.mark.asyncio
    async def test_create_existing_site_conflicts(self, directory):
        await directory.create_site("shop", "Shop")

        with pytest.raises(ConflictError):
            await directory.create_site("shop", "Shop again")

    @pytest.mark.asyncio
    async def test_unknown_template_checked_before_writing(self, directory, backend):
        with pytest.raises(NotFoundError, match="template"):
            await directory.create_site("shop", "Shop", template_id="nope")

        assert "shop" not in backend.sites

    @pytest.mark.asyncio
    async def test_blog_template_seeds_collections(self, directory, scope, schemas, backend):
        await directory.create_site("blog", "Blog", template_id="blog")

        assert scope.site_id == "blog"
        assert [c.slug for c in await schemas.get_collections()] == ["posts", "authors"]
        assert [c["slug"] for c in backend.schemas["blog"]] == ["posts", "authors"]

    @pytest.mark.asyncio
    async def test_provisioning_failure_keeps_created_collections(self, directory, backend):
        backend.fail_schema_writes_after = 1

        with pytest.raises(SiteProvisioningError) as exc_info:
            await directory.create_site("blog", "Blog", template_id="blog")

        assert exc_info.value.created_slugs == ["posts"]
        assert exc_info.value.failed_slug == "authors"
        assert "blog" in backend.sites
        assert [c["slug"] for c in backend.schemas["blog"]] == ["posts"]

    @pytest.mark.asyncio
    async def test_update_site(self, directory):
        await directory.create_site("shop", "Shop")

        site = await directory.update_site("shop", {"name": "Store", "id": "shop"})

        assert site.name == "Store"

    @pytest.mark.asyncio
    async def test_update_site_cannot_change_id(self, directory):
        with pytest.raises(InvalidInputError):
            await directory.update_site("shop", {"id": "store"})

    @pytest.mark.asyncio
    async def test_default_site_cannot_be_deleted(self, directory, backend):
        with pytest.raises(InvalidInputError):
            await directory.delete_site("default")

        assert "default" in backend.sites

    @pytest.mark.asyncio
    async def test_deleting_active_site_switches_to_default(self, directory, scope, backend):
        await directory.create_site("shop", "Shop")
        scope.switch_site("shop")

        await directory.delete_site("shop")

        assert scope.site_id == "default"
        assert "shop" not in backend.sites

    @pytest.mark.asyncio
    async def test_deleting_inactive_site_drops_its_cache(self, directory, scope, cache):
        await directory.create_site("shop", "Shop")
        cache.set_collections("shop", [CollectionSchema(name="Posts", slug="posts")])
        cache.set_records("shop", "posts", [])
        cache.set_collections("default", [])

        await directory.delete_site("shop")

        assert scope.site_id == "default"
        assert cache.get_collections("shop") is None
        assert cache.get_records("shop", "posts") is None
        assert cache.get_collections("default") == []

    @pytest.mark.asyncio
    async def test_delete_missing_site(self, directory):
        with pytest.raises(NotFoundError):
            await directory.delete_site("ghost")
