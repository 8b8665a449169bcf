"""Network storage backend.

Two kinds of traffic:

* content reads (schema and record payloads) go straight to the public
  object-storage endpoint without credentials;
* writes and administrative calls (metadata, visibility, sites) go through the
  admin API with a bearer token from the token provider. When the provider
  has no valid token the call is refused locally and never sent.

The active site travels as the ``site_id`` query parameter on admin calls and
as the key prefix on content reads.
"""

import time
from typing import Any

import httpx

from bucketbase.core.exceptions import (
    BucketBaseError,
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    MalformedError,
    NetworkError,
    NotConfiguredError,
    NotFoundError,
    UnauthorizedError,
    WriteError,
)
from bucketbase.core.logging import get_logger
from bucketbase.domain.entities import (
    DEFAULT_SITE_ID,
    CollectionRecord,
    CollectionSchema,
    Site,
)
from bucketbase.infrastructure.auth.token_provider import TokenProvider
from bucketbase.infrastructure.storage.base import SchemaFileMetadata, StorageBackend
from bucketbase.infrastructure.storage.layout import SITE_LAYOUT, StorageLayout

logger = get_logger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or response.reason_phrase)
    return response.reason_phrase


class RemoteBackend(StorageBackend):
    """Object-storage reads plus authenticated admin API writes.

    ``get_schema`` reads the schema object anonymously, while the admin API
    stores schema files ``private``. Against a bucket that enforces ACLs,
    every schema reload after a write (template seeding included) is refused
    with :class:`ForbiddenError`. Hosts must either serve the schema object
    publicly (a bucket policy granting public read on ``*/schema.json``) or
    read it through ``GET /schema`` on the admin API.
    """

    def __init__(
        self,
        content_base_url: str | None,
        api_base_url: str | None,
        token_provider: TokenProvider,
        layout: StorageLayout = SITE_LAYOUT,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
        site_id: str = DEFAULT_SITE_ID,
    ) -> None:
        super().__init__(site_id)
        self.content_base_url = content_base_url.rstrip("/") if content_base_url else None
        self.api_base_url = api_base_url.rstrip("/") if api_base_url else None
        self.token_provider = token_provider
        self.layout = layout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    # HTTP helpers

    def _content_url(self, key: str) -> str:
        if not self.content_base_url:
            raise NotConfiguredError("Content base URL is not configured")
        return f"{self.content_base_url}/{key}"

    def _api_url(self, path: str) -> str:
        if not self.api_base_url:
            raise NotConfiguredError("Admin API base URL is not configured")
        return f"{self.api_base_url}{path}"

    async def _get_content(self, key: str) -> httpx.Response:
        url = self._content_url(key)
        try:
            response = await self._client.get(url, headers=NO_CACHE_HEADERS)
        except httpx.HTTPError as e:
            raise NetworkError(f"Failed to fetch {key}: {str(e)}") from e
        if response.status_code == 401:
            raise UnauthorizedError(f"Unauthorized: reading {key} was refused", 401)
        if response.status_code == 403:
            raise ForbiddenError(f"Forbidden: reading {key} was refused", 403)
        return response

    @staticmethod
    def _parse_list(response: httpx.Response, key: str) -> list[Any]:
        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedError(f"Failed to parse {key}: {str(e)}") from e
        if not isinstance(payload, list):
            raise MalformedError(f"Invalid data format for {key} - expected array")
        return payload

    async def _api(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        site_scoped: bool = True,
        site_id: str | None = None,
        is_write: bool = True,
    ) -> Any:
        """Send an authenticated admin API request and return its JSON body."""
        url = self._api_url(path)
        token = self.token_provider.get_token()
        if not token:
            raise UnauthorizedError("Unauthorized: no valid access token, please log in again")

        params = {"site_id": self._target(site_id)} if site_scoped else None
        try:
            response = await self._client.request(
                method,
                url,
                params=params,
                json=json,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            error_cls = WriteError if is_write else NetworkError
            raise error_cls(f"{method} {path} failed: {str(e)}") from e

        if response.is_success:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                raise MalformedError(f"Invalid JSON from {method} {path}: {str(e)}") from e

        message = _error_message(response)
        status = response.status_code
        logger.warning("Admin API call failed", method=method, path=path, status=status)
        error: BucketBaseError
        if status == 400:
            error = InvalidInputError(message, status)
        elif status == 401:
            error = UnauthorizedError(f"Unauthorized: {message}", status)
        elif status == 403:
            error = ForbiddenError(f"Forbidden: {message}", status)
        elif status == 404:
            error = NotFoundError(message, status)
        elif status == 409:
            error = ConflictError(message, status)
        elif is_write:
            error = WriteError(f"API error! status: {status} - {message}", status)
        else:
            error = NetworkError(f"API error! status: {status} - {message}", status)
        raise error

    # Content

    async def get_schema(self, site_id: str | None = None) -> list[CollectionSchema]:
        key = self.layout.schema_key(self._target(site_id))
        response = await self._get_content(key)
        if response.status_code == 404:
            raise NotFoundError(f"Schema file not found: {key}", 404)
        if not response.is_success:
            raise NetworkError(
                f"HTTP error! status: {response.status_code} fetching {key}",
                response.status_code,
            )
        payload = self._parse_list(response, key)
        try:
            return [CollectionSchema.from_dict(c) for c in payload]
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedError(f"Invalid collection in {key}: {e}") from e

    async def get_collection_data(
        self, slug: str, site_id: str | None = None
    ) -> list[CollectionRecord]:
        key = self.layout.records_key(self._target(site_id), slug)
        response = await self._get_content(key)
        if response.status_code == 404:
            # Nothing written for this collection yet
            return []
        if not response.is_success:
            raise NetworkError(
                f"HTTP error! status: {response.status_code} fetching {key}",
                response.status_code,
            )
        payload = self._parse_list(response, key)
        try:
            return [CollectionRecord.from_dict(r) for r in payload]
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedError(f"Invalid record in {key}: {e}") from e

    async def update_schema(
        self, schemas: list[CollectionSchema], site_id: str | None = None
    ) -> None:
        site_id = self._target(site_id)
        await self._api(
            "PUT", "/schema", json=[s.to_dict() for s in schemas], site_id=site_id
        )
        logger.info("Schema saved", site_id=site_id, count=len(schemas))

    async def save_collection_data(
        self, slug: str, records: list[CollectionRecord], site_id: str | None = None
    ) -> None:
        site_id = self._target(site_id)
        await self._api(
            "PUT",
            f"/collections/{slug}",
            json=[r.to_dict() for r in records],
            site_id=site_id,
        )
        logger.info("Collection data saved", site_id=site_id, slug=slug, count=len(records))

    # URLs and visibility

    def get_raw_data_url(self, slug: str, cache_bust: bool = False) -> str:
        if not self.content_base_url:
            return ""
        url = f"{self.content_base_url}/{self.layout.records_key(self.site_id, slug)}"
        if cache_bust:
            url = f"{url}?t={int(time.time() * 1000)}"
        return url

    async def get_image_url(self, image_path: str) -> str:
        if not image_path:
            return ""
        if image_path.startswith(("http://", "https://")):
            return image_path
        if not self.content_base_url:
            return ""
        return f"{self.content_base_url}/images/{image_path.lstrip('/')}"

    def is_remote_storage(self) -> bool:
        return True

    async def make_collection_public(self, slug: str) -> None:
        await self._api("PUT", f"/collections/make-public/{slug}")

    async def get_schema_metadata(self) -> SchemaFileMetadata:
        body = await self._api("GET", "/schema/metadata", is_write=False) or {}
        return SchemaFileMetadata(
            last_modified=body.get("lastModified"),
            size=body.get("size"),
            is_public=bool(body.get("isPublic", False)),
        )

    async def get_schema_presigned_url(self) -> str:
        body = await self._api("GET", "/schema/presigned-url", is_write=False) or {}
        url = body.get("url")
        if not url:
            raise MalformedError("Presigned URL response has no 'url'")
        return url

    async def make_schema_private(self) -> None:
        await self._api("PUT", "/schema/make-private")

    # Sites

    async def list_sites(self) -> list[Site]:
        body = await self._api("GET", "/sites", site_scoped=False, is_write=False)
        if not isinstance(body, list):
            raise MalformedError("Invalid sites response - expected array")
        return [Site.from_dict(s) for s in body]

    async def get_site(self, site_id: str) -> Site:
        body = await self._api("GET", f"/sites/{site_id}", site_scoped=False, is_write=False)
        return Site.from_dict(body)

    async def create_site(self, site: Site) -> Site:
        body = await self._api("POST", "/sites", json=site.to_dict(), site_scoped=False)
        return Site.from_dict(body)

    async def update_site(self, site_id: str, updates: dict[str, Any]) -> Site:
        body = await self._api("PUT", f"/sites/{site_id}", json=updates, site_scoped=False)
        return Site.from_dict(body)

    async def delete_site(self, site_id: str) -> None:
        await self._api("DELETE", f"/sites/{site_id}", site_scoped=False)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
