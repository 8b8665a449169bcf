"""Console session composition root.

``AdminConsole`` owns every piece of per-session state: the backend chosen at
startup, the cache shared by the registry and the record store, the active
site and the access token. The cache lives exactly as long as the session. It
is emptied on every site switch and on logout.
"""

from bucketbase.core.config import Settings, get_settings
from bucketbase.core.logging import get_logger
from bucketbase.domain.services import (
    RecordStore,
    SchemaRegistry,
    SiteDirectory,
    SiteScope,
    StorageCache,
)
from bucketbase.infrastructure.auth.token_provider import TokenStore
from bucketbase.infrastructure.storage.base import StorageBackend
from bucketbase.infrastructure.storage.factory import create_backend

logger = get_logger(__name__)


class AdminConsole:
    """Wires the storage core together for one console session."""

    def __init__(self, backend: StorageBackend, tokens: TokenStore | None = None) -> None:
        self.backend = backend
        self.tokens = tokens or TokenStore()
        self.cache = StorageCache()
        self.scope = SiteScope(backend, self.cache, site_id=backend.site_id)
        self.schemas = SchemaRegistry(backend, self.cache)
        self.records = RecordStore(backend, self.cache, self.schemas)
        self.sites = SiteDirectory(backend, self.scope, self.schemas)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "AdminConsole":
        """Build a console with the backend selected in settings."""
        settings = settings or get_settings()
        tokens = TokenStore()
        return cls(create_backend(settings, tokens), tokens)

    @property
    def site_id(self) -> str:
        return self.scope.site_id

    def login(self, access_token: str) -> None:
        self.tokens.set_token(access_token)

    def switch_site(self, site_id: str) -> None:
        self.scope.switch_site(site_id)

    def logout(self) -> None:
        """Drop the token, the cached data and the site selection."""
        self.tokens.clear()
        self.scope.reset()
        logger.info("Console session cleared")

    async def aclose(self) -> None:
        await self.backend.aclose()

    async def __aenter__(self) -> "AdminConsole":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
