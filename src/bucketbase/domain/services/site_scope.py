"""Active site tracking."""

from bucketbase.core.exceptions import InvalidInputError
from bucketbase.core.logging import bind_site_id, get_logger
from bucketbase.domain.entities import DEFAULT_SITE_ID, is_valid_site_id
from bucketbase.domain.services.storage_cache import StorageCache
from bucketbase.infrastructure.storage.base import StorageBackend

logger = get_logger(__name__)


class SiteScope:
    """Holds the selected site and keeps the backend and cache in step with it.

    Switching re-targets the backend (so keys and URLs are recomputed under the
    new site's prefix) and empties the cache, so the next schema or record read
    goes to the backend.
    """

    def __init__(
        self,
        backend: StorageBackend,
        cache: StorageCache,
        site_id: str = DEFAULT_SITE_ID,
    ) -> None:
        self.backend = backend
        self.cache = cache
        self._apply(site_id)

    @property
    def site_id(self) -> str:
        return self.backend.site_id

    def _apply(self, site_id: str) -> None:
        if not is_valid_site_id(site_id):
            raise InvalidInputError(
                f"Invalid site id '{site_id}': use lowercase letters, numbers and hyphens"
            )
        self.backend.set_site_id(site_id)
        self.cache.clear()
        bind_site_id(site_id)

    def switch_site(self, site_id: str) -> None:
        """Make ``site_id`` the active site.

        Raises:
            InvalidInputError: The id does not match the site id pattern.
        """
        if site_id == self.site_id:
            return
        previous = self.site_id
        self._apply(site_id)
        logger.info("Switched site", previous_site_id=previous, site_id=site_id)

    def reset(self) -> None:
        """Return to the default site with an empty cache (logout)."""
        self._apply(DEFAULT_SITE_ID)
