"""Error types shared by the storage core and the admin API.

Backends raise these; the schema registry and record store let them
propagate. Each error carries the HTTP status the API server answers with
and a machine-readable ``code`` (the API's ``errorType``).
"""


class BucketBaseError(Exception):
    """Base class for all storage core errors."""

    code = "INTERNAL_ERROR"
    http_status = 500

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        # Status reported by the remote side, when there was one
        self.status_code = status_code
        if code is not None:
            self.code = code


class InvalidInputError(BucketBaseError):
    """Input has the wrong shape (bad site id, non-list payload, ...)."""

    code = "VALIDATION_ERROR"
    http_status = 400


class NotFoundError(BucketBaseError):
    """Referenced site, collection, record or object does not exist."""

    code = "NOT_FOUND"
    http_status = 404


class ConflictError(BucketBaseError):
    """Duplicate site id or collection slug on create."""

    code = "CONFLICT"
    http_status = 409


class UnauthorizedError(BucketBaseError):
    """Credential is missing, invalid or expired."""

    code = "UNAUTHORIZED"
    http_status = 401


class ForbiddenError(BucketBaseError):
    """Credential is valid but lacks permission."""

    code = "FORBIDDEN"
    http_status = 403


class NetworkError(BucketBaseError):
    """Transport failure or unexpected response on a read."""

    code = "NETWORK_ERROR"
    http_status = 502


class WriteError(BucketBaseError):
    """The backend rejected or failed a write."""

    code = "WRITE_ERROR"
    http_status = 502


class MalformedError(BucketBaseError):
    """Payload was fetched but is not parseable or not the expected shape."""

    code = "MALFORMED"
    http_status = 500


class NotConfiguredError(BucketBaseError):
    """No data source is configured or reachable."""

    code = "CONFIGURATION_ERROR"
    http_status = 500


class ObjectStoreError(BucketBaseError):
    """The object store failed an operation (other than a missing key)."""

    code = "STORAGE_ERROR"
    http_status = 500


class SiteProvisioningError(BucketBaseError):
    """A template collection failed while provisioning a new site.

    The site itself exists and the collections listed in ``created_slugs``
    were persisted; nothing is rolled back.
    """

    code = "PROVISIONING_ERROR"
    http_status = 500

    def __init__(
        self,
        message: str,
        site_id: str,
        created_slugs: list[str],
        failed_slug: str,
    ) -> None:
        super().__init__(message)
        self.site_id = site_id
        self.created_slugs = created_slugs
        self.failed_slug = failed_slug
