"""Core BucketBase utilities: configuration, logging and errors."""

from bucketbase.core.config import Settings, get_settings
from bucketbase.core.exceptions import (
    BucketBaseError,
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    MalformedError,
    NetworkError,
    NotConfiguredError,
    NotFoundError,
    ObjectStoreError,
    SiteProvisioningError,
    UnauthorizedError,
    WriteError,
)
from bucketbase.core.logging import (
    bind_correlation_id,
    bind_site_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "BucketBaseError",
    "ConflictError",
    "ForbiddenError",
    "InvalidInputError",
    "MalformedError",
    "NetworkError",
    "NotConfiguredError",
    "NotFoundError",
    "ObjectStoreError",
    "Settings",
    "SiteProvisioningError",
    "UnauthorizedError",
    "WriteError",
    "bind_correlation_id",
    "bind_site_id",
    "clear_context",
    "configure_logging",
    "get_logger",
    "get_settings",
]
