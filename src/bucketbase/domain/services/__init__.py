"""Domain services for BucketBase.

The registry, record store, scope and directory hold the console's storage
logic. They depend only on the storage backend contract, never on a concrete
backend.
"""

from bucketbase.domain.services.record_store import RecordStore
from bucketbase.domain.services.schema_registry import SchemaRegistry
from bucketbase.domain.services.site_directory import SiteDirectory
from bucketbase.domain.services.site_scope import SiteScope
from bucketbase.domain.services.site_templates import (
    SITE_TEMPLATES,
    SiteTemplate,
    TemplateCollection,
    get_site_template,
    list_site_templates,
)
from bucketbase.domain.services.slug_generator import SlugGenerator, SlugValidationError
from bucketbase.domain.services.storage_cache import StorageCache

__all__ = [
    "RecordStore",
    "SITE_TEMPLATES",
    "SchemaRegistry",
    "SiteDirectory",
    "SiteScope",
    "SiteTemplate",
    "SlugGenerator",
    "SlugValidationError",
    "StorageCache",
    "TemplateCollection",
    "get_site_template",
    "list_site_templates",
]
