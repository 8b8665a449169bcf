"""Domain entities for BucketBase.

Entities are plain dataclasses with camelCase JSON conversion helpers. They
have no dependencies on infrastructure or external frameworks.
"""

from bucketbase.domain.entities.clock import utc_now_iso
from bucketbase.domain.entities.collection import (
    CollectionSchema,
    FieldDefinition,
    FieldType,
)
from bucketbase.domain.entities.record import CollectionRecord
from bucketbase.domain.entities.site import (
    DEFAULT_SITE_ID,
    SITE_ID_PATTERN,
    Site,
    is_valid_site_id,
)

__all__ = [
    "CollectionRecord",
    "CollectionSchema",
    "DEFAULT_SITE_ID",
    "FieldDefinition",
    "FieldType",
    "SITE_ID_PATTERN",
    "Site",
    "is_valid_site_id",
    "utc_now_iso",
]
