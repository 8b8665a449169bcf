"""Site entity.

A site is the top-level namespace that isolates a set of collections and
their records. Its metadata is stored next to the site's schema.
"""

import re
from dataclasses import dataclass, field
from typing import Any

from bucketbase.domain.entities.clock import utc_now_iso

DEFAULT_SITE_ID = "default"

SITE_ID_PATTERN = re.compile(r"^[a-z0-9-]+$")


@dataclass
class Site:
    """Site metadata.

    Attributes:
        id: Slug-like identifier; unique and immutable.
        name: Display name.
        description: Optional free text.
        created_at: ISO-8601 timestamp of creation.
        updated_at: ISO-8601 timestamp of the last update.
        created_by: Optional subject of the user that created the site.
    """

    id: str
    name: str
    description: str | None = None
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)
    created_by: str | None = None

    @property
    def is_default(self) -> bool:
        return self.id == DEFAULT_SITE_ID

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.description is not None:
            data["description"] = self.description
        if self.created_by is not None:
            data["createdBy"] = self.created_by
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Site":
        now = utc_now_iso()
        return cls(
            id=data["id"],
            name=data.get("name") or data["id"],
            description=data.get("description"),
            created_at=data.get("createdAt") or now,
            updated_at=data.get("updatedAt") or now,
            created_by=data.get("createdBy"),
        )

    @classmethod
    def placeholder(cls, site_id: str) -> "Site":
        """Metadata for a site whose metadata file is missing."""
        return cls(id=site_id, name=site_id)


def is_valid_site_id(site_id: str) -> bool:
    """Check a site id against the allowed pattern (lowercase, digits, hyphens)."""
    return bool(site_id) and SITE_ID_PATTERN.match(site_id) is not None
