"""Collection record entity."""

import uuid
from dataclasses import dataclass, field
from typing import Any

from bucketbase.domain.entities.clock import utc_now_iso


@dataclass
class CollectionRecord:
    """One row of a collection.

    ``data`` is not checked against the owning schema's fields; callers
    validate before writing.

    Attributes:
        id: Generated UUID string.
        data: Mapping of field name to value.
        created_at: ISO-8601 timestamp of creation.
        updated_at: ISO-8601 timestamp of the last update.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    data: dict[str, Any] = field(default_factory=dict)
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Record ID is required")
        if not isinstance(self.data, dict):
            raise ValueError("Record data must be a mapping")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "data": self.data,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CollectionRecord":
        now = utc_now_iso()
        return cls(
            id=data["id"],
            data=data.get("data") or {},
            created_at=data.get("createdAt") or now,
            updated_at=data.get("updatedAt") or now,
        )
