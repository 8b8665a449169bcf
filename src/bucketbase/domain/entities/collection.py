"""Collection schema entities.

A collection schema names a set of typed fields and owns the records stored
under its slug. Schemas travel as camelCase JSON objects; the ``to_dict`` and
``from_dict`` helpers convert between that wire form and these dataclasses.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from bucketbase.core.logging import get_logger
from bucketbase.domain.entities.clock import utc_now_iso

logger = get_logger(__name__)


class FieldType(str, Enum):
    """Supported field types."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    EMAIL = "email"
    URL = "url"
    SELECT = "select"
    IMAGE = "image"
    ARRAY = "array"
    COORDINATES = "coordinates"

    @classmethod
    def values(cls) -> list[str]:
        return [t.value for t in cls]


@dataclass
class FieldDefinition:
    """A single field of a collection schema.

    Attributes:
        id: Field identifier, unique within the schema.
        name: Key used in record ``data`` mappings.
        type: One of :class:`FieldType`.
        required: Whether callers must supply a value.
        options: Allowed values, only for ``select`` fields.
        timezone_aware: Whether values keep their offset, only for ``datetime`` fields.
    """

    id: str
    name: str
    type: FieldType
    required: bool = False
    options: list[str] | None = None
    timezone_aware: bool | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Field name is required")
        self.type = FieldType(self.type)
        if self.options is not None and self.type is not FieldType.SELECT:
            raise ValueError(f"Field '{self.name}': options are only allowed on select fields")
        if self.timezone_aware is not None and self.type is not FieldType.DATETIME:
            raise ValueError(
                f"Field '{self.name}': timezoneAware is only allowed on datetime fields"
            )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "required": self.required,
        }
        if self.options is not None:
            data["options"] = list(self.options)
        if self.timezone_aware is not None:
            data["timezoneAware"] = self.timezone_aware
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FieldDefinition":
        """Build a field from stored JSON, normalising what older payloads contain.

        Unknown types fall back to ``text``. Options and timezone flags are
        dropped from field types that do not use them, select options given
        as ``{"label", "value"}`` objects are reduced to their values and a
        missing id is generated.
        """
        name = data["name"]
        raw_type = data.get("type", FieldType.TEXT.value)
        if raw_type not in FieldType.values():
            logger.warning(
                "Field has invalid type, defaulting to text",
                field_name=name,
                field_type=raw_type,
            )
            raw_type = FieldType.TEXT.value
        field_type = FieldType(raw_type)

        options = None
        if field_type is FieldType.SELECT and data.get("options") is not None:
            options = [
                str(option["value"]) if isinstance(option, dict) else str(option)
                for option in data["options"]
            ]

        timezone_aware = None
        if field_type is FieldType.DATETIME and data.get("timezoneAware") is not None:
            timezone_aware = bool(data["timezoneAware"])

        return cls(
            id=str(data.get("id") or uuid.uuid4()),
            name=name,
            type=field_type,
            required=bool(data.get("required", False)),
            options=options,
            timezone_aware=timezone_aware,
        )


@dataclass
class CollectionSchema:
    """A collection schema scoped to one site.

    Attributes:
        name: Display name.
        slug: Unique within the site; storage key and URL segment. Never changes.
        description: Free text.
        fields: Ordered field definitions.
        created_at: ISO-8601 timestamp of creation.
        updated_at: ISO-8601 timestamp of the last update.
    """

    name: str
    slug: str
    description: str = ""
    fields: list[FieldDefinition] = field(default_factory=list)
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)

    def __post_init__(self) -> None:
        if not self.slug:
            raise ValueError("Collection slug is required")
        if not self.name:
            raise ValueError("Collection name is required")

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "fields": [f.to_dict() for f in self.fields],
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CollectionSchema":
        now = utc_now_iso()
        return cls(
            name=data["name"],
            slug=data["slug"],
            description=data.get("description") or "",
            fields=[FieldDefinition.from_dict(f) for f in data.get("fields") or []],
            created_at=data.get("createdAt") or now,
            updated_at=data.get("updatedAt") or now,
        )
