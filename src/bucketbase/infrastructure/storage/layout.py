"""Object key layouts.

Each backend generation stores records under its own key scheme. The layouts
are kept side by side rather than unified: the API server and the remote
backend write ``sites/{site}/{slug}.json``, the bundled payloads use a
``collections/`` sub-directory, and the legacy single-site deployment keeps
everything at the bucket root.
"""

import re
from dataclasses import dataclass

SITES_PREFIX = "sites/"
SITE_METADATA_FILE = "site-metadata.json"

_SITE_KEY_PATTERN = re.compile(r"^sites/([^/]+)/")


@dataclass(frozen=True, slots=True)
class StorageLayout:
    """Key templates for one storage generation.

    Templates are formatted with ``site_id`` and ``slug``.
    """

    name: str
    schema_template: str
    records_template: str
    metadata_template: str = "sites/{site_id}/" + SITE_METADATA_FILE

    def schema_key(self, site_id: str) -> str:
        return self.schema_template.format(site_id=site_id)

    def records_key(self, site_id: str, slug: str) -> str:
        return self.records_template.format(site_id=site_id, slug=slug)

    def metadata_key(self, site_id: str) -> str:
        return self.metadata_template.format(site_id=site_id)


SITE_LAYOUT = StorageLayout(
    name="sites",
    schema_template="sites/{site_id}/schema.json",
    records_template="sites/{site_id}/{slug}.json",
)

EMBEDDED_LAYOUT = StorageLayout(
    name="embedded",
    schema_template="sites/{site_id}/schema.json",
    records_template="sites/{site_id}/collections/{slug}.json",
)

LEGACY_LAYOUT = StorageLayout(
    name="legacy",
    schema_template="schema.json",
    records_template="data/{slug}.json",
)

LAYOUTS = {layout.name: layout for layout in (SITE_LAYOUT, EMBEDDED_LAYOUT, LEGACY_LAYOUT)}


def get_layout(name: str) -> StorageLayout:
    """Look up a layout by name ('sites', 'embedded' or 'legacy')."""
    try:
        return LAYOUTS[name]
    except KeyError:
        raise ValueError(f"Unknown storage layout: {name}") from None


def site_id_from_key(key: str) -> str | None:
    """Extract the site id from a ``sites/{id}/...`` key or prefix."""
    match = _SITE_KEY_PATTERN.match(key)
    return match.group(1) if match else None
