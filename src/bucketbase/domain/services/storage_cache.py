"""In-memory schema and record cache.

One instance is created per console session by the composition root and
shared by the schema registry and the record store. Entries never expire;
they are dropped wholesale when the active site changes or the user logs out.
"""

from bucketbase.domain.entities import CollectionRecord, CollectionSchema


class StorageCache:
    """Site-keyed cache of collection schemas and records.

    Collections are keyed by site id, records by ``(site_id, slug)``. A
    missing key means "never loaded", which is different from a loaded empty
    list. A stored list is always a complete mirror of the last successful
    backend read or of the last local write.
    """

    def __init__(self) -> None:
        self._collections: dict[str, list[CollectionSchema]] = {}
        self._records: dict[tuple[str, str], list[CollectionRecord]] = {}

    def get_collections(self, site_id: str) -> list[CollectionSchema] | None:
        return self._collections.get(site_id)

    def set_collections(self, site_id: str, collections: list[CollectionSchema]) -> None:
        self._collections[site_id] = collections

    def get_records(self, site_id: str, slug: str) -> list[CollectionRecord] | None:
        return self._records.get((site_id, slug))

    def set_records(self, site_id: str, slug: str, records: list[CollectionRecord]) -> None:
        self._records[(site_id, slug)] = records

    def drop_records(self, site_id: str, slug: str) -> None:
        self._records.pop((site_id, slug), None)

    def clear_site(self, site_id: str) -> None:
        """Forget everything loaded for one site."""
        self._collections.pop(site_id, None)
        for key in [key for key in self._records if key[0] == site_id]:
            del self._records[key]

    def clear(self) -> None:
        self._collections.clear()
        self._records.clear()
