"""In-memory implementation of the SchemaCache protocol."""

from __future__ import annotations

from flatfile_db.domain.entities import Schema
from flatfile_db.ports.outbound.schema_cache import SchemaCacheKey


class MemorySchemaCache:
    """Keeps parsed schemas in a dict for the lifetime of the object.

    Useful when several Database objects are opened over the same files in
    one process, and in tests.
    """

    def __init__(self) -> None:
        self._entries: dict[SchemaCacheKey, Schema] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: SchemaCacheKey) -> bool:
        return key in self._entries

    def get(self, key: SchemaCacheKey) -> Schema | None:
        return self._entries.get(key)

    def put(self, key: SchemaCacheKey, schema: Schema) -> None:
        self._entries[key] = schema

    def clear(self) -> None:
        self._entries.clear()
