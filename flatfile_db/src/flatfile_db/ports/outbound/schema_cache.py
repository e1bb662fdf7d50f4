"""Schema Cache port for persisting parsed schemas.

Parsing the schema file is done once per database open. A schema cache lets
a later open skip the parse. The database always refreshes the cache after
a cold parse and reads it only when caching is enabled; invalidation and
eviction are left entirely to the implementation.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from flatfile_db.domain.entities import Schema


@dataclass(frozen=True, slots=True)
class SchemaCacheKey:
    """Identifies one database's schema: its data path and name."""

    datapath: Path
    database_name: str

    def __str__(self) -> str:
        return f"{self.datapath}/{self.database_name}"


class SchemaCache(Protocol):
    """Protocol for a get/put schema cache."""

    @abstractmethod
    def get(self, key: SchemaCacheKey) -> Schema | None:
        """Return the cached schema, or None on a miss."""
        ...

    @abstractmethod
    def put(self, key: SchemaCacheKey, schema: Schema) -> None:
        """Store a schema, replacing any previous entry.

        Raises:
            IOError: If a persistent cache cannot be written.
        """
        ...
