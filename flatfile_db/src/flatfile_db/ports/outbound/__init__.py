"""Outbound ports - interfaces for external dependencies.

Outbound ports define contracts for the systems the database
depends on: table file persistence and the schema cache.
"""

from flatfile_db.ports.outbound.schema_cache import SchemaCache, SchemaCacheKey
from flatfile_db.ports.outbound.table_store import TableStore

__all__ = [
    "SchemaCache",
    "SchemaCacheKey",
    "TableStore",
]
