"""Outbound adapters - implementations of outbound ports.

These adapters implement the table file persistence and schema
cache contracts against the local file system.
"""

from flatfile_db.adapters.outbound.delimited_table_store import (
    DelimitedTableStore,
    decode_records,
    encode_records,
)
from flatfile_db.adapters.outbound.file_schema_cache import FileSchemaCache
from flatfile_db.adapters.outbound.memory_schema_cache import MemorySchemaCache

__all__ = [
    "DelimitedTableStore",
    "FileSchemaCache",
    "MemorySchemaCache",
    "decode_records",
    "encode_records",
]
