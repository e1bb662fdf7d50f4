"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Outbound adapters: table files and schema caches on the local file system
"""

from flatfile_db.adapters.outbound import (
    DelimitedTableStore,
    FileSchemaCache,
    MemorySchemaCache,
)

__all__ = [
    # Outbound adapters
    "DelimitedTableStore",
    "FileSchemaCache",
    "MemorySchemaCache",
]
