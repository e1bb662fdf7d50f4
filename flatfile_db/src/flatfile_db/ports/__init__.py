"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: APIs offered to clients (RecordStore)
- Outbound ports: Dependencies on external systems (TableStore, SchemaCache)

Adapters implement these ports with concrete functionality.
"""

from flatfile_db.ports.inbound import (
    AutoKeyOverflowError,
    ColumnList,
    ColumnListMismatchError,
    ColumnNotFoundError,
    DatabaseNotFoundError,
    DuplicateKeyError,
    FlatFileDBError,
    MissingTableParamError,
    RecordStore,
    SchemaFileEmptyError,
    SchemaFileMissingError,
    TableNotFoundError,
)
from flatfile_db.ports.outbound import SchemaCache, SchemaCacheKey, TableStore

__all__ = [
    # Inbound ports
    "RecordStore",
    "ColumnList",
    "FlatFileDBError",
    "DatabaseNotFoundError",
    "SchemaFileMissingError",
    "SchemaFileEmptyError",
    "TableNotFoundError",
    "MissingTableParamError",
    "ColumnNotFoundError",
    "ColumnListMismatchError",
    "DuplicateKeyError",
    "AutoKeyOverflowError",
    # Outbound ports
    "SchemaCache",
    "SchemaCacheKey",
    "TableStore",
]
