"""Inbound ports - API contracts for the flat-file database.

Inbound ports define the interface clients use to query and modify
tables, and the errors raised through it.
"""

from flatfile_db.ports.inbound.record_store import (
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

__all__ = [
    "RecordStore",
    "ColumnList",
    # Errors
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
]
