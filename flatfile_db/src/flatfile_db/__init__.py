"""
Flat-file database - schema-defined tables stored as delimited text files

A small record store with "kinda SQL" semantics: select, insert, update and
delete with COLUMN=VALUE or COLUMN=/regex/ criteria and single-column
natural-order sorting, without a database engine.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"

from flatfile_db.application import Database
from flatfile_db.infrastructure.config import DatabaseOptions
from flatfile_db.ports.inbound import (
    AutoKeyOverflowError,
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
    "Database",
    "DatabaseOptions",
    "RecordStore",
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
