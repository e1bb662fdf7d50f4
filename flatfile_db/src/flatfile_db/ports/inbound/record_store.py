"""Record Store port - the public query interface of a database.

This inbound port defines the operations clients use against a flat-file
database, together with the errors those operations raise.

Every operation is an independent read-(modify-write) cycle over a whole
table file. There is no transaction or cursor state between calls.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Protocol, Sequence

from flatfile_db.domain.entities import ColumnList
from flatfile_db.domain.errors import (
    AutoKeyOverflowError,
    ColumnListMismatchError,
    ColumnNotFoundError,
    DatabaseNotFoundError,
    DuplicateKeyError,
    FlatFileDBError,
    MissingTableParamError,
    SchemaFileEmptyError,
    SchemaFileMissingError,
    TableNotFoundError,
)

__all__ = [
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
]


class RecordStore(Protocol):
    """Protocol for querying and modifying tables.

    Column lists accept ``"*"`` or a blank string to mean every column in
    schema order. Criteria strings are ``COLUMN=VALUE`` or a bare key value;
    a value wrapped in slashes is a case-insensitive regular expression.

    Thread Safety:
        Not thread-safe. A single writer per table file is assumed; there is
        no locking against other processes.
    """

    @abstractmethod
    def list_tables(self) -> list[str]:
        """Return the table names in declaration order."""
        ...

    @abstractmethod
    def table_schema(self, table: str) -> list[str]:
        """Return the column names of a table, in declaration order.

        Raises:
            MissingTableParamError: If the table name is blank.
            TableNotFoundError: If the table is not in the schema.
        """
        ...

    @abstractmethod
    def primary_key(self, table: str) -> str:
        """Return the primary key column of a table.

        Raises:
            MissingTableParamError: If the table name is blank.
            TableNotFoundError: If the table is not in the schema.
        """
        ...

    @abstractmethod
    def select(
        self,
        table: str,
        columns: ColumnList = "*",
        criteria: str = "",
        order: str = "",
    ) -> list[dict[str, str]]:
        """Return matching rows as column-name keyed mappings.

        Args:
            table: The table to read.
            columns: Columns to return, in the order returned.
            criteria: Filter (``COLUMN=VALUE`` or ``COLUMN=/regex/``).
            order: ``<column> [ASC|DESC]``.

        Returns:
            The rows, possibly empty.

        Raises:
            TableNotFoundError: If the table is not in the schema.
            ColumnNotFoundError: If a requested column does not exist.
        """
        ...

    @abstractmethod
    def insert(
        self,
        table: str,
        columns: ColumnList = "*",
        values: Sequence[Any] = (),
    ) -> str:
        """Append a record and return its key.

        The key is assigned automatically (highest numeric key + 1) when
        the primary key column is not among ``columns``.

        Raises:
            TableNotFoundError: If the table is not in the schema.
            ColumnNotFoundError: If a column does not exist.
            ColumnListMismatchError: If len(values) != number of columns.
            DuplicateKeyError: If the supplied key already exists.
            AutoKeyOverflowError: If no further key can be assigned.
        """
        ...

    @abstractmethod
    def update(
        self,
        table: str,
        columns: ColumnList,
        values: Sequence[Any],
        criteria: str = "",
    ) -> int:
        """Overwrite columns of every matching record.

        Returns:
            The number of records targeted.

        Raises:
            TableNotFoundError: If the table is not in the schema.
            ColumnNotFoundError: If a column does not exist.
            ColumnListMismatchError: If len(values) != number of columns.
        """
        ...

    @abstractmethod
    def delete(self, table: str, criteria: str = "") -> int:
        """Remove every matching record (all records without criteria).

        Returns:
            The number of records removed.

        Raises:
            TableNotFoundError: If the table is not in the schema.
        """
        ...

