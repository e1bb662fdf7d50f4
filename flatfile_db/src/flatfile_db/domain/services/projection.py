"""Column projection and ordering of query results."""

from __future__ import annotations

from typing import Mapping, Sequence

from flatfile_db.domain.entities import ColumnList, Record, Table
from flatfile_db.domain.errors import ColumnNotFoundError
from flatfile_db.domain.services.natural_order import natural_sorted
from flatfile_db.domain.value_objects import SortSpec

ALL_COLUMNS = "*"


def parse_column_list(columns: ColumnList) -> list[str]:
    """Turn a column list into names.

    ``"*"`` and blank strings (or an empty sequence) mean every column and
    yield ``[]``. Backticks around names are removed.

    Example:
        >>> parse_column_list("`id`, name")
        ['id', 'name']
        >>> parse_column_list(" * ")
        []
    """
    if isinstance(columns, str):
        columns = columns.strip()
        if columns in (ALL_COLUMNS, ""):
            return []
        names = columns.split(",")
    else:
        names = list(columns)

    return [str(name).replace("`", "").strip() for name in names]


def resolve_columns(requested: Sequence[str], table: Table) -> list[int]:
    """Return the position of every requested column in ``table``.

    An empty request resolves to all columns.

    Raises:
        ColumnNotFoundError: Naming every column that does not exist.
    """
    if not requested:
        return list(range(len(table.columns)))

    missing = [name for name in requested if not table.has_column(name)]
    if missing:
        raise ColumnNotFoundError(table.name, missing)

    return [table.column_index(name) for name in requested]


def record_to_row(record: Record, table: Table) -> dict[str, str]:
    """Key a record's values by the table's columns.

    Short records are padded with empty values; fields beyond the declared
    columns are dropped.
    """
    values = list(record) + [""] * (len(table.columns) - len(record))
    return dict(zip(table.columns, values))


def project(rows: Sequence[Mapping[str, str]], requested: Sequence[str]) -> list[dict[str, str]]:
    """Re-key rows to the requested columns, in requested order."""
    if not requested:
        return [dict(row) for row in rows]
    return [{name: row[name] for name in requested} for row in rows]


def sort_records(records: Sequence[Record], table: Table, spec: SortSpec | None) -> list[Record]:
    """Natural-order sort of records on one column.

    An unknown column leaves the records in their original order.
    """
    if spec is None:
        return list(records)

    index = table.column_index(spec.column)
    if index == Table.COLUMN_NOT_FOUND:
        return list(records)

    return natural_sorted(
        records,
        key=lambda record: record[index] if index < len(record) else "",
        descending=spec.descending,
    )
