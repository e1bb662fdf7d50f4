"""Database - query engine over a schema and its delimited table files.

This module provides the Database class that ties the schema parser, the
schema cache, the table store and the criteria/projection services together
behind the RecordStore interface.

Usage:
    from flatfile_db.application import Database

    db = Database("data", "library")

    key = db.insert("books", "title, author", ["Dune", "Herbert"])
    rows = db.select("books", "id, title", "author=/herb/", "title desc")
    db.update("books", "author", ["F. Herbert"], f"id={key}")
    db.delete("books", f"id={key}")

Every operation reads the whole table file, and every mutation rewrites it.
There is no transaction or cursor state between calls.
"""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Sequence

from flatfile_db.adapters.outbound.delimited_table_store import DelimitedTableStore
from flatfile_db.adapters.outbound.file_schema_cache import FileSchemaCache
from flatfile_db.domain.entities import ColumnList, Record, Schema, Table
from flatfile_db.domain.errors import (
    AutoKeyOverflowError,
    ColumnListMismatchError,
    DuplicateKeyError,
    MissingTableParamError,
    TableNotFoundError,
)
from flatfile_db.domain.services import (
    CriteriaEvaluator,
    SchemaParser,
    parse_column_list,
    project,
    record_to_row,
    resolve_columns,
    sort_records,
)
from flatfile_db.domain.value_objects import SortSpec, integer_value, to_text
from flatfile_db.infrastructure.config import Config, DatabaseOptions, get_config
from flatfile_db.infrastructure.logging import get_logger
from flatfile_db.infrastructure.metrics import MetricsRegistry, get_metrics
from flatfile_db.infrastructure.tracing import operation_span
from flatfile_db.ports.outbound.schema_cache import SchemaCache, SchemaCacheKey

MAX_KEY = sys.maxsize


class Database:
    """A flat-file database opened from ``<datapath>/<database_name>.dbd``.

    The schema is loaded once, from the schema cache when caching is enabled
    and an entry exists, otherwise by parsing the schema file (after which
    the cache is refreshed). It is never modified afterwards.

    Thread Safety:
        Not thread-safe, and files are not locked. Only one writer per
        table file should be active at a time.
    """

    def __init__(
        self,
        datapath: str | Path,
        database_name: str,
        options: DatabaseOptions | Mapping[str, Any] | None = None,
        *,
        schema_cache: SchemaCache | None = None,
        config: Config | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Open a database.

        Args:
            datapath: Directory holding the schema and table files.
            database_name: Name of the database (schema file stem).
            options: Construction options, as DatabaseOptions or a mapping
                using either current or legacy option names. Defaults to
                the configured options.
            schema_cache: Cache for the parsed schema (default: a
                FileSchemaCache beside the schema file).
            config: Configuration (default: the global configuration).
            metrics: Metrics registry (default: the global registry).

        Raises:
            DatabaseNotFoundError: If the schema file is missing or empty.
        """
        self._config = config or get_config()
        storage = self._config.storage

        if options is None:
            options = self._config.options
        elif not isinstance(options, DatabaseOptions):
            options = DatabaseOptions.from_mapping(options)
        self._options = options

        self._datapath = Path(str(datapath).rstrip(os.sep) or os.sep)
        self._database_name = database_name
        self._schema_path = self._datapath / f"{database_name}{storage.schema_extension}"

        self._schema_cache = schema_cache or FileSchemaCache(
            schema_extension=storage.schema_extension,
            cache_suffix=storage.cache_suffix,
        )
        self._metrics = metrics or get_metrics()
        self._logger = get_logger(__name__, database=database_name)

        self._store = DelimitedTableStore(
            datapath=self._datapath,
            database_name=database_name,
            delimiters=options.delimiters,
            prepend_database_name=options.prepend_database_name,
            table_extension=storage.table_extension,
            fsync=storage.fsync,
        )
        self._parser = SchemaParser()
        self._evaluator = CriteriaEvaluator()

        self._schema = self._load_schema()

    @classmethod
    def open(
        cls,
        datapath: str | Path,
        database_name: str,
        options: DatabaseOptions | Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> Database:
        """Open a database; same arguments as the constructor."""
        return cls(datapath, database_name, options, **kwargs)

    def __repr__(self) -> str:
        return f"Database(datapath={str(self._datapath)!r}, name={self._database_name!r})"

    @property
    def datapath(self) -> Path:
        return self._datapath

    @property
    def database_name(self) -> str:
        return self._database_name

    @property
    def schema_path(self) -> Path:
        return self._schema_path

    @property
    def options(self) -> DatabaseOptions:
        return self._options

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def cache_key(self) -> SchemaCacheKey:
        return SchemaCacheKey(datapath=self._datapath, database_name=self._database_name)

    def table_path(self, table: str) -> Path:
        """Return the data file path of a table."""
        return self._store.table_path(self._resolve_table(table).name)

    # =========================================================================
    # Introspection
    # =========================================================================

    def list_tables(self) -> list[str]:
        """Return the table names in declaration order."""
        return self._schema.table_names

    def table_schema(self, table: str) -> list[str]:
        """Return a table's columns in declaration order, key first."""
        return list(self._resolve_table(table).columns)

    def primary_key(self, table: str) -> str:
        """Return a table's primary key column."""
        return self._resolve_table(table).primary_key

    # =========================================================================
    # Queries
    # =========================================================================

    def select(
        self,
        table: str,
        columns: ColumnList = "*",
        criteria: str = "",
        order: str = "",
    ) -> list[dict[str, str]]:
        """Return matching rows as column-name keyed dicts.

        Criteria naming an unknown column match nothing, and an order on an
        unknown column leaves rows in file order. An unknown name in
        ``columns`` raises ColumnNotFoundError.
        """
        with self._operation("select", table):
            definition = self._resolve_table(table)
            records = self._store.read_records(definition.name)

            parsed = self._evaluator.parse(criteria, definition)
            if parsed is not None:
                records = self._evaluator.matching_rows(parsed, definition, records)

            records = sort_records(records, definition, SortSpec.parse(order or ""))
            rows = [record_to_row(record, definition) for record in records]

            requested = parse_column_list(columns)
            resolve_columns(requested, definition)
            result = project(rows, requested)

            self._metrics.rows_affected_total.labels(operation="select").inc(len(result))
            return result

    def insert(
        self,
        table: str,
        columns: ColumnList = "*",
        values: Sequence[Any] = (),
    ) -> str:
        """Append a record and return the key it was stored under.

        When the primary key column is not among ``columns`` the key is the
        highest numeric key in the table plus one (1 for an empty table).
        """
        with self._operation("insert", table):
            definition = self._resolve_table(table)
            values = self._as_values(values)

            is_new_table = self._store.is_empty(definition.name)
            records = self._store.read_records(definition.name)

            column_ids = resolve_columns(parse_column_list(columns), definition)
            if len(column_ids) != len(values):
                raise ColumnListMismatchError(expected=len(column_ids), got=len(values))

            new_record: Record = [""] * len(definition.columns)
            for column_id, value in zip(column_ids, values):
                new_record[column_id] = to_text(value)

            key_index = definition.key_index
            if key_index in column_ids:
                key = new_record[key_index]
                if any(self._key_of(record, key_index) == key for record in records):
                    raise DuplicateKeyError(definition.name, key)
                autokey = False
            else:
                key = self._next_key(definition, records)
                new_record[key_index] = key
                autokey = True

            records.append(new_record)
            self._write(definition, records)

            self._metrics.rows_affected_total.labels(operation="insert").inc()
            self._logger.info(
                "record_inserted",
                table=definition.name,
                key=key,
                autokey=autokey,
                new_table=is_new_table,
            )
            return key

    def update(
        self,
        table: str,
        columns: ColumnList,
        values: Sequence[Any],
        criteria: str = "",
    ) -> int:
        """Overwrite ``columns`` with ``values`` in every matching record.

        Without criteria every record is updated. Returns the number of
        records targeted; when none are, the table file is left untouched.
        """
        with self._operation("update", table):
            definition = self._resolve_table(table)
            values = self._as_values(values)
            records = self._store.read_records(definition.name)

            target_ids = self._target_ids(definition, records, criteria)

            column_ids = resolve_columns(parse_column_list(columns), definition)
            if len(column_ids) != len(values):
                raise ColumnListMismatchError(expected=len(column_ids), got=len(values))

            if target_ids:
                width = max(column_ids) + 1
                for row_id in target_ids:
                    record = records[row_id]
                    if len(record) < width:
                        record.extend([""] * (width - len(record)))
                    for column_id, value in zip(column_ids, values):
                        record[column_id] = to_text(value)

                self._write(definition, records)

            self._metrics.rows_affected_total.labels(operation="update").inc(len(target_ids))
            self._logger.info("records_updated", table=definition.name, count=len(target_ids))
            return len(target_ids)

    def delete(self, table: str, criteria: str = "") -> int:
        """Remove every matching record; without criteria, every record.

        Returns the number of records removed. Remaining records keep their
        relative order.
        """
        with self._operation("delete", table):
            definition = self._resolve_table(table)
            records = self._store.read_records(definition.name)

            target_ids = set(self._target_ids(definition, records, criteria))

            if target_ids:
                remaining = [
                    record for row_id, record in enumerate(records) if row_id not in target_ids
                ]
                self._write(definition, remaining)

            self._metrics.rows_affected_total.labels(operation="delete").inc(len(target_ids))
            self._logger.info("records_deleted", table=definition.name, count=len(target_ids))
            return len(target_ids)

    # =========================================================================
    # Internals
    # =========================================================================

    def _load_schema(self) -> Schema:
        """Load the schema from the cache or by parsing the schema file."""
        key = self.cache_key

        if self._options.use_cache:
            schema = self._schema_cache.get(key)
            if schema is not None:
                self._metrics.schema_cache_total.labels(result="hit").inc()
                self._logger.debug("schema_cache_hit", key=str(key))
                return schema
            self._metrics.schema_cache_total.labels(result="miss").inc()
            self._logger.debug("schema_cache_miss", key=str(key))

        schema = self._parser.parse_file(self._schema_path)
        self._schema_cache.put(key, schema)
        return schema

    def _resolve_table(self, table: str) -> Table:
        """Return the table definition for a name.

        Raises:
            MissingTableParamError: If the name is blank.
            TableNotFoundError: If no table has that name.
        """
        if not table or not str(table).strip():
            raise MissingTableParamError()

        definition = self._schema.table(table)
        if definition is None:
            raise TableNotFoundError(table)
        return definition

    def _target_ids(self, definition: Table, records: list[Record], criteria: str) -> list[int]:
        """Row positions an update or delete applies to."""
        parsed = self._evaluator.parse(criteria, definition)
        if parsed is None:
            return list(range(len(records)))
        return self._evaluator.matching_indices(parsed, definition, records)

    def _next_key(self, definition: Table, records: list[Record]) -> str:
        """Highest numeric key plus one; 1 for a table without records."""
        key_index = definition.key_index
        max_key = max(
            (integer_value(self._key_of(record, key_index)) for record in records),
            default=0,
        )
        if max_key >= MAX_KEY:
            raise AutoKeyOverflowError(definition.name, max_key)
        return str(max_key + 1)

    def _write(self, definition: Table, records: Sequence[Record]) -> None:
        written = self._store.write_records(definition.name, records)
        self._metrics.table_bytes_written_total.inc(written)

    @staticmethod
    def _key_of(record: Record, key_index: int) -> str:
        return record[key_index] if key_index < len(record) else ""

    @staticmethod
    def _as_values(values: Sequence[Any] | str) -> list[Any]:
        # A lone string is one value, not a sequence of characters
        if isinstance(values, (str, bytes)):
            return [values]
        return list(values)

    @contextmanager
    def _operation(self, operation: str, table: str) -> Iterator[None]:
        """Trace, time and count one operation."""
        start = time.perf_counter()

        with operation_span(operation, self._database_name, str(table or "")):
            try:
                yield
            except Exception:
                self._metrics.queries_total.labels(operation=operation, status="error").inc()
                raise
            else:
                self._metrics.queries_total.labels(operation=operation, status="success").inc()
            finally:
                self._metrics.query_latency_seconds.labels(operation=operation).observe(
                    time.perf_counter() - start
                )
