"""Integration tests for Database over real schema and table files."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

from flatfile_db import Database
from flatfile_db.ports.inbound import (
    AutoKeyOverflowError,
    ColumnListMismatchError,
    ColumnNotFoundError,
    DatabaseNotFoundError,
    DuplicateKeyError,
    MissingTableParamError,
    SchemaFileEmptyError,
    SchemaFileMissingError,
    TableNotFoundError,
)

US = "\x1f"
RS = "\x1e"


def dtf(*rows: tuple[str, ...]) -> bytes:
    return "".join(US.join(row) + RS + "\n" for row in rows).encode("utf-8")


SHERLOCK = {"id": "12", "name": "sherlock", "date": "1925-09-09"}
WATSON = {"id": "47", "name": "watson", "date": "1931-10-31"}


@pytest.mark.integration
class TestOpen:
    """Tests for opening a database."""

    def test_missing_schema_file(self, open_db: Callable[..., Database]) -> None:
        with pytest.raises(SchemaFileMissingError) as exc_info:
            open_db("nothere")

        assert isinstance(exc_info.value, DatabaseNotFoundError)
        assert exc_info.value.path.endswith("nothere.dbd")

    def test_empty_schema_file(
        self, write_schema: Callable[..., Path], open_db: Callable[..., Database]
    ) -> None:
        write_schema("")

        with pytest.raises(SchemaFileEmptyError):
            open_db()

    def test_schema_without_directives(
        self, write_schema: Callable[..., Path], open_db: Callable[..., Database]
    ) -> None:
        write_schema("hello")

        assert open_db().list_tables() == []

    def test_open_classmethod(
        self, temp_dir: Path, write_schema: Callable[..., Path], test_config: object
    ) -> None:
        write_schema()

        db = Database.open(str(temp_dir) + "/", "foobar", config=test_config)

        assert db.datapath == temp_dir
        assert db.schema_path == temp_dir / "foobar.dbd"
        assert repr(db) == f"Database(datapath={str(temp_dir)!r}, name='foobar')"


@pytest.mark.integration
class TestIntrospection:
    """Tests for list_tables, table_schema and primary_key."""

    def test_list_tables(self, elementary: Database) -> None:
        assert elementary.list_tables() == ["elementary"]

    def test_list_tables_in_declaration_order(
        self, write_schema: Callable[..., Path], open_db: Callable[..., Database]
    ) -> None:
        write_schema("TAB zebra\nKEY id\n**\nTAB apple\nKEY id\nCOL name\n**\n")

        assert open_db().list_tables() == ["zebra", "apple"]

    def test_table_schema(self, elementary: Database) -> None:
        assert elementary.table_schema("elementary") == ["id", "name", "date"]
        assert elementary.primary_key("elementary") == "id"

    def test_table_path(self, elementary: Database, temp_dir: Path) -> None:
        assert elementary.table_path("elementary") == temp_dir / "elementary.dtf"

    def test_unknown_table(self, elementary: Database) -> None:
        with pytest.raises(TableNotFoundError, match="pizza"):
            elementary.table_schema("pizza")

    @pytest.mark.parametrize("table", ["", "   "])
    def test_blank_table_name(self, elementary: Database, table: str) -> None:
        with pytest.raises(MissingTableParamError) as exc_info:
            elementary.select(table)

        assert str(exc_info.value) == "Missing table name"


@pytest.mark.integration
class TestSelect:
    """Tests for select."""

    def test_all(self, elementary: Database) -> None:
        assert elementary.select("elementary") == [SHERLOCK, WATSON]
        assert elementary.select("elementary", "*") == [SHERLOCK, WATSON]

    def test_columns(self, elementary: Database) -> None:
        rows = elementary.select("elementary", "name, id")

        assert rows == [{"name": "sherlock", "id": "12"}, {"name": "watson", "id": "47"}]
        assert list(rows[0]) == ["name", "id"]

    def test_backticked_columns(self, elementary: Database) -> None:
        assert elementary.select("elementary", "`name`") == [
            {"name": "sherlock"},
            {"name": "watson"},
        ]

    def test_column_sequence(self, elementary: Database) -> None:
        assert elementary.select("elementary", ["date"]) == [
            {"date": "1925-09-09"},
            {"date": "1931-10-31"},
        ]

    def test_unknown_column(self, elementary: Database) -> None:
        with pytest.raises(ColumnNotFoundError) as exc_info:
            elementary.select("elementary", "id, pizza, pasta")

        assert exc_info.value.columns == ["pizza", "pasta"]

    def test_criteria(self, elementary: Database) -> None:
        assert elementary.select("elementary", "*", "name=watson") == [WATSON]

    def test_bare_criteria_uses_primary_key(self, elementary: Database) -> None:
        assert elementary.select("elementary", "*", "12") == [SHERLOCK]

    def test_regex_criteria(self, elementary: Database) -> None:
        assert elementary.select("elementary", "*", "date=/^1931/") == [WATSON]
        assert elementary.select("elementary", "*", "name=/SHER/") == [SHERLOCK]

    def test_whitespace_criteria_is_not_empty(self, elementary: Database) -> None:
        assert elementary.select("elementary", "*", "   ") == []

    def test_criteria_on_unknown_column(self, elementary: Database) -> None:
        assert elementary.select("elementary", "*", "pizza=1") == []

    def test_no_match(self, elementary: Database) -> None:
        assert elementary.select("elementary", "*", "name=lestrade") == []

    def test_missing_table_file(
        self, write_schema: Callable[..., Path], open_db: Callable[..., Database]
    ) -> None:
        write_schema()

        assert open_db().select("elementary") == []

    def test_multibyte_values(
        self,
        write_schema: Callable[..., Path],
        write_table: Callable[..., Path],
        open_db: Callable[..., Database],
    ) -> None:
        write_schema()
        write_table("elementary", dtf(("1", "Ünïcödé, with comma", "日本")))

        assert open_db().select("elementary", "name, date", "1") == [
            {"name": "Ünïcödé, with comma", "date": "日本"}
        ]


@pytest.mark.integration
class TestSelectOrder:
    """Tests for ordered selects."""

    @pytest.fixture
    def db(
        self,
        write_schema: Callable[..., Path],
        write_table: Callable[..., Path],
        open_db: Callable[..., Database],
    ) -> Database:
        write_schema()
        write_table(
            "elementary",
            dtf(
                ("12", "james", "2020-01-10"),
                ("47", "james", "2020-01-02"),
                ("23", "charlie", "2020-01-16"),
            ),
        )
        return open_db()

    def _ids(self, rows: list[dict[str, str]]) -> list[str]:
        return [row["id"] for row in rows]

    def test_ascending_is_stable(self, db: Database) -> None:
        assert self._ids(db.select("elementary", "*", "", "name")) == ["23", "12", "47"]
        assert self._ids(db.select("elementary", "*", "", "name ASC")) == ["23", "12", "47"]

    def test_descending(self, db: Database) -> None:
        assert self._ids(db.select("elementary", "*", "", "name desc")) == ["47", "12", "23"]
        assert self._ids(db.select("elementary", "*", "", "date DESC")) == ["23", "12", "47"]

    def test_natural_order_on_key(self, db: Database) -> None:
        db.insert("elementary", "id, name", ["100", "moriarty"])

        assert self._ids(db.select("elementary", "id", "", "id")) == ["12", "23", "47", "100"]

    def test_order_with_criteria(self, db: Database) -> None:
        rows = db.select("elementary", "id", "name=james", "date")

        assert self._ids(rows) == ["47", "12"]

    def test_order_on_unknown_column(self, db: Database) -> None:
        assert self._ids(db.select("elementary", "*", "", "pizza")) == ["12", "47", "23"]

    def test_order_on_unselected_column(self, db: Database) -> None:
        rows = db.select("elementary", "name", "", "id desc")

        assert rows == [{"name": "james"}, {"name": "charlie"}, {"name": "james"}]

    def test_order_on_long_digit_runs(self, db: Database) -> None:
        long_name = "agent" + "7" * 5000
        db.insert("elementary", "id, name", ["5", long_name])
        db.insert("elementary", "id, name", ["6", "agent99"])

        rows = db.select("elementary", "id", "name=/^agent/", "name desc")

        assert self._ids(rows) == ["5", "6"]


@pytest.mark.integration
class TestInsert:
    """Tests for insert."""

    def test_autokey(self, elementary: Database) -> None:
        key = elementary.insert("elementary", "name, date", ["lestrade", "1900-01-01"])

        assert key == "48"
        assert elementary.select("elementary", "*", "48") == [
            {"id": "48", "name": "lestrade", "date": "1900-01-01"}
        ]

    def test_autokey_on_new_table(
        self, write_schema: Callable[..., Path], open_db: Callable[..., Database], temp_dir: Path
    ) -> None:
        write_schema()
        db = open_db()

        assert db.insert("elementary", "name", ["hudson"]) == "1"
        assert db.insert("elementary", "name", ["mycroft"]) == "2"
        assert (temp_dir / "elementary.dtf").read_bytes() == dtf(
            ("1", "hudson", ""), ("2", "mycroft", "")
        )

    def test_autokey_ignores_non_numeric_keys(
        self,
        write_schema: Callable[..., Path],
        write_table: Callable[..., Path],
        open_db: Callable[..., Database],
    ) -> None:
        write_schema()
        write_table("elementary", dtf(("abc", "x", ""), ("7b", "y", "")))

        assert open_db().insert("elementary", "name", ["z"]) == "8"

    @pytest.mark.parametrize("max_key", [str(sys.maxsize), "9" * 5000])
    def test_autokey_overflow(
        self,
        max_key: str,
        write_schema: Callable[..., Path],
        write_table: Callable[..., Path],
        open_db: Callable[..., Database],
    ) -> None:
        write_schema()
        write_table("elementary", dtf((max_key, "x", "")))

        with pytest.raises(AutoKeyOverflowError):
            open_db().insert("elementary", "name", ["y"])

    def test_explicit_key(self, elementary: Database) -> None:
        assert elementary.insert("elementary", "id, name", [5, "hudson"]) == "5"
        assert elementary.select("elementary", "id")[-1] == {"id": "5"}

    def test_all_columns(self, elementary: Database) -> None:
        key = elementary.insert("elementary", "*", ["99", "mycroft", "1920-02-02"])

        assert key == "99"
        assert elementary.select("elementary", "*", "99") == [
            {"id": "99", "name": "mycroft", "date": "1920-02-02"}
        ]

    @pytest.mark.parametrize("key", ["12", 12])
    def test_duplicate_key(self, elementary: Database, key: object) -> None:
        with pytest.raises(DuplicateKeyError) as exc_info:
            elementary.insert("elementary", "id, name", [key, "impostor"])

        assert exc_info.value.key == "12"
        assert len(elementary.select("elementary")) == 2

    def test_column_list_mismatch(self, elementary: Database) -> None:
        with pytest.raises(ColumnListMismatchError) as exc_info:
            elementary.insert("elementary", "name, date", ["only one"])

        assert (exc_info.value.expected, exc_info.value.got) == (2, 1)

    def test_single_string_value(self, elementary: Database) -> None:
        key = elementary.insert("elementary", "name", "hudson")

        assert elementary.select("elementary", "name", key) == [{"name": "hudson"}]

    def test_unknown_column(self, elementary: Database) -> None:
        with pytest.raises(ColumnNotFoundError):
            elementary.insert("elementary", "pizza", ["x"])

    def test_unknown_table(self, elementary: Database) -> None:
        with pytest.raises(TableNotFoundError):
            elementary.insert("pizza", "name", ["x"])

    def test_boolean_values(self, elementary: Database) -> None:
        key = elementary.insert("elementary", "name, date", [True, False])

        assert elementary.select("elementary", "name, date", key) == [{"name": "1", "date": ""}]
        assert elementary.select("elementary", "id", "name=true") == [{"id": key}]


@pytest.mark.integration
class TestUpdate:
    """Tests for update."""

    def test_all_rows(self, elementary: Database) -> None:
        count = elementary.update("elementary", "date", ["2000-01-01"])

        assert count == 2
        assert [row["date"] for row in elementary.select("elementary")] == [
            "2000-01-01",
            "2000-01-01",
        ]

    def test_criteria(self, elementary: Database) -> None:
        count = elementary.update("elementary", "name, date", ["john", "1852-07-07"], "47")

        assert count == 1
        assert elementary.select("elementary") == [
            SHERLOCK,
            {"id": "47", "name": "john", "date": "1852-07-07"},
        ]

    def test_regex_criteria(self, elementary: Database) -> None:
        assert elementary.update("elementary", "name", ["Sherlock Holmes"], "name=/^sher/") == 1
        assert elementary.select("elementary", "name", "12") == [{"name": "Sherlock Holmes"}]

    def test_whitespace_criteria_targets_empty_key(self, elementary: Database) -> None:
        assert elementary.update("elementary", "name", ["x"], "   ") == 0
        assert elementary.select("elementary") == [SHERLOCK, WATSON]

    def test_no_match_leaves_file_untouched(
        self,
        write_schema: Callable[..., Path],
        write_table: Callable[..., Path],
        open_db: Callable[..., Database],
    ) -> None:
        write_schema()
        original = dtf(("12", "sherlock", "1925-09-09")) + b"trailing"
        path = write_table("elementary", original)

        assert open_db().update("elementary", "name", ["x"], "name=nobody") == 0
        assert path.read_bytes() == original

    def test_pads_short_records(
        self,
        write_schema: Callable[..., Path],
        write_table: Callable[..., Path],
        open_db: Callable[..., Database],
    ) -> None:
        write_schema()
        write_table("elementary", dtf(("12",)))
        db = open_db()

        db.update("elementary", "date", ["1925-09-09"])

        assert db.select("elementary") == [{"id": "12", "name": "", "date": "1925-09-09"}]

    def test_column_list_mismatch(self, elementary: Database) -> None:
        with pytest.raises(ColumnListMismatchError):
            elementary.update("elementary", "name, date", ["x"])

    def test_unknown_column(self, elementary: Database) -> None:
        with pytest.raises(ColumnNotFoundError):
            elementary.update("elementary", "pizza", ["x"])

        assert elementary.select("elementary") == [SHERLOCK, WATSON]


@pytest.mark.integration
class TestDelete:
    """Tests for delete."""

    def test_all_rows(self, elementary: Database, temp_dir: Path) -> None:
        assert elementary.delete("elementary") == 2
        assert elementary.select("elementary") == []
        assert (temp_dir / "elementary.dtf").read_bytes() == b""

    def test_criteria(self, elementary: Database) -> None:
        assert elementary.delete("elementary", "name=sherlock") == 1
        assert elementary.select("elementary") == [WATSON]

    def test_regex_criteria(self, elementary: Database) -> None:
        assert elementary.delete("elementary", "date=/-10-/") == 1
        assert elementary.select("elementary") == [SHERLOCK]

    def test_no_match(self, elementary: Database) -> None:
        assert elementary.delete("elementary", "99") == 0
        assert elementary.select("elementary") == [SHERLOCK, WATSON]

    def test_whitespace_criteria_targets_empty_key(
        self,
        write_schema: Callable[..., Path],
        write_table: Callable[..., Path],
        open_db: Callable[..., Database],
    ) -> None:
        write_schema()
        write_table("elementary", dtf(("12", "sherlock", ""), ("", "keyless", "")))
        db = open_db()

        assert db.delete("elementary", "   ") == 1
        assert db.select("elementary", "name") == [{"name": "sherlock"}]
        assert db.delete("elementary", "  ") == 0

    def test_unknown_criteria_column(self, elementary: Database) -> None:
        assert elementary.delete("elementary", "pizza=12") == 0
        assert len(elementary.select("elementary")) == 2

    def test_keeps_order_of_remaining(
        self,
        write_schema: Callable[..., Path],
        write_table: Callable[..., Path],
        open_db: Callable[..., Database],
    ) -> None:
        write_schema()
        write_table("elementary", dtf(("3", "c", ""), ("1", "a", ""), ("2", "b", ""), ("4", "a", "")))
        db = open_db()

        assert db.delete("elementary", "name=a") == 2
        assert [row["id"] for row in db.select("elementary")] == ["3", "2"]

    def test_unknown_table(self, elementary: Database) -> None:
        with pytest.raises(TableNotFoundError):
            elementary.delete("pizza")
