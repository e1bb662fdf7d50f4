"""Domain entities for the flat-file database.

Exports:
    Schema:
        - Table: Table definition (name, columns, primary key)
        - Schema: Ordered collection of tables
        - Record: A row of text values in column order
        - ColumnList: Column names as a string or a sequence
"""

from flatfile_db.domain.entities.schema import ColumnList, Record, Schema, Table

__all__ = [
    "ColumnList",
    "Record",
    "Schema",
    "Table",
]
