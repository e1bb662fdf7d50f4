"""Application layer for the flat-file database.

The application layer orchestrates domain logic to fulfill use cases:
select, insert, update and delete against schema-defined tables.

Exports:
    Database:
        - Database: Main entry point, implements the RecordStore port
"""

from flatfile_db.application.database import Database

__all__ = [
    "Database",
]
