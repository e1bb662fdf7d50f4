"""File-based implementation of the SchemaCache protocol.

The parsed schema of a database is stored as JSON in a hidden file next to
its schema definition file:

    <datapath>/.<database><schema_extension><cache_suffix>

e.g. ``data/.library.dbd.cache``. An entry stays valid until it is
overwritten or deleted; nothing here compares it against the schema file.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from flatfile_db.domain.entities import Schema
from flatfile_db.infrastructure.config import get_config
from flatfile_db.infrastructure.logging import get_logger
from flatfile_db.ports.outbound.schema_cache import SchemaCacheKey

logger = get_logger(__name__)

CACHE_FORMAT_VERSION = 1


class FileSchemaCache:
    """Stores one JSON cache file per database, beside its schema file."""

    def __init__(
        self,
        schema_extension: str | None = None,
        cache_suffix: str | None = None,
    ) -> None:
        storage = get_config().storage
        self._schema_extension = schema_extension or storage.schema_extension
        self._cache_suffix = cache_suffix or storage.cache_suffix

    def cache_path(self, key: SchemaCacheKey) -> Path:
        """Return the cache file path for a database."""
        return Path(key.datapath) / (
            f".{key.database_name}{self._schema_extension}{self._cache_suffix}"
        )

    def get(self, key: SchemaCacheKey) -> Schema | None:
        """Load a cached schema.

        A missing file is a miss. A file that cannot be read or decoded is also
        treated as a miss and logged, so the schema is parsed again and the
        entry rewritten.
        """
        path = self.cache_path(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("schema_cache_unreadable", path=str(path), error=str(e))
            return None

        try:
            payload = json.loads(raw)
            if payload.get("version") != CACHE_FORMAT_VERSION:
                raise ValueError(f"unsupported cache version {payload.get('version')!r}")
            return Schema.from_dict(payload["schema"])
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("schema_cache_unreadable", path=str(path), error=str(e))
            return None

    def put(self, key: SchemaCacheKey, schema: Schema) -> None:
        """Write the cache file, replacing it atomically.

        A cache that cannot be written is logged and skipped; the schema
        is simply parsed again next time.
        """
        path = self.cache_path(key)
        payload = {"version": CACHE_FORMAT_VERSION, "schema": schema.to_dict()}

        tmp_path = path.with_name(path.name + ".tmp")
        try:
            tmp_path.write_text(json.dumps(payload), encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            logger.warning("schema_cache_write_failed", path=str(path), error=str(e))
        finally:
            if tmp_path.is_file():
                tmp_path.unlink(missing_ok=True)
