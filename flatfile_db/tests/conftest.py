"""Pytest configuration and fixtures for flatfile_db tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest
from prometheus_client import CollectorRegistry

from flatfile_db.adapters.outbound import MemorySchemaCache
from flatfile_db.application import Database
from flatfile_db.infrastructure.config import Config, StorageConfig
from flatfile_db.infrastructure.logging import setup_logging
from flatfile_db.infrastructure.metrics import MetricsRegistry

ELEMENTARY_SCHEMA = "TAB elementary\nKEY id\nCOL name\nCOL date\n"

US = "\x1f"
RS = "\x1e"


def dtf(*rows: tuple[str, ...]) -> bytes:
    """Build table file contents from rows of values."""
    return "".join(US.join(row) + RS + "\n" for row in rows).encode("utf-8")


@pytest.fixture(scope="session", autouse=True)
def quiet_logging() -> None:
    """Keep test output readable."""
    setup_logging(level="WARNING", log_format="console")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config() -> Config:
    """Provide a test configuration."""
    return Config(
        storage=StorageConfig(fsync=False),  # Faster for tests
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def schema_cache() -> MemorySchemaCache:
    return MemorySchemaCache()


@pytest.fixture
def write_schema(temp_dir: Path) -> Callable[..., Path]:
    """Write a schema definition file into the temporary directory."""

    def _write(text: str = ELEMENTARY_SCHEMA, name: str = "foobar") -> Path:
        path = temp_dir / f"{name}.dbd"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_table(temp_dir: Path) -> Callable[..., Path]:
    """Write a table data file into the temporary directory."""

    def _write(table: str, data: bytes, filename: str | None = None) -> Path:
        path = temp_dir / (filename or f"{table}.dtf")
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def open_db(
    temp_dir: Path,
    test_config: Config,
    metrics_registry: MetricsRegistry,
) -> Callable[..., Database]:
    """Open a database in the temporary directory with test config and metrics."""

    def _open(name: str = "foobar", options: object = None, **kwargs: object) -> Database:
        kwargs.setdefault("config", test_config)
        kwargs.setdefault("metrics", metrics_registry)
        return Database(temp_dir, name, options, **kwargs)  # type: ignore[arg-type]

    return _open


@pytest.fixture
def elementary(
    write_schema: Callable[..., Path],
    write_table: Callable[..., Path],
    open_db: Callable[..., Database],
) -> Database:
    """The two-row 'elementary' table: sherlock (12) and watson (47)."""
    write_schema()
    write_table(
        "elementary",
        dtf(("12", "sherlock", "1925-09-09"), ("47", "watson", "1931-10-31")),
    )
    return open_db()


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
