"""Configuration management for the flat-file database."""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from flatfile_db.domain.value_objects import Delimiters


class DatabaseOptions(BaseModel):
    """Options fixed when a database is opened.

    The legacy option names used by older callers are accepted as aliases,
    including the negated ``no_cache`` switch.

    Example:
        >>> DatabaseOptions.from_mapping({"no_cache": 1}).use_cache
        False
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    prepend_database_name: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "prepend_database_name",
            "prepend_databasename_to_table_filename",
        ),
        description="Prefix table file names with '<database>.'",
    )
    use_cache: bool = Field(
        default=True,
        description="Read the parsed schema from the schema cache when present",
    )
    legacy_delimiters: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "legacy_delimiters",
            "compat_legacy_delimiters",
            "compat_delimiter_mode",
        ),
        description="Use the legacy delimiter bytes (200/201) in table files",
    )

    @model_validator(mode="before")
    @classmethod
    def _apply_no_cache(cls, data: Any) -> Any:
        """Translate the negated ``no_cache`` alias into ``use_cache``."""
        if isinstance(data, Mapping) and "no_cache" in data:
            data = dict(data)
            data["use_cache"] = not bool(data.pop("no_cache"))
        return data

    @property
    def delimiters(self) -> Delimiters:
        """The delimiter pair table files are read and written with."""
        return Delimiters.legacy() if self.legacy_delimiters else Delimiters.standard()

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> DatabaseOptions:
        """Build options from a plain mapping; unknown keys are ignored."""
        return cls.model_validate(dict(options or {}))


class StorageConfig(BaseModel):
    """Storage configuration."""

    schema_extension: str = Field(default=".dbd", description="Schema definition file extension")
    table_extension: str = Field(default=".dtf", description="Table data file extension")
    cache_suffix: str = Field(default=".cache", description="Suffix of schema cache files")
    fsync: bool = Field(default=True, description="fsync table files after each rewrite")

    @field_validator("schema_extension", "table_extension", "cache_suffix")
    @classmethod
    def _require_leading_dot(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError(f"Extension must start with '.': {value!r}")
        return value


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="flatfile_db", description="Service name for tracing")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus metrics port")


class Config(BaseSettings):
    """Main configuration for the flat-file database."""

    model_config = SettingsConfigDict(
        env_prefix="FLATFILE_DB_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    options: DatabaseOptions = Field(default_factory=DatabaseOptions)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
