"""Infrastructure layer - cross-cutting concerns."""

from flatfile_db.infrastructure.config import (
    Config,
    DatabaseOptions,
    ObservabilityConfig,
    StorageConfig,
    get_config,
)
from flatfile_db.infrastructure.logging import get_logger, setup_logging
from flatfile_db.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from flatfile_db.infrastructure.observability import Observability, setup_observability
from flatfile_db.infrastructure.tracing import (
    get_tracer,
    operation_span,
    setup_tracing,
    trace_span,
)

__all__ = [
    "Config",
    "DatabaseOptions",
    "ObservabilityConfig",
    "StorageConfig",
    "get_config",
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
    "operation_span",
    "Observability",
    "setup_observability",
]
