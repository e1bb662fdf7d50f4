"""Wiring of logging, tracing and metrics from configuration."""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from opentelemetry import trace

from flatfile_db.infrastructure.config import Config, get_config
from flatfile_db.infrastructure.logging import get_logger, setup_logging
from flatfile_db.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from flatfile_db.infrastructure.tracing import setup_tracing


@dataclass
class Observability:
    """The configured logger, tracer and metrics of a process."""

    config: Config
    logger: structlog.BoundLogger
    tracer: trace.Tracer
    metrics: MetricsRegistry


def setup_observability(
    config: Config | None = None,
    serve_metrics: bool = False,
) -> Observability:
    """
    Configure logging, tracing and metrics from ``config.observability``.

    Applications embedding the database call this once at startup; the
    library itself only logs, traces and counts through whatever has been
    set up.

    Args:
        config: Configuration (default: the global configuration)
        serve_metrics: Start the Prometheus HTTP server on ``metrics_port``

    Returns:
        The configured components
    """
    config = config or get_config()
    settings = config.observability

    setup_logging(level=settings.log_level, log_format=settings.log_format)
    tracer = setup_tracing(
        service_name=settings.otel_service_name,
        otlp_endpoint=settings.otel_endpoint,
    )
    metrics = setup_metrics(settings.metrics_port) if serve_metrics else get_metrics()

    logger = get_logger(__name__)
    logger.info(
        "observability_configured",
        log_level=settings.log_level,
        otel_endpoint=settings.otel_endpoint,
        metrics_port=settings.metrics_port if serve_metrics else None,
    )

    return Observability(config=config, logger=logger, tracer=tracer, metrics=metrics)
