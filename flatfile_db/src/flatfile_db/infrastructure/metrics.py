"""Prometheus metrics for the flat-file database."""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    start_http_server,
)


class MetricsRegistry:
    """Registry of all flat-file database metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Query metrics
        self.queries_total = Counter(
            "flatfile_queries_total",
            "Total number of operations executed",
            ["operation", "status"],  # status: success, error
            registry=self._registry,
        )

        self.query_latency_seconds = Histogram(
            "flatfile_query_latency_seconds",
            "Operation latency in seconds",
            ["operation"],  # select, insert, update, delete
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
            registry=self._registry,
        )

        self.rows_affected_total = Counter(
            "flatfile_rows_affected_total",
            "Total rows returned or modified",
            ["operation"],
            registry=self._registry,
        )

        # Schema cache metrics
        self.schema_cache_total = Counter(
            "flatfile_schema_cache_total",
            "Schema cache lookups",
            ["result"],  # hit, miss
            registry=self._registry,
        )

        # Storage metrics
        self.table_bytes_written_total = Counter(
            "flatfile_table_bytes_written_total",
            "Total bytes written to table files",
            registry=self._registry,
        )

        self.info = Info(
            "flatfile_db",
            "Flat-file database information",
            registry=self._registry,
        )


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up the Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    # Collectors can only be registered once per registry
    if _metrics is None or registry is not None:
        _metrics = MetricsRegistry(registry)

    from flatfile_db import __version__
    _metrics.info.info({
        "version": __version__,
    })

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
