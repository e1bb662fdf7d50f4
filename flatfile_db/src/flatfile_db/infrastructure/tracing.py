"""OpenTelemetry tracing for database operations.

Every public Database operation runs inside a ``flatfile.<operation>`` span
carrying the database and table names. Until ``setup_tracing`` installs a
provider, spans come from the no-op tracer and cost next to nothing.
"""

from __future__ import annotations

from contextlib import AbstractContextManager, contextmanager
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

TRACER_NAME = "flatfile_db"
SPAN_PREFIX = "flatfile"

_tracer: trace.Tracer | None = None


def setup_tracing(
    service_name: str = "flatfile_db",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """
    Install a tracer provider for the flat-file database.

    Args:
        service_name: Value of the ``service.name`` resource attribute
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4317")
        console_export: Also print finished spans to stdout

    Returns:
        The tracer used for operation spans
    """
    global _tracer

    from flatfile_db import __version__

    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": service_name,
                "service.version": __version__,
            }
        )
    )

    if otlp_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
        )
    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _tracer = provider.get_tracer(TRACER_NAME)
    return _tracer


def get_tracer() -> trace.Tracer:
    """Get the tracer for operation spans (a no-op tracer until set up)."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """
    Context manager for creating a trace span.

    Exceptions raised inside the block are recorded on the span and
    re-raised.

    Args:
        name: Name of the span
        attributes: Optional attributes to add to the span

    Yields:
        The created span
    """
    with get_tracer().start_as_current_span(name, attributes=attributes or {}) as span:
        yield span


def operation_span(
    operation: str,
    database: str,
    table: str | None,
) -> AbstractContextManager[trace.Span]:
    """Span for one database operation, e.g. ``flatfile.select``."""
    return trace_span(
        f"{SPAN_PREFIX}.{operation}",
        {"db.system": "flatfile", "db.name": database, "db.table": table or ""},
    )
