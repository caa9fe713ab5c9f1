"""observability layer: metrics, tracing, logging"""

from .metrics import (
    active_connections,
    connection_closed,
    connection_opened,
    metrics_endpoint,
    record_duration,
    record_order,
    record_request,
)
from .telemetry import (
    configure_telemetry,
    create_otlp_exporters,
    create_resource,
    get_meter,
    get_tracer,
    instrument_app,
    shutdown_telemetry,
)

__all__ = [
    "active_connections",
    "connection_closed",
    "connection_opened",
    "metrics_endpoint",
    "record_duration",
    "record_order",
    "record_request",
    "configure_telemetry",
    "create_otlp_exporters",
    "create_resource",
    "get_meter",
    "get_tracer",
    "instrument_app",
    "shutdown_telemetry",
]
