from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .telemetry import get_meter

meter = get_meter()

# counters
http_requests_total = meter.create_counter(
    "http_requests_total",
    description="The total number of HTTP requests",
)

# histograms
http_request_duration_seconds = meter.create_histogram(
    "http_request_duration_seconds",
    unit="s",
    description="The duration of HTTP requests",
)

# up-down counters
active_connections = meter.create_up_down_counter(
    "active_connections",
    description="The number of active connections",
)


def metrics_endpoint() -> Response:
    """prometheus metrics endpoint"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def record_request(endpoint: str) -> None:
    """record handled request"""
    http_requests_total.add(1, {"endpoint": endpoint})


def record_order(customer_type: str) -> None:
    """record one synthetic processed order"""
    http_requests_total.add(1, {"metric_type": "order_processed", "customer_type": customer_type})


def record_duration(duration: float, endpoint: str, status: str) -> None:
    """record request duration in seconds"""
    http_request_duration_seconds.record(duration, {"endpoint": endpoint, "status": status})


def connection_opened() -> None:
    active_connections.add(1)


def connection_closed() -> None:
    active_connections.add(-1)
