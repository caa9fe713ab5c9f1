"""Shared test fixtures for all test modules."""

import os
import random

# settings are read at import time; no exporters should dial a collector in tests
os.environ["ENABLE_TELEMETRY"] = "false"

import pytest  # noqa: E402
import structlog  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from opentelemetry import metrics, trace  # noqa: E402
from opentelemetry.exporter.prometheus import PrometheusMetricReader  # noqa: E402
from opentelemetry.sdk.metrics import MeterProvider  # noqa: E402
from opentelemetry.sdk.metrics.export import InMemoryMetricReader  # noqa: E402
from opentelemetry.sdk.trace import TracerProvider  # noqa: E402
from opentelemetry.sdk.trace.export import SimpleSpanProcessor  # noqa: E402
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (  # noqa: E402
    InMemorySpanExporter,
)

from lgtm_otel_api.dependencies import get_order_simulator  # noqa: E402
from lgtm_otel_api.main import app  # noqa: E402
from lgtm_otel_api.observability.telemetry import create_resource  # noqa: E402
from lgtm_otel_api.services import OrderSimulator  # noqa: E402

# capture_logs only sees loggers that were not cached on first use
structlog.configure(cache_logger_on_first_use=False)

# global providers can be set once per process
_span_exporter = InMemorySpanExporter()
_metric_reader = InMemoryMetricReader()

_tracer_provider = TracerProvider(resource=create_resource())
_tracer_provider.add_span_processor(SimpleSpanProcessor(_span_exporter))
trace.set_tracer_provider(_tracer_provider)
# the prometheus reader backs /metrics the same way configure_telemetry wires it
metrics.set_meter_provider(
    MeterProvider(
        resource=create_resource(),
        metric_readers=[_metric_reader, PrometheusMetricReader()],
    )
)


def metric_points(reader: InMemoryMetricReader, name: str, **attributes) -> list:
    """Collect data points of one instrument whose attributes include `attributes`."""
    data = reader.get_metrics_data()
    if data is None:
        return []

    points = []
    for resource_metrics in data.resource_metrics:
        for scope_metrics in resource_metrics.scope_metrics:
            for metric in scope_metrics.metrics:
                if metric.name != name:
                    continue
                for point in metric.data.data_points:
                    if all(point.attributes.get(k) == v for k, v in attributes.items()):
                        points.append(point)
    return points


def metric_sum(reader: InMemoryMetricReader, name: str, **attributes) -> float:
    """Cumulative value of a counter or up-down counter across matching points."""
    return sum(point.value for point in metric_points(reader, name, **attributes))


def histogram_count(reader: InMemoryMetricReader, name: str, **attributes) -> int:
    """Number of recorded histogram observations across matching points."""
    return sum(point.count for point in metric_points(reader, name, **attributes))


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    """In-memory span exporter, emptied before each test."""
    _span_exporter.clear()
    return _span_exporter


@pytest.fixture
def metric_reader() -> InMemoryMetricReader:
    """In-memory metric reader with cumulative temporality."""
    return _metric_reader


@pytest.fixture
def client():
    """Test client running the app lifespan."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fast_simulator():
    """Install a seeded order simulator with millisecond work durations."""
    simulator = OrderSimulator(
        work_min_ms=1,
        work_max_ms=5,
        max_orders=10,
        max_revenue=1000.0,
        failure_rate=0.0,
        rng=random.Random(1234),
    )
    app.dependency_overrides[get_order_simulator] = lambda: simulator
    yield simulator
    app.dependency_overrides.pop(get_order_simulator, None)


@pytest.fixture
def failing_simulator():
    """Install an order simulator whose work always fails."""
    simulator = OrderSimulator(
        work_min_ms=1,
        work_max_ms=5,
        failure_rate=1.0,
        rng=random.Random(99),
    )
    app.dependency_overrides[get_order_simulator] = lambda: simulator
    yield simulator
    app.dependency_overrides.pop(get_order_simulator, None)
