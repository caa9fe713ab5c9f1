import logging
from typing import Any, NamedTuple

import structlog
from opentelemetry import metrics, trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricReader, PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from ..config import settings
from ..core.exceptions import ConfigurationError
from ..logger import build_formatter, get_logger

logger = get_logger(__name__)

SERVICE_NAME = "lgtm-otel-api"
SERVICE_VERSION = "1.0.0"

RESOURCE_ATTRIBUTES = {
    "service.name": SERVICE_NAME,
    "service.version": SERVICE_VERSION,
    "deployment.environment": "dev",
    "region": "local",
}

TRACER_NAME = "lgtm_otel_api.trace_demo"
METER_NAME = "lgtm_otel_api.metrics"

# providers installed by configure_telemetry, flushed on shutdown
_providers: list[Any] = []


class OTLPExporters(NamedTuple):
    spans: Any
    metrics: Any
    logs: Any


class OTLPLogHandler(LoggingHandler):
    """
    stdlib handler forwarding records to the otel logs pipeline

    structlog events are rendered as logfmt so the body carries
    `trace_id=<hex>` for the grafana derived field
    """

    def __init__(self, logger_provider: LoggerProvider):
        super().__init__(level=logging.NOTSET, logger_provider=logger_provider)
        self.body_formatter = build_formatter(
            structlog.processors.LogfmtRenderer(key_order=["event"], drop_missing=True)
        )
        self.addFilter(self._skip_sdk_records)

    @staticmethod
    def _skip_sdk_records(record: logging.LogRecord) -> bool:
        # sdk export errors would otherwise feed back into the exporter
        return not record.name.startswith("opentelemetry")

    def emit(self, record: logging.LogRecord) -> None:
        body = self.body_formatter.format(record)
        fields = {k: v for k, v in vars(record).items() if k not in ("_logger", "_name")}
        fields.update(msg=body, args=())
        super().emit(logging.makeLogRecord(fields))


def create_resource() -> Resource:
    """static resource attached to every log, metric and span"""
    return Resource.create(RESOURCE_ATTRIBUTES)


def create_otlp_exporters(endpoint: str, protocol: str) -> OTLPExporters:
    """build span, metric and log exporters sharing one endpoint and protocol"""
    if protocol == "grpc":
        from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
        from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        return OTLPExporters(
            spans=OTLPSpanExporter(endpoint=endpoint, insecure=True),
            metrics=OTLPMetricExporter(endpoint=endpoint, insecure=True),
            logs=OTLPLogExporter(endpoint=endpoint, insecure=True),
        )

    if protocol == "http/protobuf":
        from opentelemetry.exporter.otlp.proto.http._log_exporter import OTLPLogExporter
        from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

        # http exporters take the full per-signal url
        base = endpoint.rstrip("/")
        return OTLPExporters(
            spans=OTLPSpanExporter(endpoint=f"{base}/v1/traces"),
            metrics=OTLPMetricExporter(endpoint=f"{base}/v1/metrics"),
            logs=OTLPLogExporter(endpoint=f"{base}/v1/logs"),
        )

    raise ConfigurationError(f"unsupported otlp protocol: {protocol}", {"protocol": protocol})


def configure_telemetry() -> None:
    """configure opentelemetry traces, metrics and logs with otlp exporters"""
    if not settings.enable_telemetry:
        logger.info("telemetry disabled")
        return

    resource = create_resource()
    exporters = create_otlp_exporters(settings.otlp_endpoint, settings.otlp_protocol)

    # traces
    trace_provider = TracerProvider(resource=resource)
    trace_provider.add_span_processor(BatchSpanProcessor(exporters.spans))
    trace.set_tracer_provider(trace_provider)

    # metrics
    metric_readers: list[MetricReader] = [
        PeriodicExportingMetricReader(
            exporters.metrics,
            export_interval_millis=settings.metric_export_interval_ms,
        )
    ]
    if settings.enable_metrics:
        metric_readers.append(PrometheusMetricReader())
    meter_provider = MeterProvider(resource=resource, metric_readers=metric_readers)
    metrics.set_meter_provider(meter_provider)

    # logs
    logger_provider = LoggerProvider(resource=resource)
    logger_provider.add_log_record_processor(BatchLogRecordProcessor(exporters.logs))
    set_logger_provider(logger_provider)
    logging.getLogger().addHandler(OTLPLogHandler(logger_provider))

    _providers.extend([trace_provider, meter_provider, logger_provider])

    logger.info(
        "telemetry configured",
        otlp_endpoint=settings.otlp_endpoint,
        otlp_protocol=settings.otlp_protocol,
    )


def shutdown_telemetry() -> None:
    """flush pending telemetry and stop the providers"""
    root = logging.getLogger()
    for handler in [h for h in root.handlers if isinstance(h, OTLPLogHandler)]:
        root.removeHandler(handler)

    while _providers:
        provider = _providers.pop()
        provider.shutdown()
    logger.info("telemetry shut down")


def instrument_app(app) -> None:
    """instrument fastapi app with opentelemetry"""
    if not settings.enable_telemetry:
        return

    # patterns are regexes searched in the full url
    FastAPIInstrumentor.instrument_app(app, excluded_urls="/health$,/metrics$")
    logger.info("fastapi instrumented with opentelemetry")


def get_tracer(name: str = TRACER_NAME):
    """get tracer instance"""
    return trace.get_tracer(name, SERVICE_VERSION)


def get_meter(name: str = METER_NAME):
    """get meter instance"""
    return metrics.get_meter(name, SERVICE_VERSION)
