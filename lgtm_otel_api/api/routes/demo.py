import asyncio
import time
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException
from opentelemetry.trace import SpanKind, format_trace_id

from ...dependencies import OrderSimulatorDep
from ...logger import get_logger
from ...models import MetricsTestResponse, PingResponse, TraceResponse
from ...observability.metrics import (
    connection_closed,
    connection_opened,
    record_duration,
    record_order,
    record_request,
)
from ...observability.telemetry import get_tracer

logger = get_logger("demo")
tracer = get_tracer()

router = APIRouter(tags=["demo"])

CHILD_WORK_DELAY_SECONDS = 0.05


def _elapsed(start_time: float) -> float:
    return time.perf_counter() - start_time


def _now() -> datetime:
    return datetime.now(timezone.utc)


@router.get("/ping", response_model=PingResponse)
async def ping():
    """
    emit one log line per severity and record request metrics

    the three log lines exist to check severity mapping in loki
    """
    start_time = time.perf_counter()

    try:
        record_request("/ping")

        logger.info("ping hit", time=_now().isoformat())
        logger.warning("sample warning", user_id=42)
        logger.error("sample error to test severity mapping")

        record_duration(_elapsed(start_time), "/ping", "success")
        return PingResponse(at=_now())

    except Exception as e:
        record_duration(_elapsed(start_time), "/ping", "error")
        logger.error("error processing ping request", error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="internal server error") from e


@router.get("/trace", response_model=TraceResponse)
async def trace_demo():
    """
    manual tracing: a parent span with one child span

    the trace id is written into the log text so grafana can pivot
    from the loki line to the tempo trace
    """
    start_time = time.perf_counter()

    try:
        record_request("/trace")

        with tracer.start_as_current_span("trace_endpoint", kind=SpanKind.SERVER) as root:
            root.set_attribute("endpoint", "/trace")
            trace_id = format_trace_id(root.get_span_context().trace_id)
            logger.info("handling /trace request", trace_id=trace_id)

            with tracer.start_as_current_span("child_work", kind=SpanKind.INTERNAL) as child:
                child.set_attribute("work.stage", "child")
                await asyncio.sleep(CHILD_WORK_DELAY_SECONDS)

            logger.info("finished /trace", trace_id=trace_id)

        record_duration(_elapsed(start_time), "/trace", "success")
        return TraceResponse(trace_id=trace_id)

    except Exception as e:
        record_duration(_elapsed(start_time), "/trace", "error")
        logger.error("error processing trace request", error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="internal server error") from e


@router.get("/metrics-test", response_model=MetricsTestResponse)
async def metrics_test(simulator: OrderSimulatorDep):
    """
    simulate a unit of business work and emit synthetic order metrics

    active_connections is incremented for the duration of the call and
    always decremented, also on failure
    """
    start_time = time.perf_counter()
    connection_opened()

    try:
        record_request("/metrics-test")

        work_ms = await simulator.simulate_work()
        batch = simulator.generate_orders()

        for customer_type in batch.customer_types:
            record_order(customer_type)

        revenue = round(batch.revenue, 2)
        logger.info(
            "metrics test completed",
            order_count=batch.count,
            revenue=revenue,
            duration_ms=work_ms,
        )

        record_duration(_elapsed(start_time), "/metrics-test", "success")
        return MetricsTestResponse(
            orders_processed=batch.count,
            revenue=revenue,
            processing_time_ms=work_ms,
            at=_now(),
        )

    except Exception as e:
        record_duration(_elapsed(start_time), "/metrics-test", "error")
        logger.error("error in metrics test endpoint", error=str(e), exc_info=True)
        raise HTTPException(status_code=500, detail="internal server error") from e

    finally:
        connection_closed()
