from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PingResponse(BaseModel):
    """response model for /ping"""

    ok: bool = Field(default=True, description="request handled")
    at: datetime = Field(description="utc time the request was handled")


class TraceResponse(BaseModel):
    """response model for /trace"""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = Field(default=True, description="request handled")
    trace_id: str = Field(
        alias="traceId",
        pattern=r"^[0-9a-f]{32}$",
        description="trace id of the request, also embedded in its log lines",
    )


class MetricsTestResponse(BaseModel):
    """response model for /metrics-test"""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = Field(default=True, description="request handled")
    orders_processed: int = Field(alias="ordersProcessed", ge=1, description="orders emitted")
    revenue: float = Field(ge=0.0, description="synthetic revenue rounded to cents")
    processing_time_ms: int = Field(alias="processingTimeMs", ge=0, description="simulated work")
    at: datetime = Field(description="utc time the request was handled")


class HealthResponse(BaseModel):
    """response model for /health"""

    status: str = Field(description="service status")
    service: str = Field(description="service name")
    version: str = Field(description="service version")


class OrderBatch(BaseModel):
    """synthetic orders generated by one /metrics-test call"""

    count: int = Field(ge=1, description="number of orders")
    revenue: float = Field(ge=0.0, description="total revenue")
    customer_types: list[str] = Field(description="customer type of each order")
