"""pydantic models for request/response schemas"""

from .demo import HealthResponse, MetricsTestResponse, OrderBatch, PingResponse, TraceResponse

__all__ = ["HealthResponse", "MetricsTestResponse", "OrderBatch", "PingResponse", "TraceResponse"]
