from fastapi import APIRouter, HTTPException

from ...config import settings
from ...models import HealthResponse
from ...observability.metrics import metrics_endpoint
from ...observability.telemetry import SERVICE_NAME, SERVICE_VERSION

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """health check endpoint"""
    return HealthResponse(status="ok", service=SERVICE_NAME, version=SERVICE_VERSION)


@router.get("/metrics")
async def metrics():
    """prometheus metrics endpoint"""
    if not settings.enable_metrics:
        raise HTTPException(status_code=404, detail="metrics disabled")
    return metrics_endpoint()
