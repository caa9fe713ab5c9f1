from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api.routes import demo, health
from .dependencies import OrderSimulatorDependency
from .logger import configure_logging, get_logger
from .observability.telemetry import configure_telemetry, instrument_app, shutdown_telemetry

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """application lifecycle manager"""
    logger.info("starting lgtm otel api")

    # startup
    configure_telemetry()
    OrderSimulatorDependency.get_instance()

    logger.info("service ready")

    yield

    # shutdown
    logger.info("shutting down service")
    OrderSimulatorDependency.shutdown()
    shutdown_telemetry()
    logger.info("service stopped")


app = FastAPI(
    title="LGTM OTel API",
    description="demo api emitting logs, traces and metrics over otlp to the lgtm stack",
    version="1.0.0",
    lifespan=lifespan,
)

instrument_app(app)

app.include_router(health.router)
app.include_router(demo.router)
