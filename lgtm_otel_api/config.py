from typing import Literal

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """application settings with environment variables support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # server
    host: str = Field(default="0.0.0.0", description="host to bind")
    port: int = Field(default=8080, ge=1, le=65535, description="port to bind")

    # logging
    log_level: str = Field(default="INFO", description="logging level")
    log_format: Literal["json", "console"] = Field(
        default="json", description="log format: json or console"
    )

    # telemetry
    enable_telemetry: bool = Field(default=True, description="enable opentelemetry")
    otlp_endpoint: str = Field(
        default="http://localhost:4317",
        validation_alias=AliasChoices("otlp_endpoint", "otel_exporter_otlp_endpoint"),
        description="otlp collector endpoint",
    )
    otlp_protocol: Literal["grpc", "http/protobuf"] = Field(
        default="grpc", description="otlp wire protocol: grpc or http/protobuf"
    )
    metric_export_interval_ms: int = Field(
        default=10000, ge=100, description="periodic metric export interval"
    )

    # metrics
    enable_metrics: bool = Field(default=True, description="enable prometheus metrics")

    # simulated workload for /metrics-test
    work_min_ms: int = Field(default=50, ge=0, description="min simulated work in ms")
    work_max_ms: int = Field(default=500, ge=1, description="max simulated work in ms (exclusive)")
    max_orders: int = Field(default=10, ge=2, description="orders drawn from [1, max_orders)")
    max_revenue: float = Field(default=1000.0, gt=0, description="revenue drawn from [0, max)")
    simulated_failure_rate: float = Field(
        default=0.0, ge=0.0, le=1.0, description="probability that simulated work fails"
    )

    @model_validator(mode="after")
    def check_work_bounds(self) -> "Settings":
        if self.work_max_ms <= self.work_min_ms:
            raise ValueError("work_max_ms must be greater than work_min_ms")
        return self


settings = Settings()
