"""Test the health and prometheus scrape endpoints."""

import pytest

from lgtm_otel_api.config import settings

pytestmark = pytest.mark.integration


def test_health_reports_service(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "lgtm-otel-api", "version": "1.0.0"}


def test_metrics_endpoint_serves_prometheus_text(client):
    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")


def test_metrics_endpoint_can_be_disabled(client, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "enable_metrics", False)

    response = client.get("/metrics")

    assert response.status_code == 404
    assert response.json() == {"detail": "metrics disabled"}


def test_metrics_endpoint_exposes_application_instruments(client, fast_simulator):
    client.get("/ping")
    client.get("/metrics-test")

    body = client.get("/metrics").text

    assert "http_requests_total" in body
    assert 'endpoint="/ping"' in body
    assert "active_connections" in body
    assert "http_request_duration_seconds" in body
