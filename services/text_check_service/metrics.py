"""Shared Prometheus metrics for Text Check Service.

This module defines a singleton dictionary `METRICS` containing all
Prometheus collectors used by the Text Check Service. The metrics are created
once at import-time and are injected via Dishka so routes and implementations
share the same collectors and avoid duplicated registration errors.
"""

from __future__ import annotations

from typing import Any

from prometheus_client import REGISTRY, Counter, Gauge, Histogram


def _create_metrics() -> dict[str, Any]:
    """Create Prometheus metric collectors for the Text Check Service."""

    return {
        # HTTP request metrics
        "request_count": Counter(
            "text_check_service_http_requests_total",
            "Total number of HTTP requests",
            ["method", "endpoint", "status"],
            registry=REGISTRY,
        ),
        "request_duration": Histogram(
            "text_check_service_http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=REGISTRY,
        ),
        # Check pipeline metrics
        "check_requests_total": Counter(
            "text_check_service_check_requests_total",
            "Total check requests by outcome",
            ["status"],
            registry=REGISTRY,
        ),
        "check_duration_seconds": Histogram(
            "text_check_service_check_duration_seconds",
            "Time spent interpreting and checking a request",
            registry=REGISTRY,
        ),
        "bad_requests_total": Counter(
            "text_check_service_bad_requests_total",
            "Requests rejected during parameter validation or language resolution",
            ["error_code"],
            registry=REGISTRY,
        ),
        "language_detection_total": Counter(
            "text_check_service_language_detection_total",
            "Language detections by source",
            ["source"],
            registry=REGISTRY,
        ),
        "confidence_calibration_entries": Gauge(
            "text_check_service_confidence_calibration_entries",
            "Number of rule ids with a calibrated confidence",
            registry=REGISTRY,
        ),
    }


# Singleton instance shared across the application
METRICS: dict[str, Any] = _create_metrics()
