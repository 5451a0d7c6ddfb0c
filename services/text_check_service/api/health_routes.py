"""Health and metrics routes for Text Check Service."""

from __future__ import annotations

import time

from dishka import FromDishka
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest
from quart import Blueprint, Response, current_app, jsonify
from quart_dishka import inject
from textcheck_service_libs.error_handling import CorrelationContext
from textcheck_service_libs.logging_utils import create_service_logger

from services.text_check_service.config import Settings
from services.text_check_service.implementations.confidence_calibrator import (
    ConfidenceCalibrator,
)
from services.text_check_service.protocols import ApiRulesProtocol, CheckEngineProtocol

logger = create_service_logger("text_check_service.api.health")
health_bp = Blueprint("health_routes", __name__)


@health_bp.route("/healthz")
@inject
async def health_check(
    settings: FromDishka[Settings],
    corr: FromDishka[CorrelationContext],
    engine: FromDishka[CheckEngineProtocol],
    calibrator: FromDishka[ConfidenceCalibrator],
    api_rules: FromDishka[ApiRulesProtocol],
) -> tuple[Response, int]:
    """Standardized health check endpoint with dependency status."""
    checks = {"service_responsive": True, "dependencies_available": True}
    dependencies: dict[str, dict[str, object]] = {}

    try:
        engine_health = await engine.get_health_status(corr)
        dependencies["check_engine"] = {"status": "healthy", **engine_health}
        if engine_health.get("status") != "healthy":
            dependencies["check_engine"]["status"] = "unhealthy"
            checks["dependencies_available"] = False
    except Exception as e:
        logger.warning(f"Check engine health check failed: {e}", correlation_id=corr.original)
        dependencies["check_engine"] = {"status": "unhealthy", "error": str(e)}
        checks["dependencies_available"] = False

    overall_status = "healthy" if all(checks.values()) else "degraded"

    start_time = current_app.extensions.get("service_start_time")
    uptime_seconds = time.time() - start_time if start_time else 0.0

    health_response = {
        "service": settings.SERVICE_NAME,
        "status": overall_status,
        "message": f"Text Check Service is {overall_status}",
        "version": settings.SOFTWARE_VERSION,
        "api_version": api_rules.api_version,
        "confidence_calibration": {
            "file": settings.RULE_ID_TO_CONFIDENCE_FILE,
            "entries": len(calibrator.table),
        },
        "uptime_seconds": uptime_seconds,
        "checks": checks,
        "dependencies": dependencies,
        "environment": settings.ENVIRONMENT.value,
        "correlation_id": corr.original,
    }

    status_code = 200 if overall_status == "healthy" else 503
    return jsonify(health_response), status_code


@health_bp.route("/metrics")
@inject
async def metrics(registry: FromDishka[CollectorRegistry]) -> Response:
    """Prometheus metrics endpoint."""
    try:
        metrics_data = generate_latest(registry)
        return Response(metrics_data, content_type=CONTENT_TYPE_LATEST)
    except Exception as e:
        logger.error(f"Error generating metrics: {e}", exc_info=True)
        return Response("Error generating metrics", status=500)
