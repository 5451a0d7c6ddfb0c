"""
Text Check Service Application.

This module implements the Text Check Service HTTP API using the Quart
framework. The service interprets check requests, runs the checking engine
and returns matches annotated with calibrated rule confidence.
"""

from __future__ import annotations

import time

from quart import Quart
from textcheck_service_libs.error_handling.quart_handlers import register_error_handlers
from textcheck_service_libs.logging_utils import configure_service_logging, create_service_logger
from textcheck_service_libs.quart_middleware import (
    setup_correlation_middleware,
    setup_metrics_middleware,
)

from services.text_check_service.api.check_routes import check_bp
from services.text_check_service.api.health_routes import health_bp
from services.text_check_service.config import settings
from services.text_check_service.startup_setup import initialize_services, shutdown_services

configure_service_logging("text-check-service", log_level=settings.LOG_LEVEL)
logger = create_service_logger("text_check_service.app")

app = Quart(__name__)

# Track service startup time for uptime calculation
SERVICE_START_TIME = time.time()

setup_correlation_middleware(app)
register_error_handlers(app)


@app.before_serving
async def startup() -> None:
    """Initialize services and middleware."""
    await initialize_services(app, settings)
    app.extensions["service_start_time"] = SERVICE_START_TIME

    setup_metrics_middleware(
        app=app,
        request_count_metric_name="request_count",
        request_duration_metric_name="request_duration",
        status_label_name="status",
        logger_name="text_check_service.metrics",
    )

    logger.info("Text Check Service startup completed successfully")


@app.after_serving
async def shutdown() -> None:
    """Gracefully shutdown all services."""
    await shutdown_services(app)


app.register_blueprint(health_bp)
app.register_blueprint(check_bp)


if __name__ == "__main__":
    import asyncio

    import hypercorn.asyncio
    from hypercorn import Config

    config = Config()
    config.bind = [f"{settings.HOST}:{settings.HTTP_PORT}"]
    config.workers = settings.WEB_CONCURRENCY
    config.worker_class = "asyncio"
    config.loglevel = settings.LOG_LEVEL.lower()
    config.graceful_timeout = settings.GRACEFUL_TIMEOUT
    config.keep_alive_timeout = settings.KEEP_ALIVE_TIMEOUT

    asyncio.run(hypercorn.asyncio.serve(app, config))
