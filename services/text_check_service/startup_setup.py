"""Startup and shutdown logic for Text Check Service."""

from __future__ import annotations

from dishka import AsyncContainer, make_async_container
from quart import Quart
from quart_dishka import QuartDishka
from textcheck_service_libs.logging_utils import create_service_logger

from services.text_check_service.config import Settings
from services.text_check_service.di import (
    CoreInfrastructureProvider,
    ServiceImplementationsProvider,
)
from services.text_check_service.implementations.confidence_calibrator import (
    ConfidenceCalibrator,
)
from services.text_check_service.metrics import METRICS
from services.text_check_service.protocols import ApiRulesProtocol

logger = create_service_logger("text_check_service.startup")


async def initialize_services(app: Quart, settings: Settings) -> AsyncContainer:
    """Initialize DI container and Quart-Dishka integration, then warm app-scope state."""
    try:
        container = make_async_container(
            CoreInfrastructureProvider(),
            ServiceImplementationsProvider(),
        )
        QuartDishka(app=app, container=container)

        app.extensions = getattr(app, "extensions", {})
        app.extensions["metrics"] = METRICS
        app.extensions["di_container"] = container

        # Calibration and API rules must be valid before the first request is accepted
        calibrator = await container.get(ConfidenceCalibrator)
        api_rules = await container.get(ApiRulesProtocol)

        logger.info(
            "Text Check Service DI container and quart-dishka integration initialized.",
            api_version=api_rules.api_version,
            calibration_file=settings.RULE_ID_TO_CONFIDENCE_FILE,
            calibrated_rules=len(calibrator.table),
        )
        return container
    except Exception as e:
        logger.critical(f"Failed to initialize Text Check Service: {e}", exc_info=True)
        raise


async def shutdown_services(app: Quart) -> None:
    """Gracefully shutdown all services."""
    container: AsyncContainer | None = app.extensions.get("di_container")
    try:
        if container is not None:
            await container.close()
        logger.info("Text Check Service shutdown completed")
    except Exception as e:
        logger.error(f"Error during service shutdown: {e}", exc_info=True)
