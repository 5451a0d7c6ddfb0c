"""Dependency injection configuration for Text Check Service using Dishka."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

from dishka import Provider, Scope, provide
from prometheus_client import REGISTRY, CollectorRegistry
from quart import g, request
from textcheck_service_libs.error_handling import (
    CorrelationContext,
    extract_correlation_context_from_request,
)
from textcheck_service_libs.logging_utils import create_service_logger

from services.text_check_service.config import Settings, settings
from services.text_check_service.implementations.api_rules_registry import create_api_rules
from services.text_check_service.implementations.confidence_calibrator import (
    ConfidenceCalibrator,
)
from services.text_check_service.implementations.langdetect_detector import (
    LangdetectLanguageDetector,
)
from services.text_check_service.implementations.language_tool_engine import (
    LanguageToolHttpEngine,
)
from services.text_check_service.implementations.request_interpreter import RequestInterpreter
from services.text_check_service.implementations.response_serializer import (
    CheckResponseSerializer,
)
from services.text_check_service.implementations.stub_engine import StubCheckEngine
from services.text_check_service.metrics import METRICS
from services.text_check_service.protocols import (
    ApiRulesProtocol,
    CheckEngineProtocol,
    LanguageDetectorProtocol,
)

logger = create_service_logger("text_check_service.di")


class CoreInfrastructureProvider(Provider):
    """Provider for core infrastructure dependencies (settings, metrics, correlation context)."""

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide service settings."""
        return settings

    @provide(scope=Scope.APP)
    def provide_metrics_registry(self) -> CollectorRegistry:
        """Provide the global Prometheus metrics registry shared across collectors."""
        return REGISTRY

    @provide(scope=Scope.APP)
    def provide_metrics(self) -> dict[str, Any]:
        """Provide shared Prometheus metrics dictionary."""
        return METRICS

    @provide(scope=Scope.REQUEST)
    def provide_correlation_context(self) -> CorrelationContext:
        """Provide correlation context set by the middleware, or read it from the request."""
        ctx = getattr(g, "correlation_context", None)
        if isinstance(ctx, CorrelationContext):
            return ctx
        return extract_correlation_context_from_request(request)


class ServiceImplementationsProvider(Provider):
    """Provider for service implementation dependencies."""

    @provide(scope=Scope.APP)
    def provide_confidence_calibrator(
        self, settings: Settings, metrics: dict[str, Any]
    ) -> ConfidenceCalibrator:
        """Provide the calibration table holder; loads the configured file once."""
        return ConfidenceCalibrator(settings, metrics)

    @provide(scope=Scope.APP)
    def provide_language_detector(
        self, settings: Settings, metrics: dict[str, Any]
    ) -> LanguageDetectorProtocol:
        """Provide langdetect-backed language detection."""
        return LangdetectLanguageDetector(settings, metrics)

    @provide(scope=Scope.APP)
    def provide_api_rules(
        self, settings: Settings, detector: LanguageDetectorProtocol
    ) -> ApiRulesProtocol:
        """Provide the parameter rules of the configured API version."""
        return create_api_rules(settings.API_VERSION, detector)

    @provide(scope=Scope.APP)
    async def provide_check_engine(
        self, settings: Settings, metrics: dict[str, Any]
    ) -> AsyncIterator[CheckEngineProtocol]:
        """Provide the checking engine; the HTTP engine's session is closed on shutdown."""
        if settings.USE_STUB_ENGINE:
            yield StubCheckEngine(settings)
            return

        engine = LanguageToolHttpEngine(settings, metrics)
        logger.info("Using LanguageTool server", server_url=engine.server_url)
        try:
            yield engine
        finally:
            await engine.close()

    @provide(scope=Scope.APP)
    def provide_response_serializer(self, settings: Settings) -> CheckResponseSerializer:
        """Provide the v2 response serializer."""
        return CheckResponseSerializer(settings)

    @provide(scope=Scope.APP)
    def provide_request_interpreter(
        self,
        api_rules: ApiRulesProtocol,
        engine: CheckEngineProtocol,
        calibrator: ConfidenceCalibrator,
        serializer: CheckResponseSerializer,
        metrics: dict[str, Any],
    ) -> RequestInterpreter:
        """Provide the per-request orchestrator."""
        return RequestInterpreter(api_rules, engine, calibrator, serializer, metrics)
