"""
Per-request orchestration of the check pipeline.

Order: parameter validation, text extraction, language resolution, rule
filter extraction. Any rejection happens before the checking engine runs;
nothing here retries.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any

from textcheck_service_libs.error_handling import (
    CorrelationContext,
    TextCheckServiceError,
    raise_unknown_language,
)
from textcheck_service_libs.logging_utils import create_service_logger

from services.text_check_service.api_models import (
    CheckResponse,
    CheckSpecification,
    LanguageSelection,
    RuleIdFilter,
)
from services.text_check_service.implementations.annotated_text import extract_text
from services.text_check_service.implementations.confidence_calibrator import (
    ConfidenceCalibrator,
)
from services.text_check_service.implementations.response_serializer import (
    CheckResponseSerializer,
)
from services.text_check_service.languages import Language, find_language
from services.text_check_service.protocols import ApiRulesProtocol, CheckEngineProtocol
from services.text_check_service.request_parameters import CheckParameters

logger = create_service_logger("text_check_service.implementations.request_interpreter")


class RequestInterpreter:
    """Turns raw check parameters into a check specification and a response."""

    def __init__(
        self,
        api_rules: ApiRulesProtocol,
        engine: CheckEngineProtocol,
        calibrator: ConfidenceCalibrator,
        serializer: CheckResponseSerializer,
        metrics: dict[str, Any] | None = None,
    ) -> None:
        self.api_rules = api_rules
        self.engine = engine
        self.calibrator = calibrator
        self.serializer = serializer
        self.metrics = metrics

    async def interpret(
        self, raw: Mapping[str, str], correlation_context: CorrelationContext
    ) -> CheckSpecification:
        """
        Validate and resolve a request.

        Raises:
            TextCheckServiceError: BadRequest family for any client error
        """
        try:
            return await self._interpret(raw, correlation_context)
        except TextCheckServiceError as e:
            if e.is_bad_request and self.metrics is not None:
                self.metrics["bad_requests_total"].labels(error_code=e.error_code).inc()
            raise

    async def _interpret(
        self, raw: Mapping[str, str], correlation_context: CorrelationContext
    ) -> CheckSpecification:
        params = CheckParameters.from_raw(raw)
        self.api_rules.validate(params, correlation_context)

        text = extract_text(params, correlation_context)
        preferred_variants = self.api_rules.get_preferred_variants(params, correlation_context)
        resolved = await self.api_rules.get_language(
            text,
            params,
            preferred_variants,
            params.noop_language_codes(),
            params.preferred_language_codes(),
            correlation_context,
        )
        rule_filter = RuleIdFilter(
            enabled=tuple(self.api_rules.get_enabled_rule_ids(params)),
            disabled=tuple(self.api_rules.get_disabled_rule_ids(params)),
        )

        return CheckSpecification(
            text=text,
            selection=LanguageSelection(
                requested_language=None if params.is_auto_language else params.language,
                auto_detect=params.is_auto_language,
                preferred_variants=tuple(preferred_variants),
                force_preferred=params.is_force_preferred_languages,
            ),
            resolved=resolved,
            rule_filter=rule_filter,
            mother_tongue=self._mother_tongue(params, correlation_context),
        )

    @staticmethod
    def _mother_tongue(
        params: CheckParameters, correlation_context: CorrelationContext
    ) -> Language | None:
        if not params.mother_tongue:
            return None
        language = find_language(params.mother_tongue)
        if language is None:
            raise_unknown_language(
                service="text-check-service",
                operation="resolve_mother_tongue",
                language_code=params.mother_tongue,
                message=(
                    f"'{params.mother_tongue}' is not a language code known to the checker "
                    "(parameter 'motherTongue')"
                ),
                correlation_id=correlation_context.uuid,
            )
        return language

    async def check(
        self, raw: Mapping[str, str], correlation_context: CorrelationContext
    ) -> CheckResponse:
        """Interpret, run the engine and serialize with the calibration table."""
        start = time.perf_counter()
        try:
            spec = await self.interpret(raw, correlation_context)
            logger.info(
                "Check request interpreted",
                correlation_id=correlation_context.original,
                language=spec.resolved.chosen.code,
                auto_detect=spec.selection.auto_detect,
                detected_language=spec.resolved.detected.code,
                enabled_rules=len(spec.rule_filter.enabled),
                disabled_rules=len(spec.rule_filter.disabled),
            )
            matches = await self.engine.check(spec, correlation_context)
        except TextCheckServiceError as e:
            self._record_outcome("rejected" if e.is_bad_request else "failed", start)
            raise

        # Snapshot the table reference once so a concurrent reload cannot mix tables
        response = self.serializer.serialize(
            spec.text, spec.resolved, matches, self.calibrator.table
        )
        self._record_outcome("success", start)
        return response

    def _record_outcome(self, status: str, start: float) -> None:
        if self.metrics is None:
            return
        self.metrics["check_requests_total"].labels(status=status).inc()
        self.metrics["check_duration_seconds"].observe(time.perf_counter() - start)
