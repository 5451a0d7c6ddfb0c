"""
Protocol definitions for Text Check Service dependency injection.

This module defines behavioral contracts using typing.Protocol for the
Text Check Service dependencies to enable clean architecture and testability.
"""

from __future__ import annotations

from typing import Any, Protocol

from textcheck_service_libs.error_handling import CorrelationContext

from services.text_check_service.api_models import (
    CheckSpecification,
    DetectedLanguage,
    ResolvedLanguage,
    RuleMatch,
)
from services.text_check_service.request_parameters import CheckParameters


class ApiRulesProtocol(Protocol):
    """
    Parameter rules of one API version.

    One implementation exists per API version; the service selects one at
    startup from configuration.
    """

    api_version: str

    def validate(self, params: CheckParameters, correlation_context: CorrelationContext) -> None:
        """
        Reject parameters that violate this API version's constraints.

        Raises:
            TextCheckServiceError: BadRequest family, first violation wins
        """
        ...

    async def get_language(
        self,
        text: str,
        params: CheckParameters,
        preferred_variants: list[str],
        noop_langs: list[str],
        preferred_langs: list[str],
        correlation_context: CorrelationContext,
    ) -> ResolvedLanguage:
        """
        Resolve the language to check against.

        Raises:
            TextCheckServiceError: UNKNOWN_LANGUAGE for an unsupported explicit code
        """
        ...

    def get_preferred_variants(
        self, params: CheckParameters, correlation_context: CorrelationContext
    ) -> list[str]:
        """
        Extract preferred variants.

        Raises:
            TextCheckServiceError: If variants are given without auto-detection
                or multilingual mode
        """
        ...

    def get_enabled_rule_ids(self, params: CheckParameters) -> list[str]:
        """Rule ids explicitly enabled by the request."""
        ...

    def get_disabled_rule_ids(self, params: CheckParameters) -> list[str]:
        """Rule ids explicitly disabled by the request."""
        ...


class LanguageDetectorProtocol(Protocol):
    """Protocol for statistical language detection."""

    async def detect(
        self,
        text: str,
        preferred_variants: list[str],
        noop_langs: list[str],
        preferred_langs: list[str],
        force_preferred: bool,
        correlation_context: CorrelationContext,
    ) -> DetectedLanguage:
        """
        Detect the language of ``text``.

        Never fails for unrecognizable text; a fallback language with
        confidence 0.0 is returned instead.
        """
        ...


class CheckEngineProtocol(Protocol):
    """Protocol for the grammar and style checking engine."""

    async def check(
        self, spec: CheckSpecification, correlation_context: CorrelationContext
    ) -> list[RuleMatch]:
        """
        Check the text of ``spec`` against its resolved language.

        Raises:
            TextCheckServiceError: If the engine fails or is unavailable
        """
        ...

    async def get_health_status(self, correlation_context: CorrelationContext) -> dict[str, Any]:
        """
        Report engine availability.

        Raises:
            TextCheckServiceError: If the health check fails
        """
        ...
