"""
Parameter rules for v2 of the check API.

v2 renamed several parameters of the previous API generation. Clients still
sending the old names get an error naming the replacement instead of having
their intent silently misread.
"""

from __future__ import annotations

from textcheck_service_libs.error_handling import (
    CorrelationContext,
    raise_missing_required_field,
    raise_retired_parameter,
    raise_unknown_language,
    raise_validation_error,
)
from textcheck_service_libs.logging_utils import create_service_logger

from services.text_check_service.api_models import ResolvedLanguage
from services.text_check_service.languages import find_language
from services.text_check_service.protocols import ApiRulesProtocol, LanguageDetectorProtocol
from services.text_check_service.request_parameters import (
    COMMA_PATTERN,
    COMMA_WHITESPACE_PATTERN,
    CheckParameters,
    split_preserving_empty_head,
)

logger = create_service_logger("text_check_service.implementations.v2_api_rules")

SERVICE = "text-check-service"

# (parameter attribute, retired name, replacement, message)
RETIRED_PARAMETERS: tuple[tuple[str, str, str, str], ...] = (
    (
        "retired_enabled",
        "enabled",
        "enabledRules",
        "You specified 'enabled' but the parameter is now called 'enabledRules' "
        "in v2 of the API",
    ),
    (
        "retired_disabled",
        "disabled",
        "disabledRules",
        "You specified 'disabled' but the parameter is now called 'disabledRules' "
        "in v2 of the API",
    ),
    (
        "retired_preferred_variants",
        "preferredvariants",
        "preferredVariants",
        "You specified 'preferredvariants' but the parameter is now called "
        "'preferredVariants' (uppercase 'V') in v2 of the API",
    ),
    (
        "retired_autodetect",
        "autodetect",
        "language=auto",
        "You specified 'autodetect' but automatic language detection is now activated "
        "with 'language=auto' in v2 of the API",
    ),
)


class V2ApiRules(ApiRulesProtocol):
    """Validation and language resolution rules of API v2."""

    api_version = "v2"

    def __init__(self, detector: LanguageDetectorProtocol) -> None:
        self.detector = detector

    def validate(self, params: CheckParameters, correlation_context: CorrelationContext) -> None:
        """
        Reject requests missing required parameters or using retired names.

        Checks run in a fixed order and the first failure wins: text or data
        presence, then language presence, then retired parameter names. A
        request lacking both text and language is therefore reported as
        missing text.
        """
        if params.text is None and params.data is None:
            raise_missing_required_field(
                service=SERVICE,
                operation="validate_parameters",
                field="text",
                message="Missing 'text' or 'data' parameter",
                correlation_id=correlation_context.uuid,
            )
        if not params.language:
            raise_missing_required_field(
                service=SERVICE,
                operation="validate_parameters",
                field="language",
                message=(
                    "Missing 'language' parameter, e.g. 'language=en-US' for American "
                    "English or 'language=fr' for French"
                ),
                correlation_id=correlation_context.uuid,
            )
        for attribute, retired_name, replacement, message in RETIRED_PARAMETERS:
            if getattr(params, attribute) is not None:
                raise_retired_parameter(
                    service=SERVICE,
                    operation="validate_parameters",
                    parameter=retired_name,
                    replacement=replacement,
                    message=message,
                    correlation_id=correlation_context.uuid,
                )

    def get_language_auto_detect(self, params: CheckParameters) -> bool:
        return params.is_auto_language

    async def get_language(
        self,
        text: str,
        params: CheckParameters,
        preferred_variants: list[str],
        noop_langs: list[str],
        preferred_langs: list[str],
        correlation_context: CorrelationContext,
    ) -> ResolvedLanguage:
        # Detection always runs so its result can be reported for pinned languages too
        detected = await self.detector.detect(
            text,
            preferred_variants=preferred_variants,
            noop_langs=noop_langs,
            preferred_langs=preferred_langs,
            force_preferred=params.is_force_preferred_languages,
            correlation_context=correlation_context,
        )
        if self.get_language_auto_detect(params):
            chosen = detected.language
        else:
            language_code = params.language or ""
            language = find_language(language_code)
            if language is None:
                raise_unknown_language(
                    service=SERVICE,
                    operation="resolve_language",
                    language_code=language_code,
                    message=(
                        f"'{language_code}' is not a language code known to the checker, "
                        "see /v2/languages for supported codes"
                    ),
                    correlation_id=correlation_context.uuid,
                )
            chosen = language

        logger.debug(
            "Language resolved",
            correlation_id=correlation_context.original,
            chosen=chosen.code,
            detected=detected.language.code,
            detection_confidence=detected.confidence,
            detection_source=detected.source.value,
        )
        return ResolvedLanguage(
            chosen=chosen,
            detected=detected.language,
            detection_confidence=detected.confidence,
            detection_source=detected.source,
        )

    def get_preferred_variants(
        self, params: CheckParameters, correlation_context: CorrelationContext
    ) -> list[str]:
        if params.preferred_variants is None:
            return []
        preferred_variants = split_preserving_empty_head(
            params.preferred_variants, COMMA_WHITESPACE_PATTERN
        )
        if not params.is_auto_language and not params.is_multilingual:
            raise_validation_error(
                service=SERVICE,
                operation="get_preferred_variants",
                field="preferredVariants",
                message="You specified 'preferredVariants' but you didn't specify 'language=auto'",
                correlation_id=correlation_context.uuid,
                value=params.preferred_variants,
            )
        self._check_preferred_variant_format(preferred_variants, correlation_context)
        return preferred_variants

    def _check_preferred_variant_format(
        self, preferred_variants: list[str], correlation_context: CorrelationContext
    ) -> None:
        for variant in preferred_variants:
            language = find_language(variant) if "-" in variant else None
            if language is None or not language.is_variant:
                raise_validation_error(
                    service=SERVICE,
                    operation="get_preferred_variants",
                    field="preferredVariants",
                    message=(
                        f"Invalid format for 'preferredVariants', expected a language "
                        f"variant like 'en-GB' or 'de-AT': '{variant}'"
                    ),
                    correlation_id=correlation_context.uuid,
                    value=variant,
                )

    def get_enabled_rule_ids(self, params: CheckParameters) -> list[str]:
        # Entries are not whitespace-trimmed, unlike preferredVariants
        if params.enabled_rules is None:
            return []
        return split_preserving_empty_head(params.enabled_rules, COMMA_PATTERN)

    def get_disabled_rule_ids(self, params: CheckParameters) -> list[str]:
        if params.disabled_rules is None:
            return []
        return split_preserving_empty_head(params.disabled_rules, COMMA_PATTERN)
