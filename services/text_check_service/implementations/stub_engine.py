"""
Stub checking engine for development and testing.

Produces predictable matches from simple text patterns so the service can run
without a LanguageTool server.
"""

from __future__ import annotations

from typing import Any

from textcheck_service_libs.error_handling import CorrelationContext
from textcheck_service_libs.logging_utils import create_service_logger

from services.text_check_service.api_models import CheckSpecification, RuleMatch
from services.text_check_service.config import Settings
from services.text_check_service.protocols import CheckEngineProtocol

logger = create_service_logger("text_check_service.implementations.stub_engine")

# (rule id, needle, replacement, message, category id, category name, issue type)
_STUB_RULES: tuple[tuple[str, str, str, str, str, str, str], ...] = (
    (
        "THERE_THEIR_CONFUSION",
        "there car",
        "their car",
        "Possible confusion of 'there' and 'their'",
        "CONFUSED_WORDS",
        "Confused Words",
        "grammar",
    ),
    (
        "IE_EI_SPELLING",
        "recieve",
        "receive",
        "Spelling error: 'recieve' should be 'receive'",
        "TYPOS",
        "Possible Typo",
        "misspelling",
    ),
    (
        "EN_A_VS_AN",
        "a apple",
        "an apple",
        "Use 'an' instead of 'a' if the following word starts with a vowel sound",
        "MISC",
        "Miscellaneous",
        "misspelling",
    ),
)


class StubCheckEngine(CheckEngineProtocol):
    """
    Stub implementation of the checking engine.

    Honors the request's rule filter: a disabled rule never matches.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        logger.info("StubCheckEngine initialized")

    async def check(
        self, spec: CheckSpecification, correlation_context: CorrelationContext
    ) -> list[RuleMatch]:
        logger.debug(
            "Checking text (stub mode)",
            correlation_id=correlation_context.original,
            text_length=len(spec.text),
            language=spec.resolved.chosen.code,
        )

        disabled = set(spec.rule_filter.disabled)
        lowered = spec.text.lower()
        matches: list[RuleMatch] = []
        for rule_id, needle, replacement, message, category_id, category_name, issue in _STUB_RULES:
            if rule_id in disabled:
                continue
            offset = lowered.find(needle)
            if offset < 0:
                continue
            matches.append(
                RuleMatch(
                    rule_id=rule_id,
                    message=message,
                    short_message=category_name,
                    offset=offset,
                    length=len(needle),
                    replacements=(replacement,),
                    category_id=category_id,
                    category_name=category_name,
                    rule_description=message,
                    issue_type=issue,
                    sentence=spec.text,
                )
            )

        logger.info(
            "Text check completed (stub mode)",
            correlation_id=correlation_context.original,
            match_count=len(matches),
        )
        return matches

    async def get_health_status(self, correlation_context: CorrelationContext) -> dict[str, Any]:
        logger.debug("Health check requested (stub mode)", correlation_id=correlation_context.original)
        return {
            "implementation": "stub",
            "response_time_ms": 1,
            "status": "healthy",
            "note": "This is a stub implementation for development",
        }
