"""Unit tests for the stub checking engine."""

from __future__ import annotations

from textcheck_service_libs.error_handling import CorrelationContext

from services.text_check_service.api_models import (
    CheckSpecification,
    DetectionSource,
    LanguageSelection,
    ResolvedLanguage,
    RuleIdFilter,
)
from services.text_check_service.config import Settings
from services.text_check_service.implementations.stub_engine import StubCheckEngine
from services.text_check_service.languages import find_language


def _spec(text: str, disabled: tuple[str, ...] = ()) -> CheckSpecification:
    english = find_language("en-US")
    assert english is not None
    return CheckSpecification(
        text=text,
        selection=LanguageSelection(requested_language="en-US"),
        resolved=ResolvedLanguage(
            chosen=english,
            detected=english,
            detection_confidence=0.9,
            detection_source=DetectionSource.LANGDETECT,
        ),
        rule_filter=RuleIdFilter(disabled=disabled),
    )


async def test_reports_pattern_matches(
    test_settings: Settings, correlation_context: CorrelationContext
) -> None:
    matches = await StubCheckEngine(test_settings).check(
        _spec("Did you recieve there car?"), correlation_context
    )

    by_rule = {match.rule_id: match for match in matches}
    assert set(by_rule) == {"THERE_THEIR_CONFUSION", "IE_EI_SPELLING"}
    assert by_rule["IE_EI_SPELLING"].offset == 8
    assert by_rule["IE_EI_SPELLING"].replacements == ("receive",)


async def test_disabled_rules_do_not_match(
    test_settings: Settings, correlation_context: CorrelationContext
) -> None:
    matches = await StubCheckEngine(test_settings).check(
        _spec("recieve", disabled=("IE_EI_SPELLING",)), correlation_context
    )

    assert matches == []


async def test_health_status(
    test_settings: Settings, correlation_context: CorrelationContext
) -> None:
    status = await StubCheckEngine(test_settings).get_health_status(correlation_context)

    assert status["implementation"] == "stub"
    assert status["status"] == "healthy"
