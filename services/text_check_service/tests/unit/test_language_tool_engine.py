"""Unit tests for the LanguageTool HTTP engine."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest
from textcheck_service_libs.error_handling import (
    CorrelationContext,
    ErrorCode,
    TextCheckServiceError,
)

from services.text_check_service.api_models import (
    CheckSpecification,
    DetectionSource,
    LanguageSelection,
    ResolvedLanguage,
    RuleIdFilter,
)
from services.text_check_service.config import Settings
from services.text_check_service.implementations.language_tool_engine import (
    LanguageToolHttpEngine,
)
from services.text_check_service.languages import find_language


@pytest.fixture
def engine_settings(test_settings: Settings) -> Settings:
    return test_settings.model_copy(
        update={"USE_STUB_ENGINE": False, "LANGUAGE_TOOL_URL": "http://lt.test:8081/"}
    )


@pytest.fixture
def spec() -> CheckSpecification:
    chosen = find_language("en-GB")
    detected = find_language("en-US")
    mother_tongue = find_language("de")
    assert chosen is not None and detected is not None
    return CheckSpecification(
        text="Colour me surprised.",
        selection=LanguageSelection(requested_language="en-GB"),
        resolved=ResolvedLanguage(
            chosen=chosen,
            detected=detected,
            detection_confidence=0.7,
            detection_source=DetectionSource.LANGDETECT,
        ),
        rule_filter=RuleIdFilter(enabled=("RULE_A", " RULE_B"), disabled=("RULE_C",)),
        mother_tongue=mother_tongue,
    )


def test_build_form_pins_chosen_language(spec: CheckSpecification) -> None:
    form = LanguageToolHttpEngine.build_form(spec)

    assert form == {
        "text": "Colour me surprised.",
        "language": "en-GB",
        "enabledRules": "RULE_A, RULE_B",
        "disabledRules": "RULE_C",
        "motherTongue": "de",
    }


def test_server_url_is_normalized(engine_settings: Settings) -> None:
    assert LanguageToolHttpEngine(engine_settings).server_url == "http://lt.test:8081"


def test_raw_match_conversion() -> None:
    match = LanguageToolHttpEngine._to_rule_match(
        {
            "message": "Possible spelling mistake found.",
            "shortMessage": "Spelling mistake",
            "offset": 0,
            "length": 6,
            "replacements": [{"value": "Color"}, {"value": "Colon"}],
            "sentence": "Colour me surprised.",
            "rule": {
                "id": "MORFOLOGIK_RULE_EN_US",
                "description": "Possible spelling mistake",
                "issueType": "misspelling",
                "category": {"id": "TYPOS", "name": "Possible Typo"},
            },
        }
    )

    assert match.rule_id == "MORFOLOGIK_RULE_EN_US"
    assert match.replacements == ("Color", "Colon")
    assert match.category_id == "TYPOS"
    assert match.issue_type == "misspelling"


async def test_check_converts_server_matches(
    engine_settings: Settings, spec: CheckSpecification, correlation_context: CorrelationContext
) -> None:
    engine = LanguageToolHttpEngine(engine_settings)
    raw = [{"message": "m", "offset": 0, "length": 6, "rule": {"id": "R1"}}]

    with patch.object(engine, "_post_check", AsyncMock(return_value=raw)) as post:
        matches = await engine.check(spec, correlation_context)

    post.assert_awaited_once_with(spec, correlation_context)
    assert [m.rule_id for m in matches] == ["R1"]


async def test_connection_error_is_service_unavailable(
    engine_settings: Settings, spec: CheckSpecification, correlation_context: CorrelationContext
) -> None:
    engine = LanguageToolHttpEngine(engine_settings)
    failing = AsyncMock(side_effect=aiohttp.ClientConnectionError("refused"))

    with patch.object(engine, "_post_check", failing):
        with pytest.raises(TextCheckServiceError) as exc_info:
            await engine.check(spec, correlation_context)

    assert exc_info.value.error_detail.error_code == ErrorCode.SERVICE_UNAVAILABLE


async def test_client_error_is_external_service_error(
    engine_settings: Settings, spec: CheckSpecification, correlation_context: CorrelationContext
) -> None:
    engine = LanguageToolHttpEngine(engine_settings)
    error = aiohttp.ClientResponseError(request_info=MagicMock(), history=(), status=500)

    with patch.object(engine, "_post_check", AsyncMock(side_effect=error)):
        with pytest.raises(TextCheckServiceError) as exc_info:
            await engine.check(spec, correlation_context)

    assert exc_info.value.error_detail.error_code == ErrorCode.EXTERNAL_SERVICE_ERROR
    assert exc_info.value.error_detail.details["external_service"] == "languagetool_server"


async def test_timeout_is_timeout_error(
    engine_settings: Settings, spec: CheckSpecification, correlation_context: CorrelationContext
) -> None:
    engine = LanguageToolHttpEngine(engine_settings)

    with patch.object(engine, "_post_check", AsyncMock(side_effect=TimeoutError())):
        with pytest.raises(TextCheckServiceError) as exc_info:
            await engine.check(spec, correlation_context)

    assert exc_info.value.error_detail.error_code == ErrorCode.TIMEOUT
