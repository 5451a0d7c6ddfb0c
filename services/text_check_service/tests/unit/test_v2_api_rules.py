"""Unit tests for the v2 parameter validation and language resolution rules."""

from __future__ import annotations

import pytest
from textcheck_service_libs.error_handling import (
    CorrelationContext,
    ErrorCode,
    TextCheckServiceError,
)

from services.text_check_service.api_models import DetectionSource
from services.text_check_service.implementations.v2_api_rules import V2ApiRules
from services.text_check_service.request_parameters import CheckParameters


def _params(**raw: str) -> CheckParameters:
    return CheckParameters.from_raw(raw)


@pytest.fixture
def rules(english_detector) -> V2ApiRules:
    return V2ApiRules(english_detector)


class TestValidate:
    """Tests for V2ApiRules.validate, first violation wins."""

    def test_valid_request_passes(
        self, rules: V2ApiRules, correlation_context: CorrelationContext
    ) -> None:
        rules.validate(_params(text="Hello", language="en-US"), correlation_context)

    def test_data_instead_of_text_passes(
        self, rules: V2ApiRules, correlation_context: CorrelationContext
    ) -> None:
        rules.validate(
            _params(data='{"annotation": []}', language="auto"), correlation_context
        )

    def test_missing_text_and_data(
        self, rules: V2ApiRules, correlation_context: CorrelationContext
    ) -> None:
        with pytest.raises(TextCheckServiceError) as exc_info:
            rules.validate(_params(language="en-US"), correlation_context)

        assert exc_info.value.error_detail.message == "Missing 'text' or 'data' parameter"
        assert exc_info.value.is_bad_request

    def test_missing_text_reported_before_missing_language(
        self, rules: V2ApiRules, correlation_context: CorrelationContext
    ) -> None:
        with pytest.raises(TextCheckServiceError) as exc_info:
            rules.validate(_params(), correlation_context)

        assert exc_info.value.error_detail.details["field"] == "text"

    @pytest.mark.parametrize("raw", [{"text": "Hi"}, {"text": "Hi", "language": ""}])
    def test_missing_or_empty_language(
        self, rules: V2ApiRules, correlation_context: CorrelationContext, raw: dict[str, str]
    ) -> None:
        with pytest.raises(TextCheckServiceError) as exc_info:
            rules.validate(CheckParameters.from_raw(raw), correlation_context)

        error = exc_info.value
        assert error.error_detail.error_code == ErrorCode.MISSING_REQUIRED_FIELD
        assert "language" in error.error_detail.message
        assert "language=en-US" in error.error_detail.message
        assert "language=fr" in error.error_detail.message

    @pytest.mark.parametrize(
        "retired, replacement",
        [
            ("enabled", "enabledRules"),
            ("disabled", "disabledRules"),
            ("preferredvariants", "preferredVariants"),
            ("autodetect", "language=auto"),
        ],
    )
    def test_retired_parameter_names_replacement(
        self,
        rules: V2ApiRules,
        correlation_context: CorrelationContext,
        retired: str,
        replacement: str,
    ) -> None:
        params = CheckParameters.from_raw({"text": "Hi", "language": "en-US", retired: "foo"})

        with pytest.raises(TextCheckServiceError) as exc_info:
            rules.validate(params, correlation_context)

        error = exc_info.value
        assert error.error_detail.error_code == ErrorCode.RETIRED_PARAMETER
        assert error.is_bad_request
        assert f"'{retired}'" in error.error_detail.message
        assert replacement in error.error_detail.message
        assert error.error_detail.details["replacement"] == replacement

    def test_retired_parameter_with_empty_value_is_still_rejected(
        self, rules: V2ApiRules, correlation_context: CorrelationContext
    ) -> None:
        with pytest.raises(TextCheckServiceError) as exc_info:
            rules.validate(_params(text="Hi", language="en-US", enabled=""), correlation_context)

        assert "enabledRules" in exc_info.value.error_detail.message

    def test_missing_language_reported_before_retired_parameter(
        self, rules: V2ApiRules, correlation_context: CorrelationContext
    ) -> None:
        with pytest.raises(TextCheckServiceError) as exc_info:
            rules.validate(_params(text="Hi", enabled="foo"), correlation_context)

        assert exc_info.value.error_detail.error_code == ErrorCode.MISSING_REQUIRED_FIELD

    def test_retired_parameters_checked_in_order(
        self, rules: V2ApiRules, correlation_context: CorrelationContext
    ) -> None:
        params = _params(text="Hi", language="en-US", autodetect="true", disabled="X")

        with pytest.raises(TextCheckServiceError) as exc_info:
            rules.validate(params, correlation_context)

        assert exc_info.value.error_detail.details["parameter"] == "disabled"


class TestGetPreferredVariants:
    """Tests for preferred-variant extraction and gating."""

    def test_absent_yields_empty(
        self, rules: V2ApiRules, correlation_context: CorrelationContext
    ) -> None:
        assert rules.get_preferred_variants(_params(language="auto"), correlation_context) == []

    def test_auto_language_allows_variants_and_trims(
        self, rules: V2ApiRules, correlation_context: CorrelationContext
    ) -> None:
        params = _params(language="auto", preferredVariants="en-GB,  de-AT")

        assert rules.get_preferred_variants(params, correlation_context) == ["en-GB", "de-AT"]

    def test_explicit_language_without_multilingual_is_rejected(
        self, rules: V2ApiRules, correlation_context: CorrelationContext
    ) -> None:
        params = _params(language="fr", preferredVariants="en-US, en-GB")

        with pytest.raises(TextCheckServiceError) as exc_info:
            rules.get_preferred_variants(params, correlation_context)

        assert exc_info.value.is_bad_request
        assert "language=auto" in exc_info.value.error_detail.message

    def test_multilingual_false_is_rejected(
        self, rules: V2ApiRules, correlation_context: CorrelationContext
    ) -> None:
        params = _params(language="fr", preferredVariants="en-US", multilingual="false")

        with pytest.raises(TextCheckServiceError):
            rules.get_preferred_variants(params, correlation_context)

    @pytest.mark.parametrize("multilingual", ["true", "", "yes"])
    def test_multilingual_allows_explicit_language(
        self, rules: V2ApiRules, correlation_context: CorrelationContext, multilingual: str
    ) -> None:
        params = _params(
            language="fr", preferredVariants="en-US,en-GB", multilingual=multilingual
        )

        assert rules.get_preferred_variants(params, correlation_context) == ["en-US", "en-GB"]

    @pytest.mark.parametrize("variants", ["en", "xx-YY", "en-GB,fr"])
    def test_entries_must_be_known_variants(
        self, rules: V2ApiRules, correlation_context: CorrelationContext, variants: str
    ) -> None:
        params = _params(language="auto", preferredVariants=variants)

        with pytest.raises(TextCheckServiceError) as exc_info:
            rules.get_preferred_variants(params, correlation_context)

        assert "preferredVariants" in exc_info.value.error_detail.message


class TestRuleIds:
    """Tests for enabled/disabled rule id extraction."""

    def test_absent_parameters_yield_empty_lists(self, rules: V2ApiRules) -> None:
        params = _params(language="en-US")

        assert rules.get_enabled_rule_ids(params) == []
        assert rules.get_disabled_rule_ids(params) == []

    def test_enabled_rules_are_not_trimmed(self, rules: V2ApiRules) -> None:
        params = _params(enabledRules="RULE_A, RULE_B")

        assert rules.get_enabled_rule_ids(params) == ["RULE_A", " RULE_B"]

    def test_disabled_rules_are_not_trimmed(self, rules: V2ApiRules) -> None:
        params = _params(disabledRules="RULE_A ,RULE_B")

        assert rules.get_disabled_rule_ids(params) == ["RULE_A ", "RULE_B"]

    def test_duplicates_are_kept_in_order(self, rules: V2ApiRules) -> None:
        params = _params(enabledRules="RULE_B,RULE_A,RULE_B")

        assert rules.get_enabled_rule_ids(params) == ["RULE_B", "RULE_A", "RULE_B"]

    def test_trailing_separator_is_dropped(self, rules: V2ApiRules) -> None:
        assert rules.get_disabled_rule_ids(_params(disabledRules="RULE_A,")) == ["RULE_A"]


class TestGetLanguage:
    """Tests for language resolution."""

    async def test_auto_uses_detected_language(
        self, rules: V2ApiRules, english_detector, correlation_context: CorrelationContext
    ) -> None:
        params = _params(text="This is English.", language="auto")

        resolved = await rules.get_language(
            "This is English.", params, [], [], [], correlation_context
        )

        assert resolved.chosen.code == "en-US"
        assert resolved.detected.code == "en-US"
        assert resolved.detection_confidence == pytest.approx(0.92)
        assert resolved.detection_source == DetectionSource.LANGDETECT
        assert len(english_detector.calls) == 1

    async def test_explicit_language_still_reports_detection(
        self, rules: V2ApiRules, english_detector, correlation_context: CorrelationContext
    ) -> None:
        params = _params(text="Ceci est anglais?", language="fr")

        resolved = await rules.get_language(
            "Ceci est anglais?", params, [], [], [], correlation_context
        )

        assert resolved.chosen.code == "fr"
        assert resolved.detected.code == "en-US"
        assert resolved.detection_confidence == pytest.approx(0.92)
        assert len(english_detector.calls) == 1

    async def test_explicit_language_is_case_insensitive(
        self, rules: V2ApiRules, correlation_context: CorrelationContext
    ) -> None:
        params = _params(language="en-gb")

        resolved = await rules.get_language("Hi", params, [], [], [], correlation_context)

        assert resolved.chosen.code == "en-GB"

    async def test_unknown_language_names_code(
        self, rules: V2ApiRules, correlation_context: CorrelationContext
    ) -> None:
        params = _params(language="xx-XX")

        with pytest.raises(TextCheckServiceError) as exc_info:
            await rules.get_language("Hi", params, [], [], [], correlation_context)

        error = exc_info.value
        assert error.error_detail.error_code == ErrorCode.UNKNOWN_LANGUAGE
        assert error.is_bad_request
        assert "xx-XX" in error.error_detail.message

    async def test_language_with_trailing_space_is_unknown(
        self, rules: V2ApiRules, correlation_context: CorrelationContext
    ) -> None:
        params = _params(language="en-US ")

        with pytest.raises(TextCheckServiceError) as exc_info:
            await rules.get_language("Hi", params, [], [], [], correlation_context)

        assert exc_info.value.error_detail.error_code == ErrorCode.UNKNOWN_LANGUAGE

    async def test_detection_hints_are_passed_through(
        self, rules: V2ApiRules, english_detector, correlation_context: CorrelationContext
    ) -> None:
        params = _params(language="auto", forcePreferredLanguages="true")

        await rules.get_language(
            "Hi", params, ["en-GB"], ["la"], ["en", "de"], correlation_context
        )

        call = english_detector.calls[0]
        assert call["preferred_variants"] == ["en-GB"]
        assert call["noop_langs"] == ["la"]
        assert call["preferred_langs"] == ["en", "de"]
        assert call["force_preferred"] is True

    async def test_force_preferred_requires_literal_true(
        self, rules: V2ApiRules, english_detector, correlation_context: CorrelationContext
    ) -> None:
        params = _params(language="auto", forcePreferredLanguages="TRUE")

        await rules.get_language("Hi", params, [], [], [], correlation_context)

        assert english_detector.calls[0]["force_preferred"] is False

    def test_auto_detect_requires_exact_literal(self, rules: V2ApiRules) -> None:
        assert rules.get_language_auto_detect(_params(language="auto")) is True
        assert rules.get_language_auto_detect(_params(language="Auto")) is False
        assert rules.get_language_auto_detect(_params(language="en-US")) is False
