"""Unit tests for API version rule selection."""

from __future__ import annotations

import pytest
from textcheck_service_libs.error_handling import ErrorCode, TextCheckServiceError

from services.text_check_service.implementations.api_rules_registry import create_api_rules
from services.text_check_service.implementations.v2_api_rules import V2ApiRules


def test_v2_is_selected(english_detector) -> None:
    rules = create_api_rules("v2", english_detector)

    assert isinstance(rules, V2ApiRules)
    assert rules.api_version == "v2"
    assert rules.detector is english_detector


@pytest.mark.parametrize("version", ["v1", "V2", ""])
def test_unsupported_version_is_configuration_error(english_detector, version: str) -> None:
    with pytest.raises(TextCheckServiceError) as exc_info:
        create_api_rules(version, english_detector)

    assert exc_info.value.error_detail.error_code == ErrorCode.CONFIGURATION_ERROR
    assert "v2" in exc_info.value.error_detail.message
