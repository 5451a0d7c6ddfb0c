"""
Pytest configuration and fixtures for Text Check Service tests.

Provides settings, correlation contexts and a controllable language detector
so request interpretation can be tested without statistical detection.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

import pytest
from textcheck_service_libs.error_handling import CorrelationContext

from services.text_check_service.api_models import DetectedLanguage, DetectionSource
from services.text_check_service.config import Settings
from services.text_check_service.languages import find_language


class FakeLanguageDetector:
    """Returns a fixed detection result and records every call."""

    def __init__(self, result: DetectedLanguage) -> None:
        self.result = result
        self.calls: list[dict[str, Any]] = []

    async def detect(
        self,
        text: str,
        preferred_variants: list[str],
        noop_langs: list[str],
        preferred_langs: list[str],
        force_preferred: bool,
        correlation_context: CorrelationContext,
    ) -> DetectedLanguage:
        self.calls.append(
            {
                "text": text,
                "preferred_variants": preferred_variants,
                "noop_langs": noop_langs,
                "preferred_langs": preferred_langs,
                "force_preferred": force_preferred,
            }
        )
        return self.result


def detected(
    code: str, confidence: float, source: DetectionSource = DetectionSource.LANGDETECT
) -> DetectedLanguage:
    language = find_language(code)
    assert language is not None, code
    return DetectedLanguage(language=language, confidence=confidence, source=source)


@pytest.fixture
def correlation_context() -> CorrelationContext:
    """Provide a fresh correlation context per test."""
    correlation_id = uuid4()
    return CorrelationContext(original=str(correlation_id), uuid=correlation_id)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no calibration file and the stub engine."""
    return Settings(
        RULE_ID_TO_CONFIDENCE_FILE=None,
        USE_STUB_ENGINE=True,
        API_VERSION="v2",
        FALLBACK_LANGUAGE="en-US",
    )


@pytest.fixture
def english_detector() -> FakeLanguageDetector:
    """Detector that always reports American English with confidence 0.92."""
    return FakeLanguageDetector(detected("en-US", 0.92))


@pytest.fixture
def detector_factory():
    """Build a FakeLanguageDetector reporting the given code and confidence."""

    def _factory(
        code: str, confidence: float, source: DetectionSource = DetectionSource.LANGDETECT
    ) -> FakeLanguageDetector:
        return FakeLanguageDetector(detected(code, confidence, source))

    return _factory
