"""Language detection backed by the langdetect library."""

from __future__ import annotations

from typing import Any

from langdetect import DetectorFactory, detect_langs
from langdetect.lang_detect_exception import LangDetectException
from textcheck_service_libs.error_handling import CorrelationContext
from textcheck_service_libs.logging_utils import create_service_logger

from services.text_check_service.api_models import DetectedLanguage, DetectionSource
from services.text_check_service.config import Settings
from services.text_check_service.languages import (
    NOOP_LANGUAGE,
    Language,
    default_variant_of,
    find_language,
    find_language_for_short_code,
)
from services.text_check_service.protocols import LanguageDetectorProtocol

logger = create_service_logger("text_check_service.implementations.langdetect_detector")

# Reproducible results for identical input
DetectorFactory.seed = 0


class LangdetectLanguageDetector(LanguageDetectorProtocol):
    """Detects the language of request text using langdetect."""

    def __init__(self, settings: Settings, metrics: dict[str, Any] | None = None) -> None:
        self.sample_chars = settings.LANGUAGE_DETECTION_SAMPLE_CHARS
        fallback = find_language(settings.FALLBACK_LANGUAGE)
        if fallback is None:
            raise ValueError(f"Unknown fallback language: {settings.FALLBACK_LANGUAGE}")
        self.fallback_language = fallback
        self.metrics = metrics

    def _candidates(self, text: str) -> list[tuple[str, float]]:
        """Short codes with probabilities, most probable first."""
        sample = text[: self.sample_chars]
        if not sample.strip():
            return []
        try:
            ranked = detect_langs(sample)
        except LangDetectException as e:
            logger.debug(f"langdetect found no features in text: {e}")
            return []
        # langdetect reports Chinese as zh-cn / zh-tw
        return [(candidate.lang.split("-")[0].lower(), candidate.prob) for candidate in ranked]

    async def detect(
        self,
        text: str,
        preferred_variants: list[str],
        noop_langs: list[str],
        preferred_langs: list[str],
        force_preferred: bool,
        correlation_context: CorrelationContext,
    ) -> DetectedLanguage:
        candidates: list[tuple[Language, float]] = []
        for short_code, prob in self._candidates(text):
            known = find_language_for_short_code(short_code)
            if known is not None:
                candidates.append((known, prob))
        preferred_short_codes = [code.split("-")[0].lower() for code in preferred_langs]
        if force_preferred and preferred_short_codes:
            candidates = [c for c in candidates if c[0].short_code in preferred_short_codes]

        noop_short_codes = {code.split("-")[0].lower() for code in noop_langs}

        if candidates and candidates[0][0].short_code in noop_short_codes:
            result = DetectedLanguage(
                language=NOOP_LANGUAGE, confidence=candidates[0][1], source=DetectionSource.NOOP
            )
        elif candidates:
            language, prob = candidates[0]
            result = DetectedLanguage(
                language=self._to_variant(language, preferred_variants),
                confidence=prob,
                source=DetectionSource.LANGDETECT,
            )
        else:
            result = self._fallback(preferred_langs, preferred_variants)

        if self.metrics is not None:
            self.metrics["language_detection_total"].labels(source=result.source.value).inc()

        logger.debug(
            "Language detected",
            correlation_id=correlation_context.original,
            language=result.language.code,
            confidence=result.confidence,
            source=result.source.value,
        )
        return result

    def _fallback(
        self, preferred_langs: list[str], preferred_variants: list[str]
    ) -> DetectedLanguage:
        for code in preferred_langs:
            language = find_language(code)
            if language is not None:
                return DetectedLanguage(
                    language=self._to_variant(language, preferred_variants),
                    confidence=0.0,
                    source=DetectionSource.PREFERRED_LANGUAGE,
                )
        return DetectedLanguage(
            language=self._to_variant(self.fallback_language, preferred_variants),
            confidence=0.0,
            source=DetectionSource.FALLBACK,
        )

    @staticmethod
    def _to_variant(language: Language, preferred_variants: list[str]) -> Language:
        """Pick the preferred variant sharing the language's short code, else the default."""
        if language.is_variant:
            return language
        for variant_code in preferred_variants:
            variant = find_language(variant_code)
            if variant is not None and variant.short_code == language.short_code:
                return variant
        return default_variant_of(language)
