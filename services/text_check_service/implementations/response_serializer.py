"""Builds the v2 JSON payload for a completed check."""

from __future__ import annotations

from collections.abc import Mapping

from services.text_check_service.api_models import (
    CheckResponse,
    DetectedLanguageInfo,
    LanguageInfo,
    MatchContext,
    MatchInfo,
    MatchRuleInfo,
    ResolvedLanguage,
    RuleMatch,
    SoftwareInfo,
)
from services.text_check_service.config import Settings

CONTEXT_SIZE = 40  # characters of text shown on each side of a match


class CheckResponseSerializer:
    """Serializes matches, annotating rules with calibrated confidence."""

    def __init__(self, settings: Settings) -> None:
        self.software = SoftwareInfo(
            name=settings.SOFTWARE_NAME, version=settings.SOFTWARE_VERSION
        )

    def serialize(
        self,
        text: str,
        resolved: ResolvedLanguage,
        matches: list[RuleMatch],
        confidence_table: Mapping[str, float],
    ) -> CheckResponse:
        return CheckResponse(
            software=self.software,
            language=LanguageInfo(
                name=resolved.chosen.name,
                code=resolved.chosen.code,
                detectedLanguage=DetectedLanguageInfo(
                    name=resolved.detected.name,
                    code=resolved.detected.code,
                    confidence=resolved.detection_confidence,
                    source=resolved.detection_source.value,
                ),
            ),
            matches=[self._match_info(text, match, confidence_table) for match in matches],
        )

    @staticmethod
    def _context(text: str, offset: int, length: int) -> MatchContext:
        start = max(0, offset - CONTEXT_SIZE)
        end = min(len(text), offset + length + CONTEXT_SIZE)
        prefix = "..." if start > 0 else ""
        suffix = "..." if end < len(text) else ""
        snippet = text[start:end].replace("\n", " ")
        return MatchContext(
            text=f"{prefix}{snippet}{suffix}",
            offset=len(prefix) + offset - start,
            length=length,
        )

    def _match_info(
        self, text: str, match: RuleMatch, confidence_table: Mapping[str, float]
    ) -> MatchInfo:
        return MatchInfo(
            message=match.message,
            shortMessage=match.short_message,
            replacements=[{"value": value} for value in match.replacements],
            offset=match.offset,
            length=match.length,
            context=self._context(text, match.offset, match.length),
            sentence=match.sentence,
            rule=MatchRuleInfo(
                id=match.rule_id,
                description=match.rule_description,
                issueType=match.issue_type,
                category={"id": match.category_id, "name": match.category_name},
                confidence=confidence_table.get(match.rule_id),
            ),
        )
