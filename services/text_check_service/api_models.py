"""Models for interpreted check requests and check responses.

Per-request values (RuleIdFilter, DetectedLanguage, ResolvedLanguage,
CheckSpecification) are frozen: they are built once while interpreting a
request and handed on unchanged to the checking engine and the serializer.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from services.text_check_service.languages import Language


class DetectionSource(str, Enum):
    """Where a detected language came from."""

    LANGDETECT = "langdetect"
    PREFERRED_LANGUAGE = "preferred_language"
    NOOP = "noop"
    FALLBACK = "fallback"


class DetectedLanguage(BaseModel):
    """Outcome of statistical language detection on the request text."""

    model_config = ConfigDict(frozen=True)

    language: Language
    confidence: float
    source: DetectionSource


class ResolvedLanguage(BaseModel):
    """
    The language a request is checked against, plus the detection signal.

    ``chosen`` is what the engine checks against. ``detected`` is what
    detection concluded on its own; it differs from ``chosen`` when the
    client pinned an explicit language.
    """

    model_config = ConfigDict(frozen=True)

    chosen: Language
    detected: Language
    detection_confidence: float
    detection_source: DetectionSource


class LanguageSelection(BaseModel):
    """The client's language request as interpreted from its parameters."""

    model_config = ConfigDict(frozen=True)

    requested_language: str | None = None
    auto_detect: bool = False
    preferred_variants: tuple[str, ...] = ()
    force_preferred: bool = False


class RuleIdFilter(BaseModel):
    """Rule ids to enable and disable for one request, in request order."""

    model_config = ConfigDict(frozen=True)

    enabled: tuple[str, ...] = ()
    disabled: tuple[str, ...] = ()


class CheckSpecification(BaseModel):
    """Fully interpreted check request, handed to the checking engine."""

    model_config = ConfigDict(frozen=True)

    text: str
    selection: LanguageSelection
    resolved: ResolvedLanguage
    rule_filter: RuleIdFilter
    mother_tongue: Language | None = None


class RuleMatch(BaseModel):
    """A single finding reported by the checking engine."""

    model_config = ConfigDict(frozen=True)

    rule_id: str
    message: str
    short_message: str = ""
    offset: int
    length: int
    replacements: tuple[str, ...] = ()
    category_id: str = "MISC"
    category_name: str = "Miscellaneous"
    rule_description: str = ""
    issue_type: str = "uncategorized"
    sentence: str = ""


# ====================================================================
# Response payload (v2 JSON)
# ====================================================================


class SoftwareInfo(BaseModel):
    name: str
    version: str
    apiVersion: int = 1


class DetectedLanguageInfo(BaseModel):
    name: str
    code: str
    confidence: float
    source: str


class LanguageInfo(BaseModel):
    name: str
    code: str
    detectedLanguage: DetectedLanguageInfo


class MatchContext(BaseModel):
    text: str
    offset: int
    length: int


class MatchRuleInfo(BaseModel):
    id: str
    description: str
    issueType: str
    category: dict[str, str]
    confidence: float | None = None


class MatchInfo(BaseModel):
    message: str
    shortMessage: str
    replacements: list[dict[str, str]] = Field(default_factory=list)
    offset: int
    length: int
    context: MatchContext
    sentence: str
    rule: MatchRuleInfo


class CheckResponse(BaseModel):
    software: SoftwareInfo
    language: LanguageInfo
    matches: list[MatchInfo] = Field(default_factory=list)

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize, omitting rule confidence where no calibration exists."""
        payload = self.model_dump(mode="json")
        for match in payload["matches"]:
            if match["rule"].get("confidence") is None:
                match["rule"].pop("confidence", None)
        return payload
