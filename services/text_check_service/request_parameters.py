"""Typed view of the raw parameters of a check request.

Every parameter the check endpoint recognizes is enumerated here. Values stay
``str | None`` so that an absent parameter and a supplied-but-empty one remain
distinguishable; interpretation happens in the API rules.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

COMMA_PATTERN = re.compile(",")
COMMA_WHITESPACE_PATTERN = re.compile(r",\s*")

AUTO_LANGUAGE = "auto"


def split_preserving_empty_head(value: str, pattern: re.Pattern[str]) -> list[str]:
    """
    Split ``value`` on ``pattern`` and drop trailing empty entries.

    A value without any separator comes back as a single entry, even when it
    is empty: ``""`` -> ``[""]``, ``"a,b,"`` -> ``["a", "b"]``, ``","`` -> ``[]``.
    """
    parts = pattern.split(value)
    if len(parts) == 1:
        return parts
    while parts and parts[-1] == "":
        parts.pop()
    return parts


class CheckParameters(BaseModel):
    """All recognized check parameters, keyed by their wire names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    text: str | None = None
    data: str | None = None
    language: str | None = None
    enabled_rules: str | None = Field(default=None, alias="enabledRules")
    disabled_rules: str | None = Field(default=None, alias="disabledRules")
    preferred_variants: str | None = Field(default=None, alias="preferredVariants")
    multilingual: str | None = None
    force_preferred_languages: str | None = Field(default=None, alias="forcePreferredLanguages")
    noop_languages: str | None = Field(default=None, alias="noopLanguages")
    preferred_languages: str | None = Field(default=None, alias="preferredLanguages")
    mother_tongue: str | None = Field(default=None, alias="motherTongue")

    # Parameters of earlier API generations, kept only to reject them
    retired_enabled: str | None = Field(default=None, alias="enabled")
    retired_disabled: str | None = Field(default=None, alias="disabled")
    retired_preferred_variants: str | None = Field(default=None, alias="preferredvariants")
    retired_autodetect: str | None = Field(default=None, alias="autodetect")

    @classmethod
    def from_raw(cls, raw: Mapping[str, str]) -> CheckParameters:
        """Parse raw query/form parameters; unrecognized keys are ignored."""
        # Only aliases are accepted from the wire; snake_case keys are not parameters
        wire_names = {field.alias or name for name, field in cls.model_fields.items()}
        return cls.model_validate({key: value for key, value in raw.items() if key in wire_names})

    @property
    def is_auto_language(self) -> bool:
        return self.language == AUTO_LANGUAGE

    @property
    def is_multilingual(self) -> bool:
        return self.multilingual is not None and self.multilingual != "false"

    @property
    def is_force_preferred_languages(self) -> bool:
        return self.force_preferred_languages == "true"

    def noop_language_codes(self) -> list[str]:
        if self.noop_languages is None:
            return []
        return split_preserving_empty_head(self.noop_languages, COMMA_WHITESPACE_PATTERN)

    def preferred_language_codes(self) -> list[str]:
        if self.preferred_languages is None:
            return []
        return split_preserving_empty_head(self.preferred_languages, COMMA_WHITESPACE_PATTERN)
