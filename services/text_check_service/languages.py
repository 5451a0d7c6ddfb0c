"""Registry of languages the checking engine supports.

Codes follow the engine's conventions: a bare ISO 639 short code for the
language itself ("en") and "<short>-<REGION>[-<subvariant>]" for variants
("en-GB", "ca-ES-valencia"). Lookups are case-insensitive.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

NOOP_LANGUAGE_CODE = "zz"


class Language(BaseModel):
    """A supported language or language variant."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    default_variant: str | None = None

    @property
    def short_code(self) -> str:
        return self.code.split("-", 1)[0].lower()

    @property
    def is_variant(self) -> bool:
        return "-" in self.code


def _lang(code: str, name: str, default_variant: str | None = None) -> Language:
    return Language(code=code, name=name, default_variant=default_variant)


SUPPORTED_LANGUAGES: tuple[Language, ...] = (
    _lang("ar", "Arabic"),
    _lang("ast-ES", "Asturian"),
    _lang("be-BY", "Belarusian"),
    _lang("br-FR", "Breton"),
    _lang("ca", "Catalan", default_variant="ca-ES"),
    _lang("ca-ES", "Catalan"),
    _lang("ca-ES-valencia", "Catalan (Valencian)"),
    _lang("da-DK", "Danish"),
    _lang("de", "German", default_variant="de-DE"),
    _lang("de-AT", "German (Austria)"),
    _lang("de-CH", "German (Swiss)"),
    _lang("de-DE", "German (Germany)"),
    _lang("el-GR", "Greek"),
    _lang("en", "English", default_variant="en-US"),
    _lang("en-AU", "English (Australian)"),
    _lang("en-CA", "English (Canadian)"),
    _lang("en-GB", "English (GB)"),
    _lang("en-NZ", "English (New Zealand)"),
    _lang("en-US", "English (US)"),
    _lang("en-ZA", "English (South African)"),
    _lang("eo", "Esperanto"),
    _lang("es", "Spanish"),
    _lang("fa", "Persian"),
    _lang("fr", "French"),
    _lang("ga-IE", "Irish"),
    _lang("gl-ES", "Galician"),
    _lang("it", "Italian"),
    _lang("ja-JP", "Japanese"),
    _lang("km-KH", "Khmer"),
    _lang("nl", "Dutch"),
    _lang("nl-BE", "Dutch (Belgium)"),
    _lang("pl-PL", "Polish"),
    _lang("pt", "Portuguese", default_variant="pt-PT"),
    _lang("pt-AO", "Portuguese (Angola preAO)"),
    _lang("pt-BR", "Portuguese (Brazil)"),
    _lang("pt-MZ", "Portuguese (Moçambique preAO)"),
    _lang("pt-PT", "Portuguese (Portugal)"),
    _lang("ro-RO", "Romanian"),
    _lang("ru-RU", "Russian"),
    _lang("sk-SK", "Slovak"),
    _lang("sl-SI", "Slovenian"),
    _lang("sv", "Swedish"),
    _lang("ta-IN", "Tamil"),
    _lang("tl-PH", "Tagalog"),
    _lang("uk-UA", "Ukrainian"),
    _lang("zh-CN", "Chinese"),
)

NOOP_LANGUAGE = _lang(NOOP_LANGUAGE_CODE, "No-op language")

_BY_CODE: dict[str, Language] = {
    lang.code.lower(): lang for lang in (*SUPPORTED_LANGUAGES, NOOP_LANGUAGE)
}

_BY_SHORT_CODE: dict[str, Language] = {}
for _language in SUPPORTED_LANGUAGES:
    # Bare languages win over variants; otherwise the first variant listed
    if not _language.is_variant or _language.short_code not in _BY_SHORT_CODE:
        _BY_SHORT_CODE[_language.short_code] = _language


def find_language(code: str) -> Language | None:
    """
    Look up a language by code.

    Exact codes match case-insensitively and surrounding whitespace is
    significant. A bare short code with no entry of its own ("pl") resolves to
    the language registered under that short code ("pl-PL").
    """
    if not code:
        return None
    key = code.lower()
    exact = _BY_CODE.get(key)
    if exact is not None:
        return exact
    if "-" not in key:
        return _BY_SHORT_CODE.get(key)
    return None


def find_language_for_short_code(short_code: str) -> Language | None:
    return _BY_SHORT_CODE.get(short_code.lower())


def default_variant_of(language: Language) -> Language:
    """Return the default variant of a bare language, or the language itself."""
    if language.default_variant is None:
        return language
    return _BY_CODE[language.default_variant.lower()]
