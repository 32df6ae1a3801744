# -----------------------------------------------------------------------------
# Fixed set of caption languages the translator accepts as a source.
#
# Live Captions can transcribe more languages than this, but these are the
# ones the LibreTranslate models we target ship for translation into English.
# Anything else is rejected when the command line is parsed, so an unknown
# code never reaches the scheduler.
# -----------------------------------------------------------------------------
from __future__ import annotations

from enum import Enum

TARGET_LANGUAGE = "en"


class Language(str, Enum):
    """Source language code, as understood by LibreTranslate."""

    ARABIC = "ar"
    CHINESE = "zh"
    FRENCH = "fr"
    GERMAN = "de"
    ITALIAN = "it"
    JAPANESE = "ja"
    PORTUGUESE = "pt"
    RUSSIAN = "ru"
    SPANISH = "es"
    POLISH = "pl"


SOURCE_LANGUAGE_CODES: tuple[str, ...] = tuple(lang.value for lang in Language)


def parse_language(code: str) -> Language:
    """Resolve a two-letter code to a :class:`Language`.

    Raises
    ------
    ValueError
        If ``code`` is not one of :data:`SOURCE_LANGUAGE_CODES`.
    """
    normalized = code.strip().lower()
    try:
        return Language(normalized)
    except ValueError:
        supported = ", ".join(SOURCE_LANGUAGE_CODES)
        raise ValueError(
            f"Unsupported language code: {code!r}. Expected one of: {supported}."
        ) from None


__all__ = ["Language", "SOURCE_LANGUAGE_CODES", "TARGET_LANGUAGE", "parse_language"]
