from __future__ import annotations

from .client import TranslateClient, TranslationError
from .languages import (
    SOURCE_LANGUAGE_CODES,
    TARGET_LANGUAGE,
    Language,
    parse_language,
)

__all__ = [
    "Language",
    "SOURCE_LANGUAGE_CODES",
    "TARGET_LANGUAGE",
    "parse_language",
    "TranslateClient",
    "TranslationError",
]
