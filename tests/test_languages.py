"""Unit tests for the supported translation languages."""

from __future__ import annotations

import pytest

from captionsync.translate.languages import (
    SOURCE_LANGUAGE_CODES,
    TARGET_LANGUAGE,
    Language,
    parse_language,
)


def test_fixed_language_set() -> None:
    """Exactly the ten supported source codes are exposed."""
    assert set(SOURCE_LANGUAGE_CODES) == {"ar", "zh", "fr", "de", "it", "ja", "pt", "ru", "es", "pl"}
    assert TARGET_LANGUAGE == "en"


def test_parse_language_normalizes_case() -> None:
    """Codes are matched case-insensitively."""
    assert parse_language("FR") is Language.FRENCH
    assert parse_language(" ja ") is Language.JAPANESE


def test_parse_language_rejects_unknown_codes() -> None:
    """Unsupported codes fail at configuration time."""
    with pytest.raises(ValueError, match="Unsupported language code"):
        parse_language("en")
