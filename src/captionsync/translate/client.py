# -----------------------------------------------------------------------------
# This module provides a small, synchronous LibreTranslate client that:
#   - reads the server address / API key from settings (or explicit args)
#   - exposes a single `translate()` method that returns the English text
#
# The implementation uses only the Python standard library (`urllib.request`)
# so that it does not introduce additional dependencies. Unit tests are
# expected to *mock* the internal `_post()` method so that no real HTTP calls
# are made during CI.
#
# Protocol
# --------
#   POST {host}/translate
#   {"q": "...", "source": "fr", "target": "en", "format": "text"}
#   -> {"translatedText": "..."}
#
# Errors come back as {"error": "..."} with a 4xx/5xx status.
# -----------------------------------------------------------------------------
from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.request
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

from captionsync.core.settings import Settings, load_settings

from .languages import TARGET_LANGUAGE, Language, parse_language


class TranslationError(RuntimeError):
    """The translation server could not produce a translation."""


@dataclass(slots=True)
class TranslateClient:
    """Minimal LibreTranslate client with a simple `translate()` API.

    Parameters
    ----------
    host:
        Base URL of the server, e.g. ``"http://127.0.0.1:5000"``.
    api_key:
        Optional key for servers started with ``--api-keys``.
    timeout_seconds:
        Network timeout for one request in seconds.
    """

    host: str
    api_key: str | None = None
    timeout_seconds: float = 30.0

    # --------------------------------------------------------------------- #
    # Constructors
    # --------------------------------------------------------------------- #
    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, *, host: str | None = None
    ) -> TranslateClient:
        """Construct a client from :class:`Settings`, optionally overriding the host."""
        cfg = settings or load_settings()
        return cls(
            host=host or cfg.translate_host,
            api_key=cfg.translate_api_key,
            timeout_seconds=cfg.translate_timeout_seconds,
        )

    # --------------------------------------------------------------------- #
    # Public API
    # --------------------------------------------------------------------- #
    def translate(self, text: str, source: Language | str) -> str:
        """Translate ``text`` from ``source`` into English.

        Raises
        ------
        TranslationError
            If the request fails, the server reports an error, or the
            response carries no translated text.
        ValueError
            If ``source`` is not a supported language code.
        """
        language = source if isinstance(source, Language) else parse_language(source)

        payload: MutableMapping[str, Any] = {
            "q": text,
            "source": language.value,
            "target": TARGET_LANGUAGE,
            "format": "text",
        }
        if self.api_key:
            payload["api_key"] = self.api_key

        url = self.host.rstrip("/") + "/translate"
        headers = {"Content-Type": "application/json", "Accept": "application/json"}

        response = self._post(url=url, headers=headers, payload=payload)
        return self._extract_translation(response)

    # --------------------------------------------------------------------- #
    # Internal helpers (test seams)
    # --------------------------------------------------------------------- #
    def _post(
        self,
        *,
        url: str,
        headers: Mapping[str, str],
        payload: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Perform an HTTP POST request and decode the JSON response.

        This is the seam for unit tests: patch it to return a stubbed body
        without any network I/O.
        """
        body = json.dumps(payload).encode("utf-8")
        request = urllib.request.Request(
            url=url,
            data=body,
            headers=dict(headers),
            method="POST",
        )

        try:
            with urllib.request.urlopen(request, timeout=self.timeout_seconds) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="ignore")
            raise TranslationError(
                f"Translation HTTP error {exc.code}: {exc.reason}; body={detail!r}"
            ) from exc
        except (urllib.error.URLError, TimeoutError) as exc:
            raise TranslationError(f"Translation network error: {exc}") from exc
        except (OSError, http.client.HTTPException) as exc:
            raise TranslationError(f"Translation connection error: {exc}") from exc

        try:
            decoded: dict[str, Any] = json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise TranslationError("Failed to decode translation response as JSON") from exc

        return decoded

    @staticmethod
    def _extract_translation(response: Mapping[str, Any]) -> str:
        """Extract ``translatedText`` from a LibreTranslate response."""
        if "error" in response:
            raise TranslationError(f"Translation failed: {response['error']}")

        translated = response.get("translatedText")
        if not isinstance(translated, str):
            raise TranslationError("Translation response has no translatedText field.")
        return translated


__all__ = ["TranslateClient", "TranslationError"]
