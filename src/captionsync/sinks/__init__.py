from __future__ import annotations

from .translation import TranslationSink
from .writer import TIMESTAMP_FORMAT, CaptionWriter, format_timestamp

__all__ = ["CaptionWriter", "TIMESTAMP_FORMAT", "format_timestamp", "TranslationSink"]
