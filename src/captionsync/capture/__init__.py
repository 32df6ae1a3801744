from __future__ import annotations

from .base import CaptureError, CaptureSource
from .live_captions import LiveCaptionsSource
from .text_file import TextFileSource

__all__ = [
    "CaptureError",
    "CaptureSource",
    "LiveCaptionsSource",
    "TextFileSource",
]
