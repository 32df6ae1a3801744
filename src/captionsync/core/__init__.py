"""Core package initializer for captionsync.

Holds the pure line-alignment diff, the per-consumer sync buffer and the
settings/logging helpers:
    from captionsync.core import extract_new_lines, SyncBuffer, get_logger
"""

from __future__ import annotations

from .buffer import SyncBuffer
from .diff import extract_new_lines
from .settings import get_logger, load_settings, settings

__all__ = ["SyncBuffer", "extract_new_lines", "get_logger", "load_settings", "settings"]
