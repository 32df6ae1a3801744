"""captionsync: keep a live caption transcript on disk, one confirmed line at a time.

The package watches a growing, self-correcting text source (Windows Live
Captions by default), works out which lines are genuinely new on every tick,
appends them to a transcript file and optionally forwards them to a
LibreTranslate server.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
