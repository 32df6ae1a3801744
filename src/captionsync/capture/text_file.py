"""Use a plain text file as the caption source.

Handy on hosts without Live Captions and for rehearsing a session: another
program (or a person with an editor) rewrites the file, and the scheduler
treats each read as one snapshot. Deleting the file plays the role of the
caption window closing.
"""

from __future__ import annotations

from pathlib import Path

from captionsync.capture.base import CaptureError


class TextFileSource:
    """`CaptureSource` that re-reads one UTF-8 file on every snapshot."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def is_available(self) -> bool:
        return self.path.is_file()

    def snapshot(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise CaptureError(f"Failed to read {self.path}: {exc}") from exc


__all__ = ["TextFileSource"]
