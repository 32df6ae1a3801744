"""Boundary between the scheduler and whatever produces caption text.

The scheduler only needs two things from a source: the full text it shows
right now, and whether it still exists at all. How that text is obtained
(UI Automation, a file on disk, a test script) is the source's business.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class CaptureError(RuntimeError):
    """The source did not report any text this time.

    Always treated as transient: the tick is skipped and nothing else happens.
    """


@runtime_checkable
class CaptureSource(Protocol):
    """Anything that can report the full caption text on demand."""

    def snapshot(self) -> str:
        """Return the full text currently shown.

        Raises
        ------
        CaptureError
            If the text cannot be read right now.
        """
        ...

    def is_available(self) -> bool:
        """Return False once the source has gone away for good."""
        ...


__all__ = ["CaptureError", "CaptureSource"]
