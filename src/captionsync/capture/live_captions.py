"""Read the Windows 11 Live Captions window through UI Automation.

Live Captions renders its transcript in a text block whose automation id is
``CaptionsTextBlock`` inside a top-level window of class
``LiveCaptionsDesktopWindow``. The element's ``Name`` property carries the
whole visible transcript, one caption line per ``\\n``.

COM objects are created in `open()` and dropped in `close()`; use the source
as a context manager so the release happens on every exit path::

    with LiveCaptionsSource() as source:
        text = source.snapshot()

``comtypes`` is imported lazily so the rest of the package stays importable
on hosts without Windows.
"""

from __future__ import annotations

import ctypes
import sys
from typing import Any

from captionsync.capture.base import CaptureError
from captionsync.core.settings import get_logger

logger = get_logger("captionsync.capture")

WINDOW_CLASS = "LiveCaptionsDesktopWindow"
TEXT_AUTOMATION_ID = "CaptionsTextBlock"


def _find_window() -> int:
    """Return the Live Captions window handle, or 0 when it is not open."""
    if sys.platform != "win32":
        return 0
    return int(ctypes.windll.user32.FindWindowW(WINDOW_CLASS, None) or 0)


def is_live_captions_running() -> bool:
    """Return True if the Live Captions window currently exists."""
    return _find_window() != 0


class LiveCaptionsSource:
    """`CaptureSource` backed by the Windows UI Automation API."""

    def __init__(self) -> None:
        self._automation: Any = None
        self._condition: Any = None
        self._com_error: type[Exception] = OSError
        self._tree_scope_descendants: int = 0

    # --------------------------------------------------------------------- #
    # Resource scope
    # --------------------------------------------------------------------- #
    def open(self) -> LiveCaptionsSource:
        """Create the automation object and the text-block search condition.

        Raises
        ------
        RuntimeError
            If UI Automation cannot be initialised (not on Windows, or the
            COM server refused to start).
        """
        if self._automation is not None:
            return self
        if sys.platform != "win32":
            raise RuntimeError("Live Captions capture requires Windows UI Automation.")

        try:
            import comtypes
            import comtypes.client

            comtypes.client.GetModule("UIAutomationCore.dll")
            from comtypes.gen import UIAutomationClient as uia
        except (ImportError, OSError) as exc:
            raise RuntimeError(f"Failed to load Windows UI Automation: {exc}") from exc

        try:
            automation = comtypes.client.CreateObject(
                uia.CUIAutomation, interface=uia.IUIAutomation
            )
            condition = automation.CreatePropertyCondition(
                uia.UIA_AutomationIdPropertyId, TEXT_AUTOMATION_ID
            )
        except comtypes.COMError as exc:
            raise RuntimeError(f"Failed to initialise Windows Accessibility API: {exc}") from exc

        self._automation = automation
        self._condition = condition
        self._com_error = comtypes.COMError
        self._tree_scope_descendants = uia.TreeScope_Descendants
        logger.debug("UI Automation initialised.")
        return self

    def close(self) -> None:
        """Release the COM references taken by `open()`."""
        self._condition = None
        self._automation = None
        logger.debug("UI Automation released.")

    def __enter__(self) -> LiveCaptionsSource:
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --------------------------------------------------------------------- #
    # CaptureSource
    # --------------------------------------------------------------------- #
    def is_available(self) -> bool:
        return is_live_captions_running()

    def snapshot(self) -> str:
        if self._automation is None:
            raise CaptureError("Live Captions source is not open.")

        window = _find_window()
        if not window:
            raise CaptureError("Live Captions window not found.")

        try:
            element = self._automation.ElementFromHandle(window)
            text_block = element.FindFirst(self._tree_scope_descendants, self._condition)
            if not text_block:
                raise CaptureError("Live Captions text block not found.")
            return str(text_block.CurrentName or "")
        except (self._com_error, ValueError) as exc:
            raise CaptureError(f"Failed to read Live Captions: {exc}") from exc


__all__ = ["LiveCaptionsSource", "is_live_captions_running"]
