"""Shared fakes for the captionsync test-suite."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from captionsync.capture.base import CaptureError


class ScriptedSource:
    """Caption source that replays a fixed list of snapshots.

    ``None`` entries simulate a transient capture failure. Once the script is
    exhausted the last snapshot keeps being reported. ``alive`` scripts the
    answers of `is_available()` the same way.
    """

    def __init__(
        self,
        snapshots: Sequence[str | None],
        alive: Sequence[bool] = (True,),
    ) -> None:
        self._snapshots = list(snapshots)
        self._alive = list(alive)
        self.snapshot_calls = 0
        self.availability_calls = 0

    def snapshot(self) -> str:
        index = min(self.snapshot_calls, len(self._snapshots) - 1)
        self.snapshot_calls += 1
        value = self._snapshots[index]
        if value is None:
            raise CaptureError("scripted capture failure")
        return value

    def is_available(self) -> bool:
        index = min(self.availability_calls, len(self._alive) - 1)
        self.availability_calls += 1
        return self._alive[index]


@pytest.fixture  # type: ignore[misc]
def scripted_source() -> type[ScriptedSource]:
    """Expose the `ScriptedSource` class to tests."""
    return ScriptedSource
