from __future__ import annotations

from .dual_cadence import (
    CadenceState,
    CaptionEngine,
    DualCadenceScheduler,
    ShutdownReason,
)

__all__ = [
    "CadenceState",
    "CaptionEngine",
    "DualCadenceScheduler",
    "ShutdownReason",
]
