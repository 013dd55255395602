from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Monotonic time source for the turn-switch delay.

    Game rules read time only through this interface so tests can drive it.
    """

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Wall-clock implementation used by the pygame loop."""

    def now(self) -> float:
        return time.monotonic()
