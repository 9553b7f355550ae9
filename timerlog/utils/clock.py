"""Time source shared by every store and writer."""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def now_ns() -> int:
    """Current wall-clock time in integer nanoseconds."""

    return time.time_ns()


__all__ = ["Clock", "now_ns"]
