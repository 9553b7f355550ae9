"""In-process table of named timers."""

from __future__ import annotations

from typing import Dict, List

from ..errors import TimerNotFoundError, TimerStateError
from ..utils.clock import Clock, now_ns
from .common import TimerReading


class MemoryTimerStore:
    """One start mark and at most one end mark per timer name.

    Not thread-safe; guard a shared store with a single lock.
    """

    def __init__(self, clock: Clock = now_ns):
        self.clock = clock
        self._starts: Dict[str, int] = {}
        self._ends: Dict[str, int] = {}

    def _require_running(self, name: str, action: str) -> int:
        try:
            return self._starts[name]
        except KeyError:
            raise TimerNotFoundError(name, f"Attempted to {action} timer {name}, which is not running") from None

    def start(self, name: str) -> None:
        if name in self._starts:
            raise TimerStateError(f"Attempted to start running timer {name}")
        self._starts[name] = self.clock()

    def end(self, name: str) -> None:
        self._require_running(name, "end")
        if name in self._ends:
            raise TimerStateError(f"Attempted to end stopped timer {name}")
        self._ends[name] = self.clock()

    def delta(self, name: str) -> TimerReading:
        return TimerReading.of(self._starts.get(name), self._ends.get(name))

    def reset(self, name: str) -> int:
        """Restart ``name`` now and return the time elapsed since the previous start."""
        previous = self._require_running(name, "reset")
        now = self.clock()
        self._starts[name] = now
        self._ends.pop(name, None)
        return now - previous

    def poll(self, name: str) -> int:
        return self.clock() - self._require_running(name, "poll")

    def delete(self, name: str) -> None:
        self._require_running(name, "delete")
        del self._starts[name]
        self._ends.pop(name, None)

    def names(self) -> List[str]:
        return list(self._starts)

    def __contains__(self, name: object) -> bool:
        return name in self._starts


__all__ = ["MemoryTimerStore"]
