"""Result type shared by the simple timer stores."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class ReadingStatus(enum.Enum):
    MATCHED = "matched"
    NEVER_STARTED = "never_started"
    NEVER_ENDED = "never_ended"


@dataclass(frozen=True)
class TimerReading:
    """Outcome of asking a store for a timer's duration.

    ``delta`` is only set when both marks exist; it may be negative if the
    clock went backwards between start and end.
    """

    status: ReadingStatus
    delta: Optional[int] = None

    @property
    def matched(self) -> bool:
        return self.status is ReadingStatus.MATCHED

    @classmethod
    def of(cls, start: Optional[int], end: Optional[int]) -> "TimerReading":
        if start is None:
            return cls(ReadingStatus.NEVER_STARTED)
        if end is None:
            return cls(ReadingStatus.NEVER_ENDED)
        return cls(ReadingStatus.MATCHED, end - start)


__all__ = ["ReadingStatus", "TimerReading"]
