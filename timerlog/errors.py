"""Exception kinds raised by timer stores, log writers and the log decoder."""

from __future__ import annotations

from typing import Optional


class TimerError(Exception):
    """Base class for every error raised by :mod:`timerlog`."""


class TimerStateError(TimerError):
    """A timer or writer was used in the wrong state (double start, closed log...)."""


class TimerNotFoundError(TimerStateError, KeyError):
    """The named timer is not running or was never started."""

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(message or f"Timer {name} is not running")

    def __str__(self) -> str:
        # KeyError quotes its argument otherwise
        return str(self.args[0])


class TimerIOError(TimerError, OSError):
    """A timer file or log file could not be opened, read or written."""


class CorruptLogError(TimerError, ValueError):
    """A byte stream does not consist of whole, well-formed timer events."""

    def __init__(self, message: str, source: str = "<stream>", offset: Optional[int] = None):
        self.source = source
        self.offset = offset
        where = source if offset is None else f"{source} at byte {offset}"
        super().__init__(f"{message} ({where})")


class InvalidTimerEventError(TimerError, ValueError):
    """An event cannot be encoded."""


class InvalidTimerNameError(InvalidTimerEventError):
    """A timer name contains the NUL byte used as the name terminator."""


class InvalidDirectoryError(TimerError, NotADirectoryError):
    """The configured timer directory does not exist or is not a directory."""


__all__ = [
    "TimerError",
    "TimerStateError",
    "TimerNotFoundError",
    "TimerIOError",
    "CorruptLogError",
    "InvalidTimerEventError",
    "InvalidTimerNameError",
    "InvalidDirectoryError",
]
