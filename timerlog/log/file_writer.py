"""Write timer events straight to a log file as they happen."""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..errors import TimerIOError, TimerStateError
from ..utils.clock import Clock, now_ns
from ..utils.logging import logger
from .codec import EventKind, TimerEvent, write_event


class LogFileWriter:
    """Lifecycle manager for a single binary timer log file.

    Names must not contain the NUL byte.
    """

    def __init__(self, path: Union[str, Path], append: bool = False, clock: Clock = now_ns):
        self.path = Path(path)
        self.append = append
        self.clock = clock
        self._fh: Optional[BinaryIO] = None

    @property
    def closed(self) -> bool:
        return self._fh is None

    def open(self) -> None:
        """Create (or append to) the log file, closing any file opened before."""
        if self._fh is not None:
            self._fh.close()
            self._fh = None
        try:
            self._fh = self.path.open("ab" if self.append else "wb")
        except OSError as exc:
            raise TimerIOError(f"Attempted to set timer log to invalid filepath {self.path}: {exc}") from exc
        logger.debug("Opened timer log {path}", path=self.path)

    def close(self) -> None:
        """Flush, sync and close the log file."""
        if self._fh is None:
            raise TimerStateError("Attempted to close timer log, but no log file is active")
        fh, self._fh = self._fh, None
        try:
            fh.flush()
            os.fsync(fh.fileno())
        except OSError as exc:
            raise TimerIOError(f"Could not sync timer log {self.path}: {exc}") from exc
        finally:
            fh.close()
        logger.debug("Closed timer log {path}", path=self.path)

    def __enter__(self) -> "LogFileWriter":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._fh is not None:
            self.close()

    # ------------------------------------------------------------------ events
    def _log(self, name: str, kind: EventKind) -> None:
        if self._fh is None:
            raise TimerStateError(f"Attempted to log timer {name}, but no log file is active")
        event = TimerEvent(name, kind, self.clock())
        try:
            write_event(self._fh, event)
        except OSError as exc:
            raise TimerIOError(f"Failed to write timer {name} to {self.path}: {exc}") from exc

    def start(self, name: str) -> None:
        self._log(name, EventKind.START)

    def end(self, name: str) -> None:
        self._log(name, EventKind.END)

    @contextmanager
    def track(self, name: str):
        self.start(name)
        try:
            yield
        finally:
            self.end(name)


__all__ = ["LogFileWriter"]
