"""Timers persisted as one small file per mark.

Each timer ``name`` lives in ``{directory}/{name}_start`` and
``{directory}/{name}_end``, each holding a single little-endian int64
nanosecond timestamp. Marks survive process restarts, at the cost of one
open/close per operation.
"""

from __future__ import annotations

import os
import struct
from pathlib import Path
from typing import Optional, Union

from ..errors import CorruptLogError, TimerIOError, TimerNotFoundError
from ..utils.clock import Clock, now_ns
from ..utils.fileio import resolve_timer_dir
from ..utils.logging import logger
from .common import TimerReading

_TIMESTAMP = struct.Struct("<q")


class FileTimerStore:
    def __init__(self, directory: Union[str, Path], clock: Clock = now_ns):
        self.directory = resolve_timer_dir(directory)
        self.clock = clock

    def start_path(self, name: str) -> Path:
        return Path(f"{self.directory}/{name}_start")

    def end_path(self, name: str) -> Path:
        return Path(f"{self.directory}/{name}_end")

    # ------------------------------------------------------------------ file access
    def _write(self, path: Path) -> None:
        try:
            with path.open("wb") as fh:
                fh.write(_TIMESTAMP.pack(self.clock()))
        except OSError as exc:
            raise TimerIOError(f"Could not write to file timer {path}: {exc}") from exc

    def _read(self, path: Path) -> Optional[int]:
        """Timestamp stored at ``path``, or ``None`` when the file is absent."""
        try:
            with path.open("rb") as fh:
                data = fh.read(_TIMESTAMP.size)
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise TimerIOError(f"Could not open file timer {path}: {exc}") from exc
        if len(data) < _TIMESTAMP.size:
            raise CorruptLogError("File timer is shorter than one timestamp", str(path), len(data))
        return _TIMESTAMP.unpack(data)[0]

    def _read_start(self, name: str, action: str) -> int:
        start = self._read(self.start_path(name))
        if start is None:
            raise TimerNotFoundError(name, f"Attempted to {action} file timer {name}, which was never started")
        return start

    # ------------------------------------------------------------------ public API
    def start(self, name: str) -> None:
        """Mark ``name`` as started, replacing marks left by earlier runs."""
        self._write(self.start_path(name))

    def end(self, name: str) -> None:
        self._write(self.end_path(name))

    def delta(self, name: str) -> TimerReading:
        start = self._read(self.start_path(name))
        if start is None:
            return TimerReading.of(None, None)
        return TimerReading.of(start, self._read(self.end_path(name)))

    def poll(self, name: str) -> int:
        return self.clock() - self._read_start(name, "poll")

    def delete(self, name: str) -> None:
        try:
            os.remove(self.start_path(name))
        except FileNotFoundError:
            raise TimerNotFoundError(name, f"Attempted to delete file timer {name}, which is not running") from None
        except OSError as exc:
            raise TimerIOError(f"Could not delete file timer {name}: {exc}") from exc
        self._remove_quietly(self.end_path(name))

    def delete_if_exists(self, name: str) -> None:
        self._remove_quietly(self.start_path(name))
        self._remove_quietly(self.end_path(name))

    def _remove_quietly(self, path: Path) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            logger.debug("File timer {path} already absent", path=path)
        except OSError as exc:
            raise TimerIOError(f"Could not delete file timer {path}: {exc}") from exc


__all__ = ["FileTimerStore"]
