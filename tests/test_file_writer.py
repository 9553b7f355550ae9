from __future__ import annotations

import itertools
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from timerlog.errors import InvalidTimerNameError, TimerIOError, TimerStateError
from timerlog.log.decoder import parse_files
from timerlog.log.file_writer import LogFileWriter
from timerlog.log.summary import TimerSummary


def ticking():
    ticks = itertools.count(1)
    return lambda: next(ticks)


def test_events_reach_the_file(tmp_path):
    path = tmp_path / "run.log"
    with LogFileWriter(path, clock=ticking()) as log:
        log.start("load")
        with log.track("step"):
            pass
        log.end("load")
    assert log.closed
    assert parse_files([path]) == {"load": TimerSummary([1], [4]), "step": TimerSummary([2], [3])}


def test_reopen_truncates_unless_appending(tmp_path):
    path = tmp_path / "run.log"
    with LogFileWriter(path, clock=ticking()) as log:
        log.start("a")
    with LogFileWriter(path, append=True, clock=ticking()) as log:
        log.end("a")
    assert parse_files([path]) == {"a": TimerSummary([1], [1])}

    with LogFileWriter(path, clock=ticking()) as log:
        log.end("b")
    assert parse_files([path]) == {"b": TimerSummary([], [1])}


def test_closed_writer_rejects_events(tmp_path):
    log = LogFileWriter(tmp_path / "run.log")
    with pytest.raises(TimerStateError):
        log.start("a")
    with pytest.raises(TimerStateError):
        log.close()


def test_invalid_path(tmp_path):
    with pytest.raises(TimerIOError):
        LogFileWriter(tmp_path / "missing" / "run.log").open()


def test_nul_name_rejected_before_writing(tmp_path):
    path = tmp_path / "run.log"
    with LogFileWriter(path) as log:
        with pytest.raises(InvalidTimerNameError):
            log.start("bad\x00name")
    assert path.read_bytes() == b""
