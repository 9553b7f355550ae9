from __future__ import annotations

import io
import itertools
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from timerlog.errors import InvalidTimerNameError
from timerlog.log.buffered import BufferedLog
from timerlog.log.decoder import decode_streams, parse_files
from timerlog.log.deltas import compute_deltas
from timerlog.log.summary import TimerSummary


def make_log() -> BufferedLog:
    ticks = itertools.count(100, 10)
    return BufferedLog(clock=lambda: next(ticks))


def test_serialize_preserves_per_name_order():
    log = make_log()
    log.start("a")  # 100
    log.start("b")  # 110
    log.end("a")  # 120
    log.start("a")  # 130
    log.end("b")  # 140
    log.end("a")  # 150

    sink = io.BytesIO()
    written = log.serialize(sink)
    assert written == len(sink.getvalue())

    decoded = decode_streams([sink.getvalue()])
    assert decoded == {"a": TimerSummary([100, 130], [120, 150]), "b": TimerSummary([110], [140])}
    assert compute_deltas(decoded) == {"a": [20, 20], "b": [30]}


def test_reset_then_serialize_writes_nothing():
    log = make_log()
    log.start("a")
    log.reset()
    sink = io.BytesIO()
    assert log.serialize(sink) == 0
    assert sink.getvalue() == b""


def test_reset_leaves_old_buffer_intact():
    log = make_log()
    log.start("a")
    old = log.reset()
    log.start("a")
    assert old == {"a": TimerSummary([100], [])}
    assert log.summaries == {"a": TimerSummary([110], [])}


def test_replace_swaps_buffer():
    log = make_log()
    log.start("a")
    snapshot = {"x": TimerSummary([1], [2])}
    previous = log.replace(snapshot)
    assert previous == {"a": TimerSummary([100], [])}
    assert log.summaries is snapshot
    log.end("x")
    assert snapshot["x"].ends == [2, 110]


def test_track_ends_on_error():
    log = make_log()
    with pytest.raises(RuntimeError):
        with log.track("job"):
            raise RuntimeError("boom")
    assert log.summaries["job"] == TimerSummary([100], [110])


def test_dump_appends(tmp_path):
    path = tmp_path / "timers.log"
    log = make_log()
    with log.track("a"):
        pass
    log.dump(path)
    log.reset()
    with log.track("a"):
        pass
    log.dump(path, append=True)
    assert compute_deltas(parse_files([path])) == {"a": [10, 10]}


def test_nul_name_refused_when_recorded():
    log = make_log()
    log.start("good")
    with pytest.raises(InvalidTimerNameError):
        log.start("bad\x00name")
    with pytest.raises(InvalidTimerNameError):
        log.end("bad\x00name")
    log.end("good")
    assert list(log.summaries) == ["good"]


def test_unencodable_buffer_leaves_sink_empty():
    log = make_log()
    log.replace(
        {
            "good": TimerSummary([1], [2]),
            "bad\x00name": TimerSummary([3], []),
            "later": TimerSummary([4], [5]),
        }
    )
    sink = io.BytesIO()
    with pytest.raises(InvalidTimerNameError):
        log.serialize(sink)
    assert sink.getvalue() == b""
