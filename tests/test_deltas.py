from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from timerlog.log.deltas import DeltaDiagnostic, DeltaIssue, compute_deltas, validate_summary
from timerlog.log.summary import TimerSummary
from timerlog.utils.logging import logger


def reconstruct(starts, ends):
    diagnostics = []
    result = compute_deltas({"T": TimerSummary(list(starts), list(ends))}, diagnostics)
    return result, diagnostics


def test_pairs_in_order():
    result, diagnostics = reconstruct([10, 50], [20, 80])
    assert result == {"T": [10, 30]}
    assert diagnostics == []


@pytest.mark.parametrize(
    "starts, ends, issue, index",
    [
        ([], [20], DeltaIssue.NEVER_STARTED, None),
        ([10], [], DeltaIssue.NEVER_ENDED, None),
        ([10, 50], [20], DeltaIssue.UNEQUAL_COUNTS, None),
        ([10], [5], DeltaIssue.END_BEFORE_START, 0),
        ([10, 15], [20, 30], DeltaIssue.OVERLAPPING_START, 1),
    ],
)
def test_failing_names_are_dropped(starts, ends, issue, index):
    result, diagnostics = reconstruct(starts, ends)
    assert "T" not in result
    assert diagnostics == [DeltaDiagnostic("T", issue, index)]


def test_back_to_back_intervals_are_accepted():
    result, _ = reconstruct([10, 20], [20, 25])
    assert result == {"T": [10, 5]}


def test_late_failure_drops_whole_name():
    result, diagnostics = reconstruct([0, 10, 30], [5, 20, 25])
    assert result == {}
    assert diagnostics[0].issue is DeltaIssue.END_BEFORE_START
    assert diagnostics[0].index == 2


def test_other_names_survive_a_bad_one():
    mapping = {
        "good": TimerSummary([1], [4]),
        "bad": TimerSummary([1], []),
    }
    assert compute_deltas(mapping) == {"good": [3]}


def test_diagnostics_are_logged():
    messages = []
    handler = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        compute_deltas({"orphan": TimerSummary([], [3])})
    finally:
        logger.remove(handler)
    assert messages == ["Timer orphan ended but never started\n"]


def test_validate_summary_returns_deltas():
    assert validate_summary("T", TimerSummary([1, 2], [2, 9])) == [1, 7]
