"""Per-name accumulation of start and end timestamps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .codec import EventKind


@dataclass
class TimerSummary:
    """Start and end timestamps of one timer, in encounter order."""

    starts: List[int] = field(default_factory=list)
    ends: List[int] = field(default_factory=list)

    def add(self, kind: EventKind, timestamp: int) -> None:
        if kind is EventKind.START:
            self.starts.append(timestamp)
        else:
            self.ends.append(timestamp)


SummaryMap = Dict[str, TimerSummary]


def summary_for(mapping: SummaryMap, name: str) -> TimerSummary:
    """Return the summary for ``name``, creating an empty one on first use."""

    summary = mapping.get(name)
    if summary is None:
        summary = mapping[name] = TimerSummary()
    return summary


def record_start(mapping: SummaryMap, name: str, timestamp: int) -> None:
    summary_for(mapping, name).starts.append(timestamp)


def record_end(mapping: SummaryMap, name: str, timestamp: int) -> None:
    summary_for(mapping, name).ends.append(timestamp)


__all__ = ["TimerSummary", "SummaryMap", "summary_for", "record_start", "record_end"]
