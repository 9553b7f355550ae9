"""Pair start and end events into durations.

Every timer name is validated on its own. A name that breaks any pairing rule
is left out of the result entirely and reported as a :class:`DeltaDiagnostic`;
the remaining names are unaffected.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from ..utils.logging import logger
from .summary import SummaryMap, TimerSummary


class DeltaIssue(enum.Enum):
    NEVER_STARTED = "ended but never started"
    NEVER_ENDED = "started but never ended"
    UNEQUAL_COUNTS = "has a different number of starts than ends"
    END_BEFORE_START = "has an end time preceding its start time"
    OVERLAPPING_START = "was started twice without being ended in between"


@dataclass(frozen=True)
class DeltaDiagnostic:
    name: str
    issue: DeltaIssue
    index: Optional[int] = None

    @property
    def message(self) -> str:
        text = f"Timer {self.name} {self.issue.value}"
        if self.index is not None:
            text += f" (pair {self.index})"
        return text


def validate_summary(name: str, summary: TimerSummary) -> Union[List[int], DeltaDiagnostic]:
    """Return the durations of ``summary`` or the first rule it violates."""

    starts, ends = summary.starts, summary.ends
    if not starts:
        return DeltaDiagnostic(name, DeltaIssue.NEVER_STARTED)
    if not ends:
        return DeltaDiagnostic(name, DeltaIssue.NEVER_ENDED)
    if len(starts) != len(ends):
        return DeltaDiagnostic(name, DeltaIssue.UNEQUAL_COUNTS)

    deltas: List[int] = []
    for i, (start, end) in enumerate(zip(starts, ends)):
        if start > end:
            return DeltaDiagnostic(name, DeltaIssue.END_BEFORE_START, i)
        # a start equal to the previous end is a back-to-back interval, not an overlap
        if i > 0 and start < ends[i - 1]:
            return DeltaDiagnostic(name, DeltaIssue.OVERLAPPING_START, i)
        deltas.append(end - start)
    return deltas


def compute_deltas(
    mapping: SummaryMap,
    diagnostics: Optional[List[DeltaDiagnostic]] = None,
) -> Dict[str, List[int]]:
    """Durations per timer name, skipping names whose events do not pair up.

    Skipped names are logged at WARNING and appended to ``diagnostics`` when a
    list is given.
    """

    result: Dict[str, List[int]] = {}
    for name, summary in mapping.items():
        outcome = validate_summary(name, summary)
        if isinstance(outcome, DeltaDiagnostic):
            logger.warning(outcome.message)
            if diagnostics is not None:
                diagnostics.append(outcome)
            continue
        result[name] = outcome
    return result


__all__ = ["DeltaIssue", "DeltaDiagnostic", "validate_summary", "compute_deltas"]
