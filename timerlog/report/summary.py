"""Turn decoded timer logs into reports and tables."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from ..log.decoder import parse_files
from ..log.deltas import DeltaDiagnostic, compute_deltas
from ..utils.fileio import write_parquet, write_yaml
from ..utils.logging import logger
from .schemas import DiagnosticModel, TimerReport, TimerStats


def check_sort_key(sort_by: str) -> str:
    """Reject report orderings that are not a :class:`TimerStats` field."""

    if sort_by not in TimerStats.model_fields:
        raise ValueError(f"Cannot sort timer report by {sort_by!r}; expected one of {sorted(TimerStats.model_fields)}")
    return sort_by


@dataclass
class ReportConfig:
    output: Path = Path("timer_report.yaml")
    table: Optional[Path] = None
    sort_by: str = "total_ns"

    def __post_init__(self) -> None:
        check_sort_key(self.sort_by)


def summarize(
    deltas: Dict[str, List[int]],
    diagnostics: Sequence[DeltaDiagnostic] = (),
    sources: Sequence[str] = (),
    sort_by: str = "total_ns",
) -> TimerReport:
    check_sort_key(sort_by)
    timers: List[TimerStats] = []
    for name, values in deltas.items():
        # float64 for the moments only; sums and extremes stay exact Python ints
        arr = np.asarray(values, dtype=np.float64)
        timers.append(
            TimerStats(
                name=name,
                count=len(values),
                total_ns=sum(values),
                mean_ns=float(arr.mean()),
                min_ns=min(values),
                max_ns=max(values),
                std_ns=float(arr.std()),
            )
        )
    if sort_by == "name":
        timers.sort(key=lambda t: t.name)
    else:
        timers.sort(key=lambda t: getattr(t, sort_by), reverse=True)
    issues = [
        DiagnosticModel(name=d.name, issue=d.issue.name, message=d.message, index=d.index)
        for d in sorted(diagnostics, key=lambda d: d.name)
    ]
    return TimerReport(sources=list(sources), timers=timers, diagnostics=issues)


def deltas_frame(deltas: Dict[str, List[int]]) -> pd.DataFrame:
    """Long-form table with one row per matched start/end pair."""

    rows = [
        {"name": name, "index": i, "delta_ns": delta}
        for name, values in deltas.items()
        for i, delta in enumerate(values)
    ]
    df = pd.DataFrame(rows, columns=["name", "index", "delta_ns"])
    return df.astype({"index": "int64", "delta_ns": "int64"})


def report_logs(
    paths: Sequence[Union[str, Path]], sort_by: str = "total_ns"
) -> Tuple[TimerReport, pd.DataFrame]:
    """Decode ``paths`` in order, pair their events and summarize the result."""

    diagnostics: List[DeltaDiagnostic] = []
    deltas = compute_deltas(parse_files(paths), diagnostics)
    report = summarize(deltas, diagnostics, [str(p) for p in paths], sort_by=sort_by)
    return report, deltas_frame(deltas)


def write_report(report: TimerReport, frame: pd.DataFrame, config: ReportConfig) -> Path:
    write_yaml(report.model_dump(), config.output)
    logger.info(
        "Wrote report for {timers} timer(s), {issues} skipped, to {path}",
        timers=len(report.timers),
        issues=len(report.diagnostics),
        path=config.output,
    )
    if config.table is not None:
        write_parquet(frame, config.table)
        logger.info("Wrote {rows} duration row(s) to {path}", rows=len(frame), path=config.table)
    return config.output


__all__ = ["ReportConfig", "check_sort_key", "summarize", "deltas_frame", "report_logs", "write_report"]
