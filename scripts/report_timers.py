"""Summarize durations recorded in one or more binary timer logs."""

from __future__ import annotations

import sys
from pathlib import Path

import hydra
from hydra.utils import to_absolute_path
from omegaconf import DictConfig

from timerlog.errors import TimerError
from timerlog.report.summary import ReportConfig, report_logs, write_report
from timerlog.utils.logging import logger, setup_logging


@hydra.main(config_path="../configs", config_name="report", version_base=None)
def main(cfg: DictConfig) -> None:
    setup_logging(level=cfg.log_level)

    # Resolve paths because Hydra changes CWD to outputs/...
    logs = [Path(to_absolute_path(p)) for p in cfg.logs]
    if not logs:
        logger.error("No timer logs given; pass logs=[a.log,b.log]")
        sys.exit(2)
    try:
        config = ReportConfig(
            output=Path(to_absolute_path(cfg.output)),
            table=Path(to_absolute_path(cfg.table)) if cfg.table else None,
            sort_by=cfg.sort_by,
        )
    except ValueError as exc:
        logger.error("Invalid report config: {exc}", exc=exc)
        sys.exit(2)

    try:
        report, frame = report_logs(logs, sort_by=config.sort_by)
    except TimerError as exc:
        logger.error("Could not decode timer logs: {exc}", exc=exc)
        sys.exit(1)

    for stats in report.timers:
        logger.info(
            "{name}: n={count} total={total}ns mean={mean:.0f}ns",
            name=stats.name,
            count=stats.count,
            total=stats.total_ns,
            mean=stats.mean_ns,
        )
    write_report(report, frame, config)


if __name__ == "__main__":
    main()
