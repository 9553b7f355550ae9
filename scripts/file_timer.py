"""Start, end, poll or delete a timer kept as files in a directory."""

from __future__ import annotations

import sys
from pathlib import Path

import hydra
from hydra.utils import to_absolute_path
from omegaconf import DictConfig

from timerlog.errors import TimerError
from timerlog.stores.files import FileTimerStore
from timerlog.utils.logging import logger, setup_logging


@hydra.main(config_path="../configs", config_name="file_timer", version_base=None)
def main(cfg: DictConfig) -> None:
    setup_logging(level=cfg.log_level)
    name = str(cfg.name)

    try:
        store = FileTimerStore(Path(to_absolute_path(cfg.directory)))
        if cfg.action == "start":
            store.start(name)
        elif cfg.action == "end":
            store.end(name)
        elif cfg.action == "poll":
            logger.info("{name} running for {ns}ns", name=name, ns=store.poll(name))
        elif cfg.action == "delete":
            store.delete(name)
        elif cfg.action == "delta":
            reading = store.delta(name)
            if reading.matched:
                logger.info("{name} took {ns}ns", name=name, ns=reading.delta)
            else:
                logger.warning("{name}: {status}", name=name, status=reading.status.value)
        else:
            logger.error("Unknown action {action}", action=cfg.action)
            sys.exit(2)
    except TimerError as exc:
        logger.error("{action} {name} failed: {exc}", action=cfg.action, name=name, exc=exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
