"""File IO helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

import pandas as pd

from ..errors import InvalidDirectoryError


def ensure_dir(path: Path) -> Path:
    """Ensure that a directory exists."""

    path.mkdir(parents=True, exist_ok=True)
    return path


def resolve_timer_dir(directory: Union[str, Path]) -> Path:
    """Validate a directory that holds per-timer files.

    Trailing separators are tolerated. Raises :class:`InvalidDirectoryError`
    when the path is missing or is not a directory.
    """

    path = Path(directory)
    if not path.is_dir():
        raise InvalidDirectoryError(f"Attempted to set timer collection to invalid directory {directory}")
    return path


def write_parquet(df: pd.DataFrame, path: Path) -> None:
    """Write a dataframe to Parquet."""

    ensure_dir(path.parent)
    df.to_parquet(path, index=False)


def write_yaml(data: Any, path: Path) -> None:
    """Serialize data to YAML file."""

    import yaml

    ensure_dir(path.parent)
    with path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh, sort_keys=False)


__all__ = ["ensure_dir", "resolve_timer_dir", "write_parquet", "write_yaml"]
