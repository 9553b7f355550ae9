"""Decode one or more timer logs into per-name summaries."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Sequence, Tuple, Union

from ..errors import TimerIOError
from ..utils.logging import logger
from .codec import iter_events
from .summary import SummaryMap, summary_for

Source = Union[bytes, bytearray, BinaryIO]


def _read_source(source: Source) -> Tuple[bytes, str]:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source), "<bytes>"
    label = str(getattr(source, "name", "<stream>"))
    try:
        return source.read(), label
    except OSError as exc:
        raise TimerIOError(f"Could not read timer log {label}: {exc}") from exc


def decode_buffer(buffer: bytes, into: SummaryMap, source: str = "<stream>") -> int:
    """Fold every event of ``buffer`` into ``into`` and return the event count."""

    count = 0
    for event in iter_events(buffer, source):
        summary_for(into, event.name).add(event.kind, event.timestamp)
        count += 1
    logger.debug("Decoded {count} timer events from {source}", count=count, source=source)
    return count


def decode_streams(sources: Iterable[Source], into: Optional[SummaryMap] = None) -> SummaryMap:
    """Decode ``sources`` one after another into a single mapping.

    Events of a name keep the order of the sources, then the order within each
    source. Any read failure or corrupt stream aborts the whole decode and
    leaves ``into`` unchanged.
    """

    mapping: SummaryMap = {}
    for source in sources:
        buffer, label = _read_source(source)
        decode_buffer(buffer, mapping, label)
    if into is None:
        return mapping
    for name, summary in mapping.items():
        target = summary_for(into, name)
        target.starts.extend(summary.starts)
        target.ends.extend(summary.ends)
    return into


def read_logs(paths: Sequence[Union[str, Path]]) -> List[Tuple[bytes, str]]:
    """Read every log file fully into memory, closing each handle."""

    buffers: List[Tuple[bytes, str]] = []
    for raw in paths:
        path = Path(raw)
        try:
            with path.open("rb") as fh:
                buffers.append((fh.read(), str(path)))
        except OSError as exc:
            raise TimerIOError(f"Attempted to parse timer log at invalid filepath {path}: {exc}") from exc
    return buffers


def parse_files(paths: Sequence[Union[str, Path]]) -> SummaryMap:
    """Decode the log files at ``paths`` as if they were concatenated in order."""

    mapping: SummaryMap = {}
    for buffer, label in read_logs(paths):
        decode_buffer(buffer, mapping, label)
    logger.info("Parsed {files} timer log(s) covering {names} timer(s)", files=len(paths), names=len(mapping))
    return mapping


__all__ = ["decode_buffer", "decode_streams", "read_logs", "parse_files"]
