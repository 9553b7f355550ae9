"""In-memory timer log that can be serialized to the binary log format."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, List, Optional

from ..errors import TimerIOError
from ..utils.clock import Clock, now_ns
from .codec import EventKind, TimerEvent, check_name, encode_event
from .summary import SummaryMap, record_end, record_start


def _encode_timestamps(name: str, kind: EventKind, timestamps: List[int]) -> List[bytes]:
    return [encode_event(TimerEvent(name, kind, timestamp)) for timestamp in timestamps]


class BufferedLog:
    """Collect start/end events per timer name until they are written out.

    Names must not contain the NUL byte; such names are refused when recorded.
    """

    def __init__(self, clock: Clock = now_ns, summaries: Optional[SummaryMap] = None):
        self.clock = clock
        self._summaries: SummaryMap = {} if summaries is None else summaries

    @property
    def summaries(self) -> SummaryMap:
        """The active buffer."""
        return self._summaries

    def start(self, name: str) -> None:
        check_name(name)
        record_start(self._summaries, name, self.clock())

    def end(self, name: str) -> None:
        check_name(name)
        record_end(self._summaries, name, self.clock())

    @contextmanager
    def track(self, name: str):
        self.start(name)
        try:
            yield
        finally:
            self.end(name)

    def serialize(self, sink: BinaryIO) -> int:
        """Write all starts, then all ends, of every timer. Returns bytes written.

        The whole buffer is encoded before anything reaches ``sink``, so an
        event that cannot be encoded leaves the sink untouched. The order
        across names is unspecified; within a name both sequences keep their
        recording order.
        """

        chunks: List[bytes] = []
        for name, summary in self._summaries.items():
            chunks.extend(_encode_timestamps(name, EventKind.START, summary.starts))
            chunks.extend(_encode_timestamps(name, EventKind.END, summary.ends))
        data = b"".join(chunks)
        if data:
            sink.write(data)
        return len(data)

    def dump(self, path: Path, append: bool = False) -> int:
        """Serialize the active buffer to ``path``."""

        path = Path(path)
        try:
            with path.open("ab" if append else "wb") as fh:
                return self.serialize(fh)
        except OSError as exc:
            raise TimerIOError(f"Could not write timer log {path}: {exc}") from exc

    def reset(self) -> SummaryMap:
        """Start over with an empty buffer; the previous one is returned untouched."""

        old, self._summaries = self._summaries, {}
        return old

    def replace(self, summaries: SummaryMap) -> SummaryMap:
        """Swap in ``summaries`` as the active buffer and return the previous one."""

        old, self._summaries = self._summaries, summaries
        return old


__all__ = ["BufferedLog"]
