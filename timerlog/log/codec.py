"""Binary wire format for timer start/end events.

Each event is laid out as::

    <utf-8 name bytes> 0x00 <kind byte> <int64 little-endian timestamp>

Events concatenate with no header or delimiter, so log files can be appended
to and joined freely. A name must not contain the NUL byte, which terminates
it on the wire.
"""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Optional, Tuple

from ..errors import CorruptLogError, InvalidTimerEventError, InvalidTimerNameError

NAME_TERMINATOR = b"\x00"
KIND_WIDTH = 1
_TIMESTAMP = struct.Struct("<q")
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class EventKind(enum.Enum):
    """Kind tag written after the name terminator."""

    START = b"s"
    END = b"e"


_KINDS_BY_TAG = {kind.value: kind for kind in EventKind}


@dataclass(frozen=True)
class TimerEvent:
    name: str
    kind: EventKind
    timestamp: int


def check_name(name: str) -> bytes:
    """Return the UTF-8 bytes of ``name``, rejecting names that contain NUL."""

    data = name.encode("utf-8")
    if NAME_TERMINATOR in data:
        raise InvalidTimerNameError(f"Timer name {name!r} contains a NUL byte")
    return data


def encode_event(event: TimerEvent) -> bytes:
    """Encode a single event, validating it before any byte is produced."""

    name = check_name(event.name)
    if not INT64_MIN <= event.timestamp <= INT64_MAX:
        raise InvalidTimerEventError(f"Timestamp {event.timestamp} for timer {event.name} does not fit in int64")
    return name + NAME_TERMINATOR + event.kind.value + _TIMESTAMP.pack(event.timestamp)


def write_event(sink: BinaryIO, event: TimerEvent) -> int:
    """Write one encoded event to ``sink`` and return the number of bytes."""

    data = encode_event(event)
    sink.write(data)
    return len(data)


def decode_event(buffer: bytes, offset: int = 0, source: str = "<stream>") -> Tuple[Optional[TimerEvent], int]:
    """Decode the event starting at ``offset``.

    Returns ``(None, offset)`` when ``offset`` is exactly the end of the buffer.
    Running out of bytes anywhere inside an event raises :class:`CorruptLogError`.
    """

    size = len(buffer)
    if offset >= size:
        return None, offset

    end = buffer.find(NAME_TERMINATOR, offset)
    if end < 0:
        raise CorruptLogError("Unexpected end of stream inside a timer name", source, offset)
    try:
        name = buffer[offset:end].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CorruptLogError("Timer name is not valid UTF-8", source, offset) from exc

    pos = end + 1
    tag = buffer[pos : pos + KIND_WIDTH]
    if len(tag) < KIND_WIDTH:
        raise CorruptLogError(f"Unexpected end of stream before the kind of timer {name}", source, pos)
    kind = _KINDS_BY_TAG.get(tag)
    if kind is None:
        raise CorruptLogError(f"Unknown event kind {tag!r} for timer {name}", source, pos)

    pos += KIND_WIDTH
    if size - pos < _TIMESTAMP.size:
        raise CorruptLogError(f"Unexpected end of stream inside the timestamp of timer {name}", source, pos)
    (timestamp,) = _TIMESTAMP.unpack_from(buffer, pos)
    return TimerEvent(name, kind, timestamp), pos + _TIMESTAMP.size


def iter_events(buffer: bytes, source: str = "<stream>") -> Iterator[TimerEvent]:
    """Yield every event in ``buffer`` in order."""

    offset = 0
    while True:
        event, offset = decode_event(buffer, offset, source)
        if event is None:
            return
        yield event


__all__ = [
    "EventKind",
    "TimerEvent",
    "check_name",
    "encode_event",
    "write_event",
    "decode_event",
    "iter_events",
]
