"""SmfWriter: serializes timed track events into Standard MIDI File bytes."""

from __future__ import annotations

import struct
from collections.abc import Iterable, Sequence
from typing import Final

from mmlsmf.errors import EventEncodingFailure
from mmlsmf.events import TrackEvent

HEADER_CHUNK: Final[bytes] = b"MThd"
TRACK_CHUNK: Final[bytes] = b"MTrk"
HEADER_LENGTH: Final[int] = 6
FORMAT_MULTI_TRACK: Final[int] = 1
TIMEBASE: Final[int] = 96  # ticks per quarter note

# Status bytes in this range are channel voice messages and may be
# omitted when repeated (running status).
_RUNNING_STATUS_MIN: Final[int] = 0x80
_RUNNING_STATUS_MAX: Final[int] = 0xEF


def write_var_len(value: int) -> bytes:
    """
    Encode a non-negative integer as a MIDI variable-length quantity.

    Seven bits per byte, most significant group first; every byte except the
    last has its high bit set. ``0`` encodes as a single ``0x00``.

    >>> write_var_len(128).hex()
    '8100'
    """
    if value < 0:
        raise ValueError(f"Delta time cannot be negative: {value}")
    array = bytearray([value & 0x7F])
    value >>= 7
    while value > 0:
        array.insert(0, (value & 0x7F) | 0x80)
        value >>= 7
    return bytes(array)


def chunk(chunk_id: bytes, data: bytes) -> bytes:
    """Frame ``data`` as a chunk: 4-byte id, 4-byte big-endian length, data."""
    return chunk_id + struct.pack(">I", len(data)) + data


def encode_track(events: Iterable[TrackEvent]) -> bytes:
    """
    Serialize one track's events, without the ``MTrk`` framing.

    Each event is written as the delta from the previous event's time
    followed by its bytes. A channel voice status byte equal to the previous
    event's status byte is omitted.

    Raises:
        EventEncodingFailure: If an event encodes to zero bytes.
        ValueError: If events are not in non-decreasing time order.
    """
    array = bytearray()
    prev_time = 0
    last_status = 0x00

    for event in events:
        delta = event.time - prev_time
        prev_time = event.time
        array.extend(write_var_len(delta))

        data = event.to_bytes()
        if not data:
            raise EventEncodingFailure(event.describe())

        status = data[0]
        if (
            status < _RUNNING_STATUS_MIN
            or status > _RUNNING_STATUS_MAX
            or status != last_status
        ):
            array.append(status)
        array.extend(data[1:])
        last_status = status

    return bytes(array)


class SmfWriter:
    """
    Frames encoded tracks into a format 1 Standard MIDI File.

    File layout
    -----------
    ``MThd`` | length 6 | format 1 | track count | timebase 96
    followed by one ``MTrk`` chunk per track, in the order given.
    """

    def __init__(self, timebase: int = TIMEBASE) -> None:
        self.timebase = timebase

    def header(self, track_count: int) -> bytes:
        """The complete ``MThd`` chunk for ``track_count`` tracks."""
        return chunk(
            HEADER_CHUNK,
            struct.pack(">HHH", FORMAT_MULTI_TRACK, track_count, self.timebase),
        )

    def write(self, tracks: Sequence[Iterable[TrackEvent]]) -> bytes:
        """Serialize every track and return the whole file as bytes."""
        array = bytearray(self.header(len(tracks)))
        for events in tracks:
            array.extend(chunk(TRACK_CHUNK, encode_track(events)))
        return bytes(array)
