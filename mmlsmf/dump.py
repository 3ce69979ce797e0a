"""Debug output: hex dumps of MIDI bytes and text listings of track events."""

from __future__ import annotations

from collections.abc import Sequence

from mmlsmf.events import TrackEvent
from mmlsmf.smf_writer import TIMEBASE
from mmlsmf.track_builder import TRACKS_PER_SCORE

BYTES_PER_LINE = 16


def hex_dump(data: bytes, width: int = BYTES_PER_LINE) -> str:
    """Lowercase hex bytes separated by spaces, ``width`` bytes per line."""
    lines = []
    for offset in range(0, len(data), width):
        lines.append(" ".join(f"{b:02x}" for b in data[offset:offset + width]))
    return "\n".join(lines)


def to_text(
    tracks: Sequence[Sequence[TrackEvent]],
    tracks_per_score: int = TRACKS_PER_SCORE,
) -> str:
    """
    Render event lists in the mf2t text style, one block per score.

    Each block opens with ``MFile 1 <channel> 96`` for the score's channel
    and lists that score's tracks.

    Example::

        MFile 1 1 96
        MTrk
        0 Text: Yokoso Project(https://yoko.so/)
        192 ProgramChange: ch=1, program=1
    """
    lines = []
    for index, events in enumerate(tracks):
        if index % tracks_per_score == 0:
            lines.append(f"MFile 1 {index // tracks_per_score + 1} {TIMEBASE}")
        lines.append("MTrk")
        lines.extend(f"{event.time} {event.describe()}" for event in events)
    return "\n".join(lines)
