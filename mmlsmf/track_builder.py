"""TrackAssembler: splits an MML string into parts and frames each as a track."""

from __future__ import annotations

import re
from typing import Final

from mmlsmf.errors import EmptyTrackList, GrammarMismatch
from mmlsmf.events import (
    ControlChange,
    EndOfTrack,
    MetaText,
    ProgramChange,
    SysEx,
    Tempo,
    TrackEvent,
)
from mmlsmf.sequencer import EventGenerator

# Characters allowed inside one part of ``MML@a,b,c;``.
_PART = r"([\s0-9a-glnortvA-GLNORTV#<>.&+-]*)"
_MML = re.compile(r"MML@\s*" + _PART + r",\s*" + _PART + r",\s*" + _PART + ";")

# ── Setup events ────────────────────────────────────────────────────────────
PROJECT_TEXT: Final[str] = "Yokoso Project(https://yoko.so/)"
DEFAULT_TEMPO_US: Final[int] = 500000  # 120 BPM
# Roland GS reset, sent once at the top of the file.
GS_RESET: Final[bytes] = bytes([0x41, 0x10, 0x42, 0x12, 0x40, 0x00, 0x7F, 0x00, 0x41, 0xF7])

CC_PAN: Final[int] = 10
CC_REVERB: Final[int] = 91
DEFAULT_PAN: Final[int] = 64
DEFAULT_REVERB: Final[int] = 0

PROGRAM_CHANGE_TICK: Final[int] = 192
PAN_TICK: Final[int] = 193
REVERB_TICK: Final[int] = 194
TRACK_START_TICK: Final[int] = 384
EMPTY_TRACK_END_TICK: Final[int] = 385

TRACKS_PER_SCORE: Final[int] = 3


def split_tracks(mml: str) -> list[str]:
    """
    Extract the three parts of an ``MML@part1,part2,part3;`` string.

    The pattern is searched for, so leading or trailing text around it is
    ignored. Parts keep their whitespace; empty parts are returned as "".

    Raises:
        GrammarMismatch: If no three-part MML string is found.
        EmptyTrackList:  If the match yields no parts.
    """
    match = _MML.search(mml)
    if match is None:
        raise GrammarMismatch(mml)
    parts = list(match.groups())
    if not parts:
        raise EmptyTrackList()
    return parts


class TrackAssembler:
    """
    Builds the complete event list of every track of one MML string.

    Track layout
    ------------
    Channel 1, first part only: file header events at tick 0
        MetaText(project), Tempo(500000), SysEx(GS reset)

    Every part:
        tick 192  ProgramChange(instrument)
        tick 193  ControlChange(10, pan)
        tick 194  ControlChange(91, reverb)
        tick 384  the part's own events, or EndOfTrack at 385 if it is empty
    """

    def __init__(
        self,
        channel: int = 1,
        instrument: int = 1,
        pan: int = DEFAULT_PAN,
        reverb: int = DEFAULT_REVERB,
        project: str = PROJECT_TEXT,
    ) -> None:
        self.channel = channel
        self.instrument = instrument
        self.pan = pan
        self.reverb = reverb
        self.project = project
        self.generator = EventGenerator(channel)

    def _header_events(self) -> list[TrackEvent]:
        return [
            MetaText(self.project),
            Tempo(DEFAULT_TEMPO_US),
            SysEx(GS_RESET),
        ]

    def _setup_events(self) -> list[TrackEvent]:
        return [
            ProgramChange(self.channel, self.instrument, time=PROGRAM_CHANGE_TICK),
            ControlChange(self.channel, CC_PAN, self.pan, time=PAN_TICK),
            ControlChange(self.channel, CC_REVERB, self.reverb, time=REVERB_TICK),
        ]

    def assemble_track(self, part: str, index: int) -> list[TrackEvent]:
        """Build the event list for the part at position ``index`` (0-based)."""
        events: list[TrackEvent] = []
        if self.channel == 1 and index == 0:
            events.extend(self._header_events())
        events.extend(self._setup_events())

        if part:
            events.extend(self.generator.generate(part, TRACK_START_TICK))
        else:
            events.append(EndOfTrack(time=EMPTY_TRACK_END_TICK))
        return events

    def assemble(self, mml: str) -> list[list[TrackEvent]]:
        """
        Convert an MML string into exactly three event lists.

        Raises:
            GrammarMismatch: If ``mml`` is not a three-part MML string.
        """
        parts = split_tracks(mml)
        return [self.assemble_track(part, index) for index, part in enumerate(parts)]
