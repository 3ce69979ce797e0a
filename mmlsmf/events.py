"""Track events: the closed set of MIDI messages an MML track can produce."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

# ── Status bytes ────────────────────────────────────────────────────────────
META = 0xFF
SYSEX = 0xF0
NOTE_OFF = 0x80
NOTE_ON = 0x90
CONTROL_CHANGE = 0xB0
PROGRAM_CHANGE = 0xC0

# ── Meta event types ────────────────────────────────────────────────────────
META_TEXT = 0x01
META_END_OF_TRACK = 0x2F
META_TEMPO = 0x51


def _hex(data: bytes) -> str:
    return " ".join(f"{b:02x}" for b in data)


@dataclass(frozen=True)
class TrackEvent(ABC):
    """
    A single event placed on a track at an absolute tick.

    Attributes:
        time: Absolute position in ticks from the start of the track.
    """

    time: int = field(default=0, kw_only=True)

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Encode the event without its delta time, status byte first."""

    @abstractmethod
    def describe(self) -> str:
        """One-line human-readable form used by the text listing."""


@dataclass(frozen=True)
class ChannelEvent(TrackEvent):
    """
    Base for channel voice messages.

    ``channel`` is 1-based (1-16); the status byte carries ``channel - 1``.
    """

    channel: int = 1

    def _status(self, kind: int) -> int:
        return kind | ((self.channel - 1) & 0x0F)


@dataclass(frozen=True)
class MetaText(TrackEvent):
    text: str = ""

    def to_bytes(self) -> bytes:
        data = self.text.encode("utf-8")
        return bytes([META, META_TEXT, len(data)]) + data

    def describe(self) -> str:
        return f"Text: {self.text}"


@dataclass(frozen=True)
class Tempo(TrackEvent):
    """Set tempo meta event; ``microseconds`` per quarter note."""

    microseconds: int = 500000

    def to_bytes(self) -> bytes:
        return bytes([META, META_TEMPO, 0x03]) + (self.microseconds & 0xFFFFFF).to_bytes(3, "big")

    def describe(self) -> str:
        return f"Tempo: {self.microseconds}"


@dataclass(frozen=True)
class SysEx(TrackEvent):
    data: bytes = b""

    def to_bytes(self) -> bytes:
        return bytes([SYSEX, len(self.data)]) + bytes(self.data)

    def describe(self) -> str:
        return f"SysEx: {_hex(self.data)}"


@dataclass(frozen=True)
class ProgramChange(ChannelEvent):
    program: int = 0

    def to_bytes(self) -> bytes:
        return bytes([self._status(PROGRAM_CHANGE), self.program])

    def describe(self) -> str:
        return f"ProgramChange: ch={self.channel}, program={self.program}"


@dataclass(frozen=True)
class ControlChange(ChannelEvent):
    controller: int = 0
    value: int = 0

    def to_bytes(self) -> bytes:
        return bytes([self._status(CONTROL_CHANGE), self.controller, self.value])

    def describe(self) -> str:
        return f"ControlChange: ch={self.channel}, cc={self.controller}, val={self.value}"


@dataclass(frozen=True)
class NoteOn(ChannelEvent):
    note: int = 0
    velocity: int = 0

    def to_bytes(self) -> bytes:
        return bytes([self._status(NOTE_ON), self.note, self.velocity])

    def describe(self) -> str:
        return f"NoteOn: ch={self.channel}, note={self.note}, vel={self.velocity}"


@dataclass(frozen=True)
class NoteOff(ChannelEvent):
    note: int = 0
    velocity: int = 0

    def to_bytes(self) -> bytes:
        return bytes([self._status(NOTE_OFF), self.note, self.velocity])

    def describe(self) -> str:
        return f"NoteOff: ch={self.channel}, note={self.note}, vel={self.velocity}"


@dataclass(frozen=True)
class EndOfTrack(TrackEvent):
    def to_bytes(self) -> bytes:
        return bytes([META, META_END_OF_TRACK, 0x00])

    def describe(self) -> str:
        return "EndOfTrack"
