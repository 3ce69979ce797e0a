"""EventGenerator: walks MML tokens and schedules MIDI events in ticks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from mmlsmf.events import EndOfTrack, NoteOff, NoteOn, Tempo, TrackEvent
from mmlsmf.tokenizer import Token, tokenize

# ── Timing (ticks) ──────────────────────────────────────────────────────────
QUARTER_TICKS: Final[int] = 96
WHOLE_TICKS: Final[int] = QUARTER_TICKS * 4  # semibreve, 384
HALF_TICKS: Final[int] = QUARTER_TICKS * 2   # minim, 192; also the longest length divisor

# ── Performance limits ──────────────────────────────────────────────────────
DEFAULT_OCTAVE: Final[int] = 4
MAX_OCTAVE: Final[int] = 9
DEFAULT_VOLUME: Final[int] = 8
MIN_VOLUME: Final[int] = 1
MAX_VOLUME: Final[int] = 15
VELOCITY_PER_VOLUME: Final[int] = 8

# ── Pitch ───────────────────────────────────────────────────────────────────
SEMITONES_PER_OCTAVE: Final[int] = 12
MIN_NOTE: Final[int] = 0
MAX_NOTE: Final[int] = 96
NOTE_OFFSET: Final[int] = 12  # added after range correction: o4c -> 60

PITCH_CLASSES: Final[dict[str, int]] = {
    "c": 0, "d": 2, "e": 4, "f": 5, "g": 7, "a": 9, "b": 11,
}
ACCIDENTALS: Final[dict[str, int]] = {"+": 1, "#": 1, "-": -1, "": 0}


@dataclass
class PerformanceState:
    """
    Mutable scan state for a single track.

    Attributes:
        cursor:      Absolute tick where the next event is placed.
        note_time:   Default duration in ticks, set by ``l``.
        octave:      Current octave. ``o`` sets it verbatim; ``<``/``>`` clamp to 0-9.
        volume:      1-15; NoteOn velocity is ``volume * 8``.
        tie_pending: A note ended with ``&`` and is still sounding.
        tie_note:    The held note number while ``tie_pending`` is set.
    """

    cursor: int = 0
    note_time: int = QUARTER_TICKS
    octave: int = DEFAULT_OCTAVE
    volume: int = DEFAULT_VOLUME
    tie_pending: bool = False
    tie_note: int = 0


def dotted(ticks: int) -> int:
    """Lengthen by half, truncating: 96 -> 144, 25 -> 37."""
    return ticks * 3 // 2


def length_ticks(divisor: int) -> int | None:
    """Ticks for a note length like ``8`` in ``c8``; None when out of range."""
    if 1 <= divisor <= HALF_TICKS:
        return WHOLE_TICKS // divisor
    return None


def correct_range(note: int) -> int:
    """
    Fold a raw note into 0-96 by whole octaves, then shift up one octave.

    The result can reach 108.
    """
    if note < MIN_NOTE:
        note += SEMITONES_PER_OCTAVE * (
            (MIN_NOTE - note + SEMITONES_PER_OCTAVE - 1) // SEMITONES_PER_OCTAVE
        )
    if note > MAX_NOTE:
        note -= SEMITONES_PER_OCTAVE * (
            (note - MAX_NOTE + SEMITONES_PER_OCTAVE - 1) // SEMITONES_PER_OCTAVE
        )
    return note + NOTE_OFFSET


class EventGenerator:
    """
    Interprets the tokens of one MML track as timed MIDI events.

    Every call to ``generate()`` starts from a fresh PerformanceState, so one
    generator can serve any number of tracks on the same channel without
    leaking octave, volume, length or tie state between them.

    Token effects
    -------------
    ``l<n>[.]``   default length ``384 // n`` for 1 <= n <= 192; with ``&``
                  the previous note is held across the length change.
    ``o<n>``      octave = n (no clamping).
    ``t<n>``      Tempo event of ``60_000_000 // n`` microseconds, n > 0.
    ``v<n>``      volume clamped to 1-15.
    ``<`` ``>``   octave down/up, held within 0-9.
    ``r[<n>][.]`` rest: advances the cursor only.
    ``n<n>``      note number n (0-96, otherwise 0) at the default length.
    ``a``-``g``   letter note with optional ``+``/``#``/``-``, length, dot, ``&``.
    """

    def __init__(self, channel: int = 1) -> None:
        """
        Args:
            channel: 1-based MIDI channel stamped on every note event.
        """
        self.channel = channel

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _note_off(self, note: int, time: int) -> NoteOff:
        return NoteOff(self.channel, note, 0, time=time)

    def _apply_control(
        self, token: Token, state: PerformanceState, events: list[TrackEvent]
    ) -> None:
        value = token.control_value

        if token.op == "l":
            ticks = length_ticks(value)
            if ticks is None:
                return
            state.note_time = dotted(ticks) if token.dotted else ticks
            if token.tied:
                self._hold_previous_note(state, events)
        elif token.op == "o":
            state.octave = value
        elif token.op == "t":
            if value > 0:
                events.append(Tempo(60_000_000 // value, time=state.cursor))
        elif token.op == "v":
            state.volume = min(max(value, MIN_VOLUME), MAX_VOLUME)
        elif token.op == "<":
            state.octave = 0 if state.octave <= 0 else state.octave - 1
        elif token.op == ">":
            state.octave = MAX_OCTAVE if state.octave >= MAX_OCTAVE else state.octave + 1

    def _hold_previous_note(
        self, state: PerformanceState, events: list[TrackEvent]
    ) -> None:
        """Withdraw the latest NoteOff so the next note can tie onto it."""
        if state.tie_pending:
            return
        for index in range(len(events) - 1, -1, -1):
            event = events[index]
            if isinstance(event, NoteOff):
                del events[index]
                state.tie_pending = True
                state.tie_note = event.note
                return

    def _duration(self, token: Token, state: PerformanceState) -> int:
        ticks = state.note_time
        explicit = token.note_value
        if explicit is not None:
            ticks = length_ticks(explicit) or ticks
        if token.dotted:
            ticks = dotted(ticks)
        return ticks

    def _pitch(self, token: Token, state: PerformanceState) -> int:
        if token.op == "n":
            number = token.note_value
            if number is None or not MIN_NOTE <= number <= MAX_NOTE:
                return 0
            return number
        raw = (
            SEMITONES_PER_OCTAVE * state.octave
            + PITCH_CLASSES[token.op]
            + ACCIDENTALS[token.accidental]
        )
        return correct_range(raw)

    def _apply_note(
        self, token: Token, state: PerformanceState, events: list[TrackEvent]
    ) -> None:
        if token.op == "r":
            state.cursor += self._duration(token, state)
            return

        if token.op == "n":
            ticks = state.note_time
        else:
            ticks = self._duration(token, state)
        note = self._pitch(token, state)

        if state.tie_pending and note != state.tie_note:
            state.tie_pending = False
            events.append(self._note_off(state.tie_note, state.cursor))

        if not state.tie_pending:
            velocity = VELOCITY_PER_VOLUME * state.volume
            events.append(NoteOn(self.channel, note, velocity, time=state.cursor))

        state.cursor += ticks

        if token.tied:
            state.tie_pending = True
            state.tie_note = note
        else:
            state.tie_pending = False
            events.append(self._note_off(note, state.cursor))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(self, track: str, lead_time: int = 0) -> list[TrackEvent]:
        """
        Convert one MML track into events with absolute tick times.

        Args:
            track:     Track text, e.g. ``"t120l8cdefg"``. Whitespace and
                       unrecognised characters are ignored.
            lead_time: Tick at which the first note starts.

        Returns:
            Events in non-decreasing time order, ending with EndOfTrack one
            default length after the last note or rest.
        """
        state = PerformanceState(cursor=lead_time)
        events: list[TrackEvent] = []

        for token in tokenize(track):
            if token.is_control:
                self._apply_control(token, state, events)
            else:
                self._apply_note(token, state, events)

        if state.tie_pending:
            events.append(self._note_off(state.tie_note, state.cursor))

        state.cursor += state.note_time
        events.append(EndOfTrack(time=state.cursor))
        return events
