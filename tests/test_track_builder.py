"""Unit tests for MML splitting and per-track setup events."""

import pytest

from mmlsmf.errors import GrammarMismatch
from mmlsmf.events import (
    ControlChange,
    EndOfTrack,
    MetaText,
    NoteOff,
    NoteOn,
    ProgramChange,
    SysEx,
    Tempo,
)
from mmlsmf.track_builder import GS_RESET, PROJECT_TEXT, TrackAssembler, split_tracks


def _setup(channel: int = 1, instrument: int = 1) -> list:
    return [
        ProgramChange(channel, instrument, time=192),
        ControlChange(channel, 10, 64, time=193),
        ControlChange(channel, 91, 0, time=194),
    ]


# ---------------------------------------------------------------------------
# split_tracks
# ---------------------------------------------------------------------------

def test_split_three_parts() -> None:
    assert split_tracks("MML@cde,efg,gab;") == ["cde", "efg", "gab"]


def test_split_keeps_empty_parts() -> None:
    assert split_tracks("MML@c,,;") == ["c", "", ""]
    assert split_tracks("MML@,,;") == ["", "", ""]


def test_split_skips_whitespace_after_separators() -> None:
    assert split_tracks("MML@ c ,\n d,  e;") == ["c ", "d", "e"]


def test_split_ignores_surrounding_text() -> None:
    assert split_tracks("score: MML@c,d,e; (end)") == ["c", "d", "e"]


@pytest.mark.parametrize(
    "mml",
    [
        "",
        "cdefg",
        "MML@c,d;",
        "MML@c,d,e",
        "MML@t120l4cdefgab>c4.,,,;",
        "MML@c!,,;",
        "mml@c,,;",
    ],
)
def test_split_rejects_malformed_input(mml: str) -> None:
    with pytest.raises(GrammarMismatch):
        split_tracks(mml)


def test_grammar_mismatch_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        split_tracks("nope")


# ---------------------------------------------------------------------------
# TrackAssembler
# ---------------------------------------------------------------------------

def test_assemble_always_returns_three_tracks() -> None:
    assert len(TrackAssembler().assemble("MML@,,;")) == 3
    assert len(TrackAssembler().assemble("MML@c,d,e;")) == 3


def test_first_track_of_channel_one_carries_file_header() -> None:
    first, second, third = TrackAssembler().assemble("MML@c,,;")

    assert first == [
        MetaText(PROJECT_TEXT),
        Tempo(500000),
        SysEx(GS_RESET),
        *_setup(),
        NoteOn(1, 60, 64, time=384),
        NoteOff(1, 60, 0, time=480),
        EndOfTrack(time=576),
    ]
    assert second == [*_setup(), EndOfTrack(time=385)]
    assert third == [*_setup(), EndOfTrack(time=385)]


def test_other_channels_have_no_file_header() -> None:
    tracks = TrackAssembler(channel=2, instrument=74).assemble("MML@c,,;")
    assert tracks[0][:3] == _setup(channel=2, instrument=74)
    assert not any(isinstance(e, (MetaText, SysEx)) for track in tracks for e in track)


def test_pan_reverb_and_project_are_configurable() -> None:
    tracks = TrackAssembler(pan=0, reverb=40, project="Demo").assemble("MML@,,;")
    assert tracks[0][0] == MetaText("Demo")
    assert ControlChange(1, 10, 0, time=193) in tracks[0]
    assert ControlChange(1, 91, 40, time=194) in tracks[2]


def test_whitespace_after_separator_leaves_part_empty() -> None:
    tracks = TrackAssembler().assemble("MML@c,d, \t;")
    assert tracks[2][-1] == EndOfTrack(time=385)


def test_part_with_only_garbage_still_ends_after_one_length() -> None:
    tracks = TrackAssembler().assemble("MML@c,d,#;")
    assert tracks[2] == [*_setup(), EndOfTrack(time=480)]


def test_assemble_track_for_later_index_has_no_header() -> None:
    events = TrackAssembler().assemble_track("", 1)
    assert events == [*_setup(), EndOfTrack(time=385)]
