"""Unit tests for track event encodings."""

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


def test_meta_text_encoding() -> None:
    assert MetaText("abc").to_bytes() == bytes.fromhex("ff0103616263")


def test_tempo_encoding_is_24_bit_big_endian() -> None:
    assert Tempo(500000).to_bytes() == bytes.fromhex("ff510307a120")
    assert Tempo(60_000_000 // 190).to_bytes() == bytes.fromhex("ff510304d18d")


def test_sysex_encoding_prefixes_length() -> None:
    data = bytes([0x41, 0x10, 0xF7])
    assert SysEx(data).to_bytes() == bytes.fromhex("f0034110f7")


def test_program_change_encoding() -> None:
    assert ProgramChange(1, 26).to_bytes() == bytes.fromhex("c01a")


def test_control_change_encoding() -> None:
    assert ControlChange(2, 10, 64).to_bytes() == bytes.fromhex("b10a40")


def test_note_on_and_off_encoding() -> None:
    assert NoteOn(1, 60, 64).to_bytes() == bytes.fromhex("903c40")
    assert NoteOff(1, 60, 0).to_bytes() == bytes.fromhex("803c00")


def test_channel_is_folded_to_zero_based_nibble() -> None:
    assert NoteOn(16, 60, 64).to_bytes()[0] == 0x9F
    assert ProgramChange(10, 0).to_bytes()[0] == 0xC9


def test_end_of_track_encoding() -> None:
    assert EndOfTrack().to_bytes() == bytes.fromhex("ff2f00")


def test_time_defaults_to_zero_and_is_keyword_only() -> None:
    assert NoteOn(1, 60, 64).time == 0
    assert NoteOn(1, 60, 64, time=384).time == 384


def test_events_compare_by_value_and_time() -> None:
    assert NoteOff(1, 60, 0, time=480) == NoteOff(1, 60, 0, time=480)
    assert NoteOff(1, 60, 0, time=480) != NoteOff(1, 60, 0, time=481)
    assert NoteOff(1, 60, 0) != NoteOn(1, 60, 0)


def test_describe_strings() -> None:
    assert MetaText("Hi").describe() == "Text: Hi"
    assert Tempo(500000).describe() == "Tempo: 500000"
    assert SysEx(bytes([0x41, 0xF7])).describe() == "SysEx: 41 f7"
    assert ProgramChange(1, 5).describe() == "ProgramChange: ch=1, program=5"
    assert ControlChange(1, 91, 0).describe() == "ControlChange: ch=1, cc=91, val=0"
    assert NoteOn(1, 60, 64).describe() == "NoteOn: ch=1, note=60, vel=64"
    assert NoteOff(1, 60, 0).describe() == "NoteOff: ch=1, note=60, vel=0"
    assert EndOfTrack().describe() == "EndOfTrack"
