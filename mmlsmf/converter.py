"""MmlConverter: turns one or more MML strings into a Standard MIDI File."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from mmlsmf.errors import ChannelOverflow, InputCountMismatch
from mmlsmf.events import TrackEvent
from mmlsmf.smf_writer import SmfWriter
from mmlsmf.track_builder import DEFAULT_PAN, DEFAULT_REVERB, PROJECT_TEXT, TrackAssembler

MAX_CHANNELS: Final[int] = 16
DEFAULT_INSTRUMENT: Final[int] = 1
MAX_TEXT_BYTES: Final[int] = 255


def _check_data_byte(name: str, value: int) -> int:
    if not 0 <= value <= 127:
        raise ValueError(f"{name} must be between 0 and 127, got {value}.")
    return value


def _check_text(name: str, text: str) -> str:
    size = len(text.encode("utf-8"))
    if size > MAX_TEXT_BYTES:
        raise ValueError(
            f"{name} text must be at most {MAX_TEXT_BYTES} bytes in UTF-8, got {size}."
        )
    return text


class MmlConverter:
    """
    Converts MML scores into a format 1 MIDI file, three tracks per score.

    Score ``i`` (0-based) plays on MIDI channel ``i + 1`` with
    ``instruments[i]`` as its program. Only channel 1 carries the file
    header events (project text, initial tempo, GS reset).

    Usage:

        converter = MmlConverter(instruments=[1])
        data = converter.to_bytes(["MML@t120l8cdefg,,;"])
    """

    def __init__(
        self,
        instruments: Sequence[int] = (DEFAULT_INSTRUMENT,),
        pan: int = DEFAULT_PAN,
        reverb: int = DEFAULT_REVERB,
        project: str = PROJECT_TEXT,
    ) -> None:
        """
        Args:
            instruments: General MIDI program (0-127) for each score.
            pan:         Pan controller value for every track (64 = centre).
            reverb:      Reverb send controller value for every track.
            project:     Text written as the first event of the file.

        Raises:
            ValueError: If any program, pan or reverb value is outside 0-127,
                or the project text is longer than 255 UTF-8 bytes.
        """
        self.instruments = [_check_data_byte("Instrument", inst) for inst in instruments]
        self.pan = _check_data_byte("Pan", pan)
        self.reverb = _check_data_byte("Reverb", reverb)
        self.project = _check_text("Project", project)
        self.writer = SmfWriter()

    def build(self, mmls: Sequence[str]) -> list[list[TrackEvent]]:
        """
        Assemble the event lists of every track, in file order.

        Raises:
            InputCountMismatch: If ``mmls`` and the instruments differ in length.
            ChannelOverflow:    If there are more than 16 scores.
            GrammarMismatch:    If a string is not of the form ``MML@a,b,c;``.
        """
        if len(mmls) != len(self.instruments):
            raise InputCountMismatch(len(mmls), len(self.instruments))
        if len(mmls) > MAX_CHANNELS:
            raise ChannelOverflow(len(mmls))

        tracks: list[list[TrackEvent]] = []
        for index, (mml, instrument) in enumerate(zip(mmls, self.instruments)):
            assembler = TrackAssembler(
                channel=index + 1,
                instrument=instrument,
                pan=self.pan,
                reverb=self.reverb,
                project=self.project,
            )
            tracks.extend(assembler.assemble(mml))
        return tracks

    def to_bytes(self, mmls: Sequence[str]) -> bytes:
        """Convert the scores into the bytes of a complete MIDI file."""
        return self.writer.write(self.build(mmls))

    def export(self, mmls: Sequence[str], output_path: str) -> int:
        """
        Convert the scores and write the MIDI file to ``output_path``.

        Nothing is written when the conversion fails.

        Returns:
            Number of bytes written.

        Raises:
            ConversionError: If the input cannot be converted.
            OSError: If the output file cannot be opened for writing.
        """
        data = self.to_bytes(mmls)
        with open(output_path, "wb") as f:
            f.write(data)
        return len(data)


def convert(mml: str, instrument: int = DEFAULT_INSTRUMENT) -> bytes:
    """Convert a single ``MML@a,b,c;`` string into MIDI file bytes."""
    return MmlConverter(instruments=[instrument]).to_bytes([mml])


def convert_many(mmls: Sequence[str], instruments: Sequence[int]) -> bytes:
    """
    Convert several scores into one MIDI file, one channel per score.

    Raises:
        InputCountMismatch: If the two lists differ in length.
    """
    return MmlConverter(instruments=instruments).to_bytes(mmls)
