"""mmlsmf CLI entry point."""

import sys
from pathlib import Path
from typing import NoReturn

import click

from mmlsmf import __version__
from mmlsmf.converter import DEFAULT_INSTRUMENT, MmlConverter
from mmlsmf.dump import hex_dump, to_text
from mmlsmf.errors import ConversionError
from mmlsmf.track_builder import DEFAULT_PAN, DEFAULT_REVERB

DEFAULT_OUTPUT = "output.mid"


def _read_scores(scores: tuple[str, ...]) -> list[str]:
    """Resolve ``@path`` arguments to the text of the named file."""
    resolved = []
    for score in scores:
        if score.startswith("@"):
            resolved.append(Path(score[1:]).read_text(encoding="utf-8"))
        else:
            resolved.append(score)
    return resolved


def _resolve_instruments(instruments: tuple[int, ...], score_count: int) -> list[int]:
    """A single instrument (or none) applies to every score."""
    if not instruments:
        return [DEFAULT_INSTRUMENT] * score_count
    if len(instruments) == 1:
        return list(instruments) * score_count
    return list(instruments)


def _fail(message: str) -> NoReturn:
    click.echo(f"  ERROR: {message}", err=True)
    sys.exit(1)


# ── Shared options ─────────────────────────────────────────────────────────────

_scores_argument = click.argument("scores", nargs=-1, required=True, metavar="MML...")
_instrument_option = click.option(
    "--instrument",
    "-i",
    "instruments",
    type=click.IntRange(0, 127),
    multiple=True,
    metavar="N",
    help=(
        "General MIDI program for each score, in order. "
        f"Give once to use the same program for every score. [default: {DEFAULT_INSTRUMENT}]"
    ),
)
_pan_option = click.option(
    "--pan",
    type=click.IntRange(0, 127),
    default=DEFAULT_PAN,
    show_default=True,
    help="Pan controller value for every track (64 = centre).",
)
_reverb_option = click.option(
    "--reverb",
    type=click.IntRange(0, 127),
    default=DEFAULT_REVERB,
    show_default=True,
    help="Reverb send controller value for every track.",
)


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="mmlsmf")
def main() -> None:
    """mmlsmf: Music Macro Language to Standard MIDI File converter."""


# ── convert subcommand ─────────────────────────────────────────────────────────

@main.command()
@_scores_argument
@_instrument_option
@click.option(
    "--output",
    "-o",
    default=DEFAULT_OUTPUT,
    show_default=True,
    metavar="PATH",
    help="Destination MIDI file path.",
)
@_pan_option
@_reverb_option
@click.option("--hex", "show_hex", is_flag=True, help="Print a hex dump of the written bytes.")
def convert(
    scores: tuple[str, ...],
    instruments: tuple[int, ...],
    output: str,
    pan: int,
    reverb: int,
    show_hex: bool,
) -> None:
    """
    Convert MML scores into a single MIDI file.

    Each MML argument is a string of the form MML@part1,part2,part3; or
    @FILE to read it from a file. Every score becomes three tracks on its
    own MIDI channel.

    \b
    Examples:
      mmlsmf convert "MML@t120l4cdefgab>c4.,,;"
      mmlsmf convert "MML@t190l8cdefgab>c4.,l8<cdefgab>c4.,l8>cdefgab>c4.;" -o scale.mid
      mmlsmf convert @melody.mml @bass.mml -i 1 -i 33 -o song.mid
    """
    click.echo(f"mmlsmf v{__version__}")

    click.echo("[1/3] Reading MML...")
    try:
        mmls = _read_scores(scores)
    except (OSError, UnicodeDecodeError) as exc:
        _fail(f"Could not read MML file: {exc}")
    programs = _resolve_instruments(instruments, len(mmls))
    click.echo(f"      Scores : {len(mmls)}  |  Instruments: {', '.join(map(str, programs))}")

    click.echo("[2/3] Converting to MIDI events...")
    try:
        converter = MmlConverter(instruments=programs, pan=pan, reverb=reverb)
        tracks = converter.build(mmls)
    except ConversionError as exc:
        _fail(f"Could not convert MML: {exc}")
    click.echo(f"      Tracks : {len(tracks)}")

    click.echo(f"[3/3] Writing MIDI file → '{output}'...")
    try:
        size = converter.export(mmls, output)
    except ConversionError as exc:
        _fail(f"Could not convert MML: {exc}")
    except OSError as exc:
        _fail(f"Could not write MIDI file: {exc}")

    if show_hex:
        click.echo()
        click.echo(hex_dump(Path(output).read_bytes()))

    click.echo()
    click.echo(f"Done!  Generated '{output}' ({size} bytes).")


# ── dump subcommand ────────────────────────────────────────────────────────────

@main.command()
@_scores_argument
@_instrument_option
@_pan_option
@_reverb_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "hex"], case_sensitive=False),
    default="text",
    show_default=True,
    help="text: mf2t-style event listing. hex: the MIDI file bytes.",
)
def dump(
    scores: tuple[str, ...],
    instruments: tuple[int, ...],
    pan: int,
    reverb: int,
    output_format: str,
) -> None:
    """
    Print the events or bytes MML scores convert to, without writing a file.

    \b
    Examples:
      mmlsmf dump "MML@c,,;"
      mmlsmf dump "MML@l8cdef,,;" --format hex
    """
    try:
        mmls = _read_scores(scores)
    except (OSError, UnicodeDecodeError) as exc:
        _fail(f"Could not read MML file: {exc}")
    programs = _resolve_instruments(instruments, len(mmls))

    try:
        converter = MmlConverter(instruments=programs, pan=pan, reverb=reverb)
        if output_format.lower() == "hex":
            content = hex_dump(converter.to_bytes(mmls))
        else:
            content = to_text(converter.build(mmls))
    except ConversionError as exc:
        _fail(f"Could not convert MML: {exc}")

    click.echo(content)
