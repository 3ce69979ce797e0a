"""Tokenizer: splits one MML track into control and note tokens."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

CONTROL_OPS: Final[str] = "lotv<>"

_WHITESPACE = re.compile(r"\s+")

# Longer literals read as 0.
_MAX_DIGITS: Final[int] = 9

# Control tokens never carry an accidental; note tokens may.
_TOKEN = re.compile(
    r"(?P<cop>[lotvLOTV<>])(?P<cdigits>[0-9]*)(?P<cdot>\.?)(?P<ctie>&?)"
    r"|(?P<nop>[a-gnrA-GNR])(?P<acc>[+#-]?)(?P<ndigits>[0-9]*)(?P<ndot>\.?)(?P<ntie>&?)"
)


@dataclass(frozen=True)
class Token:
    """
    One lexical unit of an MML track.

    Attributes:
        op:         Lower-cased command letter (``l o t v < >`` or
                    ``a``-``g``, ``n``, ``r``).
        accidental: ``"+"``, ``"#"``, ``"-"`` or ``""``.
        digits:     The raw digit run, possibly empty.
        dotted:     True when a ``.`` follows the digits.
        tied:       True when the token ends with ``&``.
        text:       The exact source text of the token.
    """

    op: str
    accidental: str = ""
    digits: str = ""
    dotted: bool = False
    tied: bool = False
    text: str = ""

    @property
    def is_control(self) -> bool:
        return self.op in CONTROL_OPS

    @property
    def control_value(self) -> int:
        """
        Numeric argument of a control token.

        Missing digits read as 0, as do digit runs that start with 0 or are
        longer than nine digits.
        """
        if not self.digits or self.digits[0] == "0":
            return 0
        return _decimal(self.digits)

    @property
    def note_value(self) -> int | None:
        """Numeric argument of a note token, or None when absent."""
        if not self.digits:
            return None
        return _decimal(self.digits)


def _decimal(digits: str) -> int:
    if len(digits) > _MAX_DIGITS:
        return 0
    return int(digits)


def clean_track(track: str) -> str:
    """Remove every whitespace character from a track string."""
    return _WHITESPACE.sub("", track)


def tokenize(track: str) -> list[Token]:
    """
    Split a track into tokens, left to right.

    Matching is greedy and non-overlapping. Characters that start neither a
    control nor a note token are skipped without error.

    Args:
        track: One part of an MML string. Whitespace is removed first.

    Returns:
        Tokens in source order.
    """
    tokens: list[Token] = []
    for match in _TOKEN.finditer(clean_track(track)):
        if match.group("cop"):
            tokens.append(
                Token(
                    op=match.group("cop").lower(),
                    digits=match.group("cdigits"),
                    dotted=bool(match.group("cdot")),
                    tied=bool(match.group("ctie")),
                    text=match.group(0),
                )
            )
        else:
            tokens.append(
                Token(
                    op=match.group("nop").lower(),
                    accidental=match.group("acc"),
                    digits=match.group("ndigits"),
                    dotted=bool(match.group("ndot")),
                    tied=bool(match.group("ntie")),
                    text=match.group(0),
                )
            )
    return tokens
