"""mmlsmf: converts Music Macro Language text into Standard MIDI Files."""

from mmlsmf.converter import MmlConverter, convert, convert_many
from mmlsmf.errors import (
    ChannelOverflow,
    ConversionError,
    EmptyTrackList,
    EventEncodingFailure,
    GrammarMismatch,
    InputCountMismatch,
)

__version__ = "1.0.0"

__all__ = [
    "ChannelOverflow",
    "ConversionError",
    "EmptyTrackList",
    "EventEncodingFailure",
    "GrammarMismatch",
    "InputCountMismatch",
    "MmlConverter",
    "__version__",
    "convert",
    "convert_many",
]
