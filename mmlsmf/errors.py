"""Exceptions raised when an MML conversion cannot complete."""


class ConversionError(ValueError):
    """Base class for every failure that aborts a conversion."""


class InputCountMismatch(ConversionError):
    """The number of MML strings differs from the number of instruments."""

    def __init__(self, mml_count: int, inst_count: int) -> None:
        super().__init__(
            f"Got {mml_count} MML string(s) but {inst_count} instrument(s)."
        )
        self.mml_count = mml_count
        self.inst_count = inst_count


class GrammarMismatch(ConversionError):
    """The input is not of the form ``MML@<part>,<part>,<part>;``."""

    def __init__(self, mml: str) -> None:
        preview = mml if len(mml) <= 40 else mml[:37] + "..."
        super().__init__(f"Not a three-part MML string: {preview!r}")
        self.mml = mml


class EmptyTrackList(ConversionError):
    """The MML grammar matched but produced no track parts."""

    def __init__(self) -> None:
        super().__init__("Track is empty.")


class EventEncodingFailure(ConversionError):
    """An event serialized to zero bytes."""

    def __init__(self, description: str) -> None:
        super().__init__(f"Event convert error: {description}")
        self.description = description


class ChannelOverflow(ConversionError):
    """More scores were given than there are MIDI channels."""

    def __init__(self, score_count: int) -> None:
        super().__init__(
            f"{score_count} scores given; at most 16 fit on MIDI channels 1-16."
        )
        self.score_count = score_count
