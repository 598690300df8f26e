"""Exceptions raised by the reverse line readers."""


class RevLinesError(Exception):
    """Base class for all reader errors."""


class ReaderIOError(RevLinesError, OSError):
    """The source could not be measured, seeked or read."""


class InvalidConfigError(RevLinesError, ValueError):
    """A reader option is out of range."""


class LineDecodeError(RevLinesError, ValueError):
    """
    A single line could not be decoded as text.

    The reader has already moved past the line, so iteration may continue.

    Attributes:
        raw: The undecoded bytes of the line
    """

    def __init__(self, raw: bytes, reason: str):
        super().__init__(f"Failed to decode line ({len(raw)} bytes): {reason}")
        self.raw = raw
