"""Reverse line readers for seekable byte sources."""

import logging
import os
from enum import Enum
from typing import BinaryIO, Iterator, List, Optional, Tuple, Union

from .errors import InvalidConfigError, LineDecodeError, ReaderIOError

DEFAULT_BUFFER_SIZE = 4096

LF_BYTE = b"\n"
CR_BYTE = b"\r"

logger = logging.getLogger(__name__)


class ReaderState(str, Enum):
    """Lifecycle of a reverse reader."""

    FRESH = "fresh"
    SCANNING = "scanning"
    EXHAUSTED = "exhausted"


class _NeedData:
    """Marker returned by the scanner when it has to be fed another chunk."""

    def __repr__(self) -> str:
        return "NEED_DATA"


NEED_DATA = _NeedData()


def validate_buffer_size(buffer_size: int) -> int:
    """
    Check that a buffer size is a positive integer.

    Args:
        buffer_size: Number of bytes fetched per backward read

    Returns:
        The validated buffer size

    Raises:
        InvalidConfigError: If the size is not a positive int
    """
    if isinstance(buffer_size, bool) or not isinstance(buffer_size, int):
        raise InvalidConfigError(f"buffer_size must be an int, got {type(buffer_size).__name__}")
    if buffer_size <= 0:
        raise InvalidConfigError(f"buffer_size must be positive, got {buffer_size}")
    return buffer_size


class LineScanner:
    """
    Backward line scanner fed with chunks taken from the end of a source.

    The scanner performs no I/O. Callers ask it for the next line with
    advance(); whenever it returns NEED_DATA they read the span given by
    next_chunk() and pass the bytes to feed(). buffer_size is expected to
    have been checked with validate_buffer_size() already.
    """

    def __init__(self, file_length: int, buffer_size: int = DEFAULT_BUFFER_SIZE):
        self.file_length = file_length
        self.buf_size = buffer_size
        self.reader_pos = file_length
        self.buf = b""
        self.buf_pos = 0
        self.state = ReaderState.FRESH

        # Pieces of the pending line, latest bytes first
        self._parts: List[bytes] = []
        # Whether the pending line is closed by a \n
        self._terminated = False

    def next_chunk(self) -> Tuple[int, int]:
        """Return (offset, size) of the chunk preceding the loaded buffer."""
        size = min(self.buf_size, self.reader_pos)
        return self.reader_pos - size, size

    def feed(self, data: bytes) -> None:
        """
        Load the chunk requested by next_chunk().

        Raises:
            ReaderIOError: If fewer bytes than requested were supplied
        """
        offset, size = self.next_chunk()
        if len(data) != size:
            raise ReaderIOError(
                f"Short read at offset {offset}: expected {size} bytes, got {len(data)}"
            )
        self.buf = data
        self.reader_pos = offset
        self.buf_pos = size

    def advance(self) -> Union[bytes, None, _NeedData]:
        """
        Scan back to the next line.

        Returns:
            The line's bytes without terminator, None once exhausted,
            or NEED_DATA when another chunk must be fed first
        """
        if self.state is ReaderState.EXHAUSTED:
            return None

        if self.state is ReaderState.FRESH:
            if self.file_length == 0:
                self.state = ReaderState.EXHAUSTED
                return None
            if not self.buf:
                return NEED_DATA
            self.state = ReaderState.SCANNING
            # A trailing newline ends the last line, it does not start an empty one
            if self.buf.endswith(LF_BYTE):
                self.buf_pos -= 1
                self._terminated = True

        while True:
            if self.buf_pos == 0:
                if self.reader_pos == 0:
                    break
                return NEED_DATA

            idx = self.buf.rfind(LF_BYTE, 0, self.buf_pos)
            if idx >= 0:
                self._parts.append(self.buf[idx + 1:self.buf_pos])
                self.buf_pos = idx
                return self._take_line()

            self._parts.append(self.buf[:self.buf_pos])
            self.buf_pos = 0

        # Start of file; an empty leading segment, bare or closed by \r\n, is not a line
        self.state = ReaderState.EXHAUSTED
        if not self._parts:
            return None
        line = self._take_line()
        return line or None

    def _take_line(self) -> bytes:
        line = b"".join(reversed(self._parts))
        self._parts = []
        if self._terminated and line.endswith(CR_BYTE):
            line = line[:-1]
        # Every line after this one is followed by the \n just found
        self._terminated = True
        return line


def source_length(source: BinaryIO) -> int:
    """
    Seek a source to its end and return its length.

    Raises:
        ReaderIOError: If the source cannot seek
    """
    try:
        return source.seek(0, os.SEEK_END)
    except (OSError, ValueError) as e:
        raise ReaderIOError(f"Cannot determine source length: {e}") from e


class RawRevLines:
    """
    Iterate the lines of a seekable byte source from last to first, as bytes.

    The source is borrowed: the reader never closes it, and nothing else
    should seek or read it while iteration is in progress.
    """

    def __init__(self, source: BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE):
        """
        Initialize the reader.

        Args:
            source: Open, seekable binary source
            buffer_size: Bytes fetched per backward read (default 4KB)

        Raises:
            InvalidConfigError: If buffer_size is not positive
            ReaderIOError: If the source length cannot be determined
        """
        validate_buffer_size(buffer_size)
        self._source = source
        self._scanner = LineScanner(source_length(source), buffer_size)
        logger.debug(
            f"[RevLines] opened source of {self._scanner.file_length} bytes "
            f"(buffer_size={buffer_size})"
        )

    @property
    def state(self) -> ReaderState:
        return self._scanner.state

    @property
    def file_length(self) -> int:
        return self._scanner.file_length

    @property
    def reader_pos(self) -> int:
        return self._scanner.reader_pos

    @property
    def buf_size(self) -> int:
        return self._scanner.buf_size

    @property
    def buf_pos(self) -> int:
        return self._scanner.buf_pos

    def _read_chunk(self) -> bytes:
        offset, size = self._scanner.next_chunk()
        try:
            self._source.seek(offset)
            return self._source.read(size)
        except (OSError, ValueError) as e:
            raise ReaderIOError(f"Failed to read {size} bytes at offset {offset}: {e}") from e

    def next_line(self) -> Optional[bytes]:
        """
        Return the next line in reverse order.

        Returns:
            Line bytes without terminator, or None once exhausted

        Raises:
            ReaderIOError: If a seek or read fails
        """
        if self._scanner.state is ReaderState.EXHAUSTED:
            return None

        while True:
            result = self._scanner.advance()
            if result is not NEED_DATA:
                if self._scanner.state is ReaderState.EXHAUSTED:
                    logger.debug(f"[RevLines] reached start of source ({self.file_length} bytes)")
                return result
            self._scanner.feed(self._read_chunk())

    def __iter__(self) -> Iterator[bytes]:
        return self

    def __next__(self) -> bytes:
        line = self.next_line()
        if line is None:
            raise StopIteration
        return line


class RevLines(RawRevLines):
    """
    Iterate the lines of a seekable byte source from last to first, as text.

    A line that fails to decode raises LineDecodeError for that step only;
    calling next() again continues with the preceding line.
    """

    def __init__(
        self,
        source: BinaryIO,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        encoding: str = "utf-8",
        errors: str = "strict"
    ):
        """
        Initialize the reader.

        Args:
            source: Open, seekable binary source
            buffer_size: Bytes fetched per backward read (default 4KB)
            encoding: Text encoding of the source
            errors: Decoding error handler, as for bytes.decode()
        """
        super().__init__(source, buffer_size)
        self.encoding = encoding
        self.errors = errors

    def get_line(self) -> Optional[str]:
        """
        Return the next decoded line, or None once exhausted.

        Raises:
            LineDecodeError: If the line is not valid text
            ReaderIOError: If a seek or read fails
        """
        raw = self.next_line()
        if raw is None:
            return None
        return decode_line(raw, self.encoding, self.errors)

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        line = self.get_line()
        if line is None:
            raise StopIteration
        return line


def decode_line(raw: bytes, encoding: str, errors: str) -> str:
    """Decode a line, wrapping decoding failures in LineDecodeError."""
    try:
        return raw.decode(encoding, errors)
    except UnicodeDecodeError as e:
        raise LineDecodeError(raw, str(e)) from e
