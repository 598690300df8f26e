"""Async reverse line readers, e.g. over aiofiles handles."""

import logging
import os
from typing import Any, AsyncIterator, Optional

from .errors import ReaderIOError
from .reader import DEFAULT_BUFFER_SIZE, NEED_DATA, LineScanner, ReaderState, decode_line, validate_buffer_size

logger = logging.getLogger(__name__)


class AsyncRawRevLines:
    """
    Async counterpart of RawRevLines.

    The source must provide awaitable seek(offset, whence) and read(size),
    as returned by aiofiles.open(path, "rb"). Build instances with create().
    """

    def __init__(self, source: Any, scanner: LineScanner):
        self._source = source
        self._scanner = scanner

    @classmethod
    async def create(cls, source: Any, buffer_size: int = DEFAULT_BUFFER_SIZE, **kwargs):
        """
        Measure the source and return a reader positioned at its end.

        Args:
            source: Open async binary source
            buffer_size: Bytes fetched per backward read (default 4KB)

        Raises:
            InvalidConfigError: If buffer_size is not positive
            ReaderIOError: If the source length cannot be determined
        """
        validate_buffer_size(buffer_size)
        try:
            file_length = await source.seek(0, os.SEEK_END)
        except (OSError, ValueError) as e:
            raise ReaderIOError(f"Cannot determine source length: {e}") from e

        logger.debug(f"[AsyncRevLines] opened source of {file_length} bytes (buffer_size={buffer_size})")
        return cls(source, LineScanner(file_length, buffer_size), **kwargs)

    @property
    def state(self) -> ReaderState:
        return self._scanner.state

    @property
    def file_length(self) -> int:
        return self._scanner.file_length

    async def _read_chunk(self) -> bytes:
        offset, size = self._scanner.next_chunk()
        try:
            await self._source.seek(offset)
            return await self._source.read(size)
        except (OSError, ValueError) as e:
            raise ReaderIOError(f"Failed to read {size} bytes at offset {offset}: {e}") from e

    async def next_line(self) -> Optional[bytes]:
        """Return the next line's bytes in reverse order, or None once exhausted."""
        if self._scanner.state is ReaderState.EXHAUSTED:
            return None

        while True:
            result = self._scanner.advance()
            if result is not NEED_DATA:
                if self._scanner.state is ReaderState.EXHAUSTED:
                    logger.debug(f"[AsyncRevLines] reached start of source ({self.file_length} bytes)")
                return result
            self._scanner.feed(await self._read_chunk())

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self

    async def __anext__(self) -> bytes:
        line = await self.next_line()
        if line is None:
            raise StopAsyncIteration
        return line


class AsyncRevLines(AsyncRawRevLines):
    """Async counterpart of RevLines, yielding decoded lines."""

    def __init__(self, source: Any, scanner: LineScanner, encoding: str = "utf-8", errors: str = "strict"):
        super().__init__(source, scanner)
        self.encoding = encoding
        self.errors = errors

    async def get_line(self) -> Optional[str]:
        """
        Return the next decoded line, or None once exhausted.

        Raises:
            LineDecodeError: If the line is not valid text
            ReaderIOError: If a seek or read fails
        """
        raw = await self.next_line()
        if raw is None:
            return None
        return decode_line(raw, self.encoding, self.errors)

    def __aiter__(self) -> AsyncIterator[str]:
        return self

    async def __anext__(self) -> str:
        line = await self.get_line()
        if line is None:
            raise StopAsyncIteration
        return line
