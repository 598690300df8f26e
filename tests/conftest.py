"""Shared fixtures for reader tests."""

import io
import pytest


@pytest.fixture
def make_file(tmp_path):
    """Write bytes or text to a file under tmp_path and return its path."""
    def _make(content, name="data.txt"):
        path = tmp_path / name
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        return path
    return _make


class ShortReadBytesIO(io.BytesIO):
    """BytesIO that returns one byte less than requested."""

    def read(self, size=-1):
        data = super().read(size)
        return data[:-1]


class UnseekableSource(io.RawIOBase):
    """Readable source whose seek always fails."""

    def readable(self):
        return True

    def seek(self, offset, whence=0):
        raise OSError("Illegal seek")


@pytest.fixture
def short_read_source():
    return ShortReadBytesIO(b"line1\nline2\n")


@pytest.fixture
def unseekable_source():
    return UnseekableSource()


class AsyncBytesSource:
    """In-memory async source with awaitable seek and read."""

    def __init__(self, data: bytes):
        self._buffer = io.BytesIO(data)

    async def seek(self, offset, whence=0):
        return self._buffer.seek(offset, whence)

    async def read(self, size=-1):
        return self._buffer.read(size)


class AsyncShortReadSource(AsyncBytesSource):
    """Async source that returns one byte less than requested."""

    async def read(self, size=-1):
        data = await super().read(size)
        return data[:-1]


class AsyncFailingReadSource(AsyncBytesSource):
    """Async source whose reads always fail."""

    async def read(self, size=-1):
        raise OSError("Input/output error")


class AsyncUnseekableSource(AsyncBytesSource):
    """Async source whose seek always fails."""

    async def seek(self, offset, whence=0):
        raise OSError("Illegal seek")


@pytest.fixture
def async_source_factory():
    """Return the async source classes keyed by behaviour."""
    return {
        "ok": AsyncBytesSource,
        "short_read": AsyncShortReadSource,
        "failing_read": AsyncFailingReadSource,
        "unseekable": AsyncUnseekableSource,
    }
