"""Read files line by line from the end to the beginning."""

from .errors import RevLinesError, ReaderIOError, InvalidConfigError, LineDecodeError
from .reader import DEFAULT_BUFFER_SIZE, LineScanner, RawRevLines, ReaderState, RevLines
from .aio import AsyncRawRevLines, AsyncRevLines
from .utils.logger import get_app_logger

__version__ = "1.0.0"

# Library logger: level and optional log file come from REVLINES_LOG_LEVEL / REVLINES_LOG_FILE
get_app_logger()

__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "LineScanner",
    "RawRevLines",
    "RevLines",
    "ReaderState",
    "AsyncRawRevLines",
    "AsyncRevLines",
    "RevLinesError",
    "ReaderIOError",
    "InvalidConfigError",
    "LineDecodeError",
]
