"""File reading utilities."""

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator, Optional, Pattern, Union

from ..config import settings
from ..reader import RevLines

logger = logging.getLogger(__name__)


def reverse_readline(
    file_path: Union[str, Path],
    buf_size: Optional[int] = None,
    encoding: Optional[str] = None,
    errors: Optional[str] = None,
    skip_empty: bool = False
) -> Iterator[str]:
    """
    Read a file line by line in reverse order (from end to beginning).

    Memory efficient - only loads buf_size bytes at a time, plus the line
    being assembled. Unset options fall back to the global settings.

    Args:
        file_path: Path to the file
        buf_size: Size of buffer for reading chunks
        encoding: Text encoding of the file
        errors: Decoding error handler
        skip_empty: If True, empty lines are not yielded

    Yields:
        Lines from the file in reverse order (newest first)
    """
    file_path = Path(file_path)

    if not file_path.exists():
        logger.debug(f"[file_reader] {file_path} does not exist, nothing to read")
        return

    with open(file_path, 'rb') as f:
        rev_lines = RevLines(
            f,
            buffer_size=settings.buffer_size if buf_size is None else buf_size,
            encoding=encoding or settings.encoding,
            errors=errors or settings.errors
        )
        for line in rev_lines:
            if skip_empty and not line:
                continue
            yield line


def read_last_n_lines(
    file_path: Union[str, Path],
    n: int,
    buf_size: Optional[int] = None,
    reverse: bool = True,
    **kwargs
) -> list[str]:
    """
    Read the last N lines from a file efficiently.

    Args:
        file_path: Path to the file
        n: Number of lines to read
        buf_size: Size of buffer for reading chunks
        reverse: If True, return newest first; if False, return oldest first
        **kwargs: Passed through to reverse_readline

    Returns:
        List of last N lines
    """
    lines = []
    if n <= 0:
        return lines

    with closing(reverse_readline(file_path, buf_size, **kwargs)) as rev_lines:
        for line in rev_lines:
            lines.append(line)
            if len(lines) >= n:
                break

    # reverse=False: oldest first (chronological order)
    if not reverse:
        lines.reverse()

    return lines


def find_last_matching(
    file_path: Union[str, Path],
    pattern: Union[str, Pattern[str]],
    buf_size: Optional[int] = None,
    **kwargs
) -> Optional[str]:
    """
    Find the most recent line matching a regular expression.

    Args:
        file_path: Path to the file
        pattern: Regex string or compiled pattern, applied with search()
        buf_size: Size of buffer for reading chunks
        **kwargs: Passed through to reverse_readline

    Returns:
        The last matching line, or None if no line matches
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern

    with closing(reverse_readline(file_path, buf_size, **kwargs)) as rev_lines:
        for line in rev_lines:
            if regex.search(line):
                return line

    return None
