"""
Lazy line reading over plain or gzip-compressed text files.
"""

import gzip
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def open_binary(path):
    """Open a file for binary reading, decompressing when it ends in .gz"""
    path = Path(path)
    if path.suffix == '.gz':
        return gzip.open(path, 'rb')
    return open(path, 'rb')


def read_lines(path):
    """
    Yield the lines of a UTF-8 text file one at a time.

    The file is opened eagerly so that a missing or unreadable file raises
    before the first line is requested. A line that fails to decode ends the
    stream: it and every line after it are dropped without an error.

    Args:
        path: Path to a text file, gzip-compressed if it has a .gz extension

    Yields:
        Each line as a str, including its trailing newline if present
    """
    f = open_binary(path)
    return _iter_lines(f, path)


def _iter_lines(f, path):
    with f:
        line_num = 0
        for raw in f:
            try:
                line = raw.decode('utf-8')
            except UnicodeDecodeError as e:
                logger.debug(f"Stopping read of {path} at line {line_num}: {e}")
                return
            line_num += 1
            yield line
