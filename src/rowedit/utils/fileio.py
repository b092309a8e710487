"""
Reading and writing buffer contents as lists of lines.
"""

import os
from typing import List, Tuple

from .logging_config import logger


def read_lines(filename: str) -> Tuple[List[str], int]:
    """
    Read a text file into lines, creating it if it does not exist.

    Returns:
        The lines without line terminators and the file size in bytes
    """

    if not os.path.exists(filename):
        logger.info("Creating new file %s", filename)
        open(filename, 'a', encoding='utf-8').close()

    with open(filename, 'r', encoding='utf-8', errors='replace', newline='') as f:
        contents = f.read()

    return split_lines(contents), len(contents.encode('utf-8'))


def split_lines(contents: str) -> List[str]:
    """Split on ``\\n`` and ``\\r\\n`` only; other control characters stay in the line."""

    if not contents:
        return []

    lines = contents.split('\n')
    if lines[-1] == '':
        lines.pop()

    return [line[:-1] if line.endswith('\r') else line for line in lines]


def write_lines(filename: str, lines: List[str]) -> int:
    """
    Write lines joined by newlines, replacing the file's previous contents.

    Returns:
        The number of bytes written
    """

    data = '\n'.join(lines).encode('utf-8')
    with open(filename, 'wb') as f:
        f.write(data)

    logger.info("Wrote %d bytes to %s", len(data), filename)
    return len(data)
