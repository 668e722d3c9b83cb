"""
Standard input capture.

Sources can be piped into runway (`echo 'println(1)' | runway run -`). The
bytes are read up front and handed to input resolution.
"""

from __future__ import annotations

import logging
import sys
from typing import BinaryIO

logger = logging.getLogger(__name__)

CHUNK_SIZE = 16 * 1024


def read_stdin(stream: BinaryIO | None = None) -> bytes | None:
    """
    Read everything available on standard input.

    Args:
        stream: Binary stream to read (defaults to sys.stdin's buffer)

    Returns:
        The bytes read, or None when there is no stdin or it is a terminal
    """
    if stream is None:
        stdin = sys.stdin
        if stdin is None or stdin.isatty():
            logger.debug("No stdin available")
            return None
        stream = stdin.buffer

    logger.debug("Reading stdin")
    chunks: list[bytes] = []
    while True:
        chunk = stream.read(CHUNK_SIZE)
        if not chunk:
            break
        chunks.append(chunk)
    result = b"".join(chunks)
    logger.debug("Done reading stdin (%d B)", len(result))
    return result


__all__ = ["CHUNK_SIZE", "read_stdin"]
