"""
Line I/O for text that may carry file names which are not valid UTF-8.

Such names arrive from os.walk as str with surrogate escapes. They are
written back as their original bytes and read back the same way, so a
manifest round-trips every name the file system can hold.
"""

import os
from typing import Iterator, TextIO

# Error handler that maps undecodable bytes to lone surrogates and back
FILE_NAME_ERRORS = "surrogateescape"


def write_text(stream: TextIO, text: str) -> None:
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        # In-memory streams hold surrogates as they are
        stream.write(text)
        return
    stream.flush()
    buffer.write(os.fsencode(text))


def read_lines(stream: TextIO) -> Iterator[str]:
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        yield from stream
        return
    for raw in buffer:
        yield os.fsdecode(raw)
