import sys
from typing import Iterable, Iterator, Optional, TextIO

from domain.hash_constants import STDIO_SENTINEL
from domain.manifest import ManifestEntry
from domain.manifest_repository import ManifestRepository
from infrastructure.text_stream import FILE_NAME_ERRORS, read_lines, write_text


class FileManifestRepository(ManifestRepository):
    """
    Manifest stored in a UTF-8 text file, or on stdin/stdout for '-'.

    Bytes in file names that are not valid UTF-8 are written and read back
    unchanged.
    """

    def __init__(self, path: str, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self._path = str(path)
        self._stdin = stdin
        self._stdout = stdout

    @property
    def path(self) -> str:
        return self._path

    @property
    def is_stdio(self) -> bool:
        return self._path == STDIO_SENTINEL

    def read_lines(self) -> Iterator[str]:
        if self.is_stdio:
            yield from read_lines(self._stdin or sys.stdin)
            return

        with open(self._path, "r", encoding="utf-8", errors=FILE_NAME_ERRORS) as f:
            yield from f

    def write_entries(self, entries: Iterable[ManifestEntry]) -> int:
        if self.is_stdio:
            out = self._stdout or sys.stdout
            count = 0
            for entry in entries:
                write_text(out, entry.to_line())
                count += 1
            out.flush()
            return count

        with open(self._path, "w", encoding="utf-8", errors=FILE_NAME_ERRORS, newline="\n") as f:
            count = 0
            for entry in entries:
                f.write(entry.to_line())
                count += 1
            return count
