"""Domain model for manifest entries and the manifest line format."""

import os
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .digest import encode_hex
from .errors import InvalidDigestFormatError

_DOT_PREFIX = "." + os.sep


@dataclass(frozen=True)
class ManifestEntry:
    """A single manifest line: a file path and its hex digest."""
    path: str
    digest: str

    @classmethod
    def from_digest(cls, path: str, digest: bytes) -> "ManifestEntry":
        return cls(path=strip_dot_prefix(path), digest=encode_hex(digest))

    def to_line(self) -> str:
        """Format as '<digest>  <path>' followed by a newline."""
        return f"{self.digest}  {self.path}\n"


def strip_dot_prefix(path: str) -> str:
    """Remove a single leading './' from a path, if present."""
    if path.startswith(_DOT_PREFIX):
        return path[len(_DOT_PREFIX):]
    return path


def parse_line(line: str) -> Optional[ManifestEntry]:
    """
    Parse one manifest line.

    The first whitespace-separated token is the digest and the second the
    path; any further tokens are ignored. The digest is not validated here.

    Returns:
        The entry, or None for a blank line

    Raises:
        InvalidDigestFormatError: If the line has only one token
    """
    parts = line.split()
    if not parts:
        return None
    if len(parts) < 2:
        raise InvalidDigestFormatError(line.rstrip("\r\n"))
    return ManifestEntry(path=parts[1], digest=parts[0])


def sort_entries(entries: Iterable[ManifestEntry]) -> List[ManifestEntry]:
    """Sort entries by the byte encoding of their path."""
    return sorted(entries, key=lambda entry: os.fsencode(entry.path))
