"""Exact-path exclusion of files from checksum generation."""

import logging
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Union

from .hash_constants import STDIO_SENTINEL

logger = logging.getLogger(__name__)


def canonicalize(path: Union[str, Path]) -> Path:
    """
    Resolve a path to its absolute, symlink-free form.

    Raises:
        OSError: If the path does not exist or cannot be resolved
    """
    try:
        return Path(path).resolve(strict=True)
    except RuntimeError as e:
        # Symlink loops raise RuntimeError before Python 3.13
        raise OSError(str(e)) from e


class ExclusionFilter:
    """
    Set of canonical paths that generation must skip.

    Membership is exact equality of canonical paths. A directory in the set
    does not exclude the files below it.
    """

    def __init__(self, exclusions: Iterable[str], manifest_path: Optional[str] = None):
        paths = list(exclusions)
        if manifest_path is not None and manifest_path != STDIO_SENTINEL:
            paths.append(manifest_path)

        excluded = set()
        for path in paths:
            if path == STDIO_SENTINEL:
                continue
            try:
                excluded.add(canonicalize(path))
            except OSError as e:
                # Missing paths are simply not excluded
                logger.debug("Ignoring exclusion %s: %s", path, e)
        self._excluded: FrozenSet[Path] = frozenset(excluded)

    @property
    def excluded(self) -> FrozenSet[Path]:
        return self._excluded

    def __len__(self) -> int:
        return len(self._excluded)

    def is_excluded(self, candidate: Union[str, Path]) -> bool:
        try:
            resolved = canonicalize(candidate)
        except OSError as e:
            logger.warning("Cannot resolve %s: %s", candidate, e)
            return False
        return resolved in self._excluded
