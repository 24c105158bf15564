from abc import ABC, abstractmethod
from typing import Iterable, Iterator

from .manifest import ManifestEntry


class ManifestRepository(ABC):
    """
    Abstract repository interface for reading and writing a manifest.

    A manifest is either a real file or one of the standard streams,
    selected by the '-' sentinel path.
    """

    @property
    @abstractmethod
    def path(self) -> str:
        """The manifest path as configured, possibly the '-' sentinel."""
        pass

    @property
    @abstractmethod
    def is_stdio(self) -> bool:
        """True when the manifest is stdin/stdout rather than a file."""
        pass

    @abstractmethod
    def read_lines(self) -> Iterator[str]:
        """
        Yield the manifest's lines in order.

        Raises:
            OSError: If the manifest cannot be opened or read
        """
        pass

    @abstractmethod
    def write_entries(self, entries: Iterable[ManifestEntry]) -> int:
        """
        Write the entries in the given order, replacing any previous content.

        Args:
            entries: Entries to write, already sorted

        Returns:
            Number of entries written

        Raises:
            OSError: If the manifest cannot be opened or written
        """
        pass
