"""Error kinds raised by the checksum domain."""

from pathlib import Path
from typing import Union


class ChecksumError(Exception):
    """Base class for all checksum errors."""


class InvalidAlgorithmError(ChecksumError):
    def __init__(self, name: str):
        super().__init__(f"Invalid algorithm '{name}'.")
        self.name = name


class InvalidFileError(ChecksumError):
    def __init__(self, path: Union[str, Path]):
        super().__init__(f"'{path}' is inaccessible or not a file.")
        self.path = path


class UnknownAlgorithmError(ChecksumError):
    def __init__(self, bits: int):
        super().__init__(f"Cannot guess algorithm with {bits} bits hash value.")
        self.bits = bits


class InvalidDigestFormatError(ChecksumError):
    def __init__(self, value: str):
        super().__init__(f"Hash value '{value}' is invalid.")
        self.value = value


class UnknownError(ChecksumError):
    """Raised when the result channel yields fewer results than were submitted."""

    def __init__(self):
        super().__init__("Unknown error.")
