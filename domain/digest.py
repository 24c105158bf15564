"""Digest engine: stream files through a hash algorithm and compare digests."""

import os
import string
from pathlib import Path
from typing import Optional, Tuple, Union

from .algorithm import Algorithm, infer_algorithm
from .errors import InvalidDigestFormatError, InvalidFileError
from .hash_constants import BLOCK_SIZE

PathLike = Union[str, Path]

_HEX_DIGITS = frozenset(string.hexdigits)


def compute_digest(file_path: PathLike, algorithm: Algorithm) -> bytes:
    """
    Calculates the digest of a file's content in blocks.

    Raises:
        OSError: If the file cannot be opened or read
    """
    hasher = algorithm.new_hasher()
    with open(file_path, "rb") as f:
        while True:
            chunk = f.read(BLOCK_SIZE)
            if not chunk:
                break
            hasher.update(chunk)
    return hasher.digest()


def encode_hex(digest: bytes) -> str:
    return digest.hex()


def decode_hex(value: str) -> bytes:
    """
    Decode a hex digest string into bytes.

    Upper-case digits are accepted; anything else that is not a hex digit,
    or an odd number of characters, is rejected.

    Raises:
        InvalidDigestFormatError: If the string is not a valid hex digest
    """
    if len(value) % 2 != 0 or not _HEX_DIGITS.issuperset(value):
        raise InvalidDigestFormatError(value)
    return bytes.fromhex(value)


def compute_checksum(file_path: str, algorithm: Algorithm) -> Tuple[str, bytes]:
    """
    Generation unit of work: digest one regular file.

    Returns:
        The path as given and its digest

    Raises:
        InvalidFileError: If the path is a directory or not a regular file
        OSError: If reading the file fails
    """
    if os.path.isdir(file_path) or not os.path.isfile(file_path):
        raise InvalidFileError(file_path)
    return file_path, compute_digest(file_path, algorithm)


def verify_checksum(
    file_path: str,
    expected: str,
    algorithm: Optional[Algorithm] = None
) -> Tuple[str, bool]:
    """
    Verification unit of work: recompute a file's digest and compare it.

    When no algorithm is given it is inferred from the length of the
    expected digest.

    Returns:
        The path as given and whether the digests are byte-for-byte equal

    Raises:
        InvalidDigestFormatError: If the expected digest is not valid hex
        UnknownAlgorithmError: If the algorithm cannot be inferred
        OSError: If reading the file fails
    """
    expected_bytes = decode_hex(expected)
    if algorithm is None:
        algorithm = infer_algorithm(len(expected_bytes))
    actual = compute_digest(file_path, algorithm)
    return file_path, actual == expected_bytes
