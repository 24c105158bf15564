"""Supported hash algorithms and algorithm detection."""

import hashlib
from enum import Enum

from .errors import InvalidAlgorithmError, UnknownAlgorithmError


class Algorithm(Enum):
    """
    Closed set of supported hash algorithms.

    Each member carries the hashlib constructor name and the digest size in
    bytes. The six digest sizes are pairwise distinct, which is what makes
    inference from a digest's length unambiguous.
    """

    MD5 = ("md5", 16)
    SHA1 = ("sha1", 20)
    SHA224 = ("sha224", 28)
    SHA256 = ("sha256", 32)
    SHA384 = ("sha384", 48)
    SHA512 = ("sha512", 64)

    def __init__(self, hashlib_name: str, digest_size: int):
        self.hashlib_name = hashlib_name
        self.digest_size = digest_size

    def __str__(self) -> str:
        return self.name

    @property
    def hex_length(self) -> int:
        return self.digest_size * 2

    def new_hasher(self):
        """Create a fresh streaming hasher for this algorithm."""
        return hashlib.new(self.hashlib_name)


def parse_algorithm(name: str) -> Algorithm:
    """
    Parse an algorithm name case-insensitively, with or without a hyphen.

    "sha-256", "SHA256" and "Sha256" all yield Algorithm.SHA256.

    Raises:
        InvalidAlgorithmError: If the name matches no supported algorithm
    """
    normalized = name.strip().upper().replace("-", "")
    try:
        return Algorithm[normalized]
    except KeyError:
        raise InvalidAlgorithmError(name) from None


def infer_algorithm(byte_length: int) -> Algorithm:
    """
    Map a digest length in bytes back to the algorithm that produces it.

    Raises:
        UnknownAlgorithmError: If no supported algorithm has this digest size
    """
    for algorithm in Algorithm:
        if algorithm.digest_size == byte_length:
            return algorithm
    raise UnknownAlgorithmError(byte_length * 8)
