"""Unit tests for algorithm parsing and inference."""

import pytest
from domain.algorithm import Algorithm, parse_algorithm, infer_algorithm
from domain.errors import InvalidAlgorithmError, UnknownAlgorithmError


class TestParseAlgorithm:
    @pytest.mark.parametrize("name,expected", [
        ("MD5", Algorithm.MD5),
        ("md5", Algorithm.MD5),
        ("SHA1", Algorithm.SHA1),
        ("sha-1", Algorithm.SHA1),
        ("SHA224", Algorithm.SHA224),
        ("Sha-224", Algorithm.SHA224),
        ("SHA256", Algorithm.SHA256),
        ("sha-256", Algorithm.SHA256),
        ("sha384", Algorithm.SHA384),
        ("SHA-384", Algorithm.SHA384),
        ("sha512", Algorithm.SHA512),
        ("SHA-512", Algorithm.SHA512),
    ])
    def test_accepts_names_with_and_without_hyphen(self, name, expected):
        assert parse_algorithm(name) is expected

    @pytest.mark.parametrize("name", ["", "sha", "sha3-256", "blake2b", "crc32"])
    def test_rejects_unknown_names(self, name):
        with pytest.raises(InvalidAlgorithmError) as exc_info:
            parse_algorithm(name)
        assert exc_info.value.name == name

    def test_error_message_names_the_algorithm(self):
        with pytest.raises(InvalidAlgorithmError, match="Invalid algorithm 'whirlpool'"):
            parse_algorithm("whirlpool")


class TestInferAlgorithm:
    def test_every_supported_length_maps_back(self):
        expected = {
            16: Algorithm.MD5,
            20: Algorithm.SHA1,
            28: Algorithm.SHA224,
            32: Algorithm.SHA256,
            48: Algorithm.SHA384,
            64: Algorithm.SHA512,
        }
        for length, algorithm in expected.items():
            assert infer_algorithm(length) is algorithm

    def test_digest_sizes_are_distinct(self):
        sizes = [algorithm.digest_size for algorithm in Algorithm]
        assert len(sizes) == len(set(sizes))

    @pytest.mark.parametrize("length", [0, 1, 15, 17, 24, 31, 33, 63, 65, 128])
    def test_unsupported_lengths_fail(self, length):
        with pytest.raises(UnknownAlgorithmError) as exc_info:
            infer_algorithm(length)
        assert exc_info.value.bits == length * 8


class TestAlgorithm:
    def test_default_display_name(self):
        assert str(Algorithm.SHA256) == "SHA256"

    def test_hex_length_is_twice_digest_size(self):
        assert Algorithm.MD5.hex_length == 32
        assert Algorithm.SHA512.hex_length == 128

    def test_new_hasher_matches_digest_size(self):
        for algorithm in Algorithm:
            hasher = algorithm.new_hasher()
            hasher.update(b"data")
            assert len(hasher.digest()) == algorithm.digest_size

    def test_new_hasher_is_fresh_each_time(self):
        first = Algorithm.SHA1.new_hasher()
        first.update(b"something")
        second = Algorithm.SHA1.new_hasher()
        assert first.digest() != second.digest()
