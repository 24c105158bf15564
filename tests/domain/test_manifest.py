"""Unit tests for manifest entries and line parsing."""

import os

import pytest
from domain.errors import InvalidDigestFormatError
from domain.manifest import ManifestEntry, parse_line, sort_entries, strip_dot_prefix


class TestManifestEntry:
    def test_to_line_uses_two_spaces(self):
        entry = ManifestEntry(path="dir/file.txt", digest="abcd")
        assert entry.to_line() == "abcd  dir/file.txt\n"

    def test_from_digest_encodes_lowercase_hex(self):
        entry = ManifestEntry.from_digest("file.txt", b"\xde\xad\xbe\xef")
        assert entry.digest == "deadbeef"
        assert entry.path == "file.txt"

    def test_from_digest_strips_dot_prefix(self):
        entry = ManifestEntry.from_digest(os.path.join(".", "sub", "file.txt"), b"\x00")
        assert entry.path == os.path.join("sub", "file.txt")


class TestStripDotPrefix:
    def test_strips_single_leading_prefix(self):
        assert strip_dot_prefix("." + os.sep + "a") == "a"

    def test_only_strips_once(self):
        doubled = "." + os.sep + "." + os.sep + "a"
        assert strip_dot_prefix(doubled) == "." + os.sep + "a"

    def test_leaves_other_paths_alone(self):
        assert strip_dot_prefix("/abs/path") == "/abs/path"
        assert strip_dot_prefix("..") == ".."
        assert strip_dot_prefix(".hidden") == ".hidden"


class TestParseLine:
    def test_parses_digest_then_path(self):
        entry = parse_line("abcd  some/file.txt\n")
        assert entry == ManifestEntry(path="some/file.txt", digest="abcd")

    def test_any_whitespace_separates_fields(self):
        assert parse_line("abcd\tfile.txt") == ManifestEntry(path="file.txt", digest="abcd")
        assert parse_line("  abcd     file.txt  \r\n") == ManifestEntry(path="file.txt", digest="abcd")

    def test_extra_tokens_are_ignored(self):
        entry = parse_line("abcd file.txt trailing tokens")
        assert entry == ManifestEntry(path="file.txt", digest="abcd")

    @pytest.mark.parametrize("line", ["", "\n", "   \t \n"])
    def test_blank_lines_yield_none(self, line):
        assert parse_line(line) is None

    def test_single_token_is_invalid(self):
        with pytest.raises(InvalidDigestFormatError) as exc_info:
            parse_line("abcd\n")
        assert exc_info.value.value == "abcd"

    def test_digest_is_not_validated_here(self):
        assert parse_line("xyz file") == ManifestEntry(path="file", digest="xyz")


class TestSortEntries:
    def test_sorts_by_path(self):
        entries = [
            ManifestEntry("b.txt", "02"),
            ManifestEntry("a/z.txt", "03"),
            ManifestEntry("a.txt", "01"),
            ManifestEntry("B.txt", "04"),
        ]
        paths = [entry.path for entry in sort_entries(entries)]
        assert paths == ["B.txt", "a.txt", "a/z.txt", "b.txt"]

    def test_non_ascii_paths_sort_by_bytes(self):
        entries = [ManifestEntry("é.txt", "01"), ManifestEntry("z.txt", "02")]
        paths = [entry.path for entry in sort_entries(entries)]
        assert paths == ["z.txt", "é.txt"]
