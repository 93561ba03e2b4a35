"""Tests for TagReader: line splitting and (code, value) pairing."""

import os
import sys
import unittest

_root = os.path.join(os.path.dirname(__file__), "..")
if _root not in sys.path:
    sys.path.insert(0, _root)

from dxfview.TagReader import (  # noqa: E402
    TagStream, parse_code, read_tags, split_lines,
)


class TestSplitLines(unittest.TestCase):

    def test_lf_and_crlf(self):
        self.assertEqual(split_lines("a\r\nb\nc"), ["a", "b", "c"])

    def test_leading_bom_dropped(self):
        self.assertEqual(split_lines("\ufeff0\nEOF"), ["0", "EOF"])


class TestParseCode(unittest.TestCase):

    def test_integer(self):
        self.assertEqual(parse_code("10"), 10)

    def test_not_a_number(self):
        self.assertIsNone(parse_code("LINE"))
        self.assertIsNone(parse_code(""))


class TestTagStream(unittest.TestCase):

    def test_pairs(self):
        tags = read_tags("0\nSECTION\n2\nENTITIES\n")
        self.assertEqual(tags, [(0, "SECTION"), (2, "ENTITIES")])

    def test_whitespace_trimmed(self):
        self.assertEqual(read_tags("  0 \r\n LINE \r\n"), [(0, "LINE")])

    def test_dangling_code_line_ends_stream(self):
        """A code without its value line is not returned."""
        self.assertEqual(read_tags("0\nLINE\n8"), [(0, "LINE")])

    def test_empty_text(self):
        self.assertEqual(read_tags(""), [])

    def test_bad_code_keeps_alignment(self):
        tags = read_tags("abc\nfoo\n0\nEOF")
        self.assertEqual(tags, [(None, "foo"), (0, "EOF")])

    def test_cursor_advances_two_lines(self):
        stream = TagStream("0\nLINE\n8\nWalls\n")
        self.assertEqual(stream.position, 0)
        self.assertEqual(stream.next_tag(), (0, "LINE"))
        self.assertEqual(stream.position, 2)
        self.assertEqual(stream.next_tag(), (8, "Walls"))
        self.assertTrue(stream.at_end())
        self.assertIsNone(stream.next_tag())
        self.assertIsNone(stream.next_tag())


if __name__ == "__main__":
    unittest.main()
