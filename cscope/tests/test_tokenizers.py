"""
Unit tests for tokenizers.py

Tests each field reader against well-formed, malformed and truncated input.
"""

import io
import unittest

from cscope.cursor import ByteCursor
from cscope.errors import EncodingError, FormatError
from cscope.models import FileMark
from cscope.tokenizers import (
    peek_file_boundary,
    read_blank_line,
    read_line_number,
    read_mark,
    read_optional_mark,
    read_path,
    read_to_end,
    read_until_blank_line,
)


def _cursor(data: bytes) -> ByteCursor:
    return ByteCursor(io.BytesIO(data))


class TestMarkReaders(unittest.TestCase):
    """Test mark token readers."""

    def test_read_mark_consumes_two_bytes(self):
        cursor = _cursor(b"\t$main\n")
        self.assertIs(read_mark(cursor), FileMark.FUNCTION_DEFINITION)
        self.assertEqual(cursor.tell(), 2)

    def test_read_mark_requires_tab(self):
        with self.assertRaises(FormatError):
            read_mark(_cursor(b" $main\n"))

    def test_read_mark_truncated_after_tab(self):
        with self.assertRaises(FormatError):
            read_mark(_cursor(b"\t"))

    def test_read_mark_unknown_byte(self):
        self.assertIs(read_mark(_cursor(b"\tZ")), FileMark.UNRECOGNIZED)

    def test_optional_mark_absent_consumes_nothing(self):
        cursor = _cursor(b"(void)\n")
        self.assertIsNone(read_optional_mark(cursor))
        self.assertEqual(cursor.tell(), 0)

    def test_optional_mark_at_end_of_stream(self):
        cursor = _cursor(b"")
        self.assertIsNone(read_optional_mark(cursor))
        self.assertEqual(cursor.tell(), 0)

    def test_optional_mark_present(self):
        cursor = _cursor(b"\t`printf\n")
        self.assertIs(read_optional_mark(cursor), FileMark.FUNCTION_CALL)
        self.assertEqual(cursor.tell(), 2)


class TestLineReaders(unittest.TestCase):
    """Test line-oriented readers."""

    def test_read_path_strips_newline(self):
        cursor = _cursor(b"src/main.c\n\n")
        self.assertEqual(read_path(cursor), "src/main.c")
        self.assertEqual(cursor.tell(), 11)

    def test_read_to_end_empty_line(self):
        self.assertEqual(read_to_end(_cursor(b"\n")), "")

    def test_read_to_end_truncated(self):
        with self.assertRaises(FormatError):
            read_to_end(_cursor(b"int"))

    def test_read_to_end_invalid_utf8(self):
        with self.assertRaises(EncodingError):
            read_to_end(_cursor(b"caf\xe9\n"))

    def test_read_to_end_custom_encoding(self):
        self.assertEqual(read_to_end(_cursor(b"caf\xe9\n"), encoding="latin-1"), "café")

    def test_read_blank_line(self):
        cursor = _cursor(b"\nx")
        read_blank_line(cursor)
        self.assertEqual(cursor.tell(), 1)

    def test_read_blank_line_rejects_content(self):
        with self.assertRaises(FormatError):
            read_blank_line(_cursor(b"x\n"))

    def test_read_blank_line_rejects_end_of_stream(self):
        with self.assertRaises(FormatError):
            read_blank_line(_cursor(b""))


class TestLineNumber(unittest.TestCase):
    """Test the line number reader."""

    def test_parses_digits_and_consumes_space(self):
        cursor = _cursor(b"42 int x;\n")
        self.assertEqual(read_line_number(cursor), 42)
        self.assertEqual(cursor.tell(), 3)

    def test_rejects_non_numeric(self):
        with self.assertRaises(FormatError):
            read_line_number(_cursor(b"4x2 int\n"))

    def test_rejects_empty(self):
        with self.assertRaises(FormatError):
            read_line_number(_cursor(b" int\n"))

    def test_rejects_missing_separator(self):
        with self.assertRaises(FormatError):
            read_line_number(_cursor(b"42"))


class TestUntilBlankLine(unittest.TestCase):
    """Test the multi-line free text reader."""

    def test_single_line(self):
        cursor = _cursor(b"(void)\n\n7 ")
        self.assertEqual(read_until_blank_line(cursor), "(void)")
        self.assertEqual(cursor.tell(), 8)

    def test_folds_multiple_lines(self):
        cursor = _cursor(b"(int \n\tpargc\n)\n\n")
        self.assertEqual(read_until_blank_line(cursor), "(int \tpargc)")

    def test_immediate_blank_line(self):
        cursor = _cursor(b"\n")
        self.assertEqual(read_until_blank_line(cursor), "")
        self.assertEqual(cursor.tell(), 1)

    def test_missing_blank_line_fails(self):
        with self.assertRaises(FormatError):
            read_until_blank_line(_cursor(b"(void)\n"))


class TestPeekFileBoundary(unittest.TestCase):
    """Test file boundary lookahead."""

    def test_detects_file_mark_without_consuming(self):
        cursor = _cursor(b"\t@src/util.c\n")
        self.assertTrue(peek_file_boundary(cursor))
        self.assertEqual(cursor.tell(), 0)

    def test_other_mark_is_not_boundary(self):
        cursor = _cursor(b"\t$main\n")
        self.assertFalse(peek_file_boundary(cursor))
        self.assertEqual(cursor.tell(), 0)

    def test_line_number_is_not_boundary(self):
        cursor = _cursor(b"12 int\n")
        self.assertFalse(peek_file_boundary(cursor))
        self.assertEqual(cursor.tell(), 0)

    def test_restores_position_when_lookahead_fails(self):
        cursor = _cursor(b"ab\t")
        cursor.read(2)
        with self.assertRaises(FormatError):
            peek_file_boundary(cursor)
        self.assertEqual(cursor.tell(), 2)


if __name__ == "__main__":
    unittest.main()
