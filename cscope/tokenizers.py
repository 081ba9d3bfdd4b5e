"""
Field tokenizers for the cscope symbol data.

Each function consumes one field from a ByteCursor and either returns its
value or raises. Functions that only look ahead leave the cursor where they
found it.
"""

import re
from typing import Optional

from cscope.config import DEFAULT_ENCODING, NEWLINE, SPACE, TAB
from cscope.cursor import ByteCursor
from cscope.errors import EncodingError, FormatError
from cscope.models import FileMark, classify_mark

_DIGITS_RE = re.compile(rb"[0-9]+")


def decode_text(data: bytes, offset: int, encoding: str = DEFAULT_ENCODING) -> str:
    """Strictly decode ``data``; ``offset`` is where the bytes started."""
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        raise EncodingError(
            f"Invalid {encoding} text at byte {offset + e.start}: {e.reason}"
        ) from e


def read_mark(cursor: ByteCursor) -> FileMark:
    """Consume a tab followed by one mark byte.

    Raises:
        FormatError: If the first byte is not a tab or the mark byte is missing.
    """
    start = cursor.tell()
    byte = cursor.read_byte()
    if byte != TAB:
        raise FormatError("Expected tab character before mark", start)
    mark = cursor.read_byte()
    if mark is None:
        raise FormatError("Unexpected end of data after tab, expected mark", start + 1)
    return classify_mark(mark)


def read_optional_mark(cursor: ByteCursor) -> Optional[FileMark]:
    """Read a mark if the next byte is a tab, otherwise consume nothing."""
    if cursor.peek() == TAB:
        return read_mark(cursor)
    return None


def read_to_end(cursor: ByteCursor, encoding: str = DEFAULT_ENCODING) -> str:
    """Read through the next newline and return the text without it.

    Raises:
        FormatError: If the stream ends before a newline.
        EncodingError: If the line is not valid text.
    """
    start = cursor.tell()
    data = cursor.read_until(NEWLINE)
    if not data.endswith(b"\n"):
        raise FormatError("Unexpected end of data, expected end of line", start + len(data))
    return decode_text(data[:-1], start, encoding)


def read_path(cursor: ByteCursor, encoding: str = DEFAULT_ENCODING) -> str:
    """Read a file path line."""
    return read_to_end(cursor, encoding)


def read_blank_line(cursor: ByteCursor) -> None:
    """Consume exactly one newline byte."""
    start = cursor.tell()
    if cursor.read_byte() != NEWLINE:
        raise FormatError("Expected empty line", start)


def read_line_number(cursor: ByteCursor) -> int:
    """Read ``<digits><space>`` and return the number."""
    start = cursor.tell()
    data = cursor.read_until(SPACE)
    if not data.endswith(b" "):
        raise FormatError("Unexpected end of data while reading line number", start)
    digits = data[:-1]
    if not _DIGITS_RE.fullmatch(digits):
        raise FormatError(f"Failed to parse line number {digits!r}", start)
    return int(digits)


def read_until_blank_line(cursor: ByteCursor, encoding: str = DEFAULT_ENCODING) -> str:
    """Read lines up to and including an empty one.

    The non-empty lines are joined without their newlines, so text that the
    indexer split over several physical lines comes back as one logical line.

    Raises:
        FormatError: If the stream is exhausted before an empty line.
    """
    start = cursor.tell()
    lines = []
    while True:
        line_start = cursor.tell()
        data = cursor.read_until(NEWLINE)
        if not data.endswith(b"\n"):
            raise FormatError("Failed to locate empty line", start)
        if data == b"\n":
            break
        lines.append(decode_text(data[:-1], line_start, encoding))
    return "".join(lines)


def peek_file_boundary(cursor: ByteCursor) -> bool:
    """Check whether the next token is a file mark without moving the cursor."""
    with cursor.lookahead():
        return read_optional_mark(cursor) is FileMark.FILE
