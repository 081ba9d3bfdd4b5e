"""
Symbol data parsing: the per-file block state machine and the body driver.

Layout of one block (see the header module for line 1)::

    \\t@<path>\\n
    \\n
    <line> <leading text>\\n
    \\t<mark><symbol>\\n          (optional)
    <trailing text>\\n            (zero or more lines)
    \\n
    ...

After the last block the indexer writes an empty file mark (``\\t@\\n``)
immediately before the trailer offset recorded in the header.
"""

import logging
from typing import List, Optional

from cscope.config import DEFAULT_ENCODING, TAB, TRAILER_MARKER, TRAILER_MARKER_DISTANCE
from cscope.cursor import ByteCursor
from cscope.errors import FormatError, MissingFileMarkError
from cscope.models import DatabaseHeader, FileMark, ParseStats, SymbolRecord
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

logger = logging.getLogger(__name__)


def parse_symbol_block(
    cursor: ByteCursor,
    header: DatabaseHeader,
    records: List[SymbolRecord],
    encoding: str = DEFAULT_ENCODING,
) -> int:
    """Parse one file's block, appending a record per entry.

    Args:
        cursor: Cursor positioned at the block's file mark.
        header: Parsed header; bounds the block at the trailer offset.
        records: Collection the new records are appended to.
        encoding: Text encoding of paths and source text.

    Returns:
        Number of records appended.

    Raises:
        MissingFileMarkError: If the block does not start with a file mark.
        FormatError: If any field of the block is malformed.
        EncodingError: If text fields cannot be decoded.
    """
    # <file mark><file path>
    start = cursor.tell()
    mark = read_mark(cursor)
    if mark is not FileMark.FILE:
        raise MissingFileMarkError("Failed to find file marker", start)
    filename = read_path(cursor, encoding)

    # <empty line>
    read_blank_line(cursor)

    count = 0
    while cursor.tell() < header.trailer_offset and not peek_file_boundary(cursor):
        # <line number><blank><non-symbol text>
        line_number = read_line_number(cursor)
        leading_text = read_to_end(cursor, encoding).strip()

        # <optional mark><symbol>
        kind = read_optional_mark(cursor)
        if kind is None:
            kind = FileMark.UNRECOGNIZED
            name = ""
        else:
            name = read_to_end(cursor, encoding).strip()

        # <non-symbol text>
        trailing_text = read_until_blank_line(cursor, encoding).strip()

        records.append(
            SymbolRecord(
                filename=filename,
                line_number=line_number,
                kind=kind,
                name=name,
                leading_text=leading_text,
                trailing_text=trailing_text,
            )
        )
        count += 1

        # A tab here is either the next file mark or the trailer marker;
        # the body driver tells them apart by offset.
        if cursor.peek() == TAB:
            break

    logger.debug("Parsed %d entries for %s", count, filename)
    return count


def _consume_trailer_marker(cursor: ByteCursor, header: DatabaseHeader) -> None:
    position = cursor.tell()
    remaining = header.trailer_offset - position
    data = cursor.read(remaining)
    if len(data) != remaining or not TRAILER_MARKER.endswith(data):
        raise FormatError(
            f"Expected trailer marker before offset {header.trailer_offset}, "
            f"found {data!r}",
            position,
        )


def parse_body(
    cursor: ByteCursor,
    header: DatabaseHeader,
    encoding: str = DEFAULT_ENCODING,
    stats: Optional[ParseStats] = None,
) -> List[SymbolRecord]:
    """Parse symbol blocks until the trailer offset.

    The cursor must sit right after the header line. On return it sits
    exactly at ``header.trailer_offset``.

    Returns:
        All records in file-encounter order. Empty for a database without
        symbol data.

    Raises:
        FormatError: If a block is malformed or runs past the trailer.
    """
    records: List[SymbolRecord] = []
    blocks = 0

    while cursor.tell() < header.trailer_offset:
        if header.trailer_offset - cursor.tell() <= TRAILER_MARKER_DISTANCE:
            _consume_trailer_marker(cursor, header)
            break

        added = parse_symbol_block(cursor, header, records, encoding)
        blocks += 1

        position = cursor.tell()
        if position > header.trailer_offset:
            raise FormatError(
                f"Symbol data overruns trailer offset {header.trailer_offset}",
                position,
            )

        if stats is not None:
            stats.blocks_parsed += 1
            stats.records_parsed += added

    logger.debug("Parsed %d blocks, %d records", blocks, len(records))
    return records
