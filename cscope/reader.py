"""
High-level entry points for reading a cscope database.

Opens the file, parses the header and then the symbol data, and returns
the collected records.
"""

import logging
import os
from typing import BinaryIO, Optional, Tuple

from core.structured_logging import database_scope, phase_scope
from cscope.config import DEFAULT_ENCODING
from cscope.cursor import ByteCursor
from cscope.errors import DatabaseIOError
from cscope.header import parse_header
from cscope.models import CscopeDatabase, FileMark, ParseStats
from cscope.parser import parse_body

logger = logging.getLogger(__name__)


def read_database(
    stream: BinaryIO,
    encoding: str = DEFAULT_ENCODING,
    max_version: Optional[int] = None,
    stats: Optional[ParseStats] = None,
) -> CscopeDatabase:
    """Parse a database from an open, seekable binary stream.

    Args:
        stream: Binary stream positioned at the start of the database.
        encoding: Text encoding of paths and source text.
        max_version: Highest format version accepted, or None for no limit.
        stats: Optional stats object updated while parsing.

    Returns:
        The parsed database. The stream is left at the trailer offset.

    Raises:
        CscopeError: Any subclass, on the first malformed token.

    Example:
        >>> with open("cscope.out", "rb") as f:
        ...     db = read_database(f)
        >>> len(db.function_definitions())
        12
    """
    cursor = ByteCursor(stream)

    with phase_scope("header"):
        header = parse_header(cursor, encoding=encoding, max_version=max_version)

    with phase_scope("body"):
        records = parse_body(cursor, header, encoding=encoding, stats=stats)

    if stats is not None:
        stats.function_definitions += sum(
            1 for r in records if r.kind is FileMark.FUNCTION_DEFINITION
        )
        stats.unrecognized_marks += sum(
            1 for r in records if r.kind is FileMark.UNRECOGNIZED
        )
        stats.bytes_consumed += cursor.tell()

    return CscopeDatabase(header=header, records=records)


def parse_database_with_stats(
    file_path: str,
    encoding: str = DEFAULT_ENCODING,
    max_version: Optional[int] = None,
) -> Tuple[CscopeDatabase, ParseStats]:
    """Parse a database file from disk and report parse statistics.

    Raises:
        DatabaseIOError: If the file cannot be opened or read.
        CscopeError: Any other subclass, on malformed content.
    """
    stats = ParseStats()
    with database_scope(os.path.basename(file_path)):
        try:
            f = open(file_path, "rb")
        except OSError as e:
            logger.error(f"Error opening database {file_path}: {e}")
            raise DatabaseIOError(f"Cannot open database {file_path}: {e}") from e

        with f:
            database = read_database(
                f,
                encoding=encoding,
                max_version=max_version,
                stats=stats,
            )

        logger.info(f"Read {file_path}: {stats}")
    return database, stats


def parse_database(
    file_path: str,
    encoding: str = DEFAULT_ENCODING,
    max_version: Optional[int] = None,
) -> CscopeDatabase:
    """Parse a database file from disk."""
    database, _ = parse_database_with_stats(
        file_path,
        encoding=encoding,
        max_version=max_version,
    )
    return database
