"""
cscope cross-reference database reader.

Byte-level parser for the line-oriented symbol database written by the
cscope indexer, plus a text renderer for its function definitions.
"""

from cscope.errors import (
    CscopeError,
    DatabaseIOError,
    EncodingError,
    FormatError,
    MissingFileMarkError,
    UnsupportedInputError,
)
from cscope.models import (
    CscopeDatabase,
    DatabaseHeader,
    FileMark,
    ParseStats,
    SymbolRecord,
    classify_mark,
)
from cscope.cursor import ByteCursor
from cscope.header import parse_header, parse_header_line
from cscope.parser import parse_body, parse_symbol_block
from cscope.reader import parse_database, parse_database_with_stats, read_database
from cscope.render import render_tree

__all__ = [
    # Errors
    "CscopeError",
    "DatabaseIOError",
    "EncodingError",
    "FormatError",
    "MissingFileMarkError",
    "UnsupportedInputError",
    # Data models
    "CscopeDatabase",
    "DatabaseHeader",
    "FileMark",
    "ParseStats",
    "SymbolRecord",
    "classify_mark",
    # Low-level parsing
    "ByteCursor",
    "parse_header",
    "parse_header_line",
    "parse_symbol_block",
    "parse_body",
    # High-level reading
    "read_database",
    "parse_database",
    "parse_database_with_stats",
    # Output
    "render_tree",
]
