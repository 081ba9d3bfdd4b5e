"""
Data models for parsed cscope databases.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

from cscope.config import COMPRESSED_FLAG, INVERTED_INDEX_FLAG


class FileMark(Enum):
    """Single-byte tags that classify the token following a tab."""

    FILE = ord("@")
    FUNCTION_DEFINITION = ord("$")
    FUNCTION_CALL = ord("`")
    FUNCTION_END = ord("}")
    DEFINE = ord("#")
    DEFINE_END = ord(")")
    INCLUDE = ord("~")
    ASSIGNMENT = ord("=")
    DEFINITION_END = ord(";")          # enum/struct/union definition end
    CLASS_DEFINITION = ord("c")
    ENUM_DEFINITION = ord("e")
    GLOBAL_DEFINITION = ord("g")
    LOCAL_DEFINITION = ord("l")        # function/block local
    MEMBER_DEFINITION = ord("m")       # enum/struct/union member
    PARAMETER_DEFINITION = ord("p")
    STRUCT_DEFINITION = ord("s")
    TYPEDEF_DEFINITION = ord("t")
    UNION_DEFINITION = ord("u")
    UNRECOGNIZED = 0


_MARKS_BY_BYTE: Dict[int, FileMark] = {
    mark.value: mark for mark in FileMark if mark is not FileMark.UNRECOGNIZED
}


def classify_mark(byte: int) -> FileMark:
    """Map a mark byte to its FileMark.

    Unknown bytes map to ``FileMark.UNRECOGNIZED`` instead of failing, so
    databases written by newer indexers still load.

    Example:
        >>> classify_mark(ord("$"))
        <FileMark.FUNCTION_DEFINITION: 36>
        >>> classify_mark(ord("Z"))
        <FileMark.UNRECOGNIZED: 0>
    """
    return _MARKS_BY_BYTE.get(byte, FileMark.UNRECOGNIZED)


@dataclass(frozen=True)
class DatabaseHeader:
    """Parsed first line of a database.

    Attributes:
        version: Format version written by the indexer.
        root_dir: Project root directory, verbatim.
        trailer_offset: Absolute byte offset where the trailer begins.
        raw: Header line text without its newline.
        header_length: Byte length of the header line including the newline.
    """

    version: int
    root_dir: str
    trailer_offset: int
    raw: str
    header_length: int

    @property
    def tokens(self) -> List[str]:
        return self.raw.split(" ")

    @property
    def flags(self) -> Tuple[str, ...]:
        """Tokens between the root directory and the trailer offset."""
        return tuple(self.tokens[3:-1])

    def has_flag(self, token: str) -> bool:
        return token in self.flags

    @property
    def compressed(self) -> bool:
        return self.has_flag(COMPRESSED_FLAG)

    @property
    def inverted_index(self) -> bool:
        return self.has_flag(INVERTED_INDEX_FLAG)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "root_dir": self.root_dir,
            "trailer_offset": self.trailer_offset,
            "flags": list(self.flags),
        }


@dataclass(frozen=True)
class SymbolRecord:
    """One line-numbered entry of a file's symbol block.

    Attributes:
        filename: Path of the block the entry belongs to.
        line_number: 1-based source line number.
        kind: Mark preceding the symbol, or UNRECOGNIZED when absent/unknown.
        name: Symbol name, empty for entries without a mark.
        leading_text: Source text before the symbol.
        trailing_text: Source text after the symbol, folded to one line.
    """

    filename: str
    line_number: int
    kind: FileMark
    name: str
    leading_text: str
    trailing_text: str

    @property
    def signature(self) -> str:
        return f"{self.leading_text} {self.trailing_text}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to a dictionary suitable for JSON serialization."""
        return {
            "filename": self.filename,
            "line_number": self.line_number,
            "kind": self.kind.name,
            "name": self.name,
            "leading_text": self.leading_text,
            "trailing_text": self.trailing_text,
        }


@dataclass
class CscopeDatabase:
    """A fully parsed database: header plus records in file-encounter order."""

    header: DatabaseHeader
    records: List[SymbolRecord] = field(default_factory=list)

    def files(self) -> List[str]:
        """Distinct filenames that own at least one record, in encounter order."""
        return list(dict.fromkeys(r.filename for r in self.records))

    def function_definitions(self) -> List[SymbolRecord]:
        return [r for r in self.records if r.kind is FileMark.FUNCTION_DEFINITION]


class ParseStats:
    """Statistics for a database read."""

    def __init__(self):
        self.blocks_parsed = 0
        self.records_parsed = 0
        self.function_definitions = 0
        self.unrecognized_marks = 0
        self.bytes_consumed = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "blocks_parsed": self.blocks_parsed,
            "records_parsed": self.records_parsed,
            "function_definitions": self.function_definitions,
            "unrecognized_marks": self.unrecognized_marks,
            "bytes_consumed": self.bytes_consumed,
        }

    def __str__(self) -> str:
        return (
            f"ParseStats(blocks={self.blocks_parsed}, "
            f"records={self.records_parsed}, "
            f"functions={self.function_definitions}, "
            f"unrecognized={self.unrecognized_marks}, "
            f"bytes={self.bytes_consumed})"
        )
