"""
Exception types raised while reading a cscope database.

Every parse failure aborts the whole read; nothing is recovered locally.
"""

from typing import Optional


class CscopeError(Exception):
    """Base class for all database reading failures."""


class FormatError(CscopeError):
    """Raised when the byte stream violates the expected layout.

    Attributes:
        offset: Byte position at which the violation was detected, if known.
    """

    def __init__(self, message: str, offset: Optional[int] = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(message)


class MissingFileMarkError(FormatError):
    """Raised when a symbol block does not open with the file mark."""


class EncodingError(CscopeError):
    """Raised when bytes expected to be text cannot be decoded."""


class DatabaseIOError(CscopeError):
    """Raised when opening, reading or seeking the database fails."""


class UnsupportedInputError(CscopeError):
    """Raised for a recognized database variant this reader does not handle."""
