"""
Seekable byte cursor with explicit, position-restoring lookahead.
"""

from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

from cscope.config import NEWLINE
from cscope.errors import DatabaseIOError

# Bytes fetched per read while scanning for a delimiter other than newline.
SCAN_CHUNK_SIZE = 256


class ByteCursor:
    """Thin wrapper over a seekable binary stream.

    All reads go through this class so that I/O failures surface as
    ``DatabaseIOError`` and every lookahead restores the stream position.

    Example:
        >>> cursor = ByteCursor(io.BytesIO(b"ab"))
        >>> cursor.peek()
        97
        >>> cursor.tell()
        0
    """

    def __init__(self, stream: BinaryIO):
        self._stream = stream

    def tell(self) -> int:
        try:
            return self._stream.tell()
        except OSError as e:
            raise DatabaseIOError(f"Failed to query stream position: {e}") from e

    def seek(self, position: int) -> None:
        try:
            self._stream.seek(position)
        except OSError as e:
            raise DatabaseIOError(f"Failed to seek to byte {position}: {e}") from e

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes; fewer are returned at end of stream."""
        try:
            return self._stream.read(size)
        except OSError as e:
            raise DatabaseIOError(f"Failed to read database: {e}") from e

    def read_byte(self) -> Optional[int]:
        """Read one byte, or return None at end of stream."""
        data = self.read(1)
        return data[0] if data else None

    def read_until(self, delimiter: int) -> bytes:
        """Read bytes up to and including ``delimiter``.

        The delimiter is missing from the result only when the stream ended
        first. The cursor is left just past the delimiter, or at end of
        stream.
        """
        if delimiter == NEWLINE:
            try:
                return self._stream.readline()
            except OSError as e:
                raise DatabaseIOError(f"Failed to read database: {e}") from e

        buf = bytearray()
        while True:
            start = self.tell()
            chunk = self.read(SCAN_CHUNK_SIZE)
            if not chunk:
                break
            index = chunk.find(delimiter)
            if index >= 0:
                buf += chunk[: index + 1]
                self.seek(start + index + 1)
                break
            buf += chunk
        return bytes(buf)

    @contextmanager
    def lookahead(self) -> Iterator["ByteCursor"]:
        """Restore the current position on exit, even if the body raises."""
        saved = self.tell()
        try:
            yield self
        finally:
            self.seek(saved)

    def peek(self) -> Optional[int]:
        """Return the next byte without consuming it (None at end of stream)."""
        with self.lookahead():
            return self.read_byte()
