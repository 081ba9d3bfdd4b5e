"""
Header line parsing.

The first line of a database looks like::

    cscope 15 /home/user/project -c -q 0000123456

i.e. magic word, format version, project root, optional flags and the
zero-padded byte offset of the trailer.
"""

import logging
import re
from typing import Optional

from cscope.config import DEFAULT_ENCODING, LATEST_KNOWN_VERSION, MAGIC, MIN_HEADER_TOKENS, NEWLINE
from cscope.cursor import ByteCursor
from cscope.errors import FormatError, UnsupportedInputError
from cscope.models import DatabaseHeader
from cscope.tokenizers import decode_text

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r"[0-9]+")


def _parse_unsigned(token: str, what: str) -> int:
    if not _DIGITS_RE.fullmatch(token):
        raise FormatError(f"Failed to parse {what}: {token!r}", 0)
    return int(token)


def parse_header_line(
    line: str,
    header_length: int,
    max_version: Optional[int] = None,
) -> DatabaseHeader:
    """Validate a header line and build a DatabaseHeader.

    Args:
        line: Header text without the trailing newline.
        header_length: Byte length of the header line including the newline.
        max_version: Highest format version accepted. When None, any
            version is accepted and one newer than the latest known
            version is logged as a warning.

    Returns:
        The parsed header.

    Raises:
        FormatError: If the line is malformed or the offset points inside it.
        UnsupportedInputError: If ``max_version`` is set and the format
            version exceeds it.
    """
    words = line.split(" ")
    if len(words) < MIN_HEADER_TOKENS or words[0] != MAGIC:
        raise FormatError("Invalid header", 0)

    version = _parse_unsigned(words[1], "version")
    root_dir = words[2]

    # Offsets are zero padded; an all-zero token is 0.
    trailer_offset = _parse_unsigned(words[-1].lstrip("0") or "0", "trailer offset")

    if trailer_offset < header_length:
        raise FormatError(
            f"Trailer offset {trailer_offset} lies inside the "
            f"{header_length}-byte header",
            0,
        )

    if max_version is not None and version > max_version:
        raise UnsupportedInputError(
            f"Database format version {version} is newer than supported "
            f"version {max_version}"
        )
    if version > LATEST_KNOWN_VERSION:
        logger.warning(
            "Database format version %d is newer than %d; reading it anyway",
            version,
            LATEST_KNOWN_VERSION,
        )

    return DatabaseHeader(
        version=version,
        root_dir=root_dir,
        trailer_offset=trailer_offset,
        raw=line,
        header_length=header_length,
    )


def parse_header(
    cursor: ByteCursor,
    encoding: str = DEFAULT_ENCODING,
    max_version: Optional[int] = None,
) -> DatabaseHeader:
    """Read and parse the first line, leaving the cursor at the symbol data.

    Example:
        >>> header = parse_header(ByteCursor(io.BytesIO(b"cscope 15 /src 0000000019\\n")))
        >>> header.trailer_offset
        19
    """
    start = cursor.tell()
    data = cursor.read_until(NEWLINE)
    if not data.endswith(b"\n"):
        raise FormatError("Unexpected end of data in header line", start + len(data))

    line = decode_text(data[:-1], start, encoding)
    header = parse_header_line(line, len(data), max_version=max_version)

    logger.info(
        "Parsed header: version=%d root=%s trailer_offset=%d flags=%s",
        header.version,
        header.root_dir,
        header.trailer_offset,
        " ".join(header.flags) or "-",
    )
    return header
