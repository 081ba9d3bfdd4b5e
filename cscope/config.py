"""
Configuration constants for cscope database parsing.

Byte values and literals of the on-disk cross-reference format.
"""

# Literal first token of every database header
MAGIC: str = "cscope"

# Minimum number of space separated header tokens:
# magic, version, root directory, trailer offset
MIN_HEADER_TOKENS: int = 4

# Newest database format version this reader is known to handle; newer
# versions are read with a warning unless a max_version limit is set
LATEST_KNOWN_VERSION: int = 15

# Header flag tokens
COMPRESSED_FLAG: str = "-c"
INVERTED_INDEX_FLAG: str = "-q"

# Structural bytes
TAB: int = ord("\t")
NEWLINE: int = ord("\n")
SPACE: int = ord(" ")

# Empty file mark written right before the trailer offset
TRAILER_MARKER: bytes = b"\t@\n"
TRAILER_MARKER_DISTANCE: int = len(TRAILER_MARKER)

# Text decoding defaults
DEFAULT_ENCODING: str = "utf-8"

# Renderer layout
TREE_BRANCH: str = "├── "
TREE_LAST_BRANCH: str = "└── "
COLUMN_GAP: str = "  "
LINE_LABEL: str = "line: "
