"""
Text rendering of parsed records as a per-file tree of function definitions.
"""

import logging
from itertools import groupby
from typing import Iterable, List

from cscope.config import COLUMN_GAP, LINE_LABEL, TREE_BRANCH, TREE_LAST_BRANCH
from cscope.models import FileMark, SymbolRecord

logger = logging.getLogger(__name__)


def render_tree(records: Iterable[SymbolRecord], show_line_label: bool = True) -> str:
    """Render function definitions grouped under their file.

    Only ``FUNCTION_DEFINITION`` records are shown; all other kinds are
    skipped. A new file heading starts whenever the filename changes
    between consecutive records, counting records of every kind.

    Args:
        records: Records in file-encounter order.
        show_line_label: Prefix line numbers with ``line: ``.

    Returns:
        The rendered tree ending in a newline, or an empty string when there
        are no function definitions.

    Example:
        >>> print(render_tree(db.records), end="")
        src/main.c
        └── main  int (void)  line: 3
    """
    records = list(records)
    functions = [r for r in records if r.kind is FileMark.FUNCTION_DEFINITION]
    if not functions:
        return ""

    width = max(len(r.name) for r in functions)
    label = LINE_LABEL if show_line_label else ""

    lines: List[str] = []
    # Runs of consecutive records of any kind; a file seen again after
    # another file gets its own heading.
    for filename, group in groupby(records, key=lambda r: r.filename):
        entries = [r for r in group if r.kind is FileMark.FUNCTION_DEFINITION]
        if not entries:
            continue
        lines.append(filename)
        for index, record in enumerate(entries):
            branch = TREE_LAST_BRANCH if index == len(entries) - 1 else TREE_BRANCH
            lines.append(
                f"{branch}{record.name.ljust(width)}{COLUMN_GAP}"
                f"{record.signature}{COLUMN_GAP}{label}{record.line_number}"
            )

    logger.debug("Rendered %d function definitions", len(functions))
    return "\n".join(lines) + "\n"
