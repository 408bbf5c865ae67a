"""Locating Markdown table blocks inside mixed documents."""

import re
from typing import List, NamedTuple, Optional, Tuple

from ._base import split_lines
from ._inline import strip_emphasis

__all__ = [
    "SourceLine",
    "RawBlock",
    "is_table_row",
    "is_separator_line",
    "split_separator",
    "heading_text",
    "extract_table_block",
    "extract_table_blocks",
]

_SEPARATOR_CELL_RE = re.compile(r"^:?-+:?$")
_HEADING_RE = re.compile(r"^#{1,6}\s+(.*?)(?:\s+#+)?\s*$")

# (1-based line number in the original document, line text)
SourceLine = Tuple[int, str]


class RawBlock(NamedTuple):
    lines: List[SourceLine]
    title: Optional[str] = None


def is_table_row(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith("|") and stripped.endswith("|") and len(stripped) > 2


def split_separator(line: str) -> List[str]:
    return [cell.strip() for cell in line.strip()[1:-1].split("|")]


def is_separator_line(line: str) -> bool:
    stripped = line.strip()
    if len(stripped) < 2 or not (stripped.startswith("|") and stripped.endswith("|")):
        return False
    return all(_SEPARATOR_CELL_RE.match(cell) for cell in split_separator(stripped))


def _is_table_line(line: str) -> bool:
    return is_table_row(line) or is_separator_line(line)


def heading_text(line: str) -> Optional[str]:
    """Text of a Markdown ATX heading with emphasis removed, else None."""
    match = _HEADING_RE.match(line.strip())
    if not match:
        return None
    return strip_emphasis(match.group(1)).strip()


def extract_table_block(text: str) -> List[SourceLine]:
    """Return the first contiguous run of table lines.

    Blank lines inside the run are kept; any other line ends it.
    """
    block: List[SourceLine] = []
    for number, line in enumerate(split_lines(text), start=1):
        if _is_table_line(line):
            block.append((number, line))
        elif block and not line.strip():
            block.append((number, line))
        elif block:
            break
    return block


def extract_table_blocks(text: str, captions: bool = True) -> List[RawBlock]:
    """Split a document into every table run it contains, in order.

    A run closes at the first non-blank, non-table line. With *captions*, a
    heading that is the last non-blank line before a run becomes its title.
    """
    blocks: List[RawBlock] = []
    current: Optional[List[SourceLine]] = None
    current_title: Optional[str] = None
    pending_title: Optional[str] = None

    for number, line in enumerate(split_lines(text), start=1):
        if _is_table_line(line):
            if current is None:
                current = []
                current_title = pending_title
                pending_title = None
            current.append((number, line))
            continue

        if not line.strip():
            if current is not None:
                current.append((number, line))
            continue

        if current is not None:
            blocks.append(RawBlock(current, current_title))
            current = None
            current_title = None
        pending_title = heading_text(line) if captions else None

    if current is not None:
        blocks.append(RawBlock(current, current_title))
    return blocks
