"""Format detection -- Guess whether raw text is CSV, TSV or a Markdown table.

Heuristics, strongest first: a Markdown header separator row, then an average
of at least one tab per line, then commas. CSV is the neutral default.

Public API:
    detect_format         -- Detected format for a block of text
    detect_format_details -- Same decision plus the signals behind it
"""

__all__ = ["detect_format", "detect_format_details"]

import logging
import re
from typing import Any, Dict, List

from ._types import TableFormat
from .parsers._blocks import is_table_row

logger = logging.getLogger(__name__)

# |---|:--:|--:|, also |   | and | : |
_SEPARATOR_SHAPE_RE = re.compile(r"^\|[\s\-:|]+\|$")


def _non_blank_lines(text: str) -> List[str]:
    return [line for line in text.strip().replace("\r\n", "\n").split("\n") if line.strip()]


def detect_format_details(text: str) -> Dict[str, Any]:
    """Detect the table format of *text* and report the evidence.

    Returns:
        Dict with ``format``, ``line_count``, ``separator_lines``,
        ``table_rows``, ``avg_tabs``, ``avg_commas`` and a human ``reason``.
    """
    lines = _non_blank_lines(text)
    details: Dict[str, Any] = {
        "format": TableFormat.CSV.value,
        "line_count": len(lines),
        "separator_lines": 0,
        "table_rows": 0,
        "avg_tabs": 0.0,
        "avg_commas": 0.0,
        "reason": "empty input",
    }
    if not lines:
        return details

    details["separator_lines"] = sum(1 for l in lines if _SEPARATOR_SHAPE_RE.match(l.strip()))
    details["table_rows"] = sum(1 for l in lines if is_table_row(l))
    avg_tabs = sum(l.count("\t") for l in lines) / len(lines)
    avg_commas = sum(l.count(",") for l in lines) / len(lines)
    details["avg_tabs"] = round(avg_tabs, 2)
    details["avg_commas"] = round(avg_commas, 2)

    if details["separator_lines"]:
        details["format"] = TableFormat.MARKDOWN.value
        details["reason"] = "markdown header separator row"
    elif avg_tabs >= 1:
        details["format"] = TableFormat.TSV.value
        details["reason"] = "at least one tab per line on average"
    elif avg_commas >= 1:
        details["reason"] = "at least one comma per line on average"
    else:
        details["reason"] = "no strong signal, defaulting to csv"

    logger.debug("Detected %s (%s)", details["format"], details["reason"])
    return details


def detect_format(text: str) -> TableFormat:
    """Guess the format of *text*. Never raises; defaults to CSV."""
    return TableFormat(detect_format_details(text)["format"])
