"""tabletext-core -- Turn CSV, TSV and Markdown text into structured tables.

Paste text in, get rows, alignments and per-cell formatting out. No rendering,
no I/O: every result is plain, serializable data.

Quick start::

    from tabletext_core import detect_format, get_parser

    text = "| Name | Score |\\n|:---|---:|\\n| **Alice** | 95% |"
    result = get_parser(detect_format(text)).parse(text)
    print(result.data, result.alignments)
    print(result.cell_formats[1][1].numeric_value)
"""

__version__ = "1.0.0"

# Types
from ._types import (
    CellFormat,
    CellSegment,
    ColumnAlignment,
    ErrorCode,
    MarkdownParseResult,
    ParseIssue,
    ParseMetadata,
    ParseOptions,
    ParseResult,
    TableBlock,
    TableFormat,
)

# Parsers
from .parsers import (
    BaseParser,
    CSVParser,
    DelimitedParser,
    MarkdownParser,
    TSVParser,
    get_parser,
    get_supported_formats,
)

# Detection
from .format_detect import detect_format, detect_format_details

# Requests
from .tables import TableRequest, TableResponse, prepare_table, prepare_tables, preview_table


# Export (lazy -- pandas import is slow)
def to_dataframe(*args, **kwargs):
    """Convert a parse result to a pandas DataFrame."""
    from .export import to_dataframe as _to_df
    return _to_df(*args, **kwargs)


def to_records(*args, **kwargs):
    """Convert a parse result to header-keyed record dicts."""
    from .export import to_records as _to_records
    return _to_records(*args, **kwargs)


__all__ = [
    "__version__",
    # Types
    "CellFormat",
    "CellSegment",
    "ColumnAlignment",
    "ErrorCode",
    "MarkdownParseResult",
    "ParseIssue",
    "ParseMetadata",
    "ParseOptions",
    "ParseResult",
    "TableBlock",
    "TableFormat",
    # Parsers
    "BaseParser",
    "CSVParser",
    "DelimitedParser",
    "MarkdownParser",
    "TSVParser",
    "get_parser",
    "get_supported_formats",
    # Detection
    "detect_format",
    "detect_format_details",
    # Requests
    "TableRequest",
    "TableResponse",
    "preview_table",
    "prepare_table",
    "prepare_tables",
    # Export
    "to_dataframe",
    "to_records",
]
