"""Table parsers and the format -> parser registry.

Public API:
    get_parser          -- Shared parser instance for a format
    get_supported_formats -- Formats the registry knows
    CSVParser / TSVParser / MarkdownParser -- Parser classes for custom setups
"""

from types import MappingProxyType
from typing import List, Mapping, Union

from .._types import TableFormat
from ._base import BaseParser, resolve_options
from .delimited import CSVParser, DelimitedParser, TSVParser
from .markdown import MarkdownParser, parse_alignments

__all__ = [
    "get_parser",
    "get_supported_formats",
    "BaseParser",
    "DelimitedParser",
    "CSVParser",
    "TSVParser",
    "MarkdownParser",
    "parse_alignments",
    "resolve_options",
]

# Parsers are stateless, so one instance per format serves every caller.
_PARSERS: Mapping[TableFormat, BaseParser] = MappingProxyType({
    TableFormat.CSV: CSVParser(","),
    TableFormat.TSV: TSVParser(),
    TableFormat.MARKDOWN: MarkdownParser(),
})


def get_parser(fmt: Union[str, TableFormat]) -> BaseParser:
    """Return the shared parser for *fmt* ('csv', 'tsv' or 'markdown').

    Raises:
        ValueError: If the format is not supported.
    """
    try:
        key = TableFormat(fmt)
    except ValueError:
        raise ValueError(f"Unsupported format: {fmt}") from None
    return _PARSERS[key]


def get_supported_formats() -> List[str]:
    return [fmt.value for fmt in _PARSERS]
