"""CSV and TSV parsing.

One quote-aware tokenizer drives both formats; TSVParser simply wraps it with
a tab delimiter.
"""

from __future__ import annotations

import logging
from typing import List

from .._types import ParseIssue, ParseMetadata, ParseResult, TableFormat
from ._base import (
    BaseParser,
    OptionsLike,
    build_metadata,
    column_limit_issue,
    parse_error_issue,
    resolve_options,
    split_lines,
)

__all__ = ["DelimitedParser", "CSVParser", "TSVParser"]

logger = logging.getLogger(__name__)


class DelimitedParser(BaseParser):
    """Parse delimiter-separated text with double-quote escaping.

    Args:
        delimiter: A single character separating cells.

    Raises:
        ValueError: If *delimiter* is not exactly one character.
    """

    def __init__(self, delimiter: str = ","):
        if len(delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got {delimiter!r}")
        self.delimiter = delimiter
        self.format = TableFormat.TSV if delimiter == "\t" else TableFormat.CSV

    def parse(self, text: str, options: OptionsLike = None) -> ParseResult:
        """Parse delimited *text* into rows of cell strings.

        ``has_header`` is passed through unchecked; rows wider than
        ``max_columns`` are dropped and reported, and reading stops after
        ``max_rows`` lines.
        """
        opts = resolve_options(options)

        if not text.strip():
            return self._empty_result()

        # Line numbers refer to the original text, blank lines included.
        lines = [
            (number, line)
            for number, line in enumerate(split_lines(text), start=1)
            if line.strip()
        ]
        data: List[List[str]] = []
        errors: List[ParseIssue] = []

        for line_no, line in lines[: opts.max_rows]:
            try:
                row = self.split_line(line, opts.trim_whitespace)
            except Exception as exc:
                logger.warning("Skipping line %d: %s", line_no, exc)
                errors.append(parse_error_issue(line_no, exc))
                continue

            if len(row) > opts.max_columns:
                logger.warning(
                    "Dropping line %d: %d cells exceeds max_columns=%d",
                    line_no, len(row), opts.max_columns,
                )
                errors.append(column_limit_issue(line_no, opts.max_columns))
                continue

            data.append(row)

        logger.debug(
            "Parsed %s: %d rows, %d errors", self.format.value, len(data), len(errors)
        )
        return ParseResult(
            data=data,
            has_header=opts.has_header,
            errors=errors,
            metadata=build_metadata(data, self.format),
        )

    def validate(self, text: str) -> bool:
        if not text.strip():
            return False
        lines = [line for line in split_lines(text) if line.strip()]
        return any(self.delimiter in line for line in lines)

    def split_line(self, line: str, trim_whitespace: bool = True) -> List[str]:
        """Tokenize one line.

        A double quote toggles quoted mode, ``""`` inside quotes is a literal
        quote, and the delimiter only separates cells outside quotes.
        """
        cells: List[str] = []
        current: List[str] = []
        in_quotes = False
        i = 0
        length = len(line)

        while i < length:
            char = line[i]
            if char == '"':
                if in_quotes and i + 1 < length and line[i + 1] == '"':
                    current.append('"')
                    i += 2
                    continue
                in_quotes = not in_quotes
            elif char == self.delimiter and not in_quotes:
                cells.append(self._finish_cell(current, trim_whitespace))
                current = []
            else:
                current.append(char)
            i += 1

        cells.append(self._finish_cell(current, trim_whitespace))
        return cells

    @staticmethod
    def _finish_cell(chars: List[str], trim_whitespace: bool) -> str:
        cell = "".join(chars)
        return cell.strip() if trim_whitespace else cell


class CSVParser(DelimitedParser):
    """Comma-separated values (or any single-character delimiter)."""

    def __init__(self, delimiter: str = ","):
        super().__init__(delimiter)


class TSVParser(BaseParser):
    """Tab-separated values, built on the delimited engine."""

    format = TableFormat.TSV

    def __init__(self):
        self._engine = DelimitedParser("\t")

    def parse(self, text: str, options: OptionsLike = None) -> ParseResult:
        result = self._engine.parse(text, options)
        metadata = ParseMetadata(
            row_count=result.metadata.row_count,
            column_count=result.metadata.column_count,
            format=TableFormat.TSV,
        )
        return result.model_copy(update={"metadata": metadata})

    def validate(self, text: str) -> bool:
        return self._engine.validate(text)
