"""Markdown table parsing.

Extracts table blocks from mixed Markdown, detects the header separator and
column alignments, and tokenizes each row into cells with inline formatting
(images, links, emphasis, numbers and mixed runs).
"""

from __future__ import annotations

import logging
from typing import List, NamedTuple, Optional

from .._types import (
    CellFormat,
    ColumnAlignment,
    ErrorCode,
    MarkdownParseResult,
    ParseIssue,
    ParseMetadata,
    ParseOptions,
    TableBlock,
    TableFormat,
)
from ._base import (
    BaseParser,
    OptionsLike,
    build_metadata,
    column_limit_issue,
    empty_data_issue,
    parse_error_issue,
    resolve_options,
    split_lines,
)
from ._blocks import (
    SourceLine,
    extract_table_block,
    extract_table_blocks,
    is_separator_line,
    is_table_row,
    split_separator,
)
from ._inline import classify_cell

__all__ = ["MarkdownParser", "parse_alignments"]

logger = logging.getLogger(__name__)


def parse_alignments(separator_line: str) -> List[ColumnAlignment]:
    """Map ``|:--|:-:|--:|`` cells to left/center/right."""
    alignments = []
    for cell in split_separator(separator_line):
        if cell.startswith(":") and cell.endswith(":") and len(cell) > 1:
            alignments.append(ColumnAlignment.CENTER)
        elif cell.endswith(":"):
            alignments.append(ColumnAlignment.RIGHT)
        else:
            alignments.append(ColumnAlignment.LEFT)
    return alignments


class _ParsedBlock(NamedTuple):
    data: List[List[str]]
    cell_formats: List[List[CellFormat]]
    alignments: List[ColumnAlignment]
    has_header: bool
    errors: List[ParseIssue]


class MarkdownParser(BaseParser):
    """Parser for Markdown (GFM-style) pipe tables.

    The capability flags switch off individual classification steps; a
    disabled step behaves as if it did not exist.

    Args:
        enable_images: Recognize ``![alt](url)`` cells as images.
        enable_numeric: Recognize currency, percentage, unit and plain numbers.
        enable_partial_formatting: Split mixed cells into formatted segments.
        enable_captions: Use a heading right above a table as its title.
    """

    format = TableFormat.MARKDOWN

    def __init__(
        self,
        enable_images: bool = True,
        enable_numeric: bool = True,
        enable_partial_formatting: bool = True,
        enable_captions: bool = True,
    ):
        self.enable_images = enable_images
        self.enable_numeric = enable_numeric
        self.enable_partial_formatting = enable_partial_formatting
        self.enable_captions = enable_captions

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, text: str, options: OptionsLike = None) -> MarkdownParseResult:
        """Parse the first table found in *text*.

        Surrounding prose is ignored. Error line numbers refer to lines of
        the original *text*.
        """
        opts = resolve_options(options)
        if not text.strip():
            return self._empty_result()

        parsed = self._parse_block(extract_table_block(text), opts)
        return self._single_result(parsed)

    def parse_multiple_tables(self, text: str, options: OptionsLike = None) -> MarkdownParseResult:
        """Parse every table in *text* into ``multiple_tables_data``.

        With one table the top-level fields are filled exactly as
        :meth:`parse` would fill them. With several, top-level ``data`` stays
        empty, ``row_count`` is the total and ``column_count`` the widest
        table.
        """
        opts = resolve_options(options)
        if not text.strip():
            return self._empty_result(multiple=True)

        blocks = extract_table_blocks(text, captions=self.enable_captions)
        if not blocks:
            logger.debug("No markdown tables found")
            return MarkdownParseResult(
                errors=[ParseIssue(line=1, message="No tables found", code=ErrorCode.EMPTY_DATA)],
                metadata=ParseMetadata(row_count=0, column_count=0, format=self.format),
                multiple_tables_data=[],
            )

        parsed = [self._parse_block(block.lines, opts) for block in blocks]
        tables = [
            TableBlock(
                data=p.data,
                alignments=p.alignments,
                cell_formats=p.cell_formats,
                has_header=p.has_header,
                title=block.title,
            )
            for block, p in zip(blocks, parsed)
        ]

        if len(parsed) == 1:
            return self._single_result(parsed[0], multiple_tables_data=tables)

        logger.debug("Parsed %d markdown tables", len(tables))
        return MarkdownParseResult(
            data=[],
            has_header=any(p.has_header for p in parsed),
            errors=[issue for p in parsed for issue in p.errors],
            metadata=ParseMetadata(
                row_count=sum(len(p.data) for p in parsed),
                column_count=max(len(p.data[0]) if p.data else 0 for p in parsed),
                format=self.format,
            ),
            multiple_tables_data=tables,
        )

    def validate(self, text: str) -> bool:
        if not text.strip():
            return False
        return any(is_table_row(line) for line in split_lines(text))

    def split_row(self, line: str, trim_whitespace: bool = True) -> List[str]:
        """Split a table row into unescaped cell strings.

        Outer pipes are removed; ``\\|`` and ``\\\\`` are the only escapes.
        """
        content = line.strip()[1:-1]
        cells: List[str] = []
        current: List[str] = []
        i = 0

        while i < len(content):
            char = content[i]
            if char == "|":
                cells.append(self._finish_cell(current, trim_whitespace))
                current = []
            elif char == "\\" and i + 1 < len(content) and content[i + 1] in "|\\":
                current.append(content[i + 1])
                i += 1
            else:
                current.append(char)
            i += 1

        cells.append(self._finish_cell(current, trim_whitespace))
        return cells

    def classify(self, cell: str) -> CellFormat:
        """Classify one cell using this parser's capability flags."""
        return classify_cell(
            cell,
            enable_images=self.enable_images,
            enable_numeric=self.enable_numeric,
            enable_partial_formatting=self.enable_partial_formatting,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _finish_cell(chars: List[str], trim_whitespace: bool) -> str:
        cell = "".join(chars)
        return cell.strip() if trim_whitespace else cell

    def _parse_block(self, block: List[SourceLine], opts: ParseOptions) -> _ParsedBlock:
        lines = [(number, line.strip()) for number, line in block if line.strip()]
        data: List[List[str]] = []
        cell_formats: List[List[CellFormat]] = []
        errors: List[ParseIssue] = []
        alignments: List[ColumnAlignment] = []
        separator_index = -1

        if opts.has_header and len(lines) >= 2 and is_separator_line(lines[1][1]):
            separator_index = 1
            alignments = parse_alignments(lines[1][1])

        for index, (line_no, line) in enumerate(lines):
            if len(data) >= opts.max_rows:
                break
            if index == separator_index or not is_table_row(line):
                continue

            try:
                cells = self.split_row(line, opts.trim_whitespace)
                if len(cells) > opts.max_columns:
                    logger.warning(
                        "Dropping line %d: %d cells exceeds max_columns=%d",
                        line_no, len(cells), opts.max_columns,
                    )
                    errors.append(column_limit_issue(line_no, opts.max_columns))
                    continue
                formats = [self.classify(cell) for cell in cells]
            except Exception as exc:
                logger.warning("Skipping line %d: %s", line_no, exc)
                errors.append(parse_error_issue(line_no, exc))
                continue

            data.append([fmt.text for fmt in formats])
            cell_formats.append(formats)

        if data and alignments:
            width = len(data[0])
            alignments = (alignments + [ColumnAlignment.LEFT] * width)[:width]

        return _ParsedBlock(
            data=data,
            cell_formats=cell_formats,
            alignments=alignments,
            has_header=opts.has_header and separator_index >= 0,
            errors=errors,
        )

    def _single_result(
        self,
        parsed: _ParsedBlock,
        multiple_tables_data: Optional[List[TableBlock]] = None,
    ) -> MarkdownParseResult:
        logger.debug(
            "Parsed markdown: %d rows, %d errors, header=%s",
            len(parsed.data), len(parsed.errors), parsed.has_header,
        )
        return MarkdownParseResult(
            data=parsed.data,
            has_header=parsed.has_header,
            errors=parsed.errors,
            metadata=build_metadata(parsed.data, self.format),
            alignments=parsed.alignments,
            cell_formats=parsed.cell_formats,
            multiple_tables_data=multiple_tables_data,
        )

    def _empty_result(self, multiple: bool = False) -> MarkdownParseResult:
        return MarkdownParseResult(
            data=[],
            has_header=False,
            errors=[empty_data_issue()],
            metadata=ParseMetadata(row_count=0, column_count=0, format=self.format),
            multiple_tables_data=[] if multiple else None,
        )
