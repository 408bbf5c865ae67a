"""Shared result types for the tabletext-core library.

Every parser returns one of these Pydantic models. They are frozen plain data:
``to_dict()`` (or ``model_dump(by_alias=True)``) gives the camelCase wire form
handed to renderers across a process or message boundary.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TableFormat(str, Enum):
    CSV = "csv"
    TSV = "tsv"
    MARKDOWN = "markdown"


class ColumnAlignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class ErrorCode(str, Enum):
    """Error codes shared with the calling layer.

    Only EMPTY_DATA, COLUMN_LIMIT_EXCEEDED and PARSE_ERROR are produced by the
    parsers; the rest belong to callers and renderers.
    """
    INVALID_FORMAT = "INVALID_FORMAT"
    EMPTY_DATA = "EMPTY_DATA"
    TOO_LARGE = "TOO_LARGE"
    FONT_LOAD_FAILED = "FONT_LOAD_FAILED"
    NO_TABLE_FOUND = "NO_TABLE_FOUND"
    ALIGNMENT_MISMATCH = "ALIGNMENT_MISMATCH"
    COLUMN_LIMIT_EXCEEDED = "COLUMN_LIMIT_EXCEEDED"
    PARSE_ERROR = "PARSE_ERROR"
    ROW_PARSE_ERROR = "ROW_PARSE_ERROR"


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe camelCase dict, unset optional fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# -- Options --

class ParseOptions(_Model):
    """Options recognized by every parser."""
    has_header: bool = True
    max_rows: int = Field(default=100, ge=0)
    max_columns: int = Field(default=20, ge=1)
    trim_whitespace: bool = True


# -- Result types --

class ParseIssue(_Model):
    """A recorded, non-fatal problem with one input line."""
    line: int
    message: str
    code: ErrorCode


class ParseMetadata(_Model):
    row_count: int = 0
    column_count: int = 0
    format: TableFormat


class ParseResult(_Model):
    """Universal output of any parser."""
    data: List[List[str]] = Field(default_factory=list)
    has_header: bool = False
    errors: List[ParseIssue] = Field(default_factory=list)
    metadata: ParseMetadata

    @property
    def is_fatal(self) -> bool:
        """True when the parse produced errors and no rows at all."""
        return bool(self.errors) and not self.data


class CellSegment(_Model):
    """A run of a cell's display text sharing one formatting treatment.

    ``start``/``end`` index into the display text, not the markdown source.
    """
    text: str
    start: int
    end: int
    is_bold: Optional[bool] = None
    is_italic: Optional[bool] = None
    is_link: Optional[bool] = None
    link_url: Optional[str] = None


class CellFormat(_Model):
    """Rich content of a single Markdown cell."""
    text: str
    is_bold: Optional[bool] = None
    is_italic: Optional[bool] = None
    is_link: Optional[bool] = None
    link_url: Optional[str] = None
    is_image: Optional[bool] = None
    image_url: Optional[str] = None
    image_alt: Optional[str] = None
    is_numeric: Optional[bool] = None
    numeric_value: Optional[float] = None
    currency: Optional[str] = None
    unit: Optional[str] = None
    segments: Optional[List[CellSegment]] = None


class TableBlock(_Model):
    """One independently parsed table from a multi-table document."""
    data: List[List[str]] = Field(default_factory=list)
    alignments: List[ColumnAlignment] = Field(default_factory=list)
    cell_formats: List[List[CellFormat]] = Field(default_factory=list)
    has_header: bool = False
    title: Optional[str] = None


class MarkdownParseResult(ParseResult):
    """Markdown output: alignments, per-cell formats, optional table blocks."""
    alignments: List[ColumnAlignment] = Field(default_factory=list)
    cell_formats: List[List[CellFormat]] = Field(default_factory=list)
    multiple_tables_data: Optional[List[TableBlock]] = None
