"""Parser interface and helpers shared by every format."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Union

from .._types import ErrorCode, ParseIssue, ParseMetadata, ParseOptions, ParseResult, TableFormat

__all__ = [
    "BaseParser",
    "OptionsLike",
    "resolve_options",
    "split_lines",
    "build_metadata",
    "empty_data_issue",
    "column_limit_issue",
    "parse_error_issue",
]

OptionsLike = Union[ParseOptions, Mapping[str, Any], None]


def resolve_options(options: OptionsLike = None) -> ParseOptions:
    """Coerce *options* into ParseOptions.

    Accepts a ParseOptions, a dict using either snake_case or camelCase keys,
    or None for the defaults.

    Raises:
        pydantic.ValidationError: If an option value is out of range.
    """
    if options is None:
        return ParseOptions()
    if isinstance(options, ParseOptions):
        return options
    return ParseOptions.model_validate(dict(options))


def split_lines(text: str) -> List[str]:
    """Split on newlines, treating CRLF and LF alike."""
    return text.replace("\r\n", "\n").split("\n")


def empty_data_issue() -> ParseIssue:
    return ParseIssue(line=1, message="Data is empty", code=ErrorCode.EMPTY_DATA)


def column_limit_issue(line: int, max_columns: int) -> ParseIssue:
    return ParseIssue(
        line=line,
        message=f"Row exceeds the maximum number of columns ({max_columns})",
        code=ErrorCode.COLUMN_LIMIT_EXCEEDED,
    )


def parse_error_issue(line: int, exc: Exception) -> ParseIssue:
    return ParseIssue(
        line=line,
        message=f"ParseError: {exc}",
        code=ErrorCode.PARSE_ERROR,
    )


class BaseParser(ABC):
    """Common contract for all table parsers.

    Parsers hold no per-call state, so one instance can be shared freely.
    """

    format: TableFormat

    @abstractmethod
    def parse(self, text: str, options: OptionsLike = None) -> ParseResult:
        """Parse *text* into a ParseResult. Never raises for bad row content."""

    @abstractmethod
    def validate(self, text: str) -> bool:
        """Cheap check whether *text* looks parseable by this parser."""

    def _empty_result(self) -> ParseResult:
        return ParseResult(
            data=[],
            has_header=False,
            errors=[empty_data_issue()],
            metadata=ParseMetadata(row_count=0, column_count=0, format=self.format),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(format={self.format.value!r})"


def build_metadata(data: List[List[str]], fmt: TableFormat) -> ParseMetadata:
    return ParseMetadata(
        row_count=len(data),
        column_count=len(data[0]) if data else 0,
        format=fmt,
    )
