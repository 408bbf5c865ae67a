"""Request-level helpers for callers that turn text into tables.

Wraps detection and parsing behind a ``TableRequest`` envelope and applies the
caller policy: a parse only fails when it produced errors and no rows.
Nothing here raises; unexpected exceptions come back as failed responses.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from ._types import MarkdownParseResult, ParseOptions, ParseResult, TableFormat, _Model
from .format_detect import detect_format
from .parsers import get_parser, get_supported_formats

__all__ = [
    "TableRequest",
    "TableResponse",
    "preview_table",
    "prepare_table",
    "prepare_tables",
    "table_summary",
    "get_supported_formats",
]

logger = logging.getLogger(__name__)

CREATED_BY = "tabletext-core"
_EXTENSION_RE = re.compile(r"\.[^/.]+$")


class TableRequest(_Model):
    """Text to parse plus how to parse it."""
    text: str
    format: Optional[TableFormat] = None
    parse_options: ParseOptions = Field(default_factory=ParseOptions)
    filename: Optional[str] = None


class TableResponse(_Model):
    success: bool
    format: Optional[TableFormat] = None
    parse_result: Optional[Union[MarkdownParseResult, ParseResult]] = None
    errors: List[str] = Field(default_factory=list)
    table_name: Optional[str] = None
    table_names: Optional[List[str]] = None
    summary: Optional[Dict[str, Any]] = None


def table_name_from_filename(filename: str) -> str:
    """``"sales.csv"`` -> ``"Table(sales)"``."""
    return f"Table({_EXTENSION_RE.sub('', filename)})"


def table_summary(
    result: ParseResult,
    filename: Optional[str] = None,
    fmt: Optional[TableFormat] = None,
) -> Dict[str, Any]:
    """Metadata a renderer can store next to the table it draws."""
    return {
        "createdBy": CREATED_BY,
        "format": (fmt or result.metadata.format).value,
        "hasHeader": result.has_header,
        "rowCount": len(result.data),
        "columnCount": len(result.data[0]) if result.data else 0,
        "filename": filename,
        "createdAt": datetime.now(timezone.utc).isoformat(),
    }


def _coerce(request: Union[TableRequest, Dict[str, Any]]) -> TableRequest:
    if isinstance(request, TableRequest):
        return request
    return TableRequest.model_validate(request)


def _parse(request: TableRequest):
    fmt = request.format or detect_format(request.text)
    result = get_parser(fmt).parse(request.text, request.parse_options)
    return fmt, result


def preview_table(request: Union[TableRequest, Dict[str, Any]]) -> TableResponse:
    """Parse without judging: success unless something raised."""
    try:
        req = _coerce(request)
        fmt, result = _parse(req)
    except Exception as exc:
        logger.warning("Preview failed: %s", exc)
        return TableResponse(success=False, errors=[str(exc)])

    return TableResponse(
        success=True,
        format=fmt,
        parse_result=result,
        errors=[issue.message for issue in result.errors],
    )


def prepare_table(request: Union[TableRequest, Dict[str, Any]]) -> TableResponse:
    """Parse a request for rendering.

    Fails only when the result has errors and no rows; otherwise errors are
    passed along as warnings with the partial data.
    """
    try:
        req = _coerce(request)
        fmt, result = _parse(req)
    except Exception as exc:
        logger.warning("Table preparation failed: %s", exc)
        return TableResponse(success=False, errors=[str(exc)])

    messages = [issue.message for issue in result.errors]
    if result.is_fatal:
        return TableResponse(success=False, format=fmt, parse_result=result, errors=messages)

    if messages:
        logger.info("Prepared table with %d warnings", len(messages))
    return TableResponse(
        success=True,
        format=fmt,
        parse_result=result,
        errors=messages,
        table_name=table_name_from_filename(req.filename) if req.filename else None,
        summary=table_summary(result, req.filename, fmt),
    )


def prepare_tables(request: Union[TableRequest, Dict[str, Any]]) -> TableResponse:
    """Parse every Markdown table in the request text."""
    try:
        req = _coerce(request)
        result = get_parser(TableFormat.MARKDOWN).parse_multiple_tables(req.text, req.parse_options)
    except Exception as exc:
        logger.warning("Multi-table preparation failed: %s", exc)
        return TableResponse(success=False, errors=[str(exc)])

    if not result.multiple_tables_data:
        return TableResponse(
            success=False,
            format=TableFormat.MARKDOWN,
            parse_result=result,
            errors=["No tables found in markdown text"],
        )

    return TableResponse(
        success=True,
        format=TableFormat.MARKDOWN,
        parse_result=result,
        errors=[issue.message for issue in result.errors],
        table_names=[f"Table {i}" for i in range(1, len(result.multiple_tables_data) + 1)],
    )
