"""Convert parse results into pandas DataFrames and record dicts."""

from typing import Any, Dict, List, Optional, Set

import pandas as pd

from ._types import MarkdownParseResult, ParseResult


def _select(result: ParseResult, table_index: Optional[int]):
    """Return (rows, has_header) for the whole result or one table block."""
    if table_index is None:
        return result.data, result.has_header

    blocks = getattr(result, "multiple_tables_data", None)
    if not blocks:
        raise ValueError("Result has no multiple_tables_data to index")
    if not 0 <= table_index < len(blocks):
        raise IndexError(f"Table index {table_index} out of range (0-{len(blocks) - 1})")
    block = blocks[table_index]
    return block.data, block.has_header


def _columns(header: List[str], width: int) -> List[str]:
    columns: List[str] = []
    used: Set[str] = set()
    for i in range(width):
        base = (header[i] if i < len(header) else "") or f"col_{i}"
        name, n = base, 0
        while name in used:
            n += 1
            name = f"{base}_{n}"
        used.add(name)
        columns.append(name)
    return columns


def to_dataframe(result: ParseResult, table_index: Optional[int] = None) -> pd.DataFrame:
    """Build a DataFrame from a parse result.

    Args:
        result: Any ParseResult or MarkdownParseResult.
        table_index: Pick one block of ``multiple_tables_data`` instead of the
            top-level rows.

    Returns:
        DataFrame whose columns come from the header row when the result has
        one (missing names become ``col_<i>``). Short rows are padded with None.

    Raises:
        ValueError: If *table_index* is given but the result has no blocks.
        IndexError: If *table_index* is out of range.
    """
    rows, has_header = _select(result, table_index)
    if not rows:
        return pd.DataFrame()

    header: List[str] = list(rows[0]) if has_header else []
    body = rows[1:] if has_header else rows
    width = max(len(row) for row in rows)
    columns = _columns(header, width)
    padded = [list(row) + [None] * (width - len(row)) for row in body]
    return pd.DataFrame(padded, columns=columns)


def to_records(
    result: ParseResult,
    max_rows: Optional[int] = None,
    table_index: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Header-keyed row dicts, optionally capped at *max_rows*."""
    df = to_dataframe(result, table_index)
    if max_rows is not None:
        df = df.head(max_rows)
    return df.to_dict(orient="records")


def to_dataframes(result: MarkdownParseResult) -> List[pd.DataFrame]:
    """One DataFrame per table block (or the single table when there are none)."""
    if not result.multiple_tables_data:
        return [to_dataframe(result)]
    return [to_dataframe(result, i) for i in range(len(result.multiple_tables_data))]
