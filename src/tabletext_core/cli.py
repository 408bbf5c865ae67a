"""tabletext CLI -- Parse CSV, TSV and Markdown tables from the terminal."""

import json
import logging
from pathlib import Path

import click


def _read_input(text, file):
    if file:
        return Path(file).read_text(encoding="utf-8")
    if text:
        return text
    with click.open_file("-") as stream:
        return stream.read()


def _render_rows(console, rows, has_header, title, alignments=None):
    from rich.table import Table
    from rich.text import Text

    table = Table(title=title, show_header=has_header)
    width = max((len(row) for row in rows), default=0)
    header = rows[0] if has_header and rows else []

    for i in range(width):
        name = header[i] if i < len(header) else ""
        align = alignments[i].value if alignments and i < len(alignments) else "left"
        table.add_column(name, style="cyan", justify=align)

    for row in rows[1:] if has_header else rows:
        cells = list(row) + [""] * (width - len(row))
        table.add_row(*(Text(cell) for cell in cells))

    console.print(table)


def _print_issues(console, result):
    from rich.markup import escape

    for issue in result.errors:
        console.print(f"[yellow]line {issue.line}: {issue.code.value} -- {escape(issue.message)}[/yellow]")


@click.group()
@click.version_option(package_name="tabletext-core")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose):
    """tabletext -- Turn CSV, TSV and Markdown text into structured tables."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("text", required=False)
@click.option("--file", "-f", type=click.Path(exists=True), help="Read text from file.")
@click.option("--format", "fmt", default="auto",
              type=click.Choice(["auto", "csv", "tsv", "markdown"]),
              help="Input format (default: detect).")
@click.option("--no-header", is_flag=True, help="Do not treat the first row as a header.")
@click.option("--max-rows", default=100, show_default=True, type=click.IntRange(min=0),
              help="Maximum rows to read.")
@click.option("--max-columns", default=20, show_default=True, type=click.IntRange(min=1),
              help="Maximum cells per row.")
@click.option("--no-trim", is_flag=True, help="Keep whitespace around cells.")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def parse(text, file, fmt, no_header, max_rows, max_columns, no_trim, as_json):
    """Parse tabular data from text, a file or stdin."""
    from rich.console import Console
    from rich.text import Text

    from ._types import ParseOptions
    from .tables import TableRequest, prepare_table

    console = Console()
    text = _read_input(text, file)

    if not text:
        console.print("[red]No input text provided.[/red]")
        raise SystemExit(1)

    request = TableRequest(
        text=text,
        format=None if fmt == "auto" else fmt,
        parse_options=ParseOptions(
            has_header=not no_header,
            max_rows=max_rows,
            max_columns=max_columns,
            trim_whitespace=not no_trim,
        ),
        filename=Path(file).name if file else None,
    )
    response = prepare_table(request)
    result = response.parse_result

    if as_json:
        click.echo(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))
        if not response.success:
            raise SystemExit(1)
        return

    if result is None:
        for message in response.errors:
            console.print(Text(message, style="red"))
        raise SystemExit(1)

    _print_issues(console, result)
    if not response.success:
        console.print("[red]No rows could be parsed.[/red]")
        raise SystemExit(1)

    meta = result.metadata
    console.print(
        f"\n[bold]Parsed {meta.row_count} rows[/bold] "
        f"({meta.column_count} columns, {meta.format.value})\n"
    )
    _render_rows(
        console,
        result.data,
        result.has_header,
        response.table_name or "Parsed Table",
        getattr(result, "alignments", None),
    )


@cli.command()
@click.argument("text", required=False)
@click.option("--file", "-f", type=click.Path(exists=True), help="Read text from file.")
def detect(text, file):
    """Detect whether text is CSV, TSV or a Markdown table."""
    from rich.console import Console
    from rich.panel import Panel

    from .format_detect import detect_format_details

    console = Console()
    details = detect_format_details(_read_input(text, file) or "")

    console.print(Panel(
        f"Format: [bold cyan]{details['format']}[/bold cyan]\n"
        f"Reason: {details['reason']}\n"
        f"Lines: {details['line_count']}  |  Separator lines: {details['separator_lines']}  |  "
        f"Table rows: {details['table_rows']}\n"
        f"Avg tabs/line: {details['avg_tabs']}  |  Avg commas/line: {details['avg_commas']}",
        title="Format Detection",
    ))


@cli.command()
@click.argument("text", required=False)
@click.option("--file", "-f", type=click.Path(exists=True), help="Read text from file.")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def tables(text, file, as_json):
    """Extract every Markdown table from a mixed document."""
    from rich.console import Console
    from rich.text import Text

    from .tables import TableRequest, prepare_tables

    console = Console()
    response = prepare_tables(TableRequest(text=_read_input(text, file) or ""))

    if as_json:
        click.echo(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))
        if not response.success:
            raise SystemExit(1)
        return

    if not response.success:
        for message in response.errors:
            console.print(Text(message, style="red"))
        raise SystemExit(1)

    result = response.parse_result
    _print_issues(console, result)
    console.print(f"\n[bold]Found {len(result.multiple_tables_data)} tables[/bold]\n")

    for name, block in zip(response.table_names, result.multiple_tables_data):
        title = f"{name}: {block.title}" if block.title else name
        _render_rows(console, block.data, block.has_header, title, block.alignments)
