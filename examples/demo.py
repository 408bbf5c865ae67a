"""tabletext-core -- Quick demo.

Run: python examples/demo.py
"""

REPORT = """# Quarterly report

## Sales by region

| Region | Revenue |
|:--|--:|
| **North** | $1,200.50 |
| [South](https://example.com/south) | $980 |

Headcount follows.

### Headcount
| Team | People | Growth |
|---|:---:|---:|
| Core | 12人 | 10% |
| Labs | 4人 | *25%* and rising |
"""


def main():
    from tabletext_core import detect_format, get_parser, prepare_tables, to_dataframe

    # 1. Detect and parse the first table
    print("=" * 60)
    print("1. DETECT & PARSE")
    print("=" * 60)
    fmt = detect_format(REPORT)
    result = get_parser(fmt).parse(REPORT)
    print(f"  Format: {fmt.value}")
    print(f"  Rows: {result.metadata.row_count}, Columns: {result.metadata.column_count}")
    print(f"  Alignments: {[a.value for a in result.alignments]}")
    for row in result.cell_formats[1:]:
        print(f"    {[cell.to_dict() for cell in row]}")
    print()

    # 2. Every table in the document
    print("=" * 60)
    print("2. ALL TABLES")
    print("=" * 60)
    response = prepare_tables({"text": REPORT})
    for name, block in zip(response.table_names, response.parse_result.multiple_tables_data):
        print(f"  {name}: {block.title} ({len(block.data)} rows)")
    print()

    # 3. Hand off to pandas
    print("=" * 60)
    print("3. DATAFRAME")
    print("=" * 60)
    print(to_dataframe(response.parse_result, table_index=1))
    print()

    print("Done! Try the CLI: tabletext tables --file report.md")


if __name__ == "__main__":
    main()
