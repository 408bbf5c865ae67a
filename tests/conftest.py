"""Shared test fixtures for tabletext-core."""

import pytest


@pytest.fixture
def scores_markdown():
    """Small table exercising header, alignment, bold, link and numerics."""
    return (
        "| Name | Score |\n"
        "|:---|---:|\n"
        "| **Alice** | 95% |\n"
        "| [Bob](http://x.com) | 80 |"
    )


@pytest.fixture
def report_markdown():
    """Mixed document: prose, two captioned tables, more prose."""
    return "\n".join([
        "# Quarterly report",
        "",
        "Some introductory prose that is not a table.",
        "",
        "## **Sales** by region",
        "",
        "| Region | Revenue |",
        "|:--|--:|",
        "| North | $1,200.50 |",
        "| South | $980 |",
        "",
        "The second table follows after this paragraph.",
        "",
        "### Headcount",
        "| Team | People | Growth |",
        "|---|:---:|---:|",
        "| Core | 12人 | 10% |",
        "| Labs | 4人 | 25% |",
        "| Ops | 7人 | -5% |",
        "",
        "Closing remarks.",
    ])


@pytest.fixture
def customers_csv():
    """10-row CSV with quoted fields and a blank line in the middle."""
    rows = [
        "id,name,city,balance",
        '1,"Johnson, Alice",New York,1500.00',
        '2,Bob Smith,Chicago,2300.50',
        '3,"Charlie ""Chuck"" Brown",Houston,850.75',
        "",
        "4,Diana Prince,Phoenix,3200.00",
        "5,Eve Williams,San Antonio,1100.25",
        "6,Frank Castle,Dallas,4500.00",
        "7,Grace Hopper,San Jose,2750.30",
        "8,Hank Pym,Austin,990.00",
        "9,Ivy League,Columbus,1800.60",
        "10,Jack Ryan,Charlotte,3100.45",
    ]
    return "\n".join(rows)


@pytest.fixture
def markdown_file(tmp_path, report_markdown):
    path = tmp_path / "report.md"
    path.write_text(report_markdown, encoding="utf-8")
    return str(path)
