"""Tests for format detection."""

import pytest

from tabletext_core import TableFormat, detect_format, detect_format_details, format_detect
from tabletext_core.parsers import _blocks


class TestDetectFormat:
    def test_markdown(self, scores_markdown):
        assert detect_format(scores_markdown) == TableFormat.MARKDOWN

    def test_markdown_in_mixed_document(self, report_markdown):
        assert detect_format(report_markdown) == TableFormat.MARKDOWN

    def test_tsv(self):
        assert detect_format("a\tb\tc\n1\t2\t3") == TableFormat.TSV

    def test_csv(self, customers_csv):
        assert detect_format(customers_csv) == TableFormat.CSV

    def test_tabs_beat_commas(self):
        assert detect_format("a,b\tc\nd\te,f") == TableFormat.TSV

    def test_too_few_tabs_is_csv(self):
        assert detect_format("a,b\tc\nd,e\nf,g") == TableFormat.CSV

    def test_pipe_rows_without_separator_are_not_markdown(self):
        assert detect_format("| a | b |\n| 1 | 2 |") == TableFormat.CSV

    @pytest.mark.parametrize("separator", ["|   |   |", "| : | : |", "|:|:|"])
    def test_separator_without_dashes(self, separator):
        text = f"| a | b |\n{separator}\n| 1 | 2 |"
        assert detect_format(text) == TableFormat.MARKDOWN
        assert detect_format_details(text)["separator_lines"] == 1

    def test_shares_row_predicate_with_parsers(self):
        assert format_detect.is_table_row is _blocks.is_table_row
        assert detect_format_details("||\n| a |")["table_rows"] == 1

    @pytest.mark.parametrize("text", ["", "   \n\n", "just some words"])
    def test_defaults_to_csv(self, text):
        assert detect_format(text) == TableFormat.CSV

    def test_returns_enum_equal_to_string(self, scores_markdown):
        assert detect_format(scores_markdown) == "markdown"


class TestDetectFormatDetails:
    def test_markdown_signals(self, scores_markdown):
        details = detect_format_details(scores_markdown)
        assert details["format"] == "markdown"
        assert details["line_count"] == 4
        assert details["separator_lines"] == 1
        assert details["table_rows"] == 4
        assert "separator" in details["reason"]

    def test_averages(self):
        details = detect_format_details("a\tb\tc\nd\te")
        assert details["format"] == "tsv"
        assert details["avg_tabs"] == 1.5
        assert details["avg_commas"] == 0.0

    def test_blank_lines_ignored(self):
        details = detect_format_details("a,b\n\n\nc,d\n")
        assert details["line_count"] == 2
        assert details["avg_commas"] == 1.0

    def test_empty(self):
        details = detect_format_details("")
        assert details["format"] == "csv"
        assert details["line_count"] == 0
        assert details["reason"] == "empty input"
