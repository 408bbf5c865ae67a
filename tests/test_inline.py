"""Tests for inline cell formatting and numeric detection."""

import pytest

from tabletext_core.parsers._inline import classify_cell, strip_emphasis, tokenize_inline
from tabletext_core.parsers._numeric import parse_numeric


class TestFullCellClassification:
    def test_image(self):
        fmt = classify_cell("![Company logo](https://x.com/logo.png)")
        assert fmt.is_image is True
        assert fmt.image_alt == "Company logo"
        assert fmt.image_url == "https://x.com/logo.png"
        assert fmt.text == "Company logo"

    def test_image_without_alt(self):
        fmt = classify_cell("![](pic.png)")
        assert fmt.is_image is True
        assert fmt.text == "Image"
        assert fmt.image_alt == ""

    def test_link_strips_emphasis(self):
        fmt = classify_cell("[**Docs**](https://docs.example.com)")
        assert fmt.is_link is True
        assert fmt.text == "Docs"
        assert fmt.link_url == "https://docs.example.com"
        assert fmt.is_bold is None

    @pytest.mark.parametrize("raw", ["***both***", "___both___"])
    def test_bold_italic(self, raw):
        fmt = classify_cell(raw)
        assert (fmt.text, fmt.is_bold, fmt.is_italic) == ("both", True, True)

    @pytest.mark.parametrize("raw", ["**bold**", "__bold__"])
    def test_bold(self, raw):
        fmt = classify_cell(raw)
        assert (fmt.text, fmt.is_bold, fmt.is_italic) == ("bold", True, None)

    @pytest.mark.parametrize("raw", ["*it*", "_it_"])
    def test_italic(self, raw):
        fmt = classify_cell(raw)
        assert (fmt.text, fmt.is_bold, fmt.is_italic) == ("it", None, True)

    def test_bold_beats_numeric(self):
        fmt = classify_cell("**95%**")
        assert fmt.is_bold is True
        assert fmt.is_numeric is None
        assert fmt.text == "95%"

    def test_plain(self):
        assert classify_cell("hello world").to_dict() == {"text": "hello world"}

    def test_spaced_markers_are_not_emphasis(self):
        assert classify_cell("** not bold **").to_dict() == {"text": "** not bold **"}
        assert classify_cell("2 * 3 * 4").to_dict() == {"text": "2 * 3 * 4"}

    def test_intraword_underscores_are_plain(self):
        assert classify_cell("snake_case_name").to_dict() == {"text": "snake_case_name"}


class TestMixedSegments:
    def test_bold_then_link(self):
        fmt = classify_cell("**Bold** and [link](url)")
        assert fmt.text == "Bold and link"
        assert len(fmt.segments) >= 2
        assert [s.text for s in fmt.segments] == ["Bold", " and ", "link"]

        bold, plain, link = fmt.segments
        assert (bold.start, bold.end, bold.is_bold) == (0, 4, True)
        assert (plain.start, plain.end, plain.is_bold) == (4, 9, None)
        assert (link.start, link.end, link.is_link, link.link_url) == (9, 13, True, "url")
        assert fmt.is_bold is None
        assert fmt.is_link is None

    def test_link_then_text(self):
        fmt = classify_cell("[site](http://a.b) (mirror)")
        assert [s.text for s in fmt.segments] == ["site", " (mirror)"]
        assert fmt.segments[0].is_link is True

    def test_positions_follow_display_text(self):
        fmt = classify_cell("a ***b*** c *d*")
        for seg in fmt.segments:
            assert fmt.text[seg.start:seg.end] == seg.text
        assert fmt.text == "a b c d"
        assert fmt.segments[1].is_bold and fmt.segments[1].is_italic
        assert fmt.segments[3].is_italic and not fmt.segments[3].is_bold

    def test_two_full_wraps_are_mixed(self):
        fmt = classify_cell("***a*** and ***b***")
        assert fmt.is_bold is None
        assert [s.text for s in fmt.segments] == ["a", " and ", "b"]

    def test_link_wins_over_enclosing_emphasis(self):
        spans = tokenize_inline("**see [here](u) now**")
        assert [s.text for s in spans] == ["**see ", "here", " now**"]
        assert spans[1].link_url == "u"
        assert not any(s.bold for s in spans)

    def test_emphasis_inside_link_text_not_marked(self):
        fmt = classify_cell("go to [*the* page](p) now")
        link = fmt.segments[1]
        assert link.text == "the page"
        assert link.is_italic is None

    def test_embedded_image_stays_plain(self):
        spans = tokenize_inline("![x](y) and **z**")
        assert spans[0].text == "![x](y) and "
        assert spans[0].link_url is None
        assert spans[1].bold

    def test_unbalanced_triple_marker_splits_into_runs(self):
        fmt = classify_cell("***a** b*")
        assert fmt.text == "a b"
        assert [(s.text, s.is_bold, s.is_italic) for s in fmt.segments] == [
            ("a", True, True),
            (" b", None, True),
        ]

        fmt = classify_cell("***a* b**")
        assert fmt.text == "a b"
        assert [(s.text, s.is_bold, s.is_italic) for s in fmt.segments] == [
            ("a", True, True),
            (" b", True, None),
        ]

    def test_bold_never_swallows_a_marker(self):
        spans = tokenize_inline("***a**")
        assert [(s.text, s.bold) for s in spans] == [("*", False), ("a", True)]
        assert strip_emphasis("***a** b*") == "a b"

    def test_single_plain_segment_discarded(self):
        assert classify_cell("nothing here").segments is None


class TestStripEmphasis:
    def test_strip(self):
        assert strip_emphasis("**Sales** by *region*") == "Sales by region"
        assert strip_emphasis("plain") == "plain"


class TestNumeric:
    def test_currency(self):
        fmt = classify_cell("$1,200.50")
        assert fmt.is_numeric is True
        assert fmt.currency == "$"
        assert fmt.numeric_value == 1200.5
        assert fmt.unit is None
        assert fmt.text == "$1,200.50"

    @pytest.mark.parametrize("raw,symbol,value", [
        ("¥1,000", "¥", 1000.0),
        ("￥500", "￥", 500.0),
        ("€ 3.5", "€", 3.5),
        ("£20", "£", 20.0),
        ("₹100", "₹", 100.0),
        ("₩5,000", "₩", 5000.0),
        ("₽99", "₽", 99.0),
        ("-$5", "$", -5.0),
    ])
    def test_currency_symbols(self, raw, symbol, value):
        number = parse_numeric(raw)
        assert number.currency == symbol
        assert number.value == value

    def test_percent(self):
        assert parse_numeric("12.5%") == (12.5, None, "%")
        assert parse_numeric("-5%").value == -5.0
        assert parse_numeric("80％").unit == "%"

    @pytest.mark.parametrize("raw,unit,value", [
        ("12人", "人", 12.0),
        ("3時間", "時間", 3.0),
        ("1,500円", "円", 1500.0),
        ("70kg", "kg", 70.0),
        ("5 km", "km", 5.0),
        ("250ms", "ms", 250.0),
        ("30 min", "min", 30.0),
    ])
    def test_units(self, raw, unit, value):
        number = parse_numeric(raw)
        assert number.unit == unit
        assert number.value == value
        assert number.currency is None

    def test_bare_numbers(self):
        assert parse_numeric("42").value == 42.0
        assert parse_numeric("1,234,567").value == 1234567.0
        assert parse_numeric("-0.75").value == -0.75
        assert parse_numeric(".5").value == 0.5

    @pytest.mark.parametrize("raw", ["", "abc", "1,2", "12,34,5", "1.2.3", "$", "5 apples", "%"])
    def test_not_numbers(self, raw):
        assert parse_numeric(raw) is None
