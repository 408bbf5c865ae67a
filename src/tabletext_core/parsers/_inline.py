"""Inline Markdown formatting inside table cells.

Cells are classified as image, link, bold/italic, numeric, mixed or plain.
Mixed cells are split by a small left-to-right lexer into a flat list of
non-overlapping spans. At any position the lexer tries, in priority order:
link, bold+italic, bold, italic, then falls back to a plain character. An
emphasis run is rejected if a link starts inside it, so links always win.
"""

import re
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from .._types import CellFormat, CellSegment
from ._numeric import parse_numeric

__all__ = ["classify_cell", "tokenize_inline", "strip_emphasis", "InlineSpan"]

_IMAGE_RE = re.compile(r"^!\[([^\]]*)\]\(([^)]+)\)$")
_FULL_LINK_RE = re.compile(r"^\[([^\]]+)\]\(([^)]+)\)$")
# Embedded links; "![..](..)" is image syntax, not a link.
_LINK_RE = re.compile(r"(?<!!)\[([^\[\]]+)\]\(([^)]+)\)")

# (marker, bold, italic) in priority order.
_EMPHASIS: Tuple[Tuple[str, bool, bool], ...] = (
    ("***", True, True),
    ("___", True, True),
    ("**", True, False),
    ("__", True, False),
    ("*", False, True),
    ("_", False, True),
)


class InlineSpan(NamedTuple):
    text: str
    bold: bool = False
    italic: bool = False
    link_url: Optional[str] = None

    @property
    def formatted(self) -> bool:
        return self.bold or self.italic or self.link_url is not None


def _can_open(text: str, marker: str, opening: int) -> bool:
    start = opening + len(marker)
    char = marker[0]
    if start >= len(text) or text[start].isspace() or text[start] == char:
        return False
    if char == "_" and opening > 0 and text[opening - 1].isalnum():
        return False
    return True


def _find_close(text: str, marker: str, start: int) -> int:
    """Index of the first valid closing *marker* at or after *start*, or -1.

    A closer never touches another marker character on either side.
    """
    char = marker[0]
    close = text.find(marker, start)
    while close != -1:
        after = close + len(marker)
        valid = not text[close - 1].isspace() and text[close - 1] != char
        if after < len(text) and (text[after] == char or (char == "_" and text[after].isalnum())):
            valid = False
        if valid:
            return close
        close = text.find(marker, close + 1)
    return -1


def _match_nested(
    text: str, pos: int, char: str, link_starts: Sequence[int]
) -> Optional[Tuple[List[InlineSpan], int]]:
    """Split an unbalanced triple run such as ``***a** b*`` or ``***a* b**``.

    The inner run closes first and is bold+italic; the rest keeps only the
    outer treatment.
    """
    start = pos + 3
    for inner, outer in ((char * 2, char), (char, char * 2)):
        inner_close = _find_close(text, inner, start + 1)
        if inner_close == -1:
            continue
        rest = inner_close + len(inner)
        outer_close = _find_close(text, outer, rest + 1)
        if outer_close == -1:
            continue
        end = outer_close + len(outer)
        if any(pos < link < end for link in link_starts):
            continue
        outer_bold = len(outer) == 2
        return [
            InlineSpan(text[start:inner_close], bold=True, italic=True),
            InlineSpan(text[rest:outer_close], bold=outer_bold, italic=not outer_bold),
        ], end
    return None


def _match_emphasis(
    text: str, pos: int, link_starts: Sequence[int]
) -> Optional[Tuple[List[InlineSpan], int]]:
    for marker, bold, italic in _EMPHASIS:
        if not text.startswith(marker, pos) or not _can_open(text, marker, pos):
            continue
        close = _find_close(text, marker, pos + len(marker) + 1)
        if close == -1:
            if len(marker) == 3:
                nested = _match_nested(text, pos, marker[0], link_starts)
                if nested is not None:
                    return nested
            continue
        end = close + len(marker)
        if any(pos < start < end for start in link_starts):
            continue
        return [InlineSpan(text[pos + len(marker):close], bold=bold, italic=italic)], end
    return None


def _scan(text: str, links: Dict[int, "re.Match[str]"]) -> List[InlineSpan]:
    spans: List[InlineSpan] = []
    plain: List[str] = []
    link_starts = sorted(links)

    def flush() -> None:
        if plain:
            spans.append(InlineSpan("".join(plain)))
            plain.clear()

    pos = 0
    while pos < len(text):
        link = links.get(pos)
        if link is not None:
            flush()
            spans.append(InlineSpan(strip_emphasis(link.group(1)), link_url=link.group(2)))
            pos = link.end()
            continue

        emphasis = _match_emphasis(text, pos, link_starts)
        if emphasis is not None:
            flush()
            matched, pos = emphasis
            spans.extend(matched)
            continue

        plain.append(text[pos])
        pos += 1

    flush()
    return spans


def tokenize_inline(text: str) -> List[InlineSpan]:
    """Split *text* into ordered, non-overlapping formatted and plain spans."""
    links = {match.start(): match for match in _LINK_RE.finditer(text)}
    return _scan(text, links)


def strip_emphasis(text: str) -> str:
    """Remove ``***``/``**``/``*`` (and underscore) emphasis markup."""
    return "".join(span.text for span in _scan(text, {}))


def _segments(spans: Sequence[InlineSpan]) -> List[CellSegment]:
    segments: List[CellSegment] = []
    position = 0
    for span in spans:
        end = position + len(span.text)
        segments.append(CellSegment(
            text=span.text,
            start=position,
            end=end,
            is_bold=span.bold or None,
            is_italic=span.italic or None,
            is_link=True if span.link_url is not None else None,
            link_url=span.link_url,
        ))
        position = end
    return segments


def classify_cell(
    raw: str,
    enable_images: bool = True,
    enable_numeric: bool = True,
    enable_partial_formatting: bool = True,
) -> CellFormat:
    """Classify one unescaped cell and strip its markdown syntax.

    Order: image, link, bold+italic, bold, italic, numeric, mixed, plain.
    """
    if enable_images:
        match = _IMAGE_RE.match(raw)
        if match:
            alt, url = match.group(1), match.group(2)
            return CellFormat(text=alt or "Image", is_image=True, image_url=url, image_alt=alt)

    match = _FULL_LINK_RE.match(raw)
    if match:
        return CellFormat(text=strip_emphasis(match.group(1)), is_link=True, link_url=match.group(2))

    spans = tokenize_inline(raw)
    if len(spans) == 1 and spans[0].formatted:
        span = spans[0]
        if span.link_url is not None:
            return CellFormat(text=span.text, is_link=True, link_url=span.link_url)
        return CellFormat(text=span.text, is_bold=span.bold or None, is_italic=span.italic or None)

    if enable_numeric:
        number = parse_numeric(raw)
        if number is not None:
            return CellFormat(
                text=raw,
                is_numeric=True,
                numeric_value=number.value,
                currency=number.currency,
                unit=number.unit,
            )

    if enable_partial_formatting and any(span.formatted for span in spans):
        segments = _segments(spans)
        return CellFormat(text="".join(s.text for s in segments), segments=segments)

    return CellFormat(text=raw)
