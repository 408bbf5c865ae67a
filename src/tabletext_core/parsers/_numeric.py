"""Numeric cell detection: currency, percentages, units, bare numbers."""

import re
from typing import NamedTuple, Optional

CURRENCY_SYMBOLS = ("¥", "￥", "$", "€", "£", "₹", "₩", "₽")

# Longest first so "時間" wins over "時" and "ms" over "m".
UNITS = tuple(sorted(
    [
        # CJK counters and time
        "円", "元", "個", "件", "人", "名", "回", "歳", "年", "ヶ月", "か月", "月",
        "日", "週", "時間", "分", "秒", "枚", "本", "台", "冊", "点", "倍",
        "万", "億", "千", "株", "社",
        # metric
        "kg", "g", "mg", "t", "km", "m", "cm", "mm", "L", "l", "mL", "ml",
        "KB", "kB", "MB", "GB", "TB",
        # time
        "h", "hr", "hrs", "min", "mins", "s", "sec", "ms",
        # misc
        "°C", "°F", "px", "pt", "pts",
    ],
    key=len,
    reverse=True,
))

_NUMBER = r"[+-]?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?|[+-]?\.\d+"

_CURRENCY_RE = re.compile(
    r"^(?P<sign>[+-]?)(?P<symbol>[" + re.escape("".join(CURRENCY_SYMBOLS)) + r"])\s*"
    r"(?P<number>" + _NUMBER + r")$"
)
_PERCENT_RE = re.compile(r"^(?P<number>" + _NUMBER + r")\s*(?P<unit>[%％])$")
_UNIT_RE = re.compile(
    r"^(?P<number>" + _NUMBER + r")\s*(?P<unit>"
    + "|".join(re.escape(u) for u in UNITS)
    + r")$"
)
_BARE_RE = re.compile(r"^(?:" + _NUMBER + r")$")


class NumericValue(NamedTuple):
    value: float
    currency: Optional[str] = None
    unit: Optional[str] = None


def _to_float(number: str) -> float:
    return float(number.replace(",", ""))


def parse_numeric(text: str) -> Optional[NumericValue]:
    """Classify *text* as a number, or return None.

    Checked in order: currency prefix, percentage, unit suffix, bare number.
    Grouping commas must sit on thousands boundaries and are dropped before
    conversion.
    """
    text = text.strip()
    if not text:
        return None

    match = _CURRENCY_RE.match(text)
    if match:
        value = _to_float(match.group("number"))
        if match.group("sign") == "-":
            value = -value
        return NumericValue(value, currency=match.group("symbol"))

    match = _PERCENT_RE.match(text)
    if match:
        return NumericValue(_to_float(match.group("number")), unit="%")

    match = _UNIT_RE.match(text)
    if match:
        return NumericValue(_to_float(match.group("number")), unit=match.group("unit"))

    if _BARE_RE.match(text):
        return NumericValue(_to_float(text))

    return None
