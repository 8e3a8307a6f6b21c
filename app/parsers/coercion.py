"""
app/parsers/coercion.py

Value coercion shared by the sales and product row parsers.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%d %b %Y",
    "%b %d %Y",
    "%b %d, %Y",
    "%B %d, %Y",
)

_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_PREFIX = re.compile(r"^[+-]?\d+")
_MAX_MAGNITUDE_DIGITS = 15
_CENTS = Decimal("0.01")


def parse_number(value: str | None) -> Decimal | None:
    """
    Parse a plain decimal literal; return None for anything else.

    Accepts optional sign, fraction and exponent. Rejects empty strings,
    ``nan``/``inf``, digit separators and out-of-range magnitudes.
    """

    if value is None:
        return None
    raw = value.strip()
    if not raw or not _NUMBER_PATTERN.match(raw):
        return None
    try:
        parsed = Decimal(raw)
    except InvalidOperation:
        return None
    if not parsed.is_finite() or (parsed != 0 and parsed.adjusted() >= _MAX_MAGNITUDE_DIGITS):
        return None
    return parsed


def parse_quantity(value: str | None) -> int | None:
    """
    Read a unit count the way an integer parse reads a numeric literal.

    The literal must pass ``parse_number``; only its leading digits count,
    so ``"3.7"`` is 3 and ``"1e3"`` is 1. A literal with no leading digit
    (``".5"``) is not a quantity.
    """

    if parse_number(value) is None:
        return None
    match = _INTEGER_PREFIX.match(value.strip())
    if match is None:
        return None
    return int(match.group())


def quantize_money(value: Decimal) -> Decimal:
    quantized = value.quantize(_CENTS, rounding=ROUND_HALF_UP)
    if quantized == 0:
        return Decimal("0.00")
    return quantized


def format_money(value: Decimal) -> str:
    """
    Render an amount with exactly two fractional digits.
    """

    return format(quantize_money(value), "f")


def parse_calendar_date(value: str | None) -> date | None:
    """
    Parse ISO-ish date and date-time strings into a calendar date.

    Time-of-day and offsets are dropped; the date is taken as written.
    """

    if value is None:
        return None
    raw = value.strip()
    if not raw:
        return None

    normalized = raw[:-1] + "+00:00" if raw.endswith(("Z", "z")) else raw
    try:
        return datetime.fromisoformat(normalized).date()
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue

    return None
