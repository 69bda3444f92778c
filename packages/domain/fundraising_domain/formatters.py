"""Number, currency and date formatting.

All helpers are stateless. Locale-dependent output takes an explicit
``DisplayFormat`` (default: the configured locale) instead of reading
process-wide locale state.

``to_fixed`` and ``format_js_number`` reproduce the number rendering the
downstream vesting platform expects in exported files: fixed-point rounding
on the exact binary value with ties away from zero, ``NaN``/``Infinity`` for
non-finite values, and integral numbers without a trailing ``.0``.
"""

import math
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional

from .config import DisplayFormat, settings
from .dates import DateLike, _now, to_datetime

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)


# =============================================================================
# Raw number rendering
# =============================================================================

def _non_finite(value: float) -> Optional[str]:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return None


def format_js_number(value: float) -> str:
    """Render a number the way the platform's number-to-string does.

    Shortest round-trip digits, no trailing ``.0`` for integral values, and
    exponent notation only outside 1e-7 <= |value| < 1e21.

    Examples:
        200000.0 → "200000"
        0.5 → "0.5"
        1e21 → "1e+21"
        1.5e-7 → "1.5e-7"
    """
    special = _non_finite(value)
    if special is not None:
        return special

    value = float(value)
    if value == 0:
        return "0"

    text = repr(value)
    number = Decimal(text)
    exponent = number.adjusted()

    if -7 < exponent < 21:
        result = format(number, "f")
        if "." in result:
            result = result.rstrip("0").rstrip(".")
        return result

    mantissa = text.partition("e")[0]
    if mantissa.endswith(".0"):
        mantissa = mantissa[:-2]
    sign = "-" if exponent < 0 else "+"
    return f"{mantissa}e{sign}{abs(exponent)}"


def to_fixed(value: float, digits: int) -> str:
    """Fixed-point string with exactly ``digits`` decimals.

    Rounds the exact binary value half away from zero, so ``to_fixed(1.005, 2)``
    is ``"1.00"`` (1.005 is stored as 1.00499...). Values of 1e21 or more fall
    back to ``format_js_number``.
    """
    special = _non_finite(value)
    if special is not None:
        return special

    value = float(value)
    if value == 0:
        value = 0.0  # drop the sign of -0.0
    if abs(value) >= 1e21:
        return format_js_number(value)

    with localcontext() as ctx:
        ctx.prec = 100
        quantum = Decimal(1).scaleb(-digits)
        rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
        return format(rounded, "f")


def _group(integer_digits: str, separator: str) -> str:
    groups = []
    while len(integer_digits) > 3:
        groups.insert(0, integer_digits[-3:])
        integer_digits = integer_digits[:-3]
    groups.insert(0, integer_digits)
    return separator.join(groups)


def _grouped_fixed(value: float, decimals: int, fmt: DisplayFormat, trim: bool = False) -> str:
    fixed = to_fixed(abs(value), decimals)
    integer_part, _, fraction = fixed.partition(".")
    if trim:
        fraction = fraction.rstrip("0")

    result = _group(integer_part, fmt.group_separator)
    if fraction:
        result = f"{result}{fmt.decimal_separator}{fraction}"
    return result


# =============================================================================
# Currency & numbers
# =============================================================================

def format_currency(
    amount: float,
    decimals: int = 0,
    compact: bool = False,
    fmt: Optional[DisplayFormat] = None,
) -> str:
    """Format an amount as currency.

    Args:
        amount: Amount in the format's currency
        decimals: Fraction digits (fixed, default 0)
        compact: Use the compact form ($1.5M, $450K)
        fmt: Display format (default: configured locale)

    Examples:
        format_currency(1000) → "$1,000"
        format_currency(1000.5, decimals=2) → "$1,000.50"
        format_currency(1500000, compact=True) → "$1.5M"
    """
    fmt = fmt or settings.display_format
    if compact:
        return format_compact_currency(amount, fmt)

    if math.isnan(amount):
        return f"{fmt.currency_symbol}NaN"

    sign = "-" if amount < 0 and to_fixed(abs(amount), decimals).strip("0.") else ""
    if math.isinf(amount):
        return f"{sign}{fmt.currency_symbol}∞"
    return f"{sign}{fmt.currency_symbol}{_grouped_fixed(amount, decimals, fmt)}"


def format_compact_currency(amount: float, fmt: Optional[DisplayFormat] = None) -> str:
    """Compact currency: $1.5M, $450K, plain below 1,000.

    Examples:
        2500000 → "$2.5M"
        50000 → "$50K"
        500 → "$500"
    """
    fmt = fmt or settings.display_format
    abs_amount = abs(amount)

    if abs_amount >= 1_000_000:
        return f"{fmt.currency_symbol}{to_fixed(amount / 1_000_000, 1)}M"
    if abs_amount >= 1_000:
        return f"{fmt.currency_symbol}{to_fixed(amount / 1_000, 0)}K"
    return format_currency(amount, fmt=fmt)


def format_number(value: float, fmt: Optional[DisplayFormat] = None) -> str:
    """Group thousands and keep at most three decimals (1000000 → "1,000,000")."""
    fmt = fmt or settings.display_format
    special = _non_finite(value)
    if special is not None:
        return "∞" if special == "Infinity" else "-∞" if special == "-Infinity" else special

    sign = "-" if value < 0 and to_fixed(abs(value), 3).strip("0.") else ""
    return f"{sign}{_grouped_fixed(value, 3, fmt, trim=True)}"


def calculate_percentage(value: float, total: float) -> int:
    """Whole-number percentage of ``value`` in ``total``; 0 when total is 0."""
    if total == 0:
        return 0
    return math.floor(value / total * 100 + 0.5)


def capitalize(text: str) -> str:
    if not text:
        return ""
    return text[0].upper() + text[1:].lower()


# =============================================================================
# Dates
# =============================================================================

def _calendar_date(value: DateLike) -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return to_datetime(value).date()


def format_date(value: DateLike, style: str = "short", fmt: Optional[DisplayFormat] = None) -> str:
    """Format a date with a month name.

    Args:
        value: Date to format
        style: "short" (Jan 15, 2024) or "long" (January 15, 2024)
        fmt: Display format (default: configured locale)

    Raises:
        ValueError: If style is unknown
    """
    if style not in ("short", "long"):
        raise ValueError(f"Unknown date style '{style}'. Use 'short' or 'long'")

    fmt = fmt or settings.display_format
    day = _calendar_date(value)
    names = MONTH_NAMES if style == "long" else MONTH_ABBREVIATIONS
    month = names[day.month - 1]

    if fmt.numeric_date_order == "DMY":
        return f"{day.day} {month} {day.year}"
    if fmt.numeric_date_order == "YMD":
        return f"{day.year} {month} {day.day}"
    return f"{month} {day.day}, {day.year}"


def format_locale_date(value: DateLike, fmt: Optional[DisplayFormat] = None) -> str:
    """Numeric locale date, e.g. "1/15/2024" (en-US) or "15/01/2024" (en-GB).

    Aware datetimes are converted to UTC first; naive ones are taken as UTC.
    """
    fmt = fmt or settings.display_format
    day = _calendar_date(value)

    width = 2 if fmt.zero_pad_numeric_date else 1
    parts = {
        "D": f"{day.day:0{width}d}",
        "M": f"{day.month:0{width}d}",
        "Y": str(day.year),
    }
    return fmt.numeric_date_separator.join(parts[key] for key in fmt.numeric_date_order)


def format_relative_time(value: DateLike, now: Optional[DateLike] = None) -> str:
    """Time elapsed since ``value`` ("5 minutes ago", "1 hour ago", "3 days ago")."""
    diff_ms = (_now(now) - to_datetime(value)).total_seconds() * 1000
    minutes = math.floor(diff_ms / 60000)
    hours = math.floor(minutes / 60)
    days = math.floor(hours / 24)

    if minutes < 60:
        return "1 minute ago" if minutes == 1 else f"{minutes} minutes ago"
    if hours < 24:
        return "1 hour ago" if hours == 1 else f"{hours} hours ago"
    if days == 1:
        return "1 day ago"
    return f"{days} days ago"
