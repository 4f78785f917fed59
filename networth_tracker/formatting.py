"""Currency, date and chart formatting for display."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Union

from networth_tracker.models.snapshot import TrendPoint

Number = Union[Decimal, int, float]

MILLION = Decimal("1000000")
THOUSAND = Decimal("1000")


def _as_decimal(value: Number) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def format_currency(value: Number, symbol: str = "$", cents: bool = False) -> str:
    """
    Format an amount with sign and thousands separators.

    Millions are abbreviated with two decimals ("$1.25M"). Whole units are
    shown unless `cents` is set.

    >>> format_currency(Decimal("-3800"))
    '-$3,800'
    """
    amount = _as_decimal(value)
    sign = "-" if amount < 0 else ""
    magnitude = abs(amount)

    if magnitude >= MILLION:
        return f"{sign}{symbol}{magnitude / MILLION:.2f}M"
    if cents:
        return f"{sign}{symbol}{magnitude:,.2f}"
    whole = magnitude.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{sign}{symbol}{whole:,}"


def format_signed_change(value: Number, symbol: str = "$") -> str:
    """Change with an explicit '+' for gains."""
    prefix = "+" if _as_decimal(value) >= 0 else ""
    return prefix + format_currency(value, symbol)


def short_label(value: Number, symbol: str = "$") -> str:
    """Compact unsigned axis label: $1.2M, $15k, $250."""
    magnitude = abs(_as_decimal(value))
    if magnitude >= MILLION:
        return f"{symbol}{magnitude / MILLION:.1f}M"
    if magnitude >= THOUSAND:
        return f"{symbol}{magnitude / THOUSAND:.0f}k"
    return f"{symbol}{magnitude.quantize(Decimal('1'), rounding=ROUND_HALF_UP)}"


def format_short_date(moment: datetime) -> str:
    """'Mar 5' style date for chart labels."""
    return f"{moment:%b} {moment.day}"


def trend_chart_rows(points: Iterable[TrendPoint]) -> list[dict]:
    """
    Rows for a net worth line chart.

    The x value is the snapshot time itself, so snapshots taken on the same
    day stay separate points and the chart lays them out on a time axis.
    """
    return [{"date": p.date, "Net worth": float(p.net_worth)} for p in points]
