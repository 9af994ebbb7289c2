"""Named reporting periods for the movements ledger."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from cartera.core.exceptions import ValidationError

DEFAULT_HISTORY_START = date(2010, 1, 1)

# key -> (label, days back from the end date); None marks calendar-based presets
PERIOD_PRESETS: dict[str, tuple[str, Optional[int]]] = {
    "1w": ("1 Week", 7),
    "1m": ("1 Month", 30),
    "3m": ("3 Months", 90),
    "6m": ("6 Months", 180),
    "ytd": ("Year to Date", None),
    "1y": ("1 Year", 365),
    "prev-year": ("Previous Year", None),
    "all": ("All Time", None),
}


@dataclass(frozen=True)
class Period:
    """Inclusive date range with a preset key and display label."""

    key: str
    label: str
    start: date
    end: date


def resolve_period(
    key: str,
    end: date,
    history_start: date = DEFAULT_HISTORY_START,
) -> Period:
    """
    Resolve a preset key into a concrete date range ending at ``end``.

    Relative presets count calendar days back from ``end``; ``ytd`` starts on
    January 1st of the end year; ``prev-year`` covers the whole calendar year
    before ``end`` regardless of ``end`` itself.
    """
    normalized = (key or "").strip().lower()
    if normalized not in PERIOD_PRESETS:
        raise ValidationError(f"Unknown period: {key}")

    label, days = PERIOD_PRESETS[normalized]
    if days is not None:
        return Period(normalized, label, end - timedelta(days=days), end)
    if normalized == "ytd":
        return Period(normalized, label, date(end.year, 1, 1), end)
    if normalized == "prev-year":
        year = end.year - 1
        return Period(normalized, label, date(year, 1, 1), date(year, 12, 31))
    return Period(normalized, label, history_start, end)


def resolve_range(
    range_key: Optional[str],
    start: Optional[date],
    end: Optional[date],
    today: date,
    history_start: date = DEFAULT_HISTORY_START,
) -> Period:
    """
    Resolve the movements date range from query inputs.

    An explicit ``end`` defaults to today; an explicit ``start`` overrides the
    preset start. Reversed bounds are swapped.
    """
    end_date = end or today
    period = resolve_period(range_key or "all", end_date, history_start)
    if start is not None:
        period = Period("custom", "Custom", start, period.end)
    if period.start > period.end:
        period = Period(period.key, period.label, period.end, period.start)
    return period
