"""Calendar bucketing for day, week and month granularities.

Weeks start on Monday. Month names are always English so labels do not
depend on the process locale.
"""

from __future__ import annotations

from typing import Any

import pandas as pd

from .models import DateRange

GRANULARITIES = ('day', 'week', 'month')


def parse_timestamp(value: Any) -> pd.Timestamp:
    """Parse a date-like value, keeping the time of day.

    Timezone-aware values keep their wall clock and lose the offset.
    Unparseable values come back as ``NaT``.
    """
    if isinstance(value, pd.Timestamp):
        ts = value
    else:
        ts = pd.to_datetime(value, errors='coerce')
    if ts is pd.NaT or pd.isna(ts):
        return pd.NaT
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts


def parse_day(value: Any) -> pd.Timestamp:
    """Parse a date-like value to midnight of its calendar day."""
    ts = parse_timestamp(value)
    return ts if ts is pd.NaT else ts.normalize()


def _short_month(ts: pd.Timestamp) -> str:
    return ts.month_name()[:3]


def day_key(value: Any) -> str:
    return parse_day(value).strftime('%Y-%m-%d')


def day_label(value: Any) -> str:
    """``"Jan 05, 2024"``"""
    ts = parse_day(value)
    return f"{_short_month(ts)} {ts.day:02d}, {ts.year}"


def week_start(value: Any) -> pd.Timestamp:
    """Monday of the ISO week containing ``value``."""
    ts = parse_day(value)
    return ts - pd.Timedelta(days=ts.weekday())


def week_key(value: Any) -> str:
    return week_start(value).strftime('%Y-%m-%d')


def week_label(value: Any) -> str:
    """Short date of the week's Monday, e.g. ``"Jan 06"``."""
    monday = week_start(value)
    return f"{_short_month(monday)} {monday.day:02d}"


def month_key(value: Any) -> str:
    return parse_day(value).strftime('%Y-%m')


def month_label(value: Any, long: bool = False) -> str:
    """``"Jan 2024"``, or ``"January 2024"`` when ``long`` is set."""
    ts = parse_day(value)
    name = ts.month_name() if long else _short_month(ts)
    return f"{name} {ts.year}"


def _check_granularity(granularity: str) -> None:
    if granularity not in GRANULARITIES:
        raise ValueError(
            f"Unsupported granularity '{granularity}'. Expected one of {GRANULARITIES}"
        )


def period_key(value: Any, granularity: str) -> str:
    _check_granularity(granularity)
    if granularity == 'day':
        return day_key(value)
    if granularity == 'week':
        return week_key(value)
    return month_key(value)


def period_label(value: Any, granularity: str) -> str:
    _check_granularity(granularity)
    if granularity == 'day':
        return day_label(value)
    if granularity == 'week':
        return week_label(value)
    return month_label(value)


def period_keys(dates: pd.Series, granularity: str) -> pd.DataFrame:
    """Vectorised keys and labels for a Series of day timestamps.

    Returns a frame with ``key`` and ``label`` columns aligned to ``dates``.
    """
    _check_granularity(granularity)
    dates = pd.to_datetime(dates)
    if granularity == 'week':
        dates = dates - pd.to_timedelta(dates.dt.weekday, unit='D')
    short_month = dates.dt.month_name().str[:3]
    if granularity == 'month':
        keys = dates.dt.strftime('%Y-%m')
        labels = short_month + ' ' + dates.dt.strftime('%Y')
    elif granularity == 'week':
        keys = dates.dt.strftime('%Y-%m-%d')
        labels = short_month + ' ' + dates.dt.strftime('%d')
    else:
        keys = dates.dt.strftime('%Y-%m-%d')
        labels = short_month + ' ' + dates.dt.strftime('%d, %Y')
    return pd.DataFrame({'key': keys, 'label': labels}, index=dates.index)


def month_date_range(value: Any) -> DateRange:
    """Inclusive range covering the calendar month that contains ``value``."""
    ts = parse_day(value)
    start = ts.replace(day=1)
    end = start + pd.offsets.MonthEnd(0)
    return DateRange(start=start.date(), end=end.date())
