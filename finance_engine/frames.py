"""Normalise transaction and work-day records into DataFrames.

The aggregators accept whatever the data store hands back: a sequence of
``Transaction``/``WorkDay`` dataclasses, a sequence of mappings with the
same keys, or a DataFrame. Every frame built here is indexed by the
record's position in the input so results can point back at the
original record.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, is_dataclass
from typing import Any, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from .config import UNCATEGORIZED, WORKED_STATUS
from .logging_setup import get_logger
from .models import DateRange
from .time_keys import parse_day, parse_timestamp

logger = get_logger(__name__)

TRANSACTION_COLUMNS = ['id', 'amount', 'type', 'category', 'date']
WORK_DAY_COLUMNS = ['id', 'date', 'hours_worked', 'daily_rate', 'status']


def _as_row(record: Any) -> dict:
    if is_dataclass(record) and not isinstance(record, type):
        return asdict(record)
    return dict(record)


def _records_frame(records: Any, columns: List[str]) -> pd.DataFrame:
    if records is None:
        return pd.DataFrame(columns=columns)
    if isinstance(records, pd.DataFrame):
        frame = records.reset_index(drop=True).copy()
    else:
        frame = pd.DataFrame([_as_row(r) for r in records])
    for col in columns:
        if col not in frame.columns:
            frame[col] = None
    return frame


def _parse_dates(frame: pd.DataFrame, kind: str) -> pd.DataFrame:
    days = frame['date'].map(parse_day)
    invalid = days.isna()
    if invalid.any():
        # Skipped rows never land in another bucket
        logger.warning("Skipping %d %s record(s) with unparseable dates", int(invalid.sum()), kind)
    frame = frame.loc[~invalid].copy()
    frame['day'] = pd.to_datetime(days[~invalid])
    return frame


def _numeric(series: pd.Series) -> pd.Series:
    return pd.to_numeric(series, errors='coerce').fillna(0.0).astype(float)


def transactions_frame(records: Any) -> pd.DataFrame:
    """Build a transaction frame with ``day``, absolute ``amount`` and filled ``category``."""
    frame = _records_frame(records, TRANSACTION_COLUMNS)
    frame = _parse_dates(frame, 'transaction')
    frame['amount'] = _numeric(frame['amount']).abs()
    category = frame['category'].astype(object)
    # Missing and empty categories share the fallback bucket
    empty = category.isna() | (category.astype(str) == '')
    frame['category'] = category.where(~empty, UNCATEGORIZED).astype(str)
    frame['type'] = frame['type'].fillna('').astype(str)
    return frame


def work_days_frame(records: Any) -> pd.DataFrame:
    """Build a work-day frame with ``day`` and derived ``salary`` columns.

    Salary is ``hours_worked * daily_rate`` for worked days and zero for
    every other status, whatever its hours and rate.
    """
    frame = _records_frame(records, WORK_DAY_COLUMNS)
    frame = _parse_dates(frame, 'work-day')
    frame['hours_worked'] = _numeric(frame['hours_worked'])
    frame['daily_rate'] = _numeric(frame['daily_rate'])
    frame['status'] = frame['status'].fillna('').astype(str)
    worked = (frame['status'] == WORKED_STATUS).to_numpy()
    earned = frame['hours_worked'].to_numpy() * frame['daily_rate'].to_numpy()
    frame['salary'] = np.where(worked, earned, 0.0)
    return frame


def expense_rows(frame: pd.DataFrame) -> pd.DataFrame:
    return frame[frame['type'] == 'expense']


def income_rows(frame: pd.DataFrame) -> pd.DataFrame:
    return frame[frame['type'] == 'income']


def worked_rows(frame: pd.DataFrame) -> pd.DataFrame:
    return frame[frame['status'] == WORKED_STATUS]


def range_mask(days: pd.Series, date_range: Optional[DateRange]) -> pd.Series:
    """Boolean mask of ``days`` inside the inclusive, day-granular range."""
    if date_range is None or not date_range.is_bounded:
        return pd.Series(True, index=days.index)
    start = parse_day(date_range.start)
    end = parse_day(date_range.end)
    return (days >= start) & (days <= end)


def filter_by_date_range(records: Optional[Iterable[Any]], date_range: Optional[DateRange]) -> List[Any]:
    """Return the records whose date falls inside ``date_range``.

    A missing range, or one missing either bound, keeps every record.
    Records with unparseable dates are dropped when a range applies.
    """
    items: Sequence[Any] = list(records or [])
    if date_range is None or not date_range.is_bounded:
        return list(items)
    start = parse_day(date_range.start)
    end = parse_day(date_range.end)
    kept = []
    for record in items:
        raw = record['date'] if isinstance(record, Mapping) else getattr(record, 'date', None)
        day = parse_day(raw)
        if day is pd.NaT:
            continue
        if start <= day <= end:
            kept.append(record)
    return kept


def range_days(date_range: DateRange) -> int:
    """Days spanned by a range: ``ceil((end - start) / 1 day) + 1``.

    Bounds keep their time of day, so an end at ``23:59:59`` rounds up.
    """
    start = parse_timestamp(date_range.start)
    end = parse_timestamp(date_range.end)
    if start is pd.NaT or end is pd.NaT:
        return 0
    return int(np.ceil((end - start) / pd.Timedelta(days=1))) + 1
