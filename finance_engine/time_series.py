"""Income, expense and net roll-ups over calendar periods.

Week and month results are ordered by their label string, not by date:
``"Apr 2024"`` sorts before ``"Jan 2024"``. Consumers rely on this order,
so it is kept as is. Daily expenses are ordered chronologically.
"""

from __future__ import annotations

from datetime import date
from typing import Any, List, Optional

import pandas as pd

from .config import DEFAULT_COMPARISON_MONTHS, INCOME_TYPE
from .frames import (
    expense_rows,
    range_mask,
    transactions_frame,
    work_days_frame,
    worked_rows,
)
from .logging_setup import get_logger
from .metrics import calculate_savings_rate
from .models import DailyExpense, DateRange, MonthComparison, PeriodBucket
from .time_keys import month_date_range, month_label, parse_day, period_keys

logger = get_logger(__name__)


def _contributions(transactions: pd.DataFrame, work_days: pd.DataFrame, granularity: str) -> pd.DataFrame:
    """One row per contributing record with its period key, label, income and expenses."""
    is_income = transactions['type'] == INCOME_TYPE
    tx = period_keys(transactions['day'], granularity)
    tx['income'] = transactions['amount'].where(is_income, 0.0)
    tx['expenses'] = transactions['amount'].where(~is_income, 0.0)

    worked = worked_rows(work_days)
    wd = period_keys(worked['day'], granularity)
    wd['income'] = worked['salary']
    wd['expenses'] = 0.0

    # Transactions first so bucket order follows first appearance
    frames = [f for f in (tx, wd) if not f.empty]
    return pd.concat(frames, ignore_index=True)


def group_by_period(transactions: Any, work_days: Any = None, granularity: str = 'month') -> List[PeriodBucket]:
    """Roll transactions and worked-day salary up into ``granularity`` buckets.

    Returns an empty list when there are no transactions, even if work-days
    are present.
    """
    tx = transactions_frame(transactions)
    if tx.empty:
        return []
    wd = work_days_frame(work_days)

    rows = _contributions(tx, wd, granularity)
    grouped = rows.groupby('key', sort=False).agg(
        label=('label', 'first'),
        income=('income', 'sum'),
        expenses=('expenses', 'sum'),
    )
    grouped = grouped.sort_values('label', kind='stable')

    logger.debug("Grouped %d transactions into %d %s buckets", len(tx), len(grouped), granularity)
    buckets = []
    for _, row in grouped.iterrows():
        income = float(row['income'])
        expenses = float(row['expenses'])
        buckets.append(PeriodBucket(period_label=row['label'], income=income, expenses=expenses, net=income - expenses))
    return buckets


def group_by_week(transactions: Any, work_days: Any = None) -> List[PeriodBucket]:
    """Weekly buckets keyed by the Monday of each week, labelled ``"Jan 06"``."""
    return group_by_period(transactions, work_days, 'week')


def group_by_month(transactions: Any, work_days: Any = None) -> List[PeriodBucket]:
    """Monthly buckets labelled ``"Jan 2024"``."""
    return group_by_period(transactions, work_days, 'month')


def aggregate_daily_expenses(transactions: Any, date_range: Optional[DateRange] = None) -> List[DailyExpense]:
    """Total expenses per day in ascending date order.

    Work-day salary is ignored. When ``date_range`` is given only days inside
    it are reported.
    """
    expenses = expense_rows(transactions_frame(transactions))
    expenses = expenses[range_mask(expenses['day'], date_range)]
    if expenses.empty:
        return []

    keys = period_keys(expenses['day'], 'day')
    daily = (
        expenses.assign(key=keys['key'], label=keys['label'])
        .groupby('key', sort=True)
        .agg(amount=('amount', 'sum'), label=('label', 'first'))
    )
    return [
        DailyExpense(date=str(key), amount=float(row['amount']), formatted_date=row['label'])
        for key, row in daily.iterrows()
    ]


def monthly_comparison(
    transactions: Any,
    work_days: Any = None,
    months: int = DEFAULT_COMPARISON_MONTHS,
    today: Optional[Any] = None,
) -> List[MonthComparison]:
    """Income, expenses and savings for the last ``months`` calendar months.

    The window ends with the month containing ``today`` and is returned
    oldest first. Months without transactions report zeros.
    """
    anchor = parse_day(today if today is not None else date.today())
    tx = transactions_frame(transactions)
    wd = work_days_frame(work_days)

    comparison = []
    for offset in range(months - 1, -1, -1):
        month_start = (anchor - pd.DateOffset(months=offset)).replace(day=1)
        window = month_date_range(month_start)
        month_tx = tx[range_mask(tx['day'], window)]
        month_wd = wd[range_mask(wd['day'], window)]

        buckets = group_by_month(month_tx, month_wd)
        label = month_label(month_start)
        bucket = next((b for b in buckets if b.period_label == label), None)
        income = bucket.income if bucket else 0.0
        expenses = bucket.expenses if bucket else 0.0
        comparison.append(MonthComparison(
            month=month_label(month_start, long=True),
            month_start=month_start.date(),
            income=income,
            expenses=expenses,
            net_savings=income - expenses,
            savings_rate=calculate_savings_rate(income, expenses),
        ))
    return comparison
