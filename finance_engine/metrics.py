"""Scalar metrics and rankings for the analytics overview.

Zero denominators are a policy, not an error: savings rate and average
daily spending come back as ``0`` when income or the day count is zero.
"""

from __future__ import annotations

from typing import Any, List, Optional

import pandas as pd

from .categories import aggregate_by_category
from .config import DEFAULT_TOP_LIMIT
from .frames import expense_rows, income_rows, range_days, transactions_frame, work_days_frame
from .logging_setup import get_logger
from .models import DateRange, KeyMetrics, RankedCategory, Totals

logger = get_logger(__name__)


def calculate_savings_rate(income: float, expenses: float) -> float:
    """Share of income left after expenses, as a percentage.

    Negative when expenses exceed income; exactly ``0`` when income is zero.
    """
    if income == 0:
        return 0
    return (income - expenses) / income * 100


def calculate_work_day_salary(work_days: Any) -> float:
    """Sum of ``hours_worked * daily_rate`` over worked days."""
    frame = work_days_frame(work_days)
    if frame.empty:
        return 0.0
    return float(frame['salary'].sum())


def calculate_average_daily_spending(transactions: Any, date_range: Optional[DateRange]) -> float:
    """Total expenses divided by the number of days in ``date_range``."""
    expenses = expense_rows(transactions_frame(transactions))
    if expenses.empty or date_range is None or not date_range.is_bounded:
        return 0.0
    days = range_days(date_range)
    if days <= 0:
        return 0.0
    return float(expenses['amount'].sum()) / days


def find_highest_expense(transactions: Any) -> Optional[Any]:
    """Return the expense record with the largest absolute amount.

    The record is returned as given. On ties the earliest record in input
    order wins; ``None`` when there are no expenses.
    """
    items = transactions if isinstance(transactions, pd.DataFrame) else list(transactions or [])
    expenses = expense_rows(transactions_frame(items))
    if expenses.empty:
        return None
    # idxmax returns the first position holding the maximum
    position = expenses['amount'].idxmax()
    if isinstance(items, pd.DataFrame):
        return items.iloc[position]
    return items[position]


def rank_top_categories(transactions: Any, limit: int = DEFAULT_TOP_LIMIT) -> List[RankedCategory]:
    """Rank expense categories by total, then by transaction count.

    Ranks are 1-based and assigned after truncating to ``limit``. No
    ``Overig`` grouping is applied here.
    """
    categories = aggregate_by_category(transactions)
    ranked = sorted(categories, key=lambda c: (-c.value, -c.count))
    return [
        RankedCategory(name=c.name, total=c.value, count=c.count, rank=i + 1)
        for i, c in enumerate(ranked[:limit])
    ]


def calculate_totals(transactions: Any, work_days: Any = None) -> Totals:
    """Overall income (including work-day salary), expenses and balance."""
    frame = transactions_frame(transactions)
    salary = calculate_work_day_salary(work_days)
    income = float(income_rows(frame)['amount'].sum()) + salary
    expenses = float(expense_rows(frame)['amount'].sum())
    return Totals(income=income, work_day_salary=salary, expenses=expenses, balance=income - expenses)


def _record_count(records: Any) -> int:
    if records is None:
        return 0
    return len(records) if hasattr(records, '__len__') else len(list(records))


def calculate_key_metrics(
    transactions: Any, work_days: Any = None, date_range: Optional[DateRange] = None
) -> KeyMetrics:
    """Headline numbers for the analytics overview."""
    if transactions is not None and not isinstance(transactions, pd.DataFrame):
        transactions = list(transactions)
    totals = calculate_totals(transactions, work_days)
    savings_rate = calculate_savings_rate(totals.income, totals.expenses)
    metrics = KeyMetrics(
        avg_daily_spending=calculate_average_daily_spending(transactions, date_range),
        highest_expense=find_highest_expense(transactions),
        total_transactions=_record_count(transactions),
        savings_rate=savings_rate,
        is_negative_savings_rate=savings_rate < 0,
    )
    logger.debug(
        "Key metrics over %d transactions: savings rate %.1f%%",
        metrics.total_transactions, metrics.savings_rate,
    )
    return metrics
