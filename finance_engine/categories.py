"""Expense roll-ups by category.

Categories are free text. Transactions without one fall into
``UNCATEGORIZED``; ``group_categories`` collapses the long tail into the
reserved ``OTHER_BUCKET``.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

import pandas as pd

from .config import DEFAULT_GROUP_LIMIT, OTHER_BUCKET
from .frames import expense_rows, transactions_frame
from .logging_setup import get_logger
from .models import CategoryBucket

logger = get_logger(__name__)


def category_totals(transactions: Any) -> pd.DataFrame:
    """Sum and count expense amounts per category.

    Returns a frame indexed by category name, in first-appearance order,
    with ``value`` and ``count`` columns. Zero-valued categories are kept.
    """
    expenses = expense_rows(transactions_frame(transactions))
    if expenses.empty:
        return pd.DataFrame(columns=['value', 'count'])
    grouped = expenses.groupby('category', sort=False)['amount']
    return pd.DataFrame({'value': grouped.sum(), 'count': grouped.size()})


def aggregate_by_category(transactions: Any) -> List[CategoryBucket]:
    """Roll expense transactions up by category, largest first.

    Percentages are shares of the total expense value. Categories whose
    summed value is zero are dropped.

    Example:
        >>> buckets = aggregate_by_category(transactions)
        >>> [(b.name, b.value) for b in buckets]
        [('Food', 120.0), ('Transport', 50.0)]
    """
    totals = category_totals(transactions)
    if totals.empty:
        return []

    total_expenses = float(totals['value'].sum())
    totals = totals.assign(
        percentage=(totals['value'] / total_expenses * 100) if total_expenses > 0 else 0.0
    )
    totals = totals[totals['value'] > 0]
    totals = totals.sort_values('value', ascending=False, kind='stable')

    logger.debug("Aggregated %d expense categories totalling %.2f", len(totals), total_expenses)
    return [
        CategoryBucket(
            name=str(name),
            value=float(row['value']),
            percentage=float(row['percentage']),
            count=int(row['count']),
        )
        for name, row in totals.iterrows()
    ]


def group_categories(
    buckets: Optional[Sequence[CategoryBucket]], limit: int = DEFAULT_GROUP_LIMIT
) -> List[CategoryBucket]:
    """Keep the ``limit`` largest buckets and fold the rest into ``OTHER_BUCKET``.

    The folded bucket's percentage is relative to the total of every input
    bucket. Inputs with ``limit`` or fewer buckets are returned as given.
    """
    buckets = list(buckets or [])
    if len(buckets) <= limit:
        return buckets

    ordered = sorted(buckets, key=lambda b: b.value, reverse=True)
    top, rest = ordered[:limit], ordered[limit:]

    total = sum(b.value for b in buckets)
    other_value = sum(b.value for b in rest)
    other = CategoryBucket(
        name=OTHER_BUCKET,
        value=other_value,
        percentage=(other_value / total * 100) if total > 0 else 0.0,
        count=sum(b.count for b in rest),
    )
    logger.debug("Folded %d categories into %s", len(rest), OTHER_BUCKET)
    return top + [other]
