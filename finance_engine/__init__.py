"""Top-level package for the finance engine.

Pure aggregation functions that turn transaction and work-day records
into the summaries shown on the dashboard and analytics pages.  The
primary modules are:

* ``time_keys`` – day, week and month bucket keys and labels
* ``categories`` – expense roll-ups by category and "Overig" grouping
* ``time_series`` – weekly, monthly and daily income/expense series
* ``income`` – income roll-ups by source, including work-day salary
* ``metrics`` – savings rate, average daily spending, rankings

Every function is stateless: it reads the collections passed in and
returns new result objects, so calls may run concurrently.
"""

from .categories import aggregate_by_category, group_categories
from .frames import filter_by_date_range
from .income import aggregate_income_sources
from .metrics import (
    calculate_average_daily_spending,
    calculate_key_metrics,
    calculate_savings_rate,
    calculate_totals,
    calculate_work_day_salary,
    find_highest_expense,
    rank_top_categories,
)
from .models import (
    CategoryBucket,
    DailyExpense,
    DateRange,
    IncomeSource,
    KeyMetrics,
    MonthComparison,
    PeriodBucket,
    RankedCategory,
    Totals,
    Transaction,
    WorkDay,
)
from .time_series import (
    aggregate_daily_expenses,
    group_by_month,
    group_by_period,
    group_by_week,
    monthly_comparison,
)

__all__ = [
    'aggregate_by_category',
    'aggregate_daily_expenses',
    'aggregate_income_sources',
    'calculate_average_daily_spending',
    'calculate_key_metrics',
    'calculate_savings_rate',
    'calculate_totals',
    'calculate_work_day_salary',
    'filter_by_date_range',
    'find_highest_expense',
    'group_by_month',
    'group_by_period',
    'group_by_week',
    'group_categories',
    'monthly_comparison',
    'rank_top_categories',
    'CategoryBucket',
    'DailyExpense',
    'DateRange',
    'IncomeSource',
    'KeyMetrics',
    'MonthComparison',
    'PeriodBucket',
    'RankedCategory',
    'Totals',
    'Transaction',
    'WorkDay',
]
