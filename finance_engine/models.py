"""Record and result types used by the finance engine.

Input records mirror the rows handed back by the data store. Result
types are frozen dataclasses built fresh on every call.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional, Union

DateLike = Union[str, date, datetime]


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: float       # sign is ignored, the engine uses abs(amount)
    type: str           # "income" or "expense"
    category: Optional[str]
    date: DateLike


@dataclass(frozen=True)
class WorkDay:
    id: str
    date: DateLike
    hours_worked: float
    daily_rate: float
    status: str         # worked, vacation, sick, holiday or absent


@dataclass(frozen=True)
class DateRange:
    """Inclusive date range; bounds may carry a time of day."""
    start: Optional[DateLike]
    end: Optional[DateLike]

    @property
    def is_bounded(self) -> bool:
        return self.start is not None and self.end is not None


@dataclass(frozen=True)
class CategoryBucket:
    name: str
    value: float
    percentage: float
    count: int


@dataclass(frozen=True)
class PeriodBucket:
    period_label: str
    income: float
    expenses: float
    net: float


@dataclass(frozen=True)
class DailyExpense:
    date: str
    amount: float
    formatted_date: str


@dataclass(frozen=True)
class IncomeSource:
    category: str
    amount: float
    is_from_work_days: bool


@dataclass(frozen=True)
class RankedCategory:
    name: str
    total: float
    count: int
    rank: int


@dataclass(frozen=True)
class Totals:
    income: float           # income transactions plus work-day salary
    work_day_salary: float
    expenses: float
    balance: float


@dataclass(frozen=True)
class KeyMetrics:
    avg_daily_spending: float
    highest_expense: Optional[Any]
    total_transactions: int
    savings_rate: float
    is_negative_savings_rate: bool


@dataclass(frozen=True)
class MonthComparison:
    month: str
    month_start: date
    income: float
    expenses: float
    net_savings: float
    savings_rate: float
