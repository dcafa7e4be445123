"""Income roll-ups by source.

Income transactions are grouped by category; salary derived from worked
days is reported as its own source, ``WORK_DAY_SOURCE``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from .config import WORK_DAY_SOURCE
from .frames import income_rows, transactions_frame
from .logging_setup import get_logger
from .metrics import calculate_work_day_salary
from .models import IncomeSource

logger = get_logger(__name__)


def aggregate_income_sources(transactions: Any, work_days: Any = None) -> List[IncomeSource]:
    """Total income per source, largest first.

    Example:
        >>> sources = aggregate_income_sources(transactions, work_days)
        >>> [(s.category, s.amount, s.is_from_work_days) for s in sources]
        [('Salaris (Werkdagen)', 400.0, True), ('Freelance', 250.0, False)]
    """
    income = income_rows(transactions_frame(transactions))
    sources: Dict[str, Tuple[float, bool]] = {}
    if not income.empty:
        for category, amount in income.groupby('category', sort=False)['amount'].sum().items():
            sources[str(category)] = (float(amount), False)

    salary = calculate_work_day_salary(work_days)
    if salary > 0:
        # Replaces a same-named income category in place
        sources[WORK_DAY_SOURCE] = (salary, True)

    logger.debug("Aggregated %d income sources", len(sources))
    ordered = sorted(sources.items(), key=lambda item: item[1][0], reverse=True)
    return [
        IncomeSource(category=name, amount=amount, is_from_work_days=from_work_days)
        for name, (amount, from_work_days) in ordered
    ]
