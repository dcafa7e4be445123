"""Configuration for the finance engine.

This module centralizes the reserved bucket names produced by the
aggregators and the default limits they apply.
"""

from __future__ import annotations

# Fallback category for transactions without one
UNCATEGORIZED = "Uncategorized"

# Synthetic bucket absorbing the categories beyond the group limit.
# Consumers check for this name to disable drill-down on the bucket.
OTHER_BUCKET = "Overig"

# Income source synthesised from worked work-days
WORK_DAY_SOURCE = "Salaris (Werkdagen)"

# Only work-days with this status earn salary
WORKED_STATUS = "worked"

INCOME_TYPE = "income"
EXPENSE_TYPE = "expense"

# Default limits for grouping, ranking and the monthly comparison
DEFAULT_GROUP_LIMIT = 8
DEFAULT_TOP_LIMIT = 5
DEFAULT_COMPARISON_MONTHS = 6

LOG_LEVEL_ENV = "FINANCE_ENGINE_LOG_LEVEL"
