"""Domain models and types for lifeboard.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Schedule and pay period logic separated from infrastructure
"""

from lifeboard.domain.models import (
    CategoryName,
    Frequency,
    Money,
    Month,
    PaydayConfig,
    RecurringTemplate,
    Transaction,
    UserId,
)

__all__ = [
    "CategoryName",
    "Frequency",
    "Money",
    "Month",
    "PaydayConfig",
    "RecurringTemplate",
    "Transaction",
    "UserId",
]
