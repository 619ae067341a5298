"""Domain type definitions for lifeboard.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in minor units (centavos, pence)
- Month: Month in YYYY-MM format
- CategoryName: Name of an income or expense category
- UserId: Opaque identifier of the owning user
- Frequency: Recurrence rule tag of a recurring template

The frozen dataclasses are the in-memory shapes of stored rows. They are
built by the store layer and consumed by the pure functions in this package.
"""

from dataclasses import dataclass
from datetime import date
from typing import NewType

# Money amounts are stored as minor units to avoid floating point errors
Money = NewType("Money", int)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)

CategoryName = NewType("CategoryName", str)

UserId = NewType("UserId", str)

Frequency = NewType("Frequency", str)

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)

ONCE = Frequency("once")
DAILY = Frequency("daily")
WEEKLY = Frequency("weekly")
BIWEEKLY = Frequency("biweekly")
SEMIMONTHLY_1_15 = Frequency("semimonthly_1_15")
SEMIMONTHLY_5_20 = Frequency("semimonthly_5_20")
SEMIMONTHLY_15_EOM = Frequency("semimonthly_15_eom")
MONTHLY = Frequency("monthly")
EVERY_N = Frequency("everyN")

FREQUENCIES = (
    ONCE,
    DAILY,
    WEEKLY,
    BIWEEKLY,
    SEMIMONTHLY_1_15,
    SEMIMONTHLY_5_20,
    SEMIMONTHLY_15_EOM,
    MONTHLY,
    EVERY_N,
)

DEFAULT_PAYDAY_DATES = (15, 30)


@dataclass(frozen=True)
class RecurringTemplate:
    """Immutable recurring income or expense rule."""

    id: int
    user_id: UserId
    name: str
    type: str
    amount: Money
    category: CategoryName
    start_date: date
    frequency: Frequency
    day_of_month: int | None = None
    every_n_days: int | None = None
    end_date: date | None = None
    is_active: bool = True
    note: str | None = None


@dataclass(frozen=True)
class Transaction:
    """Immutable actual income or expense record."""

    id: int
    user_id: UserId
    type: str
    amount: Money
    date: date
    category: CategoryName
    note: str | None = None
    is_recurring: bool = False


@dataclass(frozen=True)
class PaydayConfig:
    """Immutable payday configuration of a user."""

    type: str = "fixed"
    dates: tuple[int, ...] = DEFAULT_PAYDAY_DATES
