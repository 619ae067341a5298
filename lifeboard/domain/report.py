"""Pure functions for report calculations and formatting.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in minor units (Money type).
"""

from collections.abc import Sequence
from dataclasses import dataclass

from lifeboard.dates import month_bounds
from lifeboard.domain.models import Money, Month, RecurringTemplate, Transaction
from lifeboard.domain.schedule import actual_totals, recurring_totals

DEFAULT_CURRENCY = "PHP"

CURRENCY_SYMBOLS = {
    "PHP": "₱",
    "USD": "$",
    "GBP": "£",
    "EUR": "€",
    "JPY": "¥",
    "AUD": "A$",
    "CAD": "CA$",
    "SGD": "S$",
}


@dataclass(frozen=True)
class MonthSummary:
    """Immutable income and expense summary for a month."""

    month: Month
    actual_income: Money
    actual_expense: Money
    recurring_income: Money
    recurring_expense: Money

    @property
    def income(self) -> Money:
        return Money(self.actual_income + self.recurring_income)

    @property
    def expense(self) -> Money:
        return Money(self.actual_expense + self.recurring_expense)

    @property
    def net(self) -> Money:
        return Money(self.income - self.expense)


def build_month_summary(
    templates: Sequence[RecurringTemplate],
    transactions: Sequence[Transaction],
    month: Month,
) -> MonthSummary:
    """Create month summary with actual and projected recurring totals.

    Args:
        templates: Recurring templates to project.
        transactions: Actual transactions.
        month: Month in YYYY-MM format.

    Returns:
        MonthSummary for the month.
    """
    first, last = month_bounds(month)
    actual = actual_totals(transactions, first, last)
    recurring = recurring_totals(templates, first, last)

    return MonthSummary(
        month=month,
        actual_income=actual.income,
        actual_expense=actual.expense,
        recurring_income=recurring.income,
        recurring_expense=recurring.expense,
    )


def currency_symbol(currency: str) -> str:
    """Return the symbol for a currency code, or the code itself if unknown."""
    return CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")


def format_money(amount: Money, currency: str = DEFAULT_CURRENCY) -> str:
    """Format minor units as a currency string (e.g., "₱1,234.50", "-£4.50").

    Args:
        amount: Amount in minor units.
        currency: ISO currency code.

    Returns:
        Formatted amount with currency symbol.
    """
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol(currency)}{abs(amount) / 100:,.2f}"


def mask_money(amount: Money, currency: str = DEFAULT_CURRENCY, hide: bool = False) -> str:
    """Format an amount, or mask it with asterisks when amounts are hidden."""
    if hide:
        return f"{currency_symbol(currency).strip()}****"
    return format_money(amount, currency)


def calculate_percentage(part: float, whole: float) -> float:
    """Calculate part as a percentage of whole (0 when whole is not positive)."""
    if whole <= 0:
        return 0.0
    return (part / whole) * 100


def calculate_histogram_bar_length(
    amount: Money,
    max_amount: Money,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)
