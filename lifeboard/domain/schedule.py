"""Pure functions for recurring schedule evaluation.

This module contains the functional core for recurring projections:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Projected occurrences and actual transactions are summed independently.
A recorded transaction does not suppress the projection of a template
for the same day.

All monetary amounts are in minor units (Money type).
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date

from lifeboard.dates import days_between, iter_days, last_day_of_month, month_bounds
from lifeboard.domain.models import (
    BIWEEKLY,
    DAILY,
    EVERY_N,
    EXPENSE,
    INCOME,
    MONTHLY,
    ONCE,
    SEMIMONTHLY_1_15,
    SEMIMONTHLY_5_20,
    SEMIMONTHLY_15_EOM,
    WEEKLY,
    Money,
    Month,
    RecurringTemplate,
    Transaction,
)

DEFAULT_EVERY_N_DAYS = 2


@dataclass(frozen=True)
class RangeTotals:
    """Immutable income and expense totals for a date range."""

    income: Money
    expense: Money

    @property
    def net(self) -> Money:
        return Money(self.income - self.expense)


@dataclass(frozen=True)
class DayProjection:
    """Immutable projected totals and running balance for a single day."""

    day: date
    income: Money
    expense: Money
    balance: Money
    items: list[RecurringTemplate] = field(default_factory=list)


def occurs_on(template: RecurringTemplate, day: date, start_date: date | None = None) -> bool:
    """Decide whether a recurring template fires on a calendar day.

    Args:
        template: Recurring template carrying the frequency and its parameters.
        day: Candidate calendar day.
        start_date: Start of the schedule. If None, uses the template's own start date.

    Returns:
        True if the template occurs on the day. Unknown frequencies never occur.
    """
    if start_date is None:
        start_date = template.start_date

    if day < start_date:
        return False
    if template.end_date is not None and day > template.end_date:
        return False
    if not template.is_active:
        return False

    elapsed = days_between(start_date, day)
    frequency = template.frequency

    if frequency == ONCE:
        return day == start_date
    if frequency == DAILY:
        return True
    if frequency == WEEKLY:
        return day.weekday() == start_date.weekday()
    if frequency == BIWEEKLY:
        return day.weekday() == start_date.weekday() and (elapsed // 7) % 2 == 0
    if frequency == SEMIMONTHLY_1_15:
        return day.day in (1, 15)
    if frequency == SEMIMONTHLY_5_20:
        return day.day in (5, 20)
    if frequency == SEMIMONTHLY_15_EOM:
        return day.day == 15 or day.day == last_day_of_month(day.year, day.month)
    if frequency == MONTHLY:
        target = template.day_of_month or start_date.day
        return day.day == min(target, last_day_of_month(day.year, day.month))
    if frequency == EVERY_N:
        every = template.every_n_days or DEFAULT_EVERY_N_DAYS
        return elapsed % every == 0

    return False


def occurrences_on(templates: Iterable[RecurringTemplate], day: date) -> list[RecurringTemplate]:
    """Return the templates that fire on a day, in input order."""
    return [t for t in templates if occurs_on(t, day)]


def _sum_by_type(items: Iterable[RecurringTemplate | Transaction]) -> tuple[int, int]:
    income = 0
    expense = 0
    for item in items:
        if item.type == INCOME:
            income += item.amount
        elif item.type == EXPENSE:
            expense += item.amount
    return income, expense


def recurring_totals(templates: Sequence[RecurringTemplate], start: date, end: date) -> RangeTotals:
    """Sum projected template occurrences over [start, end] inclusive.

    Args:
        templates: Recurring templates to project.
        start: First day of the range.
        end: Last day of the range. If before start, totals are zero.

    Returns:
        RangeTotals of the projected amounts only.
    """
    income = 0
    expense = 0
    for day in iter_days(start, end):
        day_income, day_expense = _sum_by_type(occurrences_on(templates, day))
        income += day_income
        expense += day_expense
    return RangeTotals(income=Money(income), expense=Money(expense))


def actual_totals(transactions: Iterable[Transaction], start: date, end: date) -> RangeTotals:
    """Sum actual transactions dated within [start, end] inclusive."""
    income, expense = _sum_by_type(t for t in transactions if start <= t.date <= end)
    return RangeTotals(income=Money(income), expense=Money(expense))


def aggregate_over_range(
    templates: Sequence[RecurringTemplate],
    transactions: Sequence[Transaction],
    start: date,
    end: date,
) -> RangeTotals:
    """Aggregate projected and actual amounts over [start, end] inclusive.

    Projections and actual transactions are strictly additive; there is no
    reconciliation between a recorded transaction and a projected one.

    Args:
        templates: Recurring templates to project.
        transactions: Actual transactions.
        start: First day of the range.
        end: Last day of the range. If before start, totals are zero.

    Returns:
        RangeTotals with income and expense by type.
    """
    projected = recurring_totals(templates, start, end)
    actual = actual_totals(transactions, start, end)
    return RangeTotals(
        income=Money(projected.income + actual.income),
        expense=Money(projected.expense + actual.expense),
    )


def current_balance(transactions: Iterable[Transaction]) -> Money:
    """Calculate balance from all actual transactions (income minus expense)."""
    income, expense = _sum_by_type(transactions)
    return Money(income - expense)


def project_month(
    templates: Sequence[RecurringTemplate],
    transactions: Sequence[Transaction],
    month: Month,
) -> list[DayProjection]:
    """Project daily totals and running balance for every day of a month.

    The opening balance is the net of all actual transactions dated before
    the month. Each day then adds actual and projected income and subtracts
    actual and projected expense.

    Args:
        templates: Recurring templates to project.
        transactions: All actual transactions of the user.
        month: Month in YYYY-MM format.

    Returns:
        One DayProjection per day of the month, in date order.
    """
    first, last = month_bounds(month)
    running = current_balance(t for t in transactions if t.date < first)

    projections: list[DayProjection] = []
    for day in iter_days(first, last):
        items = occurrences_on(templates, day)
        projected_income, projected_expense = _sum_by_type(items)
        actual_income, actual_expense = _sum_by_type(t for t in transactions if t.date == day)

        income = Money(actual_income + projected_income)
        expense = Money(actual_expense + projected_expense)
        running = Money(running + income - expense)

        projections.append(
            DayProjection(
                day=day,
                income=income,
                expense=expense,
                balance=running,
                items=items,
            )
        )

    return projections
