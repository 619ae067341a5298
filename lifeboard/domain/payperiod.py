"""Pure functions for pay period derivation.

Pay periods are built from a user's configured payday days of month. Every
configured day is clamped to the length of the month it lands in, so a
payday of 30 falls on February 28th (or 29th).

Nothing here raises: a missing or malformed payday list falls back to
DEFAULT_PAYDAY_DATES.

All monetary amounts are in minor units (Money type).
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from lifeboard.dates import add_months, clamp_day, days_between, last_day_of_month, ordinal_suffix, parse_month
from lifeboard.domain.models import DEFAULT_PAYDAY_DATES, EXPENSE, CategoryName, Money, Month, Transaction
from lifeboard.domain.report import calculate_percentage
from lifeboard.domain.schedule import DayProjection, actual_totals


@dataclass(frozen=True)
class PayPeriod:
    """Immutable pay period with actual income and expense totals."""

    start_date: date
    end_date: date
    income: Money
    expense: Money

    @property
    def name(self) -> str:
        return f"{self.start_date:%b} {self.start_date.day} - {self.end_date:%b} {self.end_date.day}"


@dataclass(frozen=True)
class CurrentPayPeriod:
    """Immutable progress through the pay period containing today."""

    start_date: date
    end_date: date
    days_in_period: int
    days_passed: int
    days_remaining: int
    spent: Money

    @property
    def progress(self) -> float:
        """Share of the period already elapsed, as a percentage."""
        return calculate_percentage(self.days_passed, self.days_in_period)

    @property
    def daily_average(self) -> float:
        """Average spend per elapsed day in minor units (0 on the payday itself)."""
        if self.days_passed <= 0:
            return 0.0
        return self.spent / self.days_passed


@dataclass(frozen=True)
class PayoutPeriodStats:
    """Immutable projected totals for one payout period of a month."""

    label: str
    start_day: int
    end_day: int
    income: Money
    expense: Money
    expenses_by_category: dict[CategoryName, Money] = field(default_factory=dict)

    @property
    def net(self) -> Money:
        return Money(self.income - self.expense)


def normalize_payday_dates(raw: Iterable[Any] | None) -> list[int]:
    """Clean a configured payday list.

    Args:
        raw: Configured days of month. May be None or contain junk.

    Returns:
        Sorted, de-duplicated days within 1-31. Defaults to [15, 30] if nothing valid remains.
    """
    dates: set[int] = set()
    for value in raw or ():
        if isinstance(value, bool) or not isinstance(value, int):
            continue
        if 1 <= value <= 31:
            dates.add(value)

    if not dates:
        return list(DEFAULT_PAYDAY_DATES)
    return sorted(dates)


def _spent_between(transactions: Iterable[Transaction], start: date, end: date) -> Money:
    return Money(sum(t.amount for t in transactions if t.type == EXPENSE and start <= t.date <= end))


def current_pay_period(
    payday_dates: Iterable[Any] | None,
    today: date,
    transactions: Sequence[Transaction],
) -> CurrentPayPeriod:
    """Find the pay period containing today and how far through it we are.

    Paydays are tried from the latest to the earliest; the first one on or
    before today starts the period. It ends on the next configured payday,
    wrapping into the following month after the last one. When today is
    before every payday of the month, the period starts on the last payday
    of the previous month.

    Args:
        payday_dates: Configured days of month.
        today: Reference day.
        transactions: Actual transactions; expenses in [start, today] count as spent.

    Returns:
        CurrentPayPeriod for today.
    """
    dates = normalize_payday_dates(payday_dates)

    start: date | None = None
    end: date | None = None
    for i in range(len(dates) - 1, -1, -1):
        payday = clamp_day(today.year, today.month, dates[i])
        if payday <= today:
            is_last = i == len(dates) - 1
            next_month = add_months(today.replace(day=1), 1) if is_last else today
            start = payday
            end = clamp_day(next_month.year, next_month.month, dates[(i + 1) % len(dates)])
            break

    if start is None or end is None:
        prev_month = add_months(today.replace(day=1), -1)
        start = clamp_day(prev_month.year, prev_month.month, dates[-1])
        end = clamp_day(today.year, today.month, dates[0])

    return CurrentPayPeriod(
        start_date=start,
        end_date=end,
        days_in_period=max(1, days_between(start, end)),
        days_passed=days_between(start, today),
        days_remaining=days_between(today, end),
        spent=_spent_between(transactions, start, today),
    )


def pay_periods_for_month(
    payday_dates: Iterable[Any] | None,
    month: Month,
    transactions: Sequence[Transaction],
) -> list[PayPeriod]:
    """Build the pay periods that start from each payday of a month.

    Each period runs from a payday to the day before the next one. The last
    period wraps into the following month. Periods that collapse (end not
    after start, as when two paydays clamp to the same day) are skipped.

    Args:
        payday_dates: Configured days of month.
        month: Month in YYYY-MM format.
        transactions: Actual transactions to total per period.

    Returns:
        List of PayPeriod in date order.
    """
    dates = normalize_payday_dates(payday_dates)
    first = parse_month(month)
    following = add_months(first, 1)

    periods: list[PayPeriod] = []
    for i, payday in enumerate(dates):
        is_last = i == len(dates) - 1
        next_payday = dates[(i + 1) % len(dates)]

        start = clamp_day(first.year, first.month, payday)
        if is_last:
            end_anchor = clamp_day(following.year, following.month, next_payday)
        else:
            end_anchor = clamp_day(first.year, first.month, next_payday)
        end = date.fromordinal(end_anchor.toordinal() - 1)

        if end <= start:
            continue

        totals = actual_totals(transactions, start, end)
        periods.append(PayPeriod(start_date=start, end_date=end, income=totals.income, expense=totals.expense))

    return periods


def payout_period_stats(
    payday_dates: Iterable[Any] | None,
    month: Month,
    projections: Sequence[DayProjection],
) -> list[PayoutPeriodStats]:
    """Split a month's projected totals into payout periods.

    Needs at least two paydays. Each period covers its payday up to the day
    before the next payday; the last one runs to the end of the month.
    Periods left empty by clamping in short months are skipped.

    Args:
        payday_dates: Configured days of month.
        month: Month in YYYY-MM format.
        projections: Daily projections of the month (see project_month).

    Returns:
        List of PayoutPeriodStats, empty if fewer than two paydays are configured.
    """
    dates = normalize_payday_dates(payday_dates)
    if len(dates) < 2:
        return []

    first = parse_month(month)
    last_day = last_day_of_month(first.year, first.month)
    by_day = {p.day: p for p in projections}

    stats: list[PayoutPeriodStats] = []
    for i, payday in enumerate(dates):
        is_last = i == len(dates) - 1
        start_day = min(payday, last_day)
        end_day = last_day if is_last else min(dates[i + 1], last_day) - 1
        if end_day < start_day:
            continue

        income = 0
        expense = 0
        by_category: dict[CategoryName, Money] = {}
        for day_number in range(start_day, end_day + 1):
            projection = by_day.get(first.replace(day=day_number))
            if projection is None:
                continue
            income += projection.income
            expense += projection.expense
            for item in projection.items:
                if item.type != EXPENSE:
                    continue
                category = CategoryName(item.category or "Other")
                by_category[category] = Money(by_category.get(category, 0) + item.amount)

        stats.append(
            PayoutPeriodStats(
                label=f"{ordinal_suffix(start_day)} - {ordinal_suffix(end_day)}",
                start_day=start_day,
                end_day=end_day,
                income=Money(income),
                expense=Money(expense),
                expenses_by_category=by_category,
            )
        )

    return stats
