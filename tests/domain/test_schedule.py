"""Tests for lifeboard.domain.schedule pure functions."""

from datetime import date, timedelta

from lifeboard.dates import iter_days
from lifeboard.domain.models import (
    CategoryName,
    Frequency,
    Money,
    Month,
    RecurringTemplate,
    Transaction,
    UserId,
)
from lifeboard.domain.schedule import (
    aggregate_over_range,
    current_balance,
    occurrences_on,
    occurs_on,
    project_month,
    recurring_totals,
)


def make_template(
    frequency: str,
    start: date,
    amount: int = 1000,
    type_: str = "expense",
    **kwargs: object,
) -> RecurringTemplate:
    return RecurringTemplate(
        id=1,
        user_id=UserId("u1"),
        name="Test",
        type=type_,
        amount=Money(amount),
        category=CategoryName("Bills"),
        start_date=start,
        frequency=Frequency(frequency),
        **kwargs,  # type: ignore[arg-type]
    )


def make_transaction(type_: str, amount: int, day: date) -> Transaction:
    return Transaction(
        id=1,
        user_id=UserId("u1"),
        type=type_,
        amount=Money(amount),
        date=day,
        category=CategoryName("Misc"),
    )


class TestOccursOnGuards:
    """Tests for the checks applied before any frequency rule."""

    def test_never_before_start_date(self) -> None:
        """Should not occur before the start date for any frequency."""
        start = date(2025, 1, 10)
        for frequency in ("once", "daily", "weekly", "biweekly", "monthly", "everyN", "semimonthly_1_15"):
            template = make_template(frequency, start, day_of_month=1)
            assert occurs_on(template, date(2025, 1, 1), start) is False

    def test_unknown_frequency_never_occurs(self) -> None:
        """Should treat an unknown frequency as never occurring."""
        template = make_template("yearly", date(2025, 1, 1))

        assert not any(occurs_on(template, day) for day in iter_days(date(2025, 1, 1), date(2025, 12, 31)))

    def test_inactive_template_never_occurs(self) -> None:
        """Should not occur when the template is paused."""
        template = make_template("daily", date(2025, 1, 1), is_active=False)

        assert occurs_on(template, date(2025, 1, 5)) is False

    def test_not_after_end_date(self) -> None:
        """Should stop occurring after the end date."""
        template = make_template("daily", date(2025, 1, 1), end_date=date(2025, 1, 31))

        assert occurs_on(template, date(2025, 1, 31)) is True
        assert occurs_on(template, date(2025, 2, 1)) is False

    def test_explicit_start_date_overrides_template(self) -> None:
        """Should use the start date argument when given."""
        template = make_template("once", date(2025, 1, 1))

        assert occurs_on(template, date(2025, 2, 1), date(2025, 2, 1)) is True
        assert occurs_on(template, date(2025, 1, 1), date(2025, 2, 1)) is False

    def test_is_pure(self) -> None:
        """Should return identical results for identical inputs."""
        template = make_template("biweekly", date(2025, 1, 6))
        day = date(2025, 1, 20)

        assert occurs_on(template, day) == occurs_on(template, day)


class TestOccursOnFrequencies:
    """Tests for each frequency rule."""

    def test_once_only_on_start(self) -> None:
        """Should occur exactly once inside a bounded range."""
        template = make_template("once", date(2025, 3, 10))

        march = [d for d in iter_days(date(2025, 3, 1), date(2025, 3, 31)) if occurs_on(template, d)]
        april = [d for d in iter_days(date(2025, 4, 1), date(2025, 4, 30)) if occurs_on(template, d)]

        assert march == [date(2025, 3, 10)]
        assert april == []

    def test_daily_from_start_onward(self) -> None:
        """Should occur on every day from the start date on."""
        start = date(2025, 1, 10)
        template = make_template("daily", start)

        assert occurs_on(template, date(2025, 1, 9)) is False
        assert all(occurs_on(template, d) for d in iter_days(start, date(2025, 3, 31)))

    def test_weekly_on_start_weekday(self) -> None:
        """Should occur on the weekday of the start date."""
        template = make_template("weekly", date(2025, 1, 6))  # Monday

        assert occurs_on(template, date(2025, 1, 13)) is True
        assert occurs_on(template, date(2025, 1, 14)) is False
        assert occurs_on(template, date(2025, 6, 2)) is True

    def test_biweekly_every_other_week(self) -> None:
        """Should occur at start, skip one week, then occur again."""
        start = date(2025, 1, 6)
        template = make_template("biweekly", start)

        assert occurs_on(template, start) is True
        assert occurs_on(template, start + timedelta(weeks=1)) is False
        assert occurs_on(template, start + timedelta(weeks=2)) is True
        assert occurs_on(template, start + timedelta(weeks=3)) is False
        assert occurs_on(template, start + timedelta(days=14 + 1)) is False

    def test_biweekly_across_daylight_saving_change(self) -> None:
        """Should count whole weeks by calendar, not elapsed time."""
        template = make_template("biweekly", date(2025, 3, 3))

        assert occurs_on(template, date(2025, 3, 17)) is True
        assert occurs_on(template, date(2025, 10, 13)) is True
        assert occurs_on(template, date(2025, 10, 20)) is False

    def test_semimonthly_1_15(self) -> None:
        """Should occur on the 1st and 15th."""
        template = make_template("semimonthly_1_15", date(2025, 1, 1))

        assert occurs_on(template, date(2025, 2, 1)) is True
        assert occurs_on(template, date(2025, 2, 15)) is True
        assert occurs_on(template, date(2025, 2, 14)) is False

    def test_semimonthly_5_20(self) -> None:
        """Should occur on the 5th and 20th."""
        template = make_template("semimonthly_5_20", date(2025, 1, 1))

        assert occurs_on(template, date(2025, 2, 5)) is True
        assert occurs_on(template, date(2025, 2, 20)) is True
        assert occurs_on(template, date(2025, 2, 15)) is False

    def test_semimonthly_15_end_of_month(self) -> None:
        """Should occur on the 15th and the real last day of each month."""
        template = make_template("semimonthly_15_eom", date(2024, 1, 1))

        assert occurs_on(template, date(2025, 1, 15)) is True
        assert occurs_on(template, date(2025, 1, 31)) is True
        assert occurs_on(template, date(2025, 1, 30)) is False
        assert occurs_on(template, date(2025, 2, 28)) is True
        assert occurs_on(template, date(2024, 2, 29)) is True
        assert occurs_on(template, date(2024, 2, 28)) is False
        assert occurs_on(template, date(2025, 4, 30)) is True

    def test_monthly_day_31_clamps_to_short_months(self) -> None:
        """Should fire on the last day of months shorter than the target day."""
        template = make_template("monthly", date(2024, 1, 1), day_of_month=31)

        assert occurs_on(template, date(2025, 1, 31)) is True
        assert occurs_on(template, date(2025, 2, 28)) is True
        assert occurs_on(template, date(2024, 2, 29)) is True
        assert occurs_on(template, date(2024, 2, 28)) is False
        assert occurs_on(template, date(2025, 4, 30)) is True
        assert occurs_on(template, date(2025, 4, 29)) is False

    def test_monthly_defaults_to_start_day(self) -> None:
        """Should use the start date's day when no day of month is set."""
        template = make_template("monthly", date(2025, 1, 15))

        assert occurs_on(template, date(2025, 2, 15)) is True
        assert occurs_on(template, date(2025, 2, 16)) is False

    def test_every_n_days(self) -> None:
        """Should occur every N days counted from the start date."""
        template = make_template("everyN", date(2025, 1, 1), every_n_days=3)

        assert occurs_on(template, date(2025, 1, 4)) is True
        assert occurs_on(template, date(2025, 1, 5)) is False
        assert occurs_on(template, date(2025, 1, 31)) is True

    def test_every_n_days_defaults_to_two(self) -> None:
        """Should use an interval of 2 when none is set."""
        template = make_template("everyN", date(2025, 1, 1))

        assert occurs_on(template, date(2025, 1, 3)) is True
        assert occurs_on(template, date(2025, 1, 2)) is False


class TestAggregateOverRange:
    """Tests for aggregate_over_range."""

    def setup_method(self) -> None:
        self.templates = [
            make_template("monthly", date(2025, 1, 1), amount=100000, type_="income", day_of_month=15),
            make_template("daily", date(2025, 1, 1), amount=1000, type_="expense"),
        ]
        self.transactions = [
            make_transaction("income", 5000, date(2025, 1, 10)),
            make_transaction("expense", 2000, date(2025, 1, 20)),
            make_transaction("expense", 9999, date(2025, 2, 1)),
        ]

    def test_sums_projections_and_actuals(self) -> None:
        """Should add projected occurrences and actual transactions by type."""
        totals = aggregate_over_range(self.templates, self.transactions, date(2025, 1, 1), date(2025, 1, 31))

        assert totals.income == 105000
        assert totals.expense == 31 * 1000 + 2000
        assert totals.net == 105000 - 33000

    def test_is_additive_over_adjacent_ranges(self) -> None:
        """Should equal the sum of two adjacent sub-ranges."""
        whole = aggregate_over_range(self.templates, self.transactions, date(2025, 1, 1), date(2025, 2, 28))
        first = aggregate_over_range(self.templates, self.transactions, date(2025, 1, 1), date(2025, 1, 20))
        second = aggregate_over_range(self.templates, self.transactions, date(2025, 1, 21), date(2025, 2, 28))

        assert whole.income == first.income + second.income
        assert whole.expense == first.expense + second.expense

    def test_inverted_range_is_zero(self) -> None:
        """Should return zero totals when end is before start."""
        totals = aggregate_over_range(self.templates, self.transactions, date(2025, 1, 31), date(2025, 1, 1))

        assert totals.income == 0
        assert totals.expense == 0

    def test_actual_does_not_suppress_projection(self) -> None:
        """Should count a matching actual transaction on top of the projection."""
        templates = [make_template("once", date(2025, 1, 15), amount=5000)]
        transactions = [make_transaction("expense", 5000, date(2025, 1, 15))]

        totals = aggregate_over_range(templates, transactions, date(2025, 1, 15), date(2025, 1, 15))

        assert totals.expense == 10000

    def test_recurring_totals_ignore_transactions(self) -> None:
        """Should only total projected occurrences."""
        totals = recurring_totals(self.templates, date(2025, 1, 1), date(2025, 1, 31))

        assert totals.income == 100000
        assert totals.expense == 31000


class TestOccurrencesOn:
    """Tests for occurrences_on."""

    def test_filters_templates_for_day(self) -> None:
        """Should return only the templates firing on the day."""
        monthly = make_template("monthly", date(2025, 1, 1), day_of_month=15)
        daily = make_template("daily", date(2025, 1, 1))

        assert occurrences_on([monthly, daily], date(2025, 1, 15)) == [monthly, daily]
        assert occurrences_on([monthly, daily], date(2025, 1, 16)) == [daily]


class TestProjectMonth:
    """Tests for project_month and current_balance."""

    def test_running_balance_starts_from_prior_transactions(self) -> None:
        """Should open with the net of transactions before the month."""
        templates = [make_template("daily", date(2025, 1, 1), amount=100)]
        transactions = [
            make_transaction("income", 10000, date(2024, 12, 31)),
            make_transaction("expense", 500, date(2025, 1, 10)),
        ]

        projections = project_month(templates, transactions, Month("2025-01"))

        assert len(projections) == 31
        assert projections[0].day == date(2025, 1, 1)
        assert projections[0].balance == 9900
        assert projections[9].expense == 600
        assert projections[-1].balance == 10000 - 3100 - 500

    def test_items_list_recurring_occurrences(self) -> None:
        """Should attach the templates firing on each day."""
        rent = make_template("monthly", date(2025, 1, 1), day_of_month=5)

        projections = project_month([rent], [], Month("2025-01"))

        assert projections[4].items == [rent]
        assert projections[5].items == []

    def test_current_balance(self) -> None:
        """Should subtract expenses from income."""
        transactions = [
            make_transaction("income", 10000, date(2025, 1, 1)),
            make_transaction("expense", 2500, date(2025, 1, 2)),
        ]

        assert current_balance(transactions) == 7500
