"""Tests for lifeboard.domain.report pure functions."""

from datetime import date

from lifeboard.domain.models import CategoryName, Frequency, Money, Month, RecurringTemplate, Transaction, UserId
from lifeboard.domain.report import (
    build_month_summary,
    calculate_histogram_bar_length,
    calculate_percentage,
    format_money,
    mask_money,
)


class TestFormatMoney:
    """Tests for format_money and mask_money."""

    def test_formats_minor_units(self) -> None:
        """Should format minor units with symbol and thousands separator."""
        assert format_money(Money(123450), "PHP") == "₱1,234.50"

    def test_negative_amount(self) -> None:
        """Should put the sign before the symbol."""
        assert format_money(Money(-450), "GBP") == "-£4.50"

    def test_unknown_currency_uses_code(self) -> None:
        """Should fall back to the currency code."""
        assert format_money(Money(100), "xyz") == "XYZ 1.00"

    def test_mask_hides_amount(self) -> None:
        """Should replace the amount with asterisks when hidden."""
        assert mask_money(Money(123450), "PHP", hide=True) == "₱****"
        assert mask_money(Money(100), "XYZ", hide=True) == "XYZ****"

    def test_mask_shows_amount(self) -> None:
        """Should format normally when not hidden."""
        assert mask_money(Money(500), "USD", hide=False) == "$5.00"


class TestBuildMonthSummary:
    """Tests for build_month_summary."""

    def test_combines_actual_and_recurring(self) -> None:
        """Should keep actual and recurring totals apart and add them up."""
        templates = [
            RecurringTemplate(
                id=1,
                user_id=UserId("u1"),
                name="Salary",
                type="income",
                amount=Money(2000000),
                category=CategoryName("Salary"),
                start_date=date(2025, 1, 1),
                frequency=Frequency("semimonthly_15_eom"),
            )
        ]
        transactions = [
            Transaction(
                id=1,
                user_id=UserId("u1"),
                type="expense",
                amount=Money(150000),
                date=date(2025, 1, 3),
                category=CategoryName("Food"),
            ),
            Transaction(
                id=2,
                user_id=UserId("u1"),
                type="expense",
                amount=Money(99999),
                date=date(2024, 12, 31),
                category=CategoryName("Food"),
            ),
        ]

        summary = build_month_summary(templates, transactions, Month("2025-01"))

        assert summary.actual_income == 0
        assert summary.actual_expense == 150000
        assert summary.recurring_income == 4000000
        assert summary.recurring_expense == 0
        assert summary.income == 4000000
        assert summary.net == 4000000 - 150000


class TestCalculations:
    """Tests for percentage and histogram helpers."""

    def test_percentage(self) -> None:
        """Should calculate the share of a whole."""
        assert calculate_percentage(5, 20) == 25.0

    def test_percentage_of_zero(self) -> None:
        """Should return 0 for a non-positive whole."""
        assert calculate_percentage(5, 0) == 0.0

    def test_histogram_bar_length(self) -> None:
        """Should scale bars to the largest amount."""
        assert calculate_histogram_bar_length(Money(500), Money(1000), 20) == 10
        assert calculate_histogram_bar_length(Money(500), Money(0), 20) == 0
