"""Pure functions for recurring template input rules."""

from lifeboard.domain.models import (
    BIWEEKLY,
    DAILY,
    EVERY_N,
    FREQUENCIES,
    MONTHLY,
    ONCE,
    SEMIMONTHLY_1_15,
    SEMIMONTHLY_5_20,
    SEMIMONTHLY_15_EOM,
    TRANSACTION_TYPES,
    WEEKLY,
    Frequency,
    Money,
)

FREQUENCY_LABELS: dict[Frequency, str] = {
    ONCE: "One-time",
    DAILY: "Daily",
    WEEKLY: "Weekly",
    BIWEEKLY: "Every 2 Weeks",
    SEMIMONTHLY_1_15: "1st & 15th",
    SEMIMONTHLY_5_20: "5th & 20th",
    SEMIMONTHLY_15_EOM: "15th & End of Month",
    MONTHLY: "Monthly (same day)",
    EVERY_N: "Every N days",
}


def validate_template(
    name: str,
    type_: str,
    amount: Money,
    frequency: str,
    day_of_month: int | None = None,
    every_n_days: int | None = None,
) -> tuple[bool, str | None]:
    """Validate recurring template input.

    Args:
        name: Template name.
        type_: "income" or "expense".
        amount: Amount in minor units.
        frequency: Frequency tag.
        day_of_month: Target day for monthly templates.
        every_n_days: Interval for everyN templates.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not name.strip():
        return False, "Name is required"

    if type_ not in TRANSACTION_TYPES:
        return False, "Type must be income or expense"

    if amount <= 0:
        return False, "Amount must be greater than 0"

    if frequency not in FREQUENCIES:
        return False, f"Unknown frequency '{frequency}'. Choose from: {', '.join(FREQUENCIES)}"

    if day_of_month is not None and not 1 <= day_of_month <= 31:
        return False, "Day of month must be between 1 and 31"

    if every_n_days is not None and every_n_days < 2:
        return False, "Every N days must be at least 2"

    return True, None


def normalize_template_fields(
    frequency: Frequency,
    day_of_month: int | None,
    every_n_days: int | None,
) -> tuple[int | None, int | None]:
    """Drop schedule parameters that do not apply to the frequency.

    Returns:
        Tuple of (day_of_month, every_n_days) to store.
    """
    return (
        day_of_month if frequency == MONTHLY else None,
        every_n_days if frequency == EVERY_N else None,
    )


def describe_schedule(frequency: Frequency, day_of_month: int | None, every_n_days: int | None) -> str:
    """Human-readable schedule for list views."""
    label = FREQUENCY_LABELS.get(frequency, frequency)
    if frequency == MONTHLY and day_of_month:
        return f"{label}, day {day_of_month}"
    if frequency == EVERY_N:
        return f"Every {every_n_days or 2} days"
    return label
