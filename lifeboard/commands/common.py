"""Helpers shared by the command modules."""

import sys
import tomllib
from datetime import date
from typing import NoReturn

import pandas as pd
from rich.console import Console

from lifeboard.config import get_config_path
from lifeboard.dates import month_of
from lifeboard.domain.models import Money, Month

console = Console()


def exit_on_config_error(error: tomllib.TOMLDecodeError) -> NoReturn:
    """Report an unreadable config file and exit."""
    console.print(f"[red]Invalid config file: {error}[/red]", style="bold")
    console.print(f"[dim]Fix or delete {get_config_path()} to fall back to the defaults[/dim]")
    sys.exit(1)


def parse_money(amount: float) -> Money | None:
    """Convert a major-unit amount to minor units.

    Args:
        amount: Amount in major units (e.g., 12.50).

    Returns:
        Money amount in minor units, or None if negative.
    """
    if amount < 0:
        return None
    return Money(int(round(amount * 100)))


def normalize_date(raw_date: str) -> date:
    """Parse a user-entered date.

    ISO dates (YYYY-MM-DD) are read strictly as year-month-day. Anything
    else goes through pandas.to_datetime with day-first parsing, so
    European and other common formats are accepted too.

    Args:
        raw_date: Date string (YYYY-MM-DD, DD/MM/YYYY, ...).

    Returns:
        The parsed calendar date.

    Raises:
        ValueError: If the date cannot be parsed.
    """
    try:
        parsed = pd.to_datetime(raw_date, format="ISO8601")
    except (ValueError, pd.errors.ParserError):
        try:
            parsed = pd.to_datetime(raw_date, dayfirst=True)
        except (ValueError, pd.errors.ParserError) as e:
            raise ValueError(f"Could not parse date '{raw_date}': {e}") from e

    if pd.isna(parsed):
        raise ValueError(f"Could not parse date '{raw_date}'")
    return parsed.date()


def resolve_month(month: str | None, today: date) -> Month:
    """Use the given YYYY-MM month, or the month containing today.

    Raises:
        ValueError: If month is not in YYYY-MM format.
    """
    if not month:
        return month_of(today)
    return month_of(pd.to_datetime(month, format="%Y-%m").date())
