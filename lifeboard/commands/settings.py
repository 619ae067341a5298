"""Settings commands (currency, paydays, privacy)."""

import sys
import tomllib

from lifeboard.commands.common import console, exit_on_config_error
from lifeboard.config import (
    PAYDAY_TYPES,
    get_config_path,
    get_currency,
    get_hide_amounts,
    get_payday_config,
    get_user_id,
    set_currency,
    set_hide_amounts,
    set_payday_dates,
)
from lifeboard.dates import ordinal_suffix
from lifeboard.domain.report import CURRENCY_SYMBOLS


def show_settings_command() -> None:
    """Show current settings."""
    try:
        payday = get_payday_config()
        console.print(f"[bold]Config:[/bold] [dim]{get_config_path()}[/dim]\n")
        console.print(f"  User: {get_user_id()}")
        console.print(f"  Currency: {get_currency()}")
        console.print(f"  Paydays ({payday.type}): {', '.join(ordinal_suffix(d) for d in payday.dates)}")
        console.print(f"  Hide amounts: {'yes' if get_hide_amounts() else 'no'}")
    except tomllib.TOMLDecodeError as e:
        exit_on_config_error(e)
    except OSError as e:
        console.print(f"[red]Could not read config: {e}[/red]", style="bold")
        sys.exit(1)


def currency_command(currency: str) -> None:
    """Set the display currency."""
    code = currency.upper()
    if len(code) != 3 or not code.isalpha():
        console.print("[red]Currency must be a 3-letter code (e.g., PHP, USD)[/red]")
        sys.exit(1)

    try:
        set_currency(code)
    except tomllib.TOMLDecodeError as e:
        exit_on_config_error(e)
    except OSError as e:
        console.print(f"[red]Could not save config: {e}[/red]", style="bold")
        sys.exit(1)

    if code not in CURRENCY_SYMBOLS:
        console.print(f"[yellow]No symbol known for {code}; amounts will show the code[/yellow]")
    console.print(f"[green]✓[/green] Currency set to {code}")


def paydays_command(dates: list[int], payday_type: str = "custom") -> None:
    """Set the payday days of month."""
    invalid = [d for d in dates if not 1 <= d <= 31]
    if invalid:
        console.print(f"[red]Payday must be between 1 and 31 (got {', '.join(map(str, invalid))})[/red]")
        sys.exit(1)

    try:
        saved = set_payday_dates(dates, payday_type)
    except tomllib.TOMLDecodeError as e:
        exit_on_config_error(e)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        console.print(f"[dim]Types: {', '.join(PAYDAY_TYPES)}[/dim]")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Could not save config: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Paydays set to {', '.join(ordinal_suffix(d) for d in saved)}")


def privacy_command(hide: bool | None = None) -> None:
    """Toggle or set whether amounts are hidden."""
    try:
        new_value = (not get_hide_amounts()) if hide is None else hide
        set_hide_amounts(new_value)
    except tomllib.TOMLDecodeError as e:
        exit_on_config_error(e)
    except OSError as e:
        console.print(f"[red]Could not save config: {e}[/red]", style="bold")
        sys.exit(1)

    state = "hidden" if new_value else "shown"
    console.print(f"[green]✓[/green] Amounts are now {state}")
