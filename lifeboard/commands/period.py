"""Pay period commands."""

import sqlite3
import sys
import tomllib
from datetime import date

from rich.table import Table

from lifeboard.commands.common import console, exit_on_config_error
from lifeboard.commands.report import load_finance_data
from lifeboard.config import get_currency, get_hide_amounts, get_payday_config, get_user_id
from lifeboard.dates import parse_month
from lifeboard.domain.models import Money
from lifeboard.domain.payperiod import current_pay_period, pay_periods_for_month, payout_period_stats
from lifeboard.domain.report import calculate_histogram_bar_length, mask_money
from lifeboard.domain.schedule import project_month
from lifeboard.store.queries import get_transactions
from lifeboard.store.schema import get_db_path


def render_progress_bar(percentage: float, width: int = 30) -> str:
    """Render a text progress bar for a percentage (0-100)."""
    filled = max(0, min(width, int(round(percentage / 100 * width))))
    return "█" * filled + "░" * (width - filled)


def period_command() -> None:
    """Show the current pay period, days remaining and spending so far."""
    db_path = get_db_path()
    today = date.today()

    try:
        transactions = get_transactions(get_user_id(), db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except tomllib.TOMLDecodeError as e:
        exit_on_config_error(e)

    currency = get_currency()
    hide = get_hide_amounts()
    period = current_pay_period(get_payday_config().dates, today, transactions)

    console.print("[bold cyan]Current Pay Period[/bold cyan]")
    console.print(f"[dim]{period.start_date:%b} {period.start_date.day} - {period.end_date:%b %d, %Y}[/dim]\n")

    console.print(f"  [bold]Days passed:[/bold] {period.days_passed} of {period.days_in_period}")
    console.print(f"  [bold]Until payday:[/bold] [cyan]{period.days_remaining}[/cyan] day(s)")
    console.print(f"  [bold]Spent this period:[/bold] [red]{mask_money(period.spent, currency, hide)}[/red]")

    daily_average = Money(int(round(period.daily_average)))
    console.print(f"  [bold]Daily average:[/bold] {mask_money(daily_average, currency, hide)}")

    console.print(f"\n  Period progress {render_progress_bar(period.progress)} {period.progress:.0f}%")


def periods_command(month: str | None = None) -> None:
    """Compare pay periods of a month and show projected payout statistics."""
    report_month, templates, transactions = load_finance_data(month)

    currency = get_currency()
    hide = get_hide_amounts()
    payday_dates = get_payday_config().dates

    periods = pay_periods_for_month(payday_dates, report_month, transactions)
    console.print(f"[bold cyan]{parse_month(report_month):%B %Y}[/bold cyan]\n")

    if periods:
        table = Table(title="Pay Period Comparison")
        table.add_column("Period", style="cyan")
        table.add_column("Income", justify="right", style="green")
        table.add_column("Expense", justify="right", style="red")
        table.add_column("", style="red")

        max_expense = Money(max(p.expense for p in periods))
        for pay_period in periods:
            bar = "█" * calculate_histogram_bar_length(pay_period.expense, max_expense, 20)
            table.add_row(
                pay_period.name,
                mask_money(pay_period.income, currency, hide),
                mask_money(pay_period.expense, currency, hide),
                "" if hide else bar,
            )
        console.print(table)

    projections = project_month(templates, transactions, report_month)
    stats = payout_period_stats(payday_dates, report_month, projections)
    if not stats:
        console.print("[dim]Configure at least two paydays to see payout period statistics[/dim]")
        return

    console.print("\n[bold]Payout Period Statistics[/bold]")
    console.print("[dim]Projected income, expenses, and net by pay period[/dim]\n")

    for idx, stat in enumerate(stats, 1):
        net_colour = "blue" if stat.net >= 0 else "dark_orange"
        console.print(f"[bold]Period {idx} ({stat.label})[/bold]")
        console.print(f"  Income:  [green]{mask_money(stat.income, currency, hide)}[/green]")
        console.print(f"  Expense: [red]{mask_money(stat.expense, currency, hide)}[/red]")
        console.print(f"  Net:     [{net_colour}]{mask_money(stat.net, currency, hide)}[/{net_colour}]")

        for category, amount in sorted(stat.expenses_by_category.items(), key=lambda x: x[1], reverse=True):
            console.print(f"    [dim]{category:20} {mask_money(amount, currency, hide):>14}[/dim]")
        console.print()
