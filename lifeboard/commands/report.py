"""Month summary and calendar commands."""

import sqlite3
import sys
import tomllib
from datetime import date

from rich.table import Table

from lifeboard.commands.common import console, exit_on_config_error, resolve_month
from lifeboard.config import get_currency, get_hide_amounts, get_user_id
from lifeboard.dates import calendar_weeks, parse_month
from lifeboard.domain.models import Month, RecurringTemplate, Transaction
from lifeboard.domain.report import build_month_summary, mask_money
from lifeboard.domain.schedule import DayProjection, current_balance, project_month
from lifeboard.store.queries import get_templates, get_transactions
from lifeboard.store.schema import get_db_path

WEEKDAY_HEADERS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def load_finance_data(month: str | None) -> tuple[Month, list[RecurringTemplate], list[Transaction]]:
    """Load the month and the user's templates and transactions, exiting on error."""
    db_path = get_db_path()

    try:
        report_month = resolve_month(month, date.today())
        user_id = get_user_id()
        templates = get_templates(user_id, db_path)
        transactions = get_transactions(user_id, db_path)
    except tomllib.TOMLDecodeError as e:
        exit_on_config_error(e)
    except ValueError as e:
        console.print(f"[red]Invalid month: {e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    return report_month, templates, transactions


def summary_command(month: str | None = None) -> None:
    """Show income and expense for a month, including recurring projections."""
    report_month, templates, transactions = load_finance_data(month)

    currency = get_currency()
    hide = get_hide_amounts()
    summary = build_month_summary(templates, transactions, report_month)
    projections = project_month(templates, transactions, report_month)
    balance = current_balance(transactions)
    end_balance = projections[-1].balance if projections else balance

    console.print(f"[bold cyan]{parse_month(report_month):%B %Y}[/bold cyan]\n")

    console.print(f"[bold green]Income:[/bold green] {mask_money(summary.income, currency, hide)}")
    if summary.recurring_income > 0:
        console.print(f"  [dim]Includes {mask_money(summary.recurring_income, currency, hide)} recurring[/dim]")

    console.print(f"[bold red]Expenses:[/bold red] {mask_money(summary.expense, currency, hide)}")
    if summary.recurring_expense > 0:
        console.print(f"  [dim]Includes {mask_money(summary.recurring_expense, currency, hide)} recurring[/dim]")

    net_colour = "green" if summary.net >= 0 else "red"
    net_display = mask_money(summary.net, currency, hide)
    console.print(f"\n[bold cyan]Net:[/bold cyan] [{net_colour}]{net_display}[/{net_colour}]")

    balance_colour = "green" if balance >= 0 else "red"
    console.print(
        f"[bold]Current balance:[/bold] [{balance_colour}]{mask_money(balance, currency, hide)}[/{balance_colour}]"
    )
    console.print(f"[bold]Projected end of month:[/bold] {mask_money(end_balance, currency, hide)}")


def render_day_cell(projection: DayProjection | None, day: date, currency: str, hide: bool) -> str:
    """Render one calendar cell: day number, projected flows and balance."""
    lines = [f"[bold]{day.day}[/bold]"]
    if projection is None:
        return lines[0]

    if projection.income:
        lines.append(f"[green]+{mask_money(projection.income, currency, hide)}[/green]")
    if projection.expense:
        lines.append(f"[red]-{mask_money(projection.expense, currency, hide)}[/red]")
    if projection.items:
        lines.append(f"[dim]↻ {len(projection.items)}[/dim]")

    colour = "cyan" if projection.balance >= 0 else "red"
    lines.append(f"[{colour}]{mask_money(projection.balance, currency, hide)}[/{colour}]")
    return "\n".join(lines)


def calendar_command(month: str | None = None) -> None:
    """Show a month calendar with projected daily flows and running balance."""
    report_month, templates, transactions = load_finance_data(month)

    currency = get_currency()
    hide = get_hide_amounts()
    projections = {p.day: p for p in project_month(templates, transactions, report_month)}

    table = Table(title=f"{parse_month(report_month):%B %Y}", show_lines=True)
    for header in WEEKDAY_HEADERS:
        table.add_column(header, justify="left", vertical="top")

    for week in calendar_weeks(report_month):
        cells = ["" if day is None else render_day_cell(projections.get(day), day, currency, hide) for day in week]
        table.add_row(*cells)

    console.print(table)

    if projections:
        end_balance = projections[max(projections)].balance
        console.print(f"\n[bold]Projected end of month:[/bold] {mask_money(end_balance, currency, hide)}")
