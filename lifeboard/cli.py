"""CLI entry point for lifeboard."""

import logging

import typer
from rich.logging import RichHandler

from lifeboard.commands.admin import backup_command, init_command
from lifeboard.commands.period import period_command, periods_command
from lifeboard.commands.recurring import (
    add_recurring_command,
    delete_recurring_command,
    list_recurring_command,
    preview_command,
    set_active_command,
)
from lifeboard.commands.report import calendar_command, summary_command
from lifeboard.commands.settings import currency_command, paydays_command, privacy_command, show_settings_command
from lifeboard.commands.transactions import add_command, delete_command, list_command

app = typer.Typer(
    name="lifeboard",
    help="Lifeboard - track your money, recurring bills and pay periods",
    add_completion=False,
)

recurring_app = typer.Typer(help="Manage your recurring income and expenses.")
settings_app = typer.Typer(help="Show or change your settings.")

app.add_typer(recurring_app, name="recurring")
app.add_typer(settings_app, name="settings")


def configure_logging(verbose: bool) -> None:
    """Route log records through rich (debug level when verbose)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Lifeboard - track your money, recurring bills and pay periods."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
    migrate: bool = typer.Option(False, "--migrate", help="Update the database schema only"),
) -> None:
    """Initialize lifeboard database and configuration."""
    init_command(force, migrate)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: next to the database)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command()
def add(
    type_: str = typer.Argument(..., metavar="TYPE", help="income or expense"),
    amount: float = typer.Argument(..., help="Amount (positive)"),
    category: str = typer.Argument(..., help="Category name"),
    date: str = typer.Option(None, "--date", "-d", help="Transaction date (default: today)"),
    note: str = typer.Option(None, "--note", "-n", help="Optional note"),
    recurring: bool = typer.Option(False, "--recurring", help="Mark as a recurring bill or payslip"),
) -> None:
    """Record an actual income or expense."""
    add_command(type_, amount, category, date, note, recurring)


@app.command(name="list")
def list_transactions(
    limit: int = typer.Option(50, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your transactions"),
    month: str = typer.Option(None, "--month", help="Only this month (YYYY-MM)"),
) -> None:
    """List your transactions."""
    list_command(limit, all, month)


@app.command()
def delete(transaction_id: int) -> None:
    """Delete one of your transactions."""
    delete_command(transaction_id)


@app.command()
def summary(
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
) -> None:
    """Show your income and expenses for a month, including recurring ones."""
    summary_command(month)


@app.command()
def calendar(
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
) -> None:
    """Show a calendar with your projected daily balance."""
    calendar_command(month)


@app.command()
def period() -> None:
    """Show your current pay period."""
    period_command()


@app.command()
def periods(
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
) -> None:
    """Compare your pay periods for a month."""
    periods_command(month)


@recurring_app.command(name="add")
def recurring_add(
    name: str = typer.Argument(..., help="Template name"),
    type_: str = typer.Argument(..., metavar="TYPE", help="income or expense"),
    amount: float = typer.Argument(..., help="Amount per occurrence"),
    category: str = typer.Argument(..., help="Category name"),
    frequency: str = typer.Option(
        "monthly",
        "--frequency",
        "-f",
        help="once, daily, weekly, biweekly, semimonthly_1_15, semimonthly_5_20, semimonthly_15_eom, monthly, everyN",
    ),
    start: str = typer.Option(None, "--start", help="Start date (default: today)"),
    day_of_month: int = typer.Option(None, "--day", help="Day of month for monthly templates (1-31)"),
    every_n_days: int = typer.Option(None, "--every", help="Interval in days for everyN templates"),
    end: str = typer.Option(None, "--end", help="Optional end date"),
    note: str = typer.Option(None, "--note", "-n", help="Optional note"),
) -> None:
    """Add a recurring income or expense."""
    add_recurring_command(name, type_, amount, category, frequency, start, day_of_month, every_n_days, end, note)


@recurring_app.command(name="list")
def recurring_list(
    active: bool = typer.Option(False, "--active", help="Hide paused templates"),
) -> None:
    """List your recurring income and expenses."""
    list_recurring_command(active)


@recurring_app.command(name="delete")
def recurring_delete(template_id: int) -> None:
    """Delete a recurring template."""
    delete_recurring_command(template_id)


@recurring_app.command(name="pause")
def recurring_pause(template_id: int) -> None:
    """Pause a recurring template (it stops projecting)."""
    set_active_command(template_id, False)


@recurring_app.command(name="resume")
def recurring_resume(template_id: int) -> None:
    """Resume a paused recurring template."""
    set_active_command(template_id, True)


@recurring_app.command(name="preview")
def recurring_preview(
    template_id: int,
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
) -> None:
    """Show the days a recurring template occurs on in a month."""
    preview_command(template_id, month)


@settings_app.command(name="show")
def settings_show() -> None:
    """Show your settings."""
    show_settings_command()


@settings_app.command(name="currency")
def settings_currency(currency: str) -> None:
    """Set your display currency (e.g., PHP, USD, GBP)."""
    currency_command(currency)


@settings_app.command(name="paydays")
def settings_paydays(
    dates: list[int] = typer.Argument(..., help="Payday days of month (e.g., 15 30)"),
    payday_type: str = typer.Option("custom", "--type", help="fixed, custom, monthly or semiMonthly"),
) -> None:
    """Set your payday days of month."""
    paydays_command(dates, payday_type)


@settings_app.command(name="privacy")
def settings_privacy(
    hide: bool = typer.Option(None, "--hide/--show", help="Hide or show amounts (default: toggle)"),
) -> None:
    """Hide or show amounts in all output."""
    privacy_command(hide)


if __name__ == "__main__":
    app()
