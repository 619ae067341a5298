"""Recurring template commands (add, list, delete, pause, resume, preview)."""

import logging
import sqlite3
import sys
import tomllib
from datetime import date

from rich.table import Table

from lifeboard.commands.common import console, exit_on_config_error, normalize_date, parse_money, resolve_month
from lifeboard.config import get_currency, get_hide_amounts, get_user_id
from lifeboard.dates import iter_days, month_bounds
from lifeboard.domain.models import EXPENSE, CategoryName, Frequency, Money
from lifeboard.domain.recurring import describe_schedule, normalize_template_fields, validate_template
from lifeboard.domain.report import mask_money
from lifeboard.domain.schedule import occurs_on
from lifeboard.store.queries import (
    delete_template,
    get_template,
    get_templates,
    insert_template,
    set_template_active,
)
from lifeboard.store.schema import get_db_path

logger = logging.getLogger(__name__)


def add_recurring_command(
    name: str,
    type_: str,
    amount: float,
    category: str,
    frequency: str,
    start: str | None = None,
    day_of_month: int | None = None,
    every_n_days: int | None = None,
    end: str | None = None,
    note: str | None = None,
) -> None:
    """Create a recurring income or expense template."""
    db_path = get_db_path()
    type_ = type_.lower()
    amount_minor = parse_money(amount) or Money(0)

    is_valid, error = validate_template(name, type_, amount_minor, frequency, day_of_month, every_n_days)
    if not is_valid:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    try:
        start_date = normalize_date(start) if start else date.today()
        end_date = normalize_date(end) if end else None
    except ValueError as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        sys.exit(1)

    if end_date is not None and end_date < start_date:
        console.print("[red]End date must not be before start date[/red]")
        sys.exit(1)

    freq = Frequency(frequency)
    day_of_month, every_n_days = normalize_template_fields(freq, day_of_month, every_n_days)

    try:
        template_id = insert_template(
            get_user_id(),
            name.strip(),
            type_,
            amount_minor,
            CategoryName(category),
            freq,
            start_date,
            day_of_month=day_of_month,
            every_n_days=every_n_days,
            end_date=end_date,
            note=note,
            db_path=db_path,
        )
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except tomllib.TOMLDecodeError as e:
        exit_on_config_error(e)

    console.print(f"[green]✓[/green] Recurring template {template_id} added:")
    console.print(f"  Name: {name.strip()}")
    console.print(f"  Schedule: {describe_schedule(freq, day_of_month, every_n_days)}")
    console.print(f"  Starts: {start_date.isoformat()}")
    if end_date:
        console.print(f"  Ends: {end_date.isoformat()}")


def list_recurring_command(active_only: bool = False) -> None:
    """List recurring templates."""
    db_path = get_db_path()

    try:
        templates = get_templates(get_user_id(), db_path, active_only=active_only)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except tomllib.TOMLDecodeError as e:
        exit_on_config_error(e)

    if not templates:
        console.print("[yellow]No recurring templates yet[/yellow]")
        return

    currency = get_currency()
    hide = get_hide_amounts()

    table = Table(title=f"Recurring templates ({len(templates)})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")
    table.add_column("Schedule", style="cyan")
    table.add_column("Start", style="cyan")
    table.add_column("End", style="dim")
    table.add_column("Status", justify="center")

    for template in templates:
        amount_display = mask_money(template.amount, currency, hide)
        if template.type == EXPENSE:
            amount_display = f"[red]-{amount_display}[/red]"
        else:
            amount_display = f"[green]+{amount_display}[/green]"

        table.add_row(
            str(template.id),
            template.name,
            template.category,
            amount_display,
            describe_schedule(template.frequency, template.day_of_month, template.every_n_days),
            template.start_date.isoformat(),
            template.end_date.isoformat() if template.end_date else "-",
            "✓" if template.is_active else "⏸",
        )

    console.print(table)


def delete_recurring_command(template_id: int) -> None:
    """Delete a recurring template."""
    db_path = get_db_path()

    try:
        if not delete_template(template_id, get_user_id(), db_path):
            console.print(f"[red]Recurring template {template_id} not found[/red]")
            sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except tomllib.TOMLDecodeError as e:
        exit_on_config_error(e)

    logger.info("Deleted recurring template %s", template_id)
    console.print(f"[green]✓[/green] Deleted recurring template {template_id}")


def set_active_command(template_id: int, active: bool) -> None:
    """Pause or resume a recurring template."""
    db_path = get_db_path()

    try:
        if not set_template_active(template_id, get_user_id(), active, db_path):
            console.print(f"[red]Recurring template {template_id} not found[/red]")
            sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except tomllib.TOMLDecodeError as e:
        exit_on_config_error(e)

    state = "resumed" if active else "paused"
    console.print(f"[green]✓[/green] Recurring template {template_id} {state}")


def preview_command(template_id: int, month: str | None = None) -> None:
    """Show the days a recurring template occurs on within a month."""
    db_path = get_db_path()

    try:
        report_month = resolve_month(month, date.today())
        template = get_template(template_id, get_user_id(), db_path)
    except tomllib.TOMLDecodeError as e:
        exit_on_config_error(e)
    except ValueError as e:
        console.print(f"[red]Invalid month: {e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if template is None:
        console.print(f"[red]Recurring template {template_id} not found[/red]")
        sys.exit(1)

    first, last = month_bounds(report_month)
    days = [day for day in iter_days(first, last) if occurs_on(template, day)]

    console.print(f"[bold cyan]{template.name}[/bold cyan] - {first:%B %Y}\n")
    if not days:
        console.print("[dim]No occurrences this month[/dim]")
        return

    for day in days:
        console.print(f"  {day:%a %d %b}")

    total = Money(template.amount * len(days))
    console.print(
        f"\n[bold]{len(days)} occurrence(s), total:[/bold] {mask_money(total, get_currency(), get_hide_amounts())}"
    )
