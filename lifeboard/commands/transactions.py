"""Transaction commands (add, list, delete)."""

import logging
import sqlite3
import sys
import tomllib
from datetime import date

from rich.table import Table

from lifeboard.commands.common import console, exit_on_config_error, normalize_date, parse_money, resolve_month
from lifeboard.config import get_currency, get_hide_amounts, get_user_id
from lifeboard.dates import month_range
from lifeboard.domain.models import EXPENSE, TRANSACTION_TYPES, CategoryName
from lifeboard.domain.report import mask_money
from lifeboard.store.queries import delete_transaction, get_transaction, get_transactions, insert_transaction
from lifeboard.store.schema import get_db_path

logger = logging.getLogger(__name__)


def add_command(
    type_: str,
    amount: float,
    category: str,
    date_str: str | None = None,
    note: str | None = None,
    recurring: bool = False,
) -> None:
    """Record an actual income or expense.

    Args:
        type_: "income" or "expense".
        amount: Amount in major units (always positive).
        category: Category name.
        date_str: Transaction date (defaults to today).
        note: Optional free text.
        recurring: Mark the transaction as recorded from a recurring bill or payslip.
    """
    db_path = get_db_path()
    type_ = type_.lower()

    if type_ not in TRANSACTION_TYPES:
        console.print("[red]Type must be 'income' or 'expense'[/red]")
        sys.exit(1)

    amount_minor = parse_money(amount)
    if amount_minor is None or amount_minor == 0:
        console.print("[red]Amount must be greater than 0[/red]")
        sys.exit(1)

    try:
        txn_date = normalize_date(date_str) if date_str else date.today()
    except ValueError as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)

    try:
        user_id = get_user_id()
        txn_id = insert_transaction(
            user_id,
            type_,
            amount_minor,
            txn_date,
            CategoryName(category),
            note=note,
            is_recurring=recurring,
            db_path=db_path,
        )
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except tomllib.TOMLDecodeError as e:
        exit_on_config_error(e)

    currency = get_currency()
    console.print(f"[green]✓[/green] Transaction {txn_id} added:")
    console.print(f"  Date: {txn_date.isoformat()}")
    console.print(f"  Type: {type_}")
    console.print(f"  Amount: {mask_money(amount_minor, currency, get_hide_amounts())}")
    console.print(f"  Category: {category}")
    if note:
        console.print(f"  Note: {note}")


def list_command(
    limit: int = 50,
    all: bool = False,
    month: str | None = None,
) -> None:
    """List transactions, newest first."""
    db_path = get_db_path()

    try:
        since_date = until_date = None
        if month:
            since_date, until_date, _ = month_range(resolve_month(month, date.today()))

        actual_limit = None if all else limit
        transactions = get_transactions(get_user_id(), db_path, since_date, until_date, actual_limit)
    except tomllib.TOMLDecodeError as e:
        exit_on_config_error(e)
    except ValueError as e:
        console.print(f"[red]Invalid month: {e}[/red]")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not transactions:
        console.print("[yellow]No transactions found[/yellow]")
        return

    currency = get_currency()
    hide = get_hide_amounts()

    title = f"Transactions (showing all {len(transactions)})" if all else f"Transactions (showing {len(transactions)})"
    table = Table(title=title)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")
    table.add_column("Note", style="white")
    table.add_column("Recurring", justify="center")

    for txn in transactions:
        amount_display = mask_money(txn.amount, currency, hide)
        if txn.type == EXPENSE:
            amount_display = f"[red]-{amount_display}[/red]"
        else:
            amount_display = f"[green]+{amount_display}[/green]"

        table.add_row(
            str(txn.id),
            txn.date.isoformat(),
            txn.category,
            amount_display,
            txn.note or "[dim]-[/dim]",
            "↻" if txn.is_recurring else "",
        )

    console.print(table)


def delete_command(txn_id: int) -> None:
    """Delete a transaction."""
    db_path = get_db_path()

    try:
        user_id = get_user_id()
        txn = get_transaction(txn_id, user_id, db_path)
        if txn is None:
            console.print(f"[red]Transaction {txn_id} not found[/red]")
            sys.exit(1)

        delete_transaction(txn_id, user_id, db_path)
        logger.info("Deleted transaction %s", txn_id)
        console.print(f"[green]✓[/green] Deleted transaction {txn_id} ({txn.date.isoformat()}, {txn.category})")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except tomllib.TOMLDecodeError as e:
        exit_on_config_error(e)
