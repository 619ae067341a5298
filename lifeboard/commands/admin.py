"""Admin commands for init, schema migration and backup."""

import shutil
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

from lifeboard.commands.common import console
from lifeboard.config import create_default_config, get_config_path, get_currency, get_payday_config
from lifeboard.dates import ordinal_suffix
from lifeboard.store.schema import backup_database, count_rows, get_db_path, init_database


def describe_contents(db_path: Path) -> str:
    """Summarise how many transactions and recurring templates are stored."""
    counts = count_rows(db_path)
    return f"{counts['transactions']} transaction(s), {counts['recurring_templates']} recurring template(s)"


def backup_command(output_dir: str | None = None) -> None:
    """Snapshot the ledger database and the settings file."""
    db_path = get_db_path()
    config_path = get_config_path()

    if not db_path.exists():
        console.print("[red]No ledger to back up. Run 'lifeboard init' first.[/red]", style="bold")
        sys.exit(1)

    backup_dir = Path(output_dir).expanduser() if output_dir else db_path.parent / "backups"
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    db_backup = backup_dir / f"lifeboard_{stamp}.db"
    config_backup = backup_dir / f"config_{stamp}.toml"

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)
        backup_database(db_backup, db_path)
        console.print(f"[green]✓[/green] Ledger saved ({describe_contents(db_backup)})")
        console.print(f"  [dim]{db_backup}[/dim]")

        if config_path.exists():
            shutil.copy2(config_path, config_backup)
            console.print("[green]✓[/green] Settings saved (currency, paydays, privacy)")
            console.print(f"  [dim]{config_backup}[/dim]")
        else:
            console.print("[dim]No settings file yet; defaults are in use[/dim]")
    except sqlite3.Error as e:
        console.print(f"[red]Backup failed: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Backup failed: {e}[/red]", style="bold")
        sys.exit(1)


def run_migration(db_path: Path) -> None:
    """Bring an existing ledger up to the current schema, keeping its rows."""
    console.print(f"[cyan]Updating ledger schema at {db_path}...[/cyan]")
    init_database(db_path)
    console.print(f"[green]✓[/green] Schema up to date, kept {describe_contents(db_path)}")


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Create an empty ledger and the default settings."""
    init_database(db_path)
    console.print(f"[green]✓[/green] Ledger created for transactions and recurring templates: {db_path}")

    create_default_config(config_path)
    payday = get_payday_config(config_path)
    paydays = ", ".join(ordinal_suffix(d) for d in payday.dates)
    console.print(f"[green]✓[/green] Settings created (permissions: 600): {config_path}")
    console.print(f"  Currency {get_currency(config_path)}, paydays on the {paydays}, amounts hidden")

    console.print("\n[green]Ready.[/green] Add a payslip with 'lifeboard recurring add'", style="bold")


def init_command(force: bool = False, migrate: bool = False) -> None:
    """Set up the ledger and settings, or migrate an existing ledger."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        if migrate:
            if not db_exists:
                console.print(f"[red]No ledger to migrate at {db_path}[/red]", style="bold")
                sys.exit(1)
            run_migration(db_path)
            return

        if not force and (db_exists or config_exists):
            console.print("[red]lifeboard is already set up:[/red]", style="bold")
            if db_exists:
                console.print(f"  Ledger already exists: {db_path}")
            if config_exists:
                console.print(f"  Settings already exist: {config_path}")
            console.print("\n[yellow]'lifeboard init --force' starts over with an empty ledger[/yellow]")
            console.print("[yellow]'lifeboard init --migrate' updates the schema and keeps your data[/yellow]")
            sys.exit(1)

        if force and db_exists:
            db_path.unlink()

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
