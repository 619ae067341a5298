"""Database query functions.

Every query is scoped by user id. A row owned by another user behaves
exactly like a missing row: reads return None and writes return False.
"""

import logging
import sqlite3
from datetime import date
from pathlib import Path
from typing import Any

from lifeboard.domain.models import CategoryName, Frequency, Money, RecurringTemplate, Transaction, UserId
from lifeboard.store.schema import get_db_path

logger = logging.getLogger(__name__)

TRANSACTION_COLUMNS = ("type", "amount", "date", "category", "note", "is_recurring")

TEMPLATE_COLUMNS = (
    "name",
    "type",
    "amount",
    "category",
    "frequency",
    "start_date",
    "day_of_month",
    "every_n_days",
    "end_date",
    "is_active",
    "note",
)


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _to_db_value(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    return date.fromisoformat(value[:10])


def _row_to_transaction(row: sqlite3.Row) -> Transaction:
    return Transaction(
        id=row["id"],
        user_id=UserId(row["user_id"]),
        type=row["type"],
        amount=Money(row["amount"]),
        date=date.fromisoformat(row["date"][:10]),
        category=CategoryName(row["category"]),
        note=row["note"],
        is_recurring=bool(row["is_recurring"]),
    )


def _row_to_template(row: sqlite3.Row) -> RecurringTemplate:
    return RecurringTemplate(
        id=row["id"],
        user_id=UserId(row["user_id"]),
        name=row["name"],
        type=row["type"],
        amount=Money(row["amount"]),
        category=CategoryName(row["category"]),
        start_date=date.fromisoformat(row["start_date"][:10]),
        frequency=Frequency(row["frequency"]),
        day_of_month=row["day_of_month"],
        every_n_days=row["every_n_days"],
        end_date=_parse_date(row["end_date"]),
        is_active=bool(row["is_active"]),
        note=row["note"],
    )


def _update_owned(
    table: str,
    allowed: tuple[str, ...],
    row_id: int,
    user_id: UserId,
    fields: dict[str, Any],
    db_path: Path | None,
) -> bool:
    unknown = set(fields) - set(allowed)
    if unknown:
        raise ValueError(f"Cannot update {', '.join(sorted(unknown))} on {table}")
    if not fields:
        return False

    assignments = ", ".join(f"{column} = ?" for column in fields)
    params = [_to_db_value(v) for v in fields.values()] + [row_id, user_id]

    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(f"UPDATE {table} SET {assignments} WHERE id = ? AND user_id = ?", params)
            conn.commit()
            updated = cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise

    logger.debug("Update %s %s for user %s: %s", table, row_id, user_id, "ok" if updated else "not found")
    return updated


def _delete_owned(table: str, row_id: int, user_id: UserId, db_path: Path | None) -> bool:
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(f"DELETE FROM {table} WHERE id = ? AND user_id = ?", (row_id, user_id))
            conn.commit()
            deleted = cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise

    logger.debug("Delete %s %s for user %s: %s", table, row_id, user_id, "ok" if deleted else "not found")
    return deleted


def insert_transaction(
    user_id: UserId,
    type_: str,
    amount: Money,
    txn_date: date,
    category: CategoryName,
    note: str | None = None,
    is_recurring: bool = False,
    db_path: Path | None = None,
) -> int:
    """Insert a transaction.

    Args:
        user_id: Owner of the transaction.
        type_: "income" or "expense".
        amount: Positive amount in minor units.
        txn_date: Transaction date.
        category: Category name.
        note: Optional free text.
        is_recurring: Whether the transaction was recorded from a recurring template.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new transaction.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO transactions (user_id, type, amount, date, category, note, is_recurring)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (user_id, type_, amount, txn_date.isoformat(), category, note, int(is_recurring)),
            )
            conn.commit()
            txn_id = cursor.lastrowid
        except sqlite3.Error:
            conn.rollback()
            raise

    logger.debug("Inserted transaction %s for user %s", txn_id, user_id)
    return int(txn_id or 0)


def get_transactions(
    user_id: UserId,
    db_path: Path | None = None,
    since_date: str | None = None,
    until_date: str | None = None,
    limit: int | None = None,
) -> list[Transaction]:
    """Get transactions of a user.

    Args:
        user_id: Owner of the transactions.
        db_path: Path to the database file. If None, uses default location.
        since_date: Optional start date (YYYY-MM-DD), inclusive.
        until_date: Optional end date (YYYY-MM-DD), exclusive.
        limit: Maximum number of transactions to return. If None, returns all.

    Returns:
        List of transactions ordered by date descending.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = "SELECT * FROM transactions WHERE user_id = ?"
        params: list[Any] = [user_id]

        if since_date:
            query += " AND date >= ?"
            params.append(since_date)
        if until_date:
            query += " AND date < ?"
            params.append(until_date)

        query += " ORDER BY date DESC, id DESC"

        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        cursor.execute(query, params)
        rows = cursor.fetchall()
        return [_row_to_transaction(row) for row in rows]


def get_transaction(txn_id: int, user_id: UserId, db_path: Path | None = None) -> Transaction | None:
    """Get a single transaction owned by a user.

    Returns:
        The transaction, or None if missing or owned by someone else.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM transactions WHERE id = ? AND user_id = ?", (txn_id, user_id))
        row = cursor.fetchone()
        return _row_to_transaction(row) if row else None


def update_transaction(
    txn_id: int,
    user_id: UserId,
    fields: dict[str, Any],
    db_path: Path | None = None,
) -> bool:
    """Update columns of a transaction owned by a user.

    Args:
        txn_id: Transaction ID.
        user_id: Owner of the transaction.
        fields: Column values to set (see TRANSACTION_COLUMNS).
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a row was updated.

    Raises:
        ValueError: If fields names a column that cannot be updated.
        sqlite3.Error: If database operation fails.
    """
    return _update_owned("transactions", TRANSACTION_COLUMNS, txn_id, user_id, fields, db_path)


def delete_transaction(txn_id: int, user_id: UserId, db_path: Path | None = None) -> bool:
    """Delete a transaction owned by a user.

    Returns:
        True if a row was deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _delete_owned("transactions", txn_id, user_id, db_path)


def insert_template(
    user_id: UserId,
    name: str,
    type_: str,
    amount: Money,
    category: CategoryName,
    frequency: Frequency,
    start_date: date,
    day_of_month: int | None = None,
    every_n_days: int | None = None,
    end_date: date | None = None,
    note: str | None = None,
    db_path: Path | None = None,
) -> int:
    """Insert a recurring template.

    Args:
        user_id: Owner of the template.
        name: Template name.
        type_: "income" or "expense".
        amount: Positive amount in minor units.
        category: Category name.
        frequency: Frequency tag.
        start_date: First day the template may occur.
        day_of_month: Target day for monthly templates.
        every_n_days: Interval for everyN templates.
        end_date: Optional last day the template may occur.
        note: Optional free text.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new template.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO recurring_templates (
                    user_id, name, type, amount, category, frequency,
                    start_date, day_of_month, every_n_days, end_date, note
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user_id,
                    name,
                    type_,
                    amount,
                    category,
                    frequency,
                    start_date.isoformat(),
                    day_of_month,
                    every_n_days,
                    end_date.isoformat() if end_date else None,
                    note,
                ),
            )
            conn.commit()
            template_id = cursor.lastrowid
        except sqlite3.Error:
            conn.rollback()
            raise

    logger.debug("Inserted recurring template %s for user %s", template_id, user_id)
    return int(template_id or 0)


def get_templates(
    user_id: UserId,
    db_path: Path | None = None,
    active_only: bool = False,
) -> list[RecurringTemplate]:
    """Get recurring templates of a user.

    Args:
        user_id: Owner of the templates.
        db_path: Path to the database file. If None, uses default location.
        active_only: If True, skip paused templates.

    Returns:
        List of templates ordered by ID.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = "SELECT * FROM recurring_templates WHERE user_id = ?"
        if active_only:
            query += " AND is_active = 1"
        query += " ORDER BY id"

        cursor.execute(query, (user_id,))
        rows = cursor.fetchall()
        return [_row_to_template(row) for row in rows]


def get_template(template_id: int, user_id: UserId, db_path: Path | None = None) -> RecurringTemplate | None:
    """Get a single recurring template owned by a user.

    Returns:
        The template, or None if missing or owned by someone else.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM recurring_templates WHERE id = ? AND user_id = ?", (template_id, user_id))
        row = cursor.fetchone()
        return _row_to_template(row) if row else None


def update_template(
    template_id: int,
    user_id: UserId,
    fields: dict[str, Any],
    db_path: Path | None = None,
) -> bool:
    """Update columns of a recurring template owned by a user.

    Args:
        template_id: Template ID.
        user_id: Owner of the template.
        fields: Column values to set (see TEMPLATE_COLUMNS).
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a row was updated.

    Raises:
        ValueError: If fields names a column that cannot be updated.
        sqlite3.Error: If database operation fails.
    """
    return _update_owned("recurring_templates", TEMPLATE_COLUMNS, template_id, user_id, fields, db_path)


def set_template_active(template_id: int, user_id: UserId, is_active: bool, db_path: Path | None = None) -> bool:
    """Pause or resume a recurring template.

    Returns:
        True if a row was updated.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return update_template(template_id, user_id, {"is_active": is_active}, db_path)


def delete_template(template_id: int, user_id: UserId, db_path: Path | None = None) -> bool:
    """Delete a recurring template owned by a user.

    Returns:
        True if a row was deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return _delete_owned("recurring_templates", template_id, user_id, db_path)
