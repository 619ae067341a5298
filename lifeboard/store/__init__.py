"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from lifeboard.store.queries import (
    delete_template,
    delete_transaction,
    get_template,
    get_templates,
    get_transaction,
    get_transactions,
    insert_template,
    insert_transaction,
    set_template_active,
    update_template,
    update_transaction,
)
from lifeboard.store.schema import backup_database, count_rows, database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "backup_database",
    "count_rows",
    "database_exists",
    "get_db_path",
    "init_database",
    # Transactions
    "delete_transaction",
    "get_transaction",
    "get_transactions",
    "insert_transaction",
    "update_transaction",
    # Recurring templates
    "delete_template",
    "get_template",
    "get_templates",
    "insert_template",
    "set_template_active",
    "update_template",
]
