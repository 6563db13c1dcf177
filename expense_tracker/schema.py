# expense_tracker/schema.py
from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import List

from expense_tracker.errors import StorageError

logger = logging.getLogger(__name__)

TABLE_NAME = "expenses"

CREATE_EXPENSES_TABLE = """
CREATE TABLE IF NOT EXISTS expenses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    amount REAL NOT NULL,
    category TEXT NOT NULL,
    note TEXT,
    date TEXT NOT NULL
)
"""

# Columns later versions added. Older tables get them as nullable TEXT.
ADDITIVE_COLUMNS = {
    "note": "TEXT",
    "date": "TEXT",
}


def table_columns(conn: sqlite3.Connection, table: str = TABLE_NAME) -> List[str]:
    rows = conn.execute(f"PRAGMA table_info({table})").fetchall()
    return [row[1] for row in rows]


def _init_db(conn: sqlite3.Connection) -> None:
    conn.execute(CREATE_EXPENSES_TABLE)
    existing = set(table_columns(conn))
    for column, col_type in ADDITIVE_COLUMNS.items():
        if column in existing:
            continue
        logger.info("Adding missing column %s.%s", TABLE_NAME, column)
        conn.execute(f"ALTER TABLE {TABLE_NAME} ADD COLUMN {column} {col_type}")
    conn.commit()


def ensure_schema(db_path: str) -> None:
    """Create the expenses table, or upgrade an older one in place.

    Safe to call on every start. Existing rows are never touched. Only file
    paths are supported since every store call opens its own connection.
    """
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensuring schema in %s", db_path)
    try:
        conn = sqlite3.connect(path)
    except sqlite3.Error as exc:
        raise StorageError(f"Cannot open database {db_path}: {exc}") from exc
    try:
        _init_db(conn)
    except sqlite3.Error as exc:
        raise StorageError(f"Schema setup failed for {db_path}: {exc}") from exc
    finally:
        conn.close()
