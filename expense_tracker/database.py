import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

from expense_tracker.core.models import Expense
from expense_tracker.errors import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def _connect(db_path: str) -> Iterator[sqlite3.Connection]:
    """Open a connection with dict-like rows and map driver errors.

    Uncommitted work is discarded when the connection closes.
    """
    try:
        conn = sqlite3.connect(Path(db_path))
    except sqlite3.Error as exc:
        raise StorageError(f"Cannot open database {db_path}: {exc}") from exc
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    except sqlite3.Error as exc:
        raise StorageError(str(exc)) from exc
    finally:
        conn.close()


def insert_expense(
    db_path: str,
    amount: float,
    category: str,
    note: str | None,
    date: str,
) -> int:
    """Persist one already-validated expense and return its id.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.
    amount, category, note:
        Validated values; *note* may be ``None``.
    date:
        ISO-8601 creation timestamp.
    """
    with _connect(db_path) as conn:
        cur = conn.execute(
            """
            INSERT INTO expenses (amount, category, note, date)
            VALUES (?, ?, ?, ?)
            """,
            (amount, category, note, date),
        )
        conn.commit()
        logger.debug("Inserted expense #%s (%s, %.2f)", cur.lastrowid, category, amount)
        return int(cur.lastrowid)


def fetch_expenses(db_path: str) -> List[Expense]:
    """Return every expense, most recently added first."""
    with _connect(db_path) as conn:
        rows = conn.execute(
            "SELECT id, amount, category, note, date FROM expenses ORDER BY id DESC"
        ).fetchall()
    return [Expense.from_row(r) for r in rows]


def delete_expense(db_path: str, expense_id: int) -> int:
    """Delete the expense with *expense_id*; return how many rows went away."""
    with _connect(db_path) as conn:
        cur = conn.execute("DELETE FROM expenses WHERE id = ?", (int(expense_id),))
        conn.commit()
        if cur.rowcount:
            logger.debug("Deleted expense #%s", expense_id)
        else:
            logger.debug("No expense #%s to delete", expense_id)
        return cur.rowcount


def count_expenses(db_path: str) -> int:
    with _connect(db_path) as conn:
        row = conn.execute("SELECT COUNT(*) FROM expenses").fetchone()
    return int(row[0] or 0)
