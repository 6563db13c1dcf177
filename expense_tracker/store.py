from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List

import anyio

from expense_tracker import database
from expense_tracker.core.models import Expense
from expense_tracker.schema import ensure_schema
from expense_tracker.validation import (
    normalize_note,
    validate_amount,
    validate_category,
)
from expense_tracker.windows import (
    SUNDAY,
    Window,
    filter_by_window,
    parse_week_start,
    parse_window,
)

logger = logging.getLogger(__name__)


def local_now() -> datetime:
    return datetime.now().astimezone()


def format_timestamp(moment: datetime) -> str:
    """Canonical stored form: UTC ISO-8601 with millisecond precision."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")


class ExpenseStore:
    """Async access to the expense table of one SQLite database.

    Each call runs the blocking ``sqlite3`` work on a worker thread. Callers
    are expected to issue one mutating operation at a time; SQLite's own
    transactions are the only concurrency control.
    """

    def __init__(
        self,
        db_path: str,
        week_start=SUNDAY,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.db_path = str(db_path)
        self.week_start = parse_week_start(week_start)
        self.clock = clock

    async def ensure_schema(self) -> None:
        await anyio.to_thread.run_sync(ensure_schema, self.db_path)

    async def add(self, amount, category: str, note: str | None = None) -> None:
        """Validate and store a new expense stamped with the current time.

        Raises ``ValidationError`` before touching the database when the
        amount or category is invalid.
        """
        value = validate_amount(amount)
        label = validate_category(category)
        text = normalize_note(note)
        stamp = format_timestamp(self.clock())

        def _run() -> int:
            return database.insert_expense(self.db_path, value, label, text, stamp)

        new_id = await anyio.to_thread.run_sync(_run)
        logger.debug("Added expense #%s", new_id)

    async def list_all(self) -> List[Expense]:
        return await anyio.to_thread.run_sync(database.fetch_expenses, self.db_path)

    async def list_filtered(self, window) -> List[Expense]:
        """Return the expenses dated inside *window* ("all", "week" or "month").

        The full table is read and filtered here. Rows without a date are
        kept, rows with an unparseable date are dropped.
        """
        window = parse_window(window)
        rows = await self.list_all()
        if window is Window.ALL:
            return rows
        return filter_by_window(rows, window, self.clock(), self.week_start)

    async def remove(self, expense_id: int) -> None:
        await anyio.to_thread.run_sync(
            database.delete_expense, self.db_path, expense_id
        )
