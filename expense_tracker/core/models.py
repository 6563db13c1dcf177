# expense_tracker/core/models.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from expense_tracker.windows import parse_timestamp


@dataclass
class Expense:
    id: int
    amount: float
    category: str
    note: str | None = None
    date: str | None = None

    @classmethod
    def from_row(cls, row) -> "Expense":
        return cls(
            id=int(row["id"]),
            amount=float(row["amount"]),
            category=row["category"],
            note=row["note"],
            date=row["date"],
        )

    def parsed_date(self) -> datetime | None:
        """Return the timestamp as an aware datetime, or None if missing or invalid."""
        if not self.date:
            return None
        try:
            return parse_timestamp(self.date)
        except ValueError:
            return None
