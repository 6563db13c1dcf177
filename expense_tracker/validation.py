# expense_tracker/validation.py
from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation

from expense_tracker.errors import ValidationError


def validate_amount(amount) -> float:
    """Return *amount* as a positive finite float or raise ValidationError."""
    if amount is None or isinstance(amount, bool):
        raise ValidationError(f"Invalid amount: {amount!r}")
    try:
        if isinstance(amount, str):
            value = float(Decimal(amount.strip()))
        else:
            value = float(amount)
    except (TypeError, ValueError, OverflowError, InvalidOperation) as exc:
        raise ValidationError(f"Invalid amount: {amount!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"Amount must be a positive number, got {amount!r}")
    return value


def validate_category(category) -> str:
    text = category.strip() if isinstance(category, str) else ""
    if not text:
        raise ValidationError("Category must not be empty")
    return text


def normalize_note(note) -> str | None:
    if note is None:
        return None
    text = str(note).strip()
    return text or None
