# expense_tracker/errors.py


class ExpenseError(Exception):
    """Base class for expense log failures."""


class ValidationError(ExpenseError, ValueError):
    """Raised before any I/O when an expense or window is invalid."""


class StorageError(ExpenseError):
    """Raised when the SQLite store fails; the operation had no effect."""
