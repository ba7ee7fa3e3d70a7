"""Exceptions raised by the todo store."""


class StoreError(Exception):
    """Base class for todo store errors."""


class StoreConnectionError(StoreError):
    """Raised when the database cannot be opened or a statement fails."""

    def __init__(self, message: str, operation: str | None = None):
        self.operation = operation
        super().__init__(message)


class TodoValidationError(StoreError, ValueError):
    """Raised when an item is rejected before reaching the database."""
