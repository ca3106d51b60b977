"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class StoreError(DomainError):
    """The record store rejected a mutation or failed a read."""


def customer_not_found(customer_id: int) -> str:
    """Return message for missing customer."""
    return f"Customer {customer_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def payment_not_found(payment_id: int) -> str:
    """Return message for missing payment."""
    return f"Payment {payment_id} not found"


def unknown_filter(table: str, name: str) -> str:
    """Return message for a filter the table does not support."""
    return f"Unknown filter '{name}' for {table}"


def unknown_sort_field(table: str, name: str) -> str:
    """Return message for a sort column the table does not support."""
    return f"Cannot sort {table} by '{name}'"
