"""Abstract database interface (the record store)."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Mapping, Optional
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerbook.domain.entities import (
    Customer,
    Page,
    Payment,
    PaymentMethod,
    QueryState,
    Transaction,
    TransactionType,
)
from ledgerbook.database.changes import ChangeEvent, Subscription


class Database(ABC):
    """Abstract database interface for ledgerbook."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Change notification
    @abstractmethod
    def subscribe(
        self,
        table: str,
        callback: Callable[[ChangeEvent], None],
        row_filter: Optional[Mapping[str, Any]] = None,
    ) -> Subscription:
        """Register for change events on a table, optionally for matching rows only."""
        pass

    # Customer operations
    @abstractmethod
    def create_customer(self, name: str, phone: Optional[str] = None) -> int:
        """Create a customer. Returns customer ID."""
        pass

    @abstractmethod
    def get_customer(self, customer_id: int) -> Optional[Customer]:
        """Get customer by ID."""
        pass

    @abstractmethod
    def update_customer(
        self,
        customer_id: int,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        update_phone: bool = False,
    ) -> None:
        """Update customer fields.

        Args:
            update_phone: If True, set phone even when it is None (to clear it)
        """
        pass

    @abstractmethod
    def delete_customer(self, customer_id: int) -> None:
        """Delete a customer along with its transactions and their payments."""
        pass

    @abstractmethod
    def count_customers(self) -> int:
        """Count all customers."""
        pass

    @abstractmethod
    def list_customers(self, query: QueryState) -> Page[Customer]:
        """List one page of customers. Filters: search."""
        pass

    @abstractmethod
    def list_all_customers(self) -> list[Customer]:
        """List every customer ordered by name."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        customer_id: int,
        title: str,
        type: TransactionType,
        amount: Decimal,
        description: Optional[str] = None,
        payment_method: Optional[PaymentMethod] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        title: Optional[str] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        update_description: bool = False,
    ) -> None:
        """Update transaction fields that are not None.

        With ``update_description`` set, ``description`` is written even when
        None, which clears it.
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction along with its payments."""
        pass

    @abstractmethod
    def list_transactions(self, query: QueryState) -> Page[Transaction]:
        """List one page of transactions.

        Filters: type, payment_method, search (title), customer_id.
        """
        pass

    # Payment operations
    @abstractmethod
    def create_payment(
        self,
        transaction_id: int,
        amount: Decimal,
        method: PaymentMethod,
        note: Optional[str] = None,
    ) -> int:
        """Create a payment. Returns payment ID."""
        pass

    @abstractmethod
    def get_payment(self, payment_id: int) -> Optional[Payment]:
        """Get payment by ID."""
        pass

    @abstractmethod
    def update_payment(
        self,
        payment_id: int,
        amount: Optional[Decimal] = None,
        note: Optional[str] = None,
        update_note: bool = False,
    ) -> None:
        """Update payment fields.

        Args:
            update_note: If True, set note even when it is None (to clear it)
        """
        pass

    @abstractmethod
    def delete_payment(self, payment_id: int) -> None:
        """Delete a payment."""
        pass

    @abstractmethod
    def list_payments(self, query: QueryState) -> Page[Payment]:
        """List one page of payments. Filters: search (note), transaction_id, method."""
        pass

    @abstractmethod
    def list_payments_for_transaction(self, transaction_id: int) -> list[Payment]:
        """List all payments against a transaction, newest first."""
        pass

    # Ledger snapshot
    @abstractmethod
    def list_ledger_entries(
        self, customer_id: Optional[int] = None
    ) -> list[tuple[Transaction, tuple[Payment, ...]]]:
        """List transactions paired with their payments.

        This is the snapshot the ledger engine computes balances from.
        """
        pass
