"""Transaction domain service."""

from dataclasses import replace
from typing import Optional, Union
from decimal import Decimal
from ledgerbook.database.base import Database
from ledgerbook.domain import ledger
from ledgerbook.domain.entities import (
    Page,
    Payment as PaymentEntity,
    PaymentMethod,
    QueryState,
    Transaction as TransactionEntity,
    TransactionBalance,
    TransactionType,
)
from ledgerbook.domain.errors import (
    NotFoundError,
    customer_not_found,
    transaction_not_found,
)
from ledgerbook.domain.validation import (
    clean_optional_text,
    validate_amount,
    validate_payment_method,
    validate_title,
    validate_transaction_type,
)


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        customer_id: int,
        title: str,
        type: Union[TransactionType, str],
        amount: Union[Decimal, str],
        description: Optional[str] = None,
        payment_method: Union[PaymentMethod, str, None] = None,
    ) -> int:
        """Create a transaction.

        Args:
            customer_id: Owning customer ID
            title: Title (at least 2 characters)
            type: One of the TransactionType values
            amount: Positive amount
            description: Optional description
            payment_method: Optional PaymentMethod value

        Returns:
            Transaction ID

        Raises:
            ValidationError: If any field is invalid
            NotFoundError: If customer doesn't exist
        """
        clean_title = validate_title(title)
        txn_type = validate_transaction_type(type)
        txn_amount = validate_amount(amount)
        method = (
            validate_payment_method(payment_method, field="payment_method")
            if payment_method
            else None
        )

        # Verify customer exists
        if self.db.get_customer(customer_id) is None:
            raise NotFoundError(customer_not_found(customer_id))

        return self.db.create_transaction(
            customer_id=customer_id,
            title=clean_title,
            type=txn_type,
            amount=txn_amount,
            description=clean_optional_text(description),
            payment_method=method,
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> TransactionEntity:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        transaction_id: int,
        title: Optional[str] = None,
        amount: Union[Decimal, str, None] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update transaction fields that are provided ("" clears the description).

        Raises:
            NotFoundError: If transaction doesn't exist
            ValidationError: If title or amount is invalid
        """
        self.require_transaction(transaction_id)

        self.db.update_transaction(
            transaction_id=transaction_id,
            title=validate_title(title) if title is not None else None,
            amount=validate_amount(amount) if amount is not None else None,
            description=clean_optional_text(description),
            update_description=description is not None,
        )

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction and its payments.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self.require_transaction(transaction_id)
        self.db.delete_transaction(transaction_id)

    def list_transactions(self, query: Optional[QueryState] = None) -> Page[TransactionEntity]:
        """List one page of transactions.

        Enum filters (type, payment_method) are validated before querying.
        """
        query = query or QueryState()
        filters = dict(query.filters)
        if filters.get("type"):
            filters["type"] = validate_transaction_type(filters["type"])
        if filters.get("payment_method"):
            filters["payment_method"] = validate_payment_method(
                filters["payment_method"], field="payment_method"
            )
        return self.db.list_transactions(replace(query, filters=filters))

    def get_transaction_balance(
        self, transaction_id: int
    ) -> tuple[TransactionBalance, list[PaymentEntity]]:
        """Compute paid/remaining for a transaction along with its payments.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        txn = self.require_transaction(transaction_id)
        payments = self.db.list_payments_for_transaction(transaction_id)
        return ledger.transaction_balance(txn, payments), payments
