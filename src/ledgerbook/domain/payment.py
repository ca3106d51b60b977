"""Payment domain service."""

from typing import Optional, Union
from decimal import Decimal
from ledgerbook.database.base import Database
from ledgerbook.domain.entities import (
    Page,
    Payment as PaymentEntity,
    PaymentMethod,
    QueryState,
)
from ledgerbook.domain.errors import (
    NotFoundError,
    payment_not_found,
    transaction_not_found,
)
from ledgerbook.domain.validation import (
    clean_optional_text,
    validate_amount,
    validate_payment_method,
)


class PaymentService:
    """Service for managing payments against transactions.

    Payments are not capped at the transaction's remaining amount;
    overpayment is accepted and shows up as a negative remaining balance.
    """

    def __init__(self, db: Database):
        """Initialize payment service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_payment(
        self,
        transaction_id: int,
        amount: Union[Decimal, str],
        method: Union[PaymentMethod, str],
        note: Optional[str] = None,
    ) -> int:
        """Record a payment against a transaction.

        Returns:
            Payment ID

        Raises:
            ValidationError: If amount or method is invalid
            NotFoundError: If transaction doesn't exist
        """
        pay_amount = validate_amount(amount)
        pay_method = validate_payment_method(method)

        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        return self.db.create_payment(
            transaction_id=transaction_id,
            amount=pay_amount,
            method=pay_method,
            note=clean_optional_text(note),
        )

    def get_payment(self, payment_id: int) -> Optional[PaymentEntity]:
        """Get payment by ID."""
        return self.db.get_payment(payment_id)

    def update_payment(
        self,
        payment_id: int,
        amount: Union[Decimal, str, None] = None,
        note: Optional[str] = None,
    ) -> None:
        """Update a payment's amount and/or note ("" clears the note).

        Raises:
            NotFoundError: If payment doesn't exist
            ValidationError: If amount is invalid
        """
        if self.db.get_payment(payment_id) is None:
            raise NotFoundError(payment_not_found(payment_id))

        self.db.update_payment(
            payment_id=payment_id,
            amount=validate_amount(amount) if amount is not None else None,
            note=clean_optional_text(note),
            update_note=note is not None,
        )

    def delete_payment(self, payment_id: int) -> None:
        """Delete a payment.

        Raises:
            NotFoundError: If payment doesn't exist
        """
        if self.db.get_payment(payment_id) is None:
            raise NotFoundError(payment_not_found(payment_id))
        self.db.delete_payment(payment_id)

    def list_payments(self, query: Optional[QueryState] = None) -> Page[PaymentEntity]:
        """List one page of payments, newest first by default."""
        return self.db.list_payments(query or QueryState())
