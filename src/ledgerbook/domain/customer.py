"""Customer domain service."""

from typing import Optional
from ledgerbook.database.base import Database
from ledgerbook.domain import ledger
from ledgerbook.domain.entities import (
    Customer as CustomerEntity,
    CustomerBalance,
    Page,
    QueryState,
)
from ledgerbook.domain.errors import NotFoundError, customer_not_found
from ledgerbook.domain.validation import validate_name, validate_phone


class CustomerService:
    """Service for managing customers."""

    def __init__(self, db: Database):
        """Initialize customer service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_customer(self, name: str, phone: Optional[str] = None) -> int:
        """Create a new customer.

        Args:
            name: Customer name (at least 2 characters)
            phone: Optional phone number (at least 5 characters when given)

        Returns:
            Customer ID

        Raises:
            ValidationError: If name or phone is invalid
        """
        return self.db.create_customer(name=validate_name(name), phone=validate_phone(phone))

    def get_customer(self, customer_id: int) -> Optional[CustomerEntity]:
        """Get customer by ID.

        Returns:
            Customer entity or None if not found
        """
        return self.db.get_customer(customer_id)

    def require_customer(self, customer_id: int) -> CustomerEntity:
        """Get customer by ID or raise NotFoundError."""
        customer = self.db.get_customer(customer_id)
        if customer is None:
            raise NotFoundError(customer_not_found(customer_id))
        return customer

    def update_customer(
        self, customer_id: int, name: Optional[str] = None, phone: Optional[str] = None
    ) -> None:
        """Update a customer's name and/or phone.

        Args:
            customer_id: Customer ID
            name: New name, or None to leave unchanged
            phone: New phone, "" to clear it, or None to leave unchanged

        Raises:
            NotFoundError: If customer doesn't exist
            ValidationError: If name or phone is invalid
        """
        self.require_customer(customer_id)

        new_name = validate_name(name) if name is not None else None
        update_phone = phone is not None
        new_phone = validate_phone(phone) if update_phone else None

        self.db.update_customer(
            customer_id=customer_id, name=new_name, phone=new_phone, update_phone=update_phone
        )

    def delete_customer(self, customer_id: int) -> None:
        """Delete a customer and, through the store, its transactions and payments.

        Raises:
            NotFoundError: If customer doesn't exist
        """
        self.require_customer(customer_id)
        self.db.delete_customer(customer_id)

    def list_customers(self, query: Optional[QueryState] = None) -> Page[CustomerEntity]:
        """List one page of customers, newest first by default."""
        return self.db.list_customers(query or QueryState())

    def list_all_customers(self) -> list[CustomerEntity]:
        """List all customers by name, e.g. for choosing one in a form."""
        return self.db.list_all_customers()

    def get_customer_balance(self, customer_id: int) -> CustomerBalance:
        """Compute a customer's outstanding balance from current rows.

        Raises:
            NotFoundError: If customer doesn't exist
        """
        customer = self.require_customer(customer_id)
        entries = self.db.list_ledger_entries(customer_id=customer_id)
        return ledger.customer_balance(customer, entries)
