"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including turning the stored
string columns back into their enum types.
"""

from ledgerbook.domain import entities as domain
from ledgerbook.database.models import (
    Customer as ORMCustomer,
    Transaction as ORMTransaction,
    Payment as ORMPayment,
)


def customer_to_domain(orm_customer: ORMCustomer) -> domain.Customer:
    """Convert SQLAlchemy Customer model to domain Customer entity."""
    return domain.Customer(
        id=orm_customer.id,
        name=orm_customer.name,
        phone=orm_customer.phone,
        created_at=orm_customer.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        customer_id=orm_transaction.customer_id,
        title=orm_transaction.title,
        description=orm_transaction.description,
        type=domain.TransactionType(orm_transaction.type),
        amount=orm_transaction.amount,
        payment_method=(
            domain.PaymentMethod(orm_transaction.payment_method)
            if orm_transaction.payment_method
            else None
        ),
        created_at=orm_transaction.created_at,
    )


def payment_to_domain(orm_payment: ORMPayment) -> domain.Payment:
    """Convert SQLAlchemy Payment model to domain Payment entity."""
    return domain.Payment(
        id=orm_payment.id,
        transaction_id=orm_payment.transaction_id,
        amount=orm_payment.amount,
        method=domain.PaymentMethod(orm_payment.method),
        note=orm_payment.note,
        created_at=orm_payment.created_at,
    )
