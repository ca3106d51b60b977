"""Ledger engine: balance math over transaction and payment snapshots.

Every function here is pure. Inputs are caller-supplied snapshots of rows;
nothing is read from or written to the store, and no state is kept between
calls. Amounts stay full-precision ``Decimal`` values; rounding to two
places happens only in :func:`round_for_display` / :func:`format_amount`,
which the presentation layer calls.

Referential integrity (payments belonging to the transaction they are
passed with) is the caller's responsibility.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Sequence

from ledgerbook.domain.entities import (
    BalanceDirection,
    Customer,
    CustomerBalance,
    Payment,
    PortfolioTotals,
    Transaction,
    TransactionBalance,
)

# A positive outstanding balance is money the business should receive.
RECEIVABLE_SIGN = 1

ZERO = Decimal("0")
DISPLAY_QUANTUM = Decimal("0.01")

LedgerEntry = tuple[Transaction, Sequence[Payment]]


def paid_total(payments: Iterable[Payment]) -> Decimal:
    """Sum of payment amounts; zero for no payments."""
    return sum((p.amount for p in payments), ZERO)


def remaining_for(transaction: Transaction, payments: Iterable[Payment]) -> Decimal:
    """Transaction amount minus everything paid against it.

    Not clamped: an overpaid transaction has a negative remaining amount.
    """
    return transaction.amount - paid_total(payments)


def outstanding_for(customer: Customer, transactions_with_payments: Iterable[LedgerEntry]) -> Decimal:
    """Sum of remaining amounts over a customer's transactions.

    ``customer`` identifies whose balance this is; the pairs are expected to
    already be restricted to that customer.
    """
    return sum(
        (remaining_for(txn, payments) for txn, payments in transactions_with_payments),
        ZERO,
    )


def portfolio_totals(values: Iterable[Decimal]) -> PortfolioTotals:
    """Split customer outstanding values into receivable and payable totals.

    Both totals are non-negative magnitudes. Zero balances count toward
    neither.
    """
    receivable = ZERO
    payable = ZERO
    for value in values:
        direction = balance_direction(value)
        if direction is BalanceDirection.RECEIVE:
            receivable += abs(value)
        elif direction is BalanceDirection.OWE:
            payable += abs(value)
    return PortfolioTotals(total_receivable=receivable, total_payable=payable)


def balance_direction(value: Decimal) -> BalanceDirection:
    """Classify an outstanding value using :data:`RECEIVABLE_SIGN`."""
    signed = value * RECEIVABLE_SIGN
    if signed > 0:
        return BalanceDirection.RECEIVE
    if signed < 0:
        return BalanceDirection.OWE
    return BalanceDirection.SETTLED


def transaction_balance(transaction: Transaction, payments: Sequence[Payment]) -> TransactionBalance:
    """Paid and remaining figures for one transaction."""
    paid = paid_total(payments)
    return TransactionBalance(
        transaction=transaction,
        paid=paid,
        remaining=transaction.amount - paid,
    )


def customer_balance(customer: Customer, transactions_with_payments: Iterable[LedgerEntry]) -> CustomerBalance:
    """Outstanding balance for a customer plus per-transaction breakdown."""
    entries = list(transactions_with_payments)
    return CustomerBalance(
        customer=customer,
        outstanding=outstanding_for(customer, entries),
        transactions=tuple(transaction_balance(txn, payments) for txn, payments in entries),
    )


def round_for_display(value: Decimal) -> Decimal:
    """Round to two places, halves away from zero."""
    return value.quantize(DISPLAY_QUANTUM, rounding=ROUND_HALF_UP)


def format_amount(value: Decimal) -> str:
    """Format an amount for display, e.g. ``1,234.50``."""
    return f"{round_for_display(value):,.2f}"
