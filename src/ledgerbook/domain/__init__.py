"""Domain layer for ledgerbook application.

Services are imported from their modules (e.g. ``ledgerbook.domain.customer``)
rather than re-exported here, since the database layer imports
``ledgerbook.domain.entities`` and would otherwise import itself.
"""

from ledgerbook.domain.entities import (
    PAGE_SIZE,
    PaymentMethod,
    QueryState,
    SortOrder,
    TransactionType,
)

__all__ = [
    "PAGE_SIZE",
    "PaymentMethod",
    "QueryState",
    "SortOrder",
    "TransactionType",
]
