"""Domain model entities for ledgerbook.

These are pure data classes representing business concepts, independent of
database schema. Balances are derived values: they are never persisted and
are always recomputed from transaction and payment rows.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from math import ceil
from typing import Any, Generic, Mapping, NamedTuple, Optional, TypeVar

PAGE_SIZE = 10


class TransactionType(str, Enum):
    """Kind of charge recorded against a customer."""

    PHONELINE_CHARGING = "phoneline_charging"
    PHONELINE_PAYMENT = "phoneline_payment"
    SHAHID_SUBSCRIPTION = "shahid_subscription"
    NETFLIX_SUBSCRIPTION = "netflix_subscription"


class PaymentMethod(str, Enum):
    """How money changed hands."""

    WHISH = "whish"
    CASH = "cash"


class BalanceDirection(str, Enum):
    """Which way an outstanding balance points."""

    RECEIVE = "receive"
    OWE = "owe"
    SETTLED = "settled"


@dataclass(frozen=True)
class Customer:
    """Customer domain entity."""

    id: int
    name: str
    phone: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """A single charge owed by or to a customer."""

    id: int
    customer_id: int
    title: str
    description: Optional[str]
    type: TransactionType
    amount: Decimal
    payment_method: Optional[PaymentMethod]
    created_at: datetime


@dataclass(frozen=True)
class Payment:
    """Funds applied against a transaction's amount."""

    id: int
    transaction_id: int
    amount: Decimal
    method: PaymentMethod
    note: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class SortOrder:
    """Sort column and direction for a list query."""

    field: str = "created_at"
    descending: bool = True


@dataclass(frozen=True)
class QueryState:
    """Serializable pagination, filter and sort state for one list view.

    Pages are 1-based. Changing filters always returns to the first page so
    that a narrowed result set is never viewed past its end.
    """

    page: int = 1
    page_size: int = PAGE_SIZE
    filters: Mapping[str, Any] = field(default_factory=dict)
    sort: SortOrder = field(default_factory=SortOrder)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    def with_page(self, page: int) -> "QueryState":
        return replace(self, page=max(1, page))

    def with_filters(self, **changes: Any) -> "QueryState":
        """Return a new state with filters updated and page reset to 1.

        A value of None or "" removes the filter.
        """
        filters = dict(self.filters)
        for key, value in changes.items():
            if value is None or value == "":
                filters.pop(key, None)
            else:
                filters[key] = value
        return replace(self, page=1, filters=filters)

    def with_sort(self, field_name: str, descending: bool = True) -> "QueryState":
        return replace(self, page=1, sort=SortOrder(field=field_name, descending=descending))

    def next_page(self, total_pages: int) -> "QueryState":
        return replace(self, page=min(max(1, total_pages), self.page + 1))

    def previous_page(self) -> "QueryState":
        return replace(self, page=max(1, self.page - 1))

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "page_size": self.page_size,
            "filters": dict(self.filters),
            "sort": {"field": self.sort.field, "descending": self.sort.descending},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QueryState":
        sort = data.get("sort") or {}
        return cls(
            page=int(data.get("page", 1)),
            page_size=int(data.get("page_size", PAGE_SIZE)),
            filters=dict(data.get("filters") or {}),
            sort=SortOrder(
                field=sort.get("field", "created_at"),
                descending=bool(sort.get("descending", True)),
            ),
        )


RowT = TypeVar("RowT")


@dataclass(frozen=True)
class Page(Generic[RowT]):
    """One page of rows plus the total row count matching the query."""

    rows: tuple[RowT, ...]
    total_count: int
    query: QueryState

    @property
    def total_pages(self) -> int:
        return max(1, ceil(self.total_count / self.query.page_size))


@dataclass(frozen=True)
class TransactionBalance:
    """Paid and remaining figures for a single transaction."""

    transaction: Transaction
    paid: Decimal
    remaining: Decimal


@dataclass(frozen=True)
class CustomerBalance:
    """Outstanding balance for a customer with per-transaction detail."""

    customer: Customer
    outstanding: Decimal
    transactions: tuple[TransactionBalance, ...] = ()

    @property
    def receive(self) -> Decimal:
        return self.outstanding if self.outstanding > 0 else Decimal("0")

    @property
    def owe(self) -> Decimal:
        return abs(self.outstanding) if self.outstanding < 0 else Decimal("0")


class PortfolioTotals(NamedTuple):
    """Portfolio-wide receivable and payable magnitudes."""

    total_receivable: Decimal
    total_payable: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """Figures shown on the dashboard."""

    customer_count: int
    totals: PortfolioTotals
