"""Row-level change notification for the record store.

The store publishes a ``ChangeEvent`` after each committed insert, update
or delete. Subscribers register per table, optionally narrowed with a row
filter (column name to expected value) that the affected row must match.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from ledgerbook.logging_setup import get_logger

logger = get_logger(__name__)

CUSTOMERS = "customers"
TRANSACTIONS = "transactions"
PAYMENTS = "payments"
TABLES = (CUSTOMERS, TRANSACTIONS, PAYMENTS)


class ChangeKind(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class ChangeEvent:
    """A committed change to one row.

    ``row`` is the domain entity after the change, or the last known state
    for deletes.
    """

    table: str
    kind: ChangeKind
    row_id: int
    row: Any


ChangeCallback = Callable[[ChangeEvent], None]


class Subscription:
    """Handle for one registered listener."""

    def __init__(
        self,
        feed: "ChangeFeed",
        table: str,
        callback: ChangeCallback,
        row_filter: Optional[Mapping[str, Any]] = None,
    ):
        self.feed = feed
        self.table = table
        self.callback = callback
        self.row_filter = dict(row_filter or {})
        self.active = True

    def matches(self, event: ChangeEvent) -> bool:
        if event.table != self.table:
            return False
        for column, expected in self.row_filter.items():
            if getattr(event.row, column, None) != expected:
                return False
        return True

    def unsubscribe(self) -> None:
        """Stop receiving events. Safe to call more than once."""
        if self.active:
            self.feed._remove(self)
            self.active = False


class ChangeFeed:
    """Fan-out of change events to table subscribers."""

    def __init__(self):
        self._subscriptions: list[Subscription] = []

    def subscribe(
        self,
        table: str,
        callback: ChangeCallback,
        row_filter: Optional[Mapping[str, Any]] = None,
    ) -> Subscription:
        if table not in TABLES:
            raise ValueError(f"Unknown table '{table}'")
        subscription = Subscription(self, table, callback, row_filter)
        self._subscriptions.append(subscription)
        logger.debug("Subscribed to %s (filter=%s)", table, subscription.row_filter)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def publish(self, event: ChangeEvent) -> None:
        """Deliver an event to every matching subscriber.

        A failing callback is logged and does not stop delivery to others.
        """
        for subscription in list(self._subscriptions):
            if not subscription.active or not subscription.matches(event):
                continue
            try:
                subscription.callback(event)
            except Exception:
                logger.exception(
                    "Change callback failed for %s %s #%s",
                    event.table,
                    event.kind.value,
                    event.row_id,
                )
