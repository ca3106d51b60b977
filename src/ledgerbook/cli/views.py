"""List and detail views with change-driven refresh.

A view owns its query state, fetches through a loader, and re-fetches
whenever the store reports a change on a table it watches. Every fetch gets
a request number; only the newest request's result is applied, so a slow
response to an outdated query never replaces a newer one. A store failure
leaves the last successfully loaded data in place and is kept in
``last_error`` for the caller to report.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Mapping, Optional, Sequence, TypeVar

from ledgerbook.database.base import Database
from ledgerbook.database.changes import ChangeEvent, Subscription
from ledgerbook.domain.entities import Page, QueryState
from ledgerbook.domain.errors import NotFoundError, StoreError
from ledgerbook.logging_setup import get_logger

logger = get_logger(__name__)

RowT = TypeVar("RowT")
DataT = TypeVar("DataT")


class _ChangeDrivenView(ABC):
    """Subscription bookkeeping shared by list and detail views."""

    def __init__(self, db: Database, watches: Sequence[tuple[str, Optional[Mapping[str, Any]]]]):
        self.db = db
        self.watches = list(watches)
        self.last_error: Optional[StoreError] = None
        self._subscriptions: list[Subscription] = []
        self._request_seq = 0

    @property
    def is_open(self) -> bool:
        return bool(self._subscriptions)

    def open(self):
        """Start watching for changes and load the initial data."""
        if not self._subscriptions:
            for table, row_filter in self.watches:
                self._subscriptions.append(self.db.subscribe(table, self._on_change, row_filter))
        self.refresh()
        return self

    def close(self) -> None:
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions = []

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _on_change(self, event: ChangeEvent) -> None:
        logger.debug("Refreshing after %s %s #%s", event.table, event.kind.value, event.row_id)
        self.refresh()

    def _next_request(self) -> int:
        self._request_seq += 1
        return self._request_seq

    def _is_latest(self, request_id: int) -> bool:
        return request_id == self._request_seq

    @abstractmethod
    def refresh(self):
        """Re-fetch from the store and apply the result if still current."""
        pass


class ListView(_ChangeDrivenView, Generic[RowT]):
    """Paginated, filterable list of rows from one table."""

    def __init__(
        self,
        db: Database,
        table: str,
        loader: Callable[[QueryState], Page[RowT]],
        query: Optional[QueryState] = None,
        row_filter: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(db, [(table, row_filter)])
        self.table = table
        self.loader = loader
        self.query = query or QueryState()
        self.page: Optional[Page[RowT]] = None

    @property
    def rows(self) -> tuple[RowT, ...]:
        return self.page.rows if self.page is not None else ()

    @property
    def total_pages(self) -> int:
        return self.page.total_pages if self.page is not None else 1

    def refresh(self) -> Optional[Page[RowT]]:
        """Fetch the page for the current query state."""
        request_id = self._next_request()
        try:
            page = self.loader(self.query)
        except StoreError as e:
            if self._is_latest(request_id):
                self.last_error = e
            logger.warning("Keeping previous %s page after store error: %s", self.table, e)
            return self.page

        if not self._is_latest(request_id):
            logger.debug("Discarding stale %s page (request %d)", self.table, request_id)
            return self.page
        self.page = page
        self.last_error = None
        return self.page

    def set_query(self, query: QueryState) -> QueryState:
        self.query = query
        self.refresh()
        return self.query

    def set_filters(self, **changes: Any) -> QueryState:
        return self.set_query(self.query.with_filters(**changes))

    def go_to_page(self, page: int) -> QueryState:
        return self.set_query(self.query.with_page(min(page, self.total_pages)))

    def next_page(self) -> QueryState:
        return self.set_query(self.query.next_page(self.total_pages))

    def previous_page(self) -> QueryState:
        return self.set_query(self.query.previous_page())


class DetailView(_ChangeDrivenView, Generic[DataT]):
    """A single record and its related rows.

    ``not_found`` is set when the loader raises ``NotFoundError``; the data
    is cleared in that case since the record is gone.
    """

    def __init__(
        self,
        db: Database,
        loader: Callable[[], DataT],
        watches: Sequence[tuple[str, Optional[Mapping[str, Any]]]],
    ):
        super().__init__(db, watches)
        self.loader = loader
        self.data: Optional[DataT] = None
        self.not_found = False

    def refresh(self) -> Optional[DataT]:
        request_id = self._next_request()
        try:
            data = self.loader()
        except NotFoundError:
            if self._is_latest(request_id):
                self.data = None
                self.not_found = True
            return self.data
        except StoreError as e:
            if self._is_latest(request_id):
                self.last_error = e
            logger.warning("Keeping previous detail after store error: %s", e)
            return self.data

        if self._is_latest(request_id):
            self.data = data
            self.not_found = False
            self.last_error = None
        return self.data
