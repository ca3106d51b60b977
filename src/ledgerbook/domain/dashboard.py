"""Dashboard domain service."""

from collections import defaultdict

from ledgerbook.database.base import Database
from ledgerbook.domain import ledger
from ledgerbook.domain.entities import DashboardSummary


class DashboardService:
    """Service for portfolio-wide figures."""

    def __init__(self, db: Database):
        """Initialize dashboard service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_summary(self) -> DashboardSummary:
        """Count customers and total what the business should receive and owes.

        Balances are recomputed from a fresh snapshot of all transactions and
        payments. Customers without transactions are settled and fall in
        neither bucket.
        """
        customers = self.db.list_all_customers()
        by_customer = defaultdict(list)
        for txn, payments in self.db.list_ledger_entries():
            by_customer[txn.customer_id].append((txn, payments))

        outstanding = [
            ledger.outstanding_for(customer, by_customer.get(customer.id, ()))
            for customer in customers
        ]
        return DashboardSummary(
            customer_count=len(customers),
            totals=ledger.portfolio_totals(outstanding),
        )
