"""Tests for the SQLAlchemy record store."""

from decimal import Decimal

import pytest

from ledgerbook.domain.entities import (
    Customer,
    Page,
    Payment,
    PaymentMethod,
    QueryState,
    SortOrder,
    Transaction,
    TransactionType,
)
from ledgerbook.domain.errors import NotFoundError, StoreError, ValidationError


def add_transaction(db, customer_id, title="Line", amount="10.00", **kwargs):
    kwargs.setdefault("type", TransactionType.PHONELINE_CHARGING)
    return db.create_transaction(
        customer_id=customer_id, title=title, amount=Decimal(amount), **kwargs
    )


class TestCustomers:
    def test_create_and_get_customer(self, temp_db):
        customer_id = temp_db.create_customer(name="Rami", phone="03123456")
        customer = temp_db.get_customer(customer_id)

        assert isinstance(customer, Customer)
        assert customer.id == customer_id
        assert customer.name == "Rami"
        assert customer.phone == "03123456"
        assert customer.created_at is not None

    def test_get_missing_customer(self, temp_db):
        assert temp_db.get_customer(999) is None

    def test_update_customer(self, temp_db):
        customer_id = temp_db.create_customer(name="Rami", phone="03123456")
        temp_db.update_customer(customer_id, name="Rami H.")
        customer = temp_db.get_customer(customer_id)
        assert customer.name == "Rami H."
        assert customer.phone == "03123456"

    def test_clear_phone(self, temp_db):
        customer_id = temp_db.create_customer(name="Rami", phone="03123456")
        temp_db.update_customer(customer_id, phone=None, update_phone=True)
        assert temp_db.get_customer(customer_id).phone is None

    def test_update_missing_customer(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.update_customer(999, name="Nobody")

    def test_delete_missing_customer(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.delete_customer(999)

    def test_count_customers(self, temp_db):
        assert temp_db.count_customers() == 0
        temp_db.create_customer(name="A1")
        temp_db.create_customer(name="B2")
        assert temp_db.count_customers() == 2


class TestListPages:
    def test_pagination_and_total_count(self, temp_db):
        for i in range(25):
            temp_db.create_customer(name=f"Customer {i:02d}")

        first = temp_db.list_customers(QueryState())
        assert isinstance(first, Page)
        assert len(first.rows) == 10
        assert first.total_count == 25
        assert first.total_pages == 3

        last = temp_db.list_customers(QueryState(page=3))
        assert len(last.rows) == 5
        assert last.total_count == 25

    def test_default_order_is_newest_first(self, temp_db):
        ids = [temp_db.create_customer(name=f"Customer {i}") for i in range(3)]
        page = temp_db.list_customers(QueryState())
        assert [c.id for c in page.rows] == list(reversed(ids))

    def test_sort_by_name_ascending(self, temp_db):
        for name in ["Charlie", "alpha", "Bravo"]:
            temp_db.create_customer(name=name)
        query = QueryState(sort=SortOrder("name", descending=False))
        names = [c.name for c in temp_db.list_customers(query).rows]
        assert names == sorted(names)

    def test_search_is_case_insensitive(self, temp_db):
        temp_db.create_customer(name="Rami Haddad")
        temp_db.create_customer(name="Lina Khoury")
        page = temp_db.list_customers(QueryState().with_filters(search="RAMI"))
        assert [c.name for c in page.rows] == ["Rami Haddad"]
        assert page.total_count == 1

    def test_search_treats_wildcards_literally(self, temp_db):
        temp_db.create_customer(name="100% Cash")
        temp_db.create_customer(name="Other")
        page = temp_db.list_customers(QueryState().with_filters(search="%"))
        assert [c.name for c in page.rows] == ["100% Cash"]

    def test_page_past_end_is_empty(self, temp_db):
        temp_db.create_customer(name="Only")
        page = temp_db.list_customers(QueryState(page=5))
        assert page.rows == ()
        assert page.total_count == 1

    def test_unknown_filter(self, temp_db):
        with pytest.raises(ValidationError, match="Unknown filter"):
            temp_db.list_customers(QueryState(filters={"phone": "03"}))

    def test_unknown_sort_field(self, temp_db):
        with pytest.raises(ValidationError, match="Cannot sort"):
            temp_db.list_customers(QueryState(sort=SortOrder("phone")))

    def test_transaction_filters_combine(self, temp_db):
        rami = temp_db.create_customer(name="Rami")
        lina = temp_db.create_customer(name="Lina")
        add_transaction(temp_db, rami, title="Netflix March", type=TransactionType.NETFLIX_SUBSCRIPTION)
        add_transaction(temp_db, rami, title="Line March", payment_method=PaymentMethod.CASH)
        add_transaction(temp_db, lina, title="Netflix April", type=TransactionType.NETFLIX_SUBSCRIPTION)

        query = QueryState().with_filters(
            type=TransactionType.NETFLIX_SUBSCRIPTION, customer_id=rami
        )
        page = temp_db.list_transactions(query)
        assert [t.title for t in page.rows] == ["Netflix March"]

        page = temp_db.list_transactions(QueryState().with_filters(payment_method="cash"))
        assert [t.title for t in page.rows] == ["Line March"]

        page = temp_db.list_transactions(QueryState().with_filters(search="netflix"))
        assert page.total_count == 2

    def test_sort_transactions_by_amount(self, temp_db):
        customer_id = temp_db.create_customer(name="Rami")
        for amount in ["5.00", "50.00", "12.50"]:
            add_transaction(temp_db, customer_id, amount=amount)
        query = QueryState(sort=SortOrder("amount", descending=True))
        amounts = [t.amount for t in temp_db.list_transactions(query).rows]
        assert amounts == [Decimal("50.00"), Decimal("12.50"), Decimal("5.00")]

    def test_payment_filters(self, temp_db):
        customer_id = temp_db.create_customer(name="Rami")
        t1 = add_transaction(temp_db, customer_id)
        t2 = add_transaction(temp_db, customer_id)
        temp_db.create_payment(t1, Decimal("1.00"), PaymentMethod.CASH, note="first half")
        temp_db.create_payment(t1, Decimal("2.00"), PaymentMethod.WHISH)
        temp_db.create_payment(t2, Decimal("3.00"), PaymentMethod.CASH)

        assert temp_db.list_payments(QueryState().with_filters(transaction_id=t1)).total_count == 2
        assert temp_db.list_payments(QueryState().with_filters(method="cash")).total_count == 2
        page = temp_db.list_payments(QueryState().with_filters(search="HALF"))
        assert [p.note for p in page.rows] == ["first half"]


class TestTransactions:
    def test_create_transaction(self, temp_db):
        customer_id = temp_db.create_customer(name="Rami")
        txn_id = add_transaction(
            temp_db,
            customer_id,
            title="Shahid",
            amount="7.99",
            type=TransactionType.SHAHID_SUBSCRIPTION,
            description="Monthly",
            payment_method=PaymentMethod.WHISH,
        )
        txn = temp_db.get_transaction(txn_id)
        assert isinstance(txn, Transaction)
        assert txn.amount == Decimal("7.99")
        assert txn.type is TransactionType.SHAHID_SUBSCRIPTION
        assert txn.payment_method is PaymentMethod.WHISH
        assert txn.description == "Monthly"

    def test_unknown_customer_is_rejected_by_store(self, temp_db):
        with pytest.raises(StoreError, match="Could not create transaction"):
            add_transaction(temp_db, 999)
        # The session stays usable after the rollback
        assert temp_db.create_customer(name="Still works") > 0

    def test_update_transaction(self, temp_db):
        customer_id = temp_db.create_customer(name="Rami")
        txn_id = add_transaction(temp_db, customer_id)
        temp_db.update_transaction(txn_id, amount=Decimal("12.00"))
        txn = temp_db.get_transaction(txn_id)
        assert txn.amount == Decimal("12.00")
        assert txn.title == "Line"

    def test_update_missing_transaction(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.update_transaction(999, title="Nope")

    def test_delete_transaction_removes_payments(self, temp_db):
        customer_id = temp_db.create_customer(name="Rami")
        txn_id = add_transaction(temp_db, customer_id)
        payment_id = temp_db.create_payment(txn_id, Decimal("1.00"), PaymentMethod.CASH)

        temp_db.delete_transaction(txn_id)

        assert temp_db.get_transaction(txn_id) is None
        assert temp_db.get_payment(payment_id) is None


class TestPayments:
    def test_create_and_update_payment(self, temp_db):
        customer_id = temp_db.create_customer(name="Rami")
        txn_id = add_transaction(temp_db, customer_id)
        payment_id = temp_db.create_payment(txn_id, Decimal("4.00"), PaymentMethod.WHISH, note="x")

        temp_db.update_payment(payment_id, amount=Decimal("4.50"))
        payment = temp_db.get_payment(payment_id)
        assert isinstance(payment, Payment)
        assert payment.amount == Decimal("4.50")
        assert payment.method is PaymentMethod.WHISH
        assert payment.note == "x"

        temp_db.update_payment(payment_id, note=None, update_note=True)
        assert temp_db.get_payment(payment_id).note is None

    def test_payment_for_unknown_transaction(self, temp_db):
        with pytest.raises(StoreError):
            temp_db.create_payment(999, Decimal("1.00"), PaymentMethod.CASH)

    def test_delete_missing_payment(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.delete_payment(999)

    def test_payments_for_transaction(self, temp_db):
        customer_id = temp_db.create_customer(name="Rami")
        txn_id = add_transaction(temp_db, customer_id)
        first = temp_db.create_payment(txn_id, Decimal("1.00"), PaymentMethod.CASH)
        second = temp_db.create_payment(txn_id, Decimal("2.00"), PaymentMethod.CASH)
        assert [p.id for p in temp_db.list_payments_for_transaction(txn_id)] == [second, first]


class TestCascade:
    def test_delete_customer_removes_everything(self, temp_db):
        customer_id = temp_db.create_customer(name="Rami")
        other_id = temp_db.create_customer(name="Lina")
        txn_id = add_transaction(temp_db, customer_id)
        other_txn = add_transaction(temp_db, other_id)
        payment_id = temp_db.create_payment(txn_id, Decimal("1.00"), PaymentMethod.CASH)

        temp_db.delete_customer(customer_id)

        assert temp_db.get_customer(customer_id) is None
        assert temp_db.get_transaction(txn_id) is None
        assert temp_db.get_payment(payment_id) is None
        assert temp_db.get_transaction(other_txn) is not None


class TestLedgerEntries:
    def test_entries_pair_transactions_with_payments(self, temp_db):
        rami = temp_db.create_customer(name="Rami")
        lina = temp_db.create_customer(name="Lina")
        t1 = add_transaction(temp_db, rami, amount="10.00")
        t2 = add_transaction(temp_db, lina, amount="20.00")
        temp_db.create_payment(t1, Decimal("2.50"), PaymentMethod.CASH)

        entries = temp_db.list_ledger_entries()
        by_id = {txn.id: payments for txn, payments in entries}
        assert set(by_id) == {t1, t2}
        assert [p.amount for p in by_id[t1]] == [Decimal("2.50")]
        assert by_id[t2] == ()

    def test_entries_for_one_customer(self, temp_db):
        rami = temp_db.create_customer(name="Rami")
        lina = temp_db.create_customer(name="Lina")
        add_transaction(temp_db, rami)
        add_transaction(temp_db, lina)

        entries = temp_db.list_ledger_entries(customer_id=rami)
        assert [txn.customer_id for txn, _ in entries] == [rami]


def test_unopenable_database_raises_store_error(tmp_path):
    from ledgerbook.database.factories import create_sqlite_database

    with pytest.raises(StoreError, match="Could not open database"):
        create_sqlite_database(str(tmp_path / "missing" / "ledgerbook.db"))
