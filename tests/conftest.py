"""Shared pytest fixtures for ledgerbook tests."""

import tempfile
import os
import pytest

from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.customer import CustomerService
from ledgerbook.domain.dashboard import DashboardService
from ledgerbook.domain.payment import PaymentService
from ledgerbook.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def customer_service(temp_db):
    """Create a CustomerService with a temporary database."""
    return CustomerService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def payment_service(temp_db):
    """Create a PaymentService with a temporary database."""
    return PaymentService(temp_db)


@pytest.fixture
def dashboard_service(temp_db):
    """Create a DashboardService with a temporary database."""
    return DashboardService(temp_db)


@pytest.fixture
def sample_customer(customer_service):
    """Create a sample customer for testing."""
    customer_id = customer_service.create_customer(name="Rami Haddad", phone="03123456")
    return customer_service.get_customer(customer_id)


@pytest.fixture
def sample_transaction(transaction_service, sample_customer):
    """Create a sample transaction of 100.00 for the sample customer."""
    transaction_id = transaction_service.create_transaction(
        customer_id=sample_customer.id,
        title="Phone line March",
        type="phoneline_charging",
        amount="100.00",
    )
    return transaction_service.get_transaction(transaction_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
