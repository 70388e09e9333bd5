"""Shared pytest fixtures for finreport tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from finreport.database.factories import create_sqlite_database
from finreport.database.memory import InMemoryDatabase
from finreport.domain.account import AccountService
from finreport.domain.balance import BalanceService
from finreport.domain.balance_sheet import BalanceSheetService
from finreport.domain.general_ledger import GeneralLedgerService
from finreport.domain.income_statement import IncomeStatementService
from finreport.domain.journal import JournalService
from finreport.domain.trial_balance import TrialBalanceService
from finreport.logging_config import reset_logging

CHART_OF_ACCOUNTS = [
    ("1101", "Cash", "Asset"),
    ("1201", "Accounts Receivable", "Asset"),
    ("2101", "Accounts Payable", "Liability"),
    ("3101", "Owner Capital", "Equity"),
    ("4101", "Service Revenue", "Revenue"),
    ("5101", "Direct Labor", "CostOfService"),
    ("6101", "Rent Expense", "Expense"),
]


@pytest.fixture(autouse=True)
def clean_logging():
    """Undo any logging configuration made by a test (e.g. through the CLI)."""
    reset_logging()
    yield
    reset_logging()


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
def memory_db():
    """Create an in-memory database for testing."""
    db = InMemoryDatabase()
    db.connect()
    db.initialize_schema()
    return db


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def journal_service(temp_db):
    """Create a JournalService with a temporary database."""
    return JournalService(temp_db)


@pytest.fixture
def balance_service(temp_db):
    """Create a BalanceService with a temporary database."""
    return BalanceService(temp_db)


@pytest.fixture
def general_ledger_service(temp_db):
    """Create a GeneralLedgerService with a temporary database."""
    return GeneralLedgerService(temp_db)


@pytest.fixture
def trial_balance_service(temp_db):
    """Create a TrialBalanceService with a temporary database."""
    return TrialBalanceService(temp_db)


@pytest.fixture
def balance_sheet_service(temp_db):
    """Create a BalanceSheetService with a temporary database."""
    return BalanceSheetService(temp_db)


@pytest.fixture
def income_statement_service(temp_db):
    """Create an IncomeStatementService with a temporary database."""
    return IncomeStatementService(temp_db)


@pytest.fixture
def chart_of_accounts(account_service):
    """Create a small chart of accounts and return account IDs keyed by code."""
    return {
        code: account_service.create_account(code=code, name=name, account_type=account_type)
        for code, name, account_type in CHART_OF_ACCOUNTS
    }


@pytest.fixture
def post(temp_db):
    """Return a helper that writes a journal entry straight to the database."""

    def _post(account_id, day, debit=None, credit=None, description=None):
        return temp_db.create_journal_entry(
            account_id=account_id,
            transaction_date=day,
            debit=Decimal(str(debit)) if debit is not None else None,
            credit=Decimal(str(credit)) if credit is not None else None,
            description=description,
        )

    return _post


@pytest.fixture
def sample_ledger(chart_of_accounts, post):
    """Post a small balanced set of transactions for January 2024.

    Month-end balances: Cash 11000, Payable 4000, Capital 6000,
    Revenue 5000, Direct Labor 1000, Rent 3000 (receivable nets to zero).
    As of 2024-01-02 only Cash 10000, Payable 4000 and Capital 6000 are set.
    """
    ids = chart_of_accounts
    # Owner investment
    post(ids["1101"], date(2024, 1, 1), debit=6000, description="Owner investment")
    post(ids["3101"], date(2024, 1, 1), credit=6000, description="Owner investment")
    # Loan from supplier
    post(ids["1101"], date(2024, 1, 2), debit=4000, description="Supplier credit")
    post(ids["2101"], date(2024, 1, 2), credit=4000, description="Supplier credit")
    # Invoice and collection
    post(ids["1201"], date(2024, 1, 10), debit=5000, description="Invoice 1")
    post(ids["4101"], date(2024, 1, 10), credit=5000, description="Invoice 1")
    post(ids["1101"], date(2024, 1, 20), debit=5000, description="Payment invoice 1")
    post(ids["1201"], date(2024, 1, 20), credit=5000, description="Payment invoice 1")
    # Costs paid in cash
    post(ids["5101"], date(2024, 1, 25), debit=1000, description="Contractor")
    post(ids["1101"], date(2024, 1, 25), credit=1000, description="Contractor")
    post(ids["6101"], date(2024, 1, 31), debit=3000, description="January rent")
    post(ids["1101"], date(2024, 1, 31), credit=3000, description="January rent")
    return ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
