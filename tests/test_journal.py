"""Tests for the journal and account services."""

import pytest
from datetime import date
from decimal import Decimal

from sqlalchemy.exc import OperationalError

from finreport.database.sqlalchemy_db import SQLAlchemyDatabase
from finreport.domain.account import AccountService, parse_account_type
from finreport.domain.entities import AccountType, JournalLine
from finreport.domain.errors import ConflictError, NotFoundError, StorageError, ValidationError
from finreport.domain.journal import JournalService
from finreport.domain.trial_balance import TrialBalanceService


class DiskFullDatabase(SQLAlchemyDatabase):
    """SQLite database whose commits fail after the rows are flushed."""

    def _get_session(self):
        session = super()._get_session()

        def fail():
            raise OperationalError("COMMIT", {}, Exception("disk full"))

        session.commit = fail
        return session


class TestAccountService:
    """Tests for AccountService."""

    def test_create_and_get(self, account_service):
        account_id = account_service.create_account(
            code=" 1101 ", name=" Cash ", account_type="asset"
        )

        account = account_service.get_account(account_id)
        assert account.code == "1101"
        assert account.name == "Cash"
        assert account.type == AccountType.ASSET

    def test_duplicate_code(self, account_service):
        account_service.create_account(code="1101", name="Cash", account_type="Asset")

        with pytest.raises(ConflictError, match="already exists"):
            account_service.create_account(code="1101", name="Bank", account_type="Asset")

    @pytest.mark.parametrize("code,name", [("", "Cash"), ("1101", "  ")])
    def test_empty_code_or_name(self, account_service, code, name):
        with pytest.raises(ValidationError):
            account_service.create_account(code=code, name=name, account_type="Asset")

    def test_unknown_type(self, account_service):
        with pytest.raises(ValidationError, match="Invalid account type"):
            account_service.create_account(code="9", name="X", account_type="Goodwill")

    def test_get_missing_account(self, account_service):
        assert account_service.find_account(42) is None
        with pytest.raises(NotFoundError):
            account_service.get_account(42)

    def test_list_ordered_by_code(self, account_service):
        account_service.create_account(code="4101", name="Revenue", account_type="Revenue")
        account_service.create_account(code="1101", name="Cash", account_type="Asset")

        assert [a.code for a in account_service.list_accounts()] == ["1101", "4101"]

    def test_get_by_code(self, account_service, chart_of_accounts):
        account = account_service.get_account_by_code("2101")

        assert account.id == chart_of_accounts["2101"]
        assert account_service.get_account_by_code("nope") is None

    def test_memory_database(self, memory_db):
        service = AccountService(memory_db)
        account_id = service.create_account(code="1101", name="Cash", account_type=AccountType.ASSET)

        assert service.get_account(account_id).code == "1101"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("Asset", AccountType.ASSET),
        ("costofservice", AccountType.COST_OF_SERVICE),
        ("cost_of_service", AccountType.COST_OF_SERVICE),
        ("Cost of Service", AccountType.COST_OF_SERVICE),
        (AccountType.EQUITY, AccountType.EQUITY),
    ],
)
def test_parse_account_type(value, expected):
    assert parse_account_type(value) == expected


class TestPostEntry:
    """Tests for JournalService.post_entry."""

    def test_post_debit(self, journal_service, chart_of_accounts):
        entry_id = journal_service.post_entry(
            account_id=chart_of_accounts["1101"],
            transaction_date="2024-01-05",
            debit=Decimal("1000"),
            description="Deposit",
            reference_id="INV-1",
            reference_type="invoice",
            created_by="alice",
        )

        entry = journal_service.get_entry(entry_id)
        assert entry.transaction_date == date(2024, 1, 5)
        assert entry.debit == Decimal("1000")
        assert entry.credit is None
        assert entry.reference_type == "invoice"
        assert entry.created_by == "alice"

    def test_zero_counts_as_absent(self, journal_service, chart_of_accounts):
        entry_id = journal_service.post_entry(
            account_id=chart_of_accounts["1101"],
            transaction_date=date(2024, 1, 5),
            debit=Decimal("0"),
            credit=Decimal("25"),
        )

        entry = journal_service.get_entry(entry_id)
        assert entry.debit is None
        assert entry.credit == Decimal("25")

    @pytest.mark.parametrize(
        "debit,credit",
        [(None, None), (Decimal("1"), Decimal("1")), (Decimal("0"), None)],
    )
    def test_requires_exactly_one_amount(self, journal_service, chart_of_accounts, debit, credit):
        with pytest.raises(ValidationError, match="Either debit or credit"):
            journal_service.post_entry(
                account_id=chart_of_accounts["1101"],
                transaction_date="2024-01-05",
                debit=debit,
                credit=credit,
            )

    def test_negative_amount(self, journal_service, chart_of_accounts):
        with pytest.raises(ValidationError, match="positive"):
            journal_service.post_entry(
                account_id=chart_of_accounts["1101"],
                transaction_date="2024-01-05",
                debit=Decimal("-5"),
            )

    def test_missing_date(self, journal_service, chart_of_accounts):
        with pytest.raises(ValidationError, match="Transaction date is required"):
            journal_service.post_entry(
                account_id=chart_of_accounts["1101"], transaction_date="", debit=Decimal("5")
            )

    def test_unknown_account(self, journal_service, chart_of_accounts):
        with pytest.raises(NotFoundError):
            journal_service.post_entry(
                account_id=999, transaction_date="2024-01-05", debit=Decimal("5")
            )

    def test_get_missing_entry(self, journal_service):
        with pytest.raises(NotFoundError, match="Journal entry 5 not found"):
            journal_service.get_entry(5)


class TestPostTransaction:
    """Tests for JournalService.post_transaction."""

    def test_balanced_transaction(self, journal_service, chart_of_accounts):
        entry_ids = journal_service.post_transaction(
            transaction_date="2024-01-10",
            lines=[
                JournalLine(account_id=chart_of_accounts["1201"], debit=Decimal("5000")),
                JournalLine(account_id=chart_of_accounts["4101"], credit=Decimal("5000")),
            ],
            description="Invoice 1",
            reference_id="INV-1",
            reference_type="invoice",
        )

        assert len(entry_ids) == 2
        entries = [journal_service.get_entry(entry_id) for entry_id in entry_ids]
        assert {e.reference_id for e in entries} == {"INV-1"}
        assert {e.description for e in entries} == {"Invoice 1"}

    def test_unbalanced_transaction_writes_nothing(self, journal_service, chart_of_accounts):
        with pytest.raises(ValidationError, match="not balanced"):
            journal_service.post_transaction(
                transaction_date="2024-01-10",
                lines=[
                    JournalLine(account_id=chart_of_accounts["1201"], debit=Decimal("5000")),
                    JournalLine(account_id=chart_of_accounts["4101"], credit=Decimal("4000")),
                ],
            )

        assert journal_service.list_entries() == []

    def test_single_line(self, journal_service, chart_of_accounts):
        with pytest.raises(ValidationError, match="at least two lines"):
            journal_service.post_transaction(
                transaction_date="2024-01-10",
                lines=[JournalLine(account_id=chart_of_accounts["1201"], debit=Decimal("1"))],
            )

    def test_unknown_account_writes_nothing(self, journal_service, chart_of_accounts):
        with pytest.raises(NotFoundError):
            journal_service.post_transaction(
                transaction_date="2024-01-10",
                lines=[
                    JournalLine(account_id=chart_of_accounts["1201"], debit=Decimal("1")),
                    JournalLine(account_id=999, credit=Decimal("1")),
                ],
            )

        assert journal_service.list_entries() == []

    def test_storage_failure_keeps_no_lines(self, temp_db, chart_of_accounts):
        service = JournalService(DiskFullDatabase(temp_db.database_url))

        with pytest.raises(StorageError, match="disk full"):
            service.post_transaction(
                transaction_date="2024-01-10",
                lines=[
                    JournalLine(account_id=chart_of_accounts["1101"], debit=Decimal("100")),
                    JournalLine(account_id=chart_of_accounts["3101"], credit=Decimal("100")),
                ],
            )

        assert temp_db.list_journal_entries() == []
        assert TrialBalanceService(temp_db).get_trial_balance().is_balanced


class TestListEntries:
    """Tests for JournalService.list_entries."""

    def test_ledger_order(self, journal_service, sample_ledger):
        entries = journal_service.list_entries()

        keys = [(e.transaction_date, e.id) for e in entries]
        assert keys == sorted(keys)
        assert len(entries) == 12

    def test_filters(self, journal_service, sample_ledger):
        entries = journal_service.list_entries(
            account_id=sample_ledger["1101"], start_date="2024-01-02", end_date="2024-01-25"
        )

        assert [e.transaction_date for e in entries] == [
            date(2024, 1, 2),
            date(2024, 1, 20),
            date(2024, 1, 25),
        ]
