"""Tests for the general ledger service."""

import logging
import pytest
from datetime import date
from decimal import Decimal

from finreport.domain.entities import AccountType
from finreport.domain.errors import NotFoundError, ValidationError


@pytest.fixture
def a101(account_service, post):
    """Asset account A101 with entries in January and February 2024."""
    account_id = account_service.create_account(code="A101", name="Bank", account_type="Asset")
    post(account_id, date(2024, 1, 5), debit=1000, description="Deposit")
    post(account_id, date(2024, 1, 10), credit=200, description="Withdrawal")
    post(account_id, date(2024, 2, 1), debit=50, description="Interest")
    return account_id


class TestGetGeneralLedger:
    """Tests for GeneralLedgerService.get_general_ledger."""

    def test_january_window(self, general_ledger_service, a101):
        report = general_ledger_service.get_general_ledger(a101, "2024-01-01", "2024-01-31")

        assert report.account.account_code == "A101"
        assert report.account.account_type == AccountType.ASSET
        assert report.opening_balance == 0
        assert [row.balance for row in report.entries] == [Decimal("1000"), Decimal("800")]
        assert report.closing_balance == Decimal("800")
        assert report.total_debit == Decimal("1000")
        assert report.total_credit == Decimal("200")

    def test_opening_balance_carries_prior_entries(self, general_ledger_service, a101):
        report = general_ledger_service.get_general_ledger(a101, date(2024, 2, 1), date(2024, 2, 29))

        assert report.opening_balance == Decimal("800")
        assert len(report.entries) == 1
        assert report.closing_balance == Decimal("850")
        # Totals cover the window only
        assert report.total_debit == Decimal("50")
        assert report.total_credit == 0

    def test_opening_balance_excludes_start_date(self, general_ledger_service, a101):
        """An entry dated on start_date is a row, not part of the opening balance."""
        report = general_ledger_service.get_general_ledger(a101, "2024-01-10", "2024-01-31")

        assert report.opening_balance == Decimal("1000")
        assert [row.transaction_date for row in report.entries] == [date(2024, 1, 10)]
        assert report.closing_balance == Decimal("800")

    def test_running_balance_is_prefix_sum(self, general_ledger_service, a101):
        report = general_ledger_service.get_general_ledger(a101)

        running = report.opening_balance
        for row in report.entries:
            running += row.debit - row.credit
            assert row.balance == running
        assert report.closing_balance == running
        assert report.closing_balance == (
            report.opening_balance + report.total_debit - report.total_credit
        )

    def test_no_dates_covers_everything(self, general_ledger_service, a101):
        report = general_ledger_service.get_general_ledger(a101)

        assert report.opening_balance == 0
        assert len(report.entries) == 3
        assert report.closing_balance == Decimal("850")

    def test_credit_normal_running_balance(self, general_ledger_service, sample_ledger):
        report = general_ledger_service.get_general_ledger(sample_ledger["4101"])

        assert [row.balance for row in report.entries] == [Decimal("5000")]
        assert report.closing_balance == Decimal("5000")

    def test_same_day_entries_ordered_by_id(self, general_ledger_service, account_service, post):
        account_id = account_service.create_account(code="1101", name="Cash", account_type="Asset")
        later = post(account_id, date(2024, 3, 2), debit=5)
        first = post(account_id, date(2024, 3, 1), debit=1)
        second = post(account_id, date(2024, 3, 1), credit=2)

        report = general_ledger_service.get_general_ledger(account_id)

        assert [row.id for row in report.entries] == [first, second, later]
        assert [row.balance for row in report.entries] == [
            Decimal("1"),
            Decimal("-1"),
            Decimal("4"),
        ]

    def test_row_fields_copied_from_entry(self, general_ledger_service, a101):
        report = general_ledger_service.get_general_ledger(a101, "2024-01-01", "2024-01-05")

        row = report.entries[0]
        assert row.description == "Deposit"
        assert row.debit == Decimal("1000")
        assert row.credit == 0
        assert row.reference_id is None

    def test_empty_window(self, general_ledger_service, a101):
        report = general_ledger_service.get_general_ledger(a101, "2025-01-01", "2025-12-31")

        assert report.entries == ()
        assert report.opening_balance == Decimal("850")
        assert report.closing_balance == Decimal("850")
        assert report.total_debit == 0

    def test_unknown_account(self, general_ledger_service, a101):
        with pytest.raises(NotFoundError):
            general_ledger_service.get_general_ledger(9999)

    def test_malformed_account_id(self, general_ledger_service):
        with pytest.raises(ValidationError, match="Invalid account ID"):
            general_ledger_service.get_general_ledger("A101")

    def test_malformed_date(self, general_ledger_service, a101):
        with pytest.raises(ValidationError, match="Invalid start date"):
            general_ledger_service.get_general_ledger(a101, "2024-13-45")


class TestGetGeneralLedgerBulk:
    """Tests for GeneralLedgerService.get_general_ledger_bulk."""

    def test_request_order(self, general_ledger_service, sample_ledger):
        ids = [sample_ledger["4101"], sample_ledger["1101"]]

        reports = general_ledger_service.get_general_ledger_bulk(ids)

        assert [r.account.account_code for r in reports] == ["4101", "1101"]

    def test_comma_separated_string(self, general_ledger_service, sample_ledger):
        ids = f"{sample_ledger['1101']},{sample_ledger['2101']}"

        reports = general_ledger_service.get_general_ledger_bulk(ids, "2024-01-01", "2024-01-31")

        assert len(reports) == 2

    def test_matches_single_ledger(self, general_ledger_service, sample_ledger):
        account_id = sample_ledger["1101"]

        bulk = general_ledger_service.get_general_ledger_bulk([account_id], "2024-01-02", "2024-01-25")
        single = general_ledger_service.get_general_ledger(account_id, "2024-01-02", "2024-01-25")

        assert bulk == [single]

    def test_unknown_accounts_are_dropped(self, general_ledger_service, sample_ledger, caplog):
        ids = [sample_ledger["1101"], 9999]

        with caplog.at_level(logging.INFO, logger="finreport"):
            reports = general_ledger_service.get_general_ledger_bulk(ids)

        assert [r.account.account_code for r in reports] == ["1101"]
        assert "9999" in caplog.text

    def test_all_unknown_returns_empty(self, general_ledger_service, chart_of_accounts):
        assert general_ledger_service.get_general_ledger_bulk("9998,9999") == []

    @pytest.mark.parametrize("bad_id", ["abc", "²"])
    def test_malformed_id_fails_whole_request(self, general_ledger_service, sample_ledger, bad_id):
        with pytest.raises(ValidationError, match="Invalid account ID"):
            general_ledger_service.get_general_ledger_bulk(f"{sample_ledger['1101']},{bad_id}")

    def test_empty_list(self, general_ledger_service):
        with pytest.raises(ValidationError):
            general_ledger_service.get_general_ledger_bulk("")
