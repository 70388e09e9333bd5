"""General ledger domain service."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from finreport.database.base import Database
from finreport.domain.account import AccountService
from finreport.domain.balance import apply_balance_sign, sum_entries
from finreport.domain.entities import (
    Account,
    AccountRef,
    GeneralLedgerEntry,
    GeneralLedgerReport,
    JournalEntry,
    ZERO,
)
from finreport.domain.errors import NotFoundError
from finreport.logging_config import get_logger
from finreport.utils.account_resolver import parse_account_id, parse_account_ids
from finreport.utils.date_parser import parse_optional_date

logger = get_logger(__name__)


class GeneralLedgerService:
    """Service for building per-account transaction listings with running balances."""

    def __init__(self, db: Database):
        """Initialize general ledger service.

        Args:
            db: Database instance
        """
        self.db = db
        self.accounts = AccountService(db)

    def get_general_ledger(
        self,
        account_id: int | str,
        start_date: Optional[date | str] = None,
        end_date: Optional[date | str] = None,
    ) -> GeneralLedgerReport:
        """Build the general ledger of one account.

        The opening balance covers entries dated strictly before start_date,
        so it is the state of the account before the period begins. Rows
        cover [start_date, end_date] ordered by (transaction_date, id).

        Args:
            account_id: Account ID
            start_date: Optional inclusive start of the period
            end_date: Optional inclusive end of the period

        Returns:
            GeneralLedgerReport

        Raises:
            ValidationError: If the account ID or a date is malformed
            NotFoundError: If the account does not exist
        """
        account_id = parse_account_id(account_id)
        start_date = parse_optional_date(start_date, "start date")
        end_date = parse_optional_date(end_date, "end date")

        account = self.accounts.get_account(account_id)
        return self._build_ledger(account, start_date, end_date)

    def get_general_ledger_bulk(
        self,
        account_ids: str | Iterable[int | str],
        start_date: Optional[date | str] = None,
        end_date: Optional[date | str] = None,
    ) -> list[GeneralLedgerReport]:
        """Build general ledgers for several accounts.

        Each account is computed independently, in request order. Accounts
        that do not exist are left out of the result instead of failing the
        whole request.

        Raises:
            ValidationError: If any account ID or a date is malformed
        """
        ids = parse_account_ids(account_ids)
        start_date = parse_optional_date(start_date, "start date")
        end_date = parse_optional_date(end_date, "end date")

        reports: list[GeneralLedgerReport] = []
        missing: list[int] = []
        for account_id in ids:
            try:
                account = self.accounts.get_account(account_id)
            except NotFoundError:
                missing.append(account_id)
                continue
            reports.append(self._build_ledger(account, start_date, end_date))

        if missing:
            logger.info("Skipped unknown accounts in bulk ledger: %s", missing)
        return reports

    def compute_opening_balance(self, account: Account, start_date: Optional[date]) -> Decimal:
        """Signed balance of entries dated strictly before start_date.

        Zero when no start date is given.
        """
        if start_date is None:
            return ZERO
        totals = sum_entries(
            self.db.list_journal_entries(account_id=account.id, before_date=start_date)
        )
        return apply_balance_sign(account.type, totals.debit, totals.credit)

    def _build_ledger(
        self, account: Account, start_date: Optional[date], end_date: Optional[date]
    ) -> GeneralLedgerReport:
        opening_balance = self.compute_opening_balance(account, start_date)
        entries = self.db.list_journal_entries(
            account_id=account.id, start_date=start_date, end_date=end_date
        )
        rows, closing_balance = self.walk_entries(account, entries, opening_balance)
        totals = sum_entries(entries)

        logger.debug(
            "General ledger for %s (%s..%s): %d rows, opening %s, closing %s",
            account.code,
            start_date,
            end_date,
            len(rows),
            opening_balance,
            closing_balance,
        )

        return GeneralLedgerReport(
            account=AccountRef(
                id=account.id,
                account_code=account.code,
                account_name=account.name,
                account_type=account.type,
            ),
            opening_balance=opening_balance,
            entries=tuple(rows),
            closing_balance=closing_balance,
            total_debit=totals.debit,
            total_credit=totals.credit,
        )

    def walk_entries(
        self, account: Account, entries: Iterable[JournalEntry], opening_balance: Decimal
    ) -> tuple[list[GeneralLedgerEntry], Decimal]:
        """Attach a running balance to each entry, seeded at opening_balance.

        Entries must already be in ledger order.

        Returns:
            Tuple of (ledger rows, closing balance)
        """
        running_balance = opening_balance
        rows: list[GeneralLedgerEntry] = []
        for entry in entries:
            debit = entry.debit_amount
            credit = entry.credit_amount
            running_balance += apply_balance_sign(account.type, debit, credit)
            rows.append(
                GeneralLedgerEntry(
                    id=entry.id,
                    transaction_date=entry.transaction_date,
                    description=entry.description,
                    reference_id=entry.reference_id,
                    reference_type=entry.reference_type,
                    debit=debit,
                    credit=credit,
                    balance=running_balance,
                    created_by=entry.created_by,
                )
            )
        return rows, running_balance
