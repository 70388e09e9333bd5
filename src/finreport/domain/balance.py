"""Balance engine: signed account balances computed from journal entries."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from finreport.database.base import Database
from finreport.domain.account import AccountService
from finreport.domain.entities import (
    Account,
    AccountBalance,
    AccountType,
    EntryTotals,
    JournalEntry,
    ZERO,
)
from finreport.logging_config import get_logger
from finreport.utils.account_resolver import parse_account_id
from finreport.utils.date_parser import parse_optional_date

logger = get_logger(__name__)


def apply_balance_sign(
    account_type: AccountType, debit_sum: Decimal, credit_sum: Decimal
) -> Decimal:
    """Return the signed balance for an account type.

    Asset, Expense and CostOfService accounts are debit-normal
    (debits minus credits); Liability, Equity and Revenue accounts are
    credit-normal (credits minus debits). Every report derives its amounts
    through this function.
    """
    if AccountType(account_type).is_debit_normal:
        return debit_sum - credit_sum
    return credit_sum - debit_sum


def sum_entries(entries: Iterable[JournalEntry]) -> EntryTotals:
    """Sum debit and credit columns, treating absent amounts as zero."""
    debit = ZERO
    credit = ZERO
    for entry in entries:
        debit += entry.debit_amount
        credit += entry.credit_amount
    return EntryTotals(debit=debit, credit=credit)


def sum_entries_by_account(entries: Iterable[JournalEntry]) -> dict[int, EntryTotals]:
    """Sum debit and credit columns per account ID."""
    grouped: dict[int, list[JournalEntry]] = defaultdict(list)
    for entry in entries:
        grouped[entry.account_id].append(entry)
    return {account_id: sum_entries(items) for account_id, items in grouped.items()}


def build_account_balance(account: Account, totals: EntryTotals) -> AccountBalance:
    """Combine an account and its entry totals into a signed balance."""
    return AccountBalance(
        account_id=account.id,
        account_code=account.code,
        account_name=account.name,
        account_type=account.type,
        total_debit=totals.debit,
        total_credit=totals.credit,
        balance=apply_balance_sign(account.type, totals.debit, totals.credit),
    )


class BalanceService:
    """Service for computing account balances."""

    def __init__(self, db: Database):
        """Initialize balance service.

        Args:
            db: Database instance
        """
        self.db = db
        self.accounts = AccountService(db)

    def compute_balance(
        self, account_id: int | str, as_of_date: Optional[date | str] = None
    ) -> AccountBalance:
        """Compute the balance of one account.

        Args:
            account_id: Account ID
            as_of_date: Optional inclusive cut-off on transaction date

        Returns:
            AccountBalance; totals are zero when the account has no entries

        Raises:
            ValidationError: If the account ID or date is malformed
            NotFoundError: If the account does not exist
        """
        account_id = parse_account_id(account_id)
        as_of_date = parse_optional_date(as_of_date, "as-of date")
        account = self.accounts.get_account(account_id)
        entries = self.db.list_journal_entries(account_id=account.id, end_date=as_of_date)
        result = build_account_balance(account, sum_entries(entries))
        logger.debug(
            "Balance of account %s as of %s: %s", account.code, as_of_date, result.balance
        )
        return result

    def compute_all_balances(
        self, as_of_date: Optional[date | str] = None
    ) -> list[AccountBalance]:
        """Compute the balance of every account, ordered by account code.

        Args:
            as_of_date: Optional inclusive cut-off on transaction date

        Returns:
            List of AccountBalance, one per account in the chart of accounts
        """
        as_of_date = parse_optional_date(as_of_date, "as-of date")
        accounts = self.accounts.list_accounts()
        totals = sum_entries_by_account(self.db.list_journal_entries(end_date=as_of_date))
        return [
            build_account_balance(account, totals.get(account.id, EntryTotals()))
            for account in accounts
        ]

    def compute_balance_summary_by_type(
        self, as_of_date: Optional[date | str] = None
    ) -> dict[AccountType, Decimal]:
        """Sum signed balances per account type.

        Only types that have at least one account appear in the result.
        """
        summary: dict[AccountType, Decimal] = {}
        for item in self.compute_all_balances(as_of_date):
            summary[item.account_type] = summary.get(item.account_type, ZERO) + item.balance
        return summary
