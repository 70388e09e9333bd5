"""Trial balance domain service."""

from datetime import date
from typing import Optional

from finreport.database.base import Database
from finreport.domain.balance import BalanceService
from finreport.domain.entities import (
    AccountBalance,
    AccountType,
    BALANCE_TOLERANCE,
    TrialBalanceEntry,
    TrialBalanceReport,
    TypeTotals,
    ZERO,
)
from finreport.logging_config import get_logger
from finreport.utils.date_parser import parse_optional_date

logger = get_logger(__name__)


def to_trial_balance_entry(balance: AccountBalance) -> TrialBalanceEntry:
    """Present a signed balance as a non-negative debit/credit pair.

    A positive balance sits on the account's normal side; a negative one is
    shown as its absolute value on the opposite side.
    """
    debit = ZERO
    credit = ZERO
    debit_normal = balance.account_type.is_debit_normal
    if balance.balance > 0:
        if debit_normal:
            debit = balance.balance
        else:
            credit = balance.balance
    elif balance.balance < 0:
        if debit_normal:
            credit = abs(balance.balance)
        else:
            debit = abs(balance.balance)

    return TrialBalanceEntry(
        account_id=balance.account_id,
        account_code=balance.account_code,
        account_name=balance.account_name,
        account_type=balance.account_type,
        debit=debit,
        credit=credit,
        balance=balance.balance,
    )


class TrialBalanceService:
    """Service for building trial balance reports."""

    def __init__(self, db: Database):
        """Initialize trial balance service.

        Args:
            db: Database instance
        """
        self.db = db
        self.balances = BalanceService(db)

    def get_trial_balance(self, as_of_date: Optional[date | str] = None) -> TrialBalanceReport:
        """Build the trial balance of every account.

        Args:
            as_of_date: Optional inclusive cut-off on transaction date

        Returns:
            TrialBalanceReport with column totals and the balanced verdict

        Raises:
            ValidationError: If the date is malformed
        """
        as_of_date = parse_optional_date(as_of_date, "as-of date")
        entries = [
            to_trial_balance_entry(item)
            for item in self.balances.compute_all_balances(as_of_date)
        ]

        total_debit = sum((entry.debit for entry in entries), ZERO)
        total_credit = sum((entry.credit for entry in entries), ZERO)
        difference = abs(total_debit - total_credit)
        is_balanced = difference < BALANCE_TOLERANCE

        if not is_balanced:
            logger.warning(
                "Trial balance as of %s is out of balance by %s", as_of_date, difference
            )

        return TrialBalanceReport(
            as_of_date=as_of_date,
            entries=tuple(entries),
            total_debit=total_debit,
            total_credit=total_credit,
            is_balanced=is_balanced,
            difference=difference,
        )

    def get_trial_balance_by_type(
        self, as_of_date: Optional[date | str] = None
    ) -> dict[AccountType, TypeTotals]:
        """Sum the trial balance columns per account type."""
        report = self.get_trial_balance(as_of_date)

        by_type: dict[AccountType, TypeTotals] = {}
        for entry in report.entries:
            current = by_type.get(entry.account_type, TypeTotals())
            by_type[entry.account_type] = TypeTotals(
                debit=current.debit + entry.debit,
                credit=current.credit + entry.credit,
                balance=current.balance + entry.balance,
            )
        return by_type
