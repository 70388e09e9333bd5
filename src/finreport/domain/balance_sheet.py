"""Balance sheet domain service."""

from datetime import date
from typing import Optional

from finreport.database.base import Database
from finreport.domain.balance import BalanceService
from finreport.domain.entities import (
    AccountType,
    BALANCE_SHEET_TYPES,
    BALANCE_TOLERANCE,
    BalanceSheetReport,
    BalanceSheetSection,
    BalanceSheetSummary,
    StatementLine,
    ZERO,
)
from finreport.logging_config import get_logger
from finreport.utils.date_parser import parse_optional_date

logger = get_logger(__name__)


def build_section(lines: list[StatementLine]) -> BalanceSheetSection:
    return BalanceSheetSection(
        accounts=tuple(lines),
        total=sum((line.balance for line in lines), ZERO),
    )


class BalanceSheetService:
    """Service for building balance sheet reports (Assets = Liabilities + Equity)."""

    def __init__(self, db: Database):
        """Initialize balance sheet service.

        Args:
            db: Database instance
        """
        self.db = db
        self.balances = BalanceService(db)

    def get_balance_sheet(self, as_of_date: Optional[date | str] = None) -> BalanceSheetReport:
        """Build the balance sheet as of a date.

        Accounts whose balance is below the tolerance are left out of the
        line items. Revenue, CostOfService and Expense accounts never appear.

        Args:
            as_of_date: Optional inclusive cut-off on transaction date

        Returns:
            BalanceSheetReport

        Raises:
            ValidationError: If the date is malformed
        """
        as_of_date = parse_optional_date(as_of_date, "as-of date")

        sections: dict[AccountType, list[StatementLine]] = {
            account_type: [] for account_type in BALANCE_SHEET_TYPES
        }
        for item in self.balances.compute_all_balances(as_of_date):
            if abs(item.balance) < BALANCE_TOLERANCE:
                continue
            if item.account_type not in sections:
                continue
            sections[item.account_type].append(
                StatementLine(
                    account_code=item.account_code,
                    account_name=item.account_name,
                    balance=item.balance,
                )
            )

        assets = build_section(sections[AccountType.ASSET])
        liabilities = build_section(sections[AccountType.LIABILITY])
        equity = build_section(sections[AccountType.EQUITY])

        total_liabilities_and_equity = liabilities.total + equity.total
        difference = abs(assets.total - total_liabilities_and_equity)
        is_balanced = difference < BALANCE_TOLERANCE

        if not is_balanced:
            logger.warning(
                "Balance sheet as of %s is out of balance by %s", as_of_date, difference
            )

        return BalanceSheetReport(
            as_of_date=as_of_date,
            assets=assets,
            liabilities=liabilities,
            equity=equity,
            total_assets=assets.total,
            total_liabilities_and_equity=total_liabilities_and_equity,
            is_balanced=is_balanced,
            difference=difference,
        )

    def get_balance_sheet_summary(
        self, as_of_date: Optional[date | str] = None
    ) -> BalanceSheetSummary:
        """Balance sheet totals from the per-type balance summary.

        This path sums every account's balance by type and does not apply
        the line-item tolerance filter of get_balance_sheet.
        """
        summary = self.balances.compute_balance_summary_by_type(as_of_date)

        total_assets = summary.get(AccountType.ASSET, ZERO)
        total_liabilities = summary.get(AccountType.LIABILITY, ZERO)
        total_equity = summary.get(AccountType.EQUITY, ZERO)
        difference = abs(total_assets - (total_liabilities + total_equity))

        return BalanceSheetSummary(
            total_assets=total_assets,
            total_liabilities=total_liabilities,
            total_equity=total_equity,
            is_balanced=difference < BALANCE_TOLERANCE,
        )
