"""Income statement domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from finreport.database.base import Database
from finreport.domain.account import AccountService
from finreport.domain.balance import apply_balance_sign, sum_entries_by_account
from finreport.domain.entities import (
    AccountType,
    BALANCE_TOLERANCE,
    EntryTotals,
    INCOME_STATEMENT_TYPES,
    IncomeStatementLine,
    IncomeStatementReport,
    IncomeStatementSection,
    IncomeStatementSummary,
    ReportPeriod,
    ZERO,
)
from finreport.logging_config import get_logger
from finreport.utils.date_parser import parse_optional_date

logger = get_logger(__name__)

HUNDRED = Decimal("100")


def profit_margin(profit: Decimal, revenue: Decimal) -> Decimal:
    """Profit as a percentage of revenue; zero when there is no revenue."""
    if revenue > 0:
        return profit / revenue * HUNDRED
    return ZERO


def build_section(lines: list[IncomeStatementLine]) -> IncomeStatementSection:
    return IncomeStatementSection(
        accounts=tuple(lines),
        total=sum((line.amount for line in lines), ZERO),
    )


class IncomeStatementService:
    """Service for building income statements (profit and loss) over a period."""

    def __init__(self, db: Database):
        """Initialize income statement service.

        Args:
            db: Database instance
        """
        self.db = db
        self.accounts = AccountService(db)

    def get_income_statement(
        self,
        start_date: Optional[date | str] = None,
        end_date: Optional[date | str] = None,
    ) -> IncomeStatementReport:
        """Build the income statement for a period.

        Only Revenue, CostOfService and Expense accounts are considered.
        Amounts cover entries dated within [start_date, end_date]; accounts
        whose amount is below the tolerance are left out.

        Args:
            start_date: Optional inclusive start of the period
            end_date: Optional inclusive end of the period

        Returns:
            IncomeStatementReport

        Raises:
            ValidationError: If a date is malformed
        """
        start_date = parse_optional_date(start_date, "start date")
        end_date = parse_optional_date(end_date, "end date")

        accounts = [
            account
            for account in self.accounts.list_accounts()
            if account.type in INCOME_STATEMENT_TYPES
        ]
        totals = sum_entries_by_account(
            self.db.list_journal_entries(
                account_ids=[account.id for account in accounts],
                start_date=start_date,
                end_date=end_date,
            )
        )

        sections: dict[AccountType, list[IncomeStatementLine]] = {
            account_type: [] for account_type in INCOME_STATEMENT_TYPES
        }
        for account in accounts:
            account_totals = totals.get(account.id, EntryTotals())
            amount = apply_balance_sign(account.type, account_totals.debit, account_totals.credit)
            if abs(amount) < BALANCE_TOLERANCE:
                continue
            sections[account.type].append(
                IncomeStatementLine(
                    account_code=account.code,
                    account_name=account.name,
                    amount=amount,
                )
            )

        revenue = build_section(sections[AccountType.REVENUE])
        cost_of_service = build_section(sections[AccountType.COST_OF_SERVICE])
        expenses = build_section(sections[AccountType.EXPENSE])

        gross_profit = revenue.total - cost_of_service.total
        net_profit = gross_profit - expenses.total

        logger.debug(
            "Income statement %s..%s: revenue %s, net profit %s",
            start_date,
            end_date,
            revenue.total,
            net_profit,
        )

        return IncomeStatementReport(
            period=ReportPeriod(start_date=start_date, end_date=end_date),
            revenue=revenue,
            cost_of_service=cost_of_service,
            gross_profit=gross_profit,
            expenses=expenses,
            net_profit=net_profit,
            gross_profit_margin=profit_margin(gross_profit, revenue.total),
            net_profit_margin=profit_margin(net_profit, revenue.total),
        )

    def get_income_statement_summary(
        self,
        start_date: Optional[date | str] = None,
        end_date: Optional[date | str] = None,
    ) -> IncomeStatementSummary:
        """Totals and margins of the income statement, without line items."""
        statement = self.get_income_statement(start_date, end_date)
        return IncomeStatementSummary(
            total_revenue=statement.revenue.total,
            total_cogs=statement.cost_of_service.total,
            gross_profit=statement.gross_profit,
            total_expenses=statement.expenses.total,
            net_profit=statement.net_profit,
            gross_profit_margin=statement.gross_profit_margin,
            net_profit_margin=statement.net_profit_margin,
        )
