"""Domain model entities for finreport.

These are pure data classes representing ledger concepts and report shapes,
independent of the database schema. Storage implementations convert their
rows into these entities, and every report is built out of them.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Chart of accounts classification.

    The type decides which side of the ledger increases the balance.
    """

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    COST_OF_SERVICE = "CostOfService"
    EXPENSE = "Expense"

    @property
    def is_debit_normal(self) -> bool:
        return self in DEBIT_NORMAL_TYPES


DEBIT_NORMAL_TYPES = frozenset(
    {AccountType.ASSET, AccountType.EXPENSE, AccountType.COST_OF_SERVICE}
)
BALANCE_SHEET_TYPES = (AccountType.ASSET, AccountType.LIABILITY, AccountType.EQUITY)
INCOME_STATEMENT_TYPES = (
    AccountType.REVENUE,
    AccountType.COST_OF_SERVICE,
    AccountType.EXPENSE,
)

ZERO = Decimal("0")

# Tolerance for balanced checks and zero-balance suppression.
BALANCE_TOLERANCE = Decimal("0.01")


@dataclass(frozen=True)
class Account:
    """Chart of accounts entry."""

    id: int
    code: str
    name: str
    type: AccountType
    created_at: datetime


@dataclass(frozen=True)
class JournalEntry:
    """One posted line of the journal. Never mutated once stored."""

    id: int
    account_id: int
    transaction_date: date
    debit: Optional[Decimal]
    credit: Optional[Decimal]
    description: Optional[str]
    reference_id: Optional[str]
    reference_type: Optional[str]
    created_by: Optional[str]
    created_at: datetime

    @property
    def debit_amount(self) -> Decimal:
        return self.debit if self.debit is not None else ZERO

    @property
    def credit_amount(self) -> Decimal:
        return self.credit if self.credit is not None else ZERO


@dataclass(frozen=True)
class JournalLine:
    """Input line for posting a multi-line transaction."""

    account_id: int
    debit: Optional[Decimal] = None
    credit: Optional[Decimal] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class AccountBalance:
    """Balance of one account as of a date."""

    account_id: int
    account_code: str
    account_name: str
    account_type: AccountType
    total_debit: Decimal
    total_credit: Decimal
    balance: Decimal


@dataclass(frozen=True)
class AccountRef:
    """Account header carried by a general ledger."""

    id: int
    account_code: str
    account_name: str
    account_type: AccountType


@dataclass(frozen=True)
class GeneralLedgerEntry:
    """Ledger row with the running balance after the entry."""

    id: int
    transaction_date: date
    description: Optional[str]
    reference_id: Optional[str]
    reference_type: Optional[str]
    debit: Decimal
    credit: Decimal
    balance: Decimal
    created_by: Optional[str]


@dataclass(frozen=True)
class GeneralLedgerReport:
    account: AccountRef
    opening_balance: Decimal
    entries: tuple[GeneralLedgerEntry, ...]
    closing_balance: Decimal
    total_debit: Decimal
    total_credit: Decimal


@dataclass(frozen=True)
class TrialBalanceEntry:
    account_id: int
    account_code: str
    account_name: str
    account_type: AccountType
    debit: Decimal
    credit: Decimal
    balance: Decimal


@dataclass(frozen=True)
class TrialBalanceReport:
    as_of_date: Optional[date]
    entries: tuple[TrialBalanceEntry, ...]
    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool
    difference: Decimal


@dataclass(frozen=True)
class TypeTotals:
    """Trial balance columns summed for one account type."""

    debit: Decimal = ZERO
    credit: Decimal = ZERO
    balance: Decimal = ZERO


@dataclass(frozen=True)
class StatementLine:
    """Account line of a balance sheet section."""

    account_code: str
    account_name: str
    balance: Decimal


@dataclass(frozen=True)
class BalanceSheetSection:
    accounts: tuple[StatementLine, ...] = ()
    total: Decimal = ZERO


@dataclass(frozen=True)
class BalanceSheetReport:
    as_of_date: Optional[date]
    assets: BalanceSheetSection
    liabilities: BalanceSheetSection
    equity: BalanceSheetSection
    total_assets: Decimal
    total_liabilities_and_equity: Decimal
    is_balanced: bool
    difference: Decimal


@dataclass(frozen=True)
class BalanceSheetSummary:
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    is_balanced: bool


@dataclass(frozen=True)
class IncomeStatementLine:
    """Account line of an income statement section."""

    account_code: str
    account_name: str
    amount: Decimal


@dataclass(frozen=True)
class IncomeStatementSection:
    accounts: tuple[IncomeStatementLine, ...] = ()
    total: Decimal = ZERO


@dataclass(frozen=True)
class ReportPeriod:
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class IncomeStatementReport:
    period: ReportPeriod
    revenue: IncomeStatementSection
    cost_of_service: IncomeStatementSection
    gross_profit: Decimal
    expenses: IncomeStatementSection
    net_profit: Decimal
    gross_profit_margin: Decimal
    net_profit_margin: Decimal


@dataclass(frozen=True)
class IncomeStatementSummary:
    total_revenue: Decimal
    total_cogs: Decimal
    gross_profit: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    gross_profit_margin: Decimal
    net_profit_margin: Decimal


@dataclass(frozen=True)
class EntryTotals:
    """Debit and credit sums over a set of journal entries."""

    debit: Decimal = ZERO
    credit: Decimal = ZERO
