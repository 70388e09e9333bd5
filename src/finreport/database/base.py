"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Iterable, Mapping, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from finreport.domain.entities import Account, AccountType, JournalEntry


class Database(ABC):
    """Abstract storage port for finreport.

    Reporting services only read through this interface. Implementations
    must raise ``StorageError`` for failures of the underlying store.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, code: str, name: str, account_type: AccountType) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_code(self, code: str) -> Optional[Account]:
        """Get account by its chart of accounts code."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts ordered by code ascending."""
        pass

    # Journal entry operations
    @abstractmethod
    def create_journal_entry(
        self,
        account_id: int,
        transaction_date: date,
        debit: Optional[Decimal] = None,
        credit: Optional[Decimal] = None,
        description: Optional[str] = None,
        reference_id: Optional[str] = None,
        reference_type: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> int:
        """Append a journal entry. Returns entry ID."""
        pass

    @abstractmethod
    def create_journal_entries(self, entries: Sequence[Mapping[str, Any]]) -> list[int]:
        """Append several journal entries as one unit. Returns entry IDs in order.

        Each item holds the keyword arguments of ``create_journal_entry``.
        Either every entry is stored or none is.
        """
        pass

    @abstractmethod
    def get_journal_entry(self, entry_id: int) -> Optional[JournalEntry]:
        """Get journal entry by ID."""
        pass

    @abstractmethod
    def list_journal_entries(
        self,
        account_id: Optional[int] = None,
        account_ids: Optional[Iterable[int]] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        before_date: Optional[date] = None,
    ) -> list[JournalEntry]:
        """List journal entries with optional filters.

        Entries are always ordered by ``(transaction_date, id)`` ascending.

        Args:
            account_id: Only entries of this account
            account_ids: Only entries of these accounts
            start_date: Inclusive lower bound on transaction date
            end_date: Inclusive upper bound on transaction date
            before_date: Exclusive upper bound on transaction date
        """
        pass
