"""In-memory database implementation.

Keeps accounts and journal entries in plain lists. Used for tests and for
embedding the reporting services without a SQL engine.
"""

from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Any, Optional, Iterable, Mapping, Sequence

from finreport.database.base import Database
from finreport.domain.entities import Account, AccountType, JournalEntry


class InMemoryDatabase(Database):
    """Database implementation backed by process memory."""

    def __init__(self) -> None:
        self._accounts: dict[int, Account] = {}
        self._entries: dict[int, JournalEntry] = {}
        self._next_account_id = 1
        self._next_entry_id = 1

    def connect(self) -> None:
        """Connect to the database."""
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    def create_account(self, code: str, name: str, account_type: AccountType) -> int:
        """Create a new account. Returns account ID."""
        account_id = self._next_account_id
        self._next_account_id += 1
        self._accounts[account_id] = Account(
            id=account_id,
            code=code,
            name=name,
            type=AccountType(account_type),
            created_at=datetime.now(UTC),
        )
        return account_id

    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        return self._accounts.get(account_id)

    def get_account_by_code(self, code: str) -> Optional[Account]:
        """Get account by its chart of accounts code."""
        for account in self._accounts.values():
            if account.code == code:
                return account
        return None

    def list_accounts(self) -> list[Account]:
        """List all accounts ordered by code."""
        return sorted(self._accounts.values(), key=lambda acc: (acc.code, acc.id))

    # Journal entry operations
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
        entry_ids = self.create_journal_entries(
            [
                dict(
                    account_id=account_id,
                    transaction_date=transaction_date,
                    debit=debit,
                    credit=credit,
                    description=description,
                    reference_id=reference_id,
                    reference_type=reference_type,
                    created_by=created_by,
                )
            ]
        )
        return entry_ids[0]

    def create_journal_entries(self, entries: Sequence[Mapping[str, Any]]) -> list[int]:
        """Append several journal entries. Nothing is stored unless all build."""
        staged: dict[int, JournalEntry] = {}
        for entry_id, fields in enumerate(entries, start=self._next_entry_id):
            staged[entry_id] = self._build_entry(entry_id, fields)

        self._entries.update(staged)
        self._next_entry_id += len(staged)
        return list(staged)

    def _build_entry(self, entry_id: int, fields: Mapping[str, Any]) -> JournalEntry:
        return JournalEntry(
            id=entry_id,
            account_id=fields["account_id"],
            transaction_date=fields["transaction_date"],
            debit=fields.get("debit"),
            credit=fields.get("credit"),
            description=fields.get("description"),
            reference_id=fields.get("reference_id"),
            reference_type=fields.get("reference_type"),
            created_by=fields.get("created_by"),
            created_at=datetime.now(UTC),
        )

    def get_journal_entry(self, entry_id: int) -> Optional[JournalEntry]:
        """Get journal entry by ID."""
        return self._entries.get(entry_id)

    def list_journal_entries(
        self,
        account_id: Optional[int] = None,
        account_ids: Optional[Iterable[int]] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        before_date: Optional[date] = None,
    ) -> list[JournalEntry]:
        """List journal entries with optional filters."""
        wanted_ids = set(account_ids) if account_ids is not None else None

        def matches(entry: JournalEntry) -> bool:
            if account_id is not None and entry.account_id != account_id:
                return False
            if wanted_ids is not None and entry.account_id not in wanted_ids:
                return False
            if start_date is not None and entry.transaction_date < start_date:
                return False
            if end_date is not None and entry.transaction_date > end_date:
                return False
            if before_date is not None and entry.transaction_date >= before_date:
                return False
            return True

        entries = [entry for entry in self._entries.values() if matches(entry)]
        return sorted(entries, key=lambda entry: (entry.transaction_date, entry.id))
