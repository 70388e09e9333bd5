"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so column names and storage types
can change without touching the reporting services.
"""

from finreport.domain import entities as domain
from finreport.database.models import (
    Account as ORMAccount,
    JournalEntry as ORMJournalEntry,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        code=orm_account.account_code,
        name=orm_account.account_name,
        type=domain.AccountType(orm_account.account_type),
        created_at=orm_account.created_at,
    )


def journal_entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy JournalEntry model to domain JournalEntry entity."""
    return domain.JournalEntry(
        id=orm_entry.id,
        account_id=orm_entry.account_id,
        transaction_date=orm_entry.transaction_date,
        debit=orm_entry.debit,
        credit=orm_entry.credit,
        description=orm_entry.description,
        reference_id=orm_entry.reference_id,
        reference_type=orm_entry.reference_type,
        created_by=orm_entry.created_by,
        created_at=orm_entry.created_at,
    )
