"""Journal posting domain service.

Entries are append-only: this service creates and reads them, and nothing
in finreport updates or deletes a posted entry.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from finreport.database.base import Database
from finreport.domain.account import AccountService
from finreport.domain.entities import JournalEntry, JournalLine, ZERO
from finreport.domain.errors import (
    NotFoundError,
    ValidationError,
    invalid_entry_amounts,
    journal_entry_not_found,
    unbalanced_transaction,
)
from finreport.logging_config import get_logger
from finreport.utils.account_resolver import parse_account_id
from finreport.utils.date_parser import parse_optional_date

logger = get_logger(__name__)


def _validate_amounts(
    debit: Optional[Decimal], credit: Optional[Decimal]
) -> tuple[Optional[Decimal], Optional[Decimal]]:
    """Require exactly one positive amount; zero counts as absent."""
    debit = debit if debit else None
    credit = credit if credit else None
    if (debit is None) == (credit is None):
        raise ValidationError(invalid_entry_amounts())
    amount = debit if debit is not None else credit
    if amount < 0:
        raise ValidationError(f"Amount must be positive, got {amount}")
    return debit, credit


class JournalService:
    """Service for posting and reading journal entries."""

    def __init__(self, db: Database):
        """Initialize journal service.

        Args:
            db: Database instance
        """
        self.db = db
        self.accounts = AccountService(db)

    def post_entry(
        self,
        account_id: int | str,
        transaction_date: date | str,
        debit: Optional[Decimal] = None,
        credit: Optional[Decimal] = None,
        description: Optional[str] = None,
        reference_id: Optional[str] = None,
        reference_type: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> int:
        """Post a single journal line.

        Args:
            account_id: Account ID
            transaction_date: Date the economic event is recognized
            debit: Debit amount (exclusive with credit)
            credit: Credit amount (exclusive with debit)
            description: Optional description
            reference_id: Optional source document ID
            reference_type: Optional source document type
            created_by: Optional user name

        Returns:
            Journal entry ID

        Raises:
            ValidationError: If the date is missing or the amounts are not one-sided
            NotFoundError: If the account does not exist
        """
        account_id = parse_account_id(account_id)
        posted_on = self._require_date(transaction_date)
        debit, credit = _validate_amounts(debit, credit)
        account = self.accounts.get_account(account_id)

        entry_id = self.db.create_journal_entry(
            account_id=account.id,
            transaction_date=posted_on,
            debit=debit,
            credit=credit,
            description=description,
            reference_id=reference_id,
            reference_type=reference_type,
            created_by=created_by,
        )
        logger.info(
            "Posted journal entry %s to %s on %s (debit=%s, credit=%s)",
            entry_id,
            account.code,
            posted_on,
            debit,
            credit,
        )
        return entry_id

    def post_transaction(
        self,
        transaction_date: date | str,
        lines: Sequence[JournalLine],
        description: Optional[str] = None,
        reference_id: Optional[str] = None,
        reference_type: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> list[int]:
        """Post a balanced set of journal lines sharing date and reference.

        Every line is validated and the debit and credit totals must match
        before anything is written. The lines are then stored together, so a
        storage failure leaves none of them behind.

        Returns:
            Journal entry IDs in line order

        Raises:
            ValidationError: If there are fewer than two lines, a line is
                invalid, or the lines do not balance
            NotFoundError: If a line refers to an unknown account
            StorageError: If the store fails; no line is kept
        """
        posted_on = self._require_date(transaction_date)
        if len(lines) < 2:
            raise ValidationError("A transaction needs at least two lines")

        rows = []
        total_debit = ZERO
        total_credit = ZERO
        for line in lines:
            account = self.accounts.get_account(parse_account_id(line.account_id))
            debit, credit = _validate_amounts(line.debit, line.credit)
            total_debit += debit or ZERO
            total_credit += credit or ZERO
            rows.append(
                dict(
                    account_id=account.id,
                    transaction_date=posted_on,
                    debit=debit,
                    credit=credit,
                    description=line.description or description,
                    reference_id=reference_id,
                    reference_type=reference_type,
                    created_by=created_by,
                )
            )
        if total_debit != total_credit:
            raise ValidationError(unbalanced_transaction(total_debit, total_credit))

        entry_ids = self.db.create_journal_entries(rows)
        logger.info(
            "Posted transaction of %s lines on %s (total=%s, entries=%s)",
            len(entry_ids),
            posted_on,
            total_debit,
            entry_ids,
        )
        return entry_ids

    def get_entry(self, entry_id: int) -> JournalEntry:
        """Get journal entry by ID.

        Raises:
            NotFoundError: If the entry does not exist
        """
        entry = self.db.get_journal_entry(entry_id)
        if entry is None:
            raise NotFoundError(journal_entry_not_found(entry_id))
        return entry

    def list_entries(
        self,
        account_id: Optional[int | str] = None,
        start_date: Optional[date | str] = None,
        end_date: Optional[date | str] = None,
    ) -> list[JournalEntry]:
        """List journal entries in ledger order with optional filters."""
        if account_id is not None:
            account_id = parse_account_id(account_id)
        return self.db.list_journal_entries(
            account_id=account_id,
            start_date=parse_optional_date(start_date, "start date"),
            end_date=parse_optional_date(end_date, "end date"),
        )

    def _require_date(self, value: date | str) -> date:
        posted_on = parse_optional_date(value, "transaction date")
        if posted_on is None:
            raise ValidationError("Transaction date is required")
        return posted_on
