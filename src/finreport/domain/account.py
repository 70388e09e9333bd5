"""Account directory domain service."""

from typing import Optional

from finreport.database.base import Database
from finreport.domain.entities import Account as AccountEntity, AccountType
from finreport.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    duplicate_account_code,
    invalid_account_type,
)


def parse_account_type(value: AccountType | str) -> AccountType:
    """Resolve an account type from its value or name, case-insensitively.

    Raises:
        ValidationError: If the value is not a known account type
    """
    if isinstance(value, AccountType):
        return value
    normalized = str(value).strip().replace("_", "").replace(" ", "").lower()
    for account_type in AccountType:
        if normalized in (account_type.value.lower(), account_type.name.replace("_", "").lower()):
            return account_type
    raise ValidationError(invalid_account_type(value))


class AccountService:
    """Read access to the chart of accounts, plus account creation."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, code: str, name: str, account_type: AccountType | str) -> int:
        """Create a new account.

        Args:
            code: Chart of accounts code (sort key)
            name: Display name
            account_type: Account type or its string value

        Returns:
            Account ID

        Raises:
            ValidationError: If code or name is empty or the type is unknown
            ConflictError: If an account with the same code exists
        """
        code = code.strip()
        name = name.strip()
        if not code:
            raise ValidationError("Account code cannot be empty")
        if not name:
            raise ValidationError("Account name cannot be empty")
        resolved_type = parse_account_type(account_type)

        if self.db.get_account_by_code(code) is not None:
            raise ConflictError(duplicate_account_code(code))

        return self.db.create_account(code=code, name=name, account_type=resolved_type)

    def find_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def get_account(self, account_id: int) -> AccountEntity:
        """Get account by ID.

        Raises:
            NotFoundError: If the account does not exist
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def get_account_by_code(self, code: str) -> Optional[AccountEntity]:
        """Get account by code, or None if not found."""
        return self.db.get_account_by_code(code)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts ordered by code ascending."""
        return self.db.list_accounts()
