"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class StorageError(RuntimeError):
    """The underlying data store failed (connectivity, query error)."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def account_code_not_found(code: str) -> str:
    """Return message for missing account code."""
    return f"Account with code '{code}' not found"


def journal_entry_not_found(entry_id: int) -> str:
    """Return message for missing journal entry."""
    return f"Journal entry {entry_id} not found"


def duplicate_account_code(code: str) -> str:
    """Return message for duplicate account code."""
    return f"Account with code '{code}' already exists"


def invalid_account_id(value: object) -> str:
    """Return message for a malformed account identifier."""
    return f"Invalid account ID: {value!r}"


def invalid_account_type(value: object) -> str:
    """Return message for an unknown account type."""
    return f"Invalid account type: {value!r}"


def invalid_entry_amounts() -> str:
    """Return message when a journal line is not one-sided."""
    return "Either debit or credit must be provided (but not both)"


def unbalanced_transaction(total_debit: object, total_credit: object) -> str:
    """Return message for a multi-line transaction that does not balance."""
    return (
        f"Transaction is not balanced: debits {total_debit} "
        f"!= credits {total_credit}"
    )
