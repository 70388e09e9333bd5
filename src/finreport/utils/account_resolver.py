"""Utilities for validating account identifiers and resolving account codes."""

import re
from typing import Iterable

from finreport.domain.account import AccountService
from finreport.domain.errors import (
    NotFoundError,
    ValidationError,
    account_code_not_found,
    invalid_account_id,
)

_ACCOUNT_ID_PATTERN = re.compile(r"[0-9]+")


def parse_account_id(value: int | str) -> int:
    """Validate an account identifier.

    Accepts positive integers and their string form ("12", " 12 "). Only
    ASCII digits count; "²" or "١٢" are rejected.

    Raises:
        ValidationError: If the value is not a positive integer
    """
    if isinstance(value, bool):
        raise ValidationError(invalid_account_id(value))
    if isinstance(value, int):
        account_id = value
    elif isinstance(value, str) and _ACCOUNT_ID_PATTERN.fullmatch(value.strip()):
        account_id = int(value.strip())
    else:
        raise ValidationError(invalid_account_id(value))
    if account_id <= 0:
        raise ValidationError(invalid_account_id(value))
    return account_id


def parse_account_ids(value: str | Iterable[int | str]) -> list[int]:
    """Validate a list of account identifiers.

    A string is split on commas ("1,2,3"). The list must not be empty and
    every item must be a valid account ID.

    Raises:
        ValidationError: If the list is empty or any item is malformed
    """
    items = value.split(",") if isinstance(value, str) else list(value)
    if not items or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Invalid account IDs: no account IDs given")
    return [parse_account_id(item) for item in items]


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve an account code or ID to an account ID.

    Codes take precedence, since charts of accounts commonly use numeric
    codes ("1101") that could also be read as IDs.

    Args:
        account_service: AccountService instance
        account: Account code, or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If neither a code nor an ID matches
    """
    if isinstance(account, str):
        by_code = account_service.get_account_by_code(account.strip())
        if by_code is not None:
            return by_code.id

    try:
        account_id = parse_account_id(account)
    except ValidationError:
        raise NotFoundError(account_code_not_found(str(account)))

    return account_service.get_account(account_id).id
