"""Utility functions for finreport."""

from finreport.utils.date_parser import parse_date, parse_optional_date
from finreport.utils.amount_parser import parse_amount
from finreport.utils.account_resolver import parse_account_id, parse_account_ids, resolve_account

__all__ = [
    "parse_date",
    "parse_optional_date",
    "parse_amount",
    "parse_account_id",
    "parse_account_ids",
    "resolve_account",
]
