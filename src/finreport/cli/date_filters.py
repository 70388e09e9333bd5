"""CLI helpers for date range resolution."""

from datetime import date

import click

from finreport.domain.errors import ValidationError
from finreport.utils.date_parser import get_date_range, parse_optional_date


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period: str | None = None,
    parse_dates: bool = True,
) -> tuple[date | str | None, date | str | None]:
    """Resolve CLI date range from a period name or explicit dates.

    With ``parse_dates=False`` explicit dates are returned as given, for
    services that parse and report malformed dates themselves.
    """
    if period and (start_date or end_date):
        click.echo(
            "Error: --period cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if period:
        return get_date_range(period)
    if not parse_dates:
        return start_date, end_date

    start = None
    end = None
    try:
        start = parse_optional_date(start_date, "start date")
        end = parse_optional_date(end_date, "end date")
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    return start, end


def resolve_cli_as_of_date(ctx, as_of: str | None) -> date | None:
    """Resolve an optional --as-of date, exiting on malformed input."""
    try:
        return parse_optional_date(as_of, "as-of date")
    except ValidationError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
