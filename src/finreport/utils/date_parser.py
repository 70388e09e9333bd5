"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from finreport.domain.errors import ValidationError

PERIODS = (
    "this-month",
    "this-quarter",
    "this-year",
    "last-month",
    "last-quarter",
    "last-year",
)


def _quarter_start(day: date) -> date:
    return day.replace(month=3 * ((day.month - 1) // 3) + 1, day=1)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports ISO and other absolute formats ("2024-01-15", "January 15, 2024")
    as well as a few relative forms used for report cut-offs:
    "today", "yesterday", "start of month", "end of last month",
    "start of year", "end of last year", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()
    month_start = today.replace(day=1)
    year_start = today.replace(month=1, day=1)

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "start of month": month_start,
        "this month": month_start,
        "last month": month_start - relativedelta(months=1),
        "end of last month": month_start - timedelta(days=1),
        "start of quarter": _quarter_start(today),
        "end of last quarter": _quarter_start(today) - timedelta(days=1),
        "start of year": year_start,
        "this year": year_start,
        "last year": year_start - relativedelta(years=1),
        "end of last year": year_start - timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_optional_date(value: Optional[date | str], field: str = "date") -> Optional[date]:
    """Normalize an optional date bound.

    None and blank strings mean "no bound". Date objects pass through
    (datetimes are truncated to their date). Any other string must parse.

    Raises:
        ValidationError: If a non-blank string cannot be parsed
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return parse_date(value)
        except ValueError as e:
            raise ValidationError(f"Invalid {field}: {e}") from e
    raise ValidationError(f"Invalid {field}: {value!r}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a reporting period.

    "this-*" periods end today; "last-*" periods cover the whole previous
    month, quarter or year.

    Args:
        period: One of PERIODS

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    elif period == "this-quarter":
        return (_quarter_start(today), today)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "last-month":
        # Last day of last month is the day before the first of this month
        end_date = today.replace(day=1) - timedelta(days=1)
        return (end_date.replace(day=1), end_date)

    elif period == "last-quarter":
        end_date = _quarter_start(today) - timedelta(days=1)
        return (_quarter_start(end_date), end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        return (start_date, start_date.replace(month=12, day=31))

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
        )
