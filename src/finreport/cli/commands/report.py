"""Financial report commands."""

from decimal import Decimal

import click
from finreport.cli.date_filters import resolve_cli_date_range
from finreport.cli.error_handling import cli_errors
from finreport.domain.account import AccountService
from finreport.domain.balance_sheet import BalanceSheetService
from finreport.domain.entities import (
    BalanceSheetSection,
    GeneralLedgerReport,
    IncomeStatementSection,
)
from finreport.domain.general_ledger import GeneralLedgerService
from finreport.domain.income_statement import IncomeStatementService
from finreport.domain.trial_balance import TrialBalanceService
from finreport.utils.account_resolver import resolve_account
from finreport.utils.date_parser import PERIODS
from finreport.utils.serialization import dumps, success_envelope

LINE_WIDTH = 80


def _money(amount: Decimal) -> str:
    return f"{amount:,.2f}"


def period_options(func):
    """Attach --start-date, --end-date and --period to a period report command."""
    func = click.option(
        "--period",
        type=click.Choice(PERIODS),
        help="Named reporting period (cannot be combined with explicit dates)",
    )(func)
    func = click.option("--end-date", help="End date, inclusive (YYYY-MM-DD or relative)")(func)
    func = click.option("--start-date", help="Start date, inclusive (YYYY-MM-DD or relative)")(func)
    return func


def as_of_option(func):
    return click.option(
        "--as-of", help="Report as of date, inclusive (YYYY-MM-DD or relative like 'end of last month')"
    )(func)


def json_option(func):
    return click.option("--json", "as_json", is_flag=True, help="Output JSON")(func)


def _echo_ledger(report: GeneralLedgerReport):
    account = report.account
    click.echo(f"\nGeneral Ledger: {account.account_code} {account.account_name} ({account.account_type.value})")
    click.echo("-" * (LINE_WIDTH + 20))
    click.echo(f"{'Date':<12} {'Description':<30} {'Debit':>15} {'Credit':>15} {'Balance':>18}")
    click.echo("-" * (LINE_WIDTH + 20))
    click.echo(f"{'':<12} {'Opening balance':<30} {'':>15} {'':>15} {_money(report.opening_balance):>18}")
    for row in report.entries:
        debit_str = _money(row.debit) if row.debit else ""
        credit_str = _money(row.credit) if row.credit else ""
        description = (row.description or "")[:30]
        click.echo(
            f"{str(row.transaction_date):<12} {description:<30} "
            f"{debit_str:>15} {credit_str:>15} {_money(row.balance):>18}"
        )
    click.echo("-" * (LINE_WIDTH + 20))
    click.echo(
        f"{'':<12} {'Totals':<30} {_money(report.total_debit):>15} "
        f"{_money(report.total_credit):>15} {_money(report.closing_balance):>18}"
    )


def _echo_section(title: str, section: BalanceSheetSection | IncomeStatementSection, amount_field: str):
    click.echo(f"\n{title}")
    if not section.accounts:
        click.echo("  (none)")
    for line in section.accounts:
        label = f"{line.account_code} {line.account_name}"
        click.echo(f"  {label:<50} {_money(getattr(line, amount_field)):>25}")
    click.echo(f"  {'Total ' + title:<50} {_money(section.total):>25}")


def _echo_balance_status(is_balanced: bool, difference: Decimal):
    if is_balanced:
        click.echo("\nBalanced.")
    else:
        click.echo(f"\nOUT OF BALANCE by {_money(difference)}")


@click.group()
def report_group():
    """Generate financial reports."""
    pass


@report_group.command("general-ledger")
@click.argument("account", metavar="ACCOUNT")
@period_options
@json_option
@click.pass_context
def general_ledger(ctx, account: str, start_date, end_date, period, as_json: bool):
    """Show the general ledger of one account.

    ACCOUNT can be an account code or ID.

    Examples:
        finreport report general-ledger 1101 --start-date 2024-01-01 --end-date 2024-01-31
        finreport report general-ledger 3 --period last-month --json
    """
    db = ctx.obj["db"]
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period, parse_dates=False
    )

    with cli_errors(ctx, "Failed to build general ledger", as_json=as_json):
        account_id = resolve_account(AccountService(db), account)
        report = GeneralLedgerService(db).get_general_ledger(account_id, start, end)

    if as_json:
        click.echo(dumps(report))
        return
    _echo_ledger(report)


@report_group.command("general-ledger-bulk")
@click.argument("account_ids", metavar="ACCOUNT_IDS")
@period_options
@json_option
@click.pass_context
def general_ledger_bulk(ctx, account_ids: str, start_date, end_date, period, as_json: bool):
    """Show general ledgers for several accounts.

    ACCOUNT_IDS is a comma-separated list of account IDs, e.g. "1,2,5".
    Unknown accounts are left out of the output.
    """
    db = ctx.obj["db"]
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period, parse_dates=False
    )

    with cli_errors(ctx, "Failed to build general ledgers", as_json=as_json):
        reports = GeneralLedgerService(db).get_general_ledger_bulk(account_ids, start, end)

    if as_json:
        click.echo(dumps(success_envelope(reports)))
        return
    if not reports:
        click.echo("No matching accounts found.")
        return
    for report in reports:
        _echo_ledger(report)


@report_group.command("trial-balance")
@as_of_option
@json_option
@click.pass_context
def trial_balance(ctx, as_of: str | None, as_json: bool):
    """Show the trial balance of all accounts."""
    db = ctx.obj["db"]

    with cli_errors(ctx, "Failed to build trial balance", as_json=as_json):
        report = TrialBalanceService(db).get_trial_balance(as_of)

    if as_json:
        click.echo(dumps(report))
        return

    title = "Trial Balance"
    if report.as_of_date is not None:
        title += f" as of {report.as_of_date}"
    click.echo(f"\n{title}")
    click.echo("-" * (LINE_WIDTH + 12))
    click.echo(f"{'Code':<10} {'Account':<30} {'Type':<14} {'Debit':>17} {'Credit':>17}")
    click.echo("-" * (LINE_WIDTH + 12))
    for entry in report.entries:
        debit_str = _money(entry.debit) if entry.debit else ""
        credit_str = _money(entry.credit) if entry.credit else ""
        click.echo(
            f"{entry.account_code:<10} {entry.account_name[:30]:<30} {entry.account_type.value:<14} "
            f"{debit_str:>17} {credit_str:>17}"
        )
    click.echo("-" * (LINE_WIDTH + 12))
    click.echo(
        f"{'Total':<10} {'':<30} {'':<14} {_money(report.total_debit):>17} {_money(report.total_credit):>17}"
    )
    _echo_balance_status(report.is_balanced, report.difference)


@report_group.command("trial-balance-by-type")
@as_of_option
@json_option
@click.pass_context
def trial_balance_by_type(ctx, as_of: str | None, as_json: bool):
    """Show trial balance totals grouped by account type."""
    db = ctx.obj["db"]

    with cli_errors(ctx, "Failed to build trial balance", as_json=as_json):
        totals = TrialBalanceService(db).get_trial_balance_by_type(as_of)

    if as_json:
        click.echo(dumps(success_envelope(totals)))
        return
    if not totals:
        click.echo("No accounts found.")
        return

    click.echo(f"\n{'Type':<16} {'Debit':>20} {'Credit':>20} {'Balance':>20}")
    click.echo("-" * LINE_WIDTH)
    for account_type, type_totals in totals.items():
        click.echo(
            f"{account_type.value:<16} {_money(type_totals.debit):>20} "
            f"{_money(type_totals.credit):>20} {_money(type_totals.balance):>20}"
        )


@report_group.command("balance-sheet")
@as_of_option
@json_option
@click.pass_context
def balance_sheet(ctx, as_of: str | None, as_json: bool):
    """Show the balance sheet (assets, liabilities, equity)."""
    db = ctx.obj["db"]

    with cli_errors(ctx, "Failed to build balance sheet", as_json=as_json):
        report = BalanceSheetService(db).get_balance_sheet(as_of)

    if as_json:
        click.echo(dumps(report))
        return

    title = "Balance Sheet"
    if report.as_of_date is not None:
        title += f" as of {report.as_of_date}"
    click.echo(f"\n{title}")
    click.echo("=" * LINE_WIDTH)
    _echo_section("Assets", report.assets, "balance")
    _echo_section("Liabilities", report.liabilities, "balance")
    _echo_section("Equity", report.equity, "balance")
    click.echo("\n" + "-" * LINE_WIDTH)
    click.echo(f"  {'Total Assets':<50} {_money(report.total_assets):>25}")
    click.echo(f"  {'Total Liabilities and Equity':<50} {_money(report.total_liabilities_and_equity):>25}")
    _echo_balance_status(report.is_balanced, report.difference)


@report_group.command("balance-sheet-summary")
@as_of_option
@json_option
@click.pass_context
def balance_sheet_summary(ctx, as_of: str | None, as_json: bool):
    """Show balance sheet totals only."""
    db = ctx.obj["db"]

    with cli_errors(ctx, "Failed to build balance sheet summary", as_json=as_json):
        summary = BalanceSheetService(db).get_balance_sheet_summary(as_of)

    if as_json:
        click.echo(dumps(success_envelope(summary)))
        return

    click.echo(f"\n{'Total Assets':<30} {_money(summary.total_assets):>25}")
    click.echo(f"{'Total Liabilities':<30} {_money(summary.total_liabilities):>25}")
    click.echo(f"{'Total Equity':<30} {_money(summary.total_equity):>25}")
    click.echo("\nBalanced." if summary.is_balanced else "\nOUT OF BALANCE")


@report_group.command("income-statement")
@period_options
@json_option
@click.pass_context
def income_statement(ctx, start_date, end_date, period, as_json: bool):
    """Show the income statement for a period.

    Examples:
        finreport report income-statement --start-date 2024-01-01 --end-date 2024-12-31
        finreport report income-statement --period this-quarter
    """
    db = ctx.obj["db"]
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period, parse_dates=False
    )

    with cli_errors(ctx, "Failed to build income statement", as_json=as_json):
        report = IncomeStatementService(db).get_income_statement(start, end)

    if as_json:
        click.echo(dumps(report))
        return

    period_label = f"{report.period.start_date or 'beginning'} to {report.period.end_date or 'today'}"
    click.echo(f"\nIncome Statement ({period_label})")
    click.echo("=" * LINE_WIDTH)
    _echo_section("Revenue", report.revenue, "amount")
    _echo_section("Cost of Service", report.cost_of_service, "amount")
    click.echo(f"\n  {'Gross Profit':<50} {_money(report.gross_profit):>25}")
    _echo_section("Expenses", report.expenses, "amount")
    click.echo("\n" + "-" * LINE_WIDTH)
    click.echo(f"  {'Net Profit':<50} {_money(report.net_profit):>25}")
    click.echo(f"  {'Gross Profit Margin':<50} {report.gross_profit_margin:>24.2f}%")
    click.echo(f"  {'Net Profit Margin':<50} {report.net_profit_margin:>24.2f}%")


@report_group.command("income-statement-summary")
@period_options
@json_option
@click.pass_context
def income_statement_summary(ctx, start_date, end_date, period, as_json: bool):
    """Show income statement totals only."""
    db = ctx.obj["db"]
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period, parse_dates=False
    )

    with cli_errors(ctx, "Failed to build income statement summary", as_json=as_json):
        summary = IncomeStatementService(db).get_income_statement_summary(start, end)

    if as_json:
        click.echo(dumps(success_envelope(summary)))
        return

    click.echo(f"\n{'Total Revenue':<30} {_money(summary.total_revenue):>25}")
    click.echo(f"{'Total Cost of Service':<30} {_money(summary.total_cogs):>25}")
    click.echo(f"{'Gross Profit':<30} {_money(summary.gross_profit):>25}")
    click.echo(f"{'Total Expenses':<30} {_money(summary.total_expenses):>25}")
    click.echo(f"{'Net Profit':<30} {_money(summary.net_profit):>25}")
    click.echo(f"{'Gross Profit Margin':<30} {summary.gross_profit_margin:>24.2f}%")
    click.echo(f"{'Net Profit Margin':<30} {summary.net_profit_margin:>24.2f}%")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
