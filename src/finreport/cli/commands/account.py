"""Chart of accounts commands."""

import click
from finreport.cli.date_filters import resolve_cli_as_of_date
from finreport.cli.error_handling import cli_errors
from finreport.domain.account import AccountService
from finreport.domain.balance import BalanceService
from finreport.domain.entities import AccountType
from finreport.utils.account_resolver import resolve_account
from finreport.utils.serialization import dumps

ACCOUNT_TYPES = [account_type.value for account_type in AccountType]


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="NAME")
@click.option(
    "--type",
    "account_type",
    required=True,
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="Account type",
)
@click.pass_context
def create_account(ctx, code: str, name: str, account_type: str):
    """Create a new account.

    Examples:
        finreport account create 1101 "Cash" --type Asset
        finreport account create 4101 "Service Revenue" --type Revenue
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    with cli_errors(ctx, "Failed to create account"):
        account_id = service.create_account(code=code, name=name, account_type=account_type)
        click.echo(f"Created account {code} '{name}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts ordered by code."""
    db = ctx.obj["db"]
    service = AccountService(db)

    with cli_errors(ctx, "Failed to list accounts"):
        accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.code:<10} | {acc.name:30s} | {acc.type.value}")


@account_group.command("balance")
@click.argument("account", metavar="ACCOUNT")
@click.option("--as-of", help="Balance as of date (YYYY-MM-DD or relative like 'end of last month')")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.pass_context
def account_balance(ctx, account: str, as_of: str | None, as_json: bool):
    """Show the balance of one account.

    ACCOUNT can be an account code or ID.
    """
    db = ctx.obj["db"]
    as_of_date = resolve_cli_as_of_date(ctx, as_of)

    with cli_errors(ctx, "Failed to compute balance", as_json=as_json):
        account_id = resolve_account(AccountService(db), account)
        balance = BalanceService(db).compute_balance(account_id, as_of_date)

    if as_json:
        click.echo(dumps(balance))
        return

    click.echo(f"\n{balance.account_code} {balance.account_name} ({balance.account_type.value})")
    if as_of_date is not None:
        click.echo(f"As of {as_of_date}")
    click.echo("-" * 50)
    click.echo(f"{'Total debit':<20} {balance.total_debit:>25,.2f}")
    click.echo(f"{'Total credit':<20} {balance.total_credit:>25,.2f}")
    click.echo(f"{'Balance':<20} {balance.balance:>25,.2f}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
