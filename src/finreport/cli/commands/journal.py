"""Journal entry commands."""

import click
from finreport.cli.date_filters import resolve_cli_date_range
from finreport.cli.error_handling import cli_errors
from finreport.domain.account import AccountService
from finreport.domain.journal import JournalService
from finreport.utils.account_resolver import resolve_account
from finreport.utils.amount_parser import parse_amount


def _parse_amount_option(ctx, label: str, value: str | None):
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


@click.group()
def journal_group():
    """Post and list journal entries."""
    pass


@journal_group.command("post")
@click.argument("account", metavar="ACCOUNT")
@click.option("--date", "transaction_date", required=True, help="Transaction date (YYYY-MM-DD, 'today', ...)")
@click.option("--debit", help="Debit amount")
@click.option("--credit", help="Credit amount")
@click.option("--description", help="Entry description")
@click.option("--reference-id", help="Source document ID")
@click.option("--reference-type", help="Source document type (e.g., invoice, payment)")
@click.option("--created-by", help="User posting the entry")
@click.pass_context
def post_entry(
    ctx,
    account: str,
    transaction_date: str,
    debit: str | None,
    credit: str | None,
    description: str | None,
    reference_id: str | None,
    reference_type: str | None,
    created_by: str | None,
):
    """Post a journal entry to an account.

    ACCOUNT can be an account code or ID. Exactly one of --debit or
    --credit must be given.

    Examples:
        finreport journal post 1101 --date 2024-01-05 --debit 1000
        finreport journal post 4101 --date 2024-01-05 --credit 1000 --description "Invoice 17"
    """
    db = ctx.obj["db"]
    debit_amount = _parse_amount_option(ctx, "debit", debit)
    credit_amount = _parse_amount_option(ctx, "credit", credit)

    with cli_errors(ctx, "Failed to post journal entry"):
        account_id = resolve_account(AccountService(db), account)
        entry_id = JournalService(db).post_entry(
            account_id=account_id,
            transaction_date=transaction_date,
            debit=debit_amount,
            credit=credit_amount,
            description=description,
            reference_id=reference_id,
            reference_type=reference_type,
            created_by=created_by,
        )
        click.echo(f"Posted journal entry {entry_id}")


@journal_group.command("list")
@click.option("--account", help="Account code or ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD)")
@click.option("--end-date", help="End date (YYYY-MM-DD)")
@click.pass_context
def list_entries(ctx, account: str | None, start_date: str | None, end_date: str | None):
    """List journal entries in ledger order."""
    db = ctx.obj["db"]
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date)

    with cli_errors(ctx, "Failed to list journal entries"):
        account_service = AccountService(db)
        account_id = resolve_account(account_service, account) if account else None
        entries = JournalService(db).list_entries(
            account_id=account_id, start_date=start, end_date=end
        )
        codes = {acc.id: acc.code for acc in account_service.list_accounts()}

    if not entries:
        click.echo("No journal entries found.")
        return

    click.echo(f"\nFound {len(entries)} journal entr{'y' if len(entries) == 1 else 'ies'}:")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Account':<10} {'Debit':>15} {'Credit':>15}  {'Description':<35}"
    )
    click.echo("-" * 100)
    for entry in entries:
        debit_str = f"{entry.debit:,.2f}" if entry.debit else ""
        credit_str = f"{entry.credit:,.2f}" if entry.credit else ""
        description = (entry.description or "")[:35]
        click.echo(
            f"{entry.id:<6} {str(entry.transaction_date):<12} {codes.get(entry.account_id, '?'):<10} "
            f"{debit_str:>15} {credit_str:>15}  {description:<35}"
        )


def register_commands(cli):
    """Register journal commands with main CLI."""
    cli.add_command(journal_group, name="journal")
