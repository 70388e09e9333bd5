"""CLI error handling helpers."""

from contextlib import contextmanager
from typing import Iterator

import click

from finreport.domain.errors import DomainError, StorageError
from finreport.utils.serialization import dumps, error_envelope

EXIT_INVALID = 1
EXIT_STORAGE = 2


def handle_domain_error(
    ctx: click.Context, error: DomainError | ValueError, as_json: bool = False
) -> None:
    """Render a domain error and exit with failure."""
    if as_json:
        click.echo(dumps(error_envelope(str(error), error=type(error).__name__)))
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(EXIT_INVALID)


def handle_storage_error(
    ctx: click.Context, error: StorageError, message: str, as_json: bool = False
) -> None:
    """Render a storage failure and exit with the storage exit code."""
    if as_json:
        click.echo(dumps(error_envelope(message, error=str(error))))
    else:
        click.echo(f"Error: {message}: {error}", err=True)
    ctx.exit(EXIT_STORAGE)


@contextmanager
def cli_errors(
    ctx: click.Context, failure_message: str = "Command failed", as_json: bool = False
) -> Iterator[None]:
    """Map domain and storage errors raised in the block to CLI output and exit codes."""
    try:
        yield
    except DomainError as e:
        handle_domain_error(ctx, e, as_json=as_json)
    except StorageError as e:
        handle_storage_error(ctx, e, failure_message, as_json=as_json)
