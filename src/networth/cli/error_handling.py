"""CLI error handling helpers."""

import click

from networth.domain.errors import ComputationError, DomainError
from networth.domain.networth import NetWorthService


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def refresh_snapshots(ctx: click.Context) -> None:
    """Recompute the cached snapshot series after a change.

    A failed computation is reported but does not undo the change that
    triggered it.
    """
    try:
        NetWorthService(ctx.obj["db"]).recompute()
    except ComputationError as e:
        click.echo(f"Warning: {e}", err=True)
