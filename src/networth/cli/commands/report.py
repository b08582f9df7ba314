"""Net worth report commands."""

import click

from networth.cli.error_handling import handle_domain_error
from networth.domain.entities import RangeOption
from networth.domain.errors import ComputationError
from networth.domain.networth import NetWorthService
from networth.domain.snapshot_engine import ZERO
from networth.utils.formatting import format_currency, format_short_currency

RANGE_CHOICE = click.Choice([option.value for option in RangeOption], case_sensitive=False)
BAR_WIDTH = 30


@click.command("recompute")
@click.pass_context
def recompute(ctx):
    """Rebuild the monthly snapshot cache from all records."""
    service = NetWorthService(ctx.obj["db"])
    try:
        snapshots = service.recompute()
    except ComputationError as e:
        handle_domain_error(ctx, e)
        return

    if not snapshots:
        click.echo("No valuations or transactions yet; nothing to compute.")
        return
    click.echo(f"Computed {len(snapshots)} monthly snapshots ({snapshots[0].date.label()} - {snapshots[-1].date.label()})")


@click.command("history")
@click.option("--range", "range_option", type=RANGE_CHOICE, default="12m", show_default=True, help="Time window")
@click.pass_context
def history(ctx, range_option: str):
    """Show net worth month by month.

    Examples:
        networth history --range ytd
    """
    service = NetWorthService(ctx.obj["db"])
    try:
        service.ensure_current()
    except ComputationError as e:
        handle_domain_error(ctx, e)
        return

    snapshots = service.get_snapshots(range_option.lower())
    if not snapshots:
        click.echo("No snapshots found. Add a valuation or a transaction first.")
        return

    show_positions = any(s.positions_value is not None for s in snapshots)
    peak = max(abs(s.net_worth) for s in snapshots)

    header = f"{'Month':<16} {'Assets':>14} {'Liabilities':>14} {'Net worth':>14}"
    if show_positions:
        header += f" {'Positions':>12}"
    click.echo(header)
    click.echo("-" * len(header))
    for snap in snapshots:
        line = (
            f"{snap.date.label():<16} {format_currency(snap.assets):>14} "
            f"{format_currency(snap.liabilities):>14} {format_currency(snap.net_worth):>14}"
        )
        if show_positions:
            line += f" {format_currency(snap.positions_value or ZERO):>12}"
        bar = int(BAR_WIDTH * abs(snap.net_worth) / peak) if peak else 0
        line += f"  {('#' if snap.net_worth >= 0 else '-') * bar} {format_short_currency(snap.net_worth)}"
        click.echo(line)


@click.command("summary")
@click.pass_context
def summary(ctx):
    """Show current net worth, assets and liabilities."""
    service = NetWorthService(ctx.obj["db"])
    try:
        service.ensure_current()
        current = service.get_summary()
    except ComputationError as e:
        handle_domain_error(ctx, e)
        return

    as_of = current.month.label() if current.month else "no data"
    click.echo(f"Net worth ({as_of}): {format_currency(current.net_worth)}")
    assets = format_currency(current.assets)
    if current.positions_value:
        assets += f" (pos {format_currency(current.positions_value)})"
    click.echo(f"  Assets:      {assets}")
    click.echo(f"  Liabilities: {format_currency(current.liabilities)}")


@click.command("recent")
@click.option("--limit", type=int, default=8, show_default=True, help="Number of entries")
@click.pass_context
def recent(ctx, limit: int):
    """Show the latest valuations and transactions."""
    items = NetWorthService(ctx.obj["db"]).recent_activity(limit=limit)
    if not items:
        click.echo("No activity yet.")
        return

    for item in items:
        if item.source == "transaction":
            amount = ("+" if item.amount >= 0 else "") + format_currency(item.amount, places=2)
        else:
            amount = format_currency(item.amount)
        click.echo(f"{item.date:%Y-%m-%d}  {item.badge:<10} {item.label[:30]:<30} {amount:>14}")


@click.command("seed-demo")
@click.pass_context
def seed_demo(ctx):
    """Load a year of demo valuations into an empty database."""
    service = NetWorthService(ctx.obj["db"])
    inserted = service.seed_demo()
    if not inserted:
        click.echo("Valuations already exist; demo data not added.")
        return
    service.recompute()
    click.echo(f"Added {inserted} demo valuations.")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(recompute)
    cli.add_command(history)
    cli.add_command(summary)
    cli.add_command(recent)
    cli.add_command(seed_demo)
