"""Position and price commands."""

import click

from networth.cli.error_handling import handle_domain_error, refresh_snapshots
from networth.domain.month import Month
from networth.domain.positions import PositionService
from networth.utils.amount_parser import parse_amount
from networth.utils.date_parser import parse_date
from networth.utils.formatting import format_currency


@click.group()
def position_group():
    """Manage positions in stocks and funds."""
    pass


@position_group.command("add")
@click.argument("symbol")
@click.argument("shares")
@click.option("--avg-cost", default="0", help="Average cost per share")
@click.option("--account", default="General", help="Account holding the position")
@click.option("--added-date", help="Date the position was opened (counts from that month on)")
@click.option("--notes", default="", help="Notes")
@click.pass_context
def add_position(
    ctx,
    symbol: str,
    shares: str,
    avg_cost: str,
    account: str,
    added_date: str | None,
    notes: str,
):
    """Add a position.

    Examples:
        networth position add AAPL 10 --avg-cost 150 --added-date 2024-01-10
    """
    service = PositionService(ctx.obj["db"])
    try:
        position_id = service.add_position(
            symbol=symbol,
            shares=parse_amount(shares),
            avg_cost=parse_amount(avg_cost),
            account=account,
            added_date=parse_date(added_date) if added_date else None,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Added position {symbol.strip().upper()} (ID: {position_id})")
    refresh_snapshots(ctx)


@position_group.command("list")
@click.pass_context
def list_positions(ctx):
    """List holdings valued at the latest recorded prices."""
    service = PositionService(ctx.obj["db"])
    rows = service.market_values(Month.current())
    if not rows:
        click.echo("No positions found.")
        return

    total = sum(value for _, _, value in rows)
    click.echo(f"\nPositions (total {format_currency(total)}):")
    click.echo("-" * 80)
    click.echo(f"{'Symbol':<10} {'Shares':>12} {'Avg cost':>12} {'Price':>12} {'Value':>14}  Account")
    click.echo("-" * 80)
    for holding, price, value in rows:
        price_str = format_currency(price, places=2) if price is not None else "-"
        click.echo(
            f"{holding.symbol:<10} {holding.shares.normalize():>12} "
            f"{format_currency(holding.avg_cost, places=2):>12} {price_str:>12} "
            f"{format_currency(value):>14}  {holding.account}"
        )

    click.echo("\nLots:")
    for lot in service.list_positions():
        added = f" since {lot.added_date}" if lot.added_date else ""
        click.echo(f"  ID {lot.id}: {lot.symbol} {lot.shares.normalize()} sh @ {format_currency(lot.avg_cost, places=2)}{added}")


@position_group.command("update")
@click.argument("position_id", type=int)
@click.option("--shares", help="New share count")
@click.option("--avg-cost", help="New average cost")
@click.option("--notes", help="New notes")
@click.pass_context
def update_position(ctx, position_id: int, shares: str | None, avg_cost: str | None, notes: str | None):
    """Update a position lot."""
    service = PositionService(ctx.obj["db"])
    try:
        service.update_position(
            position_id,
            shares=parse_amount(shares) if shares is not None else None,
            avg_cost=parse_amount(avg_cost) if avg_cost is not None else None,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated position {position_id}")
    refresh_snapshots(ctx)


@position_group.command("delete")
@click.argument("position_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_position(ctx, position_id: int, yes: bool):
    """Delete a position lot."""
    service = PositionService(ctx.obj["db"])
    if not yes and not click.confirm(f"Are you sure you want to delete position {position_id}?"):
        click.echo("Cancelled.")
        return

    try:
        service.delete_position(position_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Deleted position {position_id}")
    refresh_snapshots(ctx)


@click.group()
def price_group():
    """Record monthly closing prices."""
    pass


@price_group.command("record")
@click.argument("symbol")
@click.argument("month")
@click.argument("close")
@click.pass_context
def record_price(ctx, symbol: str, month: str, close: str):
    """Record the close of SYMBOL for MONTH (e.g. 2024-03).

    Examples:
        networth price record AAPL 2024-03 171.48
    """
    service = PositionService(ctx.obj["db"])
    try:
        bucket = Month.of(parse_date(month))
        service.record_price(symbol, bucket, parse_amount(close))
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Recorded {symbol.strip().upper()} close for {bucket.label()}")
    refresh_snapshots(ctx)


@price_group.command("list")
@click.option("--symbol", help="Only this symbol")
@click.pass_context
def list_prices(ctx, symbol: str | None):
    """List recorded prices."""
    service = PositionService(ctx.obj["db"])
    try:
        prices = service.list_prices(symbol)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if not prices:
        click.echo("No prices recorded.")
        return
    for price in prices:
        click.echo(f"{price.symbol:<10} {price.month.label():<16} {format_currency(price.close, places=2):>12}")


def register_commands(cli):
    """Register position and price commands with main CLI."""
    cli.add_command(position_group, name="position")
    cli.add_command(price_group, name="price")
