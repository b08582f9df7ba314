"""Valuation management commands."""

import click
from datetime import date

from networth.cli.error_handling import handle_domain_error, refresh_snapshots
from networth.domain.valuation import ValuationService
from networth.utils.amount_parser import parse_amount
from networth.utils.date_parser import parse_date
from networth.utils.formatting import format_currency

KIND_CHOICE = click.Choice(["asset", "liability"], case_sensitive=False)


@click.group()
def valuation_group():
    """Manage valuations of assets and liabilities."""
    pass


@valuation_group.command("add")
@click.argument("kind", type=KIND_CHOICE)
@click.argument("name")
@click.argument("value")
@click.option("--date", "date_str", help="Valuation date (YYYY-MM-DD or relative like 'today'); defaults to today")
@click.option("--desc", default="", help="Optional note")
@click.pass_context
def add_valuation(ctx, kind: str, name: str, value: str, date_str: str | None, desc: str):
    """Record what an asset or liability is worth.

    Examples:
        networth valuation add asset House 440000 --date 2024-01-01
        networth valuation add liability Mortgage 280000
    """
    db = ctx.obj["db"]
    service = ValuationService(db)

    try:
        amount = parse_amount(value)
        when = parse_date(date_str) if date_str else date.today()
        valuation_id = service.add_valuation(
            kind=kind, name=name, value=amount, date=when, desc=desc
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Recorded {kind.lower()} '{name.strip()}' at {format_currency(amount)} on {when} (ID: {valuation_id})")
    refresh_snapshots(ctx)


@valuation_group.command("list")
@click.option("--kind", type=KIND_CHOICE, help="Only assets or only liabilities")
@click.option("--name", help="Only this item")
@click.pass_context
def list_valuations(ctx, kind: str | None, name: str | None):
    """List valuation points, newest first."""
    service = ValuationService(ctx.obj["db"])
    points = service.list_valuations(kind=kind, name=name)
    if not points:
        click.echo("No valuations found.")
        return

    click.echo(f"\nFound {len(points)} valuation(s):")
    click.echo("-" * 90)
    click.echo(f"{'ID':<6} {'Date':<12} {'Kind':<10} {'Name':<24} {'Value':>14}  Note")
    click.echo("-" * 90)
    for point in points:
        click.echo(
            f"{point.id:<6} {point.date:%Y-%m-%d}   {point.kind.value:<10} {point.name[:24]:<24} "
            f"{format_currency(point.value):>14}  {point.desc}"
        )


@valuation_group.command("items")
@click.pass_context
def list_items(ctx):
    """Show the latest value of every tracked item."""
    service = ValuationService(ctx.obj["db"])
    items = service.list_items()
    if not items:
        click.echo("No items yet. Add one with 'networth valuation add'.")
        return

    click.echo("\nItems:")
    click.echo("-" * 70)
    for point in items:
        click.echo(
            f"{point.kind.value:<10} {point.name[:24]:<24} {format_currency(point.value):>14}  "
            f"as of {point.effective_month.label()}"
        )


@valuation_group.command("update")
@click.argument("valuation_id", type=int)
@click.option("--value", help="New value")
@click.option("--desc", help="New note")
@click.pass_context
def update_valuation(ctx, valuation_id: int, value: str | None, desc: str | None):
    """Change the value or note of a valuation point."""
    if value is None and desc is None:
        click.echo("Error: Nothing to update; pass --value and/or --desc.", err=True)
        ctx.exit(1)

    service = ValuationService(ctx.obj["db"])
    try:
        amount = parse_amount(value) if value is not None else None
        service.update_valuation(valuation_id, value=amount, desc=desc)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated valuation {valuation_id}")
    if amount is not None:
        refresh_snapshots(ctx)


@valuation_group.command("delete")
@click.argument("valuation_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_valuation(ctx, valuation_id: int, yes: bool):
    """Delete a valuation point."""
    service = ValuationService(ctx.obj["db"])
    if not yes and not click.confirm(f"Delete valuation {valuation_id}?"):
        click.echo("Cancelled.")
        return

    try:
        service.delete_valuation(valuation_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Deleted valuation {valuation_id}")
    refresh_snapshots(ctx)


def register_commands(cli):
    """Register valuation commands with main CLI."""
    cli.add_command(valuation_group, name="valuation")
