"""Transaction management commands."""

import click
from decimal import Decimal

from networth.cli.error_handling import handle_domain_error, refresh_snapshots
from networth.domain.transaction import TransactionService
from networth.utils.amount_parser import parse_amount
from networth.utils.date_parser import parse_date
from networth.utils.formatting import format_currency


def _signed(amount) -> str:
    return ("+" if amount >= 0 else "") + format_currency(amount, places=2)


@click.group()
def transaction_group():
    """Manage cash transactions."""
    pass


@transaction_group.command("add")
@click.option("--date", "date_str", required=True, help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--amount", required=True, help="Transaction amount (e.g., 1000.00 income or -50.00 expense)")
@click.option("--description", default="", help="Transaction description")
@click.option("--category", help="Category (defaults to Uncategorized)")
@click.option("--account", help="Account (defaults to General)")
@click.option("--notes", default="", help="Notes")
@click.pass_context
def add_transaction(
    ctx,
    date_str: str,
    amount: str,
    description: str,
    category: str | None,
    account: str | None,
    notes: str,
):
    """Add a transaction manually.

    Examples:
        networth transaction add --date 2024-01-15 --amount -50.00 --description "Grocery store"
        networth transaction add --date today --amount 2500 --category Salary
    """
    service = TransactionService(ctx.obj["db"])

    try:
        txn_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = service.create_transaction(
            date=txn_date,
            amount=txn_amount,
            description=description,
            category=category,
            account=account,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: {_signed(txn_amount)}")
    if description:
        click.echo(f"  Description: {description}")
    refresh_snapshots(ctx)


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--category", help="Only this category")
@click.option("--account", help="Only this account")
@click.option("--search", help="Text to find in description or notes")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    category: str | None,
    account: str | None,
    search: str | None,
):
    """List transactions, newest first."""
    service = TransactionService(ctx.obj["db"])

    start = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    end = None
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    transactions = service.list_transactions(
        start_date=start, end_date=end, category=category, account=account, search=search
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Amount':>14}  {'Category':<20} {'Account':<14} {'Description':<30}"
    )
    click.echo("-" * 100)
    for txn in transactions:
        click.echo(
            f"{txn.id:<6} {txn.date:%Y-%m-%d}   {_signed(txn.amount):>14}  {txn.category[:20]:<20} "
            f"{txn.account[:14]:<14} {txn.description[:30]:<30}"
        )
    total = sum((txn.amount for txn in transactions), Decimal("0"))
    click.echo("-" * 100)
    click.echo(f"Total: {_signed(total)}")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--date", "date_str", help="Transaction date")
@click.option("--amount", help="Transaction amount")
@click.option("--description", help="Transaction description")
@click.option("--category", help="Category")
@click.option("--account", help="Account")
@click.option("--notes", help="Notes")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    date_str: str | None,
    amount: str | None,
    description: str | None,
    category: str | None,
    account: str | None,
    notes: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided.

    Examples:
        networth transaction update 1 --amount -75.00
        networth transaction update 1 --category Groceries --notes "weekly shop"
    """
    service = TransactionService(ctx.obj["db"])

    txn_date = None
    if date_str is not None:
        try:
            txn_date = parse_date(date_str)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    txn_amount = None
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    try:
        service.update_transaction(
            transaction_id,
            date=txn_date,
            amount=txn_amount,
            description=description,
            category=category,
            account=account,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated transaction {transaction_id}")
    refresh_snapshots(ctx)


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction."""
    service = TransactionService(ctx.obj["db"])
    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Deleted transaction {transaction_id}")
    refresh_snapshots(ctx)


@transaction_group.command("categories")
@click.pass_context
def list_categories(ctx) -> None:
    """List the categories in use."""
    categories = TransactionService(ctx.obj["db"]).list_categories()
    if not categories:
        click.echo("No categories found.")
        return
    for name in categories:
        click.echo(name)


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
