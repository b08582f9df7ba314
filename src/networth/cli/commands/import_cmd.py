"""CSV import command."""

import click

from networth.cli.error_handling import handle_domain_error, refresh_snapshots
from networth.domain.csv_import import CSVImportService


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option("--date-column", required=True, help="CSV column holding the transaction date")
@click.option("--amount-column", required=True, help="CSV column holding the signed amount")
@click.option("--description-column", required=True, help="CSV column holding the description")
@click.option("--category-column", help="CSV column holding the category (optional)")
@click.option("--account-column", help="CSV column holding the account (optional)")
@click.pass_context
def import_csv(
    ctx,
    csv_file: str,
    date_column: str,
    amount_column: str,
    description_column: str,
    category_column: str | None,
    account_column: str | None,
):
    """Import transactions from a CSV file.

    Examples:
        networth import bank.csv --date-column Date --amount-column Amount --description-column Payee
    """
    service = CSVImportService(ctx.obj["db"])
    mapping = {
        "date": date_column,
        "amount": amount_column,
        "description": description_column,
    }
    if category_column:
        mapping["category"] = category_column
    if account_column:
        mapping["account"] = account_column

    try:
        result = service.import_csv(csv_file_path=csv_file, mapping=mapping)
    except (ValueError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)
        return

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result.imported} transactions")
    if result.errors:
        click.echo(f"  Errors: {len(result.errors)}")
        for error in result.errors:
            click.echo(f"    {error}", err=True)
    if result.imported:
        refresh_snapshots(ctx)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
