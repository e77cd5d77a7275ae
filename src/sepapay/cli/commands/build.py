"""Payment document build command."""

import click
from pathlib import Path
from sepapay.cli.error_handling import handle_domain_error
from sepapay.cli.payment_loading import load_payment_or_exit
from sepapay.domain.csv_import import CSVTransactionImporter
from sepapay.domain.errors import DomainError
from sepapay.domain.reader import PaymentReader
from sepapay.utils.date_parser import parse_date
from sepapay.utils.json_codec import dumps_document


def _split_csv_source(value: str) -> tuple[str, str]:
    group_id, sep, csv_path = value.partition("=")
    if not sep or not group_id or not csv_path:
        raise click.BadParameter(
            f"'{value}' is not of the form GROUP_ID=CSV_PATH",
            param_hint="--transactions-csv",
        )
    return group_id, csv_path


@click.command("build")
@click.argument("payment_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o", type=click.Path(dir_okay=False), help="Write the document here instead of stdout"
)
@click.option(
    "--indent",
    type=click.IntRange(min=0),
    default=2,
    show_default=True,
    envvar="SEPAPAY_JSON_INDENT",
    help="JSON indent (overrides SEPAPAY_JSON_INDENT environment variable)",
)
@click.option(
    "--execution-date",
    help="Requested execution date (YYYY-MM-DD or relative like 'tomorrow', 'next friday')",
)
@click.option(
    "--transactions-csv",
    multiple=True,
    metavar="GROUP_ID=CSV_PATH",
    help="Append transfers from a CSV file to a group (repeatable)",
)
@click.pass_context
def build_document(
    ctx,
    payment_file: str,
    output: str | None,
    indent: int,
    execution_date: str | None,
    transactions_csv: tuple[str, ...],
):
    """Build a payment document from a JSON payment description.

    Examples:
        sepapay build payment.json --output document.json
        sepapay build payment.json --transactions-csv salaries=salaries.csv
    """
    sources = [_split_csv_source(value) for value in transactions_csv]

    exec_date = None
    if execution_date:
        try:
            exec_date = parse_date(execution_date)
        except ValueError as e:
            click.echo(f"Error: Invalid execution date: {e}", err=True)
            ctx.exit(1)

    builder = load_payment_or_exit(ctx, payment_file)

    importer = CSVTransactionImporter()
    for group_id, csv_path in sources:
        try:
            result = importer.import_csv(builder, group_id, csv_path)
        except (ValueError, FileNotFoundError) as e:
            handle_domain_error(ctx, e)
        click.echo(f"Imported {result['imported']} transfer(s) into '{group_id}'", err=True)
        for error in result["errors"]:
            click.echo(f"  {error}", err=True)

    try:
        document = builder.generate_document(execution_date=exec_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    text = dumps_document(document, indent=indent)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        written = PaymentReader(document)
        click.echo(
            f"Wrote payment {written.get_reference()} "
            f"({written.get_number_of_transactions()} transfer(s)) to {output}",
            err=True,
        )
    else:
        click.echo(text)


def register_commands(cli):
    """Register build command with main CLI."""
    cli.add_command(build_document)
