"""Payment document inspection command."""

import click
from decimal import Decimal
from sepapay.cli.payment_loading import read_json_or_exit
from sepapay.domain.reader import PaymentReader


def _format_amount(amount) -> str:
    if amount is None:
        return "-"
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        return str(amount)
    return f"{amount:,.2f}"


@click.command("inspect")
@click.argument("document_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--group", help="Show the transfers of this transaction group")
@click.pass_context
def inspect_document(ctx, document_file: str, group: str | None):
    """Summarize a generated payment document.

    Use --group to list the transfers of one transaction group.
    """
    reader = PaymentReader(read_json_or_exit(ctx, document_file))

    click.echo(f"Payment: {reader.get_reference()}")
    click.echo(f"  Initiating party: {reader.get_initiating_party()}")
    click.echo(f"  Created: {reader.get_creation_time()}")
    click.echo(f"  Transfers: {reader.get_number_of_transactions()}")
    click.echo(f"  Control sum: {_format_amount(reader.get_control_sum())}")

    if group is None:
        click.echo(f"\nTransaction groups ({reader.count_transaction_groups()}):")
        click.echo("-" * 100)
        click.echo(
            f"{'ID':<20} {'Currency':<9} {'Execution':<11} {'Transfers':>9}  {'Debtor':<20} {'IBAN':<26}"
        )
        click.echo("-" * 100)
        for group_id in reader.list_transaction_group_ids():
            click.echo(
                f"{str(group_id):<20} {str(reader.get_currency(group_id)):<9} "
                f"{str(reader.get_execution_date(group_id)):<11} "
                f"{reader.count_transactions(group_id):>9}  "
                f"{str(reader.get_debtor_name(group_id))[:20]:<20} "
                f"{str(reader.get_debtor_iban(group_id)):<26}"
            )
        return

    if not reader.has_transaction_group(group):
        click.echo(f"Error: Transaction group '{group}' not found in document", err=True)
        ctx.exit(1)

    click.echo(f"\nGroup {group}: {reader.count_transactions(group)} transfer(s)")
    click.echo(
        f"  Debtor: {reader.get_debtor_name(group)} "
        f"(BIC {reader.get_debtor_bic(group)}, IBAN {reader.get_debtor_iban(group)})"
    )
    click.echo("-" * 100)
    click.echo(f"{'Reference':<24} {'Amount':>14} {'Ccy':<4} {'Creditor':<24} {'IBAN':<30}")
    click.echo("-" * 100)
    for reference in reader.list_transaction_references(group):
        amount = reader.get_transaction_amount(group, reference)
        click.echo(
            f"{str(reference):<24} {_format_amount(amount):>14} "
            f"{str(reader.get_transaction_currency(group, reference)):<4} "
            f"{str(reader.get_transaction_creditor_name(group, reference))[:24]:<24} "
            f"{str(reader.get_transaction_creditor_iban(group, reference)):<30}"
        )


def register_commands(cli):
    """Register inspect command with main CLI."""
    cli.add_command(inspect_document)
