"""Transaction id listing command."""

import click
from sepapay.cli.error_handling import handle_domain_error
from sepapay.cli.payment_loading import load_payment_or_exit
from sepapay.domain.errors import DomainError


@click.command("ids")
@click.argument("payment_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def list_transaction_ids(ctx, payment_file: str):
    """List the transactionId of every transfer, one per line.

    Transfers without a transactionId custom field are shown as '-'.
    """
    builder = load_payment_or_exit(ctx, payment_file)
    try:
        transaction_ids = builder.get_transaction_ids()
    except DomainError as e:
        handle_domain_error(ctx, e)

    for transaction_id in transaction_ids:
        click.echo("-" if transaction_id is None else transaction_id)


def register_commands(cli):
    """Register ids command with main CLI."""
    cli.add_command(list_transaction_ids)
