"""Main CLI entry point."""

import click
from sepapay.utils.log_setup import configure_logging

# Import and register all commands at module level
from sepapay.cli.commands import build, inspect_cmd, ids


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug details to stderr")
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Log line format (overrides SEPAPAY_LOG_FORMAT environment variable)",
    envvar="SEPAPAY_LOG_FORMAT",
)
@click.pass_context
def cli(ctx, verbose: bool, log_format: str):
    """Sepapay - SEPA credit transfer documents.

    Build payment documents from JSON payment descriptions and CSV transfer
    lists, and inspect documents that were generated earlier.
    """
    ctx.ensure_object(dict)

    # Leave logging alone when only showing help
    if ctx.invoked_subcommand is not None:
        configure_logging(verbose=verbose, fmt=log_format)


# Register all commands
build.register_commands(cli)
inspect_cmd.register_commands(cli)
ids.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
