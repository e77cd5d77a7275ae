"""CLI helpers for loading payment descriptions and documents."""

from __future__ import annotations

from pathlib import Path

import click
from sepapay.cli.error_handling import handle_domain_error
from sepapay.domain.builder import PaymentBuilder
from sepapay.domain.schema import Document
from sepapay.utils.json_codec import loads_document


def read_json_or_exit(ctx: click.Context, path: str) -> Document:
    """Read a JSON object from a file, or exit with a CLI error."""
    try:
        return loads_document(Path(path).read_text(encoding="utf-8"))
    except ValueError as exc:
        handle_domain_error(ctx, ValueError(f"{path}: {exc}"))


def load_payment_or_exit(ctx: click.Context, path: str) -> PaymentBuilder:
    """Build a PaymentBuilder from a JSON payment description file.

    This keeps error messaging and exit behavior consistent across commands.
    """
    data = read_json_or_exit(ctx, path)
    try:
        return PaymentBuilder.from_dict(data)
    except ValueError as exc:
        handle_domain_error(ctx, ValueError(f"{path}: {exc}"))
