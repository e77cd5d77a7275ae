"""Shared pytest fixtures for sepapay tests."""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from itertools import count
from pathlib import Path
import pytest

from sepapay.domain.builder import PaymentBuilder
from sepapay.domain.entities import DebtorAccount


FIXED_NOW = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handlers installed by configure_logging during CLI tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2024-01-15 09:30 UTC."""
    return lambda: FIXED_NOW


@pytest.fixture
def builder(fixed_clock):
    """Create an empty PaymentBuilder with a fixed clock."""
    return PaymentBuilder(clock=fixed_clock)


@pytest.fixture
def debtor_account():
    """A complete debtor account."""
    return DebtorAccount(name="ACME Corp", bic="ACMEDEFFXXX", iban="DE89370400440532013000")


@pytest.fixture
def make_transfer():
    """Factory for transfer mappings with unique references."""
    sequence = count(1)

    def _make(**overrides):
        n = next(sequence)
        transfer = {
            "reference": f"E2E-{n:04d}",
            "amount": Decimal("100.00"),
            "currency": "EUR",
            "creditor_name": f"Creditor {n}",
            "creditor_bic": "COBADEFFXXX",
            "creditor_iban": f"DE4450050201000000{n:04d}",
        }
        transfer.update(overrides)
        return transfer

    return _make


@pytest.fixture
def sample_payment(builder, debtor_account, make_transfer):
    """A valid payment with one group holding one transfer."""
    return (
        builder.set_reference("PAY-0001")
        .set_debtor_entity("ACME Corp")
        .add_transaction_group("salaries", "EUR", debtor_account, [make_transfer()])
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
