"""Domain layer for sepapay application."""

from sepapay.domain.builder import PaymentBuilder
from sepapay.domain.reader import PaymentReader
from sepapay.domain.entities import CreditTransfer, DebtorAccount
from sepapay.domain.csv_import import CSVTransactionImporter

__all__ = [
    "PaymentBuilder",
    "PaymentReader",
    "CreditTransfer",
    "DebtorAccount",
    "CSVTransactionImporter",
]
