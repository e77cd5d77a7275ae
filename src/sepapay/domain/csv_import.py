"""CSV transaction import domain service."""

import csv
import logging
from pathlib import Path
from typing import Any

from sepapay.domain.builder import PaymentBuilder
from sepapay.domain.entities import CreditTransfer
from sepapay.domain.errors import UnknownGroupError
from sepapay.utils.amount_parser import parse_amount

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("reference", "amount")
FIXED_COLUMNS = (
    "reference",
    "amount",
    "currency",
    "creditor_name",
    "creditor_bic",
    "creditor_iban",
)


class CSVTransactionImporter:
    """Appends transfers read from a CSV file to a builder's group.

    Columns named after the fixed transfer fields fill those fields; every
    other column is carried as a custom field. Empty cells are skipped.
    """

    def __init__(self, default_currency: str | None = None):
        """Initialize importer.

        Args:
            default_currency: Currency for rows without a currency cell
        """
        self.default_currency = default_currency

    def _row_to_transfer(self, row: dict[str, str | None]) -> CreditTransfer:
        values = {
            column: cell.strip()
            for column, cell in row.items()
            if column is not None and cell is not None and cell.strip()
        }

        if not values.get("reference"):
            raise ValueError("Missing reference")
        if not values.get("amount"):
            raise ValueError("Missing amount")

        return CreditTransfer(
            reference=values["reference"],
            amount=parse_amount(values["amount"]),
            currency=values.get("currency", self.default_currency),
            creditor_name=values.get("creditor_name"),
            creditor_bic=values.get("creditor_bic"),
            creditor_iban=values.get("creditor_iban"),
            custom_fields={
                column: value
                for column, value in values.items()
                if column not in FIXED_COLUMNS
            },
        )

    def import_csv(
        self, builder: PaymentBuilder, group_id: str, csv_file_path: str
    ) -> dict[str, Any]:
        """Import transfers from a CSV file into an existing group.

        Args:
            builder: Builder that owns the group
            group_id: Target transaction group
            csv_file_path: Path to CSV file

        Returns:
            Dict with import statistics:
            - imported: number of transfers appended
            - errors: list of per-row error messages

        Raises:
            UnknownGroupError: If the group does not exist
            ValueError: If the file has no header or lacks required columns
            FileNotFoundError: If CSV file doesn't exist
        """
        if group_id not in builder.transaction_groups:
            raise UnknownGroupError("import transactions", group_id)

        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        imported = 0
        errors = []

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)

            csv_columns = reader.fieldnames
            if csv_columns is None:
                raise ValueError("CSV file has no columns")

            missing_columns = [c for c in REQUIRED_COLUMNS if c not in csv_columns]
            if missing_columns:
                raise ValueError(
                    f"CSV file missing required columns: {', '.join(missing_columns)}"
                )

            for row_num, row in enumerate(reader, start=2):  # header is row 1
                try:
                    transfer = self._row_to_transfer(row)
                except ValueError as e:
                    errors.append(f"Row {row_num}: {e}")
                    continue
                builder.add_transaction(group_id, transfer)
                imported += 1

        logger.debug(
            "Imported %d transfer(s) from %s into group %s (%d error(s))",
            imported,
            csv_file_path,
            group_id,
            len(errors),
            extra={"group_id": group_id},
        )
        return {
            "imported": imported,
            "errors": errors,
        }
