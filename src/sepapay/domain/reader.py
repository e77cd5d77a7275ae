"""Read accessors for emitted payment documents."""

from typing import Any, Mapping, Optional

from sepapay.domain import schema
from sepapay.domain.errors import FieldNotFoundError


class PaymentReader:
    """Typed lookups over one emitted payment document.

    The reader never validates or mutates the document. A lookup whose path
    does not exist returns None; only get_transaction_custom_field raises.
    """

    def __init__(self, document: Mapping[str, Any]):
        """Initialize reader.

        Args:
            document: Document as returned by PaymentBuilder.generate_document
                or decoded from its JSON rendering
        """
        self.document = document

    def _groups(self) -> list[Mapping[str, Any]]:
        return schema.lookup(self.document, schema.TRANSACTION_GROUPS) or []

    def _group(self, group_id: str) -> Optional[Mapping[str, Any]]:
        for group in self._groups():
            if schema.lookup(group, schema.GROUP_ID) == group_id:
                return group
        return None

    def _transactions(self, group_id: str) -> list[Mapping[str, Any]]:
        return schema.lookup(self._group(group_id), schema.TRANSACTIONS) or []

    def _transaction(self, group_id: str, reference: str) -> Optional[Mapping[str, Any]]:
        # Duplicate references are allowed; the first one wins
        for transaction in self._transactions(group_id):
            if schema.lookup(transaction, schema.END_TO_END_ID) == reference:
                return transaction
        return None

    def get_reference(self) -> Optional[str]:
        return schema.lookup(self.document, schema.MESSAGE_ID)

    def get_control_sum(self) -> Any:
        return schema.lookup(self.document, schema.CONTROL_SUM)

    def get_number_of_transactions(self) -> Optional[int]:
        return schema.lookup(self.document, schema.NUMBER_OF_TRANSACTIONS)

    def get_creation_time(self) -> Optional[str]:
        return schema.lookup(self.document, schema.CREATION_TIME)

    def get_initiating_party(self) -> Optional[str]:
        return schema.lookup(self.document, schema.INITIATING_PARTY_NAME)

    def count_transaction_groups(self) -> int:
        return len(self._groups())

    def list_transaction_group_ids(self) -> list[str]:
        """Return group ids in document order."""
        return [schema.lookup(group, schema.GROUP_ID) for group in self._groups()]

    def has_transaction_group(self, group_id: str) -> bool:
        return self.count_transaction_groups() > 0 and self._group(group_id) is not None

    def get_currency(self, group_id: str) -> Optional[str]:
        return schema.lookup(self._group(group_id), schema.GROUP_CURRENCY)

    def get_execution_date(self, group_id: str) -> Optional[str]:
        return schema.lookup(self._group(group_id), schema.EXECUTION_DATE)

    def get_debtor_name(self, group_id: str) -> Optional[str]:
        return schema.lookup(self._group(group_id), schema.DEBTOR_NAME)

    def get_debtor_bic(self, group_id: str) -> Optional[str]:
        return schema.lookup(self._group(group_id), schema.DEBTOR_BIC)

    def get_debtor_iban(self, group_id: str) -> Optional[str]:
        return schema.lookup(self._group(group_id), schema.DEBTOR_IBAN)

    def count_transactions(self, group_id: str) -> int:
        return len(self._transactions(group_id))

    def list_transaction_references(self, group_id: str) -> list[Optional[str]]:
        """Return EndToEndIds of a group in document order."""
        return [
            schema.lookup(transaction, schema.END_TO_END_ID)
            for transaction in self._transactions(group_id)
        ]

    def has_transaction(self, group_id: str, reference: str) -> bool:
        return self._transaction(group_id, reference) is not None

    def get_transaction_amount(self, group_id: str, reference: str) -> Any:
        return schema.lookup(self._transaction(group_id, reference), schema.AMOUNT)

    def get_transaction_currency(self, group_id: str, reference: str) -> Optional[str]:
        return schema.lookup(self._transaction(group_id, reference), schema.AMOUNT_CURRENCY)

    def get_transaction_creditor_name(self, group_id: str, reference: str) -> Optional[str]:
        return schema.lookup(self._transaction(group_id, reference), schema.CREDITOR_NAME)

    def get_transaction_creditor_bic(self, group_id: str, reference: str) -> Optional[str]:
        return schema.lookup(self._transaction(group_id, reference), schema.CREDITOR_BIC)

    def get_transaction_creditor_iban(self, group_id: str, reference: str) -> Optional[str]:
        return schema.lookup(self._transaction(group_id, reference), schema.CREDITOR_IBAN)

    def get_transaction_custom_field(
        self, group_id: str, reference: str, field_name: str
    ) -> Any:
        """Read a top-level field of a transaction record by name.

        This is how custom fields merged by the builder are read back.

        Returns:
            Field value, or None if the transaction has no such field

        Raises:
            FieldNotFoundError: If the transaction does not exist
        """
        transaction = self._transaction(group_id, reference)
        if transaction is None:
            raise FieldNotFoundError(group_id, reference, field_name)
        return transaction.get(field_name)
