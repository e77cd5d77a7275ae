"""Payment builder domain service."""

import logging
from copy import deepcopy
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from sepapay.domain import schema
from sepapay.domain.entities import CreditTransfer, DebtorAccount, TransactionGroup
from sepapay.domain.errors import UnknownGroupError, ValidationError, ValidationFailedError
from sepapay.utils.amount_parser import round_amount
from sepapay.utils.date_parser import format_creation_timestamp

logger = logging.getLogger(__name__)

DebtorAccountInput = Union[DebtorAccount, Mapping[str, Any]]
TransactionInput = Union[CreditTransfer, Mapping[str, Any]]


class PaymentBuilder:
    """Accumulates transaction groups and emits a SEPA credit transfer document.

    Every mutator returns the builder so calls can be chained::

        document = (
            PaymentBuilder()
            .set_reference("PAY-2024-001")
            .set_debtor_entity("ACME Corp")
            .add_transaction_group("salaries", "EUR", account, transfers)
            .generate_document()
        )

    A builder is not thread safe; keep one per document being assembled.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """Initialize an empty payment.

        Args:
            clock: Returns the current time; used for CreDtTm and the default
                ReqdExctnDt (defaults to local datetime.now)
        """
        self.clock = clock or (lambda: datetime.now().astimezone())
        self.reference: Optional[str] = None
        self.debtor_entity: Optional[str] = None
        self.transaction_groups: dict[str, TransactionGroup] = {}

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "PaymentBuilder":
        """Create a builder from a plain payment description.

        Expected keys: ``reference``, ``debtor_entity`` and ``groups``, a list
        of ``{id, currency, debtor_account, transactions}`` mappings.

        Raises:
            ValidationError: If a group has no id or a group or transaction is malformed
        """
        builder = cls(clock=clock)
        if data.get("reference") is not None:
            builder.set_reference(data["reference"])
        if data.get("debtor_entity") is not None:
            builder.set_debtor_entity(data["debtor_entity"])

        for position, group in enumerate(data.get("groups") or [], start=1):
            if not isinstance(group, Mapping):
                raise ValidationError(f"Group {position} must be an object")
            group_id = group.get("id")
            if not group_id:
                raise ValidationError(f"Group {position} has no id")
            debtor_account = group.get("debtor_account")
            if debtor_account is not None and not isinstance(debtor_account, Mapping):
                raise ValidationError(f"Group {position} debtor_account must be an object")
            transactions = group.get("transactions")
            if transactions is not None and not isinstance(transactions, list):
                raise ValidationError(f"Group {position} transactions must be a list")
            builder.add_transaction_group(
                group_id,
                currency=group.get("currency"),
                debtor_account=debtor_account,
                transactions=transactions,
            )
        return builder

    def _require_group(self, group_id: str, operation: str) -> TransactionGroup:
        group = self.transaction_groups.get(group_id)
        if group is None:
            raise UnknownGroupError(operation, group_id)
        return group

    def set_reference(self, reference: str) -> "PaymentBuilder":
        """Set the message reference (MsgId)."""
        self.reference = reference
        return self

    def set_debtor_entity(self, debtor_entity: str) -> "PaymentBuilder":
        """Set the initiating party name."""
        self.debtor_entity = debtor_entity
        return self

    def set_currency(self, group_id: str, currency: str) -> "PaymentBuilder":
        """Overwrite a group's currency.

        Raises:
            UnknownGroupError: If the group does not exist
        """
        self._require_group(group_id, "add currency").currency = currency
        return self

    def set_debtor_account(
        self, group_id: str, debtor_account: DebtorAccountInput
    ) -> "PaymentBuilder":
        """Replace a group's debtor account.

        All three fields are replaced; fields missing from a mapping become
        undefined rather than keeping their previous value.

        Raises:
            UnknownGroupError: If the group does not exist
            ValidationError: If the account is neither a DebtorAccount nor a mapping
        """
        group = self._require_group(group_id, "add debtor account")
        if isinstance(debtor_account, Mapping):
            debtor_account = DebtorAccount.from_mapping(debtor_account)
        elif not isinstance(debtor_account, DebtorAccount):
            raise ValidationError(
                f"Cannot use {type(debtor_account).__name__} as a debtor account"
            )
        group.debtor_account = debtor_account
        return self

    def add_transaction(
        self, group_id: str, transaction: TransactionInput
    ) -> "PaymentBuilder":
        """Append one transfer to a group.

        Raises:
            UnknownGroupError: If the group does not exist
            ValidationError: If the transfer is malformed or its amount is not a number
        """
        group = self._require_group(group_id, "add transaction")
        if isinstance(transaction, Mapping):
            transaction = CreditTransfer.from_mapping(transaction)
        elif not isinstance(transaction, CreditTransfer):
            raise ValidationError(f"Cannot add {type(transaction).__name__} as a transaction")
        group.transactions.append(transaction)
        return self

    def add_transactions(
        self, group_id: str, transactions: Iterable[TransactionInput]
    ) -> "PaymentBuilder":
        """Append transfers one by one.

        Not atomic: transfers appended before a failing one stay appended.
        """
        for transaction in transactions:
            self.add_transaction(group_id, transaction)
        return self

    def add_transaction_group(
        self,
        group_id: str,
        currency: Optional[str] = None,
        debtor_account: Optional[DebtorAccountInput] = None,
        transactions: Optional[Iterable[TransactionInput]] = None,
    ) -> "PaymentBuilder":
        """Create a group, or update the supplied fields of an existing one.

        Omitted arguments leave existing values untouched and transactions
        are appended, never replaced.
        """
        if group_id not in self.transaction_groups:
            logger.debug("Creating transaction group %s", group_id, extra={"group_id": group_id})
            self.transaction_groups[group_id] = TransactionGroup(id=group_id)
        if currency:
            self.set_currency(group_id, currency)
        if debtor_account is not None:
            self.set_debtor_account(group_id, debtor_account)
        if transactions:
            self.add_transactions(group_id, transactions)
        return self

    def get_errors(self) -> list[str]:
        """Return every validation failure of the current state, in order."""
        errors = []

        if not self.reference:
            errors.append("reference missing")

        if not self.debtor_entity:
            errors.append("debtor entity missing")

        if not self.transaction_groups:
            errors.append("need at least 1 transaction group")

        # Empty groups are validated too even though they are not emitted
        for group in self.transaction_groups.values():
            if not group.currency:
                errors.append(f"{group.id} currency missing")
            if group.debtor_account is None or not group.debtor_account.is_complete:
                errors.append(f"{group.id} has an invalid debtor account")

        return errors

    def _validate(self) -> None:
        errors = self.get_errors()
        if errors:
            logger.warning(
                "Payment %s is not valid: %s",
                self.reference,
                ", ".join(errors),
                extra={"reference": self.reference},
            )
            raise ValidationFailedError(errors)

    def _serialize_transaction(self, transaction: CreditTransfer) -> dict[str, Any]:
        fixed: dict[str, Any] = {}
        schema.place(fixed, schema.END_TO_END_ID, transaction.reference)
        schema.place(fixed, schema.AMOUNT, transaction.amount)
        schema.place(fixed, schema.AMOUNT_CURRENCY, transaction.currency)
        schema.place(fixed, schema.CREDITOR_BIC, transaction.creditor_bic)
        schema.place(fixed, schema.CREDITOR_NAME, transaction.creditor_name)
        schema.place(fixed, schema.CREDITOR_IBAN, transaction.creditor_iban)

        record = deepcopy(dict(transaction.custom_fields))
        record.update(fixed)
        return record

    def _serialize_group(self, group: TransactionGroup, execution_date: date) -> dict[str, Any]:
        account = group.debtor_account
        record: dict[str, Any] = {}
        schema.place(record, schema.GROUP_ID, group.id)
        schema.place(record, schema.EXECUTION_DATE, execution_date.isoformat())
        schema.place(record, schema.DEBTOR_NAME, account.name)
        schema.place(record, schema.DEBTOR_BIC, account.bic)
        schema.place(record, schema.DEBTOR_IBAN, account.iban)
        schema.place(record, schema.GROUP_CURRENCY, group.currency)
        schema.place(
            record,
            schema.TRANSACTIONS,
            [self._serialize_transaction(t) for t in group.transactions],
        )
        return record

    def generate_document(self, execution_date: Optional[date] = None) -> schema.Document:
        """Validate the payment and emit its document.

        The returned document shares no mutable state with the builder.
        Groups without transactions are left out.

        Args:
            execution_date: Requested execution date (defaults to today)

        Returns:
            Document dict laid out per sepapay.domain.schema

        Raises:
            ValidationFailedError: If any validation rule fails
        """
        self._validate()

        now = self.clock()
        execution_date = execution_date or now.date()

        groups = [
            self._serialize_group(group, execution_date)
            for group in self.transaction_groups.values()
            if group.transactions
        ]

        number_of_transactions = 0
        control_sum = Decimal("0")
        for group in groups:
            for transaction in schema.lookup(group, schema.TRANSACTIONS):
                number_of_transactions += 1
                control_sum += round_amount(schema.lookup(transaction, schema.AMOUNT))

        document: schema.Document = {}
        schema.place(document, schema.MESSAGE_ID, self.reference)
        schema.place(document, schema.CREATION_TIME, format_creation_timestamp(now))
        schema.place(document, schema.GROUPING, schema.GROUPING_MIXED)
        schema.place(document, schema.INITIATING_PARTY_NAME, self.debtor_entity)
        schema.place(document, schema.NUMBER_OF_TRANSACTIONS, number_of_transactions)
        schema.place(document, schema.CONTROL_SUM, round_amount(control_sum))
        schema.place(document, schema.TRANSACTION_GROUPS, groups)

        logger.debug(
            "Generated payment %s: %d group(s), %d transaction(s), control sum %s",
            self.reference,
            len(groups),
            number_of_transactions,
            control_sum,
            extra={"reference": self.reference},
        )
        return document

    def get_transaction_ids(self) -> list[Any]:
        """Return each transfer's transactionId custom field, in insertion order.

        Transfers without one contribute None.

        Raises:
            ValidationFailedError: If any validation rule fails
        """
        self._validate()
        return [
            transaction.custom_fields.get(schema.TRANSACTION_ID_FIELD)
            for group in self.transaction_groups.values()
            for transaction in group.transactions
        ]
