"""Domain model entities for sepapay.

These are the builder-side records. They keep the fixed SEPA fields typed
and hold caller supplied extras apart, so the document layout is only
decided when the builder serializes them.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Mapping, Optional

from sepapay.domain.errors import ValidationError
from sepapay.utils.amount_parser import to_decimal


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    """Return the value of the first key present in data."""
    for key in keys:
        if key in data:
            return data[key]
    return None


@dataclass(frozen=True)
class DebtorAccount:
    """Account the transfers of one group are paid from.

    A field left as None is undefined; an empty string is still defined.
    """

    name: Optional[str] = None
    bic: Optional[str] = None
    iban: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.name is not None and self.bic is not None and self.iban is not None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DebtorAccount":
        """Build from a mapping keyed name/bic/iban (BIC/IBAN also accepted)."""
        return cls(
            name=data.get("name"),
            bic=_pick(data, "bic", "BIC"),
            iban=_pick(data, "iban", "IBAN"),
        )


@dataclass(frozen=True)
class CreditTransfer:
    """A single credit transfer instruction.

    ``custom_fields`` are passed through to the serialized record at its top
    level; the fixed fields override any custom field of the same name.
    """

    reference: Optional[str]
    amount: Decimal
    currency: Optional[str] = None
    creditor_name: Optional[str] = None
    creditor_bic: Optional[str] = None
    creditor_iban: Optional[str] = None
    custom_fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        try:
            amount = to_decimal(self.amount)
        except ValueError as e:
            raise ValidationError(f"Transaction '{self.reference}': {e}")
        object.__setattr__(self, "amount", amount)
        # Detach from the caller's mapping
        object.__setattr__(
            self, "custom_fields", MappingProxyType(deepcopy(dict(self.custom_fields)))
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CreditTransfer":
        """Build from a mapping with snake_case or camelCase keys.

        Raises:
            ValidationError: If the amount is missing or not a number
        """
        return cls(
            reference=data.get("reference"),
            amount=data.get("amount"),
            currency=data.get("currency"),
            creditor_name=_pick(data, "creditor_name", "creditorName"),
            creditor_bic=_pick(data, "creditor_bic", "creditorBIC"),
            creditor_iban=_pick(data, "creditor_iban", "creditorIBAN"),
            custom_fields=_pick(data, "custom_fields", "customFields") or {},
        )


@dataclass
class TransactionGroup:
    """Mutable batch of transfers sharing one debtor account and currency."""

    id: str
    currency: Optional[str] = None
    debtor_account: Optional[DebtorAccount] = None
    transactions: list[CreditTransfer] = field(default_factory=list)
