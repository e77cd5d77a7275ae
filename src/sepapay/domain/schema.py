"""Field paths of the emitted payment document.

Builder and reader both address the document through these constants, so
they must only change together. Paths are tuples of keys from the node they
are relative to (document root, one ``PmtInf`` entry, or one
``CdtTrfTxInf`` entry).
"""

from typing import Any, Mapping

Document = dict[str, Any]
Path = tuple[str, ...]

GROUPING_MIXED = "MIXD"

# Header, relative to the document root
MESSAGE_ID: Path = ("GrpHdr", "MsgId")
CONTROL_SUM: Path = ("GrpHdr", "CtrlSum")
NUMBER_OF_TRANSACTIONS: Path = ("GrpHdr", "NbOfTxs")
CREATION_TIME: Path = ("GrpHdr", "CreDtTm")
GROUPING: Path = ("GrpHdr", "Grpg")
INITIATING_PARTY_NAME: Path = ("GrpHdr", "InitgPty", "Nm")
TRANSACTION_GROUPS: Path = ("PmtInf",)

# Transaction group, relative to one PmtInf entry
GROUP_ID: Path = ("PmtInfId",)
EXECUTION_DATE: Path = ("ReqdExctnDt",)
DEBTOR_NAME: Path = ("Dbtr", "Nm")
DEBTOR_BIC: Path = ("DbtrAgt", "FinInstnId", "BIC")
DEBTOR_IBAN: Path = ("DbtrAcct", "Id", "IBAN")
GROUP_CURRENCY: Path = ("DbtrAcct", "Ccy")
TRANSACTIONS: Path = ("CdtTrfTxInf",)

# Transaction, relative to one CdtTrfTxInf entry
END_TO_END_ID: Path = ("PmtId", "EndToEndId")
AMOUNT: Path = ("Amt", "InstdAmt", "value")
AMOUNT_CURRENCY: Path = ("Amt", "InstdAmt", "currency")
CREDITOR_BIC: Path = ("CdtrAgt", "FinInstnId", "BIC")
CREDITOR_NAME: Path = ("Cdtr", "Nm")
CREDITOR_IBAN: Path = ("CdtrAcct", "Id", "IBAN")

# Custom field that get_transaction_ids reports
TRANSACTION_ID_FIELD = "transactionId"


def lookup(node: Mapping[str, Any] | None, path: Path) -> Any:
    """Resolve a path below node, returning None if any step is missing."""
    current: Any = node
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def place(node: dict[str, Any], path: Path, value: Any) -> None:
    """Set value at path below node, creating intermediate dicts."""
    *parents, leaf = path
    for key in parents:
        node = node.setdefault(key, {})
    node[leaf] = value
