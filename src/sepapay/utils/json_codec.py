"""JSON encoding of emitted payment documents."""

import json
from decimal import Decimal
from typing import Any

from sepapay.domain.schema import Document


def _encode_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps_document(document: Document, indent: int | None = 2) -> str:
    """Render a document as JSON text with amounts as JSON numbers."""
    return json.dumps(
        document, indent=indent, ensure_ascii=False, default=_encode_default
    )


def loads_document(text: str) -> Document:
    """Parse a JSON object, reading non-integer numbers as Decimal.

    Used for emitted documents and for payment descriptions alike.

    Raises:
        ValueError: If the text is not JSON or its root is not an object
    """
    try:
        document = json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}")
    if not isinstance(document, dict):
        raise ValueError("Invalid JSON: top-level value must be an object")
    return document
