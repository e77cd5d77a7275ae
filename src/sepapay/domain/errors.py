"""Shared domain error messages and error types."""

from typing import Sequence


VALIDATION_INTRO = (
    "Could not generate SEPA payment object for the following reason(s)"
)


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for callers that only catch ValueError.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity or path does not exist."""


class UnknownGroupError(NotFoundError):
    """A mutation was addressed to a transaction group that does not exist."""

    def __init__(self, operation: str, group_id: str):
        self.operation = operation
        self.group_id = group_id
        super().__init__(unknown_group(operation, group_id))


class ValidationFailedError(ValidationError):
    """Payment state is incomplete and cannot be emitted.

    ``errors`` holds every violated rule, in validation order.
    """

    def __init__(self, errors: Sequence[str]):
        self.errors = list(errors)
        super().__init__(validation_failed(self.errors))


class FieldNotFoundError(NotFoundError):
    """Custom field lookup on a transaction that is not in the document."""

    def __init__(self, group_id: str, reference: str, field_name: str):
        self.group_id = group_id
        self.reference = reference
        self.field_name = field_name
        super().__init__(transaction_not_found(group_id, reference, field_name))


def unknown_group(operation: str, group_id: str) -> str:
    """Return message for a mutation on a missing transaction group."""
    return f'Cannot {operation} to non existing transaction group:"{group_id}"'


def validation_failed(errors: Sequence[str]) -> str:
    """Return the emission failure message listing every violated rule."""
    return f"{VALIDATION_INTRO}: {','.join(errors)}"


def transaction_not_found(group_id: str, reference: str, field_name: str) -> str:
    """Return message for a custom field read on a missing transaction."""
    return (
        f"Cannot read field '{field_name}': transaction '{reference}' "
        f"not found in transaction group '{group_id}'"
    )
