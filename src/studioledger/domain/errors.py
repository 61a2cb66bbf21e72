"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing expense transaction."""
    return f"Transaction {transaction_id} not found"


def revenue_not_found(revenue_id: int) -> str:
    """Return message for missing revenue entry."""
    return f"Revenue {revenue_id} not found"


def withdrawal_not_found(withdrawal_id: int) -> str:
    """Return message for missing withdrawal."""
    return f"Withdrawal {withdrawal_id} not found"


def duplicate_unique_id(kind: str, unique_id: str) -> str:
    """Return message for a record whose unique ID is already taken."""
    return f"{kind} with unique_id '{unique_id}' already exists"


def must_be_positive(field: str, value) -> str:
    """Return message for amounts that must be greater than zero."""
    return f"{field} must be greater than zero (got {value})"


def invalid_installments(installments) -> str:
    """Return message for an installment count below one."""
    return f"Installments must be an integer >= 1 (got {installments!r})"
