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


class ComputationError(DomainError):
    """Derived figures could not be computed from the stored records."""


def valuation_not_found(valuation_id: int) -> str:
    """Return message for missing valuation point."""
    return f"Valuation {valuation_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def position_not_found(position_id: int) -> str:
    """Return message for missing position."""
    return f"Position {position_id} not found"


def unknown_kind(kind: str) -> str:
    """Return message for a kind that is neither asset nor liability."""
    return f"Unknown kind '{kind}': expected 'asset' or 'liability'"


def net_worth_not_computable(month) -> str:
    """Return message when a snapshot holds a non-numeric figure."""
    return f"Could not compute net worth for {month}"
