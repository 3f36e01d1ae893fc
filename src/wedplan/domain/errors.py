"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidAmountError(ValidationError):
    """Amount is missing, not numeric, not finite, or not positive."""


class ExceedsRemainingError(ValidationError):
    """Payment would push the amount paid above the cost's target."""

    def __init__(self, message: str, remaining: Decimal):
        super().__init__(message)
        self.remaining = remaining


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as deleting referenced data."""


class CategoryInUseError(ConflictError):
    """Category deletion blocked by costs that reference it."""

    def __init__(self, message: str, count: int):
        super().__init__(message)
        self.count = count


class StoreError(DomainError):
    """Underlying data store failed; the operation did not commit."""


def cost_not_found(cost_id: int) -> str:
    """Return message for missing cost."""
    return f"Cost {cost_id} not found"


def payment_not_found(payment_id: int) -> str:
    """Return message for missing payment."""
    return f"Payment {payment_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def exceeds_remaining(amount: Decimal, remaining: Decimal) -> str:
    """Return message for a payment larger than the remaining balance."""
    return f"Payment of {amount} exceeds the remaining balance of {remaining}"


def category_delete_blocked(category_id: int, cost_count: int) -> str:
    """Return message when a category is still referenced by costs."""
    return (
        f"Cannot delete category {category_id}: it is used by "
        f"{cost_count} cost{'s' if cost_count != 1 else ''}. "
        "Please reassign or delete them first."
    )
