"""Domain model entities for wedplan.

These are pure data classes representing the budget concepts, independent
of the database schema. Derived payment fields on CostRecord are only ever
produced by the reconciliation service; nothing else builds them.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class PaymentStatus(str, Enum):
    """Payment status of a cost, derived from its ledger."""

    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class CostRecord:
    """Cost domain entity.

    ``value`` may only be a deposit; ``total_amount`` is the full price when
    known. ``amount_paid`` and ``payment_status`` are the cached aggregate
    written by the last reconciliation.
    """

    id: int
    name: str
    value: Decimal
    total_amount: Optional[Decimal]
    category_id: Optional[int]
    due_date: Optional[date]
    paid_date: Optional[date]
    notes: Optional[str]
    amount_paid: Decimal
    payment_status: PaymentStatus
    created_at: datetime

    @property
    def target_amount(self) -> Decimal:
        """Amount the ledger must reach for the cost to be paid."""
        return self.total_amount if self.total_amount is not None else self.value

    @property
    def remaining_amount(self) -> Decimal:
        """Remaining balance according to the cached aggregate."""
        return max(self.target_amount - self.amount_paid, Decimal("0.00"))


@dataclass(frozen=True)
class PaymentEntry:
    """A single payment made against a cost."""

    id: int
    cost_id: int
    amount: Decimal
    payment_date: datetime
    note: Optional[str]


@dataclass(frozen=True)
class PaymentSummary:
    """Result of reconciling a cost against its ledger."""

    cost_id: int
    amount_paid: Decimal
    payment_status: PaymentStatus
    target_amount: Decimal

    @property
    def remaining_amount(self) -> Decimal:
        return max(self.target_amount - self.amount_paid, Decimal("0.00"))


@dataclass(frozen=True)
class CategoryBudget:
    """Budget totals for the costs of a single category."""

    category_id: Optional[int]
    category_name: str
    planned: Decimal
    paid: Decimal
    cost_count: int

    @property
    def outstanding(self) -> Decimal:
        return self.planned - self.paid


@dataclass(frozen=True)
class BudgetSummary:
    """Budget overview across all costs."""

    planned: Decimal
    paid: Decimal
    total_budget: Optional[Decimal]
    categories: tuple[CategoryBudget, ...] = ()
    status_counts: dict[PaymentStatus, int] = field(default_factory=dict)

    @property
    def outstanding(self) -> Decimal:
        return self.planned - self.paid

    @property
    def budget_remaining(self) -> Optional[Decimal]:
        if self.total_budget is None:
            return None
        return self.total_budget - self.paid

    @property
    def percent_used(self) -> Optional[int]:
        if self.total_budget is None or self.total_budget <= 0:
            return None
        return int((self.paid / self.total_budget * 100).to_integral_value())
