"""Budget summary domain service."""

from collections import Counter
from decimal import Decimal
from typing import Optional

from wedplan.database.base import Database
from wedplan.domain.entities import BudgetSummary, CategoryBudget, CostRecord, PaymentStatus
from wedplan.domain.money import ZERO

UNCATEGORIZED = "Uncategorized"


class BudgetService:
    """Service for building the budget overview."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def summarize(self, total_budget: Optional[Decimal] = None) -> BudgetSummary:
        """Build the budget overview from the reconciled cost aggregates.

        Args:
            total_budget: Optional overall budget to measure payments against

        Returns:
            BudgetSummary with totals, per-category groups (largest planned
            amount first) and a count of costs per payment status
        """
        costs = self.db.list_costs()
        category_names = {c.id: c.name for c in self.db.list_categories()}

        return BudgetSummary(
            planned=sum((c.target_amount for c in costs), ZERO),
            paid=sum((c.amount_paid for c in costs), ZERO),
            total_budget=total_budget,
            categories=tuple(self.group_by_category(costs, category_names)),
            status_counts=self.count_by_status(costs),
        )

    def group_by_category(
        self, costs: list[CostRecord], category_names: dict[int, str]
    ) -> list[CategoryBudget]:
        """Aggregate planned and paid amounts per category."""
        groups: dict[Optional[int], list[CostRecord]] = {}
        for cost in costs:
            category_id = cost.category_id if cost.category_id in category_names else None
            groups.setdefault(category_id, []).append(cost)

        results = [
            CategoryBudget(
                category_id=category_id,
                category_name=category_names.get(category_id, UNCATEGORIZED),
                planned=sum((c.target_amount for c in items), ZERO),
                paid=sum((c.amount_paid for c in items), ZERO),
                cost_count=len(items),
            )
            for category_id, items in groups.items()
        ]
        results.sort(key=lambda group: (-group.planned, group.category_name))
        return results

    def count_by_status(self, costs: list[CostRecord]) -> dict[PaymentStatus, int]:
        """Count costs per payment status, including zero counts."""
        counts = Counter(c.payment_status for c in costs)
        return {status: counts.get(status, 0) for status in PaymentStatus}
