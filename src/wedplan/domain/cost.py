"""Cost domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from wedplan.database.base import Database, EDITABLE_COST_FIELDS
from wedplan.domain.entities import CostRecord, PaymentStatus, PaymentSummary
from wedplan.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    cost_not_found,
)
from wedplan.domain.money import to_positive_money
from wedplan.domain.reconciliation import ReconciliationService, target_amount

logger = logging.getLogger(__name__)


class CostService:
    """Service for managing costs."""

    def __init__(self, db: Database, reconciliation: Optional[ReconciliationService] = None):
        """Initialize cost service.

        Args:
            db: Database instance
            reconciliation: Reconciliation service; defaults to one backed by db
        """
        self.db = db
        self.reconciliation = reconciliation or ReconciliationService(db, db)

    def _clean_name(self, name: Any) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Cost name is required")
        return name.strip()

    def _check_category(self, category_id: Optional[int]) -> None:
        if category_id is not None and self.db.get_category(category_id) is None:
            raise ValidationError(category_not_found(category_id))

    def _check_target(self, value: Decimal, total_amount: Optional[Decimal]) -> None:
        if total_amount is not None and total_amount < value:
            raise ValidationError(
                f"Total amount {total_amount} cannot be less than the value {value}"
            )

    def create_cost(
        self,
        name: str,
        value: Any,
        total_amount: Any = None,
        category_id: Optional[int] = None,
        due_date: Optional[date] = None,
        paid_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> CostRecord:
        """Create a cost.

        Args:
            name: Cost name
            value: Positive nominal amount (may be a deposit)
            total_amount: Optional full price, at least ``value``
            category_id: Optional category ID
            due_date: Optional due date
            paid_date: Optional paid date
            notes: Optional notes

        Returns:
            The created cost, unpaid with nothing paid

        Raises:
            ValidationError: If any field is invalid or the category doesn't exist
        """
        name = self._clean_name(name)
        value = to_positive_money(value, "value")
        if total_amount is not None:
            total_amount = to_positive_money(total_amount, "total amount")
        self._check_target(value, total_amount)
        self._check_category(category_id)

        cost_id = self.db.create_cost(
            name=name,
            value=value,
            total_amount=total_amount,
            category_id=category_id,
            due_date=due_date,
            paid_date=paid_date,
            notes=notes.strip() if notes and notes.strip() else None,
        )
        logger.info("Created cost %s '%s' (target %s)", cost_id, name, target_amount(value, total_amount))
        return self.get_cost(cost_id)

    def get_cost(self, cost_id: int) -> CostRecord:
        """Get cost by ID.

        Raises:
            NotFoundError: If the cost doesn't exist
        """
        cost = self.db.get_cost(cost_id)
        if cost is None:
            raise NotFoundError(cost_not_found(cost_id))
        return cost

    def list_costs(
        self,
        category_id: Optional[int] = None,
        status: Optional[PaymentStatus] = None,
    ) -> list[CostRecord]:
        """List costs, newest first.

        Args:
            category_id: Optional category filter
            status: Optional payment status filter
        """
        return self.db.list_costs(category_id=category_id, status=status)

    def update_cost(self, cost_id: int, fields: dict[str, Any]) -> CostRecord:
        """Update a cost with the provided fields only.

        Fields outside of the editable set (notably ``amount_paid`` and
        ``payment_status``) are rejected. When the target changes, the cost
        is reconciled in the same unit of work so its status reflects the
        new target. A target below what has already been paid is refused.

        Args:
            cost_id: Cost ID
            fields: Mapping of field name to new value

        Returns:
            The updated cost

        Raises:
            ValidationError: If a field is invalid or not editable
            NotFoundError: If the cost doesn't exist
        """
        unknown = set(fields) - EDITABLE_COST_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update cost fields: {', '.join(sorted(unknown))}")

        changes = dict(fields)
        if "name" in changes:
            changes["name"] = self._clean_name(changes["name"])
        if "value" in changes:
            changes["value"] = to_positive_money(changes["value"], "value")
        if changes.get("total_amount") is not None:
            changes["total_amount"] = to_positive_money(changes["total_amount"], "total amount")
        if "notes" in changes and changes["notes"] is not None:
            changes["notes"] = changes["notes"].strip() or None

        with self.db.atomic(cost_id):
            cost = self.get_cost(cost_id)
            if "category_id" in changes:
                self._check_category(changes["category_id"])
            value = changes.get("value", cost.value)
            total_amount = changes.get("total_amount", cost.total_amount)
            self._check_target(value, total_amount)

            new_target = target_amount(value, total_amount)
            target_changed = new_target != cost.target_amount
            if target_changed:
                paid = self.db.sum_payments(cost_id)
                if new_target < paid:
                    raise ValidationError(
                        f"Target amount {new_target} cannot be less than the "
                        f"{paid} already paid"
                    )

            if changes:
                self.db.update_cost(cost_id, changes)
            if target_changed:
                self.reconciliation.recompute(cost_id)
            updated = self.get_cost(cost_id)

        logger.info("Updated cost %s (%s)", cost_id, ", ".join(sorted(changes)) or "no changes")
        return updated

    def delete_cost(self, cost_id: int) -> int:
        """Delete a cost together with its payments.

        Returns:
            Number of payments deleted with the cost

        Raises:
            NotFoundError: If the cost doesn't exist
        """
        with self.db.atomic(cost_id):
            self.get_cost(cost_id)
            removed = self.db.delete_cost(cost_id)
        logger.info("Deleted cost %s and %s payment(s)", cost_id, removed)
        return removed

    def reconcile(self, cost_id: int) -> PaymentSummary:
        """Recompute one cost's aggregate from its ledger.

        Raises:
            NotFoundError: If the cost doesn't exist
        """
        with self.db.atomic(cost_id):
            return self.reconciliation.recompute(cost_id)

    def reconcile_all(self) -> int:
        """Recompute every cost, one unit of work per cost.

        Returns:
            Number of costs whose cached aggregate was out of date
        """
        changed = 0
        for cost_id in self.db.list_cost_ids():
            with self.db.atomic(cost_id):
                before = self.db.get_cost(cost_id)
                if before is None:
                    # Deleted since the ID list was read.
                    continue
                summary = self.reconciliation.recompute(cost_id)
            if (before.amount_paid, before.payment_status) != (
                summary.amount_paid,
                summary.payment_status,
            ):
                changed += 1
        if changed:
            logger.info("Repaired payment aggregates on %s cost(s)", changed)
        return changed
