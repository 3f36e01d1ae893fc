"""Payment reconciliation domain service.

The reconciliation service is the only writer of a cost's ``amount_paid``
and ``payment_status``. It always derives them from the full payment
ledger, never from the previously cached values, so any drift between
the cache and the ledger is repaired by the next recompute.
"""

import logging
from decimal import Decimal
from typing import Optional

from wedplan.database.base import CostRepository, PaymentRepository
from wedplan.domain.entities import CostRecord, PaymentStatus, PaymentSummary
from wedplan.domain.errors import NotFoundError, cost_not_found
from wedplan.domain.money import ZERO

logger = logging.getLogger(__name__)


def target_amount(value: Decimal, total_amount: Optional[Decimal]) -> Decimal:
    """Return the amount a cost must reach to be paid."""
    return total_amount if total_amount is not None else value


def derive_payment_status(amount_paid: Decimal, target: Decimal) -> PaymentStatus:
    """Derive a payment status from the paid amount and the target.

    A zero (or negative) target can never be satisfied and is always unpaid.
    A paid amount above the target only arises from pre-existing data and
    counts as paid.
    """
    if target <= ZERO:
        return PaymentStatus.UNPAID
    if amount_paid >= target:
        return PaymentStatus.PAID
    if amount_paid > ZERO:
        return PaymentStatus.PARTIAL
    return PaymentStatus.UNPAID


class ReconciliationService:
    """Service that derives and persists a cost's payment aggregate."""

    def __init__(self, costs: CostRepository, payments: PaymentRepository):
        """Initialize reconciliation service.

        Args:
            costs: Repository holding cost records
            payments: Repository holding the payment ledger
        """
        self.costs = costs
        self.payments = payments

    def _require_cost(self, cost_id: int) -> CostRecord:
        cost = self.costs.get_cost(cost_id)
        if cost is None:
            raise NotFoundError(cost_not_found(cost_id))
        return cost

    def summary_for(self, cost_id: int) -> PaymentSummary:
        """Compute the payment aggregate from the ledger without persisting it.

        Args:
            cost_id: Cost ID

        Returns:
            PaymentSummary derived from the live ledger

        Raises:
            NotFoundError: If the cost doesn't exist
        """
        cost = self._require_cost(cost_id)
        amount_paid = self.payments.sum_payments(cost_id)
        target = target_amount(cost.value, cost.total_amount)
        return PaymentSummary(
            cost_id=cost_id,
            amount_paid=amount_paid,
            payment_status=derive_payment_status(amount_paid, target),
            target_amount=target,
        )

    def recompute(self, cost_id: int) -> PaymentSummary:
        """Recompute a cost's aggregate from its ledger and persist it.

        Args:
            cost_id: Cost ID

        Returns:
            The new PaymentSummary

        Raises:
            NotFoundError: If the cost doesn't exist
        """
        summary = self.summary_for(cost_id)
        if summary.amount_paid > summary.target_amount:
            logger.warning(
                "Cost %s ledger total %s is above its target %s",
                cost_id,
                summary.amount_paid,
                summary.target_amount,
            )
        self.costs.save_payment_summary(cost_id, summary.amount_paid, summary.payment_status)
        logger.debug(
            "Reconciled cost %s: paid=%s status=%s",
            cost_id,
            summary.amount_paid,
            summary.payment_status.value,
        )
        return summary

