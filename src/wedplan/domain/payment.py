"""Payment ledger domain service."""

import logging
from datetime import datetime, UTC
from typing import Any, Optional

from wedplan.database.base import Database
from wedplan.domain.entities import PaymentEntry, PaymentSummary
from wedplan.domain.errors import (
    ExceedsRemainingError,
    NotFoundError,
    StoreError,
    cost_not_found,
    exceeds_remaining,
    payment_not_found,
)
from wedplan.domain.money import ZERO, to_positive_money
from wedplan.domain.reconciliation import ReconciliationService, target_amount

logger = logging.getLogger(__name__)


def as_utc(moment: datetime) -> datetime:
    """Convert a timestamp to UTC, reading naive values as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


class PaymentLedger:
    """Service owning the append/remove operations on a cost's payments.

    Every mutation runs inside ``db.atomic(cost_id)``: the balance check,
    the ledger change and the recompute of the cost's aggregate commit
    together, and are strictly ordered against other mutations of the
    same cost.
    """

    def __init__(self, db: Database, reconciliation: Optional[ReconciliationService] = None):
        """Initialize payment ledger.

        Args:
            db: Database instance
            reconciliation: Reconciliation service; defaults to one backed by db
        """
        self.db = db
        self.reconciliation = reconciliation or ReconciliationService(db, db)

    def add_payment(
        self,
        cost_id: int,
        amount: Any,
        note: Optional[str] = None,
        payment_date: Optional[datetime] = None,
    ) -> PaymentEntry:
        """Record a payment against a cost.

        Args:
            cost_id: Cost ID
            amount: Positive amount (Decimal, number or numeric string)
            note: Optional free text
            payment_date: Optional payment timestamp; defaults to now. Stored
                in UTC, naive values are taken to be UTC already

        Returns:
            The created PaymentEntry

        Raises:
            InvalidAmountError: If amount is not a positive number
            NotFoundError: If the cost doesn't exist
            ExceedsRemainingError: If amount is above the remaining balance
        """
        amount = to_positive_money(amount)
        note = note.strip() if note and note.strip() else None
        payment_date = as_utc(payment_date) if payment_date is not None else datetime.now(UTC)

        with self.db.atomic(cost_id):
            cost = self.db.get_cost(cost_id)
            if cost is None:
                raise NotFoundError(cost_not_found(cost_id))

            # Balance from the live ledger, not the cached aggregate.
            paid = self.db.sum_payments(cost_id)
            remaining = max(target_amount(cost.value, cost.total_amount) - paid, ZERO)
            if amount > remaining:
                logger.warning(
                    "Rejected payment of %s on cost %s: remaining balance is %s",
                    amount,
                    cost_id,
                    remaining,
                )
                raise ExceedsRemainingError(exceeds_remaining(amount, remaining), remaining)

            payment_id = self.db.create_payment(
                cost_id=cost_id, amount=amount, payment_date=payment_date, note=note
            )
            summary = self.reconciliation.recompute(cost_id)
            payment = self.db.get_payment(payment_id)
            if payment is None:
                raise StoreError(f"Payment {payment_id} vanished after insert")

        logger.info(
            "Added payment %s of %s to cost %s (paid %s, %s)",
            payment.id,
            amount,
            cost_id,
            summary.amount_paid,
            summary.payment_status.value,
        )
        return payment

    def delete_payment(self, payment_id: int) -> PaymentSummary:
        """Remove a payment and reconcile its cost.

        Args:
            payment_id: Payment ID

        Returns:
            The cost's PaymentSummary after the removal

        Raises:
            NotFoundError: If the payment doesn't exist
        """
        payment = self.db.get_payment(payment_id)
        if payment is None:
            raise NotFoundError(payment_not_found(payment_id))
        cost_id = payment.cost_id

        with self.db.atomic(cost_id):
            # Re-read under the cost lock; a concurrent delete may have won.
            if self.db.get_payment(payment_id) is None:
                raise NotFoundError(payment_not_found(payment_id))
            self.db.delete_payment(payment_id)
            summary = self.reconciliation.recompute(cost_id)

        logger.info(
            "Deleted payment %s from cost %s (paid %s, %s)",
            payment_id,
            cost_id,
            summary.amount_paid,
            summary.payment_status.value,
        )
        return summary

    def list_payments(self, cost_id: int) -> list[PaymentEntry]:
        """List a cost's payments, most recent first.

        An unknown cost has an empty ledger.
        """
        return self.db.list_payments(cost_id)

    def get_payment(self, payment_id: int) -> Optional[PaymentEntry]:
        """Get payment by ID."""
        return self.db.get_payment(payment_id)
