"""In-memory database implementation.

Keeps the same contract as SQLAlchemyDatabase without any storage engine,
which makes it the substitute of choice in service tests. Rollback is an
undo log kept per thread, so a failed unit of work on one cost never
disturbs concurrent work on another.

Writes are applied in place and undone on failure, so there is no
private transaction buffer. To keep callers from acting on a write that
may still be rolled back, get_cost, list_payments and sum_payments called
outside a unit of work wait for any unit in flight on that cost.
Whole-table reads such as list_costs and get_payment do not wait.
"""

import itertools
import threading
from contextlib import contextmanager, nullcontext
from dataclasses import replace
from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Any, Callable, Iterator, Optional

from wedplan.database.base import Database, EDITABLE_COST_FIELDS
from wedplan.database.locks import KeyedLock
from wedplan.domain.entities import Category, CostRecord, PaymentEntry, PaymentStatus
from wedplan.domain.errors import (
    StoreError,
    NotFoundError,
    ValidationError,
    category_not_found,
    cost_not_found,
    payment_not_found,
)
from wedplan.domain.money import ZERO


class InMemoryDatabase(Database):
    """Dict-backed implementation of Database interface."""

    def __init__(self) -> None:
        self._guard = threading.RLock()
        self._cost_locks = KeyedLock()
        self._local = threading.local()
        self._costs: dict[int, CostRecord] = {}
        self._payments: dict[int, PaymentEntry] = {}
        self._categories: dict[int, Category] = {}
        self._cost_ids = itertools.count(1)
        self._payment_ids = itertools.count(1)
        self._category_ids = itertools.count(1)

    def connect(self) -> None:
        """Connect to the database."""
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    def initialize_schema(self) -> None:
        """Initialize database schema."""
        pass

    def _record_undo(self, undo: Callable[[], None]) -> None:
        journal = getattr(self._local, "journal", None)
        if journal is not None:
            journal.append(undo)

    def _settled(self, cost_id: int):
        if getattr(self._local, "journal", None) is not None:
            return nullcontext()
        return self._cost_locks.hold(cost_id)

    @contextmanager
    def atomic(self, cost_id: Optional[int] = None) -> Iterator[None]:
        """Run the enclosed calls as one unit of work, serialized per cost."""
        lock = self._cost_locks.hold(cost_id) if cost_id is not None else nullcontext()
        with lock:
            if getattr(self._local, "journal", None) is not None:
                yield
                return

            journal: list[Callable[[], None]] = []
            self._local.journal = journal
            try:
                yield
            except BaseException:
                with self._guard:
                    for undo in reversed(journal):
                        undo()
                raise
            finally:
                self._local.journal = None

    # Cost operations
    def create_cost(
        self,
        name: str,
        value: Decimal,
        total_amount: Optional[Decimal] = None,
        category_id: Optional[int] = None,
        due_date: Optional[date] = None,
        paid_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a cost. Returns cost ID."""
        with self._guard:
            if category_id is not None and category_id not in self._categories:
                raise StoreError(f"Foreign key violation: {category_not_found(category_id)}")
            cost_id = next(self._cost_ids)
            self._costs[cost_id] = CostRecord(
                id=cost_id,
                name=name,
                value=value,
                total_amount=total_amount,
                category_id=category_id,
                due_date=due_date,
                paid_date=paid_date,
                notes=notes,
                amount_paid=ZERO,
                payment_status=PaymentStatus.UNPAID,
                created_at=datetime.now(UTC),
            )
            self._record_undo(lambda: self._costs.pop(cost_id, None))
            return cost_id

    def get_cost(self, cost_id: int) -> Optional[CostRecord]:
        """Get cost by ID."""
        with self._settled(cost_id), self._guard:
            return self._costs.get(cost_id)

    def list_costs(
        self,
        category_id: Optional[int] = None,
        status: Optional[PaymentStatus] = None,
    ) -> list[CostRecord]:
        """List costs with optional filters."""
        with self._guard:
            costs = list(self._costs.values())
        if category_id is not None:
            costs = [c for c in costs if c.category_id == category_id]
        if status is not None:
            costs = [c for c in costs if c.payment_status == PaymentStatus(status)]
        return sorted(costs, key=lambda c: (c.created_at, c.id), reverse=True)

    def list_cost_ids(self) -> list[int]:
        """List the IDs of all costs."""
        with self._guard:
            return sorted(self._costs)

    def _replace_cost(self, cost_id: int, **changes: Any) -> None:
        old = self._costs.get(cost_id)
        if old is None:
            raise NotFoundError(cost_not_found(cost_id))
        self._costs[cost_id] = replace(old, **changes)
        self._record_undo(lambda: self._costs.__setitem__(cost_id, old))

    def update_cost(self, cost_id: int, fields: dict[str, Any]) -> None:
        """Update editable cost columns."""
        unknown = set(fields) - EDITABLE_COST_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update cost fields: {', '.join(sorted(unknown))}")
        with self._guard:
            category_id = fields.get("category_id")
            if category_id is not None and category_id not in self._categories:
                raise StoreError(f"Foreign key violation: {category_not_found(category_id)}")
            self._replace_cost(cost_id, **fields)

    def delete_cost(self, cost_id: int) -> int:
        """Delete a cost and its payments. Returns the number of payments removed."""
        with self._guard:
            cost = self._costs.pop(cost_id, None)
            if cost is None:
                raise NotFoundError(cost_not_found(cost_id))
            removed = {pid: p for pid, p in self._payments.items() if p.cost_id == cost_id}
            for payment_id in removed:
                del self._payments[payment_id]

            def undo() -> None:
                self._costs[cost_id] = cost
                self._payments.update(removed)

            self._record_undo(undo)
            return len(removed)

    def save_payment_summary(
        self, cost_id: int, amount_paid: Decimal, payment_status: PaymentStatus
    ) -> None:
        """Persist the reconciled aggregate onto a cost."""
        with self._guard:
            self._replace_cost(
                cost_id, amount_paid=amount_paid, payment_status=PaymentStatus(payment_status)
            )

    def count_costs_for_category(self, category_id: int) -> int:
        """Count costs that reference a category."""
        with self._guard:
            return sum(1 for c in self._costs.values() if c.category_id == category_id)

    # Payment operations
    def create_payment(
        self,
        cost_id: int,
        amount: Decimal,
        payment_date: datetime,
        note: Optional[str] = None,
    ) -> int:
        """Append a payment. Returns payment ID."""
        with self._guard:
            if cost_id not in self._costs:
                raise StoreError(f"Foreign key violation: {cost_not_found(cost_id)}")
            payment_id = next(self._payment_ids)
            self._payments[payment_id] = PaymentEntry(
                id=payment_id,
                cost_id=cost_id,
                amount=amount,
                payment_date=payment_date,
                note=note,
            )
            self._record_undo(lambda: self._payments.pop(payment_id, None))
            return payment_id

    def get_payment(self, payment_id: int) -> Optional[PaymentEntry]:
        """Get payment by ID."""
        with self._guard:
            return self._payments.get(payment_id)

    def list_payments(self, cost_id: int) -> list[PaymentEntry]:
        """List payments for a cost, most recent first."""
        with self._settled(cost_id), self._guard:
            payments = [p for p in self._payments.values() if p.cost_id == cost_id]
        return sorted(payments, key=lambda p: (p.payment_date, p.id), reverse=True)

    def delete_payment(self, payment_id: int) -> None:
        """Remove a payment."""
        with self._guard:
            payment = self._payments.pop(payment_id, None)
            if payment is None:
                raise NotFoundError(payment_not_found(payment_id))
            self._record_undo(lambda: self._payments.__setitem__(payment_id, payment))

    def sum_payments(self, cost_id: int) -> Decimal:
        """Sum every payment recorded for a cost."""
        with self._settled(cost_id), self._guard:
            return sum((p.amount for p in self._payments.values() if p.cost_id == cost_id), ZERO)

    # Category operations
    def create_category(self, name: str) -> int:
        """Create a category. Returns category ID."""
        with self._guard:
            if any(c.name == name for c in self._categories.values()):
                raise StoreError(f"Category with name '{name}' already exists")
            category_id = next(self._category_ids)
            self._categories[category_id] = Category(
                id=category_id, name=name, created_at=datetime.now(UTC)
            )
            self._record_undo(lambda: self._categories.pop(category_id, None))
            return category_id

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        with self._guard:
            return self._categories.get(category_id)

    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name."""
        with self._guard:
            for category in self._categories.values():
                if category.name == name:
                    return category
            return None

    def list_categories(self) -> list[Category]:
        """List all categories."""
        with self._guard:
            return sorted(self._categories.values(), key=lambda c: c.name)

    def rename_category(self, category_id: int, name: str) -> None:
        """Rename a category."""
        with self._guard:
            old = self._categories.get(category_id)
            if old is None:
                raise NotFoundError(category_not_found(category_id))
            self._categories[category_id] = replace(old, name=name)
            self._record_undo(lambda: self._categories.__setitem__(category_id, old))

    def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        with self._guard:
            category = self._categories.pop(category_id, None)
            if category is None:
                raise NotFoundError(category_not_found(category_id))
            self._record_undo(lambda: self._categories.__setitem__(category_id, category))
