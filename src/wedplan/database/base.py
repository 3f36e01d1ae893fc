"""Abstract repository and database interfaces."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from wedplan.domain.entities import (
    Category,
    CostRecord,
    PaymentEntry,
    PaymentStatus,
)

# Columns a client may change through update_cost. The payment aggregate is
# written only through save_payment_summary.
EDITABLE_COST_FIELDS = frozenset(
    {"name", "value", "total_amount", "category_id", "due_date", "paid_date", "notes"}
)


class CostRepository(ABC):
    """Storage of cost records."""

    @abstractmethod
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
        """Create a cost with an unpaid, zero aggregate. Returns cost ID."""
        pass

    @abstractmethod
    def get_cost(self, cost_id: int) -> Optional[CostRecord]:
        """Get cost by ID."""
        pass

    @abstractmethod
    def list_costs(
        self,
        category_id: Optional[int] = None,
        status: Optional[PaymentStatus] = None,
    ) -> list[CostRecord]:
        """List costs, newest first, with optional filters."""
        pass

    @abstractmethod
    def list_cost_ids(self) -> list[int]:
        """List the IDs of all costs."""
        pass

    @abstractmethod
    def update_cost(self, cost_id: int, fields: dict[str, Any]) -> None:
        """Update editable cost columns.

        Args:
            cost_id: Cost ID
            fields: Mapping of column name to new value; keys must be in
                EDITABLE_COST_FIELDS
        """
        pass

    @abstractmethod
    def delete_cost(self, cost_id: int) -> int:
        """Delete a cost together with its payments.

        Returns:
            Number of payments deleted with the cost
        """
        pass

    @abstractmethod
    def save_payment_summary(
        self, cost_id: int, amount_paid: Decimal, payment_status: PaymentStatus
    ) -> None:
        """Persist the reconciled payment aggregate onto a cost."""
        pass

    @abstractmethod
    def count_costs_for_category(self, category_id: int) -> int:
        """Count costs that reference a category."""
        pass


class PaymentRepository(ABC):
    """Storage of payment ledger entries."""

    @abstractmethod
    def create_payment(
        self,
        cost_id: int,
        amount: Decimal,
        payment_date: datetime,
        note: Optional[str] = None,
    ) -> int:
        """Append a payment to a cost's ledger. Returns payment ID."""
        pass

    @abstractmethod
    def get_payment(self, payment_id: int) -> Optional[PaymentEntry]:
        """Get payment by ID."""
        pass

    @abstractmethod
    def list_payments(self, cost_id: int) -> list[PaymentEntry]:
        """List payments for a cost, most recent payment date first."""
        pass

    @abstractmethod
    def delete_payment(self, payment_id: int) -> None:
        """Remove a payment from the ledger."""
        pass

    @abstractmethod
    def sum_payments(self, cost_id: int) -> Decimal:
        """Sum every payment amount recorded for a cost."""
        pass


class CategoryRepository(ABC):
    """Storage of categories."""

    @abstractmethod
    def create_category(self, name: str) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by exact name."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories ordered by name."""
        pass

    @abstractmethod
    def rename_category(self, category_id: int, name: str) -> None:
        """Rename a category."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        pass


class Database(CostRepository, PaymentRepository, CategoryRepository):
    """Abstract database interface for wedplan."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self, cost_id: Optional[int] = None) -> AbstractContextManager[None]:
        """Run the enclosed repository calls as one unit of work.

        Everything inside the block commits together or not at all. When
        ``cost_id`` is given, units of work for the same cost are strictly
        serialized; units for different costs may run in parallel. Nested
        blocks join the outer unit of work.
        """
        pass
