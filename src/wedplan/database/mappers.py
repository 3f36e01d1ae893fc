"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic, so the domain entities stay
stable when the table layout changes.
"""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

from wedplan.domain import entities as domain
from wedplan.domain.money import CENT
from wedplan.database.models import (
    Category as ORMCategory,
    Cost as ORMCost,
    Payment as ORMPayment,
)


def money_from_column(value) -> Decimal:
    """Normalize a stored NUMERIC value to a two-place Decimal."""
    return Decimal(value).quantize(CENT)


def datetime_from_column(value: Optional[datetime]) -> Optional[datetime]:
    """Return a stored timestamp as an aware UTC datetime.

    SQLite keeps no offset, so naive values read back are UTC wall-clock time.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        created_at=datetime_from_column(orm_category.created_at),
    )


def cost_to_domain(orm_cost: ORMCost) -> domain.CostRecord:
    """Convert SQLAlchemy Cost model to domain CostRecord entity."""
    return domain.CostRecord(
        id=orm_cost.id,
        name=orm_cost.name,
        value=money_from_column(orm_cost.value),
        total_amount=money_from_column(orm_cost.total_amount) if orm_cost.total_amount is not None else None,
        category_id=orm_cost.category_id,
        due_date=orm_cost.due_date,
        paid_date=orm_cost.paid_date,
        notes=orm_cost.notes,
        amount_paid=money_from_column(orm_cost.amount_paid or 0),
        payment_status=domain.PaymentStatus(orm_cost.payment_status),
        created_at=datetime_from_column(orm_cost.created_at),
    )


def payment_to_domain(orm_payment: ORMPayment) -> domain.PaymentEntry:
    """Convert SQLAlchemy Payment model to domain PaymentEntry entity."""
    return domain.PaymentEntry(
        id=orm_payment.id,
        cost_id=orm_payment.cost_id,
        amount=money_from_column(orm_payment.amount),
        payment_date=datetime_from_column(orm_payment.payment_date),
        note=orm_payment.note,
    )
