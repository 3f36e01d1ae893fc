"""Tests for database mappers."""

import pytest
from datetime import datetime, date, UTC
from decimal import Decimal

from wedplan.database.models import (
    Category as ORMCategory,
    Cost as ORMCost,
    Payment as ORMPayment,
)
from wedplan.database.mappers import (
    category_to_domain,
    cost_to_domain,
    money_from_column,
    payment_to_domain,
)
from wedplan.domain.entities import Category, CostRecord, PaymentEntry, PaymentStatus


def test_money_from_column():
    """Test that stored numerics come back as two-place Decimals."""
    assert money_from_column(Decimal("10")) == Decimal("10.00")
    assert money_from_column(Decimal("10")).as_tuple().exponent == -2
    assert money_from_column(0) == Decimal("0.00")


def test_category_to_domain():
    """Test converting ORM Category to domain Category."""
    orm_category = ORMCategory(id=1, name="Venue", created_at=datetime.now(UTC))

    domain_category = category_to_domain(orm_category)

    assert isinstance(domain_category, Category)
    assert domain_category.id == 1
    assert domain_category.name == "Venue"
    assert domain_category.created_at == orm_category.created_at


class TestCostMapper:
    """Tests for Cost mapper."""

    def test_cost_to_domain(self):
        """Test converting ORM Cost to domain CostRecord."""
        orm_cost = ORMCost(
            id=3,
            name="Castle",
            value=Decimal("1000"),
            total_amount=Decimal("10000"),
            category_id=1,
            due_date=date(2025, 5, 1),
            paid_date=None,
            notes="120 guests",
            amount_paid=Decimal("2500"),
            payment_status="partial",
            created_at=datetime.now(UTC),
        )

        cost = cost_to_domain(orm_cost)

        assert isinstance(cost, CostRecord)
        assert cost.value == Decimal("1000.00")
        assert cost.total_amount == Decimal("10000.00")
        assert cost.target_amount == Decimal("10000.00")
        assert cost.amount_paid == Decimal("2500.00")
        assert cost.payment_status == PaymentStatus.PARTIAL
        assert cost.due_date == date(2025, 5, 1)
        assert cost.notes == "120 guests"

    def test_cost_without_total_or_aggregate(self):
        """Test defaults for a row that was never reconciled."""
        orm_cost = ORMCost(
            id=4,
            name="Cake",
            value=Decimal("500"),
            total_amount=None,
            amount_paid=None,
            payment_status="unpaid",
            created_at=datetime.now(UTC),
        )

        cost = cost_to_domain(orm_cost)

        assert cost.total_amount is None
        assert cost.amount_paid == Decimal("0.00")
        assert cost.payment_status == PaymentStatus.UNPAID


def test_payment_to_domain():
    """Test converting ORM Payment to domain PaymentEntry."""
    when = datetime(2025, 2, 14, 12, 0, tzinfo=UTC)
    orm_payment = ORMPayment(id=7, cost_id=3, amount=Decimal("250.5"), payment_date=when, note="Deposit")

    payment = payment_to_domain(orm_payment)

    assert isinstance(payment, PaymentEntry)
    assert payment.amount == Decimal("250.50")
    assert payment.payment_date == when
    assert payment.note == "Deposit"
