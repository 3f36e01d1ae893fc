"""Request and response models for the HTTP API.

Amounts are accepted as numbers or numeric strings and always returned as
JSON numbers. Request models forbid unknown fields, so the derived
``amount_paid`` and ``payment_status`` can never be set by a client.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from wedplan.domain.entities import (
    BudgetSummary,
    Category,
    CategoryBudget,
    CostRecord,
    PaymentEntry,
    PaymentStatus,
    PaymentSummary,
)

AmountIn = Union[Decimal, str]


def _number(amount: Optional[Decimal]) -> Optional[float]:
    return float(amount) if amount is not None else None


class CostCreate(BaseModel):
    """Request body to create a cost."""

    model_config = ConfigDict(extra="forbid")

    name: str
    value: AmountIn
    total_amount: Optional[AmountIn] = None
    category_id: Optional[int] = None
    due_date: Optional[date] = None
    paid_date: Optional[date] = None
    notes: Optional[str] = None


class CostUpdate(BaseModel):
    """Request body to update a cost. Only the fields sent are changed."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    value: Optional[AmountIn] = None
    total_amount: Optional[AmountIn] = None
    category_id: Optional[int] = None
    due_date: Optional[date] = None
    paid_date: Optional[date] = None
    notes: Optional[str] = None


class CostResponse(BaseModel):
    id: int
    name: str
    value: float
    total_amount: Optional[float]
    target_amount: float
    category_id: Optional[int]
    due_date: Optional[date]
    paid_date: Optional[date]
    notes: Optional[str]
    amount_paid: float
    remaining_amount: float
    payment_status: PaymentStatus
    created_at: datetime

    @classmethod
    def from_entity(cls, cost: CostRecord) -> "CostResponse":
        return cls(
            id=cost.id,
            name=cost.name,
            value=_number(cost.value),
            total_amount=_number(cost.total_amount),
            target_amount=_number(cost.target_amount),
            category_id=cost.category_id,
            due_date=cost.due_date,
            paid_date=cost.paid_date,
            notes=cost.notes,
            amount_paid=_number(cost.amount_paid),
            remaining_amount=_number(cost.remaining_amount),
            payment_status=cost.payment_status,
            created_at=cost.created_at,
        )


class CostDeleteResponse(BaseModel):
    success: bool = True
    payments_deleted: int


class PaymentCreate(BaseModel):
    """Request body to record a payment."""

    model_config = ConfigDict(extra="forbid")

    cost_id: int
    amount: AmountIn
    note: Optional[str] = None
    payment_date: Optional[datetime] = None


class PaymentResponse(BaseModel):
    id: int
    cost_id: int
    amount: float
    payment_date: datetime
    note: Optional[str]

    @classmethod
    def from_entity(cls, payment: PaymentEntry) -> "PaymentResponse":
        return cls(
            id=payment.id,
            cost_id=payment.cost_id,
            amount=_number(payment.amount),
            payment_date=payment.payment_date,
            note=payment.note,
        )


class PaymentSummaryResponse(BaseModel):
    cost_id: int
    amount_paid: float
    target_amount: float
    remaining_amount: float
    payment_status: PaymentStatus

    @classmethod
    def from_entity(cls, summary: PaymentSummary) -> "PaymentSummaryResponse":
        return cls(
            cost_id=summary.cost_id,
            amount_paid=_number(summary.amount_paid),
            target_amount=_number(summary.target_amount),
            remaining_amount=_number(summary.remaining_amount),
            payment_status=summary.payment_status,
        )


class PaymentDeleteResponse(PaymentSummaryResponse):
    success: bool = True


class CategoryCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str


class CategoryUpdate(CategoryCreate):
    pass


class CategoryResponse(BaseModel):
    id: int
    name: str
    created_at: datetime

    @classmethod
    def from_entity(cls, category: Category) -> "CategoryResponse":
        return cls(id=category.id, name=category.name, created_at=category.created_at)


class CategoryBudgetResponse(BaseModel):
    category_id: Optional[int]
    category_name: str
    planned: float
    paid: float
    outstanding: float
    cost_count: int

    @classmethod
    def from_entity(cls, group: CategoryBudget) -> "CategoryBudgetResponse":
        return cls(
            category_id=group.category_id,
            category_name=group.category_name,
            planned=_number(group.planned),
            paid=_number(group.paid),
            outstanding=_number(group.outstanding),
            cost_count=group.cost_count,
        )


class BudgetSummaryResponse(BaseModel):
    planned: float
    paid: float
    outstanding: float
    total_budget: Optional[float]
    budget_remaining: Optional[float]
    percent_used: Optional[int]
    categories: list[CategoryBudgetResponse]
    status_counts: dict[str, int]

    @classmethod
    def from_entity(cls, summary: BudgetSummary) -> "BudgetSummaryResponse":
        return cls(
            planned=_number(summary.planned),
            paid=_number(summary.paid),
            outstanding=_number(summary.outstanding),
            total_budget=_number(summary.total_budget),
            budget_remaining=_number(summary.budget_remaining),
            percent_used=summary.percent_used,
            categories=[CategoryBudgetResponse.from_entity(g) for g in summary.categories],
            status_counts={status.value: n for status, n in summary.status_counts.items()},
        )
