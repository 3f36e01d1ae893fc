from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Request

from wedplan.api.dependencies import get_budget_service
from wedplan.api.schemas import BudgetSummaryResponse
from wedplan.domain.budget import BudgetService
from wedplan.domain.money import to_positive_money

router = APIRouter()


@router.get("/summary", response_model=BudgetSummaryResponse)
def budget_summary(
    request: Request,
    total_budget: Optional[Decimal] = None,
    service: BudgetService = Depends(get_budget_service),
):
    """Planned and paid totals, per category and overall"""
    if total_budget is None:
        total_budget = request.app.state.settings.TOTAL_BUDGET
    if total_budget is not None:
        total_budget = to_positive_money(total_budget, "total budget")
    return BudgetSummaryResponse.from_entity(service.summarize(total_budget=total_budget))
