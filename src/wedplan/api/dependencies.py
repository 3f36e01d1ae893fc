"""FastAPI dependencies."""

from fastapi import Request

from wedplan.database.base import Database
from wedplan.domain.budget import BudgetService
from wedplan.domain.category import CategoryService
from wedplan.domain.cost import CostService
from wedplan.domain.payment import PaymentLedger


def get_db(request: Request) -> Database:
    """Return the database the application was created with."""
    return request.app.state.db


def get_cost_service(request: Request) -> CostService:
    return CostService(get_db(request))


def get_payment_ledger(request: Request) -> PaymentLedger:
    return PaymentLedger(get_db(request))


def get_category_service(request: Request) -> CategoryService:
    return CategoryService(get_db(request))


def get_budget_service(request: Request) -> BudgetService:
    return BudgetService(get_db(request))
