from typing import List, Optional

from fastapi import APIRouter, Depends, status

from wedplan.api.dependencies import get_cost_service
from wedplan.api.schemas import (
    CostCreate,
    CostDeleteResponse,
    CostResponse,
    CostUpdate,
    PaymentSummaryResponse,
)
from wedplan.domain.cost import CostService
from wedplan.domain.entities import PaymentStatus

router = APIRouter()


@router.get("", response_model=List[CostResponse])
def list_costs(
    category_id: Optional[int] = None,
    payment_status: Optional[PaymentStatus] = None,
    service: CostService = Depends(get_cost_service),
):
    """List costs, newest first"""
    costs = service.list_costs(category_id=category_id, status=payment_status)
    return [CostResponse.from_entity(c) for c in costs]


@router.post("", response_model=CostResponse, status_code=status.HTTP_201_CREATED)
def create_cost(body: CostCreate, service: CostService = Depends(get_cost_service)):
    """Create a cost"""
    cost = service.create_cost(**body.model_dump())
    return CostResponse.from_entity(cost)


@router.get("/{cost_id}", response_model=CostResponse)
def get_cost(cost_id: int, service: CostService = Depends(get_cost_service)):
    return CostResponse.from_entity(service.get_cost(cost_id))


@router.put("/{cost_id}", response_model=CostResponse)
def update_cost(
    cost_id: int, body: CostUpdate, service: CostService = Depends(get_cost_service)
):
    """Update the fields present in the body; derived payment fields are read-only"""
    cost = service.update_cost(cost_id, body.model_dump(exclude_unset=True))
    return CostResponse.from_entity(cost)


@router.delete("/{cost_id}", response_model=CostDeleteResponse)
def delete_cost(cost_id: int, service: CostService = Depends(get_cost_service)):
    """Delete a cost together with its payment history"""
    return CostDeleteResponse(payments_deleted=service.delete_cost(cost_id))


@router.post("/{cost_id}/reconcile", response_model=PaymentSummaryResponse)
def reconcile_cost(cost_id: int, service: CostService = Depends(get_cost_service)):
    """Recompute the cost's paid amount and status from its payments"""
    return PaymentSummaryResponse.from_entity(service.reconcile(cost_id))
