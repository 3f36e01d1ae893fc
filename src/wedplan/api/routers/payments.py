from typing import List, Optional

from fastapi import APIRouter, Depends, status

from wedplan.api.dependencies import get_payment_ledger
from wedplan.api.schemas import PaymentCreate, PaymentDeleteResponse, PaymentResponse
from wedplan.domain.errors import ValidationError
from wedplan.domain.payment import PaymentLedger

router = APIRouter()


@router.get("", response_model=List[PaymentResponse])
def list_payments(
    cost_id: Optional[int] = None, ledger: PaymentLedger = Depends(get_payment_ledger)
):
    """List a cost's payments, most recent first"""
    if cost_id is None:
        raise ValidationError("cost_id is required")
    return [PaymentResponse.from_entity(p) for p in ledger.list_payments(cost_id)]


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def add_payment(body: PaymentCreate, ledger: PaymentLedger = Depends(get_payment_ledger)):
    """Record a payment and reconcile its cost"""
    payment = ledger.add_payment(
        cost_id=body.cost_id,
        amount=body.amount,
        note=body.note,
        payment_date=body.payment_date,
    )
    return PaymentResponse.from_entity(payment)


@router.delete("/{payment_id}", response_model=PaymentDeleteResponse)
def delete_payment(payment_id: int, ledger: PaymentLedger = Depends(get_payment_ledger)):
    """Delete a payment and reconcile its cost"""
    summary = ledger.delete_payment(payment_id)
    return PaymentDeleteResponse.from_entity(summary)
