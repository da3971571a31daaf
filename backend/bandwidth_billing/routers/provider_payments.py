from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from bandwidth_billing.database import get_db
from bandwidth_billing.dependencies import get_tenant_id
from bandwidth_billing.exceptions import NotFoundError, ValidationFailedError
from bandwidth_billing.schemas.ledger import ProviderPaymentCreate, ProviderPaymentUpdate, ProviderPaymentResponse
from bandwidth_billing.services.ledger_service import ledger_service, PROVIDER_PAYMENT

router = APIRouter(prefix="/api/provider-payments", tags=["provider-payments"])


@router.get("", response_model=List[ProviderPaymentResponse])
def list_provider_payments(
    provider_id: Optional[int] = Query(None, description="Filter by provider ID"),
    bill_id: Optional[int] = Query(None, description="Filter by purchase bill ID"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """List money paid to providers"""
    return ledger_service.list_entries(
        PROVIDER_PAYMENT, tenant_id, db, counterparty_id=provider_id, document_id=bill_id, skip=skip, limit=limit
    )


@router.post("", response_model=ProviderPaymentResponse, status_code=201)
def record_provider_payment(payment: ProviderPaymentCreate, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Record a payment to a provider, settling the linked bill if any"""
    try:
        return ledger_service.record_provider_payment(tenant_id, payment, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{payment_id}", response_model=ProviderPaymentResponse)
def update_provider_payment(
    payment_id: int,
    changes: ProviderPaymentUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    try:
        return ledger_service.update_provider_payment(payment_id, tenant_id, changes, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{payment_id}")
def delete_provider_payment(
    payment_id: int,
    user_identifier: Optional[str] = Query(None, description="Who is deleting, for the activity log"),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """Delete a provider payment and reverse its effect on the bill and provider"""
    try:
        ledger_service.delete_provider_payment(payment_id, tenant_id, db, user_identifier)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Provider payment deleted", "payment_id": payment_id}
