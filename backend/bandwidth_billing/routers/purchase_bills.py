from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from bandwidth_billing.database import get_db
from bandwidth_billing.dependencies import get_tenant_id
from bandwidth_billing.exceptions import NotFoundError, ValidationFailedError
from bandwidth_billing.models.purchase_bill import PurchaseBill
from bandwidth_billing.schemas.billing import PurchaseBillCreate, PurchaseBillUpdate, PurchaseBillResponse
from bandwidth_billing.schemas.pricing import InvoicePriceResponse
from bandwidth_billing.services.billing_service import billing_service, PURCHASE_BILL
from bandwidth_billing.routers.pricing import quote_response
from bandwidth_billing.utils.pricing_rules import PaymentStatus

router = APIRouter(prefix="/api/purchase-bills", tags=["purchase-bills"])


def _to_response(bill: PurchaseBill) -> PurchaseBillResponse:
    response = PurchaseBillResponse.model_validate(bill)
    return response.model_copy(update={"provider_name": bill.provider.name if bill.provider else None})


@router.get("", response_model=List[PurchaseBillResponse])
def list_purchase_bills(
    provider_id: Optional[int] = Query(None, description="Filter by provider ID"),
    payment_status: Optional[PaymentStatus] = Query(None, description="Filter by payment status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """List purchase bills, newest billing date first"""
    bills = billing_service.list_documents(
        PURCHASE_BILL,
        tenant_id,
        db,
        counterparty_id=provider_id,
        payment_status=payment_status.value if payment_status else None,
        skip=skip,
        limit=limit
    )
    return [_to_response(bill) for bill in bills]


@router.post("/preview", response_model=InvoicePriceResponse)
def preview_purchase_bill(bill: PurchaseBillCreate, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Compute the totals a bill would get, without saving it"""
    try:
        quote = billing_service.quote(bill.items, bill.discount, bill.paid_amount, tenant_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return quote_response(quote.totals, quote.settlement)


@router.post("", response_model=PurchaseBillResponse, status_code=201)
def create_purchase_bill(bill: PurchaseBillCreate, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Create a purchase bill; its due amount is added to the provider's balance"""
    try:
        created = billing_service.create_purchase_bill(tenant_id, bill, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_response(created)


@router.get("/{bill_id}", response_model=PurchaseBillResponse)
def get_purchase_bill(bill_id: int, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    try:
        bill = billing_service.get_document(PURCHASE_BILL, bill_id, tenant_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _to_response(bill)


@router.patch("/{bill_id}", response_model=PurchaseBillResponse)
def update_purchase_bill(
    bill_id: int,
    changes: PurchaseBillUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """Edit the header (dates, remarks, payment details); lines and totals cannot change"""
    try:
        bill = billing_service.update_document(PURCHASE_BILL, bill_id, tenant_id, changes.model_dump(exclude_unset=True), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _to_response(bill)


@router.delete("/{bill_id}")
def delete_purchase_bill(bill_id: int, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    try:
        billing_service.delete_document(PURCHASE_BILL, bill_id, tenant_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Purchase bill deleted", "bill_id": bill_id}
