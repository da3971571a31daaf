from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from decimal import Decimal

from bandwidth_billing.database import get_db
from bandwidth_billing.dependencies import get_tenant_id
from bandwidth_billing.exceptions import NotFoundError, ValidationFailedError
from bandwidth_billing.models.sales_invoice import SalesInvoice
from bandwidth_billing.schemas.billing import SalesInvoiceCreate, SalesInvoiceUpdate, SalesInvoiceResponse
from bandwidth_billing.schemas.pricing import InvoicePriceResponse
from bandwidth_billing.services.billing_service import billing_service, SALES_INVOICE
from bandwidth_billing.routers.pricing import quote_response
from bandwidth_billing.utils.pricing_rules import PaymentStatus

router = APIRouter(prefix="/api/sales-invoices", tags=["sales-invoices"])


def _to_response(invoice: SalesInvoice) -> SalesInvoiceResponse:
    response = SalesInvoiceResponse.model_validate(invoice)
    return response.model_copy(update={"client_name": invoice.client.name if invoice.client else None})


@router.get("", response_model=List[SalesInvoiceResponse])
def list_sales_invoices(
    client_id: Optional[int] = Query(None, description="Filter by client ID"),
    payment_status: Optional[PaymentStatus] = Query(None, description="Filter by payment status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """List sales invoices, newest billing date first"""
    invoices = billing_service.list_documents(
        SALES_INVOICE,
        tenant_id,
        db,
        counterparty_id=client_id,
        payment_status=payment_status.value if payment_status else None,
        skip=skip,
        limit=limit
    )
    return [_to_response(invoice) for invoice in invoices]


@router.post("/preview", response_model=InvoicePriceResponse)
def preview_sales_invoice(invoice: SalesInvoiceCreate, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Compute the totals an invoice would get, without saving it"""
    try:
        quote = billing_service.quote(invoice.items, invoice.discount, Decimal("0"), tenant_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return quote_response(quote.totals, quote.settlement)


@router.post("", response_model=SalesInvoiceResponse, status_code=201)
def create_sales_invoice(invoice: SalesInvoiceCreate, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Create a sales invoice; its total is added to the client's receivable"""
    try:
        created = billing_service.create_sales_invoice(tenant_id, invoice, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationFailedError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_response(created)


@router.get("/{invoice_id}", response_model=SalesInvoiceResponse)
def get_sales_invoice(invoice_id: int, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    try:
        invoice = billing_service.get_document(SALES_INVOICE, invoice_id, tenant_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _to_response(invoice)


@router.patch("/{invoice_id}", response_model=SalesInvoiceResponse)
def update_sales_invoice(
    invoice_id: int,
    changes: SalesInvoiceUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """Edit the header (dates, remarks, payment details); lines and totals cannot change"""
    try:
        invoice = billing_service.update_document(SALES_INVOICE, invoice_id, tenant_id, changes.model_dump(exclude_unset=True), db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _to_response(invoice)


@router.delete("/{invoice_id}")
def delete_sales_invoice(invoice_id: int, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    try:
        billing_service.delete_document(SALES_INVOICE, invoice_id, tenant_id, db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Sales invoice deleted", "invoice_id": invoice_id}
