from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal
from bandwidth_billing.schemas.pricing import LineItemInput
from bandwidth_billing.utils.pricing_rules import PaymentStatus


class BillLineResponse(BaseModel):
    id: int
    line_no: int
    item_id: Optional[int]
    item_name: str
    description: Optional[str]
    unit: Optional[str]
    quantity: Decimal
    rate: Decimal
    vat_percent: Decimal
    from_date: Optional[date]
    to_date: Optional[date]
    amount: Decimal
    vat_amount: Decimal
    total: Decimal

    class Config:
        from_attributes = True


class BillingDocumentCreate(BaseModel):
    """Fields common to purchase bills and sales invoices"""
    billing_date: date
    items: List[LineItemInput] = Field(..., min_length=1)
    discount: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False)
    currency: Optional[str] = None
    remarks: Optional[str] = None
    created_by: Optional[str] = None


class PurchaseBillCreate(BillingDocumentCreate):
    provider_id: Optional[int] = None
    paid_amount: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False)  # Paid up front, at creation
    payment_method: Optional[str] = None
    paid_by: Optional[str] = None
    received_by: Optional[str] = None


class SalesInvoiceCreate(BillingDocumentCreate):
    client_id: Optional[int] = None
    due_date: Optional[date] = None


class BillingDocumentUpdate(BaseModel):
    """Header fields that may change after creation; lines and totals are fixed"""
    billing_date: Optional[date] = None
    currency: Optional[str] = None
    remarks: Optional[str] = None


class PurchaseBillUpdate(BillingDocumentUpdate):
    payment_method: Optional[str] = None
    paid_by: Optional[str] = None
    received_by: Optional[str] = None


class SalesInvoiceUpdate(BillingDocumentUpdate):
    due_date: Optional[date] = None


class BillingDocumentResponse(BaseModel):
    id: int
    invoice_number: str
    billing_date: date
    currency: str
    subtotal: Decimal
    vat_amount: Decimal
    discount: Decimal
    total_amount: Decimal
    paid_amount: Decimal
    due_amount: Decimal
    payment_status: PaymentStatus
    remarks: Optional[str]
    created_by: Optional[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: List[BillLineResponse] = []

    class Config:
        from_attributes = True


class PurchaseBillResponse(BillingDocumentResponse):
    provider_id: Optional[int]
    provider_name: Optional[str] = None
    payment_method: Optional[str]
    paid_by: Optional[str]
    received_by: Optional[str]


class SalesInvoiceResponse(BillingDocumentResponse):
    client_id: Optional[int]
    client_name: Optional[str] = None
    due_date: Optional[date]
