from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from decimal import Decimal


class CollectionCreate(BaseModel):
    client_id: Optional[int] = None
    invoice_id: Optional[int] = None
    collection_date: date
    amount: Decimal = Field(..., gt=0, allow_inf_nan=False)
    payment_method: str = "cash"
    received_by: Optional[str] = None
    remarks: Optional[str] = None
    created_by: Optional[str] = None


class CollectionUpdate(BaseModel):
    collection_date: Optional[date] = None
    amount: Optional[Decimal] = Field(None, gt=0, allow_inf_nan=False)
    payment_method: Optional[str] = None
    received_by: Optional[str] = None
    remarks: Optional[str] = None


class CollectionResponse(BaseModel):
    id: int
    receipt_number: str
    client_id: Optional[int]
    invoice_id: Optional[int]
    collection_date: date
    amount: Decimal
    payment_method: str
    received_by: Optional[str]
    remarks: Optional[str]
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProviderPaymentCreate(BaseModel):
    provider_id: Optional[int] = None
    bill_id: Optional[int] = None
    payment_date: date
    amount: Decimal = Field(..., gt=0, allow_inf_nan=False)
    payment_method: str = "bank_transfer"
    paid_by: Optional[str] = None
    remarks: Optional[str] = None
    created_by: Optional[str] = None


class ProviderPaymentUpdate(BaseModel):
    payment_date: Optional[date] = None
    amount: Optional[Decimal] = Field(None, gt=0, allow_inf_nan=False)
    payment_method: Optional[str] = None
    paid_by: Optional[str] = None
    remarks: Optional[str] = None


class ProviderPaymentResponse(BaseModel):
    id: int
    payment_number: str
    provider_id: Optional[int]
    bill_id: Optional[int]
    payment_date: date
    amount: Decimal
    payment_method: str
    paid_by: Optional[str]
    remarks: Optional[str]
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
