from pydantic import BaseModel, Field
from typing import List, Optional, Union
from decimal import Decimal
from datetime import date
from bandwidth_billing.utils.pricing_rules import PaymentStatus


class LinePriceResponse(BaseModel):
    """Priced breakdown of a single line (un-rounded)"""
    amount: Decimal
    vat_amount: Decimal
    total: Decimal
    prorated: bool = False
    days_count: Optional[int] = None
    days_in_month: Optional[int] = None

    class Config:
        from_attributes = True


class LineItemInput(BaseModel):
    """
    One billable row of a purchase bill or sales invoice as submitted by a
    client. Dates are kept loose so that an unparseable range falls back to
    flat pricing instead of failing the request.
    """
    item_id: Optional[int] = None
    item_name: str = ""
    description: str = ""
    unit: str = ""
    quantity: Decimal = Field(Decimal("1"), ge=0, allow_inf_nan=False)
    rate: Optional[Decimal] = Field(None, ge=0, allow_inf_nan=False)  # None: use the catalog item's unit_price
    vat_percent: Decimal = Field(Decimal("0"), ge=0, le=100, allow_inf_nan=False)
    from_date: Optional[Union[date, str]] = None
    to_date: Optional[Union[date, str]] = None


class LinePriceRequest(BaseModel):
    rate: Decimal = Field(..., ge=0, allow_inf_nan=False)
    quantity: Decimal = Field(Decimal("1"), ge=0, allow_inf_nan=False)
    vat_percent: Decimal = Field(Decimal("0"), ge=0, le=100, allow_inf_nan=False)
    from_date: Optional[Union[date, str]] = None
    to_date: Optional[Union[date, str]] = None


class InvoicePriceRequest(BaseModel):
    lines: List[LinePriceRequest] = []
    discount: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False)
    paid_amount: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False)


class InvoicePriceResponse(BaseModel):
    subtotal: Decimal
    vat_amount: Decimal
    discount: Decimal
    total_amount: Decimal
    paid_amount: Decimal
    due_amount: Decimal
    payment_status: PaymentStatus
    lines: List[LinePriceResponse] = []
