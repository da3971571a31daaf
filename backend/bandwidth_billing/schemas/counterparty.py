from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal


class CounterpartyBase(BaseModel):
    name: str = Field(..., min_length=1)
    company_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    contact_person: Optional[str] = None
    account_number: Optional[str] = None
    notes: Optional[str] = None


class CounterpartyUpdate(BaseModel):
    """Partial update; balances are not editable here"""
    name: Optional[str] = Field(None, min_length=1)
    company_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    contact_person: Optional[str] = None
    account_number: Optional[str] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None


class ProviderCreate(CounterpartyBase):
    pass


class ClientCreate(CounterpartyBase):
    pop_name: Optional[str] = None
    vlan_name: Optional[str] = None
    ip_address: Optional[str] = None


class ClientUpdate(CounterpartyUpdate):
    pop_name: Optional[str] = None
    vlan_name: Optional[str] = None
    ip_address: Optional[str] = None


class ProviderResponse(CounterpartyBase):
    id: int
    total_due: Decimal
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClientResponse(ClientCreate):
    id: int
    total_receivable: Decimal
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
