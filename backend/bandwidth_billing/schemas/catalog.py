from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    is_active: bool = True


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    category_id: Optional[int] = None
    description: Optional[str] = None
    unit: str = "Mbps"
    unit_price: Decimal = Field(Decimal("0"), ge=0, allow_inf_nan=False)


class ItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    category_id: Optional[int] = None
    description: Optional[str] = None
    unit: Optional[str] = None
    unit_price: Optional[Decimal] = Field(None, ge=0, allow_inf_nan=False)
    is_active: Optional[bool] = None


class ItemResponse(BaseModel):
    id: int
    category_id: Optional[int] = None
    name: str
    description: Optional[str]
    unit: str
    unit_price: Decimal
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
