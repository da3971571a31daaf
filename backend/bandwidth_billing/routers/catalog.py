from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from bandwidth_billing.database import get_db
from bandwidth_billing.dependencies import get_tenant_id
from bandwidth_billing.models.bandwidth_item import BandwidthItem
from bandwidth_billing.schemas.catalog import ItemCreate, ItemUpdate, ItemResponse
from bandwidth_billing.routers.categories import get_category

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/items", tags=["catalog"])


def _get_item(item_id: int, tenant_id: str, db: Session) -> BandwidthItem:
    item = db.query(BandwidthItem).filter(
        BandwidthItem.id == item_id,
        BandwidthItem.tenant_id == tenant_id
    ).first()
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


@router.get("", response_model=List[ItemResponse])
def list_items(
    include_inactive: bool = Query(False, description="Also return deactivated items"),
    category_id: Optional[int] = Query(None, description="Filter by category ID"),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    """List catalog items"""
    query = db.query(BandwidthItem).filter(BandwidthItem.tenant_id == tenant_id)
    if not include_inactive:
        query = query.filter(BandwidthItem.is_active.is_(True))
    if category_id:
        query = query.filter(BandwidthItem.category_id == category_id)
    return query.order_by(BandwidthItem.name).all()


@router.post("", response_model=ItemResponse, status_code=201)
def create_item(item: ItemCreate, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Add a catalog item"""
    if item.category_id is not None:
        get_category(item.category_id, tenant_id, db)
    record = BandwidthItem(tenant_id=tenant_id, **item.model_dump())
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info(f"Created item {record.name} (ID: {record.id}) for tenant {tenant_id}")
    return record


@router.patch("/{item_id}", response_model=ItemResponse)
def update_item(item_id: int, changes: ItemUpdate, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Update a catalog item. Existing bills keep the rate they were created with."""
    item = _get_item(item_id, tenant_id, db)
    data = changes.model_dump(exclude_unset=True)
    if data.get("category_id") is not None:
        get_category(data["category_id"], tenant_id, db)
    for field, value in data.items():
        setattr(item, field, value)
    db.commit()
    db.refresh(item)
    return item


@router.delete("/{item_id}", response_model=ItemResponse)
def deactivate_item(item_id: int, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Deactivate a catalog item (bill lines still reference it)"""
    item = _get_item(item_id, tenant_id, db)
    item.is_active = False
    db.commit()
    db.refresh(item)
    logger.info(f"Deactivated item {item.id}")
    return item
