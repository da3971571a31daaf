from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List
import logging

from bandwidth_billing.database import get_db
from bandwidth_billing.dependencies import get_tenant_id
from bandwidth_billing.models.bandwidth_category import BandwidthCategory
from bandwidth_billing.schemas.catalog import CategoryCreate, CategoryUpdate, CategoryResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/categories", tags=["catalog"])


def get_category(category_id: int, tenant_id: str, db: Session) -> BandwidthCategory:
    category = db.query(BandwidthCategory).filter(
        BandwidthCategory.id == category_id,
        BandwidthCategory.tenant_id == tenant_id
    ).first()
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.get("", response_model=List[CategoryResponse])
def list_categories(
    include_inactive: bool = Query(False, description="Also return inactive categories"),
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    query = db.query(BandwidthCategory).filter(BandwidthCategory.tenant_id == tenant_id)
    if not include_inactive:
        query = query.filter(BandwidthCategory.is_active.is_(True))
    return query.order_by(BandwidthCategory.name).all()


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(category: CategoryCreate, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    record = BandwidthCategory(tenant_id=tenant_id, **category.model_dump())
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info(f"Created category {record.name} (ID: {record.id}) for tenant {tenant_id}")
    return record


@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    changes: CategoryUpdate,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db)
):
    category = get_category(category_id, tenant_id, db)
    for field, value in changes.model_dump(exclude_unset=True).items():
        setattr(category, field, value)
    db.commit()
    db.refresh(category)
    return category


@router.delete("/{category_id}")
def delete_category(category_id: int, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Delete a category; its items stay in the catalog without one"""
    category = get_category(category_id, tenant_id, db)
    db.delete(category)
    db.commit()
    logger.info(f"Deleted category {category_id}")
    return {"message": "Category deleted", "category_id": category_id}
