from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bandwidth_billing.database import get_db
from bandwidth_billing.dependencies import get_tenant_id
from bandwidth_billing.schemas.report import BillingSummary
from bandwidth_billing.services.report_service import report_service

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/summary", response_model=BillingSummary)
def billing_summary(tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Purchases, sales, payables, receivables and payment status counts for the tenant"""
    return report_service.billing_summary(tenant_id, db)
