import logging
from decimal import Decimal
from typing import Dict
from sqlalchemy import func
from sqlalchemy.orm import Session

from bandwidth_billing.models.bill_collection import BillCollection
from bandwidth_billing.models.counterparty import BandwidthProvider, BandwidthClient
from bandwidth_billing.models.provider_payment import ProviderPayment
from bandwidth_billing.models.purchase_bill import PurchaseBill
from bandwidth_billing.models.sales_invoice import SalesInvoice
from bandwidth_billing.schemas.report import BillingSummary
from bandwidth_billing.utils.pricing_rules import PaymentStatus, quantize_money

logger = logging.getLogger(__name__)


class ReportService:
    """Aggregate figures over a tenant's bandwidth billing data"""

    def billing_summary(self, tenant_id: str, db: Session) -> BillingSummary:
        summary = BillingSummary(
            total_providers=self._count(db, BandwidthProvider, tenant_id),
            total_clients=self._count(db, BandwidthClient, tenant_id),
            total_purchases=self._sum(db, PurchaseBill.total_amount, PurchaseBill.tenant_id, tenant_id),
            total_sales=self._sum(db, SalesInvoice.total_amount, SalesInvoice.tenant_id, tenant_id),
            total_payable=self._sum(db, BandwidthProvider.total_due, BandwidthProvider.tenant_id, tenant_id),
            total_receivable=self._sum(db, BandwidthClient.total_receivable, BandwidthClient.tenant_id, tenant_id),
            total_collected=self._sum(db, BillCollection.amount, BillCollection.tenant_id, tenant_id),
            total_paid=self._sum(db, ProviderPayment.amount, ProviderPayment.tenant_id, tenant_id),
            purchase_bills_by_status=self._status_counts(db, PurchaseBill, tenant_id),
            sales_invoices_by_status=self._status_counts(db, SalesInvoice, tenant_id)
        )
        logger.info(f"Built billing summary for tenant {tenant_id}")
        return summary

    @staticmethod
    def _count(db: Session, model, tenant_id: str) -> int:
        return db.query(func.count(model.id)).filter(model.tenant_id == tenant_id).scalar() or 0

    @staticmethod
    def _sum(db: Session, column, tenant_column, tenant_id: str) -> Decimal:
        value = db.query(func.coalesce(func.sum(column), 0)).filter(tenant_column == tenant_id).scalar()
        return quantize_money(value or 0)

    @staticmethod
    def _status_counts(db: Session, model, tenant_id: str) -> Dict[str, int]:
        counts = {status.value: 0 for status in PaymentStatus}
        rows = db.query(model.payment_status, func.count(model.id)).filter(
            model.tenant_id == tenant_id
        ).group_by(model.payment_status).all()
        for status, count in rows:
            counts[status] = count
        return counts


# Singleton instance
report_service = ReportService()
