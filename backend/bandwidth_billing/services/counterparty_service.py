"""
Counterparty Service - providers and clients with their running balances.
"""
import logging
from decimal import Decimal
from typing import List, Optional, Type, Union
from sqlalchemy import case, func
from sqlalchemy.orm import Session

from bandwidth_billing.config import settings
from bandwidth_billing.exceptions import NotFoundError, ValidationFailedError
from bandwidth_billing.models.bill_collection import BillCollection
from bandwidth_billing.models.counterparty import BandwidthProvider, BandwidthClient
from bandwidth_billing.models.provider_payment import ProviderPayment
from bandwidth_billing.models.purchase_bill import PurchaseBill
from bandwidth_billing.models.sales_invoice import SalesInvoice
from bandwidth_billing.utils.pricing_rules import quantize_money

logger = logging.getLogger(__name__)

Counterparty = Union[BandwidthProvider, BandwidthClient]


class CounterpartyService:
    """CRUD for providers/clients plus the balance rebuild used by billing and the ledger"""

    def list(self, model: Type[Counterparty], tenant_id: str, db: Session, include_inactive: bool = False) -> List[Counterparty]:
        query = db.query(model).filter(model.tenant_id == tenant_id)
        if not include_inactive:
            query = query.filter(model.is_active.is_(True))
        return query.order_by(model.name).all()

    def get(self, model: Type[Counterparty], counterparty_id: int, tenant_id: str, db: Session) -> Counterparty:
        counterparty = db.query(model).filter(
            model.id == counterparty_id,
            model.tenant_id == tenant_id
        ).first()
        if not counterparty:
            raise NotFoundError(self._label(model), counterparty_id)
        return counterparty

    def create(self, model: Type[Counterparty], tenant_id: str, data: dict, db: Session) -> Counterparty:
        counterparty = model(tenant_id=tenant_id, **data)
        db.add(counterparty)
        db.commit()
        db.refresh(counterparty)
        logger.info(f"Created {self._label(model)} {counterparty.id} ({counterparty.name}) for tenant {tenant_id}")
        return counterparty

    def update(self, model: Type[Counterparty], counterparty_id: int, tenant_id: str, data: dict, db: Session) -> Counterparty:
        counterparty = self.get(model, counterparty_id, tenant_id, db)
        for field, value in data.items():
            setattr(counterparty, field, value)
        db.commit()
        db.refresh(counterparty)
        return counterparty

    def delete(self, model: Type[Counterparty], counterparty_id: int, tenant_id: str, db: Session) -> None:
        """
        Delete a provider/client that nothing refers to. One with bills,
        invoices or ledger entries must be deactivated instead.
        """
        counterparty = self.get(model, counterparty_id, tenant_id, db)
        document_model, entry_model, _, counterparty_field = self._ledger_models(counterparty)

        documents = db.query(func.count(document_model.id)).filter(
            getattr(document_model, counterparty_field) == counterparty.id
        ).scalar()
        entries = db.query(func.count(entry_model.id)).filter(
            getattr(entry_model, counterparty_field) == counterparty.id
        ).scalar()
        if documents or entries:
            raise ValidationFailedError(
                f"{self._label(model)} {counterparty_id} has {documents} documents and {entries} payments; "
                f"deactivate it instead"
            )

        db.delete(counterparty)
        db.commit()
        logger.info(f"Deleted {self._label(model)} {counterparty_id} ({counterparty.name})")

    def recompute_balance(self, counterparty: Optional[Counterparty], db: Session) -> None:
        """
        Rebuild the running balance from stored rows: what is still due on the
        counterparty's documents (overpaid documents count as zero) less the
        ledger entries not applied to any document, never below zero.
        """
        if counterparty is None:
            return
        document_model, entry_model, document_field, counterparty_field = self._ledger_models(counterparty)
        db.flush()

        outstanding = db.query(func.coalesce(func.sum(
            case((document_model.due_amount > 0, document_model.due_amount), else_=0)
        ), 0)).filter(
            document_model.tenant_id == counterparty.tenant_id,
            getattr(document_model, counterparty_field) == counterparty.id
        ).scalar()
        unapplied = db.query(func.coalesce(func.sum(entry_model.amount), 0)).filter(
            entry_model.tenant_id == counterparty.tenant_id,
            getattr(entry_model, counterparty_field) == counterparty.id,
            getattr(entry_model, document_field).is_(None)
        ).scalar()

        attr = self.balance_attr(counterparty)
        previous = getattr(counterparty, attr)
        balance = max(Decimal("0"), quantize_money(outstanding or 0) - quantize_money(unapplied or 0))
        setattr(counterparty, attr, quantize_money(balance, settings.money_decimal_places))
        logger.info(f"{self._label(type(counterparty))} {counterparty.id} {attr}: {previous} -> {getattr(counterparty, attr)}")

    @staticmethod
    def balance_attr(counterparty: Counterparty) -> str:
        return "total_due" if isinstance(counterparty, BandwidthProvider) else "total_receivable"

    @staticmethod
    def _ledger_models(counterparty: Counterparty):
        """(document model, ledger entry model, entry's document column, counterparty column)"""
        if isinstance(counterparty, BandwidthProvider):
            return PurchaseBill, ProviderPayment, "bill_id", "provider_id"
        return SalesInvoice, BillCollection, "invoice_id", "client_id"

    @staticmethod
    def _label(model: Type[Counterparty]) -> str:
        return "Provider" if model is BandwidthProvider else "Client"


# Singleton instance
counterparty_service = CounterpartyService()
