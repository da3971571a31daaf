"""
Ledger Service - bill collections (client -> us) and provider payments (us -> provider).

A ledger entry never edits a document's lines. It only moves the linked
document's paid amount; due amount and payment status are then re-derived
with settle(), and the counterparty's running balance follows.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Union
from sqlalchemy.orm import Session

from bandwidth_billing.config import settings
from bandwidth_billing.exceptions import NotFoundError, ValidationFailedError
from bandwidth_billing.models.bill_collection import BillCollection
from bandwidth_billing.models.provider_payment import ProviderPayment
from bandwidth_billing.schemas.ledger import (
    CollectionCreate,
    CollectionUpdate,
    ProviderPaymentCreate,
    ProviderPaymentUpdate
)
from bandwidth_billing.services.activity_service import activity_service
from bandwidth_billing.services.billing_service import (
    BillingDocument,
    DocumentKind,
    PURCHASE_BILL,
    SALES_INVOICE,
    billing_service
)
from bandwidth_billing.services.counterparty_service import counterparty_service
from bandwidth_billing.utils.numbering import generate_document_number
from bandwidth_billing.utils.pricing_rules import quantize_money, settle, to_decimal

logger = logging.getLogger(__name__)

LedgerEntry = Union[BillCollection, ProviderPayment]


@dataclass(frozen=True)
class LedgerKind:
    name: str
    model: type
    number_field: str
    number_prefix: str
    document_kind: DocumentKind
    document_field: str  # invoice_id / bill_id
    entity_type: str
    action_suffix: str


COLLECTION = LedgerKind(
    name="Collection",
    model=BillCollection,
    number_field="receipt_number",
    number_prefix=settings.collection_prefix,
    document_kind=SALES_INVOICE,
    document_field="invoice_id",
    entity_type="bill_collection",
    action_suffix="collection"
)

PROVIDER_PAYMENT = LedgerKind(
    name="Provider payment",
    model=ProviderPayment,
    number_field="payment_number",
    number_prefix=settings.provider_payment_prefix,
    document_kind=PURCHASE_BILL,
    document_field="bill_id",
    entity_type="provider_payment",
    action_suffix="payment"
)


class LedgerService:
    """Service for recording, correcting and reversing payments"""

    # Collections

    def record_collection(self, tenant_id: str, data: CollectionCreate, db: Session) -> BillCollection:
        return self._record(COLLECTION, tenant_id, data.model_dump(), data.client_id, data.invoice_id, db)

    def update_collection(self, collection_id: int, tenant_id: str, data: CollectionUpdate, db: Session) -> BillCollection:
        return self._update(COLLECTION, collection_id, tenant_id, data.model_dump(exclude_unset=True), db)

    def delete_collection(self, collection_id: int, tenant_id: str, db: Session, user_identifier: Optional[str] = None) -> None:
        self._delete(COLLECTION, collection_id, tenant_id, db, user_identifier)

    # Provider payments

    def record_provider_payment(self, tenant_id: str, data: ProviderPaymentCreate, db: Session) -> ProviderPayment:
        return self._record(PROVIDER_PAYMENT, tenant_id, data.model_dump(), data.provider_id, data.bill_id, db)

    def update_provider_payment(self, payment_id: int, tenant_id: str, data: ProviderPaymentUpdate, db: Session) -> ProviderPayment:
        return self._update(PROVIDER_PAYMENT, payment_id, tenant_id, data.model_dump(exclude_unset=True), db)

    def delete_provider_payment(self, payment_id: int, tenant_id: str, db: Session, user_identifier: Optional[str] = None) -> None:
        self._delete(PROVIDER_PAYMENT, payment_id, tenant_id, db, user_identifier)

    # Queries

    def list_entries(
        self,
        kind: LedgerKind,
        tenant_id: str,
        db: Session,
        counterparty_id: Optional[int] = None,
        document_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[LedgerEntry]:
        model = kind.model
        counterparty_field = kind.document_kind.counterparty_field
        query = db.query(model).filter(model.tenant_id == tenant_id)
        if counterparty_id:
            query = query.filter(getattr(model, counterparty_field) == counterparty_id)
        if document_id:
            query = query.filter(getattr(model, kind.document_field) == document_id)
        return query.order_by(model.id.desc()).offset(skip).limit(limit).all()

    def get_entry(self, kind: LedgerKind, entry_id: int, tenant_id: str, db: Session) -> LedgerEntry:
        entry = db.query(kind.model).filter(
            kind.model.id == entry_id,
            kind.model.tenant_id == tenant_id
        ).first()
        if not entry:
            raise NotFoundError(kind.name, entry_id)
        return entry

    # Internals

    def _record(
        self,
        kind: LedgerKind,
        tenant_id: str,
        values: dict,
        counterparty_id: Optional[int],
        document_id: Optional[int],
        db: Session
    ) -> LedgerEntry:
        document_kind = kind.document_kind
        counterparty_field = document_kind.counterparty_field

        document = None
        if document_id is not None:
            document = billing_service.get_document(document_kind, document_id, tenant_id, db)
            document_counterparty_id = getattr(document, counterparty_field)
            if counterparty_id is None:
                counterparty_id = document_counterparty_id
            elif document_counterparty_id is not None and document_counterparty_id != counterparty_id:
                raise ValidationFailedError(
                    f"{document_kind.name} {document_id} belongs to another {counterparty_field.replace('_id', '')}"
                )

        counterparty = None
        if counterparty_id is not None:
            counterparty = counterparty_service.get(document_kind.counterparty_model, counterparty_id, tenant_id, db)

        amount = self._money(values["amount"])
        values.update({
            "amount": amount,
            counterparty_field: counterparty_id,
            kind.number_field: generate_document_number(kind.number_prefix),
        })
        entry = kind.model(tenant_id=tenant_id, **values)
        db.add(entry)

        if document is not None:
            self._move_paid_amount(document, amount)
        counterparty_service.recompute_balance(counterparty, db)

        db.commit()
        db.refresh(entry)
        logger.info(f"Recorded {kind.name.lower()} {getattr(entry, kind.number_field)} of {amount} for tenant {tenant_id}")
        return entry

    def _update(self, kind: LedgerKind, entry_id: int, tenant_id: str, changes: dict, db: Session) -> LedgerEntry:
        entry = self.get_entry(kind, entry_id, tenant_id, db)
        old_amount = to_decimal(entry.amount)
        new_amount = self._money(changes["amount"]) if changes.get("amount") is not None else old_amount
        difference = new_amount - old_amount

        for field, value in changes.items():
            if field == "amount" and value is None:
                continue
            setattr(entry, field, new_amount if field == "amount" else value)

        counterparty = getattr(entry, self._counterparty_relation(kind))
        if difference != 0:
            document = getattr(entry, self._document_relation(kind))
            if document is not None:
                self._move_paid_amount(document, difference, clamp=False)
            counterparty_service.recompute_balance(counterparty, db)

        db.commit()
        db.refresh(entry)

        activity_service.log(
            db,
            tenant_id,
            f"update_{kind.action_suffix}",
            kind.entity_type,
            entry.id,
            {
                kind.number_field: getattr(entry, kind.number_field),
                "old_amount": float(old_amount),
                "new_amount": float(new_amount),
                "payment_method": entry.payment_method,
                "counterparty_name": counterparty.name if counterparty else None,
            }
        )
        logger.info(f"Updated {kind.name.lower()} {entry.id}: {old_amount} -> {new_amount}")
        return entry

    def _delete(self, kind: LedgerKind, entry_id: int, tenant_id: str, db: Session, user_identifier: Optional[str]) -> None:
        entry = self.get_entry(kind, entry_id, tenant_id, db)
        amount = to_decimal(entry.amount)
        number = getattr(entry, kind.number_field)

        document = getattr(entry, self._document_relation(kind))
        if document is not None:
            self._move_paid_amount(document, -amount)
        counterparty = getattr(entry, self._counterparty_relation(kind))

        details = {
            kind.number_field: number,
            "amount": float(amount),
            "payment_method": entry.payment_method,
            "counterparty_name": counterparty.name if counterparty else None,
        }
        db.delete(entry)
        counterparty_service.recompute_balance(counterparty, db)
        db.commit()

        activity_service.log(
            db,
            tenant_id,
            f"delete_{kind.action_suffix}",
            kind.entity_type,
            entry_id,
            details,
            user_identifier=user_identifier
        )
        logger.info(f"Deleted {kind.name.lower()} {number} ({amount})")

    def _move_paid_amount(self, document: BillingDocument, delta: Decimal, clamp: bool = True) -> None:
        """
        Shift a document's paid amount by `delta` and re-derive due/status.
        With clamp the paid amount stops at zero. A paid document drops back
        to partial or due when payments are reduced.
        """
        new_paid = to_decimal(document.paid_amount or 0) + delta
        if clamp:
            new_paid = max(Decimal("0"), new_paid)
        settlement = settle(document.total_amount, new_paid)
        previous_status = document.payment_status

        document.paid_amount = self._money(settlement.paid_amount)
        document.due_amount = self._money(settlement.due_amount)
        document.payment_status = settlement.payment_status.value

        if previous_status != document.payment_status:
            logger.info(f"{document.invoice_number}: payment status {previous_status} -> {document.payment_status}")

    @staticmethod
    def _document_relation(kind: LedgerKind) -> str:
        return "invoice" if kind is COLLECTION else "bill"

    @staticmethod
    def _counterparty_relation(kind: LedgerKind) -> str:
        return "client" if kind is COLLECTION else "provider"

    @staticmethod
    def _money(value) -> Decimal:
        return quantize_money(value, settings.money_decimal_places)


# Singleton instance
ledger_service = LedgerService()
