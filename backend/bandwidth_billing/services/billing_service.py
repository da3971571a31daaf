"""
Billing Service - creates purchase bills and sales invoices.

Both document kinds go through the same path: resolve each line against the
catalog, price it with the shared pricing rules, aggregate, settle against
what was paid up front, store a rounded snapshot and update the
counterparty's running balance.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Union
from sqlalchemy.orm import Session

from bandwidth_billing.config import settings
from bandwidth_billing.exceptions import NotFoundError, ValidationFailedError
from bandwidth_billing.models.bandwidth_item import BandwidthItem
from bandwidth_billing.models.counterparty import BandwidthProvider, BandwidthClient
from bandwidth_billing.models.purchase_bill import PurchaseBill
from bandwidth_billing.models.purchase_bill_item import PurchaseBillItem
from bandwidth_billing.models.sales_invoice import SalesInvoice
from bandwidth_billing.models.sales_invoice_item import SalesInvoiceItem
from bandwidth_billing.schemas.billing import BillingDocumentCreate, PurchaseBillCreate, SalesInvoiceCreate
from bandwidth_billing.schemas.pricing import LineItemInput
from bandwidth_billing.services.counterparty_service import counterparty_service
from bandwidth_billing.utils.numbering import generate_document_number
from bandwidth_billing.utils.pricing_rules import (
    InvoiceTotals,
    LinePrice,
    Settlement,
    aggregate_invoice,
    parse_billing_date,
    quantize_money,
    settle
)

logger = logging.getLogger(__name__)

BillingDocument = Union[PurchaseBill, SalesInvoice]
REQUIRED_HEADER_FIELDS = ("billing_date", "currency")


@dataclass(frozen=True)
class DocumentKind:
    """What differs between a purchase bill and a sales invoice"""
    name: str
    model: type
    item_model: type
    counterparty_model: type
    counterparty_field: str  # provider_id / client_id
    number_prefix: str


PURCHASE_BILL = DocumentKind(
    name="Purchase bill",
    model=PurchaseBill,
    item_model=PurchaseBillItem,
    counterparty_model=BandwidthProvider,
    counterparty_field="provider_id",
    number_prefix=settings.purchase_bill_prefix
)

SALES_INVOICE = DocumentKind(
    name="Sales invoice",
    model=SalesInvoice,
    item_model=SalesInvoiceItem,
    counterparty_model=BandwidthClient,
    counterparty_field="client_id",
    number_prefix=settings.sales_invoice_prefix
)


@dataclass
class ResolvedLine:
    """A submitted line with catalog defaults filled in"""
    item_id: Optional[int]
    item_name: str
    description: str
    unit: str
    quantity: Decimal
    rate: Decimal
    vat_percent: Decimal
    from_date: object
    to_date: object


@dataclass
class DocumentQuote:
    """Full computation of a document before anything is stored"""
    lines: List[ResolvedLine]
    totals: InvoiceTotals
    settlement: Settlement


class BillingService:
    """Service for purchase bills and sales invoices"""

    def quote(
        self,
        items: List[LineItemInput],
        discount: Decimal,
        paid_amount: Decimal,
        tenant_id: str,
        db: Session
    ) -> DocumentQuote:
        """
        Price a document without storing it.

        Totals are settled at storage precision so that a document whose
        rounded total equals what was paid comes out as paid.
        """
        lines = [self._resolve_line(index, line, tenant_id, db) for index, line in enumerate(items, start=1)]
        totals = aggregate_invoice(lines, discount)
        settlement = settle(self._money(totals.total_amount), paid_amount)
        return DocumentQuote(lines=lines, totals=totals, settlement=settlement)

    def create_purchase_bill(self, tenant_id: str, data: PurchaseBillCreate, db: Session) -> PurchaseBill:
        extra = {
            "payment_method": data.payment_method,
            "paid_by": data.paid_by,
            "received_by": data.received_by,
        }
        return self._create_document(PURCHASE_BILL, tenant_id, data, data.provider_id, data.paid_amount, extra, db)

    def create_sales_invoice(self, tenant_id: str, data: SalesInvoiceCreate, db: Session) -> SalesInvoice:
        # Sales invoices always start unpaid; money arrives through collections
        extra = {"due_date": data.due_date}
        return self._create_document(SALES_INVOICE, tenant_id, data, data.client_id, Decimal("0"), extra, db)

    def list_documents(
        self,
        kind: DocumentKind,
        tenant_id: str,
        db: Session,
        counterparty_id: Optional[int] = None,
        payment_status: Optional[str] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[BillingDocument]:
        model = kind.model
        query = db.query(model).filter(model.tenant_id == tenant_id)
        if counterparty_id:
            query = query.filter(getattr(model, kind.counterparty_field) == counterparty_id)
        if payment_status:
            query = query.filter(model.payment_status == payment_status)
        return query.order_by(model.billing_date.desc(), model.id.desc()).offset(skip).limit(limit).all()

    def get_document(self, kind: DocumentKind, document_id: int, tenant_id: str, db: Session) -> BillingDocument:
        document = db.query(kind.model).filter(
            kind.model.id == document_id,
            kind.model.tenant_id == tenant_id
        ).first()
        if not document:
            raise NotFoundError(kind.name, document_id)
        return document

    def update_document(self, kind: DocumentKind, document_id: int, tenant_id: str, changes: dict, db: Session) -> BillingDocument:
        """Edit header fields (dates, remarks, payment details). Lines and totals never change here."""
        document = self.get_document(kind, document_id, tenant_id, db)
        for field, value in changes.items():
            if value is None and field in REQUIRED_HEADER_FIELDS:
                continue
            setattr(document, field, value)
        db.commit()
        db.refresh(document)
        logger.info(f"Updated {kind.name.lower()} {document.invoice_number}: {sorted(changes)}")
        return document

    def delete_document(self, kind: DocumentKind, document_id: int, tenant_id: str, db: Session) -> None:
        """
        Delete a bill/invoice and its items. The counterparty balance is rebuilt without
        it; its ledger entries stay, unlinked, as unapplied payments.
        """
        document = self.get_document(kind, document_id, tenant_id, db)
        counterparty = self._counterparty_of(kind, document)
        number = document.invoice_number
        db.delete(document)
        counterparty_service.recompute_balance(counterparty, db)
        db.commit()
        logger.info(f"Deleted {kind.name.lower()} {number} (ID: {document_id})")

    def _create_document(
        self,
        kind: DocumentKind,
        tenant_id: str,
        data: BillingDocumentCreate,
        counterparty_id: Optional[int],
        paid_amount: Decimal,
        extra: dict,
        db: Session
    ) -> BillingDocument:
        counterparty = None
        if counterparty_id is not None:
            counterparty = counterparty_service.get(kind.counterparty_model, counterparty_id, tenant_id, db)

        quote = self.quote(data.items, data.discount, paid_amount, tenant_id, db)
        totals = quote.totals
        settlement = quote.settlement

        document = kind.model(
            tenant_id=tenant_id,
            invoice_number=generate_document_number(kind.number_prefix),
            billing_date=data.billing_date,
            currency=data.currency or settings.default_currency,
            subtotal=self._money(totals.subtotal),
            vat_amount=self._money(totals.vat_amount),
            discount=self._money(totals.discount),
            total_amount=self._money(totals.total_amount),
            paid_amount=self._money(settlement.paid_amount),
            due_amount=self._money(settlement.due_amount),
            payment_status=settlement.payment_status.value,
            remarks=data.remarks,
            created_by=data.created_by,
            **{kind.counterparty_field: counterparty_id},
            **extra
        )
        db.add(document)

        for line_no, (line, price) in enumerate(zip(quote.lines, totals.lines), start=1):
            document.items.append(self._build_item(kind, line_no, line, price))

        counterparty_service.recompute_balance(counterparty, db)

        db.commit()
        db.refresh(document)

        logger.info(
            f"Created {kind.name.lower()} {document.invoice_number} (ID: {document.id}) for tenant {tenant_id}: "
            f"{len(quote.lines)} lines, total {document.total_amount}, status {document.payment_status}"
        )
        return document

    def _resolve_line(self, line_no: int, line: LineItemInput, tenant_id: str, db: Session) -> ResolvedLine:
        item = None
        if line.item_id is not None:
            item = db.query(BandwidthItem).filter(
                BandwidthItem.id == line.item_id,
                BandwidthItem.tenant_id == tenant_id
            ).first()
            if not item:
                raise NotFoundError("Item", line.item_id)

        rate = line.rate
        if rate is None:
            if item is None:
                raise ValidationFailedError(f"Line {line_no}: rate is required when no catalog item is given")
            rate = item.unit_price

        return ResolvedLine(
            item_id=line.item_id,
            item_name=line.item_name or (item.name if item else ""),
            description=line.description,
            unit=line.unit or (item.unit if item else ""),
            quantity=line.quantity,
            rate=rate,
            vat_percent=line.vat_percent,
            from_date=line.from_date,
            to_date=line.to_date
        )

    def _build_item(self, kind: DocumentKind, line_no: int, line: ResolvedLine, price: LinePrice):
        amount = self._money(price.amount)
        vat_amount = self._money(price.vat_amount)
        return kind.item_model(
            line_no=line_no,
            item_id=line.item_id,
            item_name=line.item_name,
            description=line.description,
            unit=line.unit,
            quantity=line.quantity,
            rate=line.rate,
            vat_percent=line.vat_percent,
            from_date=parse_billing_date(line.from_date),
            to_date=parse_billing_date(line.to_date),
            amount=amount,
            vat_amount=vat_amount,
            total=amount + vat_amount
        )

    @staticmethod
    def _counterparty_of(kind: DocumentKind, document: BillingDocument):
        return document.provider if kind is PURCHASE_BILL else document.client

    @staticmethod
    def _money(value) -> Decimal:
        return quantize_money(value, settings.money_decimal_places)


# Singleton instance
billing_service = BillingService()
