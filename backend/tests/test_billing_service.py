"""Tests for creating, listing and deleting purchase bills and sales invoices."""

from datetime import date
from decimal import Decimal

import pytest

from bandwidth_billing.exceptions import NotFoundError, ValidationFailedError
from bandwidth_billing.models import BandwidthClient, BandwidthProvider
from bandwidth_billing.schemas.billing import PurchaseBillCreate, PurchaseBillUpdate, SalesInvoiceCreate, SalesInvoiceUpdate
from bandwidth_billing.schemas.pricing import LineItemInput
from bandwidth_billing.services.billing_service import PURCHASE_BILL, SALES_INVOICE, billing_service
from bandwidth_billing.services.counterparty_service import counterparty_service

TENANT = "tenant-a"


def two_line_items():
    return [
        LineItemInput(item_name="IIG", rate=Decimal("1000"), quantity=Decimal("2")),
        LineItemInput(item_name="GGC", rate=Decimal("500"), quantity=Decimal("1"), vat_percent=Decimal("10")),
    ]


def test_purchase_bill_stores_totals_snapshot(db_session, provider):
    bill = billing_service.create_purchase_bill(TENANT, PurchaseBillCreate(
        provider_id=provider.id,
        billing_date=date(2024, 1, 31),
        items=two_line_items(),
        discount=Decimal("100"),
        paid_amount=Decimal("1000")
    ), db_session)

    assert bill.invoice_number.startswith("PB-")
    assert bill.subtotal == Decimal("2500.00")
    assert bill.vat_amount == Decimal("50.00")
    assert bill.total_amount == Decimal("2450.00")
    assert bill.paid_amount == Decimal("1000.00")
    assert bill.due_amount == Decimal("1450.00")
    assert bill.payment_status == "partial"
    assert bill.currency == "BDT"
    assert [item.line_no for item in bill.items] == [1, 2]
    assert bill.items[1].total == Decimal("550.00")


def test_purchase_bill_due_goes_to_provider_balance(db_session, provider):
    billing_service.create_purchase_bill(TENANT, PurchaseBillCreate(
        provider_id=provider.id,
        billing_date=date(2024, 1, 31),
        items=two_line_items(),
        discount=Decimal("100"),
        paid_amount=Decimal("450")
    ), db_session)

    db_session.refresh(provider)
    assert provider.total_due == Decimal("2000.00")


def test_fully_paid_bill(db_session, provider):
    bill = billing_service.create_purchase_bill(TENANT, PurchaseBillCreate(
        provider_id=provider.id,
        billing_date=date(2024, 1, 31),
        items=two_line_items(),
        discount=Decimal("100"),
        paid_amount=Decimal("2450")
    ), db_session)

    assert bill.payment_status == "paid"
    assert bill.due_amount == Decimal("0.00")


def test_prorated_sales_invoice(db_session, bandwidth_client):
    invoice = billing_service.create_sales_invoice(TENANT, SalesInvoiceCreate(
        client_id=bandwidth_client.id,
        billing_date=date(2024, 1, 31),
        due_date=date(2024, 2, 15),
        items=[LineItemInput(
            item_name="IIG",
            rate=Decimal("3000"),
            vat_percent=Decimal("5"),
            from_date="2024-01-01",
            to_date="2024-01-15"
        )]
    ), db_session)

    assert invoice.invoice_number.startswith("SI-")
    assert invoice.total_amount == Decimal("1524.19")
    assert invoice.paid_amount == Decimal("0.00")
    assert invoice.payment_status == "due"
    assert invoice.items[0].from_date == date(2024, 1, 1)
    db_session.refresh(bandwidth_client)
    assert bandwidth_client.total_receivable == Decimal("1524.19")


def test_unparseable_dates_are_billed_flat(db_session, bandwidth_client):
    invoice = billing_service.create_sales_invoice(TENANT, SalesInvoiceCreate(
        client_id=bandwidth_client.id,
        billing_date=date(2024, 1, 31),
        items=[LineItemInput(rate=Decimal("3000"), from_date="someday", to_date="2024-01-15")]
    ), db_session)

    assert invoice.total_amount == Decimal("3000.00")
    assert invoice.items[0].from_date is None


def test_line_rate_defaults_to_catalog_price(db_session, bandwidth_client, catalog_item):
    invoice = billing_service.create_sales_invoice(TENANT, SalesInvoiceCreate(
        client_id=bandwidth_client.id,
        billing_date=date(2024, 1, 31),
        items=[LineItemInput(item_id=catalog_item.id, quantity=Decimal("10"))]
    ), db_session)

    line = invoice.items[0]
    assert line.rate == Decimal("500.00")
    assert line.item_name == "IIG Bandwidth"
    assert line.unit == "Mbps"
    assert invoice.total_amount == Decimal("5000.00")


def test_explicit_rate_overrides_catalog_price(db_session, bandwidth_client, catalog_item):
    invoice = billing_service.create_sales_invoice(TENANT, SalesInvoiceCreate(
        client_id=bandwidth_client.id,
        billing_date=date(2024, 1, 31),
        items=[LineItemInput(item_id=catalog_item.id, rate=Decimal("450"), quantity=Decimal("10"))]
    ), db_session)

    assert invoice.total_amount == Decimal("4500.00")


def test_line_without_rate_or_item_is_rejected(db_session, bandwidth_client):
    with pytest.raises(ValidationFailedError):
        billing_service.create_sales_invoice(TENANT, SalesInvoiceCreate(
            client_id=bandwidth_client.id,
            billing_date=date(2024, 1, 31),
            items=[LineItemInput(item_name="Mystery")]
        ), db_session)


def test_unknown_counterparty(db_session):
    with pytest.raises(NotFoundError):
        billing_service.create_purchase_bill(TENANT, PurchaseBillCreate(
            provider_id=999,
            billing_date=date(2024, 1, 31),
            items=two_line_items()
        ), db_session)


def test_catalog_item_of_another_tenant_is_not_found(db_session, bandwidth_client, catalog_item):
    with pytest.raises(NotFoundError):
        billing_service.quote([LineItemInput(item_id=catalog_item.id)], Decimal("0"), Decimal("0"), "tenant-b", db_session)


def test_quote_does_not_store_anything(db_session, provider):
    quote = billing_service.quote(two_line_items(), Decimal("100"), Decimal("2450"), TENANT, db_session)

    assert quote.totals.total_amount == Decimal("2450")
    assert quote.settlement.payment_status.value == "paid"
    assert billing_service.list_documents(PURCHASE_BILL, TENANT, db_session) == []


def test_documents_are_isolated_per_tenant(db_session, provider):
    bill = billing_service.create_purchase_bill(TENANT, PurchaseBillCreate(
        billing_date=date(2024, 1, 31),
        items=two_line_items()
    ), db_session)

    assert len(billing_service.list_documents(PURCHASE_BILL, TENANT, db_session)) == 1
    assert billing_service.list_documents(PURCHASE_BILL, "tenant-b", db_session) == []
    with pytest.raises(NotFoundError):
        billing_service.get_document(PURCHASE_BILL, bill.id, "tenant-b", db_session)


def test_list_filters_by_status(db_session, provider):
    for paid in (Decimal("0"), Decimal("2550")):
        billing_service.create_purchase_bill(TENANT, PurchaseBillCreate(
            provider_id=provider.id,
            billing_date=date(2024, 1, 31),
            items=two_line_items(),
            paid_amount=paid
        ), db_session)

    paid_bills = billing_service.list_documents(PURCHASE_BILL, TENANT, db_session, payment_status="paid")
    assert len(paid_bills) == 1
    assert paid_bills[0].paid_amount == Decimal("2550.00")


def test_delete_invoice_reduces_receivable(db_session, bandwidth_client):
    invoice = billing_service.create_sales_invoice(TENANT, SalesInvoiceCreate(
        client_id=bandwidth_client.id,
        billing_date=date(2024, 1, 31),
        items=two_line_items()
    ), db_session)
    db_session.refresh(bandwidth_client)
    assert bandwidth_client.total_receivable == Decimal("2550.00")

    billing_service.delete_document(SALES_INVOICE, invoice.id, TENANT, db_session)

    db_session.refresh(bandwidth_client)
    assert bandwidth_client.total_receivable == Decimal("0.00")
    with pytest.raises(NotFoundError):
        billing_service.get_document(SALES_INVOICE, invoice.id, TENANT, db_session)


def test_discount_beyond_total_does_not_make_receivable_negative(db_session, bandwidth_client):
    invoice = billing_service.create_sales_invoice(TENANT, SalesInvoiceCreate(
        client_id=bandwidth_client.id,
        billing_date=date(2024, 1, 31),
        items=[LineItemInput(item_name="IIG", rate=Decimal("100"))],
        discount=Decimal("150")
    ), db_session)

    db_session.refresh(bandwidth_client)
    assert invoice.total_amount == Decimal("-50.00")
    assert invoice.payment_status == "paid"
    assert bandwidth_client.total_receivable == Decimal("0.00")


def test_negative_invoice_does_not_cancel_another_invoice(db_session, bandwidth_client):
    for rate, discount in ((Decimal("1000"), Decimal("0")), (Decimal("100"), Decimal("400"))):
        billing_service.create_sales_invoice(TENANT, SalesInvoiceCreate(
            client_id=bandwidth_client.id,
            billing_date=date(2024, 1, 31),
            items=[LineItemInput(item_name="IIG", rate=rate)],
            discount=discount
        ), db_session)

    db_session.refresh(bandwidth_client)
    assert bandwidth_client.total_receivable == Decimal("1000.00")


def test_document_numbers_are_unique_per_tenant(db_session, provider):
    numbers = {
        billing_service.create_purchase_bill(TENANT, PurchaseBillCreate(
            provider_id=provider.id,
            billing_date=date(2024, 1, 31),
            items=[LineItemInput(item_name="IIG", rate=Decimal("10"))]
        ), db_session).invoice_number
        for _ in range(25)
    }

    assert len(numbers) == 25


def test_update_header_keeps_totals(db_session, bandwidth_client):
    invoice = billing_service.create_sales_invoice(TENANT, SalesInvoiceCreate(
        client_id=bandwidth_client.id,
        billing_date=date(2024, 1, 31),
        items=two_line_items()
    ), db_session)

    changes = SalesInvoiceUpdate(due_date=date(2024, 2, 15), remarks="net 15", currency=None)
    updated = billing_service.update_document(
        SALES_INVOICE, invoice.id, TENANT, changes.model_dump(exclude_unset=True), db_session
    )

    assert updated.due_date == date(2024, 2, 15)
    assert updated.remarks == "net 15"
    assert updated.currency == "BDT"
    assert updated.total_amount == Decimal("2550.00")
    assert updated.due_amount == Decimal("2550.00")


def test_update_purchase_bill_payment_details(db_session, provider):
    bill = billing_service.create_purchase_bill(TENANT, PurchaseBillCreate(
        provider_id=provider.id,
        billing_date=date(2024, 1, 31),
        items=two_line_items()
    ), db_session)

    changes = PurchaseBillUpdate(payment_method="cheque", paid_by="finance")
    updated = billing_service.update_document(
        PURCHASE_BILL, bill.id, TENANT, changes.model_dump(exclude_unset=True), db_session
    )

    assert updated.payment_method == "cheque"
    assert updated.paid_by == "finance"
    assert updated.payment_status == "due"


def test_update_document_of_another_tenant(db_session, provider):
    bill = billing_service.create_purchase_bill(TENANT, PurchaseBillCreate(
        provider_id=provider.id,
        billing_date=date(2024, 1, 31),
        items=two_line_items()
    ), db_session)

    with pytest.raises(NotFoundError):
        billing_service.update_document(PURCHASE_BILL, bill.id, "tenant-b", {"remarks": "x"}, db_session)


def test_counterparty_with_documents_cannot_be_deleted(db_session, provider):
    billing_service.create_purchase_bill(TENANT, PurchaseBillCreate(
        provider_id=provider.id,
        billing_date=date(2024, 1, 31),
        items=two_line_items()
    ), db_session)

    with pytest.raises(ValidationFailedError):
        counterparty_service.delete(BandwidthProvider, provider.id, TENANT, db_session)
    assert counterparty_service.get(BandwidthProvider, provider.id, TENANT, db_session).id == provider.id


def test_unused_counterparty_is_deleted(db_session, bandwidth_client):
    counterparty_service.delete(BandwidthClient, bandwidth_client.id, TENANT, db_session)

    with pytest.raises(NotFoundError):
        counterparty_service.get(BandwidthClient, bandwidth_client.id, TENANT, db_session)
