"""
Seed script to generate synthetic providers, clients, bills, invoices and
payments for demo purposes. Everything goes through the services so the
stored totals and balances are consistent.
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.orm import Session
from bandwidth_billing.database import SessionLocal, engine, Base
from bandwidth_billing.models import BandwidthCategory, BandwidthItem, BandwidthProvider, BandwidthClient, PurchaseBill, SalesInvoice
from bandwidth_billing.schemas.billing import PurchaseBillCreate, SalesInvoiceCreate
from bandwidth_billing.schemas.ledger import CollectionCreate, ProviderPaymentCreate
from bandwidth_billing.schemas.pricing import LineItemInput
from bandwidth_billing.services.billing_service import billing_service
from bandwidth_billing.services.counterparty_service import counterparty_service
from bandwidth_billing.services.ledger_service import ledger_service
from decimal import Decimal
from datetime import date, timedelta
from faker import Faker

fake = Faker()

TENANT_ID = "demo-isp"

CATEGORIES = ["Internet Transit", "Cache", "Peering", "Transmission"]

ITEM_CATALOG = [
    ("IIG Bandwidth", "Mbps", Decimal("550.00"), "Internet Transit"),
    ("GGC Cache", "Mbps", Decimal("120.00"), "Cache"),
    ("FNA Cache", "Mbps", Decimal("110.00"), "Cache"),
    ("BDIX Peering", "Mbps", Decimal("60.00"), "Peering"),
    ("NTTN Link", "Link", Decimal("3000.00"), "Transmission"),
]


def create_items(db: Session) -> list[BandwidthItem]:
    """Create the bandwidth catalog"""
    categories = {name: BandwidthCategory(tenant_id=TENANT_ID, name=name) for name in CATEGORIES}
    db.add_all(categories.values())
    items = []
    for name, unit, price, category in ITEM_CATALOG:
        item = BandwidthItem(tenant_id=TENANT_ID, name=name, unit=unit, unit_price=price, category=categories[category])
        db.add(item)
        items.append(item)
    db.commit()
    return items


def create_counterparties(db: Session, providers: int = 4, clients: int = 10):
    """Create synthetic upstream providers and downstream clients"""
    created_providers = [
        counterparty_service.create(BandwidthProvider, TENANT_ID, {
            "name": fake.company(),
            "contact_person": fake.name(),
            "email": fake.company_email(),
            "phone": fake.phone_number(),
        }, db)
        for _ in range(providers)
    ]
    created_clients = [
        counterparty_service.create(BandwidthClient, TENANT_ID, {
            "name": fake.company(),
            "contact_person": fake.name(),
            "email": fake.company_email(),
            "phone": fake.phone_number(),
            "pop_name": f"POP-{fake.city()}",
            "vlan_name": f"VLAN{fake.random_int(min=100, max=999)}",
            "ip_address": fake.ipv4_private(),
        }, db)
        for _ in range(clients)
    ]
    return created_providers, created_clients


def random_lines(items: list[BandwidthItem], prorate: bool) -> list[LineItemInput]:
    """1-3 lines from the catalog; prorated lines cover part of last month"""
    lines = []
    first_of_month = date.today().replace(day=1)
    month_start = (first_of_month - timedelta(days=1)).replace(day=1)
    for item in fake.random_elements(elements=items, length=fake.random_int(min=1, max=3), unique=True):
        from_date = to_date = None
        if prorate:
            from_date = month_start + timedelta(days=fake.random_int(min=0, max=14))
            to_date = first_of_month - timedelta(days=1)
        lines.append(LineItemInput(
            item_id=item.id,
            quantity=Decimal(fake.random_int(min=1, max=100)),
            vat_percent=fake.random_element(elements=(Decimal("0"), Decimal("5"), Decimal("15"))),
            from_date=from_date,
            to_date=to_date
        ))
    return lines


def create_purchase_bills(db: Session, providers, items, count: int = 8) -> list[PurchaseBill]:
    bills = []
    for _ in range(count):
        provider = fake.random_element(elements=providers)
        bill = billing_service.create_purchase_bill(TENANT_ID, PurchaseBillCreate(
            provider_id=provider.id,
            billing_date=date.today() - timedelta(days=fake.random_int(min=0, max=60)),
            items=random_lines(items, prorate=fake.boolean(chance_of_getting_true=30)),
            discount=Decimal(fake.random_element(elements=(0, 0, 500, 1000))),
            remarks=fake.sentence()
        ), db)
        bills.append(bill)
    return bills


def create_sales_invoices(db: Session, clients, items, count: int = 15) -> list[SalesInvoice]:
    invoices = []
    for _ in range(count):
        client = fake.random_element(elements=clients)
        billing_date = date.today() - timedelta(days=fake.random_int(min=0, max=60))
        invoice = billing_service.create_sales_invoice(TENANT_ID, SalesInvoiceCreate(
            client_id=client.id,
            billing_date=billing_date,
            due_date=billing_date + timedelta(days=15),
            items=random_lines(items, prorate=fake.boolean(chance_of_getting_true=40)),
            discount=Decimal(fake.random_element(elements=(0, 0, 0, 200)))
        ), db)
        invoices.append(invoice)
    return invoices


def create_payments(db: Session, bills: list[PurchaseBill], invoices: list[SalesInvoice]) -> int:
    """Pay some documents in full, some in part, leave the rest due"""
    count = 0
    for invoice in invoices:
        share = fake.random_element(elements=(Decimal("0"), Decimal("0.5"), Decimal("1")))
        if share and invoice.total_amount > 0:
            ledger_service.record_collection(TENANT_ID, CollectionCreate(
                invoice_id=invoice.id,
                collection_date=date.today(),
                amount=(invoice.total_amount * share).quantize(Decimal("0.01")),
                payment_method=fake.random_element(elements=("cash", "bank_transfer", "bkash")),
                received_by=fake.first_name()
            ), db)
            count += 1
    for bill in bills:
        share = fake.random_element(elements=(Decimal("0"), Decimal("0.5"), Decimal("1")))
        if share and bill.total_amount > 0:
            ledger_service.record_provider_payment(TENANT_ID, ProviderPaymentCreate(
                bill_id=bill.id,
                payment_date=date.today(),
                amount=(bill.total_amount * share).quantize(Decimal("0.01")),
                paid_by=fake.first_name()
            ), db)
            count += 1
    return count


def main():
    """Main seeding function"""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        print("Creating catalog...")
        items = create_items(db)

        print("Creating providers and clients...")
        providers, clients = create_counterparties(db)

        print("Creating purchase bills...")
        bills = create_purchase_bills(db, providers, items)

        print("Creating sales invoices...")
        invoices = create_sales_invoices(db, clients, items)

        print("Recording payments...")
        payments = create_payments(db, bills, invoices)

        print("\nSeeding complete!")
        print(f"Summary (tenant '{TENANT_ID}'):")
        print(f"  - Items: {len(items)}")
        print(f"  - Providers: {len(providers)}")
        print(f"  - Clients: {len(clients)}")
        print(f"  - Purchase Bills: {len(bills)}")
        print(f"  - Sales Invoices: {len(invoices)}")
        print(f"  - Ledger entries: {payments}")

    except Exception as e:
        print(f"Error during seeding: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
