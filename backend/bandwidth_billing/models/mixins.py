"""
Column sets shared by purchase bills and sales invoices, and by their items.

Both document kinds carry the same totals snapshot and their lines are priced
by the same rules, so the columns are declared once here.
"""
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import declared_attr
from sqlalchemy.sql import func


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class BillingDocumentMixin(TimestampMixin):
    """Header of a purchase bill or sales invoice"""
    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, nullable=False, index=True)
    invoice_number = Column(String, nullable=False, index=True)
    billing_date = Column(Date, nullable=False)
    currency = Column(String, default="BDT")

    @declared_attr
    def __table_args__(cls):
        return (UniqueConstraint("tenant_id", "invoice_number", name=f"uq_{cls.__tablename__}_tenant_number"),)

    # Totals snapshot, computed once at creation
    subtotal = Column(Numeric(12, 2), nullable=False, default=0)
    vat_amount = Column(Numeric(12, 2), nullable=False, default=0)
    discount = Column(Numeric(12, 2), nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)

    # Maintained by the payment ledger
    paid_amount = Column(Numeric(12, 2), nullable=False, default=0)
    due_amount = Column(Numeric(12, 2), nullable=False, default=0)
    payment_status = Column(String, nullable=False, default="due", index=True)  # paid, partial, due

    remarks = Column(Text, nullable=True)
    created_by = Column(String, nullable=True)


class BillingLineMixin:
    """One priced row of a purchase bill or sales invoice"""
    id = Column(Integer, primary_key=True, index=True)
    line_no = Column(Integer, nullable=False)
    item_name = Column(String, nullable=False, default="")
    description = Column(String, nullable=True)
    unit = Column(String, nullable=True)  # e.g. "Mbps", descriptive only
    quantity = Column(Numeric(12, 2), nullable=False)
    rate = Column(Numeric(12, 2), nullable=False)
    vat_percent = Column(Numeric(5, 2), nullable=False, default=0)
    from_date = Column(Date, nullable=True)
    to_date = Column(Date, nullable=True)

    # Derived at creation time
    amount = Column(Numeric(12, 2), nullable=False)
    vat_amount = Column(Numeric(12, 2), nullable=False)
    total = Column(Numeric(12, 2), nullable=False)

    @declared_attr
    def item_id(cls):
        return Column(Integer, ForeignKey("bandwidth_items.id", ondelete="SET NULL"), nullable=True)  # Free-text lines have no item
