from sqlalchemy import Column, Integer, Date, ForeignKey
from sqlalchemy.orm import relationship
from bandwidth_billing.database import Base
from bandwidth_billing.models.mixins import BillingDocumentMixin


class SalesInvoice(BillingDocumentMixin, Base):
    """Invoice issued to a bandwidth client"""
    __tablename__ = "sales_invoices"

    client_id = Column(Integer, ForeignKey("bandwidth_clients.id"), nullable=True)
    due_date = Column(Date, nullable=True)

    # Relationships
    client = relationship("BandwidthClient", back_populates="sales_invoices")
    items = relationship(
        "SalesInvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="SalesInvoiceItem.line_no"
    )
    collections = relationship("BillCollection", back_populates="invoice")
