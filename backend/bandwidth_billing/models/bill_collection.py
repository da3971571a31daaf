from sqlalchemy import Column, Integer, String, Numeric, Date, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from bandwidth_billing.database import Base
from bandwidth_billing.models.mixins import TimestampMixin


class BillCollection(TimestampMixin, Base):
    """Money received from a client, optionally against one sales invoice"""
    __tablename__ = "bill_collections"
    __table_args__ = (UniqueConstraint("tenant_id", "receipt_number", name="uq_bill_collections_tenant_number"),)

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, nullable=False, index=True)
    receipt_number = Column(String, nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("bandwidth_clients.id"), nullable=True)
    invoice_id = Column(Integer, ForeignKey("sales_invoices.id", ondelete="SET NULL"), nullable=True, index=True)
    collection_date = Column(Date, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String, nullable=False, default="cash")
    received_by = Column(String, nullable=True)
    remarks = Column(Text, nullable=True)
    created_by = Column(String, nullable=True)

    # Relationships
    client = relationship("BandwidthClient", back_populates="collections")
    invoice = relationship("SalesInvoice", back_populates="collections")
