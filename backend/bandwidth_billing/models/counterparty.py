from sqlalchemy import Column, Integer, String, Numeric, Boolean, Text
from sqlalchemy.orm import relationship
from bandwidth_billing.database import Base
from bandwidth_billing.models.mixins import TimestampMixin


class BandwidthProvider(TimestampMixin, Base):
    """Upstream seller of bandwidth; we receive purchase bills from it"""
    __tablename__ = "bandwidth_providers"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    company_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(Text, nullable=True)
    contact_person = Column(String, nullable=True)
    account_number = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    total_due = Column(Numeric(12, 2), nullable=False, default=0)  # What we still owe
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    purchase_bills = relationship("PurchaseBill", back_populates="provider")
    payments = relationship("ProviderPayment", back_populates="provider")


class BandwidthClient(TimestampMixin, Base):
    """Downstream buyer of bandwidth; we issue sales invoices to it"""
    __tablename__ = "bandwidth_clients"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    company_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(Text, nullable=True)
    contact_person = Column(String, nullable=True)
    account_number = Column(String, nullable=True)
    pop_name = Column(String, nullable=True)
    vlan_name = Column(String, nullable=True)
    ip_address = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    total_receivable = Column(Numeric(12, 2), nullable=False, default=0)  # What the client still owes us
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    sales_invoices = relationship("SalesInvoice", back_populates="client")
    collections = relationship("BillCollection", back_populates="client")
