from sqlalchemy import Column, Integer, String, Numeric, Date, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from bandwidth_billing.database import Base
from bandwidth_billing.models.mixins import TimestampMixin


class ProviderPayment(TimestampMixin, Base):
    """Money paid to a provider, optionally against one purchase bill"""
    __tablename__ = "provider_payments"
    __table_args__ = (UniqueConstraint("tenant_id", "payment_number", name="uq_provider_payments_tenant_number"),)

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, nullable=False, index=True)
    payment_number = Column(String, nullable=False, index=True)
    provider_id = Column(Integer, ForeignKey("bandwidth_providers.id"), nullable=True)
    bill_id = Column(Integer, ForeignKey("purchase_bills.id", ondelete="SET NULL"), nullable=True, index=True)
    payment_date = Column(Date, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(String, nullable=False, default="bank_transfer")
    paid_by = Column(String, nullable=True)
    remarks = Column(Text, nullable=True)
    created_by = Column(String, nullable=True)

    # Relationships
    provider = relationship("BandwidthProvider", back_populates="payments")
    bill = relationship("PurchaseBill", back_populates="payments")
