from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from bandwidth_billing.database import Base
from bandwidth_billing.models.mixins import BillingDocumentMixin


class PurchaseBill(BillingDocumentMixin, Base):
    """Bill received from a bandwidth provider"""
    __tablename__ = "purchase_bills"

    provider_id = Column(Integer, ForeignKey("bandwidth_providers.id"), nullable=True)
    payment_method = Column(String, nullable=True)
    paid_by = Column(String, nullable=True)
    received_by = Column(String, nullable=True)

    # Relationships
    provider = relationship("BandwidthProvider", back_populates="purchase_bills")
    items = relationship(
        "PurchaseBillItem",
        back_populates="bill",
        cascade="all, delete-orphan",
        order_by="PurchaseBillItem.line_no"
    )
    payments = relationship("ProviderPayment", back_populates="bill")
