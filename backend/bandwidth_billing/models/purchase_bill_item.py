from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from bandwidth_billing.database import Base
from bandwidth_billing.models.mixins import BillingLineMixin


class PurchaseBillItem(BillingLineMixin, Base):
    __tablename__ = "purchase_bill_items"

    bill_id = Column(Integer, ForeignKey("purchase_bills.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    bill = relationship("PurchaseBill", back_populates="items")
