from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from bandwidth_billing.database import Base
from bandwidth_billing.models.mixins import BillingLineMixin


class SalesInvoiceItem(BillingLineMixin, Base):
    __tablename__ = "sales_invoice_items"

    invoice_id = Column(Integer, ForeignKey("sales_invoices.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    invoice = relationship("SalesInvoice", back_populates="items")
