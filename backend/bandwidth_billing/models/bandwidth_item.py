from sqlalchemy import Column, Integer, String, Numeric, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship
from bandwidth_billing.database import Base
from bandwidth_billing.models.mixins import TimestampMixin


class BandwidthItem(TimestampMixin, Base):
    """Catalog entry a bill or invoice line can be priced from"""
    __tablename__ = "bandwidth_items"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("bandwidth_item_categories.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    unit = Column(String, nullable=False, default="Mbps")
    unit_price = Column(Numeric(12, 2), nullable=False, default=0)  # Monthly price per unit
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    category = relationship("BandwidthCategory", back_populates="items")
