from sqlalchemy import Column, Integer, String, Boolean, Text
from sqlalchemy.orm import relationship
from bandwidth_billing.database import Base
from bandwidth_billing.models.mixins import TimestampMixin


class BandwidthCategory(TimestampMixin, Base):
    """Grouping for catalog items, e.g. IIG, cache, peering"""
    __tablename__ = "bandwidth_item_categories"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    items = relationship("BandwidthItem", back_populates="category")
