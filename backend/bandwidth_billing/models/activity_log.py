from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from bandwidth_billing.database import Base


class ActivityLog(Base):
    """Append-only audit trail of ledger corrections and deletions"""
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String, nullable=False, index=True)
    user_identifier = Column(String, nullable=True)
    action = Column(String, nullable=False, index=True)  # e.g. update_collection, delete_payment
    entity_type = Column(String, nullable=False)
    entity_id = Column(Integer, nullable=False)
    details = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
